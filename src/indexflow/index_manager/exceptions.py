"""索引管理器异常定义模块."""

from ..exceptions import IndexFlowError


class IndexManagerError(IndexFlowError):
    """索引管理器基础异常类.

    Attributes:
        target: 出错的索引名称、别名或索引匹配模式
        status_code: 集群返回的 HTTP 状态码（传输层错误时为 None）
    """

    def __init__(
        self,
        message: str,
        target: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.target = target
        self.status_code = status_code


class ClusterQueryError(IndexManagerError):
    """集群读取请求失败异常."""

    pass


class ClusterWriteError(IndexManagerError):
    """集群写入请求失败异常."""

    pass


class AliasQueryError(ClusterQueryError):
    """查询别名绑定的索引失败异常."""

    pass


class IndexCreationError(ClusterWriteError):
    """索引创建失败异常."""

    pass


class IndexAlreadyExistsError(IndexCreationError):
    """索引已存在异常."""

    pass


class IndexDeletionError(ClusterWriteError):
    """索引删除失败异常."""

    pass


class AliasUpdateError(ClusterWriteError):
    """别名更新失败异常."""

    pass
