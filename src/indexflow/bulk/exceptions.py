"""批量写入工具异常定义模块."""

from ..exceptions import IndexFlowError


class BulkOperationError(IndexFlowError):
    """批量写入基础异常类.

    Attributes:
        index_name: 目标索引名称
        status_code: 集群返回的 HTTP 状态码（传输层错误时为 None）
    """

    def __init__(
        self,
        message: str,
        index_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.index_name = index_name
        self.status_code = status_code


class DocumentIndexError(BulkOperationError):
    """单个文档写入失败异常."""

    pass


class BulkRequestError(BulkOperationError):
    """整个批量请求失败异常（例如集群不可达）.

    单个文档级别的错误不会抛出此异常，而是记录在 BulkOutcome.errors 中。
    """

    pass
