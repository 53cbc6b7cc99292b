"""indexflow 异常定义模块."""

from elasticsearch import ApiError


class IndexFlowError(Exception):
    """indexflow 基础异常类."""

    pass


class InvalidArgumentError(IndexFlowError, ValueError):
    """调用参数不合法异常.

    例如必填参数为空、别名更新的 add/remove 类型错误，或者别名更新没有任何动作。
    """

    pass


def get_status_code(error: Exception) -> int | None:
    """提取集群返回的 HTTP 状态码，传输层错误返回 None."""
    if isinstance(error, ApiError):
        return error.status_code
    return None
