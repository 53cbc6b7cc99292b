"""测试公共工具函数."""

from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig


def api_error(error_cls, status, message, body=None):
    """构造带 HTTP 状态码的 ES 客户端异常."""
    meta = ApiResponseMeta(
        status=status,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )
    return error_cls(message=message, meta=meta, body=body or {})
