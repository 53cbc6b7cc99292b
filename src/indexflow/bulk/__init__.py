"""批量写入工具模块.

该模块提供 Elasticsearch 文档写入功能，包括：
- 单文档写入（存在则覆盖）
- 单请求批量写入，并按文档分类新建、更新和失败结果
- 按批次大小分批写入

示例用法:
    >>> from indexflow.bulk import BulkIngestor
    >>> ingestor = BulkIngestor(es_client)
    >>> outcome = await ingestor.index_document_bulk(
    ...     "users", None, [("1", {"name": "Alice"}), ("2", {"name": "Bob"})]
    ... )
    >>> print(f"新建: {len(outcome.created)}, 失败: {len(outcome.errors)}")
"""

from .exceptions import BulkOperationError, BulkRequestError, DocumentIndexError
from .models import BULK_REQUEST_TIMEOUT, BulkDocumentError, BulkItemResult, BulkOutcome
from .tool import BulkIngestor

__all__ = [
    "BulkIngestor",
    "BulkOutcome",
    "BulkDocumentError",
    "BulkItemResult",
    "BULK_REQUEST_TIMEOUT",
    "BulkOperationError",
    "BulkRequestError",
    "DocumentIndexError",
]
