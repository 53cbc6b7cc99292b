"""indexflow - Elasticsearch 时间戳索引生命周期管理工具包.

主要功能:
    - ElasticTools: 索引生命周期工具门面
    - IndexManager: 时间戳索引创建、强制合并、删除，以及别名的原子切换
    - RetentionSweeper: 清理超过保留期且未被别名引用的索引
    - BulkIngestor: 文档批量写入与结果分类

使用示例:
    from elasticsearch import AsyncElasticsearch
    from indexflow import ElasticTools

    tools = ElasticTools(AsyncElasticsearch("http://localhost:9200"))
    index_name = await tools.create_timestamped_index("books", mapping, settings)
    outcome = await tools.index_document_bulk(index_name, None, id_doc_pairs)
    await tools.set_alias_to_single_index("books", index_name)
    await tools.cleanup_old_indices("books", days_to_keep=5)
"""

__version__ = "0.1.0"

# 导出核心组件
from indexflow.bulk import BulkDocumentError, BulkIngestor, BulkOutcome
from indexflow.index_manager import (
    AliasUpdate,
    IndexManager,
    RetentionSweeper,
    parse_timestamped_name,
    timestamped_name,
)
from indexflow.toolkit import ElasticTools

# 导出异常
from indexflow.exceptions import IndexFlowError, InvalidArgumentError
from indexflow.bulk.exceptions import (
    BulkOperationError,
    BulkRequestError,
    DocumentIndexError,
)
from indexflow.index_manager.exceptions import (
    AliasQueryError,
    AliasUpdateError,
    ClusterQueryError,
    ClusterWriteError,
    IndexAlreadyExistsError,
    IndexCreationError,
    IndexDeletionError,
    IndexManagerError,
)

__all__ = [
    # 版本
    "__version__",
    # 核心组件
    "ElasticTools",
    "IndexManager",
    "RetentionSweeper",
    "BulkIngestor",
    # 数据模型
    "AliasUpdate",
    "BulkOutcome",
    "BulkDocumentError",
    # 命名工具
    "timestamped_name",
    "parse_timestamped_name",
    # 异常
    "IndexFlowError",
    "InvalidArgumentError",
    "IndexManagerError",
    "ClusterQueryError",
    "ClusterWriteError",
    "AliasQueryError",
    "AliasUpdateError",
    "IndexCreationError",
    "IndexAlreadyExistsError",
    "IndexDeletionError",
    "BulkOperationError",
    "BulkRequestError",
    "DocumentIndexError",
]
