"""索引生命周期工具门面.

ElasticTools 基于同一个客户端和日志记录器组合 IndexManager、RetentionSweeper
与 BulkIngestor，调用方只需持有一个对象即可完成建索引、切别名、清理和写入。
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from elasticsearch import AsyncElasticsearch

from .bulk import BulkIngestor, BulkOutcome
from .index_manager import (
    DEFAULT_DAYS_TO_KEEP,
    AliasUpdate,
    IndexBody,
    IndexCreationDate,
    IndexManager,
    RetentionSweeper,
    timestamped_name,
)
from .typing import Document, IdDocPair, IndexNames

logger = logging.getLogger(__name__)


class ElasticTools:
    """Elasticsearch 索引生命周期工具.

    Args:
        es_client: AsyncElasticsearch 客户端实例
        logger: 日志记录器，默认为当前模块的 logger
        now_func: 清理旧索引时获取当前时间的函数，主要用于测试

    Example:
        >>> tools = ElasticTools(es_client)
        >>> index_name = await tools.create_timestamped_index("books", mapping, settings)
        >>> await tools.index_document_bulk(index_name, None, docs)
        >>> await tools.optimize_index(index_name)
        >>> await tools.set_alias_to_single_index("books", index_name)
        >>> await tools.cleanup_old_indices("books")
    """

    def __init__(
        self,
        es_client: AsyncElasticsearch,
        logger: logging.Logger = logger,
        now_func: Callable[[], datetime] | None = None,
    ) -> None:
        self.logger = logger
        self.index_manager = IndexManager(es_client, logger=self.logger)
        self.retention = RetentionSweeper(
            self.index_manager, logger=self.logger, now_func=now_func
        )
        self.bulk = BulkIngestor(es_client, logger=self.logger)

    @property
    def es_client(self) -> AsyncElasticsearch:
        return self.index_manager.es_client

    # 索引生命周期

    def timestamped_name(self, prefix: str, now: datetime | None = None) -> str:
        return timestamped_name(prefix, now)

    async def create_index(
        self,
        index_name: str,
        mapping: IndexBody | None = None,
        settings: IndexBody | None = None,
    ) -> bool:
        return await self.index_manager.create_index(index_name, mapping, settings)

    async def create_timestamped_index(
        self,
        prefix: str,
        mapping: IndexBody | None = None,
        settings: IndexBody | None = None,
    ) -> str:
        return await self.index_manager.create_timestamped_index(prefix, mapping, settings)

    async def optimize_index(self, index_name: str, max_num_segments: int = 1) -> bool:
        return await self.index_manager.optimize_index(index_name, max_num_segments)

    async def delete_index(self, index_name: str) -> bool:
        return await self.index_manager.delete_index(index_name)

    # 别名

    async def get_indices_for_alias(self, alias_name: str) -> list[str]:
        return await self.index_manager.get_indices_for_alias(alias_name)

    async def update_alias(
        self,
        alias_name: str,
        add: IndexNames | None = None,
        remove: IndexNames | None = None,
        update: AliasUpdate | None = None,
    ) -> bool:
        return await self.index_manager.update_alias(
            alias_name, add=add, remove=remove, update=update
        )

    async def set_alias_to_single_index(self, alias_name: str, index_name: str) -> None:
        await self.index_manager.set_alias_to_single_index(alias_name, index_name)

    # 保留期清理

    def retention_cutoff(self, days_to_keep: int = DEFAULT_DAYS_TO_KEEP) -> int:
        return self.retention.retention_cutoff(days_to_keep)

    async def get_index_creation_dates(self, prefix: str) -> list[IndexCreationDate]:
        return await self.retention.get_index_creation_dates(prefix)

    async def get_indices_older_than(self, prefix: str, cutoff_millis: int) -> list[str]:
        return await self.retention.get_indices_older_than(prefix, cutoff_millis)

    async def cleanup_old_indices(
        self,
        prefix: str,
        days_to_keep: int = DEFAULT_DAYS_TO_KEEP,
        min_indexes_to_keep: int = 0,
        dry_run: bool = False,
    ) -> list[str]:
        return await self.retention.cleanup_old_indices(
            prefix,
            days_to_keep=days_to_keep,
            min_indexes_to_keep=min_indexes_to_keep,
            dry_run=dry_run,
        )

    # 文档写入

    async def index_document(
        self,
        index_name: str,
        doc_type: str | None,
        doc_id: str | int,
        document: Document,
    ) -> None:
        await self.bulk.index_document(index_name, doc_type, doc_id, document)

    async def index_document_bulk(
        self,
        index_name: str,
        doc_type: str | None,
        id_doc_pairs: Iterable[IdDocPair],
    ) -> BulkOutcome:
        return await self.bulk.index_document_bulk(index_name, doc_type, id_doc_pairs)

    async def index_documents_in_batches(
        self,
        index_name: str,
        doc_type: str | None,
        id_doc_pairs: Iterable[IdDocPair],
    ) -> BulkOutcome:
        return await self.bulk.index_documents_in_batches(index_name, doc_type, id_doc_pairs)
