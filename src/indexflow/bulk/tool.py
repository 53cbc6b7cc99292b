"""批量写入核心工具类."""

import logging
from collections.abc import Iterable
from typing import Any

from elasticsearch import AsyncElasticsearch

from ..exceptions import InvalidArgumentError, get_status_code
from ..typing import BulkBody, Document, IdDocPair
from .exceptions import BulkRequestError, DocumentIndexError
from .models import BULK_REQUEST_TIMEOUT, BulkItemResult, BulkOutcome

logger = logging.getLogger(__name__)


class BulkIngestor:
    """批量写入核心工具类.

    将 (文档ID, 文档) 对组装为一个 bulk 请求，并把响应按文档分类为
    新建、更新和失败三类。不会预先校验重复ID或文档是否已存在，
    已存在的文档会被覆盖并归入 updated。

    Args:
        es_client: AsyncElasticsearch 客户端实例
        batch_size: index_documents_in_batches 每批次的文档数量，默认为 500
        logger: 日志记录器，默认为当前模块的 logger
    """

    def __init__(
        self,
        es_client: AsyncElasticsearch,
        batch_size: int = 500,
        logger: logging.Logger = logger,
    ):
        if batch_size < 1:
            raise InvalidArgumentError(f"batch_size 必须 >= 1，当前值: {batch_size}")
        self.es_client = es_client
        self.batch_size = batch_size
        self.logger = logger

    async def index_document(
        self,
        index_name: str,
        doc_type: str | None,
        doc_id: str | int,
        document: Document,
    ) -> None:
        """写入单个文档（存在则覆盖）.

        Args:
            index_name: 索引名称
            doc_type: 文档类型，ES 7 起已移除，仅为兼容旧调用方式保留，不会发送到集群
            doc_id: 文档ID
            document: 文档内容

        Raises:
            DocumentIndexError: 写入失败时抛出
        """
        try:
            await self.es_client.index(index=index_name, id=str(doc_id), document=document)
        except Exception as e:
            self.logger.error(f"写入文档 '{doc_id}' 到索引 '{index_name}' 失败: {str(e)}")
            raise DocumentIndexError(
                f"写入文档 '{doc_id}' 到索引 '{index_name}' 失败: {str(e)}",
                index_name,
                get_status_code(e),
            ) from e

    def _build_bulk_body(self, index_name: str, id_doc_pairs: Iterable[IdDocPair]) -> BulkBody:
        """组装 bulk 请求体：每个文档一行动作、一行文档，保持输入顺序."""
        body: BulkBody = []
        for doc_id, document in id_doc_pairs:
            body.append({"index": {"_index": index_name, "_id": str(doc_id)}})
            body.append(document)
        return body

    def _classify_items(self, items: list[dict[str, Any]]) -> BulkOutcome:
        """将 bulk 响应条目分类为 created / updated / errors."""
        outcome = BulkOutcome()
        for item in items:
            info = item.get("index")
            if info is None:
                continue
            doc_id = str(info.get("_id"))
            status = info.get("status", 0)

            if info.get("error"):
                outcome.add_error(doc_id, info["error"], status)
            elif info.get("result") == BulkItemResult.CREATED.value:
                outcome.created.append(doc_id)
            elif info.get("result") == BulkItemResult.UPDATED.value:
                outcome.updated.append(doc_id)
            else:
                outcome.add_error(
                    doc_id,
                    {
                        "type": "unexpected_result",
                        "reason": f"未预期的写入结果: {info.get('result')}",
                    },
                    status,
                )
        return outcome

    async def index_document_bulk(
        self,
        index_name: str,
        doc_type: str | None,
        id_doc_pairs: Iterable[IdDocPair],
    ) -> BulkOutcome:
        """批量写入文档.

        Args:
            index_name: 索引名称
            doc_type: 文档类型，ES 7 起已移除，仅为兼容旧调用方式保留，不会发送到集群
            id_doc_pairs: (文档ID, 文档) 对，如 ``[(1, {...}), (2, {...})]``

        Returns:
            BulkOutcome，单个文档的失败记录在 errors 中

        Raises:
            BulkRequestError: 整个请求失败时抛出（例如集群不可达）

        Example:
            >>> outcome = await ingestor.index_document_bulk(
            ...     "users", None, [("1", {"name": "Alice"}), ("2", {"name": "Bob"})]
            ... )
            >>> print(f"新建: {outcome.created}, 更新: {outcome.updated}")
        """
        body = self._build_bulk_body(index_name, id_doc_pairs)
        if not body:
            return BulkOutcome()

        try:
            response = await self.es_client.options(
                request_timeout=BULK_REQUEST_TIMEOUT
            ).bulk(operations=body)
        except Exception as e:
            self.logger.error(f"批量写入索引 '{index_name}' 时发生服务端错误: {str(e)}")
            raise BulkRequestError(
                f"批量写入索引 '{index_name}' 失败: {str(e)}",
                index_name,
                get_status_code(e),
            ) from e

        outcome = self._classify_items(response.get("items", []))
        if outcome.errors:
            self.logger.warning(
                f"批量写入索引 '{index_name}' 完成，{len(outcome.errors)}/{outcome.total} 个文档失败"
            )
        else:
            self.logger.info(
                f"批量写入索引 '{index_name}' 完成: 新建 {len(outcome.created)}，"
                f"更新 {len(outcome.updated)}"
            )
        return outcome

    async def index_documents_in_batches(
        self,
        index_name: str,
        doc_type: str | None,
        id_doc_pairs: Iterable[IdDocPair],
    ) -> BulkOutcome:
        """按 batch_size 分批依次写入文档，并合并各批次的结果.

        任一批次整体失败时抛出 BulkRequestError，此前批次已写入的文档不会回滚。

        Args:
            index_name: 索引名称
            doc_type: 文档类型，仅为兼容保留
            id_doc_pairs: (文档ID, 文档) 对，可以是惰性迭代器

        Returns:
            合并后的 BulkOutcome
        """
        merged = BulkOutcome()
        batch: list[IdDocPair] = []
        batch_count = 0

        async def _flush(chunk: list[IdDocPair]) -> None:
            outcome = await self.index_document_bulk(index_name, doc_type, chunk)
            merged.created.extend(outcome.created)
            merged.updated.extend(outcome.updated)
            merged.errors.extend(outcome.errors)

        for pair in id_doc_pairs:
            batch.append(pair)
            if len(batch) >= self.batch_size:
                await _flush(batch)
                batch_count += 1
                batch = []
        if batch:
            await _flush(batch)
            batch_count += 1

        self.logger.info(
            f"分批写入索引 '{index_name}' 完成: {batch_count} 个批次，共 {merged.total} 个文档"
        )
        return merged
