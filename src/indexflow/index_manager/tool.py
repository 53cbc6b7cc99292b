"""索引管理器核心工具类."""

import logging
from typing import Any

from elasticsearch import AsyncElasticsearch, ConnectionTimeout, NotFoundError

from ..exceptions import InvalidArgumentError, get_status_code
from ..typing import IndexNames
from .exceptions import (
    AliasQueryError,
    AliasUpdateError,
    IndexAlreadyExistsError,
    IndexCreationError,
    IndexDeletionError,
)
from .models import OPTIMIZE_REQUEST_TIMEOUT, AliasUpdate, IndexBody
from .naming import timestamped_name

logger = logging.getLogger(__name__)

# 网关超时，合并请求可能仍在集群上执行
_GATEWAY_TIMEOUT = 504


def _validate_index_name(index_name: str) -> bool:
    """验证索引名称是否符合 Elasticsearch 规范.

    Note:
        Elasticsearch 索引名称限制：
        - 不能以 . 或 _ 开头
        - 不能包含 , # / \\ * ? " < > | 空格
        - 不能是 . 或 ..
        - 长度不能超过 255 字节
    """
    if not index_name or not isinstance(index_name, str):
        return False

    if len(index_name.encode("utf-8")) > 255:
        return False

    if index_name.startswith(".") or index_name.startswith("_"):
        return False

    if index_name in (".", ".."):
        return False

    invalid_chars = {",", "#", "/", "\\", '"', "<", ">", "|", " ", "*", "?", "\t", "\n", "\r"}
    if any(char in invalid_chars for char in index_name):
        return False

    return True


def _require_name(value: str, field_name: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f"{field_name} 必须是非空字符串")


class IndexManager:
    """索引管理器核心类.

    负责索引的创建、合并、删除，以及别名的查询与原子切换。
    所有集群请求都是异步的，组件本身除客户端和日志记录器外不持有可变状态，
    可以被多个并发任务共享。

    Args:
        es_client: AsyncElasticsearch 客户端实例
        logger: 日志记录器，默认为当前模块的 logger

    Example:
        >>> manager = IndexManager(es_client)
        >>> name = await manager.create_timestamped_index("logs", mapping)
        >>> await manager.set_alias_to_single_index("logs", name)
    """

    def __init__(
        self,
        es_client: AsyncElasticsearch,
        logger: logging.Logger = logger,
    ):
        if es_client is None:
            raise ValueError("es_client 不能为 None")
        self.es_client = es_client
        self.logger = logger

    async def create_index(
        self,
        index_name: str,
        mapping: IndexBody | None = None,
        settings: IndexBody | None = None,
    ) -> bool:
        """创建索引.

        settings 与 mapping 合并为同一个请求体，二者都是完整的顶层片段，
        例如 ``{"settings": {...}}`` 与 ``{"mappings": {...}}``。

        Args:
            index_name: 索引名称
            mapping: 索引映射片段
            settings: 索引设置片段（分片、副本、分析器等）

        Returns:
            集群是否确认创建

        Raises:
            InvalidArgumentError: 索引名称不符合 Elasticsearch 规范时抛出
            IndexAlreadyExistsError: 索引已存在时抛出
            IndexCreationError: 集群拒绝创建请求时抛出

        Example:
            >>> await manager.create_index(
            ...     "users",
            ...     mapping={"mappings": {"properties": {"name": {"type": "keyword"}}}},
            ...     settings={"settings": {"number_of_shards": 1}},
            ... )
        """
        if not _validate_index_name(index_name):
            raise InvalidArgumentError(f"索引名称 '{index_name}' 不符合 Elasticsearch 规范")

        body: dict[str, Any] = {**(settings or {}), **(mapping or {})}

        try:
            response = await self.es_client.indices.create(index=index_name, body=body)
        except Exception as e:
            self.logger.error(f"创建索引 '{index_name}' 失败: {str(e)}")
            status_code = get_status_code(e)
            if status_code == 400 and "resource_already_exists_exception" in str(e):
                raise IndexAlreadyExistsError(
                    f"索引 '{index_name}' 已存在", index_name, status_code
                ) from e
            raise IndexCreationError(
                f"创建索引 '{index_name}' 失败: {str(e)}", index_name, status_code
            ) from e

        # 集群可能在超时前未完成创建，此时 acknowledged 为 False
        acknowledged = response.get("acknowledged", False)
        if acknowledged:
            self.logger.info(f"索引 '{index_name}' 创建成功")
        else:
            self.logger.warning(f"索引 '{index_name}' 创建请求未在超时前被确认")
        return acknowledged

    async def create_timestamped_index(
        self,
        prefix: str,
        mapping: IndexBody | None = None,
        settings: IndexBody | None = None,
    ) -> str:
        """创建带时间戳的索引.

        用于先写入新索引、完成后再切换别名的加载流程。

        Args:
            prefix: 索引名称前缀
            mapping: 索引映射片段
            settings: 索引设置片段

        Returns:
            生成的索引名称，如 ``logs_20240101000000``
        """
        index_name = timestamped_name(prefix)
        await self.create_index(index_name, mapping, settings)
        return index_name

    async def optimize_index(
        self,
        index_name: str,
        max_num_segments: int = 1,
    ) -> bool:
        """强制合并索引段.

        合并是尽力而为的维护操作，不会抛出异常：
        请求超时或网关超时（504）时合并可能仍在集群上进行，仅记录警告；
        其他失败记录错误日志。

        Args:
            index_name: 索引名称
            max_num_segments: 合并后的最大段数，默认为 1

        Returns:
            合并请求是否正常完成
        """
        try:
            await self.es_client.options(
                request_timeout=OPTIMIZE_REQUEST_TIMEOUT
            ).indices.forcemerge(index=index_name, max_num_segments=max_num_segments)
        except ConnectionTimeout:
            self.logger.warning(f"索引 '{index_name}' 强制合并请求超时，合并可能仍在进行")
            return False
        except Exception as e:
            if get_status_code(e) == _GATEWAY_TIMEOUT:
                self.logger.warning(f"索引 '{index_name}' 强制合并网关超时，合并可能仍在进行")
            else:
                self.logger.error(f"强制合并索引 '{index_name}' 失败: {str(e)}")
            return False

        self.logger.info(f"索引 '{index_name}' 强制合并成功 (max_num_segments={max_num_segments})")
        return True

    async def delete_index(self, index_name: str) -> bool:
        """删除索引.

        Args:
            index_name: 索引名称

        Returns:
            集群是否确认删除

        Raises:
            IndexDeletionError: 删除失败时抛出（包括索引不存在）
        """
        try:
            response = await self.es_client.indices.delete(index=index_name)
        except Exception as e:
            self.logger.error(f"删除索引 '{index_name}' 失败: {str(e)}")
            raise IndexDeletionError(
                f"删除索引 '{index_name}' 失败: {str(e)}", index_name, get_status_code(e)
            ) from e

        self.logger.info(f"索引 '{index_name}' 删除成功")
        return response.get("acknowledged", False)

    async def get_indices_for_alias(self, alias_name: str) -> list[str]:
        """获取别名指向的所有索引.

        别名尚未绑定任何索引时集群返回 404，此时视为正常并返回空列表。

        Args:
            alias_name: 别名名称

        Returns:
            索引名称列表

        Raises:
            AliasQueryError: 除 404 以外的查询失败时抛出
        """
        try:
            response = await self.es_client.indices.get_alias(name=alias_name)
        except NotFoundError:
            return []
        except Exception as e:
            self.logger.error(f"获取别名 '{alias_name}' 指向的索引失败: {str(e)}")
            raise AliasQueryError(
                f"获取别名 '{alias_name}' 指向的索引失败: {str(e)}",
                alias_name,
                get_status_code(e),
            ) from e

        return list(response.keys())

    async def update_alias(
        self,
        alias_name: str,
        add: IndexNames | None = None,
        remove: IndexNames | None = None,
        update: AliasUpdate | None = None,
    ) -> bool:
        """在一个原子请求中为别名添加和移除索引.

        Args:
            alias_name: 别名名称
            add: 需要加入别名的索引，单个名称或名称列表
            remove: 需要从别名移除的索引，单个名称或名称列表
            update: 现成的 AliasUpdate 参数对象，提供时忽略 add/remove

        Returns:
            集群是否确认更新

        Raises:
            InvalidArgumentError: alias_name 为空、add/remove 类型不合法或两者都为空时抛出
            AliasUpdateError: 集群拒绝更新请求时抛出

        Example:
            >>> await manager.update_alias(
            ...     "logs", add="logs_20240102000000", remove=["logs_20240101000000"]
            ... )
        """
        _require_name(alias_name, "alias_name")
        if update is None:
            update = AliasUpdate(add=add, remove=remove)
        actions = [action.to_dict() for action in update.to_actions(alias_name)]

        try:
            response = await self.es_client.indices.update_aliases(actions=actions)
        except Exception as e:
            self.logger.error(f"更新别名 '{alias_name}' 失败: {str(e)}")
            raise AliasUpdateError(
                f"更新别名 '{alias_name}' 失败: {str(e)}", alias_name, get_status_code(e)
            ) from e

        self.logger.info(f"别名 '{alias_name}' 更新成功: {actions}")
        return response.get("acknowledged", False)

    async def set_alias_to_single_index(self, alias_name: str, index_name: str) -> None:
        """将别名切换为只指向一个索引.

        先读取别名当前绑定的索引，再在同一个请求中添加目标索引并移除其余索引。
        无论别名此前绑定了 0 个、1 个还是多个索引，成功后都只指向目标索引。

        Args:
            alias_name: 别名名称
            index_name: 目标索引名称

        Raises:
            InvalidArgumentError: alias_name 或 index_name 为空时抛出
            AliasQueryError: 读取当前绑定失败时抛出
            AliasUpdateError: 更新别名失败时抛出
        """
        _require_name(alias_name, "alias_name")
        _require_name(index_name, "index_name")

        try:
            current_indices = await self.get_indices_for_alias(alias_name)
            to_remove = [idx for idx in current_indices if idx != index_name]
            await self.update_alias(alias_name, add=index_name, remove=to_remove)
        except Exception:
            self.logger.error(f"无法将别名 '{alias_name}' 指向索引 '{index_name}'")
            raise
