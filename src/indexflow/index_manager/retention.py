"""索引保留期清理模块.

按创建时间找出超过保留期的时间戳索引，排除仍被别名引用的索引后并发删除。
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from elasticsearch import NotFoundError

from ..exceptions import InvalidArgumentError, get_status_code
from .exceptions import ClusterQueryError, IndexDeletionError
from .models import DEFAULT_DAYS_TO_KEEP, IndexCreationDate
from .naming import parse_timestamped_name, start_of_day, to_epoch_millis, utc_now
from .tool import IndexManager


class RetentionSweeper:
    """旧索引清理器.

    约定别名与索引前缀同名：前缀为 ``logs`` 的索引形如 ``logs_20240101000000``，
    对外读取别名也为 ``logs``。当前被别名引用的索引即使已过期也不会被删除。

    Args:
        index_manager: 索引管理器，用于读取别名绑定与删除索引
        logger: 日志记录器，默认使用 index_manager 的日志记录器
        now_func: 获取当前时间的函数，主要用于测试，默认返回当前 UTC 时间

    Example:
        >>> sweeper = RetentionSweeper(IndexManager(es_client))
        >>> deleted = await sweeper.cleanup_old_indices("logs", days_to_keep=7)
    """

    def __init__(
        self,
        index_manager: IndexManager,
        logger: logging.Logger | None = None,
        now_func: Callable[[], datetime] | None = None,
    ) -> None:
        self.index_manager = index_manager
        self.logger = logger or index_manager.logger
        self._now_func = now_func or utc_now

    def retention_cutoff(self, days_to_keep: int = DEFAULT_DAYS_TO_KEEP) -> int:
        """计算保留期截止时间（毫秒）：当前时间减去保留天数，再截断到当天零点（UTC）."""
        return to_epoch_millis(start_of_day(self._now_func() - timedelta(days=days_to_keep)))

    async def get_index_creation_dates(self, prefix: str) -> list[IndexCreationDate]:
        """获取前缀匹配的所有索引的创建时间.

        设置中缺少 creation_date 时，回退到时间戳索引名称中的时间；
        两者都没有的索引会被跳过，不参与清理。

        Args:
            prefix: 索引名称前缀

        Returns:
            索引创建时间列表，没有匹配索引时为空列表

        Raises:
            InvalidArgumentError: prefix 为空时抛出
            ClusterQueryError: 查询失败时抛出
        """
        if not prefix:
            raise InvalidArgumentError("prefix 不能为空")

        pattern = f"{prefix}*"
        try:
            response = await self.index_manager.es_client.indices.get_settings(
                index=pattern, name="index.creation_date"
            )
        except NotFoundError:
            return []
        except Exception as e:
            self.logger.error(f"获取索引 '{pattern}' 的创建时间失败: {str(e)}")
            raise ClusterQueryError(
                f"获取索引 '{pattern}' 的创建时间失败: {str(e)}", pattern, get_status_code(e)
            ) from e

        creation_dates: list[IndexCreationDate] = []
        for index_name, data in response.items():
            # creation_date 以字符串形式返回
            raw_date = data.get("settings", {}).get("index", {}).get("creation_date")
            if raw_date is not None:
                creation_dates.append(IndexCreationDate(index_name, int(raw_date)))
                continue

            parsed = parse_timestamped_name(index_name)
            if parsed is None:
                self.logger.warning(f"索引 '{index_name}' 缺少创建时间且名称不含时间戳，跳过")
                continue
            creation_dates.append(IndexCreationDate(index_name, to_epoch_millis(parsed[1])))
        return creation_dates

    async def get_indices_older_than(self, prefix: str, cutoff_millis: int) -> list[str]:
        """获取创建时间早于截止时间的索引.

        结果按创建时间降序排列（最接近截止时间的在前）。逐个删除时若中途中断，
        最先被删除的是最接近保留边界的索引，最旧的留给下一次清理。

        Args:
            prefix: 索引名称前缀，不能为空
            cutoff_millis: 截止时间（毫秒）

        Returns:
            过期索引名称列表

        Example:
            >>> await sweeper.get_indices_older_than("app", 1700000000000)
            ['app_1']
        """
        creation_dates = await self.get_index_creation_dates(prefix)
        older = [item for item in creation_dates if item.creation_date < cutoff_millis]
        older.sort(key=lambda item: item.creation_date, reverse=True)
        return [item.name for item in older]

    async def cleanup_old_indices(
        self,
        prefix: str,
        days_to_keep: int = DEFAULT_DAYS_TO_KEEP,
        min_indexes_to_keep: int = 0,
        dry_run: bool = False,
    ) -> list[str]:
        """清理未被使用的旧索引.

        Args:
            prefix: 时间戳索引的前缀（通常就是别名名称）
            days_to_keep: 保留天数，默认 5 天
            min_indexes_to_keep: 最少保留的索引数量，目前未实现，仅记录警告
            dry_run: 试运行模式，为 True 时只返回待删除列表而不实际删除

        Returns:
            已删除（dry_run 时为待删除）的索引名称列表

        Raises:
            InvalidArgumentError: prefix 为空时抛出
            ClusterQueryError: 查询过期索引失败时抛出
            AliasQueryError: 查询别名绑定失败时抛出
            IndexDeletionError: 任一索引删除失败时，在全部删除请求结束后抛出
        """
        if min_indexes_to_keep > 0:
            self.logger.warning(
                f"min_indexes_to_keep={min_indexes_to_keep} 尚未实现，将被忽略"
            )

        cutoff = self.retention_cutoff(days_to_keep)
        old_indices = await self.get_indices_older_than(prefix, cutoff)

        # 没有过期索引时无需再查询别名
        if not old_indices:
            return []

        aliased_indices = set(await self.index_manager.get_indices_for_alias(prefix))
        to_delete = [idx for idx in old_indices if idx not in aliased_indices]

        skipped = [idx for idx in old_indices if idx in aliased_indices]
        if skipped:
            self.logger.info(f"以下过期索引仍被别名 '{prefix}' 引用，跳过删除: {skipped}")

        if not to_delete:
            return []

        if dry_run:
            self.logger.info(f"[dry_run] 待删除的过期索引: {to_delete}")
            return to_delete

        results = await asyncio.gather(
            *(self.index_manager.delete_index(name) for name in to_delete),
            return_exceptions=True,
        )

        failures: list[IndexDeletionError] = []
        for result in results:
            if isinstance(result, IndexDeletionError):
                failures.append(result)
            elif isinstance(result, BaseException):
                raise result

        if failures:
            self.logger.error(
                f"清理前缀 '{prefix}' 的过期索引时 {len(failures)}/{len(to_delete)} 个删除失败"
            )
            raise failures[0]

        self.logger.info(f"已清理前缀 '{prefix}' 的过期索引: {to_delete}")
        return to_delete
