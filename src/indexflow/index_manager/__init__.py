"""索引管理器模块.

该模块提供时间戳索引的生命周期管理功能，包括：
- 时间戳索引命名与创建
- 索引强制合并与删除
- 别名查询与原子切换
- 过期索引清理

示例用法:
    >>> from indexflow.index_manager import IndexManager, RetentionSweeper
    >>> manager = IndexManager(es_client)
    >>> # 创建新索引并切换别名
    >>> name = await manager.create_timestamped_index(
    ...     "logs", mapping={"mappings": {"properties": {"msg": {"type": "text"}}}}
    ... )
    >>> await manager.set_alias_to_single_index("logs", name)
    >>> # 清理 7 天前且未被别名引用的索引
    >>> await RetentionSweeper(manager).cleanup_old_indices("logs", days_to_keep=7)
"""

from .exceptions import (
    AliasQueryError,
    AliasUpdateError,
    ClusterQueryError,
    ClusterWriteError,
    IndexAlreadyExistsError,
    IndexCreationError,
    IndexDeletionError,
    IndexManagerError,
)
from .models import (
    DEFAULT_DAYS_TO_KEEP,
    OPTIMIZE_REQUEST_TIMEOUT,
    TIMESTAMP_FORMAT,
    AliasAction,
    AliasActionType,
    AliasUpdate,
    IndexBody,
    IndexCreationDate,
    IndexMappings,
    IndexSettings,
    MappingProperty,
)
from .naming import parse_timestamped_name, start_of_day, timestamped_name, utc_now
from .retention import RetentionSweeper
from .tool import IndexManager

__all__ = [
    # 核心类
    "IndexManager",
    "RetentionSweeper",
    # 数据模型
    "AliasAction",
    "AliasActionType",
    "AliasUpdate",
    "IndexCreationDate",
    # 类型定义
    "IndexBody",
    "IndexSettings",
    "MappingProperty",
    "IndexMappings",
    # 常量
    "DEFAULT_DAYS_TO_KEEP",
    "OPTIMIZE_REQUEST_TIMEOUT",
    "TIMESTAMP_FORMAT",
    # 命名工具函数
    "timestamped_name",
    "parse_timestamped_name",
    "start_of_day",
    "utc_now",
    # 异常类
    "IndexManagerError",
    "ClusterQueryError",
    "ClusterWriteError",
    "AliasQueryError",
    "AliasUpdateError",
    "IndexCreationError",
    "IndexAlreadyExistsError",
    "IndexDeletionError",
]
