"""索引管理器数据模型定义模块."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypedDict

from ..exceptions import InvalidArgumentError
from ..typing import IndexNames

# 时间戳索引名称的后缀格式（秒级精度）
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

# 强制合并的请求超时时间（秒），大索引合并耗时较长
OPTIMIZE_REQUEST_TIMEOUT = 90

# 清理旧索引时默认保留的天数
DEFAULT_DAYS_TO_KEEP = 5


class IndexSettings(TypedDict, total=False):
    """索引设置类型定义.

    Attributes:
        number_of_shards: 主分片数量
        number_of_replicas: 副本分片数量
        refresh_interval: 刷新间隔
        analysis: 分析器配置
        max_result_window: 最大结果窗口大小
        codec: 编解码器
        mapping: 映射相关设置（如 total_fields.limit）
    """

    number_of_shards: int
    number_of_replicas: int
    refresh_interval: str
    analysis: dict[str, Any]
    max_result_window: int
    codec: str
    mapping: dict[str, Any]


class MappingProperty(TypedDict, total=False):
    """映射属性类型定义.

    Attributes:
        type: 字段类型（keyword, text, integer, date 等）
        fields: 多字段定义
        analyzer: 分析器
    """

    type: str
    fields: dict[str, Any]
    analyzer: str


class IndexMappings(TypedDict, total=False):
    """索引映射类型定义.

    Attributes:
        properties: 字段属性映射
        dynamic: 动态映射策略
    """

    properties: dict[str, MappingProperty]
    dynamic: str | bool


class IndexBody(TypedDict, total=False):
    """创建索引的请求体片段.

    Attributes:
        settings: 索引设置
        mappings: 索引映射
        aliases: 创建时绑定的别名
    """

    settings: IndexSettings
    mappings: IndexMappings
    aliases: dict[str, Any]


class AliasActionType(Enum):
    """别名动作类型枚举."""

    ADD = "add"
    REMOVE = "remove"


@dataclass
class AliasAction:
    """单个别名变更动作.

    Attributes:
        kind: 动作类型（add 或 remove）
        indices: 动作涉及的索引列表
        alias: 别名名称
    """

    kind: AliasActionType
    indices: list[str]
    alias: str

    def to_dict(self) -> dict[str, Any]:
        """转换为 update_aliases 请求中的动作格式."""
        return {self.kind.value: {"indices": list(self.indices), "alias": self.alias}}


def _normalize_index_names(value: IndexNames | None, field_name: str) -> list[str]:
    """将单个索引名或索引名序列统一为列表.

    Raises:
        InvalidArgumentError: 值既不是字符串也不是字符串序列时抛出
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        if not all(isinstance(item, str) for item in value):
            raise InvalidArgumentError(f"{field_name} 中的索引名称必须都是字符串")
        return [item for item in value if item]
    raise InvalidArgumentError(
        f"{field_name} 必须是索引名称字符串或索引名称列表，当前类型: {type(value).__name__}"
    )


@dataclass
class AliasUpdate:
    """别名更新参数.

    一次更新中的所有动作会在同一个 update_aliases 请求里提交，
    集群以原子方式应用，读取方不会看到别名同时指向新旧索引或不指向任何索引的中间状态。

    Attributes:
        add: 需要加入别名的索引，单个名称或名称列表，默认为空
        remove: 需要从别名移除的索引，单个名称或名称列表，默认为空
    """

    add: IndexNames | None = field(default_factory=list)
    remove: IndexNames | None = field(default_factory=list)

    def to_actions(self, alias: str) -> list[AliasAction]:
        """校验参数并构建有序的动作列表（add 在前，remove 在后）.

        Args:
            alias: 别名名称

        Returns:
            别名动作列表

        Raises:
            InvalidArgumentError: add/remove 类型不合法，或两者均为空时抛出
        """
        add_indices = _normalize_index_names(self.add, "add")
        remove_indices = _normalize_index_names(self.remove, "remove")

        if not add_indices and not remove_indices:
            raise InvalidArgumentError("别名更新至少需要添加或移除一个索引")

        actions: list[AliasAction] = []
        if add_indices:
            actions.append(AliasAction(AliasActionType.ADD, add_indices, alias))
        if remove_indices:
            actions.append(AliasAction(AliasActionType.REMOVE, remove_indices, alias))
        return actions


@dataclass
class IndexCreationDate:
    """索引创建时间.

    Attributes:
        name: 索引名称
        creation_date: 创建时间戳（毫秒）
    """

    name: str
    creation_date: int = 0
