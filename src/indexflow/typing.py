"""indexflow 类型定义模块."""

from collections.abc import Sequence
from typing import Any, Dict, List, Tuple, Union

# 单个索引名称或索引名称序列
IndexNames = Union[str, Sequence[str]]

# 文档类型
Document = Dict[str, Any]

# (文档ID, 文档) 对
IdDocPair = Tuple[Union[str, int], Document]

# 批量请求体，动作行与文档行交替排列
BulkBody = List[Dict[str, Any]]
