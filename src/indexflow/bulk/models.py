"""批量写入工具数据模型定义模块."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# 批量请求超时时间（秒），数据量更大时应拆分为更小的批次
BULK_REQUEST_TIMEOUT = 120


class BulkItemResult(Enum):
    """批量写入中单个文档的结果类型."""

    CREATED = "created"
    UPDATED = "updated"


@dataclass
class BulkDocumentError:
    """批量写入中单个文档的错误.

    Attributes:
        doc_id: 文档ID
        cause: 集群返回的原始错误对象
        status: HTTP状态码
    """

    doc_id: str
    cause: dict[str, Any] = field(default_factory=dict)
    status: int = 0

    @property
    def error_type(self) -> str:
        """错误类型."""
        return str(self.cause.get("type", "unknown"))

    @property
    def error_reason(self) -> str:
        """错误原因."""
        return str(self.cause.get("reason", ""))


@dataclass
class BulkOutcome:
    """批量写入结果.

    每个响应条目只会落入 created、updated、errors 之一。
    同一次请求中重复的文档ID会在结果中重复出现。

    Attributes:
        created: 新建文档的ID列表
        updated: 已存在并被覆盖的文档ID列表
        errors: 写入失败的文档错误列表
    """

    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    errors: list[BulkDocumentError] = field(default_factory=list)

    @property
    def total(self) -> int:
        """已分类的响应条目总数."""
        return len(self.created) + len(self.updated) + len(self.errors)

    def is_success(self) -> bool:
        """判断是否全部写入成功."""
        return not self.errors

    def add_error(self, doc_id: str, cause: dict[str, Any], status: int = 0) -> None:
        """添加错误项."""
        self.errors.append(BulkDocumentError(doc_id=doc_id, cause=cause, status=status))

    def get_error_summary(self) -> str:
        """获取错误摘要."""
        if not self.errors:
            return "No errors"
        summary = f"Total errors: {len(self.errors)}\n"
        for i, error in enumerate(self.errors[:10], 1):  # 只显示前10个错误
            summary += (
                f"{i}. DocID: {error.doc_id}, Status: {error.status}, "
                f"Type: {error.error_type}, Reason: {error.error_reason}\n"
            )
        if len(self.errors) > 10:
            summary += f"... and {len(self.errors) - 10} more errors\n"
        return summary
