"""brename 数据模型

规则与预览使用 Pydantic 实现 JSON 验证和序列化，其余为 dataclass。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel


@dataclass(frozen=True)
class FileEntry:
    """列表时刻的文件快照"""

    name: str  # 文件名（含扩展名）
    path: Path  # 绝对路径
    directory: Path  # 所在目录


class RenameMode(str, Enum):
    """重命名方式"""

    PREPEND = "prepend"  # 添加到开头
    APPEND = "append"  # 添加到结尾
    REPLACE = "replace"  # 替换首次出现


class RenameRule(BaseModel):
    """重命名规则"""

    mode: RenameMode = RenameMode.REPLACE
    match_text: str = ""
    replacement_text: str = ""  # 仅 replace 模式使用


class RenamePreviewEntry(BaseModel):
    """单个文件的预览结果"""

    source_path: Path
    destination_path: Path
    original_name: str
    proposed_name: str

    @property
    def is_changed(self) -> bool:
        """新名称是否与原名称不同"""
        return self.proposed_name != self.original_name

    def to_operation(self) -> "RenameOperation":
        return RenameOperation(
            source=self.source_path, destination=self.destination_path
        )


class RenamePreview(BaseModel):
    """导出用的预览结构"""

    rule: RenameRule
    entries: list[RenamePreviewEntry] = []


# ============ 执行与冲突模型 ============


@dataclass
class RenameOperation:
    """单次重命名操作"""

    source: Path
    destination: Path


class OutcomeStatus(str, Enum):
    """单项执行状态"""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CONFLICT = "conflict"  # 预检拒绝，未尝试


@dataclass
class RenameOutcome:
    """单项重命名结果"""

    source_path: Path
    status: OutcomeStatus
    destination_path: Path | None = None
    error_detail: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.SUCCEEDED


class ConflictType(str, Enum):
    """冲突类型"""

    DUPLICATE_TARGET = "duplicate_target"  # 多个源映射到同一目标
    TARGET_EXISTS = "target_exists"  # 目标路径已存在
    INVALID_NAME = "invalid_name"  # 目标文件名无效


@dataclass
class Conflict:
    """重命名冲突"""

    type: ConflictType
    source_path: Path
    destination_path: Path
    message: str


@dataclass
class BatchSummary:
    """批量执行统计"""

    succeeded: int
    failed: int
    conflicts: int

    @property
    def total(self) -> int:
        return self.succeeded + self.failed + self.conflicts

    @property
    def all_succeeded(self) -> bool:
        return self.failed == 0 and self.conflicts == 0

    @classmethod
    def from_outcomes(cls, outcomes: list[RenameOutcome]) -> "BatchSummary":
        """根据结果列表统计

        Args:
            outcomes: 执行结果列表

        Returns:
            统计对象
        """
        return cls(
            succeeded=sum(1 for o in outcomes if o.status is OutcomeStatus.SUCCEEDED),
            failed=sum(1 for o in outcomes if o.status is OutcomeStatus.FAILED),
            conflicts=sum(1 for o in outcomes if o.status is OutcomeStatus.CONFLICT),
        )


class RenameBatchError(Exception):
    """整个批次无法执行（区别于单项失败）"""
