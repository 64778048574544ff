"""brename - 文件批量重命名工具

列出文件夹中的文件，按规则（添加前缀、后缀或替换）生成预览，再批量执行重命名。
"""

__version__ = "0.1.0"

from brename.models import (
    BatchSummary,
    Conflict,
    ConflictType,
    FileEntry,
    OutcomeStatus,
    RenameBatchError,
    RenameMode,
    RenameOperation,
    RenameOutcome,
    RenamePreview,
    RenamePreviewEntry,
    RenameRule,
)
from brename.planner import RenamePlanner, pending_operations, plan, split_name
from brename.renamer import FileRenamer, rename_files
from brename.scanner import FileLister, list_files
from brename.session import RenameSession
from brename.validator import ConflictValidator

__all__ = [
    "BatchSummary",
    "Conflict",
    "ConflictType",
    "ConflictValidator",
    "FileEntry",
    "FileLister",
    "FileRenamer",
    "OutcomeStatus",
    "RenameBatchError",
    "RenameMode",
    "RenameOperation",
    "RenameOutcome",
    "RenamePlanner",
    "RenamePreview",
    "RenamePreviewEntry",
    "RenameRule",
    "RenameSession",
    "list_files",
    "pending_operations",
    "plan",
    "rename_files",
    "split_name",
]
