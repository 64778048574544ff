"""重命名会话

保存当前文件夹、文件列表和规则，驱动 选择 → 列表 → 预览 → 执行 → 刷新 流程。
"""

import logging
from pathlib import Path

from brename.models import (
    FileEntry,
    RenameMode,
    RenameOperation,
    RenameOutcome,
    RenamePreviewEntry,
    RenameRule,
)
from brename.planner import pending_operations, plan
from brename.renamer import FileRenamer
from brename.scanner import FileLister

logger = logging.getLogger(__name__)


class RenameSession:
    """重命名会话状态"""

    def __init__(
        self,
        directory: Path | None = None,
        recursive: bool = False,
        rule: RenameRule | None = None,
        lister: FileLister | None = None,
        renamer: FileRenamer | None = None,
    ):
        """初始化会话

        Args:
            directory: 初始文件夹（不会自动加载）
            recursive: 是否包含子文件夹
            rule: 初始规则
            lister: 文件列表器
            renamer: 重命名器
        """
        self.directory = Path(directory) if directory else None
        self.recursive = recursive
        self.rule = rule or RenameRule()
        self.lister = lister or FileLister()
        self.renamer = renamer or FileRenamer()
        self.files: list[FileEntry] = []
        self.error: str | None = None  # 最近一次列表错误

    def select_folder(self, path: Path | None) -> bool:
        """选择文件夹并加载

        Args:
            path: 文件夹路径；None 表示用户取消选择

        Returns:
            是否成功加载
        """
        if path is None:
            return False
        self.directory = Path(path)
        return self.load()

    def set_recursive(self, recursive: bool) -> bool:
        """切换是否包含子文件夹，已选择文件夹时重新加载"""
        self.recursive = recursive
        if self.directory is None:
            return False
        return self.load()

    def load(self) -> bool:
        """重新列出文件

        Returns:
            是否成功；失败时清空文件列表并记录 error
        """
        if self.directory is None:
            return False
        try:
            self.files = self.lister.list(self.directory, recursive=self.recursive)
        except OSError as e:
            self.files = []
            self.error = str(e)
            logger.warning(f"列出文件失败: {e}")
            return False
        self.error = None
        return True

    def update_rule(
        self,
        mode: RenameMode | str | None = None,
        match_text: str | None = None,
        replacement_text: str | None = None,
    ) -> RenameRule:
        """修改规则中给出的字段"""
        changes = {}
        if mode is not None:
            changes["mode"] = RenameMode(mode)
        if match_text is not None:
            changes["match_text"] = match_text
        if replacement_text is not None:
            changes["replacement_text"] = replacement_text
        self.rule = self.rule.model_copy(update=changes)
        return self.rule

    @property
    def preview(self) -> list[RenamePreviewEntry]:
        """当前文件与规则对应的预览（每次访问重新计算）"""
        return plan(self.files, self.rule)

    @property
    def pending_operations(self) -> list[RenameOperation]:
        return pending_operations(self.preview)

    @property
    def has_changes(self) -> bool:
        return any(p.is_changed for p in self.preview)

    def apply(self) -> list[RenameOutcome]:
        """执行所有待处理的重命名

        至少有一项成功时重新加载文件列表。

        Returns:
            执行结果列表
        """
        operations = self.pending_operations
        if not operations:
            return []

        outcomes = self.renamer.apply(operations)
        if any(o.succeeded for o in outcomes):
            self.load()
        return outcomes
