"""重命名计划器

根据规则为每个文件计算新名称。纯函数，不访问文件系统。
"""

import os
from collections.abc import Iterable

from brename.models import (
    FileEntry,
    RenameMode,
    RenameOperation,
    RenamePreviewEntry,
    RenameRule,
)


def split_name(name: str) -> tuple[str, str]:
    """拆分文件名为 (主名, 扩展名)

    在最后一个 . 处拆分；仅以 . 开头的名称（如 .bashrc）没有扩展名。

    Args:
        name: 文件名

    Returns:
        (stem, ext)，ext 包含点号或为空字符串
    """
    return os.path.splitext(name)


def transform_stem(stem: str, rule: RenameRule) -> str:
    """按规则变换主名

    Args:
        stem: 原主名
        rule: 重命名规则

    Returns:
        新主名
    """
    if rule.mode is RenameMode.PREPEND:
        return rule.match_text + stem
    if rule.mode is RenameMode.APPEND:
        return stem + rule.match_text
    # replace：只替换第一次出现，空匹配串不做任何改动
    if not rule.match_text:
        return stem
    return stem.replace(rule.match_text, rule.replacement_text, 1)


class RenamePlanner:
    """重命名计划器"""

    def __init__(self, rule: RenameRule | None = None):
        self.rule = rule or RenameRule()

    def preview_entry(self, entry: FileEntry) -> RenamePreviewEntry:
        """计算单个文件的预览"""
        stem, ext = split_name(entry.name)
        proposed = transform_stem(stem, self.rule) + ext
        return RenamePreviewEntry(
            source_path=entry.path,
            destination_path=entry.directory / proposed,
            original_name=entry.name,
            proposed_name=proposed,
        )

    def plan(self, files: Iterable[FileEntry]) -> list[RenamePreviewEntry]:
        """为所有文件生成预览（保持输入顺序）

        Args:
            files: 文件列表

        Returns:
            预览列表，包括名称未变化的条目
        """
        return [self.preview_entry(f) for f in files]


def plan(files: Iterable[FileEntry], rule: RenameRule) -> list[RenamePreviewEntry]:
    """生成重命名预览"""
    return RenamePlanner(rule).plan(files)


def pending_operations(
    preview: Iterable[RenamePreviewEntry],
) -> list[RenameOperation]:
    """提取需要执行的操作（跳过名称未变化的条目）"""
    return [p.to_operation() for p in preview if p.is_changed]
