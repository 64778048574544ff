"""冲突检测器

在执行前检测批次中的冲突：重复目标、目标已存在、目标名无效。
"""

import logging
import os
from collections import defaultdict
from collections.abc import Sequence
from pathlib import Path

from brename.models import Conflict, ConflictType, RenameOperation

logger = logging.getLogger(__name__)


def _key(path: Path) -> str:
    """路径比较键（Windows 下不区分大小写，不折叠 ..）"""
    return os.path.normcase(str(path))


def is_case_only_rename(src: Path, tgt: Path) -> bool:
    """是否为同一文件仅改变大小写的重命名

    大小写不敏感的文件系统上目标会"已存在"，此时不算冲突。
    硬链接或指向源文件的符号链接不在此列。
    """
    if src.parent != tgt.parent or src.name.lower() != tgt.name.lower():
        return False
    try:
        return os.path.samefile(src, tgt)
    except OSError:
        return False


class ConflictValidator:
    """冲突检测器"""

    def validate(self, operations: Sequence[RenameOperation]) -> list[Conflict]:
        """检测所有冲突

        Args:
            operations: 重命名操作列表

        Returns:
            冲突列表，每个冲突对应一个操作
        """
        conflicts: list[Conflict] = []
        invalid: set[int] = set()

        for i, op in enumerate(operations):
            conflict = self._check_name(op)
            if conflict:
                conflicts.append(conflict)
                invalid.add(i)

        # 收集所有目标路径用于检测重复
        target_paths: dict[str, list[int]] = defaultdict(list)
        for i, op in enumerate(operations):
            if i not in invalid:
                target_paths[_key(op.destination)].append(i)

        duplicated: set[int] = set()
        for indexes in target_paths.values():
            if len(indexes) > 1:
                duplicated.update(indexes)
                for i in indexes:
                    op = operations[i]
                    conflicts.append(
                        Conflict(
                            type=ConflictType.DUPLICATE_TARGET,
                            source_path=op.source,
                            destination_path=op.destination,
                            message=f"多个源映射到同一目标: {op.destination}",
                        )
                    )

        for i, op in enumerate(operations):
            if i in invalid or i in duplicated:
                continue
            if self._check_target_exists(op.source, op.destination):
                conflicts.append(
                    Conflict(
                        type=ConflictType.TARGET_EXISTS,
                        source_path=op.source,
                        destination_path=op.destination,
                        message=f"目标文件已存在: {op.destination}",
                    )
                )

        for conflict in conflicts:
            logger.warning(conflict.message)
        return conflicts

    def _check_name(self, op: RenameOperation) -> Conflict | None:
        """检查目标名是否为同目录下的合法文件名

        逐段比较父目录而不折叠 ..，因为 a/../c.txt 中的 a 可能是符号链接。
        """
        name = op.destination.name
        if (
            name in ("", ".", "..")
            or "\x00" in str(op.destination)
            or op.destination.parent != op.source.parent
        ):
            return Conflict(
                type=ConflictType.INVALID_NAME,
                source_path=op.source,
                destination_path=op.destination,
                message=f"目标文件名无效: {op.destination}",
            )
        return None

    def _check_target_exists(self, src_path: Path, tgt_path: Path) -> bool:
        """检查目标路径是否已存在（且不是源文件本身）"""
        if _key(src_path) == _key(tgt_path):
            return False
        if not os.path.lexists(tgt_path):
            return False
        return not is_case_only_rename(src_path, tgt_path)
