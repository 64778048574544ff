"""文件重命名器

按顺序逐项执行批量重命名，单项失败不影响其余操作。
"""

import logging
import os
import shutil
from collections.abc import Sequence
from pathlib import Path

from brename.models import (
    OutcomeStatus,
    RenameBatchError,
    RenameOperation,
    RenameOutcome,
)
from brename.validator import ConflictValidator, is_case_only_rename

logger = logging.getLogger(__name__)


def _coerce_operations(operations) -> list[RenameOperation]:
    """将输入转换为 RenameOperation 列表

    接受 RenameOperation 或 (源路径, 目标路径) 二元组。

    Raises:
        RenameBatchError: 输入不是合法的操作序列
    """
    if isinstance(operations, (str, bytes)) or not isinstance(operations, Sequence):
        raise RenameBatchError(f"无效的操作列表: {operations!r}")

    result: list[RenameOperation] = []
    for op in operations:
        if isinstance(op, RenameOperation):
            result.append(
                RenameOperation(source=Path(op.source), destination=Path(op.destination))
            )
        elif isinstance(op, tuple) and len(op) == 2:
            result.append(RenameOperation(source=Path(op[0]), destination=Path(op[1])))
        else:
            raise RenameBatchError(f"无效的重命名操作: {op!r}")
    return result


class FileRenamer:
    """文件重命名器"""

    def __init__(self, validator: ConflictValidator | None = None):
        """初始化重命名器

        Args:
            validator: 冲突检测器（可选）
        """
        self.validator = validator or ConflictValidator()

    def apply(self, operations: Sequence[RenameOperation]) -> list[RenameOutcome]:
        """批量重命名文件

        冲突项不执行，直接返回 conflict 结果；其余按输入顺序逐项执行。

        Args:
            operations: 重命名操作列表

        Returns:
            与输入一一对应、顺序相同的结果列表

        Raises:
            RenameBatchError: 输入无法作为批次处理
        """
        ops = _coerce_operations(operations)

        conflicts = {
            (c.source_path, c.destination_path): c for c in self.validator.validate(ops)
        }

        outcomes: list[RenameOutcome] = []
        for op in ops:
            conflict = conflicts.get((op.source, op.destination))
            if conflict:
                outcomes.append(
                    RenameOutcome(
                        source_path=op.source,
                        destination_path=op.destination,
                        status=OutcomeStatus.CONFLICT,
                        error_detail=conflict.message,
                    )
                )
                continue
            outcomes.append(self._rename_single(op.source, op.destination))

        return outcomes

    def _rename_single(self, src: Path, tgt: Path) -> RenameOutcome:
        """重命名单个文件

        Args:
            src: 源路径
            tgt: 目标路径

        Returns:
            执行结果
        """
        error: str | None = None

        if not src.exists():
            error = f"源文件不存在: {src}"
        elif os.path.lexists(tgt) and not is_case_only_rename(src, tgt):
            error = f"目标已存在: {tgt}"

        if error:
            logger.warning(error)
            return RenameOutcome(
                source_path=src,
                destination_path=tgt,
                status=OutcomeStatus.FAILED,
                error_detail=error,
            )

        try:
            shutil.move(str(src), str(tgt))
        except OSError as e:
            logger.error(f"重命名失败 {src} -> {tgt}: {e}")
            return RenameOutcome(
                source_path=src,
                destination_path=tgt,
                status=OutcomeStatus.FAILED,
                error_detail=str(e),
            )

        logger.info(f"重命名: {src.name} -> {tgt.name}")
        return RenameOutcome(
            source_path=src,
            destination_path=tgt,
            status=OutcomeStatus.SUCCEEDED,
        )


def rename_files(operations: Sequence[RenameOperation]) -> list[RenameOutcome]:
    """使用默认设置执行批量重命名"""
    return FileRenamer().apply(operations)
