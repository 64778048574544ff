"""冲突检测器测试"""

import os
import sys
from pathlib import Path

import pytest

from brename.models import ConflictType, RenameOperation
from brename.validator import ConflictValidator, is_case_only_rename


def op(src: Path, dst: Path) -> RenameOperation:
    return RenameOperation(source=src, destination=dst)


class TestConflictValidator:
    def setup_method(self):
        self.validator = ConflictValidator()

    def test_no_conflicts(self, make_files):
        root = make_files("a.txt", "b.txt")
        ops = [op(root / "a.txt", root / "x.txt"), op(root / "b.txt", root / "y.txt")]

        assert self.validator.validate(ops) == []

    def test_duplicate_target_flags_every_source(self, make_files):
        root = make_files("a_1.txt", "a_2.txt", "c.txt")
        ops = [
            op(root / "a_1.txt", root / "a.txt"),
            op(root / "c.txt", root / "d.txt"),
            op(root / "a_2.txt", root / "a.txt"),
        ]

        conflicts = self.validator.validate(ops)

        assert {c.type for c in conflicts} == {ConflictType.DUPLICATE_TARGET}
        assert {c.source_path for c in conflicts} == {root / "a_1.txt", root / "a_2.txt"}

    def test_target_exists(self, make_files):
        root = make_files("a.txt", "b.txt")
        conflicts = self.validator.validate([op(root / "a.txt", root / "b.txt")])

        assert len(conflicts) == 1
        assert conflicts[0].type == ConflictType.TARGET_EXISTS
        assert conflicts[0].destination_path == root / "b.txt"

    def test_invalid_name_with_separator(self, make_files):
        root = make_files("a.txt")
        conflicts = self.validator.validate([op(root / "a.txt", root / "x" / "a.txt")])

        assert [c.type for c in conflicts] == [ConflictType.INVALID_NAME]

    def test_invalid_empty_name(self, make_files):
        root = make_files("notes")
        # 主名被完全替换为空时，目标即为所在目录
        conflicts = self.validator.validate([op(root / "notes", root / "")])

        assert [c.type for c in conflicts] == [ConflictType.INVALID_NAME]

    def test_parent_reference_in_name_is_invalid(self, make_files):
        root = make_files("a.txt")
        # a/../c.txt 在字面上回到同一目录，但 a 可能是符号链接
        dst = root / "a" / ".." / "c.txt"

        conflicts = self.validator.validate([op(root / "a.txt", dst)])

        assert [c.type for c in conflicts] == [ConflictType.INVALID_NAME]

    @pytest.mark.skipif(not hasattr(os, "link"), reason="不支持硬链接")
    def test_hard_link_target_is_a_conflict(self, make_files):
        root = make_files("a.txt")
        os.link(root / "a.txt", root / "xa.txt")

        conflicts = self.validator.validate([op(root / "a.txt", root / "xa.txt")])

        assert [c.type for c in conflicts] == [ConflictType.TARGET_EXISTS]

    @pytest.mark.skipif(sys.platform == "win32", reason="需要符号链接")
    def test_dangling_symlink_target_is_a_conflict(self, make_files):
        root = make_files("a.txt")
        os.symlink(root / "gone.txt", root / "b.txt")

        conflicts = self.validator.validate([op(root / "a.txt", root / "b.txt")])

        assert [c.type for c in conflicts] == [ConflictType.TARGET_EXISTS]


class TestIsCaseOnlyRename:
    def test_same_file_different_case(self, make_files):
        root = make_files("a.txt")
        # 大小写敏感的文件系统上 A.txt 不存在，不算同一文件
        expected = (root / "A.txt").exists()

        assert is_case_only_rename(root / "a.txt", root / "A.txt") is expected

    @pytest.mark.skipif(not hasattr(os, "link"), reason="不支持硬链接")
    def test_hard_link_is_not_case_only(self, make_files):
        root = make_files("a.txt")
        os.link(root / "a.txt", root / "b.txt")

        assert not is_case_only_rename(root / "a.txt", root / "b.txt")
