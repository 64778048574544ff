"""重命名会话测试"""

from pathlib import Path

from brename.models import RenameMode, RenameRule
from brename.scanner import FileLister
from brename.session import RenameSession


class FailingLister(FileLister):
    def list(self, directory, recursive=False):
        raise PermissionError(f"权限不足: {directory}")


class TestRenameSession:
    def test_cancelled_folder_selection_keeps_state(self):
        session = RenameSession()

        assert session.select_folder(None) is False
        assert session.directory is None
        assert session.files == []
        assert session.error is None

    def test_select_folder_loads_files(self, make_files):
        root = make_files("a.txt", "sub/b.txt")
        session = RenameSession()

        assert session.select_folder(root)
        assert [f.name for f in session.files] == ["a.txt"]

    def test_toggle_recursive_reloads(self, make_files):
        root = make_files("a.txt", "sub/b.txt")
        session = RenameSession()
        session.select_folder(root)

        session.set_recursive(True)

        assert sorted(f.name for f in session.files) == ["a.txt", "b.txt"]

    def test_listing_error_is_explicit_state(self, tmp_path: Path):
        session = RenameSession()

        assert session.select_folder(tmp_path / "missing") is False
        assert session.files == []
        assert "missing" in session.error

    def test_error_clears_after_successful_load(self, make_files):
        root = make_files("a.txt")
        session = RenameSession(lister=FailingLister())
        session.select_folder(root)
        assert session.error

        session.lister = FileLister()
        assert session.load()
        assert session.error is None

    def test_preview_follows_rule_changes(self, make_files):
        root = make_files("a.txt")
        session = RenameSession()
        session.select_folder(root)

        session.update_rule(mode=RenameMode.PREPEND, match_text="x")
        assert session.preview[0].proposed_name == "xa.txt"

        session.update_rule(mode="append")
        assert session.preview[0].proposed_name == "ax.txt"
        assert session.rule.model_dump() == RenameRule(
            mode=RenameMode.APPEND, match_text="x"
        ).model_dump()

    def test_end_to_end_replace(self, make_files):
        root = make_files("report.txt", "notes.txt")
        session = RenameSession(
            rule=RenameRule(
                mode=RenameMode.REPLACE, match_text="notes", replacement_text="memo"
            )
        )
        session.select_folder(root)

        preview = {p.original_name: p for p in session.preview}
        assert preview["report.txt"].proposed_name == "report.txt"
        assert not preview["report.txt"].is_changed
        assert preview["notes.txt"].proposed_name == "memo.txt"
        assert len(session.pending_operations) == 1

        outcomes = session.apply()

        assert len(outcomes) == 1
        assert outcomes[0].succeeded
        assert sorted(f.name for f in session.files) == ["memo.txt", "report.txt"]
        assert not session.has_changes

    def test_apply_without_changes(self, make_files):
        root = make_files("a.txt")
        session = RenameSession()
        session.select_folder(root)

        assert not session.has_changes
        assert session.apply() == []

    def test_collision_leaves_files_untouched(self, make_files):
        root = make_files("a_b.txt", "ab_.txt", "c_.txt")
        session = RenameSession(
            rule=RenameRule(mode=RenameMode.REPLACE, match_text="_", replacement_text="")
        )
        session.select_folder(root)

        assert [p.proposed_name for p in session.preview] == ["ab.txt", "ab.txt", "c.txt"]

        outcomes = session.apply()

        assert [o.status.value for o in outcomes] == ["conflict", "conflict", "succeeded"]
        assert sorted(f.name for f in session.files) == ["a_b.txt", "ab_.txt", "c.txt"]
