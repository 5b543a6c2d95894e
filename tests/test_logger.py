import os
import time

from regex_tester.log_cleanup import delete_old_log_files
from regex_tester.utils.config_utils import load_tester_config
from regex_tester.utils.logger import (
    build_session_markdown,
    session_markdown_to_html,
    write_session_debug,
)
from regex_tester.utils.session import TesterSession


def _cfg(tmp_path, **debug):
    base = {"log_dir": str(tmp_path), "max_age_hours": 1}
    base.update(debug)
    return load_tester_config({"debug": base})


def _age(path, hours):
    old = time.time() - hours * 3600
    os.utime(path, (old, old))


class TestMarkdown:
    def test_matches_table(self):
        session = TesterSession()
        session.subject_changed("ac abc")
        snap = session.pattern_changed("a(b)?(c)")
        md = build_session_markdown(snap, {})
        assert "## Matches" in md
        assert "| 1 | [0, 2) | `ac` | `1: ∅; 2: c` |" in md
        assert "| 2 | [3, 6) | `abc` | `1: b; 2: c` |" in md
        assert "- state: `matched`" in md

    def test_compile_error_section(self):
        session = TesterSession()
        snap = session.pattern_changed("(")
        md = build_session_markdown(snap, {})
        assert "compile error" in md
        assert "## Matches" not in md

    def test_idle_session(self):
        md = build_session_markdown(TesterSession().snapshot(), {})
        assert "_No pattern entered yet._" in md

    def test_pipes_escaped(self):
        session = TesterSession()
        session.subject_changed("a|b")
        snap = session.pattern_changed(r"a\|b")
        assert "`a\\|b`" in build_session_markdown(snap, {})

    def test_html_render_has_table(self):
        session = TesterSession()
        session.subject_changed("aa")
        md = build_session_markdown(session.pattern_changed("a"), {})
        html = session_markdown_to_html(md)
        assert "<table>" in html
        assert "<h1>" in html


class TestWriteDebug:
    def test_writes_report(self, tmp_path):
        session = TesterSession()
        session.subject_changed("abc")
        path = write_session_debug(session.pattern_changed("b"), _cfg(tmp_path))
        assert path is not None
        assert path.parent == tmp_path.resolve()
        assert path.name.startswith("Regex_Tester_Debug__")
        assert "## Matches" in path.read_text(encoding="utf-8")

    def test_disabled(self, tmp_path):
        snap = TesterSession().snapshot()
        assert write_session_debug(snap, _cfg(tmp_path, enabled=False)) is None
        assert list(tmp_path.iterdir()) == []

    def test_old_reports_cleaned_after_write(self, tmp_path):
        old = tmp_path / "Regex_Tester_Debug__old.md"
        old.write_text("x", encoding="utf-8")
        _age(old, 5)
        path = write_session_debug(TesterSession().snapshot(), _cfg(tmp_path))
        assert path.exists()
        assert not old.exists()


class TestLogCleanup:
    def test_only_old_reports_removed(self, tmp_path):
        old = tmp_path / "Regex_Tester_Debug__a.md"
        fresh = tmp_path / "Regex_Tester_Debug__b.md"
        other = tmp_path / "notes.md"
        for p in (old, fresh, other):
            p.write_text("x", encoding="utf-8")
        _age(old, 48)
        _age(other, 48)

        deleted = delete_old_log_files(base_dir=tmp_path, max_age_hours=24)
        assert deleted == [old]
        assert fresh.exists() and other.exists()

    def test_dry_run_keeps_files(self, tmp_path):
        old = tmp_path / "Regex_Tester_Debug__a.md"
        old.write_text("x", encoding="utf-8")
        _age(old, 48)
        assert delete_old_log_files(base_dir=tmp_path, max_age_hours=24, dry_run=True) == [old]
        assert old.exists()

    def test_zero_age_disables(self, tmp_path):
        old = tmp_path / "Regex_Tester_Debug__a.md"
        old.write_text("x", encoding="utf-8")
        _age(old, 48)
        assert delete_old_log_files(base_dir=tmp_path, max_age_hours=0) == []

    def test_missing_dir(self, tmp_path):
        assert delete_old_log_files(base_dir=tmp_path / "nope") == []
