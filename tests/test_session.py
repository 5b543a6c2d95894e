import pytest

from regex_tester.utils import session as session_mod
from regex_tester.utils.data_defs import (
    NO_MATCHES,
    Compiled,
    Failed,
    Matched,
    PatternInvalid,
    SessionState,
)
from regex_tester.utils.session import TesterSession


@pytest.fixture
def session():
    return TesterSession()


@pytest.fixture
def engine_calls(monkeypatch):
    calls = []
    real = session_mod.run_matches

    def spy(matcher, subject, **kwargs):
        calls.append((matcher.pattern, subject))
        return real(matcher, subject, **kwargs)

    monkeypatch.setattr(session_mod, "run_matches", spy)
    return calls


class TestLifecycle:
    def test_starts_idle(self, session):
        snap = session.snapshot()
        assert snap.state is SessionState.IDLE
        assert snap.compile_result is None
        assert snap.report is None

    def test_subject_before_any_pattern_only_stores_text(self, session, engine_calls):
        snap = session.subject_changed("abc")
        assert snap.state is SessionState.IDLE
        assert snap.subject == "abc"
        assert engine_calls == []

    def test_pattern_then_subject(self, session):
        session.pattern_changed("a(b)")
        snap = session.subject_changed("ab ab")
        assert snap.state is SessionState.MATCHED
        assert isinstance(snap.report, Matched)
        assert [m.groups for m in snap.report.matches] == [("b",), ("b",)]

    def test_pattern_edit_rematches_current_subject(self, session):
        session.subject_changed("cat CAT")
        snap = session.pattern_changed("cat", "i")
        assert len(snap.report.matches) == 2
        assert snap.compile_result.pattern == "(?i)cat"

    def test_no_matches_state(self, session):
        session.subject_changed("no match here")
        snap = session.pattern_changed("xyz")
        assert snap.state is SessionState.NO_MATCHES
        assert snap.report is NO_MATCHES

    def test_refresh_recomputes(self, session):
        session.subject_changed("aaa")
        session.pattern_changed("a")
        snap = session.refresh()
        assert len(snap.report.matches) == 3

    def test_refresh_while_idle(self, session):
        assert session.refresh().state is SessionState.IDLE


class TestInvalidPattern:
    def test_compile_error_is_reported(self, session):
        snap = session.pattern_changed("(")
        assert snap.state is SessionState.FAILED
        assert isinstance(snap.compile_result, Failed)
        assert snap.report == PatternInvalid(snap.compile_result.error_message)

    def test_subject_edit_does_not_run_engine(self, session, engine_calls):
        session.pattern_changed("(")
        snap = session.subject_changed("anything")
        assert engine_calls == []
        assert snap.state is SessionState.FAILED
        assert isinstance(snap.report, PatternInvalid)

    def test_fixing_pattern_uses_latest_subject(self, session, engine_calls):
        session.pattern_changed("(a")
        session.subject_changed("xa")
        snap = session.pattern_changed("(a)")
        assert engine_calls == [("(a)", "xa")]
        assert snap.state is SessionState.MATCHED

    def test_stale_matcher_is_never_reused(self, session):
        session.pattern_changed("a")
        session.pattern_changed("[")
        assert not isinstance(session.compile_result, Compiled)
        snap = session.subject_changed("aaa")
        assert isinstance(snap.report, PatternInvalid)


class TestQuotedEcho:
    def test_echo_uses_effective_pattern(self, session):
        snap = session.pattern_changed('say "x"', "i")
        assert snap.quoted == '(?i)say \\"x\\"'

    def test_echo_refreshed_for_invalid_pattern(self, session):
        snap = session.pattern_changed('"(')
        assert snap.quoted == '\\"('


class TestListeners:
    def test_listener_receives_each_pass(self, session):
        seen = []
        session.add_listener(seen.append)
        session.pattern_changed("a")
        session.subject_changed("a")
        assert [s.state for s in seen] == [SessionState.NO_MATCHES, SessionState.MATCHED]

    def test_broken_listener_does_not_stop_others(self, session):
        seen = []

        def broken(_snap):
            raise ValueError("listener bug")

        session.add_listener(broken)
        session.add_listener(seen.append)
        session.pattern_changed("a")
        assert len(seen) == 1

    def test_remove_listener(self, session):
        seen = []
        session.add_listener(seen.append)
        session.remove_listener(seen.append)
        session.remove_listener(seen.append)
        session.pattern_changed("a")
        assert seen == []

    def test_snapshots_are_replaced_not_mutated(self, session):
        session.subject_changed("ab")
        first = session.pattern_changed("a")
        second = session.pattern_changed("b")
        assert first.report.matches[0].text == "a"
        assert second.report.matches[0].text == "b"


def test_max_matches_passed_to_engine():
    session = TesterSession(max_matches=1)
    session.subject_changed("aaa")
    snap = session.pattern_changed("a")
    assert len(snap.report.matches) == 1
    assert snap.report.truncated is True


def test_session_class_is_not_collected_by_pytest():
    assert TesterSession.__test__ is False
