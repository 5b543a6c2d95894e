import re

from regex_tester.utils.data_defs import NO_MATCHES, MatchFailed, Matched, NoMatches
from regex_tester.utils.engine import iter_matches, run_matches


def _spans(report):
    return [(m.start, m.end) for m in report.matches]


class TestScan:
    def test_empty_pattern_advances_past_each_empty_match(self):
        report = run_matches(re.compile(""), "ab")
        assert isinstance(report, Matched)
        assert _spans(report) == [(0, 0), (1, 1), (2, 2)]

    def test_empty_pattern_on_empty_subject(self):
        report = run_matches(re.compile(""), "")
        assert _spans(report) == [(0, 0)]

    def test_star_mixes_empty_and_non_empty(self):
        report = run_matches(re.compile("a*"), "baa")
        assert _spans(report) == [(0, 0), (1, 3), (3, 3)]

    def test_non_overlapping(self):
        report = run_matches(re.compile("aa"), "aaaaa")
        assert _spans(report) == [(0, 2), (2, 4)]

    def test_caret_is_not_anchored_at_search_position(self):
        report = run_matches(re.compile(r"^\w+"), "one two")
        assert [m.text for m in report.matches] == ["one"]

    def test_multiline_caret(self):
        report = run_matches(re.compile(r"(?m)^\w+"), "one\ntwo")
        assert [m.text for m in report.matches] == ["one", "two"]

    def test_lookbehind_sees_earlier_text(self):
        report = run_matches(re.compile("(?<=a)b"), "abab")
        assert _spans(report) == [(1, 2), (3, 4)]

    def test_iter_matches_yields_engine_matches(self):
        found = [m.group(0) for m in iter_matches(re.compile(r"\d+"), "a1b22c333")]
        assert found == ["1", "22", "333"]


class TestGroups:
    def test_optional_group_absent(self):
        report = run_matches(re.compile("a(b)(c)?"), "ab ac")
        assert len(report.matches) == 1
        rec = report.matches[0]
        assert (rec.start, rec.end, rec.text) == (0, 2, "ab")
        assert rec.groups == ("b", None)

    def test_scan_resumes_after_previous_match(self):
        report = run_matches(re.compile("a(b)?(c)"), "ac abc")
        first, second = report.matches
        assert (first.start, first.end, first.text) == (0, 2, "ac")
        assert first.groups == (None, "c")
        assert (second.start, second.end, second.text) == (3, 6, "abc")
        assert second.groups == ("b", "c")

    def test_empty_capture_differs_from_absent(self):
        rec = run_matches(re.compile("a(x*)(y)?"), "a").matches[0]
        assert rec.groups == ("", None)

    def test_no_groups(self):
        rec = run_matches(re.compile("a"), "a").matches[0]
        assert rec.groups == ()


class TestReports:
    def test_no_matches_sentinel(self):
        report = run_matches(re.compile("xyz"), "no match here")
        assert report is NO_MATCHES
        assert isinstance(report, NoMatches)
        assert not isinstance(report, Matched)

    def test_max_matches_truncates(self):
        report = run_matches(re.compile("a"), "aaaa", max_matches=2)
        assert _spans(report) == [(0, 1), (1, 2)]
        assert report.truncated is True

    def test_max_matches_not_reached(self):
        report = run_matches(re.compile("a"), "aa", max_matches=5)
        assert len(report.matches) == 2
        assert report.truncated is False

    def test_engine_failure_becomes_match_failed(self):
        class Exploding:
            pattern = "boom"

            def search(self, subject, pos=0):
                raise RuntimeError("matcher state error")

        report = run_matches(Exploding(), "abc")
        assert report == MatchFailed(error_message="matcher state error")

    def test_subject_is_not_modified(self):
        subject = "abc abc"
        run_matches(re.compile("b"), subject)
        assert subject == "abc abc"
