from __future__ import annotations

# =========================
# Text helpers (result view, highlights, capture listing)
# =========================
# ! Everything the UI renders from a MatchReport is built here.

from typing import List, Optional, Tuple

from .data_defs import (
    MatchFailed,
    MatchRecord,
    MatchReport,
    Matched,
    NoMatches,
    PatternInvalid,
)

NO_MATCHES_TEXT = "No matches."

__all__ = [
    "NO_MATCHES_TEXT",
    "result_text",
    "highlight_spans",
    "capture_lines",
    "capture_listing",
    "match_summary",
]


def result_text(report: Optional[MatchReport], subject: str) -> str:
    """
    * Text shown in the match-result view.
    - Matched -> the subject (highlights go on top of it)
    - NoMatches -> "No matches."
    - MatchFailed / PatternInvalid -> the error message verbatim
    """
    if isinstance(report, Matched):
        return subject or ""
    if isinstance(report, NoMatches):
        return NO_MATCHES_TEXT
    if isinstance(report, (MatchFailed, PatternInvalid)):
        return report.error_message
    return ""


def highlight_spans(report: Optional[MatchReport]) -> Tuple[Tuple[int, int], ...]:
    """* One half-open (start, end) span per match; empty for any other report."""
    if not isinstance(report, Matched):
        return ()
    return tuple((m.start, m.end) for m in report.matches)


def capture_lines(record: MatchRecord, absent_marker: Optional[str] = None) -> List[str]:
    """
    * Whole-match text, then "<index>. <text>" per participating group.
    - Groups that did not participate are skipped unless absent_marker is set.
    """
    lines = [record.text]
    for idx, grp in enumerate(record.groups, start=1):
        if grp is None:
            if absent_marker is None:
                continue
            lines.append(f"{idx}. {absent_marker}")
        else:
            lines.append(f"{idx}. {grp}")
    return lines


def capture_listing(report: Optional[MatchReport], absent_marker: Optional[str] = None) -> str:
    """* Blank line between matches; the whole listing is stripped."""
    if not isinstance(report, Matched):
        return ""
    blocks = ["\n".join(capture_lines(m, absent_marker)) for m in report.matches]
    return "\n\n".join(blocks).strip()


def match_summary(report: Optional[MatchReport]) -> str:
    """* Short status line for the dialog footer."""
    if isinstance(report, Matched):
        n = len(report.matches)
        text = f"{n} match" + ("" if n == 1 else "es")
        if report.truncated:
            text += " (limit reached)"
        return text
    if isinstance(report, NoMatches):
        return NO_MATCHES_TEXT
    if isinstance(report, (MatchFailed, PatternInvalid)):
        return "Error"
    return ""
