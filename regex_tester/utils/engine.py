from __future__ import annotations

from typing import Iterator, List
import logging
import re

from .data_defs import (
    NO_MATCHES,
    MatchFailed,
    MatchRecord,
    MatchReport,
    Matched,
)

__all__ = ["iter_matches", "run_matches"]

log = logging.getLogger(__name__)


def iter_matches(matcher: re.Pattern, subject: str) -> Iterator[re.Match]:
    """
    * Yield successive non-overlapping matches, left to right.
    - Non-empty match [s,e): next search starts at e.
    - Empty match [s,s): next search starts at s+1, so the loop always moves forward.
    - Searching with `pos` (not slicing) keeps ^, \\b and look-behind aware of prior text.
    """
    pos = 0
    end_of_input = len(subject)
    while pos <= end_of_input:
        m = matcher.search(subject, pos)
        if m is None:
            break
        yield m
        if m.end() > m.start():
            pos = m.end()
        else:
            pos = m.end() + 1


def _to_record(m: re.Match) -> MatchRecord:
    # ! groups() keeps None for groups that did not participate
    return MatchRecord(
        start=m.start(),
        end=m.end(),
        text=m.group(0),
        groups=tuple(m.groups()),
    )


def run_matches(
    matcher: re.Pattern,
    subject: str,
    *,
    max_matches: int = 0,
) -> MatchReport:
    """\
    * Run the compiled matcher over the subject and build a MatchReport.
    - Zero matches -> NO_MATCHES sentinel (never an empty Matched).
    - Any failure while iterating -> MatchFailed with the error text.
    - max_matches > 0 caps the scan; the report is then flagged as truncated.
    """
    subject = subject or ""
    records: List[MatchRecord] = []
    truncated = False
    try:
        for m in iter_matches(matcher, subject):
            if max_matches > 0 and len(records) >= max_matches:
                truncated = True
                break
            records.append(_to_record(m))
    except Exception as e:
        log.error("match scan failed for %r: %s", matcher.pattern, e)
        return MatchFailed(error_message=str(e) or type(e).__name__)

    if not records:
        return NO_MATCHES
    log.debug("%d match(es) for %r", len(records), matcher.pattern)
    return Matched(matches=tuple(records), truncated=truncated)
