from __future__ import annotations

from .data_defs import (
    NO_MATCHES,
    Compiled,
    CompileResult,
    Failed,
    MatchFailed,
    MatchRecord,
    MatchReport,
    Matched,
    NoMatches,
    PatternInvalid,
    PatternSpec,
    SessionSnapshot,
    SessionState,
)
from .engine import iter_matches, run_matches
from .regex_utils import compile_spec, quote
from .session import TesterSession

__all__ = [
    "NO_MATCHES",
    "Compiled",
    "CompileResult",
    "Failed",
    "MatchFailed",
    "MatchRecord",
    "MatchReport",
    "Matched",
    "NoMatches",
    "PatternInvalid",
    "PatternSpec",
    "SessionSnapshot",
    "SessionState",
    "TesterSession",
    "compile_spec",
    "iter_matches",
    "quote",
    "run_matches",
]
