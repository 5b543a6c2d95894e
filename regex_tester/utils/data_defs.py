# data_defs.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Pattern, Tuple, Union


# ? -----------------------------------------------------------------------------------
# ? Pattern input + compile results ---------------------------------------------------
@dataclass(frozen=True)
class PatternSpec:
    source: str
    flags: str = ""

    def effective_pattern(self) -> str:
        """
        * Prefix the inline-flags group onto the raw source.
        - Blank flags leave the source untouched: ("ab", "i") -> "(?i)ab".
        """
        flags = (self.flags or "").strip()
        if flags:
            return "(?" + flags + ")" + self.source
        return self.source


@dataclass(frozen=True)
class Compiled:
    pattern: str
    matcher: Pattern[str] = field(compare=False)


@dataclass(frozen=True)
class Failed:
    pattern: str
    error_message: str


CompileResult = Union[Compiled, Failed]


# ? -----------------------------------------------------------------------------------
# ? Match results ---------------------------------------------------------------------
@dataclass(frozen=True)
class MatchRecord:
    """One match: half-open span, whole-match text, and groups 1..n (None = absent)."""
    start: int
    end: int
    text: str
    groups: Tuple[Optional[str], ...] = ()


@dataclass(frozen=True)
class Matched:
    matches: Tuple[MatchRecord, ...]
    truncated: bool = False


class NoMatches:
    """Sentinel report; use the module-level NO_MATCHES instance."""

    _instance: Optional["NoMatches"] = None

    def __new__(cls) -> "NoMatches":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_MATCHES"


NO_MATCHES = NoMatches()


@dataclass(frozen=True)
class MatchFailed:
    error_message: str


@dataclass(frozen=True)
class PatternInvalid:
    error_message: str


MatchReport = Union[Matched, NoMatches, MatchFailed, PatternInvalid]


# ? -----------------------------------------------------------------------------------
# ? Session state ---------------------------------------------------------------------
class SessionState(Enum):
    IDLE = "idle"
    COMPILING = "compiling"
    COMPILED = "compiled"
    FAILED = "failed"
    MATCHING = "matching"
    MATCHED = "matched"
    NO_MATCHES = "no_matches"
    MATCH_FAILED = "match_failed"


@dataclass(frozen=True)
class SessionSnapshot:
    state: SessionState
    spec: Optional[PatternSpec]
    subject: str
    compile_result: Optional[CompileResult]
    report: Optional[MatchReport]
    quoted: str = ""
