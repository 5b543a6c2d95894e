from __future__ import annotations

from typing import Callable, List, Optional
import logging

from .data_defs import (
    Compiled,
    CompileResult,
    Failed,
    MatchFailed,
    MatchReport,
    Matched,
    PatternInvalid,
    PatternSpec,
    SessionSnapshot,
    SessionState,
)
from .engine import run_matches
from .regex_utils import compile_spec, quote

__all__ = ["Listener", "TesterSession"]

log = logging.getLogger(__name__)

Listener = Callable[[SessionSnapshot], None]


def _state_for_report(report: MatchReport) -> SessionState:
    if isinstance(report, Matched):
        return SessionState.MATCHED
    if isinstance(report, MatchFailed):
        return SessionState.MATCH_FAILED
    if isinstance(report, PatternInvalid):
        return SessionState.FAILED
    return SessionState.NO_MATCHES


class TesterSession:
    """
    Owns the current compile result, match report and quoted echo.

    Edits arrive as pattern_changed / subject_changed. Each call runs one full
    pass (compile -> match, or match only) synchronously, swaps in fresh result
    objects, then notifies listeners with a SessionSnapshot.
    """

    # ! Keep pytest from collecting this as a test class
    __test__ = False

    def __init__(self, *, max_matches: int = 0) -> None:
        self.max_matches = max_matches
        self._listeners: List[Listener] = []
        self._spec: Optional[PatternSpec] = None
        self._subject: str = ""
        self._compile_result: Optional[CompileResult] = None
        self._report: Optional[MatchReport] = None
        self._quoted: str = ""
        self._state = SessionState.IDLE

    # --- Listeners ---------------------------------------------------------

    def add_listener(self, callback: Listener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        try:
            self._listeners.remove(callback)
        except ValueError:
            pass

    def _notify(self) -> None:
        snap = self.snapshot()
        for cb in list(self._listeners):
            try:
                cb(snap)
            except Exception:
                # ! A broken listener must not stop the session or other listeners
                log.exception("session listener %r failed", cb)

    # --- Read side ---------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def compile_result(self) -> Optional[CompileResult]:
        return self._compile_result

    @property
    def report(self) -> Optional[MatchReport]:
        return self._report

    @property
    def quoted(self) -> str:
        return self._quoted

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self._state,
            spec=self._spec,
            subject=self._subject,
            compile_result=self._compile_result,
            report=self._report,
            quoted=self._quoted,
        )

    # --- Events ------------------------------------------------------------

    def pattern_changed(self, source: str, flags: str = "") -> SessionSnapshot:
        """* Recompile, refresh the echo, then rematch against the current subject."""
        spec = PatternSpec(source=source or "", flags=flags or "")
        self._state = SessionState.COMPILING
        result = compile_spec(spec)

        self._spec = spec
        self._compile_result = result
        self._quoted = quote(result.pattern)

        if isinstance(result, Failed):
            self._report = PatternInvalid(error_message=result.error_message)
            self._state = SessionState.FAILED
        else:
            self._state = SessionState.COMPILED
            self._match(result)

        self._notify()
        return self.snapshot()

    def subject_changed(self, text: str) -> SessionSnapshot:
        """
        * Rematch with the last successful compile.
        - Failed pattern: the engine is not invoked; the compile error stays displayed.
        - Nothing compiled yet: only the subject is stored.
        """
        self._subject = text or ""
        result = self._compile_result
        if isinstance(result, Compiled):
            self._match(result)
        self._notify()
        return self.snapshot()

    def refresh(self) -> SessionSnapshot:
        """* Re-run the full pass from the stored inputs."""
        if self._spec is None:
            self._notify()
            return self.snapshot()
        return self.pattern_changed(self._spec.source, self._spec.flags)

    # --- Internals ---------------------------------------------------------

    def _match(self, result: Compiled) -> None:
        self._state = SessionState.MATCHING
        report = run_matches(result.matcher, self._subject, max_matches=self.max_matches)
        self._report = report
        self._state = _state_for_report(report)
