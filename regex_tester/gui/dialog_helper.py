from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
import json

from ..utils.config_utils import DEFAULT_CONFIG
from ..utils.data_defs import SessionSnapshot, SessionState
from ..utils.text_utils import (
    capture_listing,
    highlight_spans,
    match_summary,
    result_text,
)


@dataclass(frozen=True)
class DialogView:
    """Everything the dialog paints for one snapshot. Built fresh every pass."""
    quoted: str
    result: str
    spans: Tuple[Tuple[int, int], ...]
    captures: str
    status: str


def build_dialog_view(snap: SessionSnapshot, cfg: Optional[Dict[str, Any]] = None) -> DialogView:
    """
    Turn a session snapshot into the texts + highlight spans for the dialog.

    Nothing compiled yet -> empty views, so an untouched dialog stays blank.
    """
    cfg = cfg or {}
    if snap.state is SessionState.IDLE or snap.report is None:
        return DialogView(quoted=snap.quoted, result="", spans=(), captures="", status="")

    return DialogView(
        quoted=snap.quoted,
        result=result_text(snap.report, snap.subject),
        spans=highlight_spans(snap.report),
        captures=capture_listing(snap.report, cfg.get("absent_group_marker")),
        status=match_summary(snap.report),
    )


def clamp_spans(spans: Tuple[Tuple[int, int], ...], length: int) -> Tuple[Tuple[int, int], ...]:
    """
    Keep only non-empty spans inside [0, length].

    Empty matches have nothing to paint; the text widget rejects out-of-range cursors.
    """
    out = []
    for start, end in spans:
        start = max(0, min(start, length))
        end = max(start, min(end, length))
        if end > start:
            out.append((start, end))
    return tuple(out)


def to_qt_positions(text: str, spans: Tuple[Tuple[int, int], ...]) -> Tuple[Tuple[int, int], ...]:
    """
    Convert code-point spans into QTextDocument positions (UTF-16 units).

    Characters outside the BMP count twice on the Qt side.
    """
    if all(ord(ch) <= 0xFFFF for ch in text):
        return spans

    def units(i: int) -> int:
        return len(text[:i].encode("utf-16-le")) // 2

    return tuple((units(s), units(e)) for s, e in spans)


# ---------------------------------------------------------------------------
# * Settings editor helpers (shared by assets/config_ui.py)
# ---------------------------------------------------------------------------

# Wrapper keys accepted by config_utils.normalize_config_snapshot
_WRAPPER_KEYS = {"regex_tester_config", "global_config"}


def parse_config_text(raw: str) -> Tuple[Optional[Dict[str, Any]], List[str]]:
    """
    Parse the JSON typed into the settings editor.

    Returns (config, notes). config is None when the text cannot be saved;
    notes then hold the reason. Unknown top-level keys are saved but noted.
    """
    try:
        parsed = json.loads(raw or "")
    except json.JSONDecodeError as exc:
        return None, [f"JSON error: {exc}"]
    if not isinstance(parsed, dict):
        return None, ["JSON error: the config must be an object."]

    known = set(DEFAULT_CONFIG) | _WRAPPER_KEYS
    notes = [f"Unknown key ignored: {key}" for key in parsed if key not in known]
    return parsed, notes


class DialogCache:
    """
    Holds the single modeless tester dialog.

    invalidate() closes and drops it, so the next get() builds a fresh
    dialog with whatever config is stored at that point.
    """

    def __init__(self, factory: Callable[[], Any]) -> None:
        self._factory = factory
        self._dialog: Any = None

    @property
    def dialog(self) -> Any:
        return self._dialog

    def get(self) -> Any:
        if self._dialog is None:
            self._dialog = self._factory()
        return self._dialog

    def invalidate(self) -> None:
        dlg, self._dialog = self._dialog, None
        if dlg is not None:
            dlg.close()
