# pyright: reportMissingImports=false
# mypy: disable_error_code=import

from __future__ import annotations

# * Anki/Qt – optional at import time so the core stays importable in tests
try:  # pragma: no cover
    from aqt import gui_hooks, mw  # type: ignore
except Exception:  # pragma: no cover
    gui_hooks = None
    mw = None  # Allow import outside Anki (e.g., tests)

from .utils import (
    PatternSpec,
    TesterSession,
    compile_spec,
    quote,
    run_matches,
)

__all__ = [
    "PatternSpec",
    "TesterSession",
    "compile_spec",
    "quote",
    "run_matches",
]

# Register the Tools menu entries once the main window exists
if gui_hooks is not None and mw is not None:  # pragma: no cover
    from .Run_add_ons import register_menu_actions

    gui_hooks.main_window_did_init.append(register_menu_actions)
