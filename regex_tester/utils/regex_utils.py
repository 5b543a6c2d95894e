from __future__ import annotations

import logging
import re

from .data_defs import Compiled, CompileResult, Failed, PatternSpec


# =========================
# Regex helpers (compile, flags, quoting)
# =========================
# ! All pattern/flags logic lives here (no I/O, no Anki, never touches the test string).

__all__ = [
    "QUOTE_CHARS",
    "compile_spec",
    "quote",
]

log = logging.getLogger(__name__)

# * Characters echoed with a leading backslash in the quoted pattern field
QUOTE_CHARS = "\b\t\n\f\r\"'\\"


def compile_spec(spec: PatternSpec) -> CompileResult:
    """
    * Build the effective pattern and compile it with the host engine.
    - Never raises: any engine exception becomes Failed with its message verbatim.
    """
    effective = spec.effective_pattern()
    try:
        matcher = re.compile(effective)
    except Exception as e:
        log.debug("compile failed for %r: %s", effective, e)
        return Failed(pattern=effective, error_message=str(e))
    log.debug("compiled %r (%d groups)", effective, matcher.groups)
    return Compiled(pattern=effective, matcher=matcher)


def quote(text: str) -> str:
    """
    * Escape control and quote characters with a preceding backslash.
    - Scans right to left so inserted backslashes are never rescanned.
    - Example: 'He said "hi"' -> 'He said \\"hi\\"'
    """
    buf = list(text or "")
    for i in range(len(buf) - 1, -1, -1):
        if buf[i] in QUOTE_CHARS:
            buf.insert(i, "\\")
    return "".join(buf)
