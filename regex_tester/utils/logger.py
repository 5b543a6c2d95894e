from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

import markdown

from ..log_cleanup import delete_old_log_files
from .config_utils import TS_FORMAT, now_stamp
from .data_defs import (
    Compiled,
    Failed,
    Matched,
    SessionSnapshot,
)
from .text_utils import match_summary, result_text

__all__ = [
    "build_session_markdown",
    "write_session_debug",
    "session_markdown_to_html",
]

log = logging.getLogger(__name__)


# --- Internal helpers for table-safe previews ---------------------------------

def _cell(text: Any, max_len: int = 120) -> str:
    """\
    * Make a value safe for a markdown table cell.
    - Escapes '|' and shows newlines/tabs as visible tokens; clips long text.
    """
    s = str(text)
    s = s.replace("|", "\\|")
    s = s.replace("\n", "⏎").replace("\t", "⇥")
    if len(s) > max_len:
        s = s[: max_len - 1] + "…"
    return f"`{s}`" if s else "`(empty)`"


def _format_groups(groups) -> str:
    parts: List[str] = []
    for idx, grp in enumerate(groups, start=1):
        parts.append(f"{idx}: " + ("∅" if grp is None else grp))
    return "; ".join(parts)


def build_session_markdown(
    snap: SessionSnapshot,
    cfg: Dict[str, Any] | None = None,
    *,
    max_rows: int = 200,
) -> str:
    """\
    * Render one session snapshot as a markdown debug report.
    - Settings, pattern section, result state, then a table of matches.
    """
    cfg = cfg or {}
    debug_cfg = cfg.get("debug") or {}
    ts = now_stamp(debug_cfg.get("ts_format") or TS_FORMAT)

    lines: List[str] = []
    lines.append(f"# Regex Tester Debug — {ts}")
    lines.append("")

    lines.append("## Settings")
    lines.append(f"- default_flags: `{cfg.get('default_flags', '')}`")
    lines.append(f"- absent_group_marker: `{cfg.get('absent_group_marker')}`")
    lines.append(f"- max_matches: {cfg.get('max_matches', 0)}")
    lines.append("")

    lines.append("## Pattern")
    spec = snap.spec
    if spec is None:
        lines.append("_No pattern entered yet._")
    else:
        lines.append(f"- source: {_cell(spec.source)}")
        lines.append(f"- flags: {_cell(spec.flags.strip())}")
        if snap.compile_result is not None:
            lines.append(f"- effective: {_cell(snap.compile_result.pattern)}")
        lines.append(f"- quoted: {_cell(snap.quoted)}")
    lines.append("")

    lines.append("## Result")
    lines.append(f"- state: `{snap.state.value}`")
    lines.append(f"- subject length: {len(snap.subject)}")
    result = snap.compile_result
    if isinstance(result, Failed):
        lines.append(f"- compile error: {_cell(result.error_message, max_len=400)}")
    elif isinstance(result, Compiled):
        lines.append(f"- groups: {result.matcher.groups}")
    if snap.report is not None:
        lines.append(f"- summary: {match_summary(snap.report)}")
        if not isinstance(snap.report, Matched):
            lines.append(f"- message: {_cell(result_text(snap.report, snap.subject), max_len=400)}")
    lines.append("")

    report = snap.report
    if isinstance(report, Matched):
        lines.append("## Matches")
        lines.append("")
        lines.append("| # | span | text | groups |")
        lines.append("|---|------|------|--------|")
        for i, rec in enumerate(report.matches[:max_rows], start=1):
            groups = _format_groups(rec.groups)
            lines.append(
                f"| {i} | [{rec.start}, {rec.end}) | {_cell(rec.text)} | "
                f"{_cell(groups) if groups else ''} |"
            )
        hidden = len(report.matches) - max_rows
        if hidden > 0:
            lines.append("")
            lines.append(f"_... {hidden} more match(es) not shown._")

    return "\n".join(lines) + "\n"


def session_markdown_to_html(md_text: str) -> str:
    """* Render a debug report for the in-dialog preview."""
    return markdown.markdown(md_text or "", extensions=["tables", "fenced_code"])


def write_session_debug(
    snap: SessionSnapshot,
    cfg: Dict[str, Any] | None = None,
) -> Optional[Path]:
    """\
    * Emit a markdown debug file for the current session.
    - Returns the Path to the written file, or None if disabled or on error.
    """
    cfg = cfg or {}
    debug_cfg = cfg.get("debug") or {}
    if not bool(debug_cfg.get("enabled", True)):
        return None

    try:
        ts = now_stamp(debug_cfg.get("ts_format") or TS_FORMAT)
        out_dir = Path(debug_cfg.get("log_dir") or ".").expanduser()
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / f"Regex_Tester_Debug__{ts}.md"
        out_path.write_text(build_session_markdown(snap, cfg), encoding="utf-8")
    except OSError as e:
        log.error("failed to write debug markdown: %s", e)
        return None

    # * Clean up old reports after writing a new one
    try:
        delete_old_log_files(
            base_dir=out_dir,
            max_age_hours=int(debug_cfg.get("max_age_hours", 24) or 0),
            dry_run=False,
        )
    except Exception as e:
        log.warning("report cleanup failed: %s", e)

    log.info("wrote regex tester debug report: %s", out_path)
    return out_path
