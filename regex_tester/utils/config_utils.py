from __future__ import annotations

# * Standard library
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, Optional, TypedDict, Union
import json
import logging
import os

log = logging.getLogger(__name__)

__all__ = [
    "TS_FORMAT",
    "DEFAULT_LOG_DIR",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_CONFIG",
    "TesterConfig",
    "DebugConfig",
    "now_stamp",
    "get_tester_config",
    "normalize_config_snapshot",
    "load_tester_config",
]

TS_FORMAT: str = "%H-%M_%m-%d"
DEFAULT_LOG_DIR: Path = Path.home() / "Desktop" / "anki logs"
DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.json"


class DebugConfig(TypedDict, total=False):
    enabled: bool
    log_dir: str
    ts_format: str
    max_age_hours: int


class TesterConfig(TypedDict, total=False):
    default_flags: str
    absent_group_marker: Optional[str]
    max_matches: int
    highlight_color: str
    font_family: str
    font_size: int
    debug: DebugConfig


DEFAULT_CONFIG: TesterConfig = {
    "default_flags": "",
    "absent_group_marker": None,
    "max_matches": 0,
    "highlight_color": "#ffe066",
    "font_family": "monospace",
    "font_size": 14,
    "debug": {
        "enabled": True,
        "log_dir": str(DEFAULT_LOG_DIR),
        "ts_format": TS_FORMAT,
        "max_age_hours": 24,
    },
}


def now_stamp(ts_format: str = TS_FORMAT) -> str:
    return datetime.now().strftime(ts_format)


def _coerce_int(val, fallback: int) -> int:
    try:
        return int(val)
    except Exception:
        return fallback


def _norm_path(p: str | None) -> Path | None:
    if not p:
        return None
    try:
        return Path(os.path.expanduser(p)).resolve()
    except Exception:
        return None


def get_tester_config(snapshot: Dict[str, Any]) -> Dict[str, Any]:
    """Return the tester config dict regardless of whether the snapshot is:
    - a full config dict (contains 'regex_tester_config'), or
    - already the tester config dict itself.
    """
    if not isinstance(snapshot, dict):
        return {}
    if isinstance(snapshot.get("regex_tester_config"), dict):
        return dict(snapshot.get("regex_tester_config") or {})
    return dict(snapshot)


def normalize_config_snapshot(snapshot: Dict[str, Any]) -> Dict[str, Any]:
    """Accept either the tester config alone, or a full dict with
    {global_config, regex_tester_config}. global_config overrides tester keys.
    """
    if not isinstance(snapshot, dict):
        return {}
    if "regex_tester_config" in snapshot:
        base = get_tester_config(snapshot)
        base.update(dict(snapshot.get("global_config") or {}))  # global overrides
        return base
    return dict(snapshot)


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        log.warning("config file not found: %s; using defaults", path)
        return {}
    except (OSError, ValueError) as e:
        log.warning("could not read config %s (%s); using defaults", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def load_tester_config(
    source: Union[str, Path, Dict[str, Any], None] = None,
) -> TesterConfig:
    """
    * Load + normalize the tester config; apply safe fallbacks.
    - source: a path to a JSON file, an already-loaded dict, or None for config.json.
    - Unknown keys are dropped; bad values fall back to DEFAULT_CONFIG.
    """
    if isinstance(source, dict):
        raw = normalize_config_snapshot(source)
    else:
        raw = normalize_config_snapshot(_read_json(Path(source) if source else DEFAULT_CONFIG_PATH))

    d_default = DEFAULT_CONFIG["debug"]
    d_raw = raw.get("debug") if isinstance(raw.get("debug"), dict) else {}
    # global_config carries log_dir / ts_format flat; they win over the debug block
    for key in ("log_dir", "ts_format"):
        if raw.get(key):
            d_raw = dict(d_raw, **{key: raw[key]})

    log_dir = _norm_path(d_raw.get("log_dir")) or Path(d_default["log_dir"])
    debug: DebugConfig = {
        "enabled": bool(d_raw.get("enabled", d_default["enabled"])),
        "log_dir": str(log_dir),
        "ts_format": str(d_raw.get("ts_format") or d_default["ts_format"]),
        "max_age_hours": max(0, _coerce_int(d_raw.get("max_age_hours"), d_default["max_age_hours"])),
    }

    marker = raw.get("absent_group_marker", DEFAULT_CONFIG["absent_group_marker"])
    if marker is not None and not isinstance(marker, str):
        marker = str(marker)

    font_size = _coerce_int(raw.get("font_size"), DEFAULT_CONFIG["font_size"])
    if font_size <= 0:
        font_size = DEFAULT_CONFIG["font_size"]

    cfg: TesterConfig = {
        "default_flags": str(raw.get("default_flags") or "").strip(),
        "absent_group_marker": marker,
        "max_matches": max(0, _coerce_int(raw.get("max_matches"), DEFAULT_CONFIG["max_matches"])),
        "highlight_color": str(raw.get("highlight_color") or DEFAULT_CONFIG["highlight_color"]),
        "font_family": str(raw.get("font_family") or DEFAULT_CONFIG["font_family"]),
        "font_size": font_size,
        "debug": debug,
    }
    return cfg
