"""
log_cleanup.py

Delete Regex Tester debug reports older than a configurable age.
Called after each report is written; can also be run directly.
"""

from __future__ import annotations

from pathlib import Path
from datetime import datetime, timedelta
from typing import Iterable, List, Optional
import logging

log = logging.getLogger(__name__)

# ==========================
# Config / defaults
# ==========================

LOGS_ROOT = Path.home() / "Desktop" / "anki logs"
MAX_AGE_HOURS = 24
REPORT_GLOB = "Regex_Tester_Debug__*.md"


# ==========================
# Core helper functions
# ==========================

def _now() -> datetime:
    """Return current time as a naive datetime (local time)."""
    return datetime.now()


def _iter_reports(root: Path, glob: str) -> Iterable[Path]:
    """Yield report files directly under `root` matching `glob`."""
    if not root.exists():
        return
    for path in root.glob(glob):
        if path.is_file():
            yield path


def _is_older_than(path: Path, cutoff: datetime) -> bool:
    try:
        mtime = datetime.fromtimestamp(path.stat().st_mtime)
    except OSError:
        # ? If we can't stat it, just skip it
        return False
    return mtime < cutoff


def delete_old_log_files(
    base_dir: Optional[Path | str] = None,
    max_age_hours: Optional[int] = None,
    dry_run: bool = False,
    glob: str = REPORT_GLOB,
) -> List[Path]:
    """
    Delete report files older than `max_age_hours` under `base_dir`.

    Parameters
    ----------
    base_dir:
        Directory to clean. If None, uses LOGS_ROOT.
    max_age_hours:
        Age threshold in hours. If None, uses MAX_AGE_HOURS. 0 disables cleanup.
    dry_run:
        If True, does not delete anything; just returns what *would* be deleted.
    glob:
        File name pattern; only our own reports are ever touched.

    Returns
    -------
    deleted_files:
        Paths actually deleted (or that would be deleted if dry_run=True).
    """
    root = Path(base_dir) if base_dir is not None else LOGS_ROOT
    age_hours = max_age_hours if max_age_hours is not None else MAX_AGE_HOURS

    deleted: List[Path] = []
    if age_hours <= 0 or not root.exists():
        return deleted

    cutoff = _now() - timedelta(hours=age_hours)

    for file_path in _iter_reports(root, glob):
        if not _is_older_than(file_path, cutoff):
            continue
        if not dry_run:
            try:
                file_path.unlink()
            except OSError as e:
                log.warning("could not delete old report %s: %s", file_path, e)
                continue
        deleted.append(file_path)

    return deleted


if __name__ == "__main__":
    removed = delete_old_log_files(dry_run=False)
    if not removed:
        print("No files deleted (none older than threshold or directory empty).")
    else:
        print(f"Deleted {len(removed)} file(s):")
        for p in removed:
            print(f"  - {p}")
