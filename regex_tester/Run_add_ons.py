# pyright: reportMissingImports=false
# mypy: disable_error_code=import

import traceback
from aqt import mw
from aqt.qt import QAction, QMenu
from aqt.utils import showText

from .assets.config_manager import ConfigManager
from .gui.dialog_helper import DialogCache

MENU_TITLE = "Regex Tester"


def _addon_name() -> str:
    return mw.addonManager.addonFromModule(__name__)


def _build_tester():
    # ^ Lazy import keeps startup fast and avoids building Qt widgets before mw exists
    from .gui.ui_dialog import RegexTesterDialog

    cfg = ConfigManager(_addon_name(), mw).tester_config()
    return RegexTesterDialog(mw, cfg)


# Keep one modeless dialog; dropped whenever the settings are saved
_TESTER_CACHE = DialogCache(_build_tester)


def open_regex_tester() -> None:
    """* Open (or raise) the Regex Tester dialog."""
    try:
        dlg = _TESTER_CACHE.get()
        dlg.show()
        dlg.raise_()
        dlg.activateWindow()
    except Exception:
        err = traceback.format_exc()
        showText(f"[{MENU_TITLE}] Failed to open the tester:\n\n{err}", title=f"{MENU_TITLE} Error")


def open_settings() -> None:
    """Open the config dialog; a save rebuilds the tester with the new config."""
    try:
        from .assets.config_ui import ConfigDialog

        dlg = ConfigDialog(_addon_name(), ConfigManager)
        dlg.exec()
        if dlg.saved:
            _TESTER_CACHE.invalidate()
    except Exception:
        err = traceback.format_exc()
        showText(f"[{MENU_TITLE}] Failed to open settings:\n\n{err}", title=f"{MENU_TITLE} Error")


def register_menu_actions() -> None:
    """
    & Add a 'Regex Tester' submenu under Tools with the tester and its settings.
    """
    try:
        menu = QMenu(MENU_TITLE, mw)
        entries = (
            ("Open Regex Tester", open_regex_tester, "Ctrl+Alt+R"),
            ("Regex Tester Settings", open_settings, None),
        )
        for name, callback, shortcut in entries:
            action = QAction(name, mw)
            if shortcut:
                action.setShortcut(shortcut)
            action.triggered.connect(callback)
            menu.addAction(action)
        mw.form.menuTools.addMenu(menu)
    except Exception:
        err = traceback.format_exc()
        showText(f"[{MENU_TITLE}] Failed to register menu:\n\n{err}", title=f"{MENU_TITLE} Error")
