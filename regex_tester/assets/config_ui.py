# pyright: reportMissingImports=false
# mypy: disable_error_code=import

import json
from pathlib import Path
from typing import Any, Dict

from aqt.qt import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QTextBrowser,
    QSplitter, Qt, QWidget, QTextEdit,
)
from aqt import mw
import markdown
from aqt.utils import showInfo, tooltip

from ..gui.dialog_helper import parse_config_text
from ..utils.config_utils import DEFAULT_CONFIG_PATH

# * README.md ships next to config.json in the add-on folder
README_PATH: Path = DEFAULT_CONFIG_PATH.parent / "README.md"

WINDOW_TITLE = "Regex Tester Settings"
DIALOG_SIZE = (900, 600)


class ConfigDialog(QDialog):
    """
    Settings editor: rendered README on the left, raw JSON on the right.

    `saved` turns True once a save or restore reached the ConfigManager;
    the caller uses it to rebuild the tester dialog.
    """

    def __init__(self, addon_name: str, config_manager_cls, parent=None):
        super().__init__(parent or mw)
        self.addon_name = addon_name
        self.config_manager = config_manager_cls(addon_name, mw)
        self.saved = False

        self.setWindowTitle(WINDOW_TITLE)
        self.setWindowFlags(Qt.WindowType.Window)
        self.setWindowModality(Qt.WindowModality.ApplicationModal)
        self.resize(*DIALOG_SIZE)

        root = QVBoxLayout(self)
        panes = QSplitter(Qt.Orientation.Horizontal)
        panes.addWidget(self._build_readme_panel())
        panes.addWidget(self._build_editor_panel())
        panes.setSizes([DIALOG_SIZE[0] // 2, DIALOG_SIZE[0] // 2])
        root.addWidget(panes)

        self.status_label = QLabel("")
        self.status_label.setWordWrap(True)
        root.addWidget(self.status_label)
        root.addLayout(self._build_buttons())

        self.readme_browser.setHtml(_readme_html())
        self._show_config(self.config_manager.load_config())

    # ? ------------------------------------------------------------------
    # ? Layout
    # ? ------------------------------------------------------------------

    def _build_readme_panel(self) -> QWidget:
        panel = QWidget()
        col = QVBoxLayout(panel)
        self.readme_browser = QTextBrowser()
        self.readme_browser.setOpenExternalLinks(True)
        col.addWidget(QLabel("How the tester works"))
        col.addWidget(self.readme_browser)
        return panel

    def _build_editor_panel(self) -> QWidget:
        panel = QWidget()
        col = QVBoxLayout(panel)
        self.config_editor = QTextEdit()
        self.config_editor.setAcceptRichText(False)
        self.config_editor.setLineWrapMode(QTextEdit.LineWrapMode.NoWrap)
        col.addWidget(QLabel("Settings (JSON)"))
        col.addWidget(self.config_editor)
        return panel

    def _build_buttons(self) -> QHBoxLayout:
        row = QHBoxLayout()
        row.addStretch(1)
        for label, slot in (
            ("Save", self.on_save),
            ("Restore Defaults", self.on_restore_defaults),
            ("Close", self.accept),
        ):
            btn = QPushButton(label)
            btn.clicked.connect(slot)
            row.addWidget(btn)
        return row

    # ? ------------------------------------------------------------------
    # ? Actions
    # ? ------------------------------------------------------------------

    def _show_config(self, config: Dict[str, Any]) -> None:
        self.config_editor.setPlainText(json.dumps(config, indent=4))

    def _store(self, config: Dict[str, Any], notes) -> bool:
        try:
            self.config_manager.save_config(config)
        except OSError as exc:
            showInfo(f"Could not write the settings:\n{exc}")
            return False
        self.saved = True
        self.status_label.setText("\n".join(notes))
        return True

    def on_save(self) -> None:
        """* Validate the editor text, then hand it to the ConfigManager."""
        config, notes = parse_config_text(self.config_editor.toPlainText())
        if config is None:
            self.status_label.setText("\n".join(notes))
            return
        if self._store(config, notes):
            tooltip("Settings saved. The tester reopens with them.", parent=self)

    def on_restore_defaults(self) -> None:
        """Overwrite the stored settings with the shipped config.json."""
        try:
            raw = DEFAULT_CONFIG_PATH.read_text(encoding="utf-8")
        except OSError as exc:
            showInfo(f"Could not read {DEFAULT_CONFIG_PATH.name}:\n{exc}")
            return
        config, notes = parse_config_text(raw)
        if config is None:
            showInfo(f"{DEFAULT_CONFIG_PATH.name} is broken:\n" + "\n".join(notes))
            return
        if self._store(config, notes):
            self._show_config(config)
            tooltip("Defaults restored.", parent=self)


def _readme_html() -> str:
    # & Missing or unreadable README still leaves a usable editor
    try:
        md_text = README_PATH.read_text(encoding="utf-8")
    except OSError as exc:
        return f"<i>README.md unavailable ({exc.__class__.__name__}).</i>"
    return markdown.markdown(md_text, extensions=["tables", "fenced_code"])
