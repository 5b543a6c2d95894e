# pyright: reportMissingImports=false
# mypy: disable_error_code=import

from __future__ import annotations
from typing import Any, Dict, Optional

from aqt.qt import (  # type: ignore[import]
    QColor,
    QDialog,
    QFont,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QSplitter,
    QTextBrowser,
    QTextCharFormat,
    QTextCursor,
    QTextEdit,
    QVBoxLayout,
    QWidget,
    Qt,
)
from aqt.utils import showInfo, tooltip  # type: ignore[import]

from ..utils.data_defs import SessionSnapshot
from ..utils.logger import build_session_markdown, session_markdown_to_html, write_session_debug
from ..utils.session import TesterSession
from .dialog_helper import build_dialog_view, clamp_spans, to_qt_positions

# ---------------------------------------------------------------------------
# ! Styling & layout constants
# ---------------------------------------------------------------------------

DIALOG_MIN_WIDTH = 900
DIALOG_MIN_HEIGHT = 600
FLAGS_FIELD_WIDTH = 80

# Initial split weights
CENTER_SPLIT_STRETCH = (1, 1)     # test string | results
MATCH_SPLIT_SIZES = (210, 390)    # result view over capture listing

STATUS_LABEL_STYLE = "color: #555; font-size: 11px;"


def _titled(title: str, inner: QWidget) -> QGroupBox:
    box = QGroupBox(title)
    lay = QVBoxLayout(box)
    lay.setContentsMargins(5, 5, 5, 5)
    lay.addWidget(inner)
    return box


class RegexTesterDialog(QDialog):
    """
    Regex / flags on top, test string on the left, match result + captures on the right.

    Every edit is forwarded to the TesterSession; the session calls back into
    _render with a fresh snapshot, which repaints everything from scratch.
    """

    def __init__(self, parent=None, cfg: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(parent)
        self._cfg: Dict[str, Any] = dict(cfg or {})
        self.session = TesterSession(max_matches=int(self._cfg.get("max_matches", 0) or 0))

        self._build_ui()
        self._wire_signals()
        self.session.add_listener(self._render)

        default_flags = str(self._cfg.get("default_flags") or "")
        if default_flags:
            self.flags_edit.setText(default_flags)

    # --- UI scaffold -------------------------------------------------------

    def _build_ui(self) -> None:
        self.setWindowTitle("Regex Tester")
        self.resize(DIALOG_MIN_WIDTH, DIALOG_MIN_HEIGHT)

        font = QFont(self._cfg.get("font_family") or "monospace")
        font.setStyleHint(QFont.StyleHint.Monospace)
        font.setPointSize(int(self._cfg.get("font_size") or 14))

        # Regex + flags + quoted echo
        self.regex_edit = QLineEdit()
        self.flags_edit = QLineEdit()
        self.flags_edit.setFixedWidth(FLAGS_FIELD_WIDTH)
        self.quoted_edit = QLineEdit()
        self.quoted_edit.setReadOnly(True)
        for w in (self.regex_edit, self.flags_edit, self.quoted_edit):
            w.setFont(font)

        top = QWidget()
        top_lay = QVBoxLayout(top)
        top_lay.setContentsMargins(0, 0, 0, 0)
        row = QHBoxLayout()
        row.addWidget(self.regex_edit, 1)
        row.addWidget(QLabel(" ? "))
        row.addWidget(self.flags_edit)
        top_lay.addLayout(row)
        top_lay.addWidget(self.quoted_edit)

        # Test string
        self.test_edit = QPlainTextEdit()
        self.test_edit.setFont(font)

        # Match result + captures
        self.result_view = QTextEdit()
        self.result_view.setReadOnly(True)
        self.result_view.setFont(font)
        self.capture_view = QPlainTextEdit()
        self.capture_view.setReadOnly(True)
        self.capture_view.setFont(font)

        match_split = QSplitter(Qt.Orientation.Vertical)
        match_split.addWidget(_titled("Match result", self.result_view))
        match_split.addWidget(_titled("Match captures", self.capture_view))
        match_split.setSizes(list(MATCH_SPLIT_SIZES))

        center = QSplitter(Qt.Orientation.Horizontal)
        center.addWidget(_titled("Your test string", self.test_edit))
        center.addWidget(match_split)
        center.setStretchFactor(0, CENTER_SPLIT_STRETCH[0])
        center.setStretchFactor(1, CENTER_SPLIT_STRETCH[1])

        # Footer
        self.status_label = QLabel("")
        self.status_label.setStyleSheet(STATUS_LABEL_STYLE)
        self.preview_button = QPushButton("Preview report")
        self.save_button = QPushButton("Save report")
        self.close_button = QPushButton("Close")
        footer = QHBoxLayout()
        footer.addWidget(self.status_label, 1)
        footer.addWidget(self.preview_button)
        footer.addWidget(self.save_button)
        footer.addWidget(self.close_button)

        layout = QVBoxLayout(self)
        layout.addWidget(_titled("Your regular expression", top))
        layout.addWidget(center, 1)
        layout.addLayout(footer)

    def _wire_signals(self) -> None:
        self.regex_edit.textChanged.connect(self._on_pattern_edit)
        self.flags_edit.textChanged.connect(self._on_pattern_edit)
        self.test_edit.textChanged.connect(self._on_subject_edit)
        self.preview_button.clicked.connect(self._on_preview)
        self.save_button.clicked.connect(self._on_save)
        self.close_button.clicked.connect(self.close)

    # --- Edit handlers -----------------------------------------------------

    def _on_pattern_edit(self, *_args) -> None:
        self.session.pattern_changed(self.regex_edit.text(), self.flags_edit.text())

    def _on_subject_edit(self) -> None:
        self.session.subject_changed(self.test_edit.toPlainText())

    # --- Rendering ---------------------------------------------------------

    def _render(self, snap: SessionSnapshot) -> None:
        view = build_dialog_view(snap, self._cfg)

        self.quoted_edit.setText(view.quoted)
        self.result_view.setPlainText(view.result)
        self._paint_highlights(view.result, view.spans)
        self.capture_view.setPlainText(view.captures)
        self.capture_view.moveCursor(QTextCursor.MoveOperation.Start)
        self.status_label.setText(view.status)

    def _paint_highlights(self, text: str, spans) -> None:
        # ^ Extra selections are replaced wholesale, so stale highlights never linger
        fmt = QTextCharFormat()
        fmt.setBackground(QColor(self._cfg.get("highlight_color") or "#ffe066"))

        selections = []
        for start, end in to_qt_positions(text, clamp_spans(spans, len(text))):
            sel = QTextEdit.ExtraSelection()
            cursor = QTextCursor(self.result_view.document())
            cursor.setPosition(start)
            cursor.setPosition(end, QTextCursor.MoveMode.KeepAnchor)
            sel.cursor = cursor
            sel.format = fmt
            selections.append(sel)
        self.result_view.setExtraSelections(selections)

    # --- Report buttons ----------------------------------------------------

    def _on_preview(self) -> None:
        md_text = build_session_markdown(self.session.snapshot(), self._cfg)
        dlg = QDialog(self)
        dlg.setWindowTitle("Regex Tester report")
        dlg.resize(700, 500)
        browser = QTextBrowser(dlg)
        browser.setHtml(session_markdown_to_html(md_text))
        lay = QVBoxLayout(dlg)
        lay.addWidget(browser)
        dlg.exec()

    def _on_save(self) -> None:
        path = write_session_debug(self.session.snapshot(), self._cfg)
        if path is None:
            showInfo("Report not written (debug reports disabled or the folder is not writable).")
            return
        tooltip(f"Saved report: {path.name}", period=3000)
