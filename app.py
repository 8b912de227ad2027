import logging
import sys
from pathlib import Path

from PyQt6.QtCore import Qt, QSettings
from PyQt6.QtGui import QAction, QActionGroup, QFont
from PyQt6.QtWidgets import (
    QApplication,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QTextEdit,
    QToolBar,
)

from mdeditor.config import DEFAULT_FONT_SIZE, HighlightConfig, clamp_font_size
from mdeditor.themes import DEFAULT_THEME_NAME, theme_names
from mdeditor.ui.highlighter import MarkdownHighlighter
from mdeditor.ui.theme import apply_theme
from mdeditor.utils import normalize_newlines

APP_NAME = "Markdown Editor"
ORG = "Markdown Editor"

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, path: Path | None = None):
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.resize(1000, 760)

        self.settings = QSettings(ORG, APP_NAME)
        theme_name = self.settings.value("theme", DEFAULT_THEME_NAME) or DEFAULT_THEME_NAME
        try:
            font_size = float(self.settings.value("font_size", DEFAULT_FONT_SIZE))
        except (TypeError, ValueError):
            font_size = DEFAULT_FONT_SIZE
        config = HighlightConfig.from_names(theme_name, font_size)

        self.editor = QTextEdit()
        self.editor.setAcceptRichText(False)
        font = QFont("Menlo")
        font.setStyleHint(QFont.StyleHint.TypeWriter)
        font.setPointSizeF(config.font_size)
        self.editor.setFont(font)
        self.setCentralWidget(self.editor)
        self.highlighter = MarkdownHighlighter(self.editor.document(), config)

        self.status = QStatusBar()
        self.setStatusBar(self.status)

        self._make_actions()
        self._make_menus()
        self._make_toolbar()
        self._wire_signals()
        self._apply_config()

        if path is not None:
            self.load_file(path)
        self.update_status()

    def _make_actions(self):
        self.act_exit = QAction("Quit", self)
        self.act_exit.setShortcut("Ctrl+Q")

        self.act_toggle_md = QAction("Syntax highlighting", self)
        self.act_toggle_md.setCheckable(True)
        self.act_toggle_md.setChecked(True)

        self.act_font_bigger = QAction("Increase Font Size", self)
        self.act_font_bigger.setShortcut("Ctrl++")
        self.act_font_smaller = QAction("Decrease Font Size", self)
        self.act_font_smaller.setShortcut("Ctrl+-")
        self.act_font_reset = QAction("Reset Font Size", self)
        self.act_font_reset.setShortcut("Ctrl+0")

        self.theme_group = QActionGroup(self)
        self.theme_group.setExclusive(True)
        self.theme_actions = {}
        for name in theme_names():
            a = QAction(name, self)
            a.setCheckable(True)
            self.theme_group.addAction(a)
            self.theme_actions[name] = a

    def _make_menus(self):
        m_file = self.menuBar().addMenu("&File")
        m_file.addAction(self.act_exit)

        m_view = self.menuBar().addMenu("&View")
        m_view.addAction(self.act_toggle_md)
        m_view.addSeparator()
        m_view.addAction(self.act_font_bigger)
        m_view.addAction(self.act_font_smaller)
        m_view.addAction(self.act_font_reset)
        m_theme = m_view.addMenu("Theme")
        for a in self.theme_actions.values():
            m_theme.addAction(a)

    def _make_toolbar(self):
        tb = QToolBar("View")
        self.addToolBar(Qt.ToolBarArea.TopToolBarArea, tb)
        tb.addAction(self.act_toggle_md)
        tb.addSeparator()
        tb.addAction(self.act_font_smaller)
        tb.addAction(self.act_font_bigger)

    def _wire_signals(self):
        self.act_exit.triggered.connect(self.close)
        self.act_toggle_md.toggled.connect(self.on_toggle_highlight)
        self.act_font_bigger.triggered.connect(lambda checked=False: self.on_font_step(1))
        self.act_font_smaller.triggered.connect(lambda checked=False: self.on_font_step(-1))
        self.act_font_reset.triggered.connect(self.on_font_reset)
        for name, act in self.theme_actions.items():
            act.triggered.connect(lambda checked=False, n=name: self.on_theme(n))
        self.editor.cursorPositionChanged.connect(self.update_status)

    def _apply_config(self):
        config = self.highlighter.config
        apply_theme(self, config.theme, config.font_size)
        act = self.theme_actions.get(config.theme.name)
        if act is not None:
            act.setChecked(True)

    def load_file(self, path: Path):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Could not read %s: %s", path, e)
            QMessageBox.critical(self, "Open failed", f"Could not read {path}:\n{e}")
            return
        self.editor.setPlainText(normalize_newlines(text))
        self.setWindowTitle(f"{APP_NAME} – {path.name}")
        logger.info("Loaded '%s' (%d chars)", path, len(text))

    # View
    def on_toggle_highlight(self, enabled: bool):
        if enabled:
            self.highlighter.setDocument(self.editor.document())
            self.highlighter.rehighlight()
        else:
            self.highlighter.setDocument(None)

    def on_theme(self, name: str):
        self.highlighter.set_theme(name)
        self.settings.setValue("theme", self.highlighter.config.theme.name)
        self._apply_config()
        self.update_status()

    def on_font_step(self, step: int):
        self._set_font_size(self.highlighter.config.font_size + step)

    def on_font_reset(self):
        self._set_font_size(DEFAULT_FONT_SIZE)

    def _set_font_size(self, size: float):
        size = clamp_font_size(size)
        font = self.editor.font()
        font.setPointSizeF(size)
        self.editor.setFont(font)
        self.highlighter.set_font_size(size)
        self.settings.setValue("font_size", size)
        self._apply_config()
        self.update_status()

    def update_status(self):
        config = self.highlighter.config
        c = self.editor.textCursor()
        pos = f"L{c.blockNumber()+1}:C{c.positionInBlock()+1}"
        self.status.showMessage(f"Pos: {pos} | Theme: {config.theme.name} | Size: {config.font_size:g}pt")


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    app = QApplication(sys.argv)
    app.setOrganizationName(ORG)
    app.setApplicationName(APP_NAME)
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    win = MainWindow(path)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
