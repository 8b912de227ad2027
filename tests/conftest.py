import os

import pytest

from mdeditor.config import HighlightConfig
from mdeditor.themes import get_theme

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def theme():
    return get_theme("default")


@pytest.fixture
def config(theme):
    return HighlightConfig(theme=theme, font_size=14)


@pytest.fixture(scope="session")
def qapp():
    QtGui = pytest.importorskip("PyQt6.QtGui")
    app = QtGui.QGuiApplication.instance()
    if app is None:
        app = QtGui.QGuiApplication([])
    return app
