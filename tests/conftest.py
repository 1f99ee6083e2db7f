import pytest

from canvas import Canvas
from gesture import GestureController
from history import History
from settings import ToolSettings


@pytest.fixture
def canvas():
    return Canvas(40, 30)


@pytest.fixture
def notices():
    return []


@pytest.fixture
def controller(canvas, notices):
    return GestureController(canvas, History(), ToolSettings(), notify=notices.append)
