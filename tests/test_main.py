from asciimatics.screen import Screen

from canvas import Canvas
from gesture import GestureController
from main import _rgb_to_colour_index, half_block_render, handle_key
from settings import AppConfig, Tool


class FakeUI:
    def __init__(self):
        self.synced = 0
        self.saved = 0

    def sync(self):
        self.synced += 1

    def save(self):
        self.saved += 1


def press(controller, key, ui=None):
    ui = ui or FakeUI()
    return handle_key(key, controller, ui, AppConfig(), screen=None)


def test_quit_key():
    controller = GestureController(Canvas(4, 4))
    assert press(controller, ord('q')) is False
    assert press(controller, ord('p')) is True


def test_tool_and_option_keys():
    controller = GestureController(Canvas(4, 4))
    ui = FakeUI()
    press(controller, ord('t'), ui)
    assert controller.settings.tool is Tool.TRIANGLE
    press(controller, ord('g'), ui)
    assert controller.settings.fill_shapes is False
    press(controller, ord(']'), ui)
    assert controller.settings.brush_size == 6
    assert ui.synced == 3


def test_save_and_undo_keys():
    controller = GestureController(Canvas(4, 4))
    ui = FakeUI()
    press(controller, Screen.ctrl("s"), ui)
    assert ui.saved == 1
    press(controller, ord('x'), ui)
    assert len(controller.history) == 1
    press(controller, Screen.ctrl("z"), ui)
    assert len(controller.history) == 0


def test_colour_mapping():
    assert _rgb_to_colour_index(255, 255, 255) == Screen.COLOUR_WHITE
    assert _rgb_to_colour_index(0x1A, 0x1F, 0x2C) == Screen.COLOUR_BLACK
    assert _rgb_to_colour_index(255, 0x57, 0x57) == Screen.COLOUR_RED
    assert _rgb_to_colour_index(255, 0xD7, 0) == Screen.COLOUR_YELLOW


class RecordingScreen:
    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.cells = {}

    def print_at(self, text, x, y, colour=7, bg=0):
        self.cells[(x, y)] = (text, colour, bg)


def test_half_block_render():
    canvas = Canvas(3, 4)
    canvas.set_pixel(0, 0, (255, 0, 0))
    screen = RecordingScreen(2, 10)
    half_block_render(screen, canvas)
    assert len(screen.cells) == 4
    assert screen.cells[(0, 0)] == ('▀', Screen.COLOUR_RED, Screen.COLOUR_WHITE)
    assert screen.cells[(1, 0)] == ('█', Screen.COLOUR_WHITE, Screen.COLOUR_WHITE)
    assert screen.cells[(0, 1)] == ('█', Screen.COLOUR_WHITE, Screen.COLOUR_WHITE)
