import logging
import sys
import time
from typing import Optional, Tuple

from asciimatics.screen import Screen
from asciimatics.event import KeyboardEvent, MouseEvent
from asciimatics.exceptions import ResizeScreenError
from asciimatics.scene import Scene
from asciimatics.effects import Effect

from gesture import GestureController
from settings import AppConfig, Tool
from ui import UIFrame

logger = logging.getLogger(__name__)

TOOL_KEYS = {
    ord('p'): Tool.PENCIL,
    ord('e'): Tool.ERASER,
    ord('f'): Tool.FILL,
    ord('l'): Tool.LINE,
    ord('r'): Tool.RECTANGLE,
    ord('c'): Tool.CIRCLE,
    ord('t'): Tool.TRIANGLE,
}


# Simple 8-colour mapping from RGBA to nearest basic terminal colour index.
def _rgb_to_colour_index(r: int, g: int, b: int) -> int:
    # Threshold values chosen for basic distinction.
    if r > 200 and g > 200 and b > 200:
        return Screen.COLOUR_WHITE
    if r > 200 and g < 100 and b < 100:
        return Screen.COLOUR_RED
    if g > 150 and r < 100 and b < 100:
        return Screen.COLOUR_GREEN
    if b > 200 and r < 100:
        return Screen.COLOUR_BLUE
    if r > 200 and g > 200 and b < 100:
        return Screen.COLOUR_YELLOW
    if r > 100 and b > 150 and g < 150:
        return Screen.COLOUR_MAGENTA
    if g > 200 and b > 200 and r < 100:
        return Screen.COLOUR_CYAN
    return Screen.COLOUR_BLACK


def half_block_render(screen, canvas):
    """Draws two pixel rows per character cell: the upper one as foreground, the lower as background."""
    rows = min(canvas.height // 2, screen.height)
    cols = min(canvas.width, screen.width)
    rgb = canvas.buffer[: rows * 2, :cols, :3].tolist()
    for row in range(rows):
        upper, lower = rgb[row * 2], rgb[row * 2 + 1]
        for x in range(cols):
            fg = _rgb_to_colour_index(*upper[x])
            bg = _rgb_to_colour_index(*lower[x])
            # Same colour in both halves: a full block renders crisper.
            screen.print_at('█' if fg == bg else '▀', x, row, colour=fg, bg=bg)


class CanvasEffect(Effect):
    """Asciimatics Effect that renders the controller's pixel buffer using half-block chars."""

    def __init__(self, screen: Screen, controller: GestureController):
        super().__init__(screen)
        self._controller = controller

    def reset(self):
        # Nothing to reset between scene restarts.
        pass

    def stop_frame(self):
        # Run indefinitely; Scene duration is -1.
        return 0

    def _update(self, frame_no):
        if self._controller.canvas is not None:
            half_block_render(self._screen, self._controller.canvas)


def handle_key(key_code: int, controller: GestureController, ui: UIFrame, config: AppConfig, screen) -> bool:
    """Applies a keyboard shortcut; returns False when the user asked to quit."""
    settings = controller.settings
    if key_code in (ord('q'), ord('Q')):
        return False
    elif key_code == Screen.ctrl("s"):
        ui.save()
    elif key_code == Screen.ctrl("e"):
        with open(config.text_dump_path, "w") as f:
            f.write(screen.get_as_text())
    elif key_code == Screen.ctrl("z"):
        controller.undo()
    elif key_code in (ord('x'), ord('X')):
        controller.clear()
    elif key_code in TOOL_KEYS:
        settings.set_tool(TOOL_KEYS[key_code])
        ui.sync()
    elif key_code == ord('g'):
        settings.fill_shapes = not settings.fill_shapes
        ui.sync()
    elif key_code == ord('['):
        settings.set_brush_size(settings.brush_size - 1)
        ui.sync()
    elif key_code == ord(']'):
        settings.set_brush_size(settings.brush_size + 1)
        ui.sync()
    return True


def main(screen, controller: GestureController, config: AppConfig):
    canvas_width = screen.width - screen.width // config.panel_fraction
    canvas_height = screen.height * 2  # Two pixel rows per character row
    # Every (re)start of the screen is a resize notification for the controller.
    controller.resize(canvas_width, canvas_height)

    ui = UIFrame(screen, controller, config)
    controller.notify = ui.show_message

    class PointerState:
        def __init__(self):
            self.last_mouse_pos: Optional[Tuple[int, int]] = None

    pointer = PointerState()

    # Build a Scene containing both the canvas effect and the UI frame.
    canvas_effect = CanvasEffect(screen, controller)
    screen.set_scenes([Scene([canvas_effect, ui], duration=-1)])

    while True:
        if screen.has_resized():
            raise ResizeScreenError("Screen resized")

        # Event handling ----------------------------------------------------
        event = screen.get_event()

        # Let the UI consume the event first (e.g., button clicks).
        event = ui.process_event(event)

        if isinstance(event, KeyboardEvent):
            if not handle_key(event.key_code, controller, ui, config, screen):
                return
        elif isinstance(event, MouseEvent):
            # Determine if the mouse event occurred inside the UI frame. The UI occupies
            # the right-most part of the screen, starting at `canvas_width`.
            ui.has_focus = event.x >= canvas_width

            # Convert character coordinates to pixel coordinates for the canvas.
            pixel = (event.x, event.y * 2)

            if ui.has_focus:
                if controller.is_drawing:
                    controller.pointer_leave(pointer.last_mouse_pos)
            elif event.buttons & MouseEvent.LEFT_CLICK:
                if not controller.is_drawing:
                    controller.pointer_down(pixel)
                else:
                    controller.pointer_move(pixel)
                pointer.last_mouse_pos = pixel
            elif controller.is_drawing:
                controller.pointer_up(pixel)

        # ------------------------------------------------------------------
        # Draw the next frame for the Scene (canvas effect + UI).
        screen.draw_next_frame()

        # Cap the frame-rate to ~30 FPS to reduce flicker and CPU usage.
        time.sleep(1 / 30)


def configure_logging(config: AppConfig) -> None:
    # The terminal belongs to asciimatics, so logs go to a file.
    logging.basicConfig(
        filename=config.log_file,
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run() -> None:
    config = AppConfig.from_env()
    configure_logging(config)
    controller = GestureController()
    logger.info("Starting sketchpad")
    while True:
        try:
            Screen.wrapper(main, arguments=[controller, config])
            sys.exit(0)
        except ResizeScreenError:
            logger.info("Terminal resized, restarting screen")
        except KeyboardInterrupt:
            sys.exit(0)


if __name__ == "__main__":
    run()
