import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from canvas import Canvas
from fill import flood_fill
from history import History
from settings import Tool, ToolSettings
from shapes import draw_shape

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


def _as_point(point) -> Point:
    return int(round(point[0])), int(round(point[1]))


@dataclass
class GestureState:
    """One pointer-down -> move* -> up interaction."""
    tool: Tool
    anchor: Point
    last_point: Point
    snapshot: Any = None
    is_active: bool = True


class GestureController:
    """
    Turns host pointer events into edits of the canvas.

    Freehand tools write straight into the live buffer. Shape tools restore the
    pre-gesture snapshot into a scratch canvas, draw there, and copy the whole
    frame over the live buffer on every move; pointer-up repeats that once more
    against the live buffer to commit. Fill is a one-shot action on pointer-down.

    Every operation is a silent no-op while no canvas is attached.
    """

    def __init__(
        self,
        canvas: Optional[Canvas] = None,
        history: Optional[History] = None,
        settings: Optional[ToolSettings] = None,
        notify: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.canvas = canvas
        self.history = history if history is not None else History()
        self.settings = settings if settings is not None else ToolSettings()
        self.notify = notify
        self.gesture: Optional[GestureState] = None
        self._scratch: Optional[Canvas] = None

    @property
    def is_drawing(self) -> bool:
        return self.gesture is not None and self.gesture.is_active

    def _ready(self, action: str) -> bool:
        if self.canvas is None:
            logger.debug("Ignoring %s: no canvas attached", action)
            return False
        return True

    def _notice(self, message: str) -> None:
        logger.info(message)
        if self.notify is not None:
            self.notify(message)

    # Pointer events -----------------------------------------------------

    def pointer_down(self, point) -> None:
        if not self._ready("pointer down"):
            return
        if self.is_drawing:
            # A lost pointer-up; finish the old gesture before starting over.
            self.pointer_up()

        point = _as_point(point)
        tool = self.settings.tool
        snapshot = self.history.push(self.canvas)

        if tool is Tool.FILL:
            flood_fill(self.canvas, point, self.settings.color)
            return

        self.gesture = GestureState(tool=tool, anchor=point, last_point=point, snapshot=snapshot)
        logger.debug("Started %s gesture at %s", tool.value, point)
        if tool.is_freehand:
            self.canvas.draw_brush(point[0], point[1], self.settings.brush_size, self.settings.stroke_color(tool))

    def pointer_move(self, point) -> None:
        if not self._ready("pointer move") or not self.is_drawing:
            return
        point = _as_point(point)
        gesture = self.gesture

        if gesture.tool.is_freehand:
            x0, y0 = gesture.last_point
            self.canvas.draw_line(x0, y0, point[0], point[1], self.settings.brush_size, self.settings.stroke_color(gesture.tool))
        else:
            scratch = self._scratch_canvas()
            self._render_shape(scratch, gesture, point)
            self.canvas.write(scratch.buffer)
        gesture.last_point = point

    def pointer_up(self, point=None) -> None:
        if not self._ready("pointer up") or not self.is_drawing:
            return
        if point is not None:
            self.pointer_move(point)

        gesture = self.gesture
        if gesture.tool.is_shape:
            self._render_shape(self.canvas, gesture, gesture.last_point)
        gesture.is_active = False
        self.gesture = None
        logger.debug("Finished %s gesture at %s", gesture.tool.value, gesture.last_point)

    def pointer_leave(self, point=None) -> None:
        """Leaving the surface mid-gesture commits, exactly like pointer-up."""
        self.pointer_up(point)

    def _scratch_canvas(self) -> Canvas:
        if self._scratch is None or self._scratch.shape != self.canvas.shape:
            self._scratch = Canvas(self.canvas.width, self.canvas.height)
        return self._scratch

    def _render_shape(self, target: Canvas, gesture: GestureState, current: Point) -> None:
        target.write(gesture.snapshot)
        draw_shape(
            target,
            gesture.tool,
            gesture.anchor,
            current,
            self.settings.fill_shapes,
            self.settings.color,
            self.settings.brush_size,
        )

    # Commands -----------------------------------------------------------

    def undo(self) -> bool:
        if not self._ready("undo"):
            return False
        if self.gesture is not None:
            logger.debug("Dropping active %s gesture for undo", self.gesture.tool.value)
            self.gesture = None
        if not self.history.undo(self.canvas):
            self._notice("Nothing to undo")
            return False
        logger.info("Undo (%d snapshots left)", len(self.history))
        return True

    def clear(self) -> None:
        if not self._ready("clear"):
            return
        self.gesture = None
        self.history.push(self.canvas)
        self.canvas.clear()
        self._notice("Canvas cleared")

    def resize(self, width: int, height: int) -> None:
        """Reallocates a blank canvas; previous content and history are discarded."""
        self.gesture = None
        self._scratch = None
        self.history.clear()
        if width <= 0 or height <= 0:
            logger.info("Detaching canvas for %dx%d surface", width, height)
            self.canvas = None
            return
        self.canvas = Canvas(width, height)
        logger.info("Resized canvas to %dx%d", width, height)

    def export_image(self, format: str = "PNG") -> Optional[bytes]:
        if not self._ready("export"):
            return None
        return self.canvas.export_image(format)

    def save(self, path: str = "drawing.png") -> bool:
        if not self._ready("save"):
            return False
        self.canvas.save_to_png(path)
        self._notice(f"Saved {path}")
        return True
