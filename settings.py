import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from colors import DEFAULT_COLOR, PALETTE, WHITE, Color

MIN_BRUSH_SIZE = 1
MAX_BRUSH_SIZE = 20


class Tool(Enum):
    PENCIL = "pencil"
    ERASER = "eraser"
    FILL = "fill"
    LINE = "line"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    TRIANGLE = "triangle"

    @property
    def is_shape(self) -> bool:
        return self in (Tool.LINE, Tool.RECTANGLE, Tool.CIRCLE, Tool.TRIANGLE)

    @property
    def is_freehand(self) -> bool:
        return self in (Tool.PENCIL, Tool.ERASER)


def clamp_brush_size(size: int) -> int:
    return max(MIN_BRUSH_SIZE, min(MAX_BRUSH_SIZE, int(size)))


@dataclass
class ToolSettings:
    """Live tool configuration, read by the controller at each pointer event."""
    color: Color = DEFAULT_COLOR
    tool: Tool = Tool.PENCIL
    brush_size: int = 5
    fill_shapes: bool = True

    def __post_init__(self) -> None:
        self.color = Color.coerce(self.color)
        self.tool = Tool(self.tool)
        self.brush_size = clamp_brush_size(self.brush_size)

    def set_color(self, value) -> None:
        self.color = Color.coerce(value)

    def set_tool(self, value) -> None:
        self.tool = Tool(value)

    def set_brush_size(self, size: int) -> int:
        self.brush_size = clamp_brush_size(size)
        return self.brush_size

    def stroke_color(self, tool: Optional[Tool] = None) -> Color:
        """The color written by ``tool`` (default: the selected one); the eraser paints white."""
        tool = self.tool if tool is None else Tool(tool)
        if tool is Tool.ERASER:
            return WHITE
        return self.color


@dataclass
class AppConfig:
    log_file: str = "sketchpad.log"
    log_level: str = "WARNING"
    export_path: str = "drawing.png"
    text_dump_path: str = "drawing.txt"
    # The control panel takes 1/panel_fraction of the screen width.
    panel_fraction: int = 4
    palette: list = field(default_factory=lambda: list(PALETTE))

    @classmethod
    def from_env(cls, environ=None) -> "AppConfig":
        environ = os.environ if environ is None else environ
        config = cls()
        config.log_file = environ.get("SKETCHPAD_LOG_FILE", config.log_file)
        config.log_level = environ.get("SKETCHPAD_LOG_LEVEL", config.log_level).upper()
        config.export_path = environ.get("SKETCHPAD_EXPORT_PATH", config.export_path)
        if not isinstance(logging.getLevelName(config.log_level), int):
            raise ValueError(f"Unknown log level {config.log_level!r}")
        return config
