import io
import logging
from contextlib import contextmanager

import numpy as np
from PIL import Image, ImageDraw

from colors import WHITE

logger = logging.getLogger(__name__)


class Canvas:
    """
    Owns the RGBA pixel buffer and the raw stroke primitives that write into it.
    """
    def __init__(self, width, height, background=WHITE):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.buffer = np.empty((height, width, 4), dtype=np.uint8)
        self.clear(background)

    @property
    def shape(self):
        return self.buffer.shape

    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x, y):
        """Returns the (r, g, b, a) tuple at x, y, or None outside the canvas."""
        if not self.in_bounds(x, y):
            return None
        return tuple(int(c) for c in self.buffer[y, x])

    def set_pixel(self, x, y, color):
        """Writes an opaque pixel; coordinates outside the canvas are ignored."""
        if not self.in_bounds(x, y):
            return
        self.buffer[y, x, :3] = color[:3]
        self.buffer[y, x, 3] = 255

    def read(self):
        """Returns a copy of the whole buffer."""
        return self.buffer.copy()

    def write(self, pixels):
        """Replaces the whole buffer with ``pixels``."""
        if pixels.shape != self.buffer.shape:
            raise ValueError(
                f"Buffer shape mismatch: expected {self.buffer.shape}, got {pixels.shape}"
            )
        self.buffer[...] = pixels

    def clear(self, color=WHITE):
        """Paints the whole canvas with an opaque color."""
        self.buffer[:, :, :3] = color[:3]
        self.buffer[:, :, 3] = 255

    def draw_brush(self, x, y, brush_size, color):
        """Stamps a round dab of diameter ``brush_size`` centred on x, y."""
        radius = brush_size / 2
        reach = int(radius)
        x0, x1 = max(x - reach, 0), min(x + reach, self.width - 1)
        y0, y1 = max(y - reach, 0), min(y + reach, self.height - 1)
        if x0 > x1 or y0 > y1:
            return
        ys, xs = np.ogrid[y0 : y1 + 1, x0 : x1 + 1]
        mask = (xs - x) ** 2 + (ys - y) ** 2 <= radius * radius
        region = self.buffer[y0 : y1 + 1, x0 : x1 + 1]
        region[mask, :3] = color[:3]
        region[mask, 3] = 255

    def draw_line(self, x1, y1, x2, y2, brush_size, color):
        """Draws a round-capped line: one brush dab per step along the longer axis."""
        steps = max(abs(x2 - x1), abs(y2 - y1))
        xs = np.rint(np.linspace(x1, x2, steps + 1)).astype(int).tolist()
        ys = np.rint(np.linspace(y1, y2, steps + 1)).astype(int).tolist()
        for x, y in zip(xs, ys):
            self.draw_brush(x, y, brush_size, color)

    @contextmanager
    def image_draw(self):
        """Yields a Pillow ImageDraw over the buffer and writes the result back."""
        image = Image.fromarray(self.buffer)
        yield ImageDraw.Draw(image)
        self.buffer[...] = np.asarray(image)

    def to_image(self):
        return Image.fromarray(self.buffer.copy())

    def export_image(self, format="PNG"):
        """Encodes the canvas into image bytes."""
        stream = io.BytesIO()
        self.to_image().save(stream, format=format)
        data = stream.getvalue()
        logger.debug("Exported %dx%d canvas as %s (%d bytes)", self.width, self.height, format, len(data))
        return data

    def save_to_png(self, filename="drawing.png"):
        """Saves the canvas to a PNG file."""
        self.to_image().save(filename, format="PNG")
        logger.info("Saved canvas to %s", filename)
