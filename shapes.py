import math

from settings import Tool


def rectangle_bounds(anchor, current):
    """Normalizes two corners into (left, top, right, bottom); extents may be negative."""
    (ax, ay), (cx, cy) = anchor, current
    return min(ax, cx), min(ay, cy), max(ax, cx), max(ay, cy)


def circle_radius(anchor, current):
    return math.hypot(current[0] - anchor[0], current[1] - anchor[1])


def triangle_vertices(anchor, current):
    """Apex at ``anchor``, horizontal base at ``current.y`` mirrored about the apex."""
    (ax, ay), (cx, cy) = anchor, current
    return [(ax, ay), (cx, cy), (ax - (cx - ax), cy)]


def draw_shape(canvas, kind, anchor, current, filled, color, width):
    """
    Renders one shape defined by the gesture's anchor and current point.

    When ``filled`` is set the interior is painted first; the outline is always
    stroked with ``width``. Lines are never filled. Anything outside the canvas
    is clipped.
    """
    kind = Tool(kind)
    rgba = tuple(color[:3]) + (255,)
    width = max(1, int(width))
    fill = rgba if filled else None

    if kind is Tool.LINE:
        canvas.draw_line(anchor[0], anchor[1], current[0], current[1], width, rgba)
    elif kind is Tool.RECTANGLE:
        with canvas.image_draw() as draw:
            draw.rectangle(rectangle_bounds(anchor, current), fill=fill, outline=rgba, width=width)
    elif kind is Tool.CIRCLE:
        radius = circle_radius(anchor, current)
        if radius < 1:
            canvas.draw_brush(anchor[0], anchor[1], width, rgba)
            return
        x, y = anchor
        with canvas.image_draw() as draw:
            draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=fill, outline=rgba, width=width)
    elif kind is Tool.TRIANGLE:
        if tuple(anchor) == tuple(current):
            canvas.draw_brush(anchor[0], anchor[1], width, rgba)
            return
        with canvas.image_draw() as draw:
            draw.polygon(triangle_vertices(anchor, current), fill=fill, outline=rgba, width=width)
    else:
        raise ValueError(f"{kind.value} is not a shape tool")
