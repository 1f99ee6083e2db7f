import logging

import numpy as np

from colors import DEFAULT_TOLERANCE, color_match

logger = logging.getLogger(__name__)


def flood_fill(canvas, seed, fill_color, tolerance=DEFAULT_TOLERANCE):
    """
    Fills the 4-connected region around ``seed`` with ``fill_color``.

    Pixels join the region when their RGB is within ``tolerance`` of the seed
    pixel. Uses an explicit stack so large regions cannot exhaust the call
    stack. Returns the number of pixels written; an out-of-bounds seed, or a
    seed already matching ``fill_color``, is a no-op.

    The caller is responsible for taking an undo snapshot first.
    """
    x, y = seed
    if not canvas.in_bounds(x, y):
        logger.debug("Fill seed %s outside %dx%d canvas", seed, canvas.width, canvas.height)
        return 0

    buffer = canvas.buffer
    target = buffer[y, x, :3].astype(np.int16)
    if color_match(target, fill_color, tolerance):
        return 0

    # Written pixels stop matching the target, so clearing the mask as we go
    # is the same as re-testing their colour.
    diff = np.abs(buffer[:, :, :3].astype(np.int16) - target)
    matches = np.all(diff <= tolerance, axis=2)

    r, g, b = fill_color[:3]
    width, height = canvas.width, canvas.height
    filled = 0
    stack = [(x, y)]
    while stack:
        px, py = stack.pop()
        if px < 0 or px >= width or py < 0 or py >= height or not matches[py, px]:
            continue
        matches[py, px] = False
        buffer[py, px] = (r, g, b, 255)
        filled += 1
        stack.append((px + 1, py))
        stack.append((px - 1, py))
        stack.append((px, py + 1))
        stack.append((px, py - 1))

    logger.debug("Filled %d pixels from seed %s with %s", filled, seed, tuple(fill_color[:3]))
    return filled
