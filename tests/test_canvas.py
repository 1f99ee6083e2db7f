import io

import numpy as np
import pytest
from PIL import Image

from canvas import Canvas

RED = (255, 0, 0, 255)


def painted(canvas):
    return np.argwhere(np.any(canvas.buffer[:, :, :3] != 255, axis=2))


def test_new_canvas_is_blank_white(canvas):
    assert canvas.buffer.shape == (30, 40, 4)
    assert canvas.buffer.dtype == np.uint8
    assert np.all(canvas.buffer == 255)


@pytest.mark.parametrize("size", [(0, 10), (10, -1)])
def test_rejects_empty_dimensions(size):
    with pytest.raises(ValueError):
        Canvas(*size)


def test_pixel_access(canvas):
    canvas.set_pixel(3, 4, (10, 20, 30))
    assert canvas.get_pixel(3, 4) == (10, 20, 30, 255)
    assert canvas.get_pixel(40, 0) is None
    assert canvas.get_pixel(-1, 0) is None
    canvas.set_pixel(100, 100, RED)
    assert len(painted(canvas)) == 1


def test_read_is_a_copy(canvas):
    pixels = canvas.read()
    pixels[0, 0] = RED
    assert canvas.get_pixel(0, 0) == (255, 255, 255, 255)


def test_write_replaces_buffer(canvas):
    pixels = np.zeros_like(canvas.buffer)
    canvas.write(pixels)
    assert np.all(canvas.buffer == 0)
    with pytest.raises(ValueError):
        canvas.write(np.zeros((5, 5, 4), dtype=np.uint8))



def test_clear(canvas):
    canvas.draw_brush(10, 10, 5, RED)
    canvas.clear()
    assert np.all(canvas.buffer == 255)


def test_brush_size_one_is_single_pixel(canvas):
    canvas.draw_brush(5, 6, 1, RED)
    assert painted(canvas).tolist() == [[6, 5]]


def test_brush_is_round(canvas):
    canvas.draw_brush(20, 15, 9, RED)
    assert canvas.get_pixel(20, 15) == RED
    assert canvas.get_pixel(24, 15) == RED
    assert canvas.get_pixel(24, 19) == (255, 255, 255, 255)


def test_brush_clips_at_edges(canvas):
    canvas.draw_brush(0, 0, 20, RED)
    canvas.draw_brush(39, 29, 20, RED)
    canvas.draw_brush(-100, -100, 3, RED)
    assert canvas.get_pixel(0, 0) == RED
    assert canvas.get_pixel(39, 29) == RED


def test_draw_line(canvas):
    canvas.draw_line(2, 5, 8, 5, 1, RED)
    assert sorted(map(tuple, painted(canvas).tolist())) == [(5, x) for x in range(2, 9)]


def test_draw_line_backwards_and_diagonal(canvas):
    canvas.draw_line(10, 10, 0, 0, 1, RED)
    assert all(canvas.get_pixel(i, i) == RED for i in range(11))


def test_export_image(canvas):
    canvas.draw_brush(10, 10, 4, RED)
    data = canvas.export_image()
    assert data.startswith(b"\x89PNG")
    image = Image.open(io.BytesIO(data))
    assert image.size == (40, 30)
    assert np.array_equal(np.asarray(image.convert("RGBA")), canvas.buffer)


def test_save_to_png(canvas, tmp_path):
    target = tmp_path / "drawing.png"
    canvas.save_to_png(str(target))
    with Image.open(target) as image:
        assert image.size == (40, 30)


def test_steep_line_has_no_gaps(canvas):
    canvas.draw_line(3, 0, 9, 29, 1, RED)
    rows = {int(y) for y, _ in painted(canvas)}
    assert rows == set(range(30))
    assert canvas.get_pixel(3, 0) == RED
    assert canvas.get_pixel(9, 29) == RED


def test_line_of_zero_length_is_a_dab(canvas):
    canvas.draw_line(7, 7, 7, 7, 3, RED)
    assert canvas.get_pixel(7, 7) == RED
    assert canvas.get_pixel(8, 7) == RED
