import numpy as np
import pytest

from history import History

RED = (255, 0, 0, 255)


def test_empty_history(canvas):
    history = History()
    assert len(history) == 0
    assert not history.can_undo
    assert history.undo(canvas) is False
    assert np.all(canvas.buffer == 255)


def test_snapshots_are_read_only(canvas):
    snapshot = History().push(canvas)
    with pytest.raises(ValueError):
        snapshot[0, 0] = RED


def test_undo_restores_snapshots_in_reverse_order(canvas):
    history = History()
    history.push(canvas)
    canvas.set_pixel(0, 0, RED)
    history.push(canvas)
    canvas.set_pixel(1, 1, RED)

    assert history.undo(canvas)
    assert canvas.get_pixel(0, 0) == RED
    assert canvas.get_pixel(1, 1) == (255, 255, 255, 255)
    assert history.undo(canvas)
    assert np.all(canvas.buffer == 255)
    assert history.undo(canvas) is False


def test_restored_canvas_stays_writable(canvas):
    history = History()
    history.push(canvas)
    history.undo(canvas)
    canvas.set_pixel(0, 0, RED)
    assert canvas.get_pixel(0, 0) == RED


def test_clear(canvas):
    history = History()
    history.push(canvas)
    history.push(canvas)
    history.clear()
    assert len(history) == 0
