"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest


# Synthetic 160x120 frames. Object ids after labeling follow row-major first
# appearance, so in SCENE: speck=1, rectangle=2, disc=3, bar=4.

FRAME_WIDTH = 160
FRAME_HEIGHT = 120

DISC_CENTER = (40, 60)
DISC_RADIUS = 20
RECT_BOUNDS = (80, 10, 70, 30)    # x, y, w, h: wider than tall, larger than the disc
BAR_BOUNDS = (80, 100, 60, 4)     # thin and wide
SPECK_BOUNDS = (150, 5, 3, 3)     # below the frame-relative size threshold


def make_frame(channels: int = 0) -> np.ndarray:
    shape = (FRAME_HEIGHT, FRAME_WIDTH) if channels == 0 else (FRAME_HEIGHT, FRAME_WIDTH, channels)
    return np.zeros(shape, dtype=np.uint8)


def add_disc(frame: np.ndarray, cx: int, cy: int, r: int) -> np.ndarray:
    yy, xx = np.mgrid[: frame.shape[0], : frame.shape[1]]
    frame[(xx - cx) ** 2 + (yy - cy) ** 2 <= r * r] = 255
    return frame


def add_rect(frame: np.ndarray, x: int, y: int, w: int, h: int) -> np.ndarray:
    frame[y : y + h, x : x + w] = 255
    return frame


def make_scene(channels: int = 0) -> np.ndarray:
    frame = make_frame(channels)
    add_rect(frame, *SPECK_BOUNDS)
    add_rect(frame, *RECT_BOUNDS)
    add_disc(frame, *DISC_CENTER, DISC_RADIUS)
    add_rect(frame, *BAR_BOUNDS)
    return frame


@pytest.fixture
def scene_frame() -> np.ndarray:
    return make_scene()


@pytest.fixture
def scene_frame_rgb() -> np.ndarray:
    return make_scene(channels=3)


@pytest.fixture
def disc_frame() -> np.ndarray:
    return add_disc(make_frame(), *DISC_CENTER, DISC_RADIUS)


@pytest.fixture
def empty_frame() -> np.ndarray:
    return make_frame()


@pytest.fixture
def square_hull() -> np.ndarray:
    return np.array([[0, 0], [10, 0], [10, 10], [0, 10]], dtype=np.int64)


@pytest.fixture
def wide_hull() -> np.ndarray:
    return np.array([[0, 0], [40, 0], [40, 10], [0, 10]], dtype=np.int64)
