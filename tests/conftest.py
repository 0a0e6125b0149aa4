"""Shared pytest fixtures for distfield tests."""

import numpy as np
import pytest

from distfield import unbounded_cost


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def unbounded():
    return unbounded_cost()


@pytest.fixture
def dot_image():
    """5x5 background with a single foreground pixel in the centre."""
    pixels = np.zeros((5, 5), dtype=np.uint8)
    pixels[2, 2] = 255
    return pixels


@pytest.fixture
def disc_image():
    """Filled disc of radius 6 on a 17x21 canvas."""
    yy, xx = np.mgrid[:17, :21]
    return np.where((yy - 8) ** 2 + (xx - 10) ** 2 <= 36, 200, 10).astype(np.uint8)


def brute_force_1d(f):
    q = np.arange(len(f))[:, None]
    p = np.arange(len(f))[None, :]
    return ((q - p) ** 2 + np.asarray(f)[None, :]).min(axis=1)


def brute_force_2d(cost):
    height, width = cost.shape
    ys, xs = np.mgrid[:height, :width]
    out = np.empty(cost.shape)
    for y in range(height):
        for x in range(width):
            out[y, x] = ((xs - x) ** 2 + (ys - y) ** 2 + cost).min()
    return out
