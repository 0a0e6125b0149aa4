from enum import Enum

from loguru import logger
import numpy as np

from .distance import MAX_DIMENSION, check_dimension, unbounded_cost
from .errors import ConfigurationError
from .grid import allocate

DEFAULT_THRESHOLD = 128


class BoundaryRule(Enum):
    # inside AND any neighbour differs
    FOREGROUND = "foreground"
    # (inside AND left differs) OR right differs OR up differs OR down differs.
    # Also seeds background pixels sitting left of, below or above a
    # foreground pixel.
    LEGACY = "legacy"


def binarize(pixels, threshold=DEFAULT_THRESHOLD) -> np.ndarray:
    if not 0 <= threshold <= 255:
        raise ConfigurationError(
            f"threshold must lie in [0, 255], got {threshold}", "boundary")
    pixels = np.asarray(pixels)
    if pixels.ndim != 2:
        raise ConfigurationError(
            f"pixel grid must be 2D, got shape {pixels.shape}", "boundary")
    return pixels > threshold


def shifted_neighbours(mask: np.ndarray, outside=False):
    """Left, right, up and down neighbour of every pixel.

    Reads past the grid edge return `outside`.
    """
    padded = np.pad(mask, 1, mode="constant", constant_values=outside)
    left = padded[1:-1, :-2]
    right = padded[1:-1, 2:]
    up = padded[:-2, 1:-1]
    down = padded[2:, 1:-1]
    return left, right, up, down


def find_boundary(mask: np.ndarray, outside=False, rule=BoundaryRule.FOREGROUND) -> np.ndarray:
    rule = BoundaryRule(rule)
    left, right, up, down = shifted_neighbours(mask, outside)
    if rule is BoundaryRule.LEGACY:
        return (mask & (left != mask)) | (right != mask) | (up != mask) | (down != mask)
    return mask & ((left != mask) | (right != mask) | (up != mask) | (down != mask))


def seed_costs(boundary: np.ndarray, unbounded: float) -> np.ndarray:
    cost = allocate(boundary.shape, np.float64, "boundary", fill=unbounded)
    cost[boundary] = 0.0
    return cost


def extract_boundary(pixels, threshold=DEFAULT_THRESHOLD, outside=False,
                     rule=BoundaryRule.FOREGROUND, max_dimension=MAX_DIMENSION):
    """Binarize `pixels` and seed a cost grid at its boundary pixels.

    Returns `(cost, inside)`: cost is 0 at boundary pixels and
    `unbounded_cost(max_dimension)` elsewhere, inside is the binarized mask.
    """
    pixels = np.asarray(pixels)
    if pixels.ndim == 2:
        # the sentinel only dominates on grids within max_dimension
        height, width = pixels.shape
        check_dimension(width, max_dimension, "row", "boundary")
        check_dimension(height, max_dimension, "column", "boundary")
    inside = binarize(pixels, threshold)
    boundary = find_boundary(inside, outside, rule)
    logger.debug(f"{int(boundary.sum())} boundary pixels out of {boundary.size}")
    return seed_costs(boundary, unbounded_cost(max_dimension)), inside
