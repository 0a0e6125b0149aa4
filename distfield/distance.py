"""
'Distance Transform of Sampled Functions'
by Felzenszwalb and Huttenlocher.

Exact squared Euclidean distance transform in O(n) per line, applied
separably over rows and then columns of a 2D cost grid.
"""

from collections import namedtuple

from loguru import logger
from numba import jit
import numpy as np

from .errors import ConfigurationError
from .grid import allocate

MAX_DIMENSION = 4096

Envelope = namedtuple("Envelope", ["apex", "boundary"])


def unbounded_cost(max_dimension: int = MAX_DIMENSION) -> float:
    # Larger than any squared distance (w-1)^2 + (h-1)^2 on a grid whose sides
    # are at most max_dimension, and still an exact integer in float64 after
    # adding (n-1)^2.
    return float(2 * max_dimension * max_dimension + 1)


def check_dimension(n, max_dimension=MAX_DIMENSION, what="line", stage="transform"):
    if max_dimension < 1:
        raise ConfigurationError(
            f"max_dimension must be at least 1, got {max_dimension}", stage)
    if n <= 0:
        raise ConfigurationError(
            f"{what} length must be positive, got {n}", stage)
    if n > max_dimension:
        raise ConfigurationError(
            f"{what} length {n} exceeds the supported maximum of {max_dimension}",
            stage)


def check_costs(f):
    if not np.all(np.isfinite(f)):
        raise ConfigurationError(
            "costs must be finite; mark unreachable samples with unbounded_cost()",
            "transform")


def lower_envelope(f, max_dimension=MAX_DIMENSION) -> Envelope:
    f = np.ascontiguousarray(f, dtype=np.float64)
    n = f.shape[0] if f.ndim == 1 else 0
    check_dimension(n, max_dimension)
    check_costs(f)
    z = allocate(n + 1, np.float64, "transform")
    v = allocate(n, np.int64, "transform")
    k = _build_envelope(f, z, v, n)
    return Envelope(v[: k + 1].copy(), z[: k + 2].copy())


def distance_transform_1d(f, max_dimension=MAX_DIMENSION) -> np.ndarray:
    """d[q] = min over p of (q - p)^2 + f[p]."""
    f = np.ascontiguousarray(f, dtype=np.float64)
    n = f.shape[0] if f.ndim == 1 else 0
    check_dimension(n, max_dimension)
    check_costs(f)
    d = allocate(n, np.float64, "transform")
    z = allocate(n + 1, np.float64, "transform")
    v = allocate(n, np.int64, "transform")
    edt(f, d, z, v, n)
    return d


def distance_transform_2d(cost: np.ndarray, max_dimension=MAX_DIMENSION, out=None) -> np.ndarray:
    """Rows first, then columns. `out` may be `cost` itself to work in place."""
    cost = np.asarray(cost)
    if cost.ndim != 2:
        raise ConfigurationError(
            f"cost grid must be 2D, got shape {cost.shape}", "transform")
    height, width = cost.shape
    check_dimension(width, max_dimension, "row")
    check_dimension(height, max_dimension, "column")
    check_costs(cost)
    if out is not None and (out.shape != cost.shape or out.dtype != np.float64):
        raise ConfigurationError(
            f"output grid must be float64 of shape {cost.shape}", "transform")

    capacity = max(height, width)
    scratch = allocate(cost.shape, np.float64, "transform")
    f = allocate(capacity, np.float64, "transform")
    d = allocate(capacity, np.float64, "transform")
    z = allocate(capacity + 1, np.float64, "transform")
    v = allocate(capacity, np.int64, "transform")

    scratch[...] = cost
    logger.debug(f"distance transform over {width}x{height} grid")
    _generate_udt_native(width, height, f, d, z, v, scratch)

    if out is None:
        return scratch
    np.copyto(out, scratch)
    return out


@jit(nopython=True, cache=True)
def _generate_udt_native(width, height, f, d, z, v, result):
    for y in range(height):
        f[:width] = result[y, :]
        edt(f, d, z, v, width)
        result[y, :] = d[:width]
    for x in range(width):
        f[:height] = result[:, x]
        edt(f, d, z, v, height)
        result[:, x] = d[:height]


@jit(nopython=True, cache=True)
def _build_envelope(f, z, v, n):
    k = 0
    v[0] = 0
    z[0] = -np.inf
    z[1] = np.inf

    for q in range(1, n):
        p = v[k]
        s = ((f[q] + q * q) - (f[p] + p * p)) / (2.0 * q - 2.0 * p)
        # ties drop the older parabola
        while s <= z[k]:
            k = k - 1
            p = v[k]
            s = ((f[q] + q * q) - (f[p] + p * p)) / (2.0 * q - 2.0 * p)

        k = k + 1
        v[k] = q
        z[k] = s
        z[k + 1] = np.inf
    return k


@jit(nopython=True, cache=True)
def edt(f, d, z, v, n):
    #   Find the lower envelope of a sequence of parabolas.
    #   f...source data (returns the Y of the parabola vertex at X)
    #   d...destination data (final distance values are written here)
    #   z...temporary used to store X coords of parabola intersections
    #   v...temporary used to store X coords of parabola vertices
    #   n...number of samples in "f" to process
    _build_envelope(f, z, v, n)

    k = 0
    for q in range(n):
        while z[k + 1] < float(q):
            k = k + 1
        dx = q - v[k]
        d[q] = dx * dx + f[v[k]]
