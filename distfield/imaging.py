import imageio.v3 as iio
import numpy as np

from .errors import DistanceFieldError
from .grid import PixelGrid


def load_greyscale(path) -> PixelGrid:
    try:
        pixels = iio.imread(path, mode="L")
    except (OSError, ValueError) as err:
        raise DistanceFieldError(f"failed to load {path}: {err}", "io") from err
    return PixelGrid.from_array(pixels)


def save_greyscale(path, grid: PixelGrid):
    try:
        iio.imwrite(path, np.ascontiguousarray(grid.array))
    except (OSError, ValueError) as err:
        raise DistanceFieldError(f"failed to save {path}: {err}", "io") from err


def dump_field(field: np.ndarray, sink):
    """Raw float32 samples, row-major, native byte order, no header."""
    sink.write(np.ascontiguousarray(field, dtype=np.float32).tobytes())


def write_field(path, field: np.ndarray):
    try:
        with open(path, "wb") as fp:
            dump_field(field, fp)
    except OSError as err:
        raise DistanceFieldError(f"failed to write {path}: {err}", "io") from err
