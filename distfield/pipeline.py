from collections import namedtuple

from loguru import logger
import numpy as np

from .boundary import extract_boundary
from .config import load_config
from .distance import distance_transform_2d
from .encoder import encode
from .errors import ConfigurationError
from .grid import PixelGrid

SignedDistanceResult = namedtuple(
    "SignedDistanceResult", ["inside", "cost", "squared", "field", "quantized"])


def generate_sdf(pixels, cfg=None, write_back=False) -> SignedDistanceResult:
    """Greyscale pixels in, signed distance field out.

    `pixels` is a PixelGrid or a 2D uint8 array. With `write_back` the
    quantized samples replace the caller's own samples (the PixelGrid buffer
    or the array itself), once every stage has succeeded. Anything else,
    such as a nested list or a read-only array, cannot be written back.
    """
    if cfg is None:
        cfg = load_config()
    grid = pixels if isinstance(pixels, PixelGrid) else None
    samples = grid.array if grid is not None else np.asarray(pixels)
    if write_back and grid is None:
        if not isinstance(pixels, np.ndarray) or not pixels.flags.writeable:
            raise ConfigurationError(
                "write_back needs a PixelGrid or a writable numpy array", "grid")

    cost, inside = extract_boundary(samples, cfg.threshold, cfg.outside,
                                    cfg.boundary_rule, cfg.max_dimension)
    squared = distance_transform_2d(cost, cfg.max_dimension)
    field, quantized = encode(squared, inside, cfg.scale, cfg.bias,
                              cfg.inside_offset, cfg.outside_offset)
    logger.debug(f"signed distance range [{field.min():.3f}, {field.max():.3f}]")

    if write_back:
        if grid is not None:
            grid.write(quantized)
        else:
            np.copyto(pixels, quantized, casting="unsafe")
    return SignedDistanceResult(inside, cost, squared, field, quantized)
