import numpy as np

from .errors import ConfigurationError

DEFAULT_SCALE = 4.0
DEFAULT_BIAS = 127.5
INSIDE_OFFSET = 0.5


def signed_distance(squared: np.ndarray, inside: np.ndarray,
                    inside_offset=INSIDE_OFFSET, outside_offset=0.0) -> np.ndarray:
    """Negative inside the foreground, positive outside.

    Inside pixels are pushed a further `inside_offset` below zero, so seeds
    on the boundary read -0.5 rather than 0. Outside magnitudes are left as
    they are unless `outside_offset` is given.
    """
    squared = np.asarray(squared)
    inside = np.asarray(inside, dtype=bool)
    if squared.shape != inside.shape:
        raise ConfigurationError(
            f"mask shape {inside.shape} does not match distance grid {squared.shape}",
            "encode")
    if np.any(squared < 0):
        raise ConfigurationError("squared distances must be non-negative", "encode")

    # root in float64, offset applied in float32
    magnitude = np.sqrt(squared.astype(np.float64)).astype(np.float32)
    field = np.where(inside,
                     -magnitude - np.float32(inside_offset),
                     magnitude + np.float32(outside_offset))
    return field.astype(np.float32)


def quantize(field: np.ndarray, scale=DEFAULT_SCALE, bias=DEFAULT_BIAS) -> np.ndarray:
    if not np.isfinite(scale) or not np.isfinite(bias):
        raise ConfigurationError(
            f"scale and bias must be finite, got {scale} and {bias}", "encode")
    # round half up, then saturate
    levels = np.floor(bias + np.asarray(field, dtype=np.float64) * scale + 0.5)
    return np.clip(levels, 0, 255).astype(np.uint8)


def encode(squared, inside, scale=DEFAULT_SCALE, bias=DEFAULT_BIAS,
           inside_offset=INSIDE_OFFSET, outside_offset=0.0):
    field = signed_distance(squared, inside, inside_offset, outside_offset)
    return field, quantize(field, scale, bias)
