import numpy as np

from .errors import ConfigurationError, ResourceExhaustedError


def allocate(shape, dtype, stage: str, fill=None) -> np.ndarray:
    try:
        if fill is None:
            return np.empty(shape, dtype=dtype)
        return np.full(shape, fill, dtype=dtype)
    except MemoryError as err:
        raise ResourceExhaustedError(
            f"could not allocate {dtype} buffer of shape {shape}", stage) from err


class PixelGrid:
    """8-bit greyscale samples over a byte buffer with a row pitch.

    The buffer is borrowed, not copied: `write` stores samples back into it
    and leaves the padding bytes at the end of each row untouched.
    """

    def __init__(self, buffer, width: int, height: int, pitch: int = None):
        if pitch is None:
            pitch = width
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"grid dimensions must be positive, got {width}x{height}", "grid")
        if pitch < width:
            raise ConfigurationError(
                f"pitch {pitch} is smaller than width {width}", "grid")
        needed = pitch * (height - 1) + width
        if len(buffer) < needed:
            raise ConfigurationError(
                f"buffer holds {len(buffer)} bytes, {width}x{height} at pitch {pitch} needs {needed}",
                "grid")
        self.buffer = buffer
        self.width = width
        self.height = height
        self.pitch = pitch

    @classmethod
    def from_array(cls, pixels: np.ndarray):
        pixels = np.asarray(pixels)
        if pixels.ndim != 2:
            raise ConfigurationError(
                f"pixel array must be 2D, got shape {pixels.shape}", "grid")
        height, width = pixels.shape
        buffer = bytearray(np.ascontiguousarray(pixels, dtype=np.uint8).tobytes())
        return cls(buffer, width, height)

    @property
    def shape(self):
        return self.height, self.width

    @property
    def array(self) -> np.ndarray:
        """(height, width) uint8 view over the buffer, writable if the buffer is."""
        flat = np.frombuffer(self.buffer, dtype=np.uint8)
        # the last row may be unpadded
        rows = np.lib.stride_tricks.as_strided(
            flat, shape=(self.height, self.width), strides=(self.pitch, 1),
            writeable=flat.flags.writeable)
        return rows

    def write(self, samples: np.ndarray):
        samples = np.asarray(samples)
        if samples.shape != self.shape:
            raise ConfigurationError(
                f"samples of shape {samples.shape} do not fit grid {self.shape}", "grid")
        view = self.array
        if not view.flags.writeable:
            raise ConfigurationError("pixel buffer is read-only", "grid")
        view[...] = samples.astype(np.uint8)

    def __repr__(self):
        return f"PixelGrid({self.width}x{self.height}, pitch={self.pitch})"
