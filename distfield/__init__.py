from .boundary import BoundaryRule, binarize, extract_boundary, find_boundary, seed_costs, shifted_neighbours
from .config import SDFConfig, load_config
from .distance import (
    MAX_DIMENSION,
    Envelope,
    distance_transform_1d,
    distance_transform_2d,
    lower_envelope,
    unbounded_cost,
)
from .encoder import encode, quantize, signed_distance
from .errors import ConfigurationError, DistanceFieldError, ResourceExhaustedError
from .grid import PixelGrid
from .pipeline import SignedDistanceResult, generate_sdf
