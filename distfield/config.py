from dataclasses import dataclass

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from .boundary import DEFAULT_THRESHOLD, BoundaryRule
from .distance import MAX_DIMENSION
from .encoder import DEFAULT_BIAS, DEFAULT_SCALE, INSIDE_OFFSET
from .errors import ConfigurationError


@dataclass
class SDFConfig:
    threshold: int = DEFAULT_THRESHOLD
    scale: float = DEFAULT_SCALE
    bias: float = DEFAULT_BIAS
    max_dimension: int = MAX_DIMENSION
    outside: bool = False
    boundary_rule: BoundaryRule = BoundaryRule.FOREGROUND
    inside_offset: float = INSIDE_OFFSET
    outside_offset: float = 0.0


def load_config(path=None, overrides=()) -> DictConfig:
    """Defaults, then an optional YAML file, then `key=value` overrides."""
    try:
        cfg = OmegaConf.structured(SDFConfig)
        if path is not None:
            cfg = OmegaConf.merge(cfg, OmegaConf.load(path))
        if overrides:
            cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    except (OmegaConfBaseException, OSError) as err:
        raise ConfigurationError(str(err), "config") from err
    validate_config(cfg)
    return cfg


def validate_config(cfg: DictConfig):
    if not 0 <= cfg.threshold <= 255:
        raise ConfigurationError(
            f"threshold must lie in [0, 255], got {cfg.threshold}", "config")
    if cfg.max_dimension < 1:
        raise ConfigurationError(
            f"max_dimension must be at least 1, got {cfg.max_dimension}", "config")
    if cfg.scale <= 0:
        raise ConfigurationError(f"scale must be positive, got {cfg.scale}", "config")
