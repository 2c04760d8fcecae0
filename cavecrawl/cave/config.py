"""Generation parameters for one cave map and the seed modes that control reproducibility."""
from dataclasses import asdict, dataclass, replace as _replace
from typing import Any, Dict

from ..errors import ConfigurationInvalid

SEED_MODE_FRESH = "fresh"  # new seed on every generate() call
SEED_MODE_FIXED = "fixed"  # seed taken from GenerationParameters.seed
SEED_MODES = (SEED_MODE_FRESH, SEED_MODE_FIXED)


@dataclass(frozen=True)
class GenerationParameters:
    width: int = 50
    height: int = 50
    seed: int = 1234
    seed_mode: str = SEED_MODE_FRESH
    # floor carve
    noise_scale: float = 0.1
    threshold: float = 0.0
    min_region_size: int = 20
    # interior walls
    wall_noise_scale: float = 0.18
    wall_noise_threshold: float = 0.62
    wall_seed_jitter: float = 0.12
    interior_wall_keep_away: int = 1
    wall_smooth_iterations: int = 2
    ca_birth: int = 5
    ca_death: int = 2
    # population
    treasure_count: int = 10
    enemy_count: int = 5
    # interaction
    wall_break_threshold: int = 3
    # retry bounds
    max_placement_attempts: int = 10_000
    max_generation_attempts: int = 8
    require_goal_reachable: bool = False

    def validate(self) -> "GenerationParameters":
        """Raise ConfigurationInvalid on the first out-of-range field; returns self."""
        if self.width < 8 or self.height < 8:
            raise ConfigurationInvalid("width", "grid must be at least 8x8", "min")
        if self.seed_mode not in SEED_MODES:
            raise ConfigurationInvalid("seed_mode", f"expected one of {SEED_MODES}", "choice")
        if self.noise_scale <= 0 or self.wall_noise_scale <= 0:
            raise ConfigurationInvalid("noise_scale", "noise scales must be positive", "min")
        if self.min_region_size < 0:
            raise ConfigurationInvalid("min_region_size", "must not be negative", "min")
        if self.wall_seed_jitter < 0:
            raise ConfigurationInvalid("wall_seed_jitter", "must not be negative", "min")
        if self.interior_wall_keep_away < 0:
            raise ConfigurationInvalid("interior_wall_keep_away", "must not be negative", "min")
        if self.wall_smooth_iterations < 0:
            raise ConfigurationInvalid("wall_smooth_iterations", "must not be negative", "min")
        for name in ("ca_birth", "ca_death"):
            if not 0 <= getattr(self, name) <= 8:
                raise ConfigurationInvalid(name, "neighbour thresholds range 0..8", "range")
        for name in ("treasure_count", "enemy_count"):
            if getattr(self, name) < 0:
                raise ConfigurationInvalid(name, "must not be negative", "min")
        if self.wall_break_threshold < 1:
            raise ConfigurationInvalid("wall_break_threshold", "must be at least 1", "min")
        if self.max_placement_attempts < 1 or self.max_generation_attempts < 1:
            raise ConfigurationInvalid("max_generation_attempts", "retry bounds must be at least 1", "min")
        return self

    @property
    def deterministic(self) -> bool:
        return self.seed_mode == SEED_MODE_FIXED

    def replace(self, **changes: Any) -> "GenerationParameters":
        return _replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["GenerationParameters", "SEED_MODE_FRESH", "SEED_MODE_FIXED", "SEED_MODES"]
