"""Map generation configuration models."""

import secrets
import tomllib
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .exceptions import ConfigurationError


class BiomeStrategy(str, Enum):
    """How land tiles away from the coast pick their biome."""

    HEIGHT_BASED = "height_based"
    REGION_GROWN = "region_grown"


class NoiseConfig(BaseModel):
    """Decaying noise parameters for the island height field."""

    model_config = ConfigDict(frozen=True)

    wavelength: float = Field(default=8.0, gt=0, description="Base wavelength in tiles")
    octaves: int = Field(default=4, ge=1, description="Number of octaves for fBm")
    lacunarity: float = Field(default=2.0, gt=0, description="Frequency multiplier per octave")
    gain: float = Field(default=0.5, gt=0, description="Amplitude multiplier per octave")
    falloff_start: float = Field(
        default=0.45, ge=0, description="Normalized radius where falloff begins"
    )
    falloff_end: float = Field(
        default=1.0, gt=0, description="Normalized radius where falloff reaches max"
    )
    coast_drop: float = Field(default=1.4, ge=0, description="Height drop at falloff end")
    center_lift: float = Field(
        default=0.25, description="Height added everywhere before the falloff"
    )
    special_wavelength: float = Field(
        default=4.0, gt=0, description="Wavelength of the special-biome noise channel"
    )
    special_threshold: float = Field(
        default=-0.1, description="Special-biome noise below this marks a special tile"
    )

    @model_validator(mode="after")
    def _check_falloff_band(self) -> "NoiseConfig":
        if self.falloff_end <= self.falloff_start:
            raise ValueError(
                f"falloff_end ({self.falloff_end}) must exceed "
                f"falloff_start ({self.falloff_start})"
            )
        return self


class DebugConfig(BaseModel):
    """Renderer debug switches. Carried through generation untouched."""

    model_config = ConfigDict(frozen=True)

    show_coords: bool = False
    visualize_biomes: bool = False


class MapConfig(BaseModel):
    """Complete island map configuration."""

    model_config = ConfigDict(frozen=True)

    radius: int = Field(default=20, ge=0, description="Map radius in hex steps")
    depth_scale: float = Field(default=10.0, description="Vertical scale for renderers")
    total_towns: int = Field(default=5, ge=0, description="Target number of towns")
    generate_biomes: bool = Field(default=False, description="Classify land biomes")
    water_level: float = Field(
        default=-0.4, allow_inf_nan=False, description="Heights at or below are water"
    )
    seed: int | None = Field(
        default=None, ge=0, description="Random seed (None = chosen at generation time)"
    )
    biome_strategy: BiomeStrategy = Field(default=BiomeStrategy.HEIGHT_BASED)

    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    debug: DebugConfig = Field(default_factory=DebugConfig)

    @property
    def is_resolved(self) -> bool:
        """Whether every generation-time default has a concrete value."""
        return self.seed is not None

    def resolved(self) -> "MapConfig":
        """Return a copy with a concrete seed, picking one if unset."""
        if self.is_resolved:
            return self
        return self.model_copy(update={"seed": secrets.randbits(31)})


def require_resolved(config: MapConfig) -> int:
    """Return the config's seed, refusing configs that were never resolved.

    Raises:
        ConfigurationError: If the seed is still unset.
    """
    if config.seed is None:
        raise ConfigurationError(
            "Map config must be resolved (seed chosen) before sampling noise"
        )
    return config.seed


def load_config(config_path: Path) -> MapConfig:
    """Load a map configuration from a TOML file.

    Settings live under a ``[map]`` table; nested ``[map.noise]`` and
    ``[map.debug]`` tables are optional.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed MapConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If a value is out of range.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return MapConfig.model_validate(data.get("map", {}))
