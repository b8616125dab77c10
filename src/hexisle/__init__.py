"""Procedural hex island map generation.

Builds a hexagonal tile grid from decaying noise, keeps the single landmass
connected to the map center, and places towns under a shrinking spacing
constraint.
"""

from .biomes import BiomeClassifier
from .config import BiomeStrategy, DebugConfig, MapConfig, NoiseConfig, load_config
from .exceptions import ConfigurationError, MapGenerationError, NoiseProviderError
from .generator import MapDefinition, generate_map, generate_map_async
from .hexgrid import AxialCoord, coords_within, cube_distance, ring, spiral
from .island import filter_central_island, reachable_from_origin
from .noise import DecayingNoise, FieldNoise, HeightSampler
from .settlements import (
    PlacementProgress,
    PlacementReport,
    PlacementState,
    TownPlacer,
    place_towns,
)
from .terrain import build_terrain
from .tile_types import Biome, TileType
from .tiles import TileDefinition, TileMap, sample_random_tiles
from .validation import ValidationResult, validate_map

__all__ = [
    # Config
    "BiomeStrategy",
    "DebugConfig",
    "MapConfig",
    "NoiseConfig",
    "load_config",
    # Types
    "AxialCoord",
    "Biome",
    "TileType",
    "TileDefinition",
    "TileMap",
    "MapDefinition",
    # Hex grid
    "coords_within",
    "cube_distance",
    "ring",
    "spiral",
    # Noise
    "DecayingNoise",
    "FieldNoise",
    "HeightSampler",
    # Stages
    "BiomeClassifier",
    "build_terrain",
    "filter_central_island",
    "reachable_from_origin",
    "TownPlacer",
    "PlacementProgress",
    "PlacementReport",
    "PlacementState",
    "place_towns",
    "sample_random_tiles",
    # Pipeline
    "generate_map",
    "generate_map_async",
    # Validation
    "ValidationResult",
    "validate_map",
    # Exceptions
    "MapGenerationError",
    "ConfigurationError",
    "NoiseProviderError",
]
