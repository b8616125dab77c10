"""Initial terrain grid: land/water split and biomes for every tile."""

import structlog

from .biomes import BiomeClassifier
from .config import MapConfig, require_resolved
from .exceptions import ConfigurationError
from .hexgrid import coords_within
from .noise import HeightSampler
from .tile_types import Biome, TileType
from .tiles import TileDefinition, TileMap, set_tile

logger = structlog.get_logger()


def build_terrain(
    config: MapConfig,
    height_sampler: HeightSampler,
    classifier: BiomeClassifier | None = None,
) -> TileMap:
    """Create one tile per coordinate within the map radius.

    Each tile's height is sampled once. Tiles at or below the water level are
    water; the rest start as land. Biomes come from the classifier when
    ``config.generate_biomes`` is set, otherwise land is grassland.

    Args:
        config: Resolved map configuration.
        height_sampler: Height provider called as (coord, seed, radius).
        classifier: Biome classifier; required when biomes are generated.

    Returns:
        Tile map keyed by x then z.

    Raises:
        ConfigurationError: If the config has no seed, or biomes are
            requested without a classifier.
    """
    seed = require_resolved(config)
    if config.generate_biomes and classifier is None:
        raise ConfigurationError("generate_biomes requires a BiomeClassifier")

    tiles: TileMap = {}
    for coord in coords_within(config.radius):
        height = height_sampler(coord, seed, config.radius)

        if height <= config.water_level:
            tile_type = TileType.WATER
            biome = Biome.WATER
        else:
            tile_type = TileType.LAND
            biome = Biome.GRASSLAND
            if config.generate_biomes:
                biome = classifier.classify(coord)

        set_tile(tiles, TileDefinition(position=coord, type=tile_type, biome=biome))

    logger.debug("terrain_built", radius=config.radius, rows=len(tiles))
    return tiles
