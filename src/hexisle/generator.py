"""Main map generation orchestration."""

from dataclasses import dataclass
from typing import Iterator

import numpy as np
import structlog

from .biomes import BiomeClassifier
from .config import MapConfig
from .hexgrid import AxialCoord
from .island import filter_central_island
from .noise import DecayingNoise, HeightSampler, checked_sampler
from .settlements import Checkpoint, PlacementReport, TownPlacer
from .terrain import build_terrain
from .tile_types import Biome, TileType
from .tiles import TileDefinition, TileMap, count_tiles, get_tile, iter_tiles

logger = structlog.get_logger()


@dataclass(frozen=True)
class MapDefinition:
    """A finished island map.

    Owned by the caller once returned. Fields cannot be reassigned;
    renderers should treat tile type and biome as read-only.
    """

    config: MapConfig
    tiles: TileMap
    placement: PlacementReport

    def get(self, coord: AxialCoord) -> TileDefinition | None:
        return get_tile(self.tiles, coord)

    def iter_tiles(self) -> Iterator[TileDefinition]:
        return iter_tiles(self.tiles)

    def count(self, tile_type: TileType) -> int:
        return count_tiles(self.tiles, tile_type)

    @property
    def tile_count(self) -> int:
        return sum(len(row) for row in self.tiles.values())

    @property
    def towns(self) -> list[TileDefinition]:
        return [tile for tile in self.iter_tiles() if tile.type == TileType.TOWN]


class _Pipeline:
    """One generation run: resolved config, sampler, rng and classifier."""

    def __init__(self, config: MapConfig, height_sampler: HeightSampler | None):
        self.config = config.resolved()
        logger.info("map_seed_resolved", seed=self.config.seed)

        sampler = height_sampler or DecayingNoise(self.config.noise)
        self.height_sampler = checked_sampler(sampler)
        self.rng = np.random.default_rng(self.config.seed)
        self.classifier = BiomeClassifier(self.config, self.height_sampler, self.rng)

    def build_island(self) -> TileMap:
        """Run the terrain and connectivity stages."""
        tiles = build_terrain(self.config, self.height_sampler, self.classifier)
        filter_central_island(tiles, self.config, self.height_sampler)
        return tiles

    def placer(self, tiles: TileMap) -> TownPlacer:
        return TownPlacer(tiles, self.config, self.rng)

    def finish(self, tiles: TileMap, report: PlacementReport) -> MapDefinition:
        map_def = MapDefinition(config=self.config, tiles=tiles, placement=report)
        _log_map_stats(map_def)
        return map_def


def generate_map(
    config: MapConfig,
    height_sampler: HeightSampler | None = None,
    checkpoint: Checkpoint | None = None,
) -> MapDefinition:
    """Generate a complete island map.

    Stages run strictly in order: terrain grid, central island filter, town
    placement. Any failure propagates; no partial map is returned.

    Args:
        config: Map configuration. An unset seed is chosen here and logged.
        height_sampler: Height provider called as (coord, seed, radius).
            Defaults to DecayingNoise built from ``config.noise``.
        checkpoint: Called between town placement rounds.

    Returns:
        MapDefinition with the resolved config and placement report.

    Raises:
        NoiseProviderError: If the height sampler returns a non-finite value.
    """
    pipeline = _Pipeline(config, height_sampler)
    tiles = pipeline.build_island()
    report = pipeline.placer(tiles).run(checkpoint)
    return pipeline.finish(tiles, report)


async def generate_map_async(
    config: MapConfig,
    height_sampler: HeightSampler | None = None,
) -> MapDefinition:
    """Generate a map, yielding to the event loop between placement rounds.

    Cancelling the awaiting task stops generation at a round boundary and
    discards the map.
    """
    pipeline = _Pipeline(config, height_sampler)
    tiles = pipeline.build_island()
    report = await pipeline.placer(tiles).run_async()
    return pipeline.finish(tiles, report)


def _log_map_stats(map_def: MapDefinition) -> None:
    """Log tile type and biome counts."""
    total = map_def.tile_count
    types = {tile_type.value: map_def.count(tile_type) for tile_type in TileType}
    biomes = {biome.value: 0 for biome in Biome}
    for tile in map_def.iter_tiles():
        biomes[tile.biome.value] += 1

    logger.info(
        "map_stats",
        tiles=total,
        towns_placed=map_def.placement.placed,
        towns_requested=map_def.placement.requested,
        **types,
    )
    logger.debug("biome_stats", **biomes)
