"""Island connectivity: keep only the landmass reachable from the center."""

from collections import deque

import structlog

from .config import MapConfig, require_resolved
from .hexgrid import ORIGIN, AxialCoord, cube_distance, neighbors
from .noise import HeightSampler
from .tile_types import Biome, TileType
from .tiles import TileMap, get_tile, iter_tiles

logger = structlog.get_logger()


def flood_from_origin(
    config: MapConfig,
    height_sampler: HeightSampler,
) -> set[AxialCoord]:
    """Find every coordinate connected to the origin by above-water heights.

    The origin is seeded as reachable without a height check. Each newly
    seen neighbour inside the map radius is classified once: at or below the
    water level it is a barrier and never revisited, otherwise it is
    reachable and expanded.

    Returns:
        Reachable coordinates, origin included.
    """
    seed = require_resolved(config)

    classified: dict[AxialCoord, bool] = {ORIGIN: True}
    to_visit = deque([ORIGIN])

    while to_visit:
        tile = to_visit.popleft()
        for neighbor in neighbors(tile):
            if neighbor in classified or cube_distance(neighbor) > config.radius:
                continue

            height = height_sampler(neighbor, seed, config.radius)
            if height <= config.water_level:
                classified[neighbor] = False
            else:
                classified[neighbor] = True
                to_visit.append(neighbor)

    return {coord for coord, reachable in classified.items() if reachable}


def filter_central_island(
    tiles: TileMap,
    config: MapConfig,
    height_sampler: HeightSampler,
) -> int:
    """Demote land that is not part of the central island to water.

    Modifies ``tiles`` in place. Water tiles are left alone; running the
    filter again on its own output changes nothing.

    Args:
        tiles: Tile map from the terrain builder.
        config: Resolved map configuration.
        height_sampler: The same height provider the grid was built with.

    Returns:
        Number of land tiles demoted.
    """
    reachable = flood_from_origin(config, height_sampler)

    demoted = 0
    for tile in iter_tiles(tiles):
        if tile.type == TileType.LAND and tile.position not in reachable:
            tile.type = TileType.WATER
            tile.biome = Biome.WATER
            demoted += 1

    logger.info(
        "island_filtered", reachable=len(reachable), demoted=demoted
    )
    return demoted


def reachable_from_origin(tiles: TileMap) -> set[AxialCoord]:
    """Coordinates reachable from the origin over non-water tiles.

    Works from tile types alone, so it can check a finished map. The origin
    is always counted as reachable.
    """
    seen = {ORIGIN}
    to_visit = deque([ORIGIN])

    while to_visit:
        tile = to_visit.popleft()
        for neighbor in neighbors(tile):
            if neighbor in seen:
                continue
            neighbor_tile = get_tile(tiles, neighbor)
            if neighbor_tile is None or not neighbor_tile.type.passable:
                continue
            seen.add(neighbor)
            to_visit.append(neighbor)

    return seen
