"""Tile records and the two-level tile map."""

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .hexgrid import AxialCoord
from .tile_types import Biome, TileType

# x -> z -> tile
TileMap = dict[int, dict[int, "TileDefinition"]]


@dataclass
class TileDefinition:
    """A single map tile. Type and biome are rewritten by later stages."""

    position: AxialCoord
    type: TileType
    biome: Biome


def set_tile(tiles: TileMap, tile: TileDefinition) -> None:
    """Insert or replace the tile at its own position."""
    tiles.setdefault(tile.position.x, {})[tile.position.z] = tile


def get_tile(tiles: TileMap, coord: AxialCoord) -> TileDefinition | None:
    """Look up a tile, or None if the coordinate is off the map."""
    row = tiles.get(coord.x)
    if row is None:
        return None
    return row.get(coord.z)


def iter_tiles(tiles: TileMap) -> Iterator[TileDefinition]:
    """Yield every tile in x-then-z insertion order."""
    for row in tiles.values():
        yield from row.values()


def count_tiles(tiles: TileMap, tile_type: TileType) -> int:
    """Count tiles of a given type."""
    return sum(1 for tile in iter_tiles(tiles) if tile.type == tile_type)


def sample_random_tiles(
    tiles: TileMap,
    count: int,
    tile_type: TileType,
    rng: np.random.Generator,
) -> list[TileDefinition]:
    """Pick up to ``count`` distinct tiles of a type uniformly at random.

    Args:
        tiles: Tile map to sample from.
        count: Requested sample size.
        tile_type: Only tiles of this type are eligible.
        rng: Random number generator.

    Returns:
        Distinct tiles of ``tile_type``; fewer than ``count`` when not enough
        are available.
    """
    pool = [tile for tile in iter_tiles(tiles) if tile.type == tile_type]
    size = min(count, len(pool))
    if size <= 0:
        return []

    indices = rng.choice(len(pool), size=size, replace=False)
    return [pool[i] for i in indices]
