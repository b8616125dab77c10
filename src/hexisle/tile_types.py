"""Tile types and biomes."""

from enum import Enum


class TileType(str, Enum):
    """What occupies a tile."""

    LAND = "land"
    WATER = "water"
    TOWN = "town"

    @property
    def passable(self) -> bool:
        """Whether the tile belongs to the landmass."""
        return self in _PASSABLE_TYPES


class Biome(str, Enum):
    """Terrain category of a tile.

    Renderers may know about more categories than this; they should fall back
    to neutral styling for anything they do not recognise here.
    """

    WATER = "water"
    GRASSLAND = "grassland"
    COASTLINE = "coastline"
    MOUNTAIN_SNOW = "mountain_snow"
    MOUNTAIN = "mountain"


_PASSABLE_TYPES = frozenset({
    TileType.LAND,
    TileType.TOWN,
})

# Biomes a region-grown special area may take
SPECIAL_BIOMES: tuple[Biome, ...] = (
    Biome.MOUNTAIN_SNOW,
    Biome.MOUNTAIN,
)
