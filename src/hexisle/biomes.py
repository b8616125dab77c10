"""Biome classification for individual tiles."""

from collections import deque

import numpy as np

from .config import BiomeStrategy, MapConfig, require_resolved
from .hexgrid import AxialCoord, cube_distance, neighbors
from .noise import FieldNoise, HeightSampler, checked_sampler
from .tile_types import SPECIAL_BIOMES, Biome

SNOW_LINE = 0.2
MOUNTAIN_LINE = 0.0


class BiomeClassifier:
    """Decides each tile's biome from local and neighbouring heights.

    Water and coastline always come from the height field. Inland tiles
    follow ``config.biome_strategy``:

    * ``HEIGHT_BASED``: snow above 0.2, mountain above 0, else grassland.
    * ``REGION_GROWN``: tiles where the special noise channel dips below
      ``noise.special_threshold`` are grouped into connected regions, and
      each region shares one randomly chosen special biome. Everything else
      is grassland.

    The region cache lives on the instance; build one classifier per run.
    """

    def __init__(
        self,
        config: MapConfig,
        height_sampler: HeightSampler,
        rng: np.random.Generator,
        special_sampler: HeightSampler | None = None,
    ):
        self.config = config
        self.seed = require_resolved(config)
        self.height_sampler = height_sampler
        self.rng = rng
        self.special_sampler = checked_sampler(
            special_sampler or FieldNoise(config.noise)
        )
        self._region_cache: dict[AxialCoord, Biome] = {}

    def classify(self, coord: AxialCoord) -> Biome:
        """Return the biome for a coordinate."""
        if self.tile_has_water(coord):
            return Biome.WATER

        if self.tile_is_coastline(coord):
            return Biome.COASTLINE

        if self.config.biome_strategy == BiomeStrategy.REGION_GROWN:
            return self._region_biome(coord)
        return self._height_biome(coord)

    def height(self, coord: AxialCoord) -> float:
        return self.height_sampler(coord, self.seed, self.config.radius)

    def tile_has_water(self, coord: AxialCoord) -> bool:
        """Heights at exactly the water level count as water."""
        return self.height(coord) <= self.config.water_level

    def tile_is_coastline(self, coord: AxialCoord) -> bool:
        return any(self.tile_has_water(n) for n in neighbors(coord))

    def tile_has_special_biome(self, coord: AxialCoord) -> bool:
        score = self.special_sampler(coord, self.seed, self.config.radius)
        return score < self.config.noise.special_threshold

    def _height_biome(self, coord: AxialCoord) -> Biome:
        height = self.height(coord)
        if height > SNOW_LINE:
            return Biome.MOUNTAIN_SNOW
        if height > MOUNTAIN_LINE:
            return Biome.MOUNTAIN
        return Biome.GRASSLAND

    def _region_biome(self, coord: AxialCoord) -> Biome:
        cached = self._region_cache.get(coord)
        if cached is not None:
            return cached

        if not self.tile_has_special_biome(coord):
            return Biome.GRASSLAND

        return self.grow_region(coord)

    def grow_region(self, seed_coord: AxialCoord) -> Biome:
        """Flood a special-biome region outward from a coordinate.

        Every connected tile (within the map radius) satisfying the special
        predicate is cached with one biome drawn once for the whole region.

        Returns:
            The biome assigned to the region.
        """
        biome = SPECIAL_BIOMES[int(self.rng.integers(0, len(SPECIAL_BIOMES)))]

        region: list[AxialCoord] = []
        queued = {seed_coord}
        to_visit = deque([seed_coord])

        while to_visit:
            tile = to_visit.popleft()
            if not self.tile_has_special_biome(tile):
                continue

            region.append(tile)
            for neighbor in neighbors(tile):
                if neighbor in queued or cube_distance(neighbor) > self.config.radius:
                    continue
                queued.add(neighbor)
                to_visit.append(neighbor)

        for tile in region:
            self._region_cache[tile] = biome

        return biome
