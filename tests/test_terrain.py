"""Tests for the terrain grid builder."""

import numpy as np
import pytest

from hexisle.biomes import BiomeClassifier
from hexisle.config import MapConfig
from hexisle.exceptions import ConfigurationError
from hexisle.hexgrid import AxialCoord, cube_distance
from hexisle.noise import DecayingNoise
from hexisle.terrain import build_terrain
from hexisle.tile_types import Biome, TileType
from hexisle.tiles import get_tile, iter_tiles


class TestBuildTerrain:
    """Tests for build_terrain."""

    @pytest.mark.parametrize("radius", [0, 1, 2, 5, 9])
    def test_tile_count_identity(self, make_config, radius: int) -> None:
        """3R^2 + 3R + 1 tiles, each unique and inside the radius."""
        config = make_config(radius=radius)
        tiles = build_terrain(config, DecayingNoise())

        all_tiles = list(iter_tiles(tiles))
        assert len(all_tiles) == 3 * radius * radius + 3 * radius + 1
        positions = {tile.position for tile in all_tiles}
        assert len(positions) == len(all_tiles)
        assert all(cube_distance(p) <= radius for p in positions)

    def test_keyed_by_x_then_z(self, make_config, flat_land) -> None:
        tiles = build_terrain(make_config(radius=2), flat_land)
        for x, row in tiles.items():
            for z, tile in row.items():
                assert tile.position == AxialCoord(x=x, z=z)

    def test_water_threshold(self, make_config, height_map) -> None:
        heights = height_map({(1, 0): -0.4, (0, 1): -0.39})
        tiles = build_terrain(make_config(radius=1), heights)

        assert get_tile(tiles, AxialCoord(x=1, z=0)).type == TileType.WATER
        assert get_tile(tiles, AxialCoord(x=0, z=1)).type == TileType.LAND

    def test_without_biomes_land_is_grassland(self, make_config, height_map) -> None:
        heights = height_map({(1, 0): -1.0}, default=0.9)
        tiles = build_terrain(make_config(radius=1), heights)

        for tile in iter_tiles(tiles):
            if tile.type == TileType.WATER:
                assert tile.biome == Biome.WATER
            else:
                assert tile.biome == Biome.GRASSLAND

    def test_with_biomes_uses_classifier(self, make_config, height_map) -> None:
        config = make_config(radius=2, generate_biomes=True)
        heights = height_map({(2, 0): -1.0}, default=0.5)
        classifier = BiomeClassifier(config, heights, np.random.default_rng(0))

        tiles = build_terrain(config, heights, classifier)

        assert get_tile(tiles, AxialCoord(x=2, z=0)).biome == Biome.WATER
        assert get_tile(tiles, AxialCoord(x=1, z=0)).biome == Biome.COASTLINE
        assert get_tile(tiles, AxialCoord(x=0, z=0)).biome == Biome.MOUNTAIN_SNOW

    def test_biomes_require_classifier(self, make_config, flat_land) -> None:
        with pytest.raises(ConfigurationError):
            build_terrain(make_config(generate_biomes=True), flat_land)

    def test_unresolved_config_rejected(self, flat_land) -> None:
        with pytest.raises(ConfigurationError):
            build_terrain(MapConfig(radius=2), flat_land)

    def test_samples_each_tile_once(self, make_config) -> None:
        calls = []

        def sampler(coord, seed, radius):
            calls.append(coord)
            return 0.5

        build_terrain(make_config(radius=3), sampler)
        assert len(calls) == len(set(calls)) == 37

    def test_deterministic_for_seed(self, make_config) -> None:
        config = make_config(radius=6, seed=77)
        a = build_terrain(config, DecayingNoise())
        b = build_terrain(config, DecayingNoise())
        assert [(t.position, t.type) for t in iter_tiles(a)] == [
            (t.position, t.type) for t in iter_tiles(b)
        ]
