"""Tests for axial hex coordinates."""

import pytest

from hexisle.hexgrid import (
    ORIGIN,
    AxialCoord,
    coords_within,
    cube_distance,
    hex_tile_count,
    neighbors,
    ring,
    spiral,
)


class TestAxialCoord:
    """Tests for AxialCoord."""

    def test_implied_cube_axis(self) -> None:
        """Cube y is -x - z."""
        coord = AxialCoord(x=2, z=-5)
        assert coord.y == 3

    def test_key(self) -> None:
        assert AxialCoord(x=3, z=-1).key == "3,-1"

    def test_hashable_and_equal(self) -> None:
        """Equal coordinates collapse in sets."""
        coords = {AxialCoord(x=1, z=2), AxialCoord(x=1, z=2), AxialCoord(x=2, z=1)}
        assert len(coords) == 2

    def test_frozen(self) -> None:
        coord = AxialCoord(x=0, z=0)
        with pytest.raises(Exception):
            coord.x = 1

    def test_distance_is_symmetric(self) -> None:
        a = AxialCoord(x=-2, z=3)
        b = AxialCoord(x=4, z=-1)
        assert a.distance_to(b) == b.distance_to(a) == 6


class TestCubeDistance:
    """Tests for distance from origin."""

    def test_origin(self) -> None:
        assert cube_distance(ORIGIN) == 0

    @pytest.mark.parametrize(
        "x,z,expected",
        [(1, 0, 1), (0, -1, 1), (1, -1, 1), (2, 1, 3), (-3, 3, 3), (2, -4, 4)],
    )
    def test_known_values(self, x: int, z: int, expected: int) -> None:
        assert cube_distance(AxialCoord(x=x, z=z)) == expected


class TestRing:
    """Tests for ring enumeration."""

    def test_radius_zero_is_center(self) -> None:
        center = AxialCoord(x=2, z=-1)
        assert ring(center, 0) == [center]

    @pytest.mark.parametrize("radius", [1, 2, 3, 5])
    def test_ring_size_and_distance(self, radius: int) -> None:
        """A ring has 6r distinct coordinates, all exactly r away."""
        center = AxialCoord(x=1, z=1)
        coords = ring(center, radius)
        assert len(coords) == 6 * radius
        assert len(set(coords)) == 6 * radius
        assert all(center.distance_to(c) == radius for c in coords)

    def test_negative_radius_rejected(self) -> None:
        with pytest.raises(ValueError):
            ring(ORIGIN, -1)

    def test_neighbors_match_ring_one(self) -> None:
        center = AxialCoord(x=-3, z=2)
        assert set(neighbors(center)) == set(ring(center, 1))


class TestSpiral:
    """Tests for within-radius enumeration around a center."""

    @pytest.mark.parametrize("radius", [0, 1, 2, 4])
    def test_excludes_center(self, radius: int) -> None:
        center = AxialCoord(x=5, z=-2)
        coords = spiral(center, radius)
        assert center not in coords
        assert len(coords) == hex_tile_count(radius) - 1

    def test_all_within_radius(self) -> None:
        center = AxialCoord(x=1, z=1)
        assert all(1 <= center.distance_to(c) <= 3 for c in spiral(center, 3))

    def test_negative_radius_is_empty(self) -> None:
        assert spiral(ORIGIN, -1) == []


class TestCoordsWithin:
    """Tests for whole-map enumeration."""

    @pytest.mark.parametrize("radius", [0, 1, 2, 3, 7, 10])
    def test_hex_tile_count_identity(self, radius: int) -> None:
        """3R^2 + 3R + 1 unique coordinates, none beyond R."""
        coords = list(coords_within(radius))
        assert len(coords) == 3 * radius * radius + 3 * radius + 1
        assert len(set(coords)) == len(coords)
        assert all(cube_distance(c) <= radius for c in coords)

    def test_x_outer_order(self) -> None:
        """Enumeration walks x from -R to R."""
        xs = [c.x for c in coords_within(2)]
        assert xs == sorted(xs)
        assert xs[0] == -2 and xs[-1] == 2
