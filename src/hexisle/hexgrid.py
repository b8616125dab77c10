"""Axial hex coordinates and ring enumeration.

Coordinates use the axial convention (x, z) with the implied cube axis
y = -x - z. Distances are cube distances measured in hex steps.
"""

from typing import Iterator

from pydantic import BaseModel


class AxialCoord(BaseModel, frozen=True):
    """Immutable axial hex coordinate."""

    x: int
    z: int

    @property
    def y(self) -> int:
        """Implied cube axis."""
        return -self.x - self.z

    @property
    def key(self) -> str:
        """Canonical string key, e.g. ``"3,-1"``."""
        return f"{self.x},{self.z}"

    def __add__(self, other: "AxialCoord") -> "AxialCoord":
        return AxialCoord(x=self.x + other.x, z=self.z + other.z)

    def scale(self, factor: int) -> "AxialCoord":
        """Return this coordinate multiplied by an integer factor."""
        return AxialCoord(x=self.x * factor, z=self.z * factor)

    def distance_to(self, other: "AxialCoord") -> int:
        """Cube distance to another coordinate."""
        dx = self.x - other.x
        dz = self.z - other.z
        return (abs(dx) + abs(dz) + abs(dx + dz)) // 2

    def __hash__(self) -> int:
        return hash((self.x, self.z))

    def __str__(self) -> str:
        return f"({self.x}, {self.z})"

    def __repr__(self) -> str:
        return f"AxialCoord(x={self.x}, z={self.z})"


ORIGIN = AxialCoord(x=0, z=0)

# Unit steps to the six neighbours, counter-clockwise from east
HEX_DIRECTIONS: tuple[AxialCoord, ...] = (
    AxialCoord(x=1, z=0),
    AxialCoord(x=1, z=-1),
    AxialCoord(x=0, z=-1),
    AxialCoord(x=-1, z=0),
    AxialCoord(x=-1, z=1),
    AxialCoord(x=0, z=1),
)


def cube_distance(coord: AxialCoord) -> int:
    """Cube distance from the origin."""
    return coord.distance_to(ORIGIN)


def ring(center: AxialCoord, radius: int) -> list[AxialCoord]:
    """All coordinates at exactly ``radius`` steps from ``center``.

    Args:
        center: Ring center.
        radius: Ring distance. 0 yields only the center.

    Returns:
        ``6 * radius`` coordinates (1 for radius 0) walking the ring.

    Raises:
        ValueError: If radius is negative.
    """
    if radius < 0:
        raise ValueError(f"Ring radius must be non-negative, got {radius}")
    if radius == 0:
        return [center]

    results: list[AxialCoord] = []
    current = center + HEX_DIRECTIONS[4].scale(radius)
    for direction in HEX_DIRECTIONS:
        for _ in range(radius):
            results.append(current)
            current = current + direction
    return results


def neighbors(coord: AxialCoord) -> list[AxialCoord]:
    """The six adjacent coordinates."""
    return [coord + direction for direction in HEX_DIRECTIONS]


def spiral(center: AxialCoord, radius: int) -> list[AxialCoord]:
    """All coordinates within ``radius`` of ``center``, excluding the center.

    A negative radius yields nothing.
    """
    results: list[AxialCoord] = []
    for dx in range(-radius, radius + 1):
        for dz in range(max(-radius, -dx - radius), min(radius, -dx + radius) + 1):
            if dx == 0 and dz == 0:
                continue
            results.append(AxialCoord(x=center.x + dx, z=center.z + dz))
    return results


def coords_within(radius: int) -> Iterator[AxialCoord]:
    """Yield every coordinate with cube distance <= radius from the origin.

    Outer loop runs x from -radius to radius; the inner z range is clipped so
    the implied cube axis also stays within the radius.
    """
    for x in range(-radius, radius + 1):
        for z in range(max(-radius, -x - radius), min(radius, -x + radius) + 1):
            yield AxialCoord(x=x, z=z)


def hex_tile_count(radius: int) -> int:
    """Number of tiles in a hexagon of the given radius."""
    return 3 * radius * radius + 3 * radius + 1
