"""Post-generation invariant checks."""

import structlog

from .generator import MapDefinition
from .hexgrid import cube_distance, hex_tile_count
from .island import reachable_from_origin
from .tile_types import Biome, TileType

logger = structlog.get_logger()


class ValidationResult:
    """Result of map validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_map(map_def: MapDefinition) -> ValidationResult:
    """Check a generated map against its structural invariants.

    Args:
        map_def: Finished map.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    _check_coverage(map_def, result)
    _check_water_biomes(map_def, result)
    _check_single_island(map_def, result)
    _check_towns(map_def, result)

    if result.passed:
        logger.info("map_validation_passed")
    else:
        logger.warning("map_validation_failed", errors=result.errors)

    for warning in result.warnings:
        logger.warning("map_validation_warning", message=warning)

    return result


def _check_coverage(map_def: MapDefinition, result: ValidationResult) -> None:
    """One tile per coordinate inside the radius, none outside."""
    radius = map_def.config.radius
    expected = hex_tile_count(radius)

    if map_def.tile_count != expected:
        result.add_error(
            f"Expected {expected} tiles for radius {radius}, found {map_def.tile_count}"
        )

    for x, row in map_def.tiles.items():
        for z, tile in row.items():
            if (tile.position.x, tile.position.z) != (x, z):
                result.add_error(f"Tile {tile.position} stored under ({x}, {z})")
            if cube_distance(tile.position) > radius:
                result.add_error(f"Tile {tile.position} lies outside radius {radius}")


def _check_water_biomes(map_def: MapDefinition, result: ValidationResult) -> None:
    """Water tiles carry the water biome; towns never do."""
    for tile in map_def.iter_tiles():
        if tile.type == TileType.WATER and tile.biome != Biome.WATER:
            result.add_error(f"Water tile {tile.position} has biome {tile.biome.value}")
        if tile.type == TileType.TOWN and tile.biome == Biome.WATER:
            result.add_error(f"Town tile {tile.position} has water biome")


def _check_single_island(map_def: MapDefinition, result: ValidationResult) -> None:
    """Every land or town tile connects back to the origin."""
    reachable = reachable_from_origin(map_def.tiles)

    stranded = [
        tile.position
        for tile in map_def.iter_tiles()
        if tile.type.passable and tile.position not in reachable
    ]
    if stranded:
        result.add_error(f"{len(stranded)} land tiles are not connected to the center")

    if map_def.count(TileType.LAND) + map_def.count(TileType.TOWN) == 0:
        result.add_warning("Map has no land")


def _check_towns(map_def: MapDefinition, result: ValidationResult) -> None:
    """Town count matches the report and never exceeds the target."""
    towns = map_def.count(TileType.TOWN)
    report = map_def.placement

    if towns > map_def.config.total_towns:
        result.add_error(
            f"{towns} towns placed, more than the {map_def.config.total_towns} requested"
        )
    if towns != report.placed:
        result.add_error(f"Report says {report.placed} towns, map has {towns}")
    if report.shortfall > 0:
        result.add_warning(
            f"Only {report.placed} of {report.requested} towns could be placed"
        )
