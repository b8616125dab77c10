"""Town placement with a shrinking exclusion zone.

Each round samples candidate land tiles and accepts those with no town
within the current exclusion radius. Rounds that place nothing count as
retries; after ``MAX_RETRIES`` the radius shrinks by one. Placement ends
when enough towns exist or the radius drops below zero.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import numpy as np
import structlog

from .config import MapConfig
from .hexgrid import AxialCoord, spiral
from .tile_types import TileType
from .tiles import TileDefinition, TileMap, get_tile, sample_random_tiles

logger = structlog.get_logger()

MAX_EXCLUSION_RADIUS = 10
MAX_RETRIES = 3


class PlacementState(str, Enum):
    """Where the placer is in its round loop."""

    PLACING = "placing"  # last round placed at least one town
    RETRYING = "retrying"  # last round placed nothing, radius unchanged
    RELAXING = "relaxing"  # last round shrank the exclusion radius
    EXHAUSTED = "exhausted"  # radius fell below zero before the target
    DONE = "done"  # target reached

    @property
    def finished(self) -> bool:
        return self in (PlacementState.EXHAUSTED, PlacementState.DONE)


@dataclass
class PlacementProgress:
    """Snapshot handed to the checkpoint after each unfinished round."""

    round: int
    placed: int
    requested: int
    exclusion_radius: int
    retries: int
    state: PlacementState


@dataclass
class PlacementReport:
    """Outcome of town placement. ``placed`` is authoritative."""

    requested: int
    placed: int
    rounds: int
    final_exclusion_radius: int
    state: PlacementState
    towns: list[AxialCoord]

    @property
    def shortfall(self) -> int:
        return self.requested - self.placed


Checkpoint = Callable[[PlacementProgress], None]


class TownPlacer:
    """Bounded state machine that promotes land tiles to towns."""

    def __init__(
        self,
        tiles: TileMap,
        config: MapConfig,
        rng: np.random.Generator,
        count_needed: int | None = None,
    ):
        self.tiles = tiles
        self.rng = rng
        self.requested = config.total_towns if count_needed is None else count_needed
        if self.requested < 0:
            raise ValueError(f"count_needed must be non-negative, got {self.requested}")

        self.exclusion_radius = min(config.radius, MAX_EXCLUSION_RADIUS)
        self.retries = 0
        self.placed = 0
        self.rounds = 0
        self.towns: list[AxialCoord] = []
        self.state = (
            PlacementState.DONE if self.requested == 0 else PlacementState.PLACING
        )

    def progress(self) -> PlacementProgress:
        return PlacementProgress(
            round=self.rounds,
            placed=self.placed,
            requested=self.requested,
            exclusion_radius=self.exclusion_radius,
            retries=self.retries,
            state=self.state,
        )

    def can_be_town(self, tile: TileDefinition) -> bool:
        """True if no town lies within the current exclusion radius."""
        for coord in spiral(tile.position, self.exclusion_radius):
            nearby = get_tile(self.tiles, coord)
            if nearby is not None and nearby.type == TileType.TOWN:
                return False
        return True

    def step(self) -> PlacementState:
        """Run a single placement round.

        Returns:
            State after the round.

        Raises:
            RuntimeError: If placement has already finished.
        """
        if self.state.finished:
            raise RuntimeError(f"Placement already finished ({self.state.value})")

        self.rounds += 1
        candidates = sample_random_tiles(
            self.tiles, self.requested - self.placed, TileType.LAND, self.rng
        )

        progressed = False
        for tile in candidates:
            if self.can_be_town(tile):
                tile.type = TileType.TOWN
                self.towns.append(tile.position)
                self.placed += 1
                progressed = True

        if progressed:
            self.state = PlacementState.PLACING
        else:
            self.retries += 1
            self.state = PlacementState.RETRYING
            if self.retries >= MAX_RETRIES:
                self.exclusion_radius -= 1
                self.retries = 0
                self.state = PlacementState.RELAXING

        if self.placed >= self.requested:
            self.state = PlacementState.DONE
        elif self.exclusion_radius < 0:
            self.state = PlacementState.EXHAUSTED

        logger.debug(
            "towns_progress",
            placed=self.placed,
            requested=self.requested,
            exclusion_radius=self.exclusion_radius,
            state=self.state.value,
        )
        return self.state

    def run(self, checkpoint: Checkpoint | None = None) -> PlacementReport:
        """Step until finished, calling ``checkpoint`` between rounds."""
        while not self.state.finished:
            self.step()
            if not self.state.finished and checkpoint is not None:
                checkpoint(self.progress())
        return self.report()

    async def run_async(self) -> PlacementReport:
        """Step until finished, yielding to the event loop between rounds."""
        while not self.state.finished:
            self.step()
            if not self.state.finished:
                await asyncio.sleep(0)
        return self.report()

    def report(self) -> PlacementReport:
        if self.state == PlacementState.EXHAUSTED:
            logger.warning(
                "towns_underplaced",
                requested=self.requested,
                placed=self.placed,
                rounds=self.rounds,
            )
        return PlacementReport(
            requested=self.requested,
            placed=self.placed,
            rounds=self.rounds,
            final_exclusion_radius=self.exclusion_radius,
            state=self.state,
            towns=list(self.towns),
        )


def place_towns(
    tiles: TileMap,
    config: MapConfig,
    rng: np.random.Generator,
    count_needed: int | None = None,
    checkpoint: Checkpoint | None = None,
) -> PlacementReport:
    """Place up to ``count_needed`` towns (default ``config.total_towns``).

    Modifies ``tiles`` in place. Falling short of the target is not an
    error; the report's ``placed`` count is what callers should trust.

    Args:
        tiles: Tile map after island filtering.
        config: Map configuration.
        rng: Random number generator seeded from the map seed.
        count_needed: Override for the number of towns.
        checkpoint: Called once after every round that leaves placement
            unfinished. The only safe point to cancel.

    Returns:
        PlacementReport describing the outcome.
    """
    return TownPlacer(tiles, config, rng, count_needed).run(checkpoint)
