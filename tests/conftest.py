"""Shared test fixtures for island map tests."""

from typing import Callable

import numpy as np
import pytest
import structlog

from hexisle.config import MapConfig
from hexisle.hexgrid import AxialCoord, cube_distance
from hexisle.noise import HeightSampler


def _height_map(
    heights: dict[tuple[int, int], float],
    default: float = 0.5,
    outside: float | None = None,
) -> HeightSampler:
    """Sampler returning fixed heights per (x, z), ``default`` elsewhere.

    If ``outside`` is given, coordinates beyond the map radius read as it.
    """

    def sample(coord: AxialCoord, seed: int, radius: int) -> float:
        if outside is not None and cube_distance(coord) > radius:
            return outside
        return heights.get((coord.x, coord.z), default)

    return sample


@pytest.fixture
def height_map() -> Callable[..., HeightSampler]:
    """Factory for samplers with fixed per-tile heights."""
    return _height_map


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def make_config() -> Callable[..., MapConfig]:
    """Factory for resolved configs with test-friendly defaults."""

    def factory(**overrides) -> MapConfig:
        values = {"radius": 3, "total_towns": 0, "seed": 42}
        values.update(overrides)
        return MapConfig(**values)

    return factory


@pytest.fixture
def flat_land() -> HeightSampler:
    """Every tile inside the radius is land, everything outside is water."""
    return _height_map({}, default=0.5, outside=-1.0)


@pytest.fixture
def all_water() -> HeightSampler:
    return _height_map({}, default=-1.0)
