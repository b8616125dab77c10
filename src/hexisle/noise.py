"""Noise generation for island height fields.

Provides Gaussian-filtered fBm noise over the hex bounding box, a radial
falloff that sinks the map edges, and the samplers the generation stages
call per coordinate.
"""

import math
from typing import Callable

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from .config import NoiseConfig
from .exceptions import NoiseProviderError
from .hexgrid import AxialCoord, cube_distance

# (coord, seed, radius) -> height
HeightSampler = Callable[[AxialCoord, int, int], float]

HEIGHT_MIN = -1.0
HEIGHT_MAX = 1.0

# Height reported for coordinates beyond the map radius
OUTSIDE_HEIGHT = HEIGHT_MIN

# Keeps the special-biome channel independent of the height channel
SPECIAL_SEED_OFFSET = 7919


def _gaussian_noise_2d(
    width: int,
    height: int,
    rng: np.random.Generator,
    wavelength: float,
) -> NDArray[np.float32]:
    """Generate smooth noise using Gaussian filter on random field.

    Args:
        width: Output width.
        height: Output height.
        rng: Random number generator.
        wavelength: Approximate wavelength of features in tiles.

    Returns:
        2D noise array in range roughly [-1, 1].
    """
    white_noise = rng.standard_normal((height, width)).astype(np.float32)

    sigma = wavelength / 3.0
    smoothed = ndimage.gaussian_filter(white_noise, sigma=sigma, mode="reflect")

    std = np.std(smoothed)
    if std > 0:
        smoothed /= (2.5 * std)

    return smoothed


def fbm_noise_vectorized(
    width: int,
    height: int,
    seed: int,
    base_wavelength: float,
    octaves: int = 4,
    lacunarity: float = 2.0,
    gain: float = 0.5,
) -> NDArray[np.float32]:
    """Generate fractal Brownian motion noise using Gaussian filters.

    Sums multiple octaves of noise at increasing frequencies
    and decreasing amplitudes for natural-looking variation.

    Args:
        width: Output width in tiles.
        height: Output height in tiles.
        seed: Random seed for noise generation.
        base_wavelength: Wavelength of the base (lowest) frequency in tiles.
        octaves: Number of noise layers to sum.
        lacunarity: Frequency multiplier between octaves.
        gain: Amplitude multiplier between octaves.

    Returns:
        2D array of noise values, roughly in range [-1, 1].
    """
    result = np.zeros((height, width), dtype=np.float32)

    wavelength = base_wavelength
    amplitude = 1.0
    max_amplitude = 0.0

    for i in range(octaves):
        octave_rng = np.random.default_rng(seed + i * 1000)
        octave_noise = _gaussian_noise_2d(width, height, octave_rng, wavelength)
        result += amplitude * octave_noise
        max_amplitude += amplitude
        wavelength /= lacunarity
        amplitude *= gain

    result /= max_amplitude
    return result


def smoothstep(edge0: float, edge1: float, x: NDArray[np.float32]) -> NDArray[np.float32]:
    """Smooth Hermite interpolation between 0 and 1.

    Args:
        edge0: Lower edge of transition.
        edge1: Upper edge of transition.
        x: Input values.

    Returns:
        Smoothly interpolated values in [0, 1].
    """
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


class NoiseField:
    """fBm noise laid over the axial bounding box of a hex map.

    Row index is ``z + radius``, column index is ``x + radius``.
    """

    def __init__(
        self,
        radius: int,
        seed: int,
        wavelength: float,
        octaves: int = 4,
        lacunarity: float = 2.0,
        gain: float = 0.5,
    ):
        self.radius = radius
        size = 2 * radius + 1
        self.values = np.clip(
            fbm_noise_vectorized(
                size, size, seed, wavelength, octaves, lacunarity, gain
            ),
            HEIGHT_MIN,
            HEIGHT_MAX,
        )

    def contains(self, coord: AxialCoord) -> bool:
        return cube_distance(coord) <= self.radius

    def sample(self, coord: AxialCoord) -> float:
        """Noise value at a coordinate inside the map radius."""
        return float(self.values[coord.z + self.radius, coord.x + self.radius])


class DecayingNoise:
    """Island height sampler: fBm noise sunk by a radial falloff.

    Heights lie in [-1, 1]. Fields are built lazily per (seed, radius) and
    memoised on the instance, so a sampler should live no longer than one
    generation run.
    """

    def __init__(self, config: NoiseConfig | None = None):
        self.config = config or NoiseConfig()
        self._fields: dict[tuple[int, int], NoiseField] = {}

    def _field(self, seed: int, radius: int) -> NoiseField:
        field = self._fields.get((seed, radius))
        if field is None:
            field = NoiseField(
                radius,
                seed,
                self.config.wavelength,
                octaves=self.config.octaves,
                lacunarity=self.config.lacunarity,
                gain=self.config.gain,
            )
            self._fields[(seed, radius)] = field
        return field

    def falloff(self, coord: AxialCoord, radius: int) -> float:
        """Height removed at a coordinate by the radial decay."""
        dist = cube_distance(coord) / radius if radius > 0 else 0.0
        drop = smoothstep(
            self.config.falloff_start, self.config.falloff_end, np.float32(dist)
        )
        return float(drop) * self.config.coast_drop

    def __call__(self, coord: AxialCoord, seed: int, radius: int) -> float:
        if cube_distance(coord) > radius:
            return OUTSIDE_HEIGHT

        base = self._field(seed, radius).sample(coord)
        height = base + self.config.center_lift - self.falloff(coord, radius)
        return float(np.clip(height, HEIGHT_MIN, HEIGHT_MAX))


class FieldNoise:
    """Undecayed noise channel, used to mark special-biome areas.

    Coordinates beyond the radius read as 0.0.
    """

    def __init__(self, config: NoiseConfig | None = None):
        self.config = config or NoiseConfig()
        self._fields: dict[tuple[int, int], NoiseField] = {}

    def __call__(self, coord: AxialCoord, seed: int, radius: int) -> float:
        field = self._fields.get((seed, radius))
        if field is None:
            field = NoiseField(
                radius,
                seed + SPECIAL_SEED_OFFSET,
                self.config.special_wavelength,
                octaves=2,
            )
            self._fields[(seed, radius)] = field

        if not field.contains(coord):
            return 0.0
        return field.sample(coord)


def checked_sampler(sampler: HeightSampler) -> HeightSampler:
    """Wrap a sampler so non-finite heights abort generation.

    Raises:
        NoiseProviderError: From the wrapped call, if the sampler returns
            NaN or infinity.
    """

    def sample(coord: AxialCoord, seed: int, radius: int) -> float:
        height = sampler(coord, seed, radius)
        if not math.isfinite(height):
            raise NoiseProviderError(
                f"Height sampler returned {height!r} at {coord} (seed={seed})"
            )
        return height

    return sample
