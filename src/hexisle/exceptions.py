"""Custom exceptions for island map generation."""


class MapGenerationError(Exception):
    """Base exception for map generation errors."""

    pass


class ConfigurationError(MapGenerationError):
    """Raised when a map configuration is unresolved or inconsistent."""

    pass


class NoiseProviderError(MapGenerationError):
    """Raised when a height sampler returns a value outside its contract."""

    pass
