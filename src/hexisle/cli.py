"""Command-line interface for island map generation."""

import argparse
import logging
import sys
import time
from pathlib import Path

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog console output."""
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a procedural hex island map"
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="TOML config file (optional)"
    )
    parser.add_argument("--radius", type=int, default=None, help="Map radius in hexes")
    parser.add_argument("--towns", type=int, default=None, help="Number of towns")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--water-level", type=float, default=None, help="Water level (default: -0.4)"
    )
    parser.add_argument(
        "--biomes", action="store_true", help="Classify land biomes"
    )
    parser.add_argument(
        "--strategy",
        choices=["height_based", "region_grown"],
        default=None,
        help="Biome strategy for inland tiles",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for map generation."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    # Import here to avoid slow startup for --help
    import tomllib

    from pydantic import ValidationError

    from .config import MapConfig, load_config
    from .generator import generate_map
    from .tile_types import TileType
    from .validation import validate_map

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            parser.error(f"Config file not found: {args.config}")
        try:
            config = load_config(config_path)
        except (tomllib.TOMLDecodeError, ValidationError) as e:
            parser.error(f"Invalid config file {args.config}: {e}")
    else:
        config = MapConfig()

    overrides = {
        "radius": args.radius,
        "total_towns": args.towns,
        "seed": args.seed,
        "water_level": args.water_level,
        "biome_strategy": args.strategy,
    }
    updates = {key: value for key, value in overrides.items() if value is not None}
    if args.biomes:
        updates["generate_biomes"] = True

    try:
        config = MapConfig.model_validate(config.model_dump() | updates)
    except ValidationError as e:
        parser.error(str(e))

    start_time = time.time()
    map_def = generate_map(config)
    gen_time = time.time() - start_time

    print(f"Generated radius {map_def.config.radius} map with seed {map_def.config.seed}")
    print(f"  tiles: {map_def.tile_count}")
    for tile_type in TileType:
        print(f"  {tile_type.value}: {map_def.count(tile_type)}")
    print(
        f"  towns placed: {map_def.placement.placed} / {map_def.placement.requested}"
    )
    print(f"Generation complete in {gen_time:.2f}s")

    result = validate_map(map_def)
    return 0 if result.passed else 1


if __name__ == "__main__":
    sys.exit(main())
