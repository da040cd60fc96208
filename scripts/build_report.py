"""Entry point for manual catalog builds."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from hotel_catalog.config.run_config import RunConfig
from hotel_catalog.config.settings import Settings
from hotel_catalog.core.logging import configure_logging
from hotel_catalog.tasks import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Index hotels and reviews and write the hotel report")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=(
            "Path to a TOML run configuration file "
            "(defaults to config/run_config.toml when present)"
        ),
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        help="Ignore config/run_config.toml even if it exists",
    )
    parser.add_argument("--hotels", type=Path, default=None, help="Hotel list JSON file")
    parser.add_argument("--reviews", type=Path, default=None, help="Directory holding review JSON files")
    parser.add_argument("--output", type=Path, default=None, help="Directory receiving the report")
    parser.add_argument(
        "--hotel",
        metavar="HOTEL_ID",
        default=None,
        help="Also print the report block and average rating for one hotel",
    )
    parser.add_argument(
        "--override",
        action="append",
        metavar="KEY=VALUE",
        help="Override a Settings attribute (repeatable). Values accept JSON literals.",
    )
    return parser


def _decode_override(value: str) -> object:
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _apply_overrides(settings: Settings, overrides: dict[str, object]) -> None:
    for key, raw in overrides.items():
        if key not in Settings.model_fields:
            logging.getLogger(__name__).warning("Ignoring unknown override '%s'", key)
            continue
        setattr(settings, key, raw)
        logging.getLogger(__name__).info("Override: set %s=%r", key, raw)


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    settings = Settings()
    config_path: Optional[Path] = None
    run_config: Optional[RunConfig] = None
    overrides: dict[str, object] = {}

    if not args.no_config:
        if args.config:
            config_path = args.config
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")
        else:
            default_path = Path("config/run_config.toml")
            if default_path.exists():
                config_path = default_path

    if config_path:
        run_config = RunConfig.load(config_path)
        run_config.apply_to(settings, base_dir=config_path.parent)

    if args.override:
        for entry in args.override:
            if "=" not in entry:
                parser.error(f"Override must be in KEY=VALUE form (got '{entry}')")
            key, value = entry.split("=", 1)
            overrides[key.strip()] = _decode_override(value.strip())

    if args.hotels:
        settings.hotels_path = args.hotels
    if args.reviews:
        settings.reviews_dir = args.reviews
    if args.output:
        settings.output_dir = args.output

    if overrides:
        _apply_overrides(settings, overrides)

    configure_logging(settings.log_level, settings.log_dir, filename=settings.log_filename)
    settings.ensure_directories()

    if run_config:
        suffix = f" ({run_config.title})" if run_config.title else ""
        logging.getLogger(__name__).info(
            "Loaded run profile '%s'%s from %s", run_config.profile, suffix, config_path
        )
        if run_config.notes:
            logging.getLogger(__name__).info("Profile notes: %s", run_config.notes)

    catalog, summary = asyncio.run(run(settings))
    print(json.dumps(summary.to_dict(), indent=2))

    if args.hotel:
        block = catalog.render(args.hotel)
        if not block:
            parser.exit(1, f"Unknown hotel id: {args.hotel}\n")
        print(block, end="")
        print(f"Average rating: {catalog.average_rating(args.hotel):.2f}")


if __name__ == "__main__":
    main()
