"""Command-line entry point: ``safe-gpx``.

Usage::

    safe-gpx -s LAT,LON,LAT,LON [-s ...] [-o OUTPUT] [-v | -d] INPUT

Each ``-s/--skip-area`` adds one exclusion region. Two coordinate pairs
are the top-left and bottom-right corners of a rectangle; three or more
pairs are polygon vertices. Without ``-o`` the output is written next to
the input as ``<name>_safe<ext>``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from safe_gpx import __version__
from safe_gpx.core.config import ConfigValidationError, FilterConfig
from safe_gpx.core.exceptions import InvalidRegionError, SafeGpxError
from safe_gpx.filtering import filter_gpx_file
from safe_gpx.models.region import RegionSet
from safe_gpx.utils.paths import safe_file_name
from safe_gpx.utils.region_spec import parse_region_spec

logger = logging.getLogger("safe_gpx.cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _region_argument(value: str) -> list[tuple[float, float]]:
    try:
        return parse_region_spec(value)
    except InvalidRegionError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safe-gpx",
        description="Remove GPX track points that fall inside one or more exclusion areas "
        "(e.g. around your home) while keeping the rest of the document intact.",
    )
    parser.add_argument("input", help="Input GPX file")
    parser.add_argument(
        "-o",
        "--output",
        help="Output GPX file (default: <input>_safe.gpx next to the input)",
    )
    parser.add_argument(
        "-s",
        "--skip-area",
        dest="skip_areas",
        action="append",
        type=_region_argument,
        metavar="LAT,LON,...",
        help="Area to exclude, as lat1,lon1,lat2,lon2,... Two points (top-left and "
        "bottom-right) give a rectangle, three or more a polygon. May be repeated.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every removed point.")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(*, verbose: bool, debug: bool) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(message)s")


def _load_config() -> FilterConfig:
    try:
        return FilterConfig.from_env()
    except ValueError as exc:
        msg = f"numeric settings must be integers ({exc})"
        raise ConfigValidationError("SAFE_GPX_*", None, msg) from exc


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.skip_areas:
        parser.error("Please specify at least one area with -s/--skip-area.")

    _configure_logging(verbose=args.verbose, debug=args.debug)

    try:
        config = _load_config()
        regions = RegionSet.from_coordinates(args.skip_areas)
        for idx, region in enumerate(regions, start=1):
            logger.info("Region %d: %s", idx, region.describe())

        output = args.output or safe_file_name(args.input, config.output_suffix)
        result = filter_gpx_file(
            args.input,
            output,
            regions,
            verbose=args.verbose or args.debug,
            config=config,
        )
    except SafeGpxError as exc:
        logger.error("Error [%s]: %s", exc.code, exc.message)
        logger.debug("Error details: %s", exc.to_error_dict())
        return EXIT_FAILURE

    print(f"Removed {result.suppressed_points} of {result.track_points} track point(s) -> {output}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
