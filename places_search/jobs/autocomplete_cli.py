"""Interactive terminal front-end for the autocomplete session."""

import argparse
import logging
import sys
from typing import Iterable, List, Optional, TextIO

from places_search.core.config import get_settings
from places_search.core.models import (
    ConfigError,
    Coordinate,
    PlaceDetails,
    PlaceSummary,
    PlaceTypeFilter,
    SearchBias,
    SessionConfig,
)
from places_search.core.results import is_zero_results
from places_search.core.session import AutocompleteSession

logger = logging.getLogger(__name__)

QUIT_COMMAND = ":q"


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Search Google Places interactively")
    parser.add_argument(
        "--type",
        dest="place_type",
        default=settings.place_type.name,
        help="Place type filter: all, geocode, address, establishment, regions, cities",
    )
    parser.add_argument("--lat", dest="lat", type=float, default=settings.bias_lat, help="Bias latitude")
    parser.add_argument("--lng", dest="lng", type=float, default=settings.bias_lng, help="Bias longitude")
    parser.add_argument(
        "--radius",
        dest="radius",
        type=float,
        default=settings.bias_radius,
        help="Bias radius in meters",
    )
    parser.add_argument(
        "--strict-bounds",
        dest="strict_bounds",
        action="store_true",
        default=settings.strict_bounds,
        help="Only return results inside the bias circle",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> SessionConfig:
    settings = get_settings()
    coordinate = None
    if args.lat is not None and args.lng is not None:
        coordinate = Coordinate(lat=args.lat, lng=args.lng)
    return SessionConfig(
        api_key=settings.google_api_key,
        place_type=PlaceTypeFilter.parse(args.place_type),
        bias=SearchBias(
            coordinate=coordinate,
            radius_meters=args.radius,
            strict_bounds=args.strict_bounds,
        ),
        timeout_sec=settings.request_timeout,
    )


def _print_results(results: List[PlaceSummary], out: TextIO) -> None:
    if not results:
        print("(no results)", file=out)
        return
    for index, summary in enumerate(results):
        line = f"[{index}] {summary.main_text}"
        if summary.secondary_text:
            line += f" - {summary.secondary_text}"
        print(line, file=out)


def _print_details(details: Optional[PlaceDetails], out: TextIO) -> None:
    if details is None:
        print("(no details)", file=out)
    else:
        print(details, file=out)


def run_interactive(
    session: AutocompleteSession,
    lines: Iterable[str],
    out: TextIO = sys.stdout,
    prompt: str = "Enter Address",
) -> None:
    """Drive ``session`` from ``lines``.

    Plain text searches, ``:N`` selects result N, an empty line clears and
    ``:q`` quits. Each request is awaited before the next line is read.
    """
    print(f"{prompt} (':N' to select, ':q' to quit)", file=out)
    for raw in lines:
        line = raw.rstrip("\n")
        if line.strip() == QUIT_COMMAND:
            break

        if line.startswith(":"):
            try:
                index = int(line[1:])
            except ValueError:
                print(f"Unknown command: {line}", file=out)
                continue
            try:
                future = session.select_index(index)
            except IndexError as exc:
                print(str(exc), file=out)
                continue
            details_outcome = future.result()
            _print_details(details_outcome.value if details_outcome.ok else None, out)
            continue

        future = session.on_query_text_changed(line)
        if future is not None:
            outcome = future.result()
            if not outcome.ok and not is_zero_results(outcome):
                print(f"Search failed: {outcome.kind}", file=out)
        _print_results(list(session.results), out)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args()

    try:
        config = config_from_args(args)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(2) from exc
    except ValueError as exc:
        parser.error(str(exc))

    with AutocompleteSession(config) as session:
        run_interactive(session, sys.stdin, prompt=get_settings().input_placeholder)


if __name__ == "__main__":
    main()
