import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from osm_transit_extractor import settings
from osm_transit_extractor.processors import osm
from osm_transit_extractor.store.readers import SnapshotReadError
from osm_transit_extractor.utils.logger import setup_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract public transport objects from an OpenStreetMap snapshot"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "-i",
        "--input",
        type=Path,
        help="OSM snapshot: .osm.pbf, .osm or Overpass .json file",
    )
    source.add_argument(
        "--area",
        type=str,
        help="Name of an administrative area to download from the Overpass API",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("."),
        help="Output directory",
    )
    parser.add_argument(
        "--stops-only",
        action="store_true",
        help="Only extract stop points and stop areas",
    )
    parser.add_argument(
        "-a",
        "--all-tags",
        action="store_true",
        help="Add every OSM tag as an osm:<key> column",
    )
    parser.add_argument(
        "--format",
        dest="export_format",
        choices=["csv", "geojson"],
        default="csv",
        help="Output format",
    )
    parser.add_argument("--log-dir", type=Path, default=None, help="Also write warnings here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logs")
    parser.add_argument("--progress", action="store_true", help="Show progress bars")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logger = setup_logger(
        level=logging.DEBUG if args.verbose else logging.INFO, log_dir=args.log_dir
    )

    if args.progress:
        settings.SHOW_PROGRESS = True

    start = datetime.now()

    try:
        osm.main(**args.__dict__)
    except SnapshotReadError as e:
        logger.error(str(e))
        sys.exit(1)

    end = datetime.now()
    logger.info(f"Duration: {end - start}s")


if __name__ == "__main__":
    main()
