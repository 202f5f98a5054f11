"""
This module extracts public transport objects from an OpenStreetMap snapshot:
stop points, stop areas, routes and lines.

Each extractor selects its objects in the store together with their dependencies, then
builds one entity per selected object. `get_osm_tcobjects` runs them all and categorizes
the stop points from the routes serving them.
"""

import logging
from pathlib import Path

from osm_transit_extractor.api.overpass import OverpassAPI
from osm_transit_extractor.models.line import Line
from osm_transit_extractor.models.osm import OsmObject
from osm_transit_extractor.models.response import OsmTcResponse
from osm_transit_extractor.models.route import Route
from osm_transit_extractor.models.stop_area import StopArea
from osm_transit_extractor.models.stop_point import StopPoint, StopPointType
from osm_transit_extractor.processors.builder import (
    build_line,
    build_route,
    build_stop_area,
    build_stop_point,
)
from osm_transit_extractor.processors.categorizer import update_stop_points_type
from osm_transit_extractor.processors.classifier import (
    is_line,
    is_route,
    is_stop_area,
    is_stop_point,
)
from osm_transit_extractor.processors.exporter import CSVExporter, GeoJSONExporter
from osm_transit_extractor.store.object_store import ObjectMap, ObjectStore
from osm_transit_extractor.store.readers import read_snapshot, store_from_overpass
from osm_transit_extractor.utils.diagnostics import Diagnostics
from osm_transit_extractor.utils.extractor_mixin import ExtractorMixin

# Set up logger
logger = logging.getLogger(__name__)


class AbstractOSMExtractor(ExtractorMixin):
    # API declaration and technical limitations
    api_class: type[OverpassAPI] = OverpassAPI

    @classmethod
    def fetch_from_api(cls, area: str) -> ObjectStore:
        return store_from_overpass(cls.api_class.fetch_transit_objects(area))

    @classmethod
    def fetch_from_file(cls, path: Path) -> ObjectStore:
        return read_snapshot(path)


class OSMStopPointsExtractor(AbstractOSMExtractor):
    entity_name = "stop points"

    @classmethod
    def predicate(cls, obj: OsmObject, diagnostics: Diagnostics) -> bool:
        return is_stop_point(obj)

    @classmethod
    def build(cls, objects: ObjectMap, obj: OsmObject) -> StopPoint:
        return build_stop_point(objects, obj)


class OSMStopAreasExtractor(AbstractOSMExtractor):
    entity_name = "stop areas"

    @classmethod
    def predicate(cls, obj: OsmObject, diagnostics: Diagnostics) -> bool:
        return is_stop_area(obj)

    @classmethod
    def build(cls, objects: ObjectMap, obj: OsmObject) -> StopArea:
        return build_stop_area(objects, obj)


class OSMRoutesExtractor(AbstractOSMExtractor):
    entity_name = "routes"

    @classmethod
    def predicate(cls, obj: OsmObject, diagnostics: Diagnostics) -> bool:
        return is_route(obj, diagnostics)

    @classmethod
    def build(cls, objects: ObjectMap, obj: OsmObject) -> Route:
        return build_route(objects, obj)


class OSMLinesExtractor(AbstractOSMExtractor):
    entity_name = "lines"

    @classmethod
    def predicate(cls, obj: OsmObject, diagnostics: Diagnostics) -> bool:
        return is_line(obj, diagnostics)

    @classmethod
    def build(cls, objects: ObjectMap, obj: OsmObject) -> Line:
        return build_line(objects, obj)


def get_stop_points_from_osm(
    store: ObjectStore, diagnostics: Diagnostics | None = None
) -> list[StopPoint]:
    return OSMStopPointsExtractor.extract(store, diagnostics)


def get_stop_areas_from_osm(
    store: ObjectStore, diagnostics: Diagnostics | None = None
) -> list[StopArea]:
    return OSMStopAreasExtractor.extract(store, diagnostics)


def get_routes_from_osm(store: ObjectStore, diagnostics: Diagnostics | None = None) -> list[Route]:
    return OSMRoutesExtractor.extract(store, diagnostics)


def get_lines_from_osm(store: ObjectStore, diagnostics: Diagnostics | None = None) -> list[Line]:
    return OSMLinesExtractor.extract(store, diagnostics)


def get_osm_tcobjects(
    store: ObjectStore, stops_only: bool = False, diagnostics: Diagnostics | None = None
) -> OsmTcResponse:
    """
    Extract every public transport object of the store.

    :param stops_only: only extract stop points and stop areas. Stop points are then left
        uncategorized and the response has no routes nor lines.
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    stop_points = get_stop_points_from_osm(store, diagnostics)
    stop_areas = get_stop_areas_from_osm(store, diagnostics)
    if stops_only:
        return OsmTcResponse(stop_points=stop_points, stop_areas=stop_areas)

    routes = get_routes_from_osm(store, diagnostics)
    lines = get_lines_from_osm(store, diagnostics)
    update_stop_points_type(stop_points, routes, diagnostics)
    return OsmTcResponse(
        stop_points=stop_points, stop_areas=stop_areas, routes=routes, lines=lines
    )


def load_store(input_file: Path | None = None, area: str | None = None) -> ObjectStore:
    """Read the snapshot file, or download the transit objects of `area` from Overpass"""
    if input_file is not None:
        logger.info(f"Reading OSM snapshot {input_file}")
        return AbstractOSMExtractor.fetch_from_file(Path(input_file))
    if area is not None:
        return AbstractOSMExtractor.fetch_from_api(area)
    raise ValueError("An input file or an area is required")


def main(
    input: Path | None = None,
    area: str | None = None,
    output: Path = Path("."),
    stops_only: bool = False,
    all_tags: bool = False,
    export_format: str = "csv",
    **kwargs,
) -> OsmTcResponse:
    store = load_store(input, area)
    diagnostics = Diagnostics()
    response = get_osm_tcobjects(store, stops_only, diagnostics)

    counts = {
        stop_point_type.value: sum(
            sp.stop_point_type == stop_point_type for sp in response.stop_points
        )
        for stop_point_type in StopPointType
    }
    logger.info(f"Stop points by type: {counts}")
    logger.info(f"{len(diagnostics)} warnings raised during extraction")

    if export_format == "geojson":
        GeoJSONExporter.write_all(response, output)
    else:
        CSVExporter.write_all(response, output, all_tags)
    return response
