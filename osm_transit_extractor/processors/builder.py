"""
Mapping of classified OSM objects to transit entities.

Fields are read from the OSM tags through fixed tables, a missing tag gives an empty
string. Every entity keeps a copy of all its OSM tags in `all_osm_tags`.
"""

from osm_transit_extractor.models.coord import Coord
from osm_transit_extractor.models.line import Line
from osm_transit_extractor.models.osm import Member, Node, OsmObject, Relation, Way
from osm_transit_extractor.models.route import Route, RoutePoint
from osm_transit_extractor.models.stop_area import StopArea
from osm_transit_extractor.models.stop_point import StopPoint, StopPointType
from osm_transit_extractor.processors.classifier import is_stop
from osm_transit_extractor.processors.resolver import (
    coordinate_from_relation,
    coordinate_from_way,
    line_shape,
    member_id_strings,
    node_coordinate,
    route_shape,
)
from osm_transit_extractor.store.object_store import ObjectMap

# Entity field -> OSM tag
ROUTE_TAGS = {
    "name": "name",
    "code": "ref",
    "destination": "to",
    "origin": "from",
    "mode": "route",
    "colour": "colour",
    "operator": "operator",
    "network": "network",
    "frequency": "interval",
    "opening_hours": "opening_hours",
    "frequency_exceptions": "interval:conditional",
    "travel_time": "duration",
}

LINE_TAGS = {
    "name": "name",
    "code": "ref",
    "mode": "route_master",
    "colour": "colour",
    "operator": "operator",
    "network": "network",
    "frequency": "interval",
    "opening_hours": "opening_hours",
    "frequency_exceptions": "interval:conditional",
}


def tag_fields(obj: OsmObject, table: dict[str, str]) -> dict[str, str]:
    return {field: obj.tags.get(tag, "") for field, tag in table.items()}


def object_coordinate(objects: ObjectMap, obj: OsmObject) -> Coord:
    if isinstance(obj, Node):
        return node_coordinate(obj)
    if isinstance(obj, Way):
        return coordinate_from_way(objects, obj)
    return coordinate_from_relation(objects, obj)


def route_points(relation: Relation) -> list[RoutePoint]:
    return [
        RoutePoint(role=member.role, stop_point_id=str(member.osm_id))
        for member in relation.members
        if is_stop(member)
    ]


def _is_platform(member: Member) -> bool:
    return member.role == "platform"


def _is_relation(member: Member) -> bool:
    return member.osm_id.type == Relation.type


def build_stop_point(objects: ObjectMap, obj: OsmObject) -> StopPoint:
    return StopPoint(
        id=str(obj.osm_id),
        stop_point_type=StopPointType.UNKNOWN,
        coord=object_coordinate(objects, obj),
        name=obj.tags.get("name", ""),
        all_osm_tags=dict(obj.tags),
    )


def build_stop_area(objects: ObjectMap, relation: Relation) -> StopArea:
    # Only the platforms, not every stop role
    return StopArea(
        id=str(relation.osm_id),
        coord=coordinate_from_relation(objects, relation),
        name=relation.tags.get("name", ""),
        all_osm_tags=dict(relation.tags),
        stop_point_ids=member_id_strings(relation.members, _is_platform),
    )


def build_route(objects: ObjectMap, relation: Relation) -> Route:
    return Route(
        id=str(relation.osm_id),
        **tag_fields(relation, ROUTE_TAGS),
        all_osm_tags=dict(relation.tags),
        ordered_route_points=route_points(relation),
        shape=route_shape(objects, relation),
    )


def build_line(objects: ObjectMap, relation: Relation) -> Line:
    return Line(
        id=str(relation.osm_id),
        **tag_fields(relation, LINE_TAGS),
        all_osm_tags=dict(relation.tags),
        shape=line_shape(objects, relation.members),
        routes_id=member_id_strings(relation.members, _is_relation),
    )
