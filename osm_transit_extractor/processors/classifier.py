"""
Predicates deciding which raw OSM objects represent public transport concepts.
"""

import logging

from osm_transit_extractor.models.osm import Member, Node, OsmId, OsmObject, Relation, Way
from osm_transit_extractor.utils.diagnostics import Diagnostics

# Set up logger
logger = logging.getLogger(__name__)

STOP_POINT_TAGS = [
    ("public_transport", "platform"),
    ("public_transport", "stop_position"),
    ("highway", "bus_stop"),
    ("railway", "tram_stop"),
]

NON_PT_ROUTE_TYPES = frozenset(
    [
        "bicycle",
        "canoe",
        "detour",
        "fitness_trail",
        "foot",
        "hiking",
        "horse",
        "inline_skates",
        "mtb",
        "nordic_walking",
        "pipeline",
        "piste",
        "power",
        "proposed",
        "road",
        "running",
        "ski",
        "historic",
        "path",
        "junction",
        "tracks",
    ]
)

PT_ROUTE_TYPES = frozenset(
    [
        "trolleybus",
        "bus",
        "train",
        "subway",
        "light_rail",
        "monorail",
        "tram",
        "railway",
        "ferry",
        "coach",
        "aerialway",
        "funicular",
        "rail",
        "share_taxi",
    ]
)

STOP_ROLES = frozenset(
    [
        "stop",
        "platform",
        "stop_exit_only",
        "stop_entry_only",
        "platform_exit_only",
        "platform_entry_only",
        "fixme",
    ]
)


def is_stop_point(obj: OsmObject) -> bool:
    return isinstance(obj, (Node, Way)) and any(
        obj.has_tag(key, value) for key, value in STOP_POINT_TAGS
    )


def is_stop_area(obj: OsmObject) -> bool:
    return isinstance(obj, Relation) and obj.has_tag("public_transport", "stop_area")


def is_pt_route_type(
    osm_id: OsmId,
    tag_name: str,
    route_type: str | None,
    diagnostics: Diagnostics | None = None,
) -> bool:
    """
    Tell if the transport mode of a route or route master is a public transport one.

    Unknown modes are kept, only the explicitly excluded ones are dropped. A relation
    without mode is dropped.
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    if route_type is None:
        diagnostics.warn(
            logger,
            Diagnostics.ROUTE_TYPE_EMPTY,
            f"tag {tag_name} is empty : relation {osm_id.id} is ignored",
            osm_id=str(osm_id),
            tag_name=tag_name,
        )
        return False
    if route_type in NON_PT_ROUTE_TYPES:
        return False
    if route_type not in PT_ROUTE_TYPES:
        diagnostics.warn(
            logger,
            Diagnostics.ROUTE_TYPE_UNKNOWN,
            f"tag {tag_name} is unknown : relation {osm_id.id} is extracted. "
            "Update mode list to remove this message.",
            osm_id=str(osm_id),
            tag_name=tag_name,
            route_type=route_type,
        )
    return True


def _is_pt_relation(obj: OsmObject, relation_type: str, diagnostics: Diagnostics | None) -> bool:
    return (
        isinstance(obj, Relation)
        and obj.has_tag("type", relation_type)
        and is_pt_route_type(obj.osm_id, relation_type, obj.tags.get(relation_type), diagnostics)
    )


def is_route(obj: OsmObject, diagnostics: Diagnostics | None = None) -> bool:
    return _is_pt_relation(obj, "route", diagnostics)


def is_line(obj: OsmObject, diagnostics: Diagnostics | None = None) -> bool:
    return _is_pt_relation(obj, "route_master", diagnostics)


def is_stop(member: Member) -> bool:
    return member.role in STOP_ROLES
