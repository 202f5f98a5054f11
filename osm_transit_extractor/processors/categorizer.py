"""
Categorization of stop points as platforms or stop positions.

Stop points tagged with the public transport v2 scheme are categorized from their own
tags. The others are categorized from the role they have in the ptv2 routes serving
them. Both steps are ordered lists of rules, the first matching rule wins.
"""

import logging

from tqdm import tqdm

from osm_transit_extractor import settings
from osm_transit_extractor.models.route import Route
from osm_transit_extractor.models.stop_point import StopPoint, StopPointType
from osm_transit_extractor.utils.diagnostics import Diagnostics

# Set up logger
logger = logging.getLogger(__name__)

# (tag key, tag value) -> type
TAG_RULES: list[tuple[tuple[str, str], StopPointType]] = [
    (("public_transport", "platform"), StopPointType.PLATFORM),
    (("public_transport", "stop_position"), StopPointType.STOP_POSITION),
]

# roles in a ptv2 route -> type
ROLE_RULES: list[tuple[frozenset[str], StopPointType]] = [
    (
        frozenset(["platform", "platform_exit_only", "platform_entry_only"]),
        StopPointType.PLATFORM,
    ),
    (frozenset(["stop", "stop_exit_only", "stop_entry_only"]), StopPointType.STOP_POSITION),
]


def is_ptv2(route: Route) -> bool:
    return route.all_osm_tags.get("public_transport:version") == "2"


def type_from_tags(tags: dict[str, str]) -> StopPointType:
    for (key, value), stop_point_type in TAG_RULES:
        if tags.get(key) == value:
            return stop_point_type
    return StopPointType.UNKNOWN


def type_from_roles(roles: list[str]) -> StopPointType:
    for rule_roles, stop_point_type in ROLE_RULES:
        if rule_roles.intersection(roles):
            return stop_point_type
    return StopPointType.UNKNOWN


def get_routes_from_stop(routes: list[Route], stop_point: StopPoint) -> list[Route]:
    return [route for route in routes if route.contains_stop_point_id(stop_point.id)]


def categorize_stop_point(
    stop_point: StopPoint, routes: list[Route], diagnostics: Diagnostics | None = None
) -> StopPointType:
    """
    Compute the type of a stop point, without modifying it.

    :param routes: the routes serving the stop point.
    :return: the first decision of the tag rules, else of the role rules applied to the
        ptv2 routes by descending id, else `StopPointType.UNKNOWN`.
    """
    stop_point_type = type_from_tags(stop_point.all_osm_tags)
    if stop_point_type != StopPointType.UNKNOWN:
        return stop_point_type

    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    ptv2_routes = sorted(filter(is_ptv2, routes), key=lambda r: r.id, reverse=True)
    diagnostics.warn(
        logger,
        Diagnostics.STOP_POINT_NEEDS_PTV2,
        f"categorization of stop_point {stop_point.id} needs pt_v2 routes. "
        f"{len(ptv2_routes)} ptv2 routes found",
        osm_id=stop_point.id,
        ptv2_routes=len(ptv2_routes),
    )
    for route in ptv2_routes:
        stop_point_type = type_from_roles(route.get_stop_point_roles(stop_point.id))
        if stop_point_type != StopPointType.UNKNOWN:
            break
    return stop_point_type


def update_stop_points_type(
    stop_points: list[StopPoint], routes: list[Route], diagnostics: Diagnostics | None = None
) -> None:
    """Set the type of every stop point from its tags and the routes serving it"""
    for stop_point in tqdm(
        stop_points, desc="Categorizing stop points", disable=not settings.SHOW_PROGRESS
    ):
        stop_point.stop_point_type = categorize_stop_point(
            stop_point, get_routes_from_stop(routes, stop_point), diagnostics
        )
