"""
Resolution of the references between relations, ways and nodes into coordinates.

Every function looks objects up in a mapping indexed by `OsmId`, either the whole
`ObjectStore` or a closure extracted from it. References to objects absent from the
mapping are skipped: partial snapshots give shorter geometries, never errors.
"""

from typing import Callable, Iterable

from osm_transit_extractor.models.coord import Coord
from osm_transit_extractor.models.osm import Member, Node, OsmId, Relation, Way
from osm_transit_extractor.processors.classifier import is_stop
from osm_transit_extractor.store.object_store import ObjectMap

Polyline = list[Coord]
Shape = list[Polyline]


def node_coordinate(node: Node) -> Coord:
    return Coord(lat=node.lat, lon=node.lon)


def coordinate_from_way(objects: ObjectMap, way: Way) -> Coord:
    """Coordinate of the first node of the way found in `objects`, (0, 0) otherwise"""
    for node_id in way.nodes:
        node = objects.get(OsmId.node(node_id))
        if isinstance(node, Node):
            return node_coordinate(node)
    return Coord()


def coordinate_from_relation(objects: ObjectMap, relation: Relation) -> Coord:
    """
    Coordinate of the first node or way member found in `objects`, (0, 0) otherwise.

    Nested relations are not followed. The first way member found gives its first
    coordinate even when none of its nodes resolves.
    """
    for member in relation.members:
        obj = objects.get(member.osm_id)
        if isinstance(obj, Node):
            return node_coordinate(obj)
        if isinstance(obj, Way):
            return coordinate_from_way(objects, obj)
    return Coord()


def way_to_polyline(objects: ObjectMap, way: Way) -> Polyline:
    polyline = []
    for node_id in way.nodes:
        node = objects.get(OsmId.node(node_id))
        if isinstance(node, Node):
            polyline.append(node_coordinate(node))
    return polyline


def route_shape(objects: ObjectMap, relation: Relation) -> Shape:
    """One polyline per way member which is not a stop, dropping polylines of less than 2 points"""
    shape = []
    for member in relation.members:
        if is_stop(member):
            continue
        way = objects.get(member.osm_id)
        if not isinstance(way, Way):
            continue
        polyline = way_to_polyline(objects, way)
        if len(polyline) > 1:
            shape.append(polyline)
    return shape


def line_shape(objects: ObjectMap, members: Iterable[Member]) -> Shape:
    """Concatenation of the shapes of the relation members, computed from the raw members"""
    shape = []
    for member in members:
        relation = objects.get(member.osm_id)
        if isinstance(relation, Relation):
            shape.extend(route_shape(objects, relation))
    return shape


def member_id_strings(members: Iterable[Member], keep: Callable[[Member], bool]) -> list[str]:
    """Ids of the kept members as "<kind>:<id>" strings, in member order"""
    return [str(member.osm_id) for member in members if keep(member)]
