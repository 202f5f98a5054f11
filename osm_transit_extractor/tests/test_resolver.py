from osm_transit_extractor.models.coord import Coord
from osm_transit_extractor.models.osm import Member, OsmId, Relation, Way
from osm_transit_extractor.processors.classifier import is_stop
from osm_transit_extractor.processors.resolver import (
    coordinate_from_relation,
    coordinate_from_way,
    line_shape,
    member_id_strings,
    route_shape,
    way_to_polyline,
)
from osm_transit_extractor.store.object_store import ObjectStore

C10 = Coord(lat=45.0, lon=5.0)
C11 = Coord(lat=45.1, lon=5.1)
C12 = Coord(lat=45.2, lon=5.2)
C13 = Coord(lat=45.3, lon=5.3)


class TestCoordinates:
    def test_coordinate_from_way_first_resolvable_node(self, mini_network: ObjectStore):
        assert coordinate_from_way(mini_network, mini_network[OsmId.way(200)]) == C10

    def test_coordinate_from_way_no_node(self, mini_network: ObjectStore):
        assert coordinate_from_way(mini_network, Way(id=1, nodes=[998, 999])) == Coord(
            lat=0, lon=0
        )

    def test_coordinate_from_relation_first_node(self, mini_network: ObjectStore):
        relation = mini_network[OsmId.relation(300)]
        assert coordinate_from_relation(mini_network, relation) == Coord(lat=48.1, lon=2.1)

    def test_coordinate_from_relation_through_way(self, mini_network: ObjectStore):
        relation = Relation(
            id=1, members=[Member(OsmId.node(999)), Member(OsmId.way(101)), Member(OsmId.node(1))]
        )
        assert coordinate_from_relation(mini_network, relation) == C12

    def test_coordinate_from_relation_unresolved_way_gives_sentinel(self):
        store = ObjectStore.from_objects([Way(id=1, nodes=[404])])
        relation = Relation(id=2, members=[Member(OsmId.way(1))])
        assert coordinate_from_relation(store, relation) == Coord()

    def test_coordinate_from_relation_ignores_nested_relations(self, mini_network: ObjectStore):
        relation = Relation(id=1, members=[Member(OsmId.relation(300))])
        assert coordinate_from_relation(mini_network, relation) == Coord()


class TestShapes:
    def test_way_to_polyline_skips_missing_nodes(self, mini_network: ObjectStore):
        assert way_to_polyline(mini_network, mini_network[OsmId.way(100)]) == [C10, C11, C12]
        assert way_to_polyline(mini_network, mini_network[OsmId.way(102)]) == [C13]
        assert way_to_polyline(mini_network, Way(id=1, nodes=[998])) == []

    def test_route_shape(self, mini_network: ObjectStore):
        # way 102 has a single resolvable node and is dropped
        assert route_shape(mini_network, mini_network[OsmId.relation(400)]) == [
            [C10, C11, C12],
            [C12, C13],
        ]

    def test_route_shape_ignores_stop_members(self, mini_network: ObjectStore):
        relation = Relation(
            id=1, members=[Member(OsmId.way(100), "platform"), Member(OsmId.way(101), "")]
        )
        assert route_shape(mini_network, relation) == [[C12, C13]]

    def test_route_shape_empty(self, mini_network: ObjectStore):
        relation = Relation(id=1, members=[Member(OsmId.way(102)), Member(OsmId.node(10))])
        assert route_shape(mini_network, relation) == []

    def test_line_shape_concatenates_route_shapes(self, mini_network: ObjectStore):
        line = mini_network[OsmId.relation(500)]
        expected = route_shape(mini_network, mini_network[OsmId.relation(400)]) + route_shape(
            mini_network, mini_network[OsmId.relation(401)]
        )
        assert line_shape(mini_network, line.members) == expected
        assert len(expected) == 3

    def test_line_shape_missing_route(self, mini_network: ObjectStore):
        members = [Member(OsmId.relation(9999)), Member(OsmId.relation(401))]
        assert line_shape(mini_network, members) == [[C12, C13]]


def test_member_id_strings(mini_network: ObjectStore):
    relation = mini_network[OsmId.relation(400)]
    assert member_id_strings(relation.members, is_stop) == [
        "node:1",
        "node:2",
        "node:3",
        "node:4",
    ]
