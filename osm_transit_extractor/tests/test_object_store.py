import pytest

from osm_transit_extractor.models.osm import Member, Node, OsmId, OsmType, Relation, Way
from osm_transit_extractor.processors.classifier import is_line, is_stop_point
from osm_transit_extractor.store.object_store import ObjectStore


class TestOsmId:
    def test_str(self):
        assert str(OsmId.node(42)) == "node:42"
        assert str(OsmId.way(42)) == "way:42"
        assert str(OsmId.relation(42)) == "relation:42"

    @pytest.mark.parametrize("value", ["node:260743996", "way:1", "relation:1257168"])
    def test_parse_round_trip(self, value):
        assert str(OsmId.parse(value)) == value

    def test_parse(self):
        assert OsmId.parse("relation:1257168") == OsmId(OsmType.RELATION, 1257168)

    @pytest.mark.parametrize("value", ["node", "node:", "area:12", "node:abc"])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError):
            OsmId.parse(value)

    def test_order(self):
        ids = [OsmId.relation(1), OsmId.node(3), OsmId.way(2), OsmId.node(1)]
        assert sorted(ids) == [OsmId.node(1), OsmId.node(3), OsmId.way(2), OsmId.relation(1)]


class TestObjectStore:
    def test_lookup(self, mini_network: ObjectStore):
        assert mini_network.get(OsmId.node(1)).tags["name"] == "Gare"
        assert mini_network.get(OsmId.node(999)) is None
        assert OsmId.way(100) in mini_network
        # Same numeric id, other kind
        assert OsmId.way(1) not in mini_network

    def test_iteration_order(self):
        store = ObjectStore.from_objects(
            [Relation(id=1), Way(id=5), Node(id=9), Node(id=2), Way(id=3)]
        )
        assert list(store) == [
            OsmId.node(2),
            OsmId.node(9),
            OsmId.way(3),
            OsmId.way(5),
            OsmId.relation(1),
        ]
        assert len(store) == 5

    def test_closure_stop_points(self, mini_network: ObjectStore):
        objects = mini_network.closure(is_stop_point)
        # Stop points and the resolvable nodes of the platform way
        assert list(objects) == [
            OsmId.node(1),
            OsmId.node(2),
            OsmId.node(3),
            OsmId.node(4),
            OsmId.node(5),
            OsmId.node(10),
            OsmId.way(200),
        ]

    def test_closure_is_transitive(self, mini_network: ObjectStore):
        objects = mini_network.closure(is_line)
        assert OsmId.relation(500) in objects
        assert OsmId.relation(400) in objects
        assert OsmId.way(101) in objects
        assert OsmId.node(13) in objects
        assert OsmId.relation(402) not in objects

    def test_closure_skips_missing_and_cycles(self):
        store = ObjectStore.from_objects(
            [
                Relation(
                    id=1,
                    tags={"keep": "yes"},
                    members=[Member(OsmId.relation(2)), Member(OsmId.node(404))],
                ),
                Relation(id=2, members=[Member(OsmId.relation(1))]),
                Relation(id=3),
            ]
        )
        objects = store.closure(lambda obj: obj.tags.get("keep") == "yes")
        assert list(objects) == [OsmId.relation(1), OsmId.relation(2)]

    def test_closure_nothing_matches(self, mini_network: ObjectStore):
        assert mini_network.closure(lambda obj: False) == {}
