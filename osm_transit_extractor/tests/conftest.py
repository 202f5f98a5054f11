from pathlib import Path

import pytest

from osm_transit_extractor.models.osm import Member, Node, OsmId, Relation, Way
from osm_transit_extractor.store.object_store import ObjectStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def node(id: int, lat: float, lon: float, **tags) -> Node:
    return Node(id=id, lat=lat, lon=lon, tags=tags)


def way(id: int, nodes: list[int], **tags) -> Way:
    return Way(id=id, nodes=nodes, tags=tags)


def relation(id: int, members: list[tuple[OsmId, str]], tags: dict[str, str]) -> Relation:
    return Relation(id=id, members=[Member(osm_id, role) for osm_id, role in members], tags=tags)


@pytest.fixture
def mini_network() -> ObjectStore:
    """A small bus network.

    - node 1 to 5 and way 200 are stop points
    - relation 300 is a stop area
    - relation 400 (ptv2), 401 and 404 (unknown mode) are routes, 402 is a hiking route
      and 403 has no mode
    - relation 500 is a line made of routes 400 and 401
    """
    return ObjectStore.from_objects(
        [
            node(1, 48.0, 2.0, highway="bus_stop", public_transport="platform", name="Gare"),
            node(2, 48.1, 2.1, public_transport="stop_position", name="Gare"),
            node(3, 48.2, 2.2, highway="bus_stop", name="Mairie"),
            node(4, 48.3, 2.3, railway="tram_stop", name="Parc"),
            node(5, 48.4, 2.4, highway="bus_stop", name="Ecole"),
            node(10, 45.0, 5.0),
            node(11, 45.1, 5.1),
            node(12, 45.2, 5.2),
            node(13, 45.3, 5.3),
            way(100, [10, 11, 12], highway="primary"),
            way(101, [12, 13], highway="secondary"),
            way(102, [13, 999], highway="service"),
            way(200, [20, 21, 10], public_transport="platform", name="Quai"),
            relation(
                300,
                [
                    (OsmId.node(2), "stop"),
                    (OsmId.node(1), "platform"),
                    (OsmId.way(200), "platform"),
                ],
                {"type": "public_transport", "public_transport": "stop_area", "name": "Pôle Gare"},
            ),
            relation(
                400,
                [
                    (OsmId.node(1), "platform"),
                    (OsmId.node(2), "stop"),
                    (OsmId.node(3), "platform"),
                    (OsmId.node(4), "stop_entry_only"),
                    (OsmId.way(100), ""),
                    (OsmId.way(101), ""),
                    (OsmId.way(102), ""),
                    (OsmId.node(5), "forward"),
                ],
                {
                    "type": "route",
                    "route": "bus",
                    "public_transport:version": "2",
                    "ref": "1",
                    "name": "Bus 1: Gare => Parc",
                    "from": "Gare",
                    "to": "Parc",
                    "operator": "Transdev",
                    "network": "TAG",
                    "interval": "00:15",
                    "duration": "00:20",
                },
            ),
            relation(
                401,
                [(OsmId.node(5), "stop"), (OsmId.node(3), "stop"), (OsmId.way(101), "")],
                {
                    "type": "route",
                    "route": "bus",
                    "ref": "1",
                    "name": "Bus 1: Ecole",
                    "colour": "#FF0000",
                },
            ),
            relation(
                402, [(OsmId.way(100), "")], {"type": "route", "route": "hiking", "name": "GR"}
            ),
            relation(403, [(OsmId.way(101), "")], {"type": "route", "name": "Sans mode"}),
            relation(
                404,
                [(OsmId.way(100), "")],
                {"type": "route", "route": "gondola_boat", "name": "Navette"},
            ),
            relation(
                500,
                [
                    (OsmId.relation(400), ""),
                    (OsmId.relation(401), ""),
                    (OsmId.node(1), ""),
                ],
                {
                    "type": "route_master",
                    "route_master": "bus",
                    "ref": "1",
                    "name": "Ligne 1",
                    "colour": "#00FF00",
                    "operator": "Transdev",
                    "network": "TAG",
                },
            ),
        ]
    )
