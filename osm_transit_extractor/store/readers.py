"""
Readers building an `ObjectStore` from an OSM snapshot.

Snapshots are read either from a file decoded by pyosmium (PBF or XML), or from the JSON
response of the Overpass API.
"""

import json
import logging
from pathlib import Path

import osmium

from osm_transit_extractor.models.osm import (
    Member,
    Node,
    OsmId,
    OsmObject,
    OsmType,
    Relation,
    Way,
)
from osm_transit_extractor.store.object_store import ObjectStore

# Set up logger
logger = logging.getLogger(__name__)

OSMIUM_SUFFIXES = (".pbf", ".osm", ".bz2", ".gz")


class SnapshotReadError(Exception):
    """The snapshot is missing, unreadable or malformed, extraction cannot go on"""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to read OSM snapshot {path}: {reason}")


class SnapshotHandler(osmium.SimpleHandler):
    """Copies every node, way and relation of the file into plain Python objects"""

    def __init__(self):
        super().__init__()
        self.objects: list[OsmObject] = []

    def node(self, n):
        location = n.location
        lat, lon = (location.lat, location.lon) if location.valid() else (0.0, 0.0)
        self.objects.append(
            Node(id=n.id, tags={tag.k: tag.v for tag in n.tags}, lat=lat, lon=lon)
        )

    def way(self, w):
        self.objects.append(
            Way(
                id=w.id,
                tags={tag.k: tag.v for tag in w.tags},
                nodes=[node_ref.ref for node_ref in w.nodes],
            )
        )

    def relation(self, r):
        self.objects.append(
            Relation(
                id=r.id,
                tags={tag.k: tag.v for tag in r.tags},
                members=[
                    Member(OsmId(OsmType.from_label(m.type), m.ref), m.role) for m in r.members
                ],
            )
        )


def read_osm_file(path: Path) -> ObjectStore:
    """Decode a PBF or XML OSM file with pyosmium"""
    handler = SnapshotHandler()
    try:
        handler.apply_file(str(path))
    except RuntimeError as e:
        raise SnapshotReadError(path, str(e)) from e
    logger.info(f"Read {len(handler.objects)} OSM objects from {path}")
    return ObjectStore.from_objects(handler.objects)


def store_from_overpass(content: dict) -> ObjectStore:
    """Build the store from an Overpass API `[out:json]` response"""
    objects: list[OsmObject] = []
    for element in content.get("elements", []):
        element_type = element.get("type")
        tags = element.get("tags", {})
        if element_type == "node":
            objects.append(
                Node(
                    id=element["id"],
                    tags=tags,
                    lat=float(element.get("lat", 0.0)),
                    lon=float(element.get("lon", 0.0)),
                )
            )
        elif element_type == "way":
            objects.append(Way(id=element["id"], tags=tags, nodes=element.get("nodes", [])))
        elif element_type == "relation":
            objects.append(
                Relation(
                    id=element["id"],
                    tags=tags,
                    members=[
                        Member(OsmId(OsmType.from_label(m["type"]), m["ref"]), m.get("role", ""))
                        for m in element.get("members", [])
                    ],
                )
            )
        else:
            logger.debug(f"Skipping Overpass element of type {element_type}")
    return ObjectStore.from_objects(objects)


def read_overpass_file(path: Path) -> ObjectStore:
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotReadError(path, str(e)) from e
    if not isinstance(content, dict):
        raise SnapshotReadError(path, "not an Overpass JSON response")
    try:
        return store_from_overpass(content)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise SnapshotReadError(path, f"malformed Overpass element: {e!r}") from e


def read_snapshot(path: Path) -> ObjectStore:
    """
    Read an OSM snapshot, picking the reader from the file suffix.

    :param path: a `.osm.pbf`, `.osm` (optionally compressed) or Overpass `.json` file.
    :raises SnapshotReadError: when the file does not exist, is not in a supported format
        or cannot be decoded.
    """
    path = Path(path)
    if not path.is_file():
        raise SnapshotReadError(path, "no such file")
    if path.suffix == ".json":
        return read_overpass_file(path)
    elif path.suffix in OSMIUM_SUFFIXES:
        return read_osm_file(path)
    else:
        raise SnapshotReadError(path, f"unsupported file format {path.suffix}")
