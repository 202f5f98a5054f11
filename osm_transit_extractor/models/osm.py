"""
Raw OpenStreetMap objects as decoded from a snapshot.

Objects reference each other through `OsmId` only, never through Python references:
the object store resolves every link by lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, NamedTuple

OsmTags = dict[str, str]


class OsmType(IntEnum):
    """Kind of an OSM object, ordered the way snapshots are sorted"""

    NODE = 0
    WAY = 1
    RELATION = 2

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> OsmType:
        # Overpass uses full names, pyosmium members use the first letter
        for osm_type in cls:
            if label in (osm_type.label, osm_type.label[0]):
                return osm_type
        raise ValueError(f"Unknown OSM object type: {label}")


class OsmId(NamedTuple):
    type: OsmType
    id: int

    def __str__(self) -> str:
        return f"{self.type.label}:{self.id}"

    @classmethod
    def parse(cls, value: str) -> OsmId:
        """Inverse of `str()`: "node:42" -> OsmId(OsmType.NODE, 42)"""
        label, _, numeric_id = value.partition(":")
        if not numeric_id:
            raise ValueError(f"Invalid OSM id: {value}")
        return cls(OsmType.from_label(label), int(numeric_id))

    @classmethod
    def node(cls, id: int) -> OsmId:
        return cls(OsmType.NODE, id)

    @classmethod
    def way(cls, id: int) -> OsmId:
        return cls(OsmType.WAY, id)

    @classmethod
    def relation(cls, id: int) -> OsmId:
        return cls(OsmType.RELATION, id)


@dataclass(frozen=True)
class Member:
    osm_id: OsmId
    role: str = ""


@dataclass(frozen=True)
class OsmObject:
    type: ClassVar[OsmType]

    id: int
    tags: OsmTags = field(default_factory=dict)

    @property
    def osm_id(self) -> OsmId:
        return OsmId(self.type, self.id)

    def has_tag(self, key: str, value: str) -> bool:
        return self.tags.get(key) == value


@dataclass(frozen=True)
class Node(OsmObject):
    type: ClassVar[OsmType] = OsmType.NODE

    lat: float = 0.0
    lon: float = 0.0


@dataclass(frozen=True)
class Way(OsmObject):
    type: ClassVar[OsmType] = OsmType.WAY

    nodes: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class Relation(OsmObject):
    type: ClassVar[OsmType] = OsmType.RELATION

    members: list[Member] = field(default_factory=list)
