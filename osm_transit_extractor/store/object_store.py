import logging
from collections import deque
from collections.abc import Mapping
from typing import Callable, Iterable, Iterator

from osm_transit_extractor.models.osm import OsmId, OsmObject, Relation, Way

# Set up logger
logger = logging.getLogger(__name__)

ObjectMap = Mapping[OsmId, OsmObject]


class ObjectStore(Mapping[OsmId, OsmObject]):
    """
    Read-only view over a decoded OSM snapshot, indexed by `OsmId`

    Relations and ways only hold the ids of the objects they reference, every link is
    followed by lookup. Iteration follows the snapshot order: nodes, ways then relations,
    each sorted by numeric id.
    """

    def __init__(self, objects: ObjectMap | None = None):
        self._objects: dict[OsmId, OsmObject] = dict(sorted((objects or {}).items()))

    @classmethod
    def from_objects(cls, objects: Iterable[OsmObject]) -> "ObjectStore":
        return cls({obj.osm_id: obj for obj in objects})

    def __getitem__(self, osm_id: OsmId) -> OsmObject:
        return self._objects[osm_id]

    def __iter__(self) -> Iterator[OsmId]:
        return iter(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    @staticmethod
    def dependencies(obj: OsmObject) -> list[OsmId]:
        if isinstance(obj, Relation):
            return [member.osm_id for member in obj.members]
        if isinstance(obj, Way):
            return [OsmId.node(node_id) for node_id in obj.nodes]
        return []

    def closure(self, predicate: Callable[[OsmObject], bool]) -> dict[OsmId, OsmObject]:
        """
        Get the objects matching `predicate` together with all their dependencies.

        Dependencies are followed transitively through relation members and way nodes,
        so a route master pulls in its routes, their ways and the nodes of those ways.
        References to objects missing from the snapshot are skipped.

        :param predicate: selects the root objects, called once per object of the store.
        :return: a mapping sorted by `OsmId`, like the store itself.
        """
        found: dict[OsmId, OsmObject] = {}
        queue: deque[OsmId] = deque(obj.osm_id for obj in self.values() if predicate(obj))
        while queue:
            osm_id = queue.popleft()
            if osm_id in found:
                continue
            obj = self._objects.get(osm_id)
            if obj is None:
                continue
            found[osm_id] = obj
            queue.extend(dep for dep in self.dependencies(obj) if dep not in found)
        logger.debug(f"Closure contains {len(found)} objects out of {len(self)}")
        return dict(sorted(found.items()))
