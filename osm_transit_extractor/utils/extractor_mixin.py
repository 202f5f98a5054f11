import logging
from typing import Any

from tqdm import tqdm

from osm_transit_extractor import settings
from osm_transit_extractor.models.osm import OsmId, OsmObject
from osm_transit_extractor.store.object_store import ObjectMap, ObjectStore
from osm_transit_extractor.utils.diagnostics import Diagnostics

logger = logging.getLogger(__name__)


class ExtractorMixin:
    """
    `predicate` selects the OSM objects representing the entity
    `build` maps one selected object to the entity, resolving its references in the
    objects given to it
    `extract` asks the store for the selected objects and their dependencies, then builds
    one entity per selected object, in the store order
    """

    entity_name: str = "entities"

    def __init__(self, *args, **kwargs):
        raise Exception("Utility class")

    @classmethod
    def extract(cls, store: ObjectStore, diagnostics: Diagnostics | None = None) -> list[Any]:
        diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        selected: set[OsmId] = set()

        # Remember the selection so the predicate, and its warnings, runs once per object
        def select(obj: OsmObject) -> bool:
            if cls.predicate(obj, diagnostics):
                selected.add(obj.osm_id)
                return True
            return False

        objects = store.closure(select)
        entities = [
            cls.build(objects, obj)
            for obj in tqdm(
                objects.values(),
                desc=f"Building {cls.entity_name}",
                disable=not settings.SHOW_PROGRESS,
            )
            if obj.osm_id in selected
        ]
        logger.info(f"{cls.__name__}: extracted {len(entities)} {cls.entity_name}")
        return entities

    @classmethod
    def predicate(cls, obj: OsmObject, diagnostics: Diagnostics) -> bool:
        raise NotImplementedError

    @classmethod
    def build(cls, objects: ObjectMap, obj: OsmObject) -> Any:
        raise NotImplementedError
