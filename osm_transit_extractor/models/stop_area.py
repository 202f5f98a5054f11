from pydantic import BaseModel

from osm_transit_extractor.models.coord import Coord


class StopArea(BaseModel):
    id: str
    coord: Coord
    name: str
    all_osm_tags: dict[str, str]
    stop_point_ids: list[str]
