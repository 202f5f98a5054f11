from enum import Enum

from pydantic import BaseModel

from osm_transit_extractor.models.coord import Coord


class StopPointType(str, Enum):
    STOP_POSITION = "StopPosition"
    PLATFORM = "Platform"
    UNKNOWN = "Unknown"


class StopPoint(BaseModel):
    id: str
    stop_point_type: StopPointType = StopPointType.UNKNOWN
    coord: Coord
    name: str
    all_osm_tags: dict[str, str]
