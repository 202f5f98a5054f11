from pydantic import BaseModel

from osm_transit_extractor.models.coord import Coord


class Line(BaseModel):
    id: str
    name: str
    code: str
    colour: str
    operator: str
    network: str
    mode: str
    frequency: str
    opening_hours: str
    frequency_exceptions: str
    all_osm_tags: dict[str, str]
    shape: list[list[Coord]]
    routes_id: list[str]
