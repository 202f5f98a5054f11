from pydantic import BaseModel

from osm_transit_extractor.models.line import Line
from osm_transit_extractor.models.route import Route
from osm_transit_extractor.models.stop_area import StopArea
from osm_transit_extractor.models.stop_point import StopPoint


class OsmTcResponse(BaseModel):
    stop_points: list[StopPoint]
    stop_areas: list[StopArea]
    routes: list[Route] | None = None
    lines: list[Line] | None = None
