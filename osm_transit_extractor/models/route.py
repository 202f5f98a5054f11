from pydantic import BaseModel

from osm_transit_extractor.models.coord import Coord


class RoutePoint(BaseModel):
    role: str
    stop_point_id: str


class Route(BaseModel):
    id: str
    name: str
    code: str
    destination: str
    origin: str
    colour: str
    operator: str
    network: str
    mode: str
    frequency: str
    opening_hours: str
    frequency_exceptions: str
    travel_time: str
    all_osm_tags: dict[str, str]
    ordered_route_points: list[RoutePoint]
    shape: list[list[Coord]]

    def contains_stop_point_id(self, stop_point_id: str) -> bool:
        return any(rp.stop_point_id == stop_point_id for rp in self.ordered_route_points)

    def get_stop_point_roles(self, stop_point_id: str) -> list[str]:
        """Roles of the stop point within the route, a stop may be served several times"""
        return [
            rp.role for rp in self.ordered_route_points if rp.stop_point_id == stop_point_id
        ]
