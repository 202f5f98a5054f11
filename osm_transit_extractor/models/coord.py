from pydantic import BaseModel, ConfigDict


class Coord(BaseModel):
    """WGS84 position. The default (0, 0) means that no coordinate could be resolved."""

    model_config = ConfigDict(frozen=True)

    lat: float = 0.0
    lon: float = 0.0
