import logging
import typing

LOGGER_LEVEL: typing.Final = logging.INFO
OUTPUT_FILE_PREFIX: str = "osm-transit-extractor"
EPSG_WGS84: str = "EPSG:4326"
OVERPASS_API_URL: str = "https://overpass-api.de/api/interpreter"
OVERPASS_TIMEOUT: int = 600  # seconds
SHOW_PROGRESS: bool = False
USER_AGENT: str = "osm-transit-extractor"
