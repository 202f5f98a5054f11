import logging
from datetime import datetime

import requests

from osm_transit_extractor import settings

# Set up logger
logger = logging.getLogger(__name__)

OVERPASS_TIMEOUT_MARGIN = 30  # seconds


class OverpassAPI:
    API_URL = settings.OVERPASS_API_URL

    @classmethod
    def query_overpass(cls, query: str, timeout: int) -> dict:
        """
        Send an Overpass QL query and return the decoded `[out:json]` response.

        The HTTP timeout leaves the server some margin over the `[timeout:]` of the query,
        so a slow query fails on the server side with a readable error.

        Raises:
            requests.exceptions.HTTPError: the server rejected or could not run the query
        """
        start = datetime.now()
        response = requests.post(
            cls.API_URL,
            data={"data": query},
            headers={"User-Agent": settings.USER_AGENT},
            timeout=timeout + OVERPASS_TIMEOUT_MARGIN,
        )
        response.raise_for_status()
        content = response.json()
        elapsed = datetime.now() - start
        logger.info(
            f"Overpass returned {len(content.get('elements', []))} elements "
            f"in {elapsed.seconds}s"
        )
        return content

    @classmethod
    def build_transit_query(cls, area: str, timeout: int) -> str:
        """
        Query every transit object of an administrative area with all its dependencies.

        Args:
            area: name of the administrative boundary, e.g. "Isère"
            timeout: Query timeout in seconds
        """
        return f"""
        [out:json][timeout:{timeout}];
        area["name"="{area}"]["boundary"="administrative"]->.searchArea;
        (
          nw["public_transport"~"^(platform|stop_position)$"](area.searchArea);
          nw["highway"="bus_stop"](area.searchArea);
          nw["railway"="tram_stop"](area.searchArea);
          relation["public_transport"="stop_area"](area.searchArea);
          relation["type"~"^(route|route_master)$"](area.searchArea);
        );
        (._; >>;);
        out body;
        """

    @classmethod
    def fetch_transit_objects(cls, area: str, timeout: int = settings.OVERPASS_TIMEOUT) -> dict:
        logger.info(f"Fetching transit objects of {area} from Overpass")
        return cls.query_overpass(cls.build_transit_query(area, timeout), timeout)
