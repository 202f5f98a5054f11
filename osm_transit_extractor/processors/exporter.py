"""
Export of the extracted transit entities.

CSV files follow a fixed layout per entity kind: entity ids are prefixed with the entity
kind, shapes are written as WKT multi line strings, and every OSM tag can optionally be
appended as an `osm:<key>` column. GeoJSON files carry the same fields with a real
geometry.

Classes:
    CSVExporter: writes the stop points, stop areas, routes and lines CSV files
    GeoJSONExporter: writes one GeoJSON file per entity kind
"""

import logging
from pathlib import Path
from typing import Sequence

import geopandas as gpd
import numpy as np
import pandas as pd
from shapely.geometry import MultiLineString, Point

from osm_transit_extractor.models.coord import Coord
from osm_transit_extractor.models.line import Line
from osm_transit_extractor.models.response import OsmTcResponse
from osm_transit_extractor.models.route import Route
from osm_transit_extractor.models.stop_area import StopArea
from osm_transit_extractor.models.stop_point import StopPoint
from osm_transit_extractor.settings import EPSG_WGS84, OUTPUT_FILE_PREFIX

# Set up logger
logger = logging.getLogger(__name__)

STOP_POINTS_HEADER = ["stop_point_id", "lat", "lon", "name", "stop_point_type"]
STOP_AREAS_HEADER = ["stop_area_id", "lat", "lon", "name"]
STOP_AREAS_STOP_POINT_HEADER = ["stop_area_id", "stop_point_id"]
ROUTES_HEADER = [
    "route_id",
    "name",
    "code",
    "destination",
    "origin",
    "colour",
    "operator",
    "network",
    "mode",
    "frequency",
    "opening_hours",
    "frequency_exceptions",
    "travel_time",
    "shape",
]
ROUTE_POINTS_HEADER = ["route_id", "role", "stop_id"]
LINES_HEADER = [
    "line_id",
    "name",
    "code",
    "colour",
    "operator",
    "network",
    "mode",
    "frequency",
    "opening_hours",
    "frequency_exceptions",
    "shape",
]
LINE_ROUTES_HEADER = ["line_id", "route_id"]


def output_path(output_dir: Path, name: str, suffix: str = ".csv") -> Path:
    return Path(output_dir) / f"{OUTPUT_FILE_PREFIX}_{name}{suffix}"


def format_float(value: float) -> str:
    """Shortest positional representation: 48.8566 -> "48.8566", 2.0 -> "2" """
    return np.format_float_positional(value, trim="-")


def shape_to_wkt(shape: list[list[Coord]]) -> str:
    if not shape:
        return ""
    linestrings = "), (".join(
        ", ".join(f"{format_float(coord.lon)} {format_float(coord.lat)}" for coord in polyline)
        for polyline in shape
    )
    return f"MULTILINESTRING(({linestrings}))"


def shape_to_multilinestring(shape: list[list[Coord]]) -> MultiLineString | None:
    if not shape:
        return None
    return MultiLineString([[(coord.lon, coord.lat) for coord in polyline] for polyline in shape])


class CSVExporter:
    """Utility class writing the extracted entities as CSV files"""

    @staticmethod
    def osm_tag_keys(entities: Sequence[StopPoint | StopArea | Route | Line]) -> list[str]:
        return sorted({key for entity in entities for key in entity.all_osm_tags})

    @staticmethod
    def to_csv(rows: list[list[str]], header: list[str], path: Path) -> pd.DataFrame:
        df = pd.DataFrame(rows, columns=header, dtype=str)
        df.to_csv(path, index=False, encoding="utf-8")
        logger.info(f"Data saved to {path}")
        return df

    @classmethod
    def with_osm_tags(
        cls,
        rows: list[list[str]],
        header: list[str],
        entities: Sequence[StopPoint | StopArea | Route | Line],
        all_tags: bool,
    ) -> tuple[list[list[str]], list[str]]:
        if not all_tags:
            return rows, header
        keys = cls.osm_tag_keys(entities)
        header = header + [f"osm:{key}" for key in keys]
        rows = [
            row + [entity.all_osm_tags.get(key, "") for key in keys]
            for row, entity in zip(rows, entities, strict=True)
        ]
        return rows, header

    @classmethod
    def write_stop_points(
        cls, stop_points: list[StopPoint], output_dir: Path, all_tags: bool = False
    ) -> pd.DataFrame:
        rows = [
            [
                f"StopPoint:{sp.id}",
                format_float(sp.coord.lat),
                format_float(sp.coord.lon),
                sp.name,
                sp.stop_point_type.value,
            ]
            for sp in stop_points
        ]
        rows, header = cls.with_osm_tags(rows, STOP_POINTS_HEADER, stop_points, all_tags)
        return cls.to_csv(rows, header, output_path(output_dir, "stop_points"))

    @classmethod
    def write_stop_areas(
        cls, stop_areas: list[StopArea], output_dir: Path, all_tags: bool = False
    ) -> pd.DataFrame:
        rows = [
            [
                f"StopArea:{sa.id}",
                format_float(sa.coord.lat),
                format_float(sa.coord.lon),
                sa.name,
            ]
            for sa in stop_areas
        ]
        rows, header = cls.with_osm_tags(rows, STOP_AREAS_HEADER, stop_areas, all_tags)
        return cls.to_csv(rows, header, output_path(output_dir, "stop_areas"))

    @classmethod
    def write_stop_areas_stop_point(
        cls, stop_areas: list[StopArea], output_dir: Path
    ) -> pd.DataFrame:
        rows = [
            [f"StopArea:{sa.id}", f"StopPoint:{sp_id}"]
            for sa in stop_areas
            for sp_id in sa.stop_point_ids
        ]
        return cls.to_csv(
            rows, STOP_AREAS_STOP_POINT_HEADER, output_path(output_dir, "stop_areas_stop_point")
        )

    @classmethod
    def write_routes(
        cls, routes: list[Route], output_dir: Path, all_tags: bool = False
    ) -> tuple[pd.DataFrame, pd.DataFrame]:
        rows = [
            [
                f"Route:{r.id}",
                r.name,
                r.code,
                r.destination,
                r.origin,
                r.colour,
                r.operator,
                r.network,
                r.mode,
                r.frequency,
                r.opening_hours,
                r.frequency_exceptions,
                r.travel_time,
                shape_to_wkt(r.shape),
            ]
            for r in routes
        ]
        rows, header = cls.with_osm_tags(rows, ROUTES_HEADER, routes, all_tags)
        routes_df = cls.to_csv(rows, header, output_path(output_dir, "routes"))

        route_points_rows = [
            [f"Route:{r.id}", rp.role, f"StopPoint:{rp.stop_point_id}"]
            for r in routes
            for rp in r.ordered_route_points
        ]
        route_points_df = cls.to_csv(
            route_points_rows, ROUTE_POINTS_HEADER, output_path(output_dir, "route_points")
        )
        return routes_df, route_points_df

    @classmethod
    def write_lines(
        cls, lines: list[Line], output_dir: Path, all_tags: bool = False
    ) -> tuple[pd.DataFrame, pd.DataFrame]:
        rows = [
            [
                f"Line:{line.id}",
                line.name,
                line.code,
                line.colour,
                line.operator,
                line.network,
                line.mode,
                line.frequency,
                line.opening_hours,
                line.frequency_exceptions,
                shape_to_wkt(line.shape),
            ]
            for line in lines
        ]
        rows, header = cls.with_osm_tags(rows, LINES_HEADER, lines, all_tags)
        lines_df = cls.to_csv(rows, header, output_path(output_dir, "lines"))

        line_routes_rows = [
            [f"Line:{line.id}", f"Route:{route_id}"]
            for line in lines
            for route_id in line.routes_id
        ]
        line_routes_df = cls.to_csv(
            line_routes_rows, LINE_ROUTES_HEADER, output_path(output_dir, "line_routes")
        )
        return lines_df, line_routes_df

    @classmethod
    def write_all(cls, response: OsmTcResponse, output_dir: Path, all_tags: bool = False) -> None:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        cls.write_stop_points(response.stop_points, output_dir, all_tags)
        cls.write_stop_areas(response.stop_areas, output_dir, all_tags)
        cls.write_stop_areas_stop_point(response.stop_areas, output_dir)
        if response.routes is not None:
            cls.write_routes(response.routes, output_dir, all_tags)
        if response.lines is not None:
            cls.write_lines(response.lines, output_dir, all_tags)


class GeoJSONExporter:
    """Utility class writing the extracted entities as GeoJSON files, in WGS84"""

    @staticmethod
    def stop_points_to_gdf(stop_points: list[StopPoint]) -> gpd.GeoDataFrame:
        return gpd.GeoDataFrame(
            [
                {
                    "stop_point_id": f"StopPoint:{sp.id}",
                    "name": sp.name,
                    "stop_point_type": sp.stop_point_type.value,
                    "geometry": Point(sp.coord.lon, sp.coord.lat),
                }
                for sp in stop_points
            ],
            columns=["stop_point_id", "name", "stop_point_type", "geometry"],
            geometry="geometry",
            crs=EPSG_WGS84,
        )

    @staticmethod
    def stop_areas_to_gdf(stop_areas: list[StopArea]) -> gpd.GeoDataFrame:
        return gpd.GeoDataFrame(
            [
                {
                    "stop_area_id": f"StopArea:{sa.id}",
                    "name": sa.name,
                    "stop_point_ids": [f"StopPoint:{sp_id}" for sp_id in sa.stop_point_ids],
                    "geometry": Point(sa.coord.lon, sa.coord.lat),
                }
                for sa in stop_areas
            ],
            columns=["stop_area_id", "name", "stop_point_ids", "geometry"],
            geometry="geometry",
            crs=EPSG_WGS84,
        )

    @staticmethod
    def routes_to_gdf(routes: list[Route]) -> gpd.GeoDataFrame:
        fields = ROUTES_HEADER[1:-1]
        return gpd.GeoDataFrame(
            [
                {
                    "route_id": f"Route:{r.id}",
                    **{field: getattr(r, field) for field in fields},
                    "stop_ids": [f"StopPoint:{rp.stop_point_id}" for rp in r.ordered_route_points],
                    "geometry": shape_to_multilinestring(r.shape),
                }
                for r in routes
            ],
            columns=["route_id", *fields, "stop_ids", "geometry"],
            geometry="geometry",
            crs=EPSG_WGS84,
        )

    @staticmethod
    def lines_to_gdf(lines: list[Line]) -> gpd.GeoDataFrame:
        fields = LINES_HEADER[1:-1]
        return gpd.GeoDataFrame(
            [
                {
                    "line_id": f"Line:{line.id}",
                    **{field: getattr(line, field) for field in fields},
                    "route_ids": [f"Route:{route_id}" for route_id in line.routes_id],
                    "geometry": shape_to_multilinestring(line.shape),
                }
                for line in lines
            ],
            columns=["line_id", *fields, "route_ids", "geometry"],
            geometry="geometry",
            crs=EPSG_WGS84,
        )

    @staticmethod
    def to_geojson(gdf: gpd.GeoDataFrame, path: Path) -> None:
        gdf = gdf.copy()
        # Lists are not supported by the GeoJSON driver
        for col in gdf.columns:
            if col != "geometry" and gdf[col].dtype == "object":
                gdf[col] = gdf[col].apply(
                    lambda value: ",".join(value) if isinstance(value, list) else value
                )
        gdf.to_file(path, driver="GeoJSON")
        logger.info(f"Data saved to {path}")

    @classmethod
    def write_all(cls, response: OsmTcResponse, output_dir: Path) -> None:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        cls.to_geojson(
            cls.stop_points_to_gdf(response.stop_points),
            output_path(output_dir, "stop_points", ".geojson"),
        )
        cls.to_geojson(
            cls.stop_areas_to_gdf(response.stop_areas),
            output_path(output_dir, "stop_areas", ".geojson"),
        )
        if response.routes is not None:
            cls.to_geojson(
                cls.routes_to_gdf(response.routes), output_path(output_dir, "routes", ".geojson")
            )
        if response.lines is not None:
            cls.to_geojson(
                cls.lines_to_gdf(response.lines), output_path(output_dir, "lines", ".geojson")
            )
