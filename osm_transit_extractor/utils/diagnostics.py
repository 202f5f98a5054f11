import logging
from typing import Any

from pydantic import BaseModel, Field


class DiagnosticWarning(BaseModel):
    code: str
    message: str
    osm_id: str | None = None
    context: dict[str, Any] = Field(default_factory=dict)


class Diagnostics:
    """
    Collects the non-fatal warnings raised while classifying and categorizing OSM objects

    Every warning is kept in `warnings` and logged on the logger of the caller, with its
    context passed as `extra` so the JSON lines log handler can output it.
    """

    ROUTE_TYPE_EMPTY = "route_type_empty"
    ROUTE_TYPE_UNKNOWN = "route_type_unknown"
    STOP_POINT_NEEDS_PTV2 = "stop_point_needs_ptv2"

    def __init__(self):
        self.warnings: list[DiagnosticWarning] = []

    def warn(
        self,
        logger: logging.Logger,
        code: str,
        message: str,
        osm_id: str | None = None,
        **context: Any,
    ) -> DiagnosticWarning:
        warning = DiagnosticWarning(code=code, message=message, osm_id=osm_id, context=context)
        self.warnings.append(warning)
        logger.warning(
            message,
            extra={"extra": {"code": code, "osm_id": osm_id, **context}},
            stacklevel=2,
        )
        return warning

    def by_code(self, code: str) -> list[DiagnosticWarning]:
        return [w for w in self.warnings if w.code == code]

    def __len__(self) -> int:
        return len(self.warnings)
