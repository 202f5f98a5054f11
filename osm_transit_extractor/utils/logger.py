import json
import logging
from pathlib import Path

import osm_transit_extractor.settings as settings


class JsonlFormatter(logging.Formatter):
    def format(self, record) -> str:
        return json.dumps(self.get_log_entry(record), ensure_ascii=False)

    def get_log_entry(self, record) -> dict:
        return {
            "timestamp": self.formatTime(record),
            "levelname": record.levelname,
            "name": f"{record.name}|{record.funcName}:{record.lineno}",
            "message": record.getMessage(),
            **record.__dict__.get("extra", {}),
        }


def setup_logger(
    level: int = settings.LOGGER_LEVEL,
    datefmt: str = "%Y-%m-%d %H:%M:%S",
    format: str = "%(asctime)s - %(levelname)s - %(name)s|%(funcName)s:%(lineno)d - %(message)s",
    name: str = "main",
    log_dir: Path | None = None,
):
    """Global logger configuration.

    Logs always go to the console. When `log_dir` is given, warnings and errors are
    also written there as plain text and as JSON lines, the latter carrying the
    structured context of extraction diagnostics.
    """
    # Use root logger if no specified name
    logger = logging.getLogger() if name == "main" else logging.getLogger(name)
    logger.setLevel(level)

    # Avoid handler duplication
    if logger.hasHandlers():
        return logger

    log_console = logging.StreamHandler()
    log_console.setFormatter(logging.Formatter(format))
    logger.addHandler(log_console)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        prefix = settings.OUTPUT_FILE_PREFIX

        log_handler = logging.FileHandler(log_dir / f"{prefix}.log", encoding="utf-8")
        log_handler.setLevel(logging.WARNING)
        log_handler.setFormatter(logging.Formatter(format, datefmt=datefmt))
        logger.addHandler(log_handler)

        jsonl_handler = logging.FileHandler(log_dir / f"{prefix}.jsonl", encoding="utf-8")
        jsonl_handler.setLevel(logging.WARNING)
        jsonl_handler.setFormatter(JsonlFormatter(datefmt=datefmt))
        logger.addHandler(jsonl_handler)

    return logger
