"""Runtime configuration, read from the environment.

``BACKOFFICE_DATA_DIR``            directory holding the record files
``BACKOFFICE_LOG_LEVEL``           logging level name (default WARNING)
``BACKOFFICE_LOW_STOCK_THRESHOLD`` stock at or below which a product is "low"
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "WARNING"
    low_stock_threshold: int = 5

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        settings = cls()

        if env.get("BACKOFFICE_DATA_DIR"):
            settings = replace(settings, data_dir=Path(env["BACKOFFICE_DATA_DIR"]))

        if env.get("BACKOFFICE_LOG_LEVEL"):
            settings = replace(settings, log_level=env["BACKOFFICE_LOG_LEVEL"].upper())

        raw_threshold = env.get("BACKOFFICE_LOW_STOCK_THRESHOLD")
        if raw_threshold:
            try:
                threshold = int(raw_threshold)
            except ValueError:
                raise ValueError(
                    f"BACKOFFICE_LOW_STOCK_THRESHOLD must be an integer, got {raw_threshold!r}"
                ) from None
            if threshold < 0:
                raise ValueError("BACKOFFICE_LOW_STOCK_THRESHOLD cannot be negative")
            settings = replace(settings, low_stock_threshold=threshold)

        return settings


def configure_logging(level: str) -> None:
    """Install a root handler once; called only from the CLI entry point."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
