"""YAML configuration and logging setup for Granger sweeps."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
import sys
from typing import Any, Dict

from pythonjsonlogger import jsonlogger
import yaml

from granger_indicator.strategies import DEFAULT_CRITICAL_VALUE

MODES = ("bivariate", "multivariate")


@dataclass
class GrangerConfig:
    lag_size: int | str = 1  # int >= 1, or "auto" for the largest feasible lag
    critical_value: float = DEFAULT_CRITICAL_VALUE
    mode: str = "bivariate"

    @classmethod
    def from_dict(cls, raw: Dict[str, Any] | None) -> "GrangerConfig":
        raw = raw or {}
        lag_size = raw.get("lag_size", 1)
        if lag_size != "auto":
            lag_size = int(lag_size)
            if lag_size < 1:
                raise ValueError(f"granger.lag_size must be >= 1 or 'auto', got {lag_size}.")
        mode = str(raw.get("mode", "bivariate")).lower()
        if mode not in MODES:
            raise ValueError(f"Unsupported granger.mode: {mode}")
        critical_value = float(raw.get("critical_value", DEFAULT_CRITICAL_VALUE))
        if not 0.0 <= critical_value <= 1.0:
            raise ValueError(f"granger.critical_value must be in [0, 1], got {critical_value}.")
        return cls(lag_size=lag_size, critical_value=critical_value, mode=mode)


@dataclass
class Config:
    """Sectioned settings read from a YAML file (paths, files, granger, logging)."""

    data: Dict[str, Any] = field(default_factory=dict)
    source: Path | None = None

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        path = Path(path)
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level.")
        return cls(data=data, source=path)

    def get(self, section: str, default: Any = None) -> Any:
        if default is None:
            default = {}
        return self.data.get(section, default)

    @property
    def granger(self) -> GrangerConfig:
        return GrangerConfig.from_dict(self.get("granger"))

    def ensure_dirs(self) -> None:
        """Create output directories listed under ``paths`` (keys ending in ``_dir``)."""
        for key, value in self.get("paths").items():
            if key.endswith("_dir") and key != "input_dir" and value:
                Path(value).mkdir(parents=True, exist_ok=True)


def setup_logging(level: str | int = "INFO") -> None:
    """Configure structured JSON logging on stdout."""
    handler = logging.StreamHandler(sys.stdout)
    formatter = jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


__all__ = ["MODES", "GrangerConfig", "Config", "setup_logging"]
