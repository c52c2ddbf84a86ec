"""
Pydantic models for validating and hashing DWML document configuration files.
"""

from __future__ import annotations

import hashlib
import json
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..ndfd.elements import NdfdElement, lookup_element
from ..ndfd.products import Product, UnitSystem
from ..util.time import parse_timestamp

MAX_DAYS = 7


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


class PointConfig(BaseModel):
    """
    A forecast point.

    Attributes:
        latitude: Latitude in degrees north.
        longitude: Longitude in degrees east.
        utc_offset: Local standard time offset from UTC, in hours.
        observes_dst: Whether the point follows daylight saving time.
        in_sector: Whether the point lies inside a supported forecast sector.
        sector: Name of the sector the point was probed in.
        name: Optional label, only used for logging.
    """
    model_config = ConfigDict(extra="forbid")

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=360.0)
    utc_offset: float = Field(default=0.0, ge=-12.0, le=14.0)
    observes_dst: bool = False
    in_sector: bool = True
    sector: str = "conus"
    name: Optional[str] = None


class DocumentConfig(BaseModel):
    """
    Top-level configuration for one DWML document.

    Attributes:
        product: Output profile (time-series, glance, 12-hourly, 24-hourly).
        unit_system: "e" for English units, "m" for metric.
        icons: Whether condition icons are derived and written.
        num_days: Number of days for summary profiles (derived from the data when unset).
        start_time: Requested start, epoch seconds UTC; None when not supplied.
        end_time: Requested end, epoch seconds UTC; None when not supplied.
        elements: Elements the user asked for; empty means "let the product decide".
        points: Forecast points.
    """
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    product: Product = Product.TIME_SERIES
    unit_system: UnitSystem = UnitSystem.ENGLISH
    icons: bool = True
    num_days: Optional[int] = Field(default=None, ge=1, le=MAX_DAYS)
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    elements: List[NdfdElement] = Field(default_factory=list)
    points: List[PointConfig] = Field(default_factory=list)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _parse_time(cls, value: Any) -> Optional[int]:
        if value is None or value == "":
            return None
        epoch = parse_timestamp(value)
        # Zero encodes "not supplied".
        return epoch or None

    @field_validator("elements", mode="before")
    @classmethod
    def _parse_elements(cls, value: Any) -> List[NdfdElement]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        resolved = []
        for item in value:
            if isinstance(item, NdfdElement):
                resolved.append(item)
                continue
            element = lookup_element(str(item))
            if element is None:
                raise ValueError(f"Unknown NDFD element '{item}'")
            resolved.append(element)
        return resolved

    @model_validator(mode="after")
    def _check_window(self) -> "DocumentConfig":
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValueError("end_time must be later than start_time")
        return self

    @property
    def hash(self) -> str:
        """
        Deterministic hash of the normalized config, used to detect changes.
        """
        payload = self.model_dump(mode="json", round_trip=True)
        blob = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
        return hashlib.sha256(blob).hexdigest()


def load_config(path: Path | str) -> DocumentConfig:
    """
    Load and validate a TOML config file into a DocumentConfig instance.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        A validated DocumentConfig object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {exc}") from exc

    raw_data = _normalize_toml_schema(raw_data)

    try:
        return DocumentConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def with_overrides(config: DocumentConfig, **changes: Any) -> DocumentConfig:
    """
    Return a re-validated copy of `config` with the non-None `changes` applied.

    Raises:
        ConfigError: If the merged configuration is invalid.
    """
    updates = {key: value for key, value in changes.items() if value is not None}
    if not updates:
        return config
    data = config.model_dump()
    data.update(updates)
    try:
        return DocumentConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def _normalize_toml_schema(data: Any) -> Dict[str, Any]:
    """
    Accept singular [[point]] table arrays and map them to the internal `points` list.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a TOML table/object.")
    if "points" in data:
        raise ConfigError("Use [[point]] blocks (singular) instead of [[points]].")

    normalized = dict(data)
    normalized["points"] = _coerce_table_array(normalized.pop("point", None), "point")
    return normalized


def _coerce_table_array(value: Any, label: str) -> list[dict]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        if not all(isinstance(item, dict) for item in value):
            raise ConfigError(f"Each [[{label}]] entry must be a table/object.")
        return value
    raise ConfigError(f"Invalid [{label}] block; expected a table or array of tables.")
