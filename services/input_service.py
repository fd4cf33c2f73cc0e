"""
services/input_service.py
=========================
Input sanitation: every raw editor value passes through here before it
reaches the sizing engine.

Malformed numbers are never rejected: non-numeric or non-finite values
become 0, then everything is clamped to the field's [min, max] range.
No Dash imports here.
"""
from __future__ import annotations

import dataclasses
import math
from typing import Any, Dict, List, Mapping, Optional, Tuple

from config import FIELDS, GROUP_ATTRS, N_PLUS_ONE_ID, FieldSpec
from domain.plant import PlantConfig

_MISSING = object()


def coerce_number(raw: Any) -> float:
    """Float value of raw; 0.0 for anything unparsable or non-finite."""
    if isinstance(raw, bool) or raw is None:
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return value if math.isfinite(value) else 0.0


def clamp(value: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, value))


def default_for(spec: FieldSpec) -> float:
    """Documented default of a field, read from a fresh PlantConfig."""
    target: Any = PlantConfig()
    if spec.group:
        target = getattr(target, GROUP_ATTRS[spec.key])
    return getattr(target, spec.attr)


def sanitize_field(spec: FieldSpec, raw: Any) -> Tuple[float, Optional[str]]:
    """
    Coerce and clamp one editor value.

    Returns (value, warning); warning is None when raw was already a valid
    in-range number.
    """
    number = coerce_number(raw)
    value  = clamp(number, spec.min, spec.max)

    if raw is None or raw == "":
        return value, f"{spec.label}: empty value, using {_fmt(value)}"
    if number == 0.0 and not _is_zero(raw):
        return value, f"{spec.label}: '{raw}' is not a number, using {_fmt(value)}"
    if value != number:
        bound = "minimum" if number < spec.min else "maximum"
        return value, f"{spec.label}: {_fmt(number)} is outside the {bound}, using {_fmt(value)}"
    return value, None


def build_config(values: Mapping[str, Any]) -> Tuple[PlantConfig, List[str]]:
    """
    Build a sanitized PlantConfig from editor values keyed by component id.

    Ids missing from `values` keep their defaults. Returns the config and
    the warnings produced while clamping.
    """
    config = PlantConfig()
    warnings: List[str] = []

    for spec in FIELDS:
        raw = values.get(spec.component_id, _MISSING)
        if raw is _MISSING:
            continue
        value, warning = sanitize_field(spec, raw)
        if warning:
            warnings.append(warning)
        _assign(config, spec, value)

    n_plus_one = values.get(N_PLUS_ONE_ID, _MISSING)
    if isinstance(n_plus_one, bool):
        config.n_plus_one = n_plus_one

    return config, warnings


def editor_values(config: PlantConfig) -> Dict[str, Any]:
    """Inverse of build_config: component id → value for every editor."""
    values: Dict[str, Any] = {}
    for spec in FIELDS:
        target: Any = config
        if spec.group:
            target = getattr(config, GROUP_ATTRS[spec.key])
        values[spec.component_id] = getattr(target, spec.attr)
    values[N_PLUS_ONE_ID] = config.n_plus_one
    return values


def config_to_dict(config: PlantConfig) -> Dict[str, Any]:
    return dataclasses.asdict(config)


def config_from_dict(data: Optional[Mapping[str, Any]]) -> PlantConfig:
    """Rebuild a PlantConfig from config_to_dict output (sanitizing again)."""
    if not isinstance(data, Mapping):
        return PlantConfig()
    values: Dict[str, Any] = {}
    for spec in FIELDS:
        source = data.get(GROUP_ATTRS[spec.key]) if spec.group else data
        if isinstance(source, Mapping) and spec.attr in source:
            values[spec.component_id] = source[spec.attr]
    if "n_plus_one" in data:
        values[N_PLUS_ONE_ID] = data["n_plus_one"]
    config, _ = build_config(values)
    return config


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _assign(config: PlantConfig, spec: FieldSpec, value: float) -> None:
    target: Any = config
    if spec.group:
        target = getattr(config, GROUP_ATTRS[spec.key])
    setattr(target, spec.attr, value)


def _is_zero(raw: Any) -> bool:
    if isinstance(raw, bool):
        return False
    if isinstance(raw, (int, float)):
        return raw == 0
    if isinstance(raw, str):
        try:
            return float(raw.strip()) == 0.0
        except ValueError:
            return False
    return False


def _fmt(value: float) -> str:
    return f"{value:g}"
