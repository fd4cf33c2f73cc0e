"""
services/store_service.py
=========================
Persisted configuration store: a flat key → JSON value mapping with one
entry per scalar input and one per input group (prices, quantities, opex).

Reading never fails: an absent, wrong-typed or unparsable entry falls back
to that key's default, and restored numbers are clamped like fresh input.
No Dash imports here; the browser side is a set of dcc.Store components.
"""
from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional

from config import GROUP_ATTRS, KEY_N_PLUS_ONE, STORE_KEYS, fields_for_key, scalar_field
from domain.plant import PlantConfig
from services.input_service import clamp, default_for


def restore_entry(key: str, stored: Any) -> Any:
    """Value for one store key, falling back to defaults where unusable."""
    if key == KEY_N_PLUS_ONE:
        return stored if isinstance(stored, bool) else PlantConfig().n_plus_one

    if key in GROUP_ATTRS:
        record = stored if isinstance(stored, Mapping) else {}
        return {spec.attr: _restore_number(spec, record.get(spec.attr)) for spec in fields_for_key(key)}

    spec = scalar_field(key)
    if spec is None:
        raise KeyError(f"Unknown store key: {key}")
    return _restore_number(spec, stored)


def restore_config(entries: Mapping[str, Any]) -> PlantConfig:
    """Rebuild the full configuration from whatever the store holds."""
    config = PlantConfig()
    for key in STORE_KEYS:
        value = restore_entry(key, entries.get(key))
        if key in GROUP_ATTRS:
            record = getattr(config, GROUP_ATTRS[key])
            for attr, member in value.items():
                setattr(record, attr, member)
        elif key == KEY_N_PLUS_ONE:
            config.n_plus_one = value
        else:
            setattr(config, scalar_field(key).attr, value)
    return config


def dump_entry(config: PlantConfig, key: str) -> Any:
    """JSON-serializable value stored under `key`."""
    if key == KEY_N_PLUS_ONE:
        return bool(config.n_plus_one)
    if key in GROUP_ATTRS:
        record = getattr(config, GROUP_ATTRS[key])
        return {spec.attr: getattr(record, spec.attr) for spec in fields_for_key(key)}
    return getattr(config, scalar_field(key).attr)


def dump_entries(config: PlantConfig) -> Dict[str, Any]:
    return {key: dump_entry(config, key) for key in STORE_KEYS}


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _parse_stored(stored: Any) -> Optional[float]:
    if isinstance(stored, bool) or stored is None:
        return None
    if isinstance(stored, (int, float)):
        value = float(stored)
    elif isinstance(stored, str):
        try:
            value = float(stored.strip())
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None


def _restore_number(spec, stored: Any) -> float:
    value = _parse_stored(stored)
    if value is None:
        return default_for(spec)
    return clamp(value, spec.min, spec.max)
