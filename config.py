"""
config.py
=========
Application-wide constants: editable field registry, persisted store keys,
and UI helpers. No business logic lives here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

APP_TITLE = "Water Treatment Calculator"
APP_VERSION = "v1"

# ---------------------------------------------------------------------------
# Persisted store keys
# ---------------------------------------------------------------------------
GROUP_PRICES     = "prices"
GROUP_QUANTITIES = "defs"
GROUP_OPEX       = "opex"

# store key → PlantConfig attribute holding the nested record
GROUP_ATTRS: Dict[str, str] = {
    GROUP_PRICES:     "prices",
    GROUP_QUANTITIES: "quantities",
    GROUP_OPEX:       "opex",
}

KEY_N_PLUS_ONE = "nplus1"


# ---------------------------------------------------------------------------
# Field registry
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class FieldSpec:
    """
    One editable input.

    key   : persisted store key (one store entry per scalar or per group)
    attr  : attribute on PlantConfig, or on the nested record for groups
    group : True when `key` names a nested record
    """

    key: str
    attr: str
    label: str
    min: float = 0.0
    max: float = 1e9
    step: float = 1.0
    group: bool = False

    @property
    def component_id(self) -> str:
        return f"in-{self.key}-{self.attr}" if self.group else f"in-{self.key}"


def _price(attr: str, label: str) -> FieldSpec:
    return FieldSpec(GROUP_PRICES, attr, label, group=True)


def _qty(attr: str, label: str) -> FieldSpec:
    return FieldSpec(GROUP_QUANTITIES, attr, label, group=True)


def _opex(attr: str, label: str, step: float, max_: float = 1e9) -> FieldSpec:
    return FieldSpec(GROUP_OPEX, attr, label, 0.0, max_, step, group=True)


QUICK_FIELDS: List[FieldSpec] = [
    FieldSpec("apts",        "apartments",            "Apartments, pcs",               0.0, 1e9,  1.0),
    FieldSpec("ppl_per_apt", "people_per_apartment",  "People per apartment",          0.1, 10.0, 0.1),
    FieldSpec("lpd",         "liters_per_person_day", "Consumption per person, L/day", 1.0, 1000.0, 1.0),
]

SIZING_FIELDS: List[FieldSpec] = [
    FieldSpec("occ",   "occupancy",     "Occupancy factor",           0.1, 1.0,  0.01),
    FieldSpec("kh",    "kh",            "Peak-hour factor (Kh)",      1.0, 5.0,  0.1),
    FieldSpec("ks",    "ks",            "Safety factor (Ks)",         1.0, 2.0,  0.01),
    FieldSpec("nfmod", "nf_module_m3h", "NF module type, m³/h",       1.0, 10.0, 1.0),
]

PRICE_FIELDS: List[FieldSpec] = [
    _price("nf",          "NF module, ₽/pc"),
    _price("uf",          "UF block, ₽/pc"),
    _price("uv",          "UV unit, ₽/pc"),
    _price("pump",        "Pump, ₽/pc"),
    _price("carbon",      "Carbon column, ₽/pc"),
    _price("mineral",     "Mineralizer, ₽"),
    _price("tank",        "Storage tank 5 m³, ₽/pc"),
    _price("inox_per_m",  "Stainless pipe, ₽/m"),
    _price("pex_per_m",   "PEX-a pipe, ₽/m"),
    _price("plc",         "PLC / automation, ₽"),
    _price("install",     "Installation, ₽"),
    _price("room_per_m2", "Room fit-out, ₽/m²"),
    _price("design",      "Design, ₽"),
]

QUANTITY_FIELDS: List[FieldSpec] = [
    _qty("tanks",   "Tanks, pcs"),
    _qty("inox_m",  "Stainless pipe, m"),
    _qty("pex_m",   "PEX-a pipe, m"),
    _qty("room_m2", "Room area, m²"),
]

OPEX_FIELDS: List[FieldSpec] = [
    _opex("load_factor",       "Load factor",                  0.01, 1.0),
    _opex("inflation",         "Inflation, %/year",            0.1),
    _opex("energy_per_m3",     "Energy, ₽/m³",                 0.01),
    _opex("reagents_per_m3",   "Reagents / CIP, ₽/m³",         0.01),
    _opex("nf_membrane_price", "NF membrane price, ₽/pc",      100.0),
    _opex("nf_membrane_frac",  "Membranes replaced per year",  0.05, 1.0),
    _opex("service_y1",        "Service (fixed), year 1, ₽",   1000.0),
]

FIELDS: List[FieldSpec] = (
    QUICK_FIELDS + SIZING_FIELDS + PRICE_FIELDS + QUANTITY_FIELDS + OPEX_FIELDS
)

FIELDS_BY_ID: Dict[str, FieldSpec] = {f.component_id: f for f in FIELDS}

N_PLUS_ONE_ID = f"in-{KEY_N_PLUS_ONE}"
N_PLUS_ONE_LABEL = "N+1 redundancy (UV, pumps)"

# Every persisted key, scalar keys first, in layout order
STORE_KEYS: List[str] = (
    [f.key for f in QUICK_FIELDS + SIZING_FIELDS]
    + [KEY_N_PLUS_ONE, GROUP_PRICES, GROUP_QUANTITIES, GROUP_OPEX]
)


def store_id(key: str) -> str:
    return f"persist-{key}"


def fields_for_key(key: str) -> List[FieldSpec]:
    return [f for f in FIELDS if f.key == key]


def scalar_field(key: str) -> Optional[FieldSpec]:
    matches = [f for f in FIELDS if f.key == key and not f.group]
    return matches[0] if matches else None


# ---------------------------------------------------------------------------
# UI display
# ---------------------------------------------------------------------------
CHART_HEIGHT_PX = 380
CURRENCY_SYMBOL = "₽"

CAPEX_ITEM_LABELS: Dict[str, str] = {
    "nf":          "NF modules",
    "uf":          "UF blocks",
    "uv":          "UV units",
    "pump":        "Pumps",
    "carbon":      "Carbon columns",
    "mineral":     "Mineralizer",
    "tank":        "Storage tanks",
    "inox_per_m":  "Stainless pipe",
    "pex_per_m":   "PEX-a pipe",
    "plc":         "PLC / automation",
    "install":     "Installation",
    "room_per_m2": "Room fit-out",
    "design":      "Design",
}
