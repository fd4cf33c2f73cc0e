"""
domain/sizing.py
================
Sizing engine: demand → required throughput → equipment counts → CAPEX and
five-year OPEX.

Pure and deterministic. Inputs are expected to be clamped already (see
services/input_service.py); nothing here validates or raises.
"""
from __future__ import annotations

import math
from typing import Dict, Tuple

import numpy as np

from domain.plant import OpexComponents, PlantConfig, SizingResult, UnitCounts

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
UF_UNIT_M3H: float     = 10.0   # m³/h per ultrafiltration block
UV_UNIT_M3H: float     = 10.0   # m³/h per UV unit
PUMP_UNIT_M3H: float   = 10.0   # m³/h per pump
CARBON_UNIT_M3H: float = 2.0    # m³/h per activated-carbon column

N_PLUS_ONE_MIN_UNITS: int = 2

HOURS_PER_DAY: int  = 24
DAYS_PER_YEAR: int  = 365
OPEX_YEARS: int     = 5


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def size_plant(config: PlantConfig) -> SizingResult:
    """Derive flows, unit counts, CAPEX and the OPEX schedule for one plant."""
    population       = config.apartments * config.people_per_apartment * config.occupancy
    m3_per_day       = population * config.liters_per_person_day / 1000.0
    m3_per_hour_avg  = m3_per_day / HOURS_PER_DAY
    m3_per_hour_peak = m3_per_hour_avg * config.kh
    required_m3h     = m3_per_hour_peak * config.ks

    counts      = unit_counts(required_m3h, config.nf_module_m3h, config.n_plus_one)
    capex_items = capex_breakdown(config, counts)

    annual_m3  = required_m3h * HOURS_PER_DAY * DAYS_PER_YEAR * config.opex.load_factor
    opex_years = opex_schedule(config, counts, annual_m3)

    return SizingResult(
        population       = population,
        m3_per_day       = m3_per_day,
        m3_per_hour_avg  = m3_per_hour_avg,
        m3_per_hour_peak = m3_per_hour_peak,
        required_m3h     = required_m3h,
        l_per_hour       = required_m3h * 1000.0,
        counts           = counts,
        capex_items      = capex_items,
        capex            = sum(capex_items.values()),
        annual_m3        = annual_m3,
        opex_years       = opex_years,
    )


def unit_counts(required_m3h: float, nf_module_m3h: float, n_plus_one: bool) -> UnitCounts:
    """
    Number of units per stage, ceil(required / capacity).

    With N+1 the UV and pump stages never drop below two units, also at
    zero demand.
    """
    uv   = _units(required_m3h, UV_UNIT_M3H)
    pump = _units(required_m3h, PUMP_UNIT_M3H)
    if n_plus_one:
        uv   = max(N_PLUS_ONE_MIN_UNITS, uv)
        pump = max(N_PLUS_ONE_MIN_UNITS, pump)
    return UnitCounts(
        nf     = _units(required_m3h, nf_module_m3h),
        uf     = _units(required_m3h, UF_UNIT_M3H),
        uv     = uv,
        pump   = pump,
        carbon = _units(required_m3h, CARBON_UNIT_M3H),
    )


def capex_breakdown(config: PlantConfig, counts: UnitCounts) -> Dict[str, float]:
    """CAPEX line items [RUB], keyed like UnitPrices fields."""
    p, q = config.prices, config.quantities
    return {
        "nf":          p.nf * counts.nf,
        "uf":          p.uf * counts.uf,
        "uv":          p.uv * counts.uv,
        "pump":        p.pump * counts.pump,
        "carbon":      p.carbon * counts.carbon,
        "mineral":     p.mineral,
        "tank":        p.tank * q.tanks,
        "inox_per_m":  p.inox_per_m * q.inox_m,
        "pex_per_m":   p.pex_per_m * q.pex_m,
        "plc":         p.plc,
        "install":     p.install,
        "room_per_m2": p.room_per_m2 * q.room_m2,
        "design":      p.design,
    }


def opex_schedule(
    config: PlantConfig,
    counts: UnitCounts,
    annual_m3: float,
) -> Tuple[OpexComponents, ...]:
    """
    Five years of operating cost.

    Year 1 is the uncompounded base. Energy, reagents and membranes are
    compounded by (1 + inflation/100)^n for year n+1; the fixed service fee
    is a first-year charge only.
    """
    o = config.opex
    energy    = o.energy_per_m3 * annual_m3
    reagents  = o.reagents_per_m3 * annual_m3
    membranes = o.nf_membrane_price * counts.nf * o.nf_membrane_frac

    factors = np.power(1.0 + o.inflation / 100.0, np.arange(OPEX_YEARS, dtype=float))
    return tuple(
        OpexComponents(
            energy    = float(energy * f),
            reagents  = float(reagents * f),
            membranes = float(membranes * f),
            service   = float(o.service_y1) if year == 0 else 0.0,
        )
        for year, f in enumerate(factors)
    )


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _units(required_m3h: float, unit_m3h: float) -> int:
    return int(math.ceil(required_m3h / unit_m3h))
