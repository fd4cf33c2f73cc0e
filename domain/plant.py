"""
domain/plant.py
===============
Input configuration and derived-results records for a residential
water-treatment plant.

Zero Dash / pandas / service-layer dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


# ---------------------------------------------------------------------------
# Input configuration
# ---------------------------------------------------------------------------
@dataclass
class UnitPrices:
    """
    Equipment prices [RUB].

    Per-unit prices for the counted stages, per-metre prices for piping,
    per-m² price for the plant room fit-out and single-item prices for the
    rest (mineralizer, PLC, installation, design).
    """

    nf: float          = 185450.0
    uf: float          = 557977.0
    uv: float          = 76800.0
    pump: float        = 283929.0
    carbon: float      = 117720.0
    mineral: float     = 80000.0
    tank: float        = 120000.0   # 5 m³ storage tank
    inox_per_m: float  = 1105.0
    pex_per_m: float   = 399.0
    plc: float         = 250000.0
    install: float     = 850000.0
    room_per_m2: float = 8000.0
    design: float      = 400000.0


@dataclass
class FixedQuantities:
    """Quantities that do not scale with demand."""

    tanks: float   = 2.0
    inox_m: float  = 400.0    # stainless pipe [m]
    pex_m: float   = 1600.0   # PEX-a pipe [m]
    room_m2: float = 40.0


@dataclass
class OpexInputs:
    """
    Operating-cost inputs.

    Parameters
    ----------
    load_factor       : Fraction of the year at full output  (–)
    inflation         : Annual inflation                      [%]
    energy_per_m3     : Energy cost                           [RUB/m³]
    reagents_per_m3   : Reagents / CIP cost                   [RUB/m³]
    nf_membrane_price : NF membrane replacement price         [RUB/pc]
    nf_membrane_frac  : Share of membranes replaced per year  (–)
    service_y1        : Fixed service fee, first year only    [RUB]
    """

    load_factor: float       = 0.35
    inflation: float         = 3.0
    energy_per_m3: float     = 0.6
    reagents_per_m3: float   = 0.4
    nf_membrane_price: float = 20000.0
    nf_membrane_frac: float  = 1.0 / 3.0
    service_y1: float        = 120000.0


@dataclass
class PlantConfig:
    """
    Complete, already sanitized input for the sizing engine.

    Parameters
    ----------
    apartments            : Number of apartments served          (–)
    people_per_apartment  : Average household size                (–)
    liters_per_person_day : Per-capita consumption                [L/day]
    occupancy             : Occupied share of apartments          (0–1)
    kh                    : Peak-hour demand factor               (≥1)
    ks                    : Safety factor                         (≥1)
    nf_module_m3h         : Throughput of one NF module           [m³/h]
    n_plus_one            : Provision a spare UV unit and pump
    """

    apartments: float            = 500.0
    people_per_apartment: float  = 3.0
    liters_per_person_day: float = 180.0
    occupancy: float             = 0.95
    kh: float                    = 2.2
    ks: float                    = 1.15
    nf_module_m3h: float         = 1.0
    n_plus_one: bool             = True
    prices: UnitPrices           = field(default_factory=UnitPrices)
    quantities: FixedQuantities  = field(default_factory=FixedQuantities)
    opex: OpexInputs             = field(default_factory=OpexInputs)


# ---------------------------------------------------------------------------
# Derived results
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class UnitCounts:
    nf: int
    uf: int
    uv: int
    pump: int
    carbon: int


@dataclass(frozen=True)
class OpexComponents:
    """One year of operating cost split by component [RUB]."""

    energy: float
    reagents: float
    membranes: float
    service: float

    @property
    def total(self) -> float:
        return self.energy + self.reagents + self.membranes + self.service


@dataclass(frozen=True)
class SizingResult:
    """Everything derived from a PlantConfig. Never mutated after creation."""

    population: float
    m3_per_day: float
    m3_per_hour_avg: float
    m3_per_hour_peak: float
    required_m3h: float
    l_per_hour: float
    counts: UnitCounts
    capex_items: Dict[str, float]
    capex: float
    annual_m3: float
    opex_years: Tuple[OpexComponents, ...]

    @property
    def years(self) -> Tuple[float, ...]:
        """Yearly OPEX totals, year 1 first."""
        return tuple(y.total for y in self.opex_years)

    @property
    def opex_5y(self) -> float:
        return sum(self.years)

    @property
    def tco(self) -> float:
        return self.capex + self.opex_5y
