"""
services/report_service.py
==========================
Turns a SizingResult into DataFrames ready for the UI tables and charts.
No Dash imports here.
"""
from __future__ import annotations

from typing import List

import pandas as pd

from config import CAPEX_ITEM_LABELS
from domain.plant import PlantConfig, SizingResult

CAPEX_COLUMNS = ["Item", "Quantity", "Unit", "Unit price", "Cost"]
OPEX_COLUMNS  = ["Year", "Energy", "Reagents", "Membranes", "Service", "Total"]


def capex_table(config: PlantConfig, result: SizingResult) -> pd.DataFrame:
    """
    One row per CAPEX line item.

    Columns: ['Item', 'Quantity', 'Unit', 'Unit price', 'Cost']; the 'Cost'
    column sums to result.capex.
    """
    p, q, c = config.prices, config.quantities, result.counts
    quantities = {
        "nf":          (c.nf,       "pcs"),
        "uf":          (c.uf,       "pcs"),
        "uv":          (c.uv,       "pcs"),
        "pump":        (c.pump,     "pcs"),
        "carbon":      (c.carbon,   "pcs"),
        "mineral":     (1,          "set"),
        "tank":        (q.tanks,    "pcs"),
        "inox_per_m":  (q.inox_m,   "m"),
        "pex_per_m":   (q.pex_m,    "m"),
        "plc":         (1,          "set"),
        "install":     (1,          "set"),
        "room_per_m2": (q.room_m2,  "m²"),
        "design":      (1,          "set"),
    }
    rows = []
    for item, cost in result.capex_items.items():
        qty, unit = quantities[item]
        rows.append({
            "Item":       CAPEX_ITEM_LABELS.get(item, item),
            "Quantity":   qty,
            "Unit":       unit,
            "Unit price": getattr(p, item),
            "Cost":       cost,
        })
    return pd.DataFrame(rows, columns=CAPEX_COLUMNS)


def opex_table(result: SizingResult) -> pd.DataFrame:
    """Year-by-component OPEX schedule; 'Total' matches result.years."""
    rows: List[dict] = []
    for year, comp in enumerate(result.opex_years, start=1):
        rows.append({
            "Year":      year,
            "Energy":    comp.energy,
            "Reagents":  comp.reagents,
            "Membranes": comp.membranes,
            "Service":   comp.service,
            "Total":     comp.total,
        })
    return pd.DataFrame(rows, columns=OPEX_COLUMNS)


def opex_long(result: SizingResult) -> pd.DataFrame:
    """opex_table melted to (Year, Component, Cost) for stacked charts."""
    df = opex_table(result).drop(columns="Total")
    return df.melt(id_vars="Year", var_name="Component", value_name="Cost")
