"""
ui/callbacks/results.py
=======================
Recompute the sizing result whenever the sanitized configuration changes
and render tiles, charts and tables from it.
"""
from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd
from dash import Input, Output

from domain.plant import SizingResult
from domain.sizing import size_plant
from services.input_service import config_from_dict
from services.report_service import capex_table, opex_long, opex_table
from utils.formatting import fmt_fixed, fmt_int, fmt_rub
from utils.plotting import empty_fig, plot_capex_breakdown, plot_opex_schedule

METRIC_IDS: List[str] = [
    "metric-population", "metric-required-m3h", "metric-l-per-hour",
    "metric-nf-count", "metric-uf-count", "metric-uv-count",
    "metric-pump-count", "metric-carbon-count",
    "metric-capex", "metric-opex", "metric-tco",
]


def metric_texts(result: SizingResult) -> Dict[str, str]:
    """Formatted tile values keyed by component id."""
    c = result.counts
    return {
        "metric-population":   fmt_int(result.population),
        "metric-required-m3h": fmt_fixed(result.required_m3h, 2),
        "metric-l-per-hour":   fmt_int(result.l_per_hour),
        "metric-nf-count":     fmt_int(c.nf),
        "metric-uf-count":     fmt_int(c.uf),
        "metric-uv-count":     fmt_int(c.uv),
        "metric-pump-count":   fmt_int(c.pump),
        "metric-carbon-count": fmt_int(c.carbon),
        "metric-capex":        fmt_rub(result.capex),
        "metric-opex":         fmt_rub(result.opex_5y),
        "metric-tco":          fmt_rub(result.tco),
    }


def table_payload(df: pd.DataFrame, money_cols: List[str]) -> tuple:
    """(columns, data) for a DataTable, money columns rendered as rubles."""
    shown = df.copy()
    for col in money_cols:
        shown[col] = shown[col].map(fmt_rub)
    columns = [{"name": c, "id": c} for c in shown.columns]
    return columns, shown.to_dict("records")


def register(app):

    @app.callback(
        [Output(mid, "children") for mid in METRIC_IDS]
        + [
            Output("capex-chart", "figure"),
            Output("opex-chart",  "figure"),
            Output("capex-table", "columns"), Output("capex-table", "data"),
            Output("opex-table",  "columns"), Output("opex-table",  "data"),
        ],
        Input("config-store", "data"),
    )
    def render_results(config_data: Dict[str, Any]):
        config = config_from_dict(config_data)
        result = size_plant(config)
        texts  = metric_texts(result)

        capex_df = capex_table(config, result)
        opex_df  = opex_table(result)

        try:
            capex_fig = plot_capex_breakdown(capex_df)
        except Exception as e:
            print(f"render_results capex chart error: {e}")
            capex_fig = empty_fig("CAPEX breakdown")
        try:
            opex_fig = plot_opex_schedule(opex_long(result))
        except Exception as e:
            print(f"render_results opex chart error: {e}")
            opex_fig = empty_fig("OPEX by year")

        capex_cols, capex_rows = table_payload(capex_df, ["Unit price", "Cost"])
        opex_cols,  opex_rows  = table_payload(
            opex_df, ["Energy", "Reagents", "Membranes", "Service", "Total"],
        )
        return (
            [texts[mid] for mid in METRIC_IDS]
            + [capex_fig, opex_fig, capex_cols, capex_rows, opex_cols, opex_rows]
        )
