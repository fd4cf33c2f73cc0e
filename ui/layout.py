"""
ui/layout.py
============
All Dash layout components: navbar, input cards, result tiles, charts,
the advanced-settings accordion and the stores.

Callbacks are NOT defined here – see ui/callbacks/.
This file only builds static (or mostly-static) component trees.
"""
from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html, dash_table

from config import (
    APP_TITLE, APP_VERSION, CHART_HEIGHT_PX,
    QUICK_FIELDS, SIZING_FIELDS, PRICE_FIELDS, QUANTITY_FIELDS, OPEX_FIELDS,
    N_PLUS_ONE_ID, N_PLUS_ONE_LABEL, STORE_KEYS, FieldSpec, store_id,
)
from domain.plant import PlantConfig
from services.input_service import config_to_dict, editor_values
from services.store_service import dump_entries

_DEFAULTS = PlantConfig()
_DEFAULT_VALUES = editor_values(_DEFAULTS)

_TABLE_STYLE = dict(
    style_table={"overflowX": "auto"},
    style_header={"backgroundColor": "#f8f9fa", "fontWeight": "bold", "textAlign": "center"},
    style_cell={"padding": "8px", "textAlign": "right", "border": "1px solid #dee2e6"},
    style_data_conditional=[{"if": {"row_index": "odd"}, "backgroundColor": "rgb(248,248,248)"}],
)

# ---------------------------------------------------------------------------
# Navbar
# ---------------------------------------------------------------------------
navbar = dbc.Navbar(
    dbc.Container([
        dbc.Row([
            dbc.Col(html.I(className="bi bi-droplet-half", style={"fontSize": "1.8rem", "color": "#5dade2"}),
                    width="auto"),
            dbc.Col(dbc.NavbarBrand(APP_TITLE, className="ms-2"), width="auto"),
        ], align="center", className="g-0"),
        dbc.Badge("mobile-friendly, offline", color="secondary", className="ms-auto"),
    ], fluid=True),
    color="dark", dark=True, sticky="top",
)


# ---------------------------------------------------------------------------
# Editors
# ---------------------------------------------------------------------------
def _range_hint(spec: FieldSpec) -> str:
    if spec.max >= 1e9:
        return f"≥ {spec.min:g}"
    return f"{spec.min:g} – {spec.max:g}"


def number_input(spec: FieldSpec) -> html.Div:
    """Labelled numeric editor; clamping happens server-side, so no HTML min/max."""
    return html.Div([
        dbc.Label(spec.label, html_for=spec.component_id, className="mb-0"),
        dbc.Input(id=spec.component_id, type="number", step=spec.step,
                  value=_DEFAULT_VALUES[spec.component_id], debounce=True),
        dbc.FormText(_range_hint(spec)),
    ], className="mb-2")


def _quick_card() -> dbc.Card:
    return dbc.Card([
        dbc.CardHeader("⚡ Quick calculation (3 parameters)"),
        dbc.CardBody(
            [number_input(spec) for spec in QUICK_FIELDS]
            + [dbc.FormText("Other parameters are under “Advanced settings”.")]
        ),
    ], className="mb-4")


def _advanced_accordion() -> dbc.Accordion:
    return dbc.Accordion([
        dbc.AccordionItem(
            [number_input(spec) for spec in SIZING_FIELDS]
            + [dbc.Switch(id=N_PLUS_ONE_ID, label=N_PLUS_ONE_LABEL,
                          value=_DEFAULT_VALUES[N_PLUS_ONE_ID], className="mt-2")],
            title="📐 Sizing coefficients", item_id="sizing",
        ),
        dbc.AccordionItem(
            dbc.Row([dbc.Col(number_input(spec), md=6) for spec in PRICE_FIELDS]),
            title="💰 Prices", item_id="prices",
        ),
        dbc.AccordionItem(
            [number_input(spec) for spec in QUANTITY_FIELDS],
            title="📦 Fixed quantities", item_id="quantities",
        ),
        dbc.AccordionItem(
            [number_input(spec) for spec in OPEX_FIELDS],
            title="⚙️ Operating costs", item_id="opex",
        ),
    ], start_collapsed=True, always_open=True, flush=True, id="advanced-settings")


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
def _metric_card(icon_cls: str, icon_color: str, metric_id: str, label: str, md: int) -> dbc.Col:
    return dbc.Col([dbc.Card([dbc.CardBody([
        html.Div([
            html.I(className=f"{icon_cls} me-2", style={"fontSize": "2rem", "color": icon_color}),
            html.Div([
                html.H4(id=metric_id, children="–", className="mb-0"),
                html.P(label, className="text-muted mb-0 small"),
            ]),
        ], className="d-flex align-items-center"),
    ])], className="shadow-sm border-0 h-100")], md=md, className="mb-3")


def _results_section() -> html.Div:
    return html.Div([
        html.H5("Results"),
        dbc.Row([
            _metric_card("bi bi-people",      "#8e44ad", "metric-population",   "Population, people",  md=4),
            _metric_card("bi bi-droplet",     "#3498db", "metric-required-m3h", "Required flow, m³/h", md=4),
            _metric_card("bi bi-speedometer", "#27ae60", "metric-l-per-hour",   "Required flow, L/h",  md=4),
        ]),
        html.H5("Equipment (pcs)", className="mt-2"),
        dbc.Row([
            _metric_card("bi bi-funnel",       "#2980b9", "metric-nf-count",     "NF modules",     md=2),
            _metric_card("bi bi-filter",       "#16a085", "metric-uf-count",     "UF blocks",      md=2),
            _metric_card("bi bi-lightbulb",    "#8e44ad", "metric-uv-count",     "UV units",       md=2),
            _metric_card("bi bi-gear",         "#7f8c8d", "metric-pump-count",   "Pumps",          md=3),
            _metric_card("bi bi-box",          "#2c3e50", "metric-carbon-count", "Carbon columns", md=3),
        ]),
        html.H5("Cost", className="mt-2"),
        dbc.Row([
            _metric_card("bi bi-building",   "#e74c3c", "metric-capex", "CAPEX",        md=4),
            _metric_card("bi bi-calendar3",  "#f39c12", "metric-opex",  "OPEX 5 years", md=4),
            _metric_card("bi bi-cash-stack", "#27ae60", "metric-tco",   "TCO 5 years",  md=4),
        ]),
    ])


def _charts_section() -> html.Div:
    chart = lambda cid: dcc.Graph(id=cid, style={"height": f"{CHART_HEIGHT_PX}px"},
                                  config={"displayModeBar": False})
    def chart_card(header, cid, md=6): return dbc.Col([
        dbc.Card([dbc.CardHeader(header, className="fw-bold"), dbc.CardBody(chart(cid), className="p-2")])
    ], md=md, className="mb-3")

    return html.Div([
        dbc.Row([chart_card("CAPEX breakdown", "capex-chart"),
                 chart_card("OPEX schedule",   "opex-chart")], className="g-3"),
        html.H6("CAPEX line items", className="mt-3 mb-2"),
        dash_table.DataTable(id="capex-table", page_size=15, **_TABLE_STYLE),
        html.H6("OPEX by year", className="mt-4 mb-2"),
        dash_table.DataTable(id="opex-table", page_size=5, **_TABLE_STYLE),
    ])


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------
def build_stores() -> List[dcc.Store]:
    """
    One local-storage store per persisted key, seeded with defaults, plus
    the in-memory store holding the current sanitized configuration.
    """
    persisted = dump_entries(_DEFAULTS)
    return [
        dcc.Store(id=store_id(key), storage_type="local", data=persisted[key])
        for key in STORE_KEYS
    ] + [
        dcc.Store(id="config-store", data=config_to_dict(_DEFAULTS)),
    ]


def build_layout() -> html.Div:
    return html.Div([
        navbar,
        dbc.Container([
            dbc.Alert(id="input-warnings", color="warning", is_open=False, className="mt-3 mb-0"),
            dbc.Row([
                dbc.Col([
                    _quick_card(),
                    dbc.Card([
                        dbc.CardHeader("🔧 Advanced settings"),
                        dbc.CardBody(_advanced_accordion(), className="p-0"),
                    ], className="mb-4"),
                ], md=4),
                dbc.Col([_results_section(), html.Hr(), _charts_section()], md=8),
            ], className="mt-4"),
            html.Footer(f"{APP_VERSION} • Dash", className="text-muted small text-center my-4"),
        ], fluid=True),
        *build_stores(),
    ])
