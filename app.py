"""
app.py
======
Dash entry point: builds the app, wires layout and callbacks, and exposes
`server` for WSGI hosting.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import Dash

from config import APP_TITLE
from ui.callbacks import persistence, results
from ui.layout import build_layout


def create_app() -> Dash:
    external_stylesheets = [dbc.themes.ZEPHYR, dbc.icons.BOOTSTRAP]
    app = Dash(__name__, external_stylesheets=external_stylesheets, suppress_callback_exceptions=True)
    app.title = APP_TITLE
    app.layout = build_layout()
    persistence.register(app)
    results.register(app)
    return app


app = create_app()
server = app.server

if __name__ == "__main__":
    app.run(debug=True)
