"""
ui/callbacks/persistence.py
===========================
Callbacks that tie the editors to the persisted store:

* restore_inputs – store → editors, when a local-storage entry is loaded
  or changed.
* apply_edit     – editors → clamped values → store entries and the
  sanitized configuration in `config-store`.

Only the entries whose editors triggered an edit are written, so a
not-yet-restored key is never overwritten with defaults.
"""
from __future__ import annotations

from typing import Any, Dict, List, Set

from dash import Input, Output, State, callback_context, html, no_update
from dash.exceptions import PreventUpdate

from config import FIELDS, KEY_N_PLUS_ONE, N_PLUS_ONE_ID, STORE_KEYS, fields_for_key, store_id
from services.input_service import build_config, config_to_dict, editor_values
from services.store_service import dump_entry, restore_config

EDITOR_IDS: List[str] = [f.component_id for f in FIELDS] + [N_PLUS_ONE_ID]


def editor_ids_for_key(key: str) -> List[str]:
    if key == KEY_N_PLUS_ONE:
        return [N_PLUS_ONE_ID]
    return [f.component_id for f in fields_for_key(key)]


def _triggered_ids() -> Set[str]:
    triggered = [t["prop_id"] for t in callback_context.triggered]
    return {p.rsplit(".", 1)[0] for p in triggered if p and p != "."}


def restored_editor_values(keys: List[str], entries: Dict[str, Any]) -> Dict[str, Any]:
    """Editor id → value for the given store keys, read from raw entries."""
    values = editor_values(restore_config({k: entries.get(k) for k in keys}))
    wanted = {cid for key in keys for cid in editor_ids_for_key(key)}
    return {cid: v for cid, v in values.items() if cid in wanted}


def edit_outputs(values: Dict[str, Any], triggered: Set[str]):
    """
    Everything apply_edit returns, as plain data.

    Returns (editor_updates, store_updates, config_dict, warnings) where the
    update dicts only hold entries that actually need writing.
    """
    config, warnings = build_config(values)
    clean = editor_values(config)

    editor_updates = {
        cid: clean[cid] for cid in EDITOR_IDS
        if cid in triggered and cid != N_PLUS_ONE_ID and clean[cid] != values.get(cid)
    }
    store_updates = {
        key: dump_entry(config, key) for key in STORE_KEYS
        if triggered.intersection(editor_ids_for_key(key))
    }
    return editor_updates, store_updates, config_to_dict(config), warnings


def register(app):
    """Register the restore/persist callbacks on the given Dash app."""

    @app.callback(
        [Output(cid, "value") for cid in EDITOR_IDS],
        [Input(store_id(key), "modified_timestamp") for key in STORE_KEYS],
        [State(store_id(key), "data") for key in STORE_KEYS],
    )
    def restore_inputs(*args):
        n = len(STORE_KEYS)
        timestamps = dict(zip(STORE_KEYS, args[:n]))
        entries    = dict(zip(STORE_KEYS, args[n:]))

        # -1/None: entry still equals the layout default, editor already shows it
        loaded = [k for k in STORE_KEYS if timestamps[k] is not None and timestamps[k] >= 0]
        if not loaded:
            raise PreventUpdate

        triggered = _triggered_ids()
        keys = [k for k in loaded if store_id(k) in triggered] or loaded
        values = restored_editor_values(keys, entries)
        return [values.get(cid, no_update) for cid in EDITOR_IDS]

    @app.callback(
        [Output(cid, "value", allow_duplicate=True) for cid in EDITOR_IDS]
        + [Output(store_id(key), "data") for key in STORE_KEYS]
        + [
            Output("config-store", "data"),
            Output("input-warnings", "children"),
            Output("input-warnings", "is_open"),
        ],
        [Input(cid, "value") for cid in EDITOR_IDS],
        prevent_initial_call=True,
    )
    def apply_edit(*values):
        editor_updates, store_updates, config_dict, warnings = edit_outputs(
            dict(zip(EDITOR_IDS, values)), _triggered_ids(),
        )
        alert = html.Ul([html.Li(w) for w in warnings], className="mb-0") if warnings else None
        return (
            [editor_updates.get(cid, no_update) for cid in EDITOR_IDS]
            + [store_updates.get(key, no_update) for key in STORE_KEYS]
            + [config_dict, alert, bool(warnings)]
        )
