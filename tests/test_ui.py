"""
tests/test_ui.py
Tests for utils/formatting.py, utils/plotting.py and the pure helpers
behind the Dash callbacks.
"""
import pytest
import sys, pathlib
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent))

from config import N_PLUS_ONE_ID, store_id
from domain.plant import PlantConfig
from domain.sizing import size_plant
from services.report_service import capex_table, opex_long
from utils.formatting import fmt_int, fmt_rub, fmt_fixed, round_half_up
from utils.plotting import plot_capex_breakdown, plot_opex_schedule, empty_fig
from ui.callbacks.persistence import edit_outputs, restored_editor_values, EDITOR_IDS
from ui.callbacks.results import metric_texts, METRIC_IDS

NBSP = "\u00a0"


class TestFormatting:

    @pytest.mark.parametrize("x, expected", [
        (0, "0"), (1425, "1425"), (9999.4, "9999"),
        (27039.375, f"27{NBSP}039"), (1234567, f"1{NBSP}234{NBSP}567"),
        (None, "0"), (float("nan"), "0"),
    ])
    def test_fmt_int(self, x, expected):
        assert fmt_int(x) == expected

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(-0.5) == 0

    def test_fmt_rub(self):
        assert fmt_rub(12345678.4) == f"12{NBSP}345{NBSP}678{NBSP}₽"

    def test_fmt_fixed(self):
        assert fmt_fixed(27.039375) == "27.04"
        assert fmt_fixed(None) == "0.00"


class TestPlotting:

    def test_figures_have_data(self):
        config = PlantConfig()
        result = size_plant(config)
        assert len(plot_capex_breakdown(capex_table(config, result)).data) == 1
        assert len(plot_opex_schedule(opex_long(result)).data) == 4

    def test_empty_fig(self):
        assert empty_fig("x").layout.title.text == "x"


class TestEditOutputs:

    @pytest.fixture
    def values(self):
        from services.input_service import editor_values
        return editor_values(PlantConfig())

    def test_clamped_value_written_back_and_persisted(self, values):
        values["in-occ"] = 5
        editors, stores, config, warnings = edit_outputs(values, {"in-occ"})
        assert editors == {"in-occ": 1.0}
        assert stores == {"occ": 1.0}
        assert config["occupancy"] == 1.0
        assert len(warnings) == 1

    def test_only_triggered_keys_are_persisted(self, values):
        values["in-prices-nf"] = 1000
        _, stores, _, _ = edit_outputs(values, {"in-prices-nf"})
        assert list(stores) == ["prices"]
        assert stores["prices"]["nf"] == 1000

    def test_valid_edit_leaves_editor_alone(self, values):
        values["in-apts"] = 10
        editors, stores, _, warnings = edit_outputs(values, {"in-apts"})
        assert editors == {}
        assert stores == {"apts": 10}
        assert warnings == []

    def test_toggle_persisted(self, values):
        values[N_PLUS_ONE_ID] = False
        _, stores, config, _ = edit_outputs(values, {N_PLUS_ONE_ID})
        assert stores == {"nplus1": False}
        assert config["n_plus_one"] is False

    def test_restore_only_requested_keys(self):
        restored = restored_editor_values(["occ", "defs"], {"occ": 0.5, "defs": "bad"})
        assert restored["in-occ"] == 0.5
        assert restored["in-defs-tanks"] == PlantConfig().quantities.tanks
        assert "in-apts" not in restored

    def test_editor_ids_unique(self):
        assert len(EDITOR_IDS) == len(set(EDITOR_IDS))
        assert store_id("apts") == "persist-apts"


class TestMetrics:

    def test_all_tiles_filled(self):
        texts = metric_texts(size_plant(PlantConfig()))
        assert set(texts) == set(METRIC_IDS)
        assert texts["metric-required-m3h"] == "27.04"
        assert texts["metric-population"] == "1425"
        assert texts["metric-nf-count"] == "28"
        assert texts["metric-capex"].endswith("₽")


class TestApp:

    def test_app_builds_and_registers_callbacks(self):
        from app import create_app
        app = create_app()
        assert app.title
        assert len(app.callback_map) >= 3
