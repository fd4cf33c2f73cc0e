"""
tests/test_services.py
Tests for services/input_service.py, services/store_service.py and
services/report_service.py.
"""
import math
import pytest
import sys, pathlib
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent))

from config import FIELDS, FIELDS_BY_ID, N_PLUS_ONE_ID, STORE_KEYS
from domain.plant import PlantConfig
from domain.sizing import size_plant
from services.input_service import (
    coerce_number, clamp, sanitize_field, build_config,
    editor_values, config_to_dict, config_from_dict, default_for,
)
from services.store_service import restore_entry, restore_config, dump_entries, dump_entry
from services.report_service import capex_table, opex_table, opex_long, CAPEX_COLUMNS, OPEX_COLUMNS


OCC = FIELDS_BY_ID["in-occ"]
APTS = FIELDS_BY_ID["in-apts"]
PPL = FIELDS_BY_ID["in-ppl_per_apt"]


# ---------------------------------------------------------------------------
# Input sanitation
# ---------------------------------------------------------------------------
class TestCoerceNumber:

    @pytest.mark.parametrize("raw, expected", [
        (3, 3.0), (2.5, 2.5), ("4.25", 4.25), (" 7 ", 7.0),
        ("abc", 0.0), ("", 0.0), (None, 0.0), (True, 0.0),
        (float("nan"), 0.0), (float("inf"), 0.0), ([1], 0.0),
    ])
    def test_values(self, raw, expected):
        assert coerce_number(raw) == expected

    def test_clamp(self):
        assert clamp(5, 0.1, 1) == 1
        assert clamp(-3, 0, 10) == 0
        assert clamp(0.5, 0.1, 1) == 0.5


class TestSanitizeField:

    def test_occupancy_above_max_clamped(self):
        value, warning = sanitize_field(OCC, 5)
        assert value == 1.0
        assert warning and "maximum" in warning

    def test_valid_value_no_warning(self):
        assert sanitize_field(OCC, 0.8) == (0.8, None)

    def test_non_numeric_uses_zero(self):
        value, warning = sanitize_field(APTS, "lots")
        assert value == 0.0
        assert "not a number" in warning

    def test_non_numeric_uses_minimum_when_zero_out_of_range(self):
        value, _ = sanitize_field(PPL, "x")
        assert value == PPL.min

    def test_empty_uses_minimum(self):
        value, warning = sanitize_field(OCC, None)
        assert value == OCC.min
        assert warning

    def test_zero_string_is_a_number(self):
        assert sanitize_field(APTS, "0") == (0.0, None)

    @pytest.mark.parametrize("spec", FIELDS, ids=lambda s: s.component_id)
    def test_every_result_within_bounds(self, spec):
        for raw in (-1e12, 1e12, "nan", None, spec.min, spec.max):
            value, _ = sanitize_field(spec, raw)
            assert spec.min <= value <= spec.max
            assert math.isfinite(value)


class TestBuildConfig:

    def test_empty_mapping_gives_defaults(self):
        config, warnings = build_config({})
        assert config == PlantConfig()
        assert warnings == []

    def test_nested_field_assigned(self):
        config, _ = build_config({"in-prices-nf": 1000, "in-opex-inflation": 5})
        assert config.prices.nf == 1000
        assert config.opex.inflation == 5

    def test_warnings_collected(self):
        config, warnings = build_config({"in-occ": 5, "in-kh": 0.2})
        assert config.occupancy == 1.0
        assert config.kh == 1.0
        assert len(warnings) == 2

    def test_n_plus_one_must_be_bool(self):
        assert build_config({N_PLUS_ONE_ID: False})[0].n_plus_one is False
        assert build_config({N_PLUS_ONE_ID: "no"})[0].n_plus_one is True

    def test_editor_values_round_trip(self):
        config, _ = build_config({"in-apts": 120, "in-defs-tanks": 4, N_PLUS_ONE_ID: False})
        again, warnings = build_config(editor_values(config))
        assert again == config
        assert warnings == []

    def test_config_dict_round_trip(self):
        config, _ = build_config({"in-lpd": 250, "in-opex-load_factor": 0.5})
        assert config_from_dict(config_to_dict(config)) == config

    def test_config_from_garbage_is_default(self):
        assert config_from_dict(None) == PlantConfig()
        assert config_from_dict("x") == PlantConfig()

    def test_default_for_nested(self):
        assert default_for(FIELDS_BY_ID["in-opex-nf_membrane_frac"]) == pytest.approx(1 / 3)


# ---------------------------------------------------------------------------
# Persisted store
# ---------------------------------------------------------------------------
class TestStore:

    def test_absent_entries_give_defaults(self):
        assert restore_config({}) == PlantConfig()

    def test_dump_then_restore(self):
        config, _ = build_config({"in-apts": 42, "in-prices-uv": 1.5, N_PLUS_ONE_ID: False})
        assert restore_config(dump_entries(config)) == config

    def test_dump_has_every_key(self):
        assert set(dump_entries(PlantConfig())) == set(STORE_KEYS)

    @pytest.mark.parametrize("stored", ["garbage", None, [], {"a": 1}, True, float("nan")])
    def test_malformed_scalar_falls_back(self, stored):
        assert restore_entry("apts", stored) == PlantConfig().apartments

    def test_numeric_string_accepted(self):
        assert restore_entry("kh", "3.5") == 3.5

    def test_restored_number_is_clamped(self):
        assert restore_entry("occ", 5) == 1.0

    def test_malformed_group_falls_back(self):
        assert restore_entry("prices", "oops") == dump_entry(PlantConfig(), "prices")

    def test_partial_group_keeps_valid_members(self):
        restored = restore_entry("defs", {"tanks": 5, "inox_m": "bad"})
        assert restored["tanks"] == 5
        assert restored["inox_m"] == PlantConfig().quantities.inox_m
        assert restored["room_m2"] == PlantConfig().quantities.room_m2

    def test_n_plus_one_requires_bool(self):
        assert restore_entry("nplus1", False) is False
        assert restore_entry("nplus1", 0) is True

    def test_unknown_key_raises(self):
        with pytest.raises(KeyError):
            restore_entry("nope", 1)


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------
class TestReports:

    @pytest.fixture
    def config(self):
        return PlantConfig()

    @pytest.fixture
    def result(self, config):
        return size_plant(config)

    def test_capex_columns_and_sum(self, config, result):
        df = capex_table(config, result)
        assert list(df.columns) == CAPEX_COLUMNS
        assert len(df) == 13
        assert df["Cost"].sum() == pytest.approx(result.capex)

    def test_capex_row_is_quantity_times_price(self, config, result):
        df = capex_table(config, result).set_index("Item")
        nf = df.loc["NF modules"]
        assert nf["Quantity"] == result.counts.nf
        assert nf["Cost"] == pytest.approx(nf["Quantity"] * nf["Unit price"])

    def test_opex_table_matches_years(self, result):
        df = opex_table(result)
        assert list(df.columns) == OPEX_COLUMNS
        assert list(df["Year"]) == [1, 2, 3, 4, 5]
        assert list(df["Total"]) == pytest.approx(list(result.years))

    def test_opex_long_shape(self, result):
        df = opex_long(result)
        assert set(df["Component"]) == {"Energy", "Reagents", "Membranes", "Service"}
        assert len(df) == 20
        assert df["Cost"].sum() == pytest.approx(result.opex_5y)
