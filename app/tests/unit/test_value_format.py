"""Tests for simulation/value_format.py - display formatting of component values."""

import pytest
from simulation.value_format import (
    format_component_display_value,
    format_metric_value,
    format_switch_display_value,
    format_with_unit,
    get_component_value_unit,
    parse_metric_value,
    strip_unit_suffix,
)
from tests.conftest import make_component


class TestParseMetricValue:
    @pytest.mark.parametrize(
        "raw, unit, expected",
        [
            ("10k", "", 10000.0),
            ("10K", "", 10000.0),
            ("2.5k", "Ω", 2500.0),
            ("1M", "", 1e6),
            ("5", "V", 5.0),
            ("5V", "V", 5.0),
            ("1e3", "", 1000.0),
        ],
    )
    def test_valid(self, raw, unit, expected):
        assert parse_metric_value(raw, unit) == expected

    @pytest.mark.parametrize("raw", ["", None, "abc", "10 kk", "nan"])
    def test_invalid(self, raw):
        assert parse_metric_value(raw) is None


class TestFormatMetricValue:
    def test_kilo(self):
        assert format_metric_value(10000.0) == ("10", "k")

    def test_fraction(self):
        assert format_metric_value(2500.0) == ("2.5", "k")

    def test_zero(self):
        assert format_metric_value(0) == ("0", "")

    def test_unit_range(self):
        assert format_metric_value(5.0) == ("5", "")

    def test_non_finite(self):
        assert format_metric_value(float("inf")) is None


class TestHelpers:
    def test_units(self):
        assert get_component_value_unit("r") == "Ω"
        assert get_component_value_unit("SW") == ""

    def test_strip_unit_suffix(self):
        assert strip_unit_suffix("10 kΩ", "Ω") == "10 k"
        assert strip_unit_suffix("5v", "V") == "5"

    def test_format_with_unit(self):
        assert format_with_unit("10", "Ω", "k") == "10 kΩ"
        assert format_with_unit("3", "", "") == "3"


class TestComponentDisplayValue:
    def test_resistor(self):
        assert format_component_display_value(make_component("R", "R1", "10k")) == "10 kΩ"

    def test_mega(self):
        assert format_component_display_value(make_component("R", "R1", "1M")) == "1 MΩ"

    def test_zero(self):
        assert format_component_display_value(make_component("R", "R1", "0")) == "0 Ω"

    def test_source_value_with_unit(self):
        assert format_component_display_value(make_component("V", "V1", "5V")) == "5 V"

    def test_blank(self):
        assert format_component_display_value(make_component("R", "R1", "  ")) == ""

    def test_unparseable_keeps_text_with_unit(self):
        assert format_component_display_value(make_component("V", "V1", "SIN(0  1 1k)")) == "SIN(0 1 1k) V"

    def test_switch(self):
        comp = make_component("SW", "SW1", "B ron=10 showron showroff")
        assert format_component_display_value(comp) == "B Ron=10 Roff=open"

    def test_bad_switch_value_shown_raw(self):
        comp = make_component("SW", "SW1", "B  bogus")
        assert format_component_display_value(comp) == "B bogus"

    def test_switch_helper_hides_by_default(self):
        assert format_switch_display_value("A roff=1k") == "A"
