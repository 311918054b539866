"""Tests for simulation/net_colors.py."""

from simulation.net_colors import resolve_net_colors
from tests.conftest import build_model, make_component, make_wire


def _two_islands(color_a=None, color_b=None, label_b="bus"):
    """Two separate wires, each with a NET label at its right end."""
    return build_model(
        [
            make_component("NET", "NET1", name="bus", net_color=color_a, pins=[("1", 20, 0)]),
            make_component("NET", "NET2", name=label_b, net_color=color_b, pins=[("1", 20, 100)]),
        ],
        [
            make_wire("W1", (0, 0), (20, 0)),
            make_wire("W2", (0, 100), (20, 100)),
        ],
    )


class TestResolveNetColors:
    def test_no_nets(self):
        result = resolve_net_colors(build_model([]))
        assert result.wire_colors == {}
        assert result.net_colors == {}

    def test_color_tints_own_wire(self):
        result = resolve_net_colors(_two_islands(color_a="#24a148", label_b="other"))
        assert result.wire_colors == {"W1": "#24a148"}
        assert result.net_colors == {"NET1": "#24a148"}

    def test_color_spreads_across_shared_label(self):
        result = resolve_net_colors(_two_islands(color_a="#24a148"))
        assert result.wire_colors == {"W1": "#24a148", "W2": "#24a148"}
        assert result.net_colors == {"NET1": "#24a148", "NET2": "#24a148"}

    def test_label_match_is_case_insensitive(self):
        result = resolve_net_colors(_two_islands(color_b="#da1e28", label_b="BUS"))
        assert result.wire_colors["W1"] == "#da1e28"

    def test_first_colored_component_wins(self):
        result = resolve_net_colors(_two_islands(color_a="#24a148", color_b="#da1e28"))
        assert set(result.wire_colors.values()) == {"#24a148"}

    def test_off_palette_color_ignored(self):
        model = _two_islands()
        model.components[0].net_color = "#123456"
        result = resolve_net_colors(model)
        assert result.wire_colors == {}

    def test_uncolored_net_has_no_entry(self, voltage_divider):
        assert resolve_net_colors(voltage_divider).wire_colors == {}
