"""Integration tests for the full layout pipeline."""

import json
import math

import pytest

from leader_donut.config import ChartConfig
from leader_donut.layout import Side, Zone, compute_layout, render_svg
from leader_donut.layout.geometry import TAU
from leader_donut.layout.text import ELLIPSIS
from leader_donut.rows import Row
from leader_donut.visualize import generate_json, generate_summary, generate_svg, layout_to_dict


class TestFullPipeline:
    """Integration tests for compute_layout."""

    def test_reference_scenario(self, three_rows, default_config):
        """30/30/40 gives three slices with percent labels."""
        result = compute_layout(three_rows, default_config)

        assert not result.is_empty
        assert result.warnings == []
        assert [r.label for r in result.routes] == ["A 30%", "B 30%", "C 40%"]
        assert [s.fill for s in result.shapes] == ["red", "blue", "green"]

        a, b, c = result.routes
        assert a.side is Side.RIGHT and not a.is_elbow
        # B is centered at 72 degrees, within 22 degrees of straight down
        assert b.zone is Zone.NEAR_BOTTOM and b.is_elbow
        assert c.side is Side.LEFT and not c.is_elbow

    def test_slices_partition_circle(self, twelve_equal_rows, default_config):
        result = compute_layout(twelve_equal_rows, default_config)
        assert sum(s.span for s in result.slices) == pytest.approx(TAU, abs=1e-9)
        for prev, cur in zip(result.slices, result.slices[1:]):
            assert cur.start_angle == prev.end_angle

    def test_default_config(self, three_rows):
        """Config and measure are optional."""
        result = compute_layout(three_rows)
        assert len(result.routes) == 3

    def test_mixed_records(self, mixed_records, default_config):
        """Unusable rows are excluded with warnings; the rest is laid out."""
        result = compute_layout(mixed_records, default_config)
        assert [s.label for s in result.slices] == ["Stocks", "Bonds", "Real estate"]
        assert len(result.warnings) == 3
        assert sum(s.fraction for s in result.slices) == pytest.approx(1)
        # Missing color gets the default
        assert result.shapes[2].fill == "#9aa"

    def test_crowded_labels_separated(self, crowded_rows, crowded_config):
        """Bunched small slices end up on separate lanes."""
        result = compute_layout(crowded_rows, crowded_config)
        right = sorted(r.end.y for r in result.routes if r.side is Side.RIGHT)
        for a, b in zip(right, right[1:]):
            assert b - a >= crowded_config.lane_step - 1e-6

    def test_show_percent_off(self, three_rows):
        result = compute_layout(three_rows, ChartConfig(show_percent=False))
        assert [r.label for r in result.routes] == ["A", "B", "C"]

    def test_custom_measure(self, three_rows, default_config):
        """The measure function decides the text widths."""
        result = compute_layout(three_rows, default_config, measure=lambda t, s, w: 50.0)
        assert all(r.text_width == 50.0 for r in result.routes)


class TestEdgeCases:
    """Edge cases for compute_layout."""

    def test_no_rows(self, default_config):
        result = compute_layout([], default_config)
        assert result.is_empty
        assert result.routes == [] and result.shapes == []

    def test_none(self):
        assert compute_layout(None).is_empty

    def test_all_zero(self, default_config):
        """A zero total is an empty chart, not an error."""
        result = compute_layout([Row("a", 0), Row("b", 0)], default_config)
        assert result.is_empty
        assert len(result.warnings) == 2

    def test_single_row(self, default_config):
        """One row is a full ring with a single leader line."""
        result = compute_layout([Row("Only", 7)], default_config)
        assert len(result.slices) == 1
        assert result.slices[0].span == pytest.approx(TAU)
        assert result.shapes[0].path.full_circle
        assert len(result.routes) == 1
        assert result.routes[0].label == "Only 100%"

    def test_single_route_start_radius(self, default_config):
        result = compute_layout([Row("Only", 7)], default_config)
        route = result.routes[0]
        cx, cy = default_config.center
        assert math.hypot(route.start.x - cx, route.start.y - cy) == pytest.approx(
            default_config.leader_start_radius
        )

    def test_pie_without_hole(self, three_rows):
        """A zero inner radius gives wedges meeting at the center."""
        config = ChartConfig(inner_radius_ratio=0)
        result = compute_layout(three_rows, config)
        assert config.inner_radius == 0
        assert all(" L " in shape.path.d for shape in result.shapes)


class TestRender:
    """Tests for render_svg and the output writers."""

    def test_svg_content(self, three_rows, default_config):
        result = compute_layout(three_rows, default_config)
        svg = render_svg(result, default_config).tostring()
        assert svg.count("<path") == 3
        assert svg.count("<polyline") == 3
        assert "A 30%" in svg
        assert 'viewBox="0 0 420 360"' in svg

    def test_empty_placeholder(self, default_config):
        svg = render_svg(compute_layout([], default_config), default_config).tostring()
        assert "No data" in svg
        assert "<path" not in svg
        assert "#eee" in svg

    def test_center_text(self, three_rows):
        config = ChartConfig(center_text="Portfolio")
        svg = render_svg(compute_layout(three_rows, config), config).tostring()
        assert "Portfolio" in svg

    def test_truncated_label(self):
        """Long labels are shortened with an ellipsis and keep a full title."""
        config = ChartConfig(width=200)
        rows = [Row("A remarkably long label for a slice", 1), Row("B", 1)]
        result = compute_layout(rows, config)
        assert result.routes[0].truncated

        svg = render_svg(result, config).tostring()
        assert ELLIPSIS in svg
        assert "<title>A remarkably long label for a slice 50%</title>" in svg

    def test_generate_svg_writes_file(self, three_rows, default_config, tmp_path):
        output = tmp_path / "chart.svg"
        generate_svg(compute_layout(three_rows, default_config), default_config, output)
        assert output.exists()
        content = output.read_text()
        assert "<svg" in content
        assert "C 40%" in content

    def test_generate_json(self, three_rows, default_config, tmp_path):
        output = tmp_path / "layout.json"
        result = compute_layout(three_rows, default_config)
        generate_json(result, default_config, output)

        data = json.loads(output.read_text())
        assert data == json.loads(json.dumps(layout_to_dict(result, default_config)))
        assert data["empty"] is False
        assert len(data["slices"]) == 3
        assert data["routes"][1]["zone"] == "near_bottom"
        assert data["slices"][0]["path"].startswith("M ")

    def test_generate_summary(self, mixed_records, default_config, tmp_path):
        output = tmp_path / "summary.txt"
        generate_summary(compute_layout(mixed_records, default_config), default_config, output)
        content = output.read_text()
        assert "Donut Layout Summary" in content
        assert "Slices: 3" in content
        assert "Excluded rows:" in content
        assert "Cash" in content

    def test_generate_summary_empty(self, default_config, tmp_path):
        output = tmp_path / "summary.txt"
        generate_summary(compute_layout([], default_config), default_config, output)
        assert "No data to draw." in output.read_text()
