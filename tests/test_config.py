"""Tests for config.py module."""

import pytest

from leader_donut.config import ChartConfig, clamp, split_options


class TestClamp:
    """Tests for clamp function."""

    def test_inside(self):
        assert clamp(5, 0, 10) == 5

    def test_bounds(self):
        assert clamp(-1, 0, 10) == 0
        assert clamp(11, 0, 10) == 10

    def test_inverted_bounds_low_wins(self):
        """When lo > hi the lower bound is returned."""
        assert clamp(5, 10, 0) == 10


class TestDefaults:
    """Default configuration and derived geometry."""

    def test_default_values(self, default_config):
        assert (default_config.width, default_config.height) == (420, 360)
        assert default_config.font_size == 13
        assert default_config.min_label_gap == 8
        assert default_config.rotation_deg == -90
        assert default_config.show_percent is True

    def test_derived_radii(self, default_config):
        """Radii follow from the canvas, padding and ratios."""
        assert default_config.center == (210, 180)
        assert default_config.outer_radius == pytest.approx(117.6)
        assert default_config.inner_radius == pytest.approx(70.56)
        assert default_config.leader_start_radius == pytest.approx(110.544)

    def test_derived_label_spacing(self, default_config):
        assert default_config.lane_step == 29
        assert default_config.crowding_threshold == pytest.approx(14.3)
        assert default_config.label_limits == (10.5, 349.5)
        assert default_config.max_label_width == pytest.approx(189)

    def test_tiny_canvas_radius_floor(self):
        """The outer radius never drops below 10."""
        config = ChartConfig(width=40, height=40, padding=200)
        assert config.outer_radius == 10


class TestValidation:
    """Clamping and fallback of option values."""

    @pytest.mark.parametrize(
        "name,value,expected",
        [
            ("font_size", 100, 48),
            ("font_size", 2, 8),
            ("min_label_gap", 1, 4),
            ("min_label_gap", 500, 80),
            ("elbow_vertical_len", 1, 6),
            ("top_bottom_threshold_deg", 120, 90),
            ("inner_radius_ratio", 1.5, 0.95),
        ],
    )
    def test_clamped(self, name, value, expected):
        assert getattr(ChartConfig(**{name: value}), name) == expected

    def test_elbow_length_bounded_by_canvas(self):
        """Horizontal elbow length can not exceed the canvas width."""
        assert ChartConfig(elbow_horizontal_len=10000).elbow_horizontal_len == 420
        assert ChartConfig(elbow_vertical_len=10000).elbow_vertical_len == 360

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), "abc", None])
    def test_non_finite_falls_back(self, bad):
        """Unusable numbers fall back to the default."""
        assert ChartConfig(font_size=bad).font_size == 13

    def test_numeric_strings_accepted(self):
        assert ChartConfig(font_size="12").font_size == 12

    def test_int_fields_rounded(self):
        config = ChartConfig(percent_digits=2.6, label_weight=650.4)
        assert config.percent_digits == 3
        assert config.label_weight == 650

    @pytest.mark.parametrize("raw,expected", [("false", False), ("yes", True), (0, False), ("maybe", True)])
    def test_show_percent_coerced(self, raw, expected):
        assert ChartConfig(show_percent=raw).show_percent is expected

    def test_frozen(self, default_config):
        with pytest.raises(AttributeError):
            default_config.font_size = 20


class TestFromMapping:
    """Tests for loose option names."""

    def test_camel_case(self):
        config = ChartConfig.from_mapping({"fontSize": 12, "minLabelGap": 10, "showPercent": False})
        assert config.font_size == 12
        assert config.min_label_gap == 10
        assert config.show_percent is False

    def test_aliases(self):
        """Property panel names map to their config fields."""
        config = ChartConfig.from_mapping({"cutoutPct": 50, "doughnutSize": 0.8, "lineStart": 0.5, "elbowLen": 30})
        assert config.inner_radius_ratio == pytest.approx(0.5)
        assert config.outer_size_ratio == pytest.approx(0.8)
        assert config.leader_start_ratio == pytest.approx(0.5)
        assert config.elbow_horizontal_len == 30

    def test_none(self):
        assert ChartConfig.from_mapping(None) == ChartConfig()

    def test_unknown_ignored(self):
        assert ChartConfig.from_mapping({"bogus": 1}) == ChartConfig()


class TestSplitOptions:
    """Tests for split_options function."""

    def test_known_and_unknown(self):
        known, unknown = split_options({"cutoutPct": 50, "font-size": 11, "bogus": 1})
        assert known == {"inner_radius_ratio": 0.5, "font_size": 11}
        assert unknown == ["bogus"]
