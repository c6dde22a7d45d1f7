"""Validated chart configuration.

Every option has a default and a safe range. Out-of-range values are clamped
and non-finite values fall back to the default, so a ChartConfig can always
be laid out.
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

# Numeric options: name -> (low, high). None means unbounded on that side.
# elbow_horizontal_len / elbow_vertical_len upper bounds depend on the canvas.
_RANGES: dict[str, tuple[float | None, float | None]] = {
    "width": (40, 8192),
    "height": (40, 8192),
    "inner_radius_ratio": (0.0, 0.95),
    "outer_size_ratio": (0.1, 1.0),
    "rotation_deg": (None, None),
    "leader_start_ratio": (0.0, 1.0),
    "elbow_horizontal_len": (8, None),
    "elbow_vertical_len": (6, None),
    "min_label_gap": (4, 80),
    "top_bottom_threshold_deg": (0, 90),
    "font_size": (8, 48),
    "percent_digits": (0, 4),
    "label_weight": (100, 900),
    "label_pad": (0, 40),
    "label_max_width_ratio": (0.05, 1.0),
    "lane_margin": (0, 64),
    "padding": (0, 200),
    "center_text_font_size": (8, 64),
    "center_text_font_weight": (100, 900),
    "leader_width": (0.1, 10),
}

_INT_FIELDS = {"percent_digits", "label_weight", "center_text_font_weight"}

# Older option names from the widget property panel
_ALIASES = {
    "cutout_pct": "inner_radius_ratio",
    "doughnut_size": "outer_size_ratio",
    "line_start": "leader_start_ratio",
    "elbow_len": "elbow_horizontal_len",
    "elbow_vert": "elbow_vertical_len",
}


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value into [lo, hi]. If lo > hi, lo wins."""
    return max(lo, min(hi, value))


def _as_finite(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("1", "true", "yes", "on"):
            return True
        if text in ("0", "false", "no", "off"):
            return False
        return default
    if isinstance(value, (int, float)):
        return bool(value)
    return default


def _snake_case(name: str) -> str:
    name = name.strip().replace("-", "_")
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name).lower()


@dataclass(frozen=True)
class ChartConfig:
    """Immutable per-render configuration.

    Construction validates every field; see the module docstring.
    """

    width: float = 420
    height: float = 360
    inner_radius_ratio: float = 0.6
    outer_size_ratio: float = 0.7
    rotation_deg: float = -90
    leader_start_ratio: float = 0.85
    elbow_horizontal_len: float = 44
    elbow_vertical_len: float = 16
    min_label_gap: float = 8
    top_bottom_threshold_deg: float = 22
    font_size: float = 13
    show_percent: bool = True
    percent_digits: int = 0
    label_weight: int = 600
    label_color: str = "#333"
    label_pad: float = 4
    label_max_width_ratio: float = 0.45
    lane_margin: float = 16
    padding: float = 12
    center_text: str = ""
    center_text_font_size: float = 18
    center_text_font_weight: int = 700
    center_text_color: str = "#333"
    leader_color: str = "#000"
    leader_width: float = 1.5

    def __post_init__(self) -> None:
        defaults = {f.name: f.default for f in fields(self)}

        for name, (lo, hi) in _RANGES.items():
            value = _as_finite(getattr(self, name), defaults[name])
            if lo is not None:
                value = max(lo, value)
            if hi is not None:
                value = min(hi, value)
            if name in _INT_FIELDS:
                value = int(round(value))
            object.__setattr__(self, name, value)

        # Canvas-dependent bounds
        object.__setattr__(
            self,
            "elbow_horizontal_len",
            clamp(self.elbow_horizontal_len, 8, max(20, self.width)),
        )
        object.__setattr__(
            self,
            "elbow_vertical_len",
            clamp(self.elbow_vertical_len, 6, max(10, self.height)),
        )

        object.__setattr__(self, "show_percent", _as_bool(self.show_percent, True))
        for name in ("label_color", "center_text_color", "leader_color", "center_text"):
            value = getattr(self, name)
            if value is None:
                value = defaults[name]
            object.__setattr__(self, name, str(value))

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "ChartConfig":
        """Build a config from loosely named options (snake_case or camelCase).

        Unknown keys are ignored; use ``split_options`` to report them.
        """
        known, _ = split_options(options)
        return cls(**known)

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2

    @property
    def outer_radius(self) -> float:
        base = max(10.0, min(self.width, self.height) / 2 - self.padding)
        return max(10.0, base * self.outer_size_ratio)

    @property
    def inner_radius(self) -> float:
        return max(0.0, self.outer_radius * self.inner_radius_ratio)

    @property
    def leader_start_radius(self) -> float:
        """Radius where leader lines begin, inside the annulus band."""
        inner, outer = self.inner_radius, self.outer_radius
        return clamp(inner + (outer - inner) * self.leader_start_ratio, 0.0, outer)

    @property
    def top_bottom_threshold(self) -> float:
        return math.radians(self.top_bottom_threshold_deg)

    @property
    def lane_step(self) -> float:
        """Vertical pitch between label lanes."""
        return max(self.min_label_gap, self.font_size + self.lane_margin)

    @property
    def crowding_threshold(self) -> float:
        """Straight labels closer than this mark their side as crowded."""
        return max(self.font_size * 1.1, self.min_label_gap)

    @property
    def label_limits(self) -> tuple[float, float]:
        """(top, bottom) y bounds for label anchors."""
        half = self.font_size / 2
        return half + 4, self.height - half - 4

    @property
    def max_label_width(self) -> float:
        return self.width * self.label_max_width_ratio


def split_options(options: Mapping[str, Any] | None) -> tuple[dict[str, Any], list[str]]:
    """Split raw options into ChartConfig keyword arguments and unknown keys.

    ``cutout_pct`` is given in percent, like the property panel it came from.
    """
    names = {f.name for f in fields(ChartConfig)}
    known: dict[str, Any] = {}
    unknown: list[str] = []

    for raw_key, value in (options or {}).items():
        key = _snake_case(str(raw_key))
        if key == "cutout_pct":
            value = _as_finite(value, 60.0) / 100
        key = _ALIASES.get(key, key)
        if key in names:
            known[key] = value
        else:
            unknown.append(str(raw_key))

    return known, unknown
