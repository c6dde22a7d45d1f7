"""Leader-line routing from slices to external labels."""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..config import ChartConfig
from .geometry import Point, normalize_angle, polar
from .slices import Slice
from .text import MIN_TEXT_WIDTH, MeasureFn, approximate_text_width


class Side(Enum):
    """Which side of the chart a label sits on."""

    LEFT = "left"
    RIGHT = "right"


class Zone(Enum):
    """Where a slice's mid angle points relative to the vertical axis."""

    NEAR_TOP = "near_top"  # within the threshold of 270 degrees
    NEAR_BOTTOM = "near_bottom"  # within the threshold of 90 degrees
    NEITHER = "neither"


@dataclass(frozen=True)
class LeaderRoute:
    """Leader line and label anchor for one slice.

    Straight routes go start -> end and have ``bend == start``. Elbow routes
    go start -> bend (vertical) -> end (horizontal).
    """

    index: int
    label: str
    text_width: float
    side: Side
    is_elbow: bool
    start: Point
    bend: Point
    end: Point
    zone: Zone = Zone.NEITHER
    truncated: bool = False

    @property
    def text_anchor(self) -> str:
        """SVG text-anchor: right-side labels grow rightwards, left-side leftwards."""
        return "start" if self.side is Side.RIGHT else "end"

    @property
    def points(self) -> list[Point]:
        if self.is_elbow:
            return [self.start, self.bend, self.end]
        return [self.start, self.end]

    def label_anchor(self, pad: float) -> Point:
        """Point the label text is anchored at, pad pixels past the line end."""
        dx = pad if self.side is Side.RIGHT else -pad
        return Point(self.end.x + dx, self.end.y)


def classify_zone(mid_angle: float, threshold: float) -> Zone:
    """Classify a mid angle as near the top, near the bottom, or neither.

    Args:
        mid_angle: Angle in radians, any range.
        threshold: Half-window in radians around the vertical axis.

    Returns:
        The zone. Top wins when the windows overlap (threshold of 90 degrees).
    """
    norm = normalize_angle(mid_angle)
    if abs(norm - 3 * math.pi / 2) <= threshold:
        return Zone.NEAR_TOP
    if abs(norm - math.pi / 2) <= threshold:
        return Zone.NEAR_BOTTOM
    return Zone.NEITHER


def side_for(mid_angle: float) -> Side:
    return Side.RIGHT if math.cos(mid_angle) >= 0 else Side.LEFT


def _round_half_up(value: float, digits: int) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def label_text(label: str, fraction: float, show_percent: bool = True, percent_digits: int = 0) -> str:
    """Format a slice label, optionally followed by its share in percent."""
    if not show_percent:
        return label
    pct = _round_half_up(100 * fraction, percent_digits)
    return f"{label} {pct:.{percent_digits}f}%"


def route_leader(
    slice_: Slice,
    config: ChartConfig,
    measure: MeasureFn = approximate_text_width,
) -> LeaderRoute:
    """Compute the initial leader route for one slice."""
    cx, cy = config.center
    mid = slice_.mid_angle
    start = polar(cx, cy, config.leader_start_radius, mid)
    zone = classify_zone(mid, config.top_bottom_threshold)
    side = side_for(mid)
    dx = config.elbow_horizontal_len if side is Side.RIGHT else -config.elbow_horizontal_len

    if zone is Zone.NEITHER:
        bend = start
        end = Point(start.x + dx, start.y)
    else:
        dy = -config.elbow_vertical_len if zone is Zone.NEAR_TOP else config.elbow_vertical_len
        bend = Point(start.x, start.y + dy)
        end = Point(bend.x + dx, bend.y)

    text = label_text(slice_.label, slice_.fraction, config.show_percent, config.percent_digits)
    width = max(MIN_TEXT_WIDTH, measure(text, config.font_size, config.label_weight))
    truncated = width > config.max_label_width

    return LeaderRoute(
        index=slice_.index,
        label=text,
        text_width=min(width, config.max_label_width),
        side=side,
        is_elbow=zone is not Zone.NEITHER,
        start=start,
        bend=bend,
        end=end,
        zone=zone,
        truncated=truncated,
    )


def route_leaders(
    slices: Sequence[Slice],
    config: ChartConfig,
    measure: MeasureFn = approximate_text_width,
) -> list[LeaderRoute]:
    """Compute initial leader routes for all slices, in slice order."""
    return [route_leader(s, config, measure) for s in slices]
