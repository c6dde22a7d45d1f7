"""Angular allocation of rows around the circle."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ..rows import Row
from .geometry import TAU


@dataclass(frozen=True)
class Slice:
    """Angular span of one row. Angles are radians, clockwise (y-down)."""

    index: int
    start_angle: float
    end_angle: float
    fraction: float
    label: str = ""
    value: float = 0.0
    color: str = ""

    @property
    def mid_angle(self) -> float:
        return (self.start_angle + self.end_angle) / 2

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle


def allocate_slices(rows: Sequence[Row], rotation_deg: float = -90.0) -> list[Slice]:
    """Split the full circle between rows in proportion to their values.

    Rows keep their input order. Slice i starts exactly where slice i-1 ends,
    and the last slice ends exactly one turn after the first one starts.

    Args:
        rows: Validated rows (positive, finite values).
        rotation_deg: Start angle of the first slice in degrees; -90 is
            twelve o'clock.

    Returns:
        One Slice per row, or an empty list when there is nothing to draw
        (no rows or a non-positive total).
    """
    if not rows:
        return []
    total = sum(row.value for row in rows)
    if not math.isfinite(total) or total <= 0:
        return []

    origin = math.radians(rotation_deg)
    slices: list[Slice] = []
    angle = origin
    cumulative = 0.0

    for i, row in enumerate(rows):
        cumulative += row.value
        if i == len(rows) - 1:
            end = origin + TAU
        else:
            end = origin + TAU * (cumulative / total)
        slices.append(
            Slice(
                index=i,
                start_angle=angle,
                end_angle=end,
                fraction=row.value / total,
                label=row.label,
                value=row.value,
                color=row.color,
            )
        )
        angle = end

    return slices
