"""Layout pipeline: rows -> slices -> routes -> resolved routes."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..config import ChartConfig
from ..rows import normalize_rows
from .collisions import resolve_collisions
from .geometry import PathDescriptor, arc_path
from .router import LeaderRoute, route_leaders
from .slices import Slice, allocate_slices
from .text import MeasureFn, approximate_text_width


@dataclass(frozen=True)
class SliceShape:
    """Drawable outline of a slice with its fill color."""

    index: int
    path: PathDescriptor
    fill: str


@dataclass
class LayoutResult:
    """Everything a renderer needs to draw the chart."""

    slices: list[Slice] = field(default_factory=list)
    routes: list[LeaderRoute] = field(default_factory=list)
    shapes: list[SliceShape] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)  # Excluded rows

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to draw; render a placeholder instead."""
        return not self.slices


def compute_layout(
    records: Iterable[object] | None,
    config: ChartConfig | None = None,
    measure: MeasureFn | None = None,
) -> LayoutResult:
    """Lay out a donut chart with collision-free leader-line labels.

    Args:
        records: Rows, mappings or (value, label, color) triples in display
            order. Unusable rows are dropped and reported in ``warnings``.
        config: Chart configuration; defaults apply when omitted.
        measure: Text width function; defaults to the character-count
            approximation.

    Returns:
        LayoutResult. Empty input or a non-positive total gives an empty
        result rather than an error.
    """
    config = config or ChartConfig()
    measure = measure or approximate_text_width
    row_set = normalize_rows(records)

    slices = allocate_slices(row_set.rows, config.rotation_deg)
    if not slices:
        return LayoutResult(warnings=row_set.warnings)

    cx, cy = config.center
    shapes = [
        SliceShape(
            index=s.index,
            path=arc_path(cx, cy, config.outer_radius, config.inner_radius, s.start_angle, s.end_angle),
            fill=s.color,
        )
        for s in slices
    ]
    routes = resolve_collisions(route_leaders(slices, config, measure), config)

    return LayoutResult(slices=slices, routes=routes, shapes=shapes, warnings=row_set.warnings)
