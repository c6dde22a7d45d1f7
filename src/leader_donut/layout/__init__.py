"""Donut chart layout with leader-line labels.

Rows are split into angular slices, each slice gets a leader line to an
external label, and labels on the same side are spread into lanes so they
do not overlap.
"""

from .collisions import assign_lanes, is_crowded, resolve_collisions
from .engine import LayoutResult, SliceShape, compute_layout
from .geometry import PathDescriptor, Point, arc_path, polar
from .render import render_svg
from .router import LeaderRoute, Side, Zone, classify_zone, label_text, route_leaders
from .slices import Slice, allocate_slices
from .text import approximate_text_width, fit_text, memoize_measure, pillow_measurer

__all__ = [
    "Point",
    "PathDescriptor",
    "polar",
    "arc_path",
    "Slice",
    "allocate_slices",
    "Side",
    "Zone",
    "LeaderRoute",
    "classify_zone",
    "label_text",
    "route_leaders",
    "is_crowded",
    "assign_lanes",
    "resolve_collisions",
    "approximate_text_width",
    "memoize_measure",
    "pillow_measurer",
    "fit_text",
    "SliceShape",
    "LayoutResult",
    "compute_layout",
    "render_svg",
]
