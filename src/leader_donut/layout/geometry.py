"""Polar geometry and donut-slice outlines."""

import math
from dataclasses import dataclass
from typing import NamedTuple

TAU = 2 * math.pi

# Sweeps this close to a full turn are drawn as a closed ring
_FULL_TURN_EPS = 1e-9


class Point(NamedTuple):
    """A point in y-down canvas coordinates."""

    x: float
    y: float


def polar(cx: float, cy: float, r: float, angle: float) -> Point:
    """Convert polar coordinates around (cx, cy) to a canvas point.

    Args:
        cx: Center x.
        cy: Center y.
        r: Radius.
        angle: Angle in radians, measured clockwise from the positive x axis
            (the y axis points down).

    Returns:
        The Cartesian point.
    """
    return Point(cx + r * math.cos(angle), cy + r * math.sin(angle))


def normalize_angle(angle: float) -> float:
    """Normalize angle to [0, 2pi) range."""
    normalized = angle % TAU
    # angle % TAU can round up to TAU for tiny negative inputs
    return 0.0 if normalized >= TAU else normalized


@dataclass(frozen=True)
class PathDescriptor:
    """Outline of one donut slice as a list of path commands.

    Commands are tuples whose first element is the SVG command letter:
    ``("M", x, y)``, ``("L", x, y)``,
    ``("A", rx, ry, rotation, large_arc, sweep, x, y)`` and ``("Z",)``.
    """

    commands: tuple[tuple, ...]
    large_arc: int
    full_circle: bool = False

    @property
    def d(self) -> str:
        """SVG path data string."""
        parts = []
        for command in self.commands:
            letter, *args = command
            parts.append(" ".join([letter, *(_fmt(a) for a in args)]))
        return " ".join(parts)


def _fmt(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def arc_path(
    cx: float,
    cy: float,
    r_outer: float,
    r_inner: float,
    start_angle: float,
    end_angle: float,
) -> PathDescriptor:
    """Build the outline of a donut slice.

    The outline runs along the outer arc, down a radial line, back along the
    inner arc in the reverse sweep direction and closes. ``end_angle`` is
    pushed forward by whole turns until it is not before ``start_angle``.

    Args:
        cx: Center x.
        cy: Center y.
        r_outer: Outer radius.
        r_inner: Inner radius. Values <= 0 collapse the inner arc onto the
            center, which gives a pie wedge.
        start_angle: Slice start in radians.
        end_angle: Slice end in radians.

    Returns:
        PathDescriptor for the slice.
    """
    end = end_angle
    while end < start_angle:
        end += TAU
    swept = end - start_angle

    if swept >= TAU - _FULL_TURN_EPS:
        return _full_ring_path(cx, cy, r_outer, r_inner, start_angle)

    large_arc = 1 if swept > math.pi else 0
    p0 = polar(cx, cy, r_outer, start_angle)
    p1 = polar(cx, cy, r_outer, end)

    commands: list[tuple] = [
        ("M", p0.x, p0.y),
        ("A", r_outer, r_outer, 0, large_arc, 1, p1.x, p1.y),
    ]
    if r_inner <= 0:
        commands.append(("L", float(cx), float(cy)))
    else:
        q1 = polar(cx, cy, r_inner, end)
        q0 = polar(cx, cy, r_inner, start_angle)
        commands.append(("L", q1.x, q1.y))
        commands.append(("A", r_inner, r_inner, 0, large_arc, 0, q0.x, q0.y))
    commands.append(("Z",))

    return PathDescriptor(commands=tuple(commands), large_arc=large_arc)


def _full_ring_path(
    cx: float,
    cy: float,
    r_outer: float,
    r_inner: float,
    start_angle: float,
) -> PathDescriptor:
    """Build a full 360 degree ring from two half arcs per edge.

    A single arc whose end point equals its start point is dropped by SVG
    renderers, so each circle is split at start + pi.
    """
    half = start_angle + math.pi
    p0 = polar(cx, cy, r_outer, start_angle)
    p180 = polar(cx, cy, r_outer, half)

    commands: list[tuple] = [
        ("M", p0.x, p0.y),
        ("A", r_outer, r_outer, 0, 0, 1, p180.x, p180.y),
        ("A", r_outer, r_outer, 0, 0, 1, p0.x, p0.y),
    ]
    if r_inner <= 0:
        commands.append(("L", float(cx), float(cy)))
    else:
        q0 = polar(cx, cy, r_inner, start_angle)
        q180 = polar(cx, cy, r_inner, half)
        commands.append(("L", q0.x, q0.y))
        commands.append(("A", r_inner, r_inner, 0, 0, 0, q180.x, q180.y))
        commands.append(("A", r_inner, r_inner, 0, 0, 0, q0.x, q0.y))
    commands.append(("Z",))

    return PathDescriptor(commands=tuple(commands), large_arc=1, full_circle=True)
