"""Vertical de-overlapping of labels into evenly spaced lanes.

Labels are handled per side (left/right) and per half (above/below the chart
center). Only the y of each route's bend and end changes; x positions are
kept, and no label is moved across the horizontal center line.
"""

from collections.abc import Sequence
from dataclasses import replace

from ..config import ChartConfig, clamp
from .geometry import Point
from .router import LeaderRoute, Side

EPS = 1e-9


def is_crowded(routes: Sequence[LeaderRoute], threshold: float) -> bool:
    """Check whether any two straight labels are closer than threshold.

    Elbow routes are ignored.
    """
    ys = sorted(r.end.y for r in routes if not r.is_elbow)
    return any(b - a < threshold for a, b in zip(ys, ys[1:]))


def assign_lanes(ys: Sequence[float], step: float, lo: float, hi: float) -> list[float]:
    """Place sorted y values on consecutive lanes.

    The block of lanes is centered on the mean of ys, then slid (not
    squeezed) to fit in [lo, hi]. If the block is taller than the range it
    starts at lo and the overflowing lanes are clamped to hi, so the last
    labels share the y of the last lane and overlap there. Callers
    that need every label readable must give the group more room (a taller
    canvas, a smaller font or a smaller lane margin).

    Args:
        ys: Current y values, sorted ascending.
        step: Lane pitch.
        lo: Smallest allowed y.
        hi: Largest allowed y.

    Returns:
        New y values in the same order.
    """
    if not ys:
        return []
    needed = (len(ys) - 1) * step
    mean = sum(ys) / len(ys)
    y0 = clamp(mean - needed / 2, lo, hi - needed)
    return [clamp(y0 + i * step, lo, hi) for i in range(len(ys))]


def _needs_lanes(ys: Sequence[float], step: float, lo: float, hi: float) -> bool:
    if any(y < lo - EPS or y > hi + EPS for y in ys):
        return True
    return any(b - a < step - EPS for a, b in zip(ys, ys[1:]))


def _as_elbow(route: LeaderRoute) -> LeaderRoute:
    return route if route.is_elbow else replace(route, is_elbow=True)


def _move_to(route: LeaderRoute, y: float) -> LeaderRoute:
    moved = route.is_elbow or abs(y - route.start.y) > EPS
    return replace(
        route,
        is_elbow=moved,
        bend=Point(route.bend.x, y) if moved else route.bend,
        end=Point(route.end.x, y),
    )


def resolve_collisions(routes: Sequence[LeaderRoute], config: ChartConfig) -> list[LeaderRoute]:
    """Redistribute label heights so labels on the same side do not overlap.

    1. A side is crowded when two of its straight labels are closer than
       ``config.crowding_threshold``; every route on a crowded side becomes
       an elbow route.
    2. Routes are grouped by side and by half, the half being taken from
       the label anchor (``end.y < cy`` is the upper half), not from where
       the leader starts. A leader starting at the center still keeps its
       label on the side of the center it was routed to.
    3. Each group is re-laned at ``config.lane_step`` when its side is
       crowded, when two of its labels are closer than a lane, or when a
       label lies outside ``config.label_limits``. Otherwise the group keeps
       its routed positions, elbow routes included.
    4. Lanes for the upper half end at ``cy - lane_step / 2`` and lanes for
       the lower half start at ``cy + lane_step / 2``; each y is finally
       clamped to its own side of ``cy``.

    Args:
        routes: Routes from the router, in slice order.
        config: Chart configuration.

    Returns:
        New list of routes in the same order. The input is not modified.
    """
    resolved = list(routes)
    _, cy = config.center
    step = config.lane_step
    top_limit, bottom_limit = config.label_limits

    for side in (Side.RIGHT, Side.LEFT):
        members = [i for i, r in enumerate(resolved) if r.side is side]
        if len(members) < 2:
            continue

        crowded = is_crowded([resolved[i] for i in members], config.crowding_threshold)
        if crowded:
            for i in members:
                resolved[i] = _as_elbow(resolved[i])

        for upper in (True, False):
            group = [i for i in members if (routes[i].end.y < cy) == upper]
            if not group:
                continue
            group.sort(key=lambda i: (resolved[i].end.y, i))
            ys = [resolved[i].end.y for i in group]

            if not crowded and not _needs_lanes(ys, step, top_limit, bottom_limit):
                continue

            if upper:
                lo, hi = top_limit, cy - step / 2
            else:
                lo, hi = cy + step / 2, bottom_limit

            for i, y in zip(group, assign_lanes(ys, step, lo, hi)):
                # Never cross the center line, even at the cost of overlap
                y = min(y, cy - 1) if upper else max(y, cy)
                resolved[i] = _move_to(resolved[i], y)

    return resolved
