"""SVG rendering of a computed layout with svgwrite."""

from pathlib import Path

import svgwrite

from ..config import ChartConfig
from .engine import LayoutResult
from .text import MeasureFn, approximate_text_width, fit_text

FONT_FAMILY = "system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif"

PLACEHOLDER_OUTER = "#eee"
PLACEHOLDER_INNER = "#fff"
PLACEHOLDER_TEXT = "#999"


def _new_drawing(config: ChartConfig, output_path: Path | None) -> svgwrite.Drawing:
    dwg = svgwrite.Drawing(
        str(output_path) if output_path else "noname.svg",
        size=(config.width, config.height),
        profile="full",
        debug=False,
    )
    dwg.attribs["viewBox"] = f"0 0 {config.width:g} {config.height:g}"
    return dwg


def _add_placeholder(dwg: svgwrite.Drawing, config: ChartConfig, caption: str) -> None:
    """Grey ring with a caption, sized like the real chart."""
    cx, cy = config.center
    dwg.add(dwg.circle(center=(cx, cy), r=config.outer_radius, fill=PLACEHOLDER_OUTER))
    if config.inner_radius > 0:
        dwg.add(dwg.circle(center=(cx, cy), r=config.inner_radius, fill=PLACEHOLDER_INNER))
    dwg.add(
        dwg.text(
            caption,
            insert=(cx, cy),
            text_anchor="middle",
            dominant_baseline="central",
            font_family=FONT_FAMILY,
            font_size=14,
            fill=PLACEHOLDER_TEXT,
        )
    )


def _add_center_text(dwg: svgwrite.Drawing, config: ChartConfig) -> None:
    if not config.center_text:
        return
    cx, cy = config.center
    dwg.add(
        dwg.text(
            config.center_text,
            insert=(cx, cy),
            text_anchor="middle",
            dominant_baseline="central",
            font_family=FONT_FAMILY,
            font_size=config.center_text_font_size,
            font_weight=str(config.center_text_font_weight),
            fill=config.center_text_color,
        )
    )


def render_svg(
    result: LayoutResult,
    config: ChartConfig,
    output_path: Path | None = None,
    measure: MeasureFn | None = None,
    placeholder: str = "No data",
) -> svgwrite.Drawing:
    """Draw a layout as SVG.

    Slices are drawn first, then leader lines, then labels, then the center
    text. An empty layout draws a placeholder ring with a caption instead.

    Args:
        result: Output of ``compute_layout``.
        config: The configuration the layout was computed with.
        output_path: If given, the drawing is also saved there.
        measure: Text width function used to shorten truncated labels.
        placeholder: Caption for the empty state.

    Returns:
        The svgwrite Drawing.
    """
    measure = measure or approximate_text_width
    dwg = _new_drawing(config, output_path)

    if result.is_empty:
        _add_placeholder(dwg, config, placeholder)
        _add_center_text(dwg, config)
        if output_path:
            dwg.save()
        return dwg

    slices = dwg.g(id="slices")
    for shape in result.shapes:
        slices.add(dwg.path(d=shape.path.d, fill=shape.fill, stroke="none"))
    dwg.add(slices)

    leaders = dwg.g(
        id="leaders",
        fill="none",
        stroke=config.leader_color,
        stroke_width=config.leader_width,
        stroke_linejoin="round",
    )
    for route in result.routes:
        leaders.add(dwg.polyline(points=[(p.x, p.y) for p in route.points]))
    dwg.add(leaders)

    labels = dwg.g(
        id="labels",
        font_family=FONT_FAMILY,
        font_size=config.font_size,
        font_weight=str(config.label_weight),
        fill=config.label_color,
    )
    for route in result.routes:
        anchor = route.label_anchor(config.label_pad)
        text = route.label
        if route.truncated:
            text = fit_text(text, config.max_label_width, config.font_size, config.label_weight, measure)
        element = dwg.text(
            text,
            insert=(anchor.x, anchor.y),
            text_anchor=route.text_anchor,
            dominant_baseline="central",
        )
        if route.truncated:
            element.set_desc(title=route.label)
        labels.add(element)
    dwg.add(labels)

    _add_center_text(dwg, config)

    if output_path:
        dwg.save()
    return dwg
