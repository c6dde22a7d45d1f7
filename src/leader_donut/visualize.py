"""Generate output files from a computed layout."""

import json
from pathlib import Path

from .config import ChartConfig
from .layout import LayoutResult, render_svg
from .layout.text import MeasureFn


def generate_svg(
    result: LayoutResult,
    config: ChartConfig,
    output_file: Path,
    measure: MeasureFn | None = None,
) -> None:
    """Write the chart as an SVG file.

    Args:
        result: The computed layout.
        config: Configuration the layout was computed with.
        output_file: Path to write the SVG file.
        measure: Optional text width function for label truncation.
    """
    render_svg(result, config, output_path=output_file, measure=measure)


def layout_to_dict(result: LayoutResult, config: ChartConfig) -> dict:
    """Convert a layout to plain JSON-serializable data."""
    cx, cy = config.center
    return {
        "width": config.width,
        "height": config.height,
        "center": [cx, cy],
        "outer_radius": config.outer_radius,
        "inner_radius": config.inner_radius,
        "empty": result.is_empty,
        "slices": [
            {
                "index": s.index,
                "label": s.label,
                "value": s.value,
                "color": s.color,
                "fraction": s.fraction,
                "start_angle": s.start_angle,
                "end_angle": s.end_angle,
                "mid_angle": s.mid_angle,
                "path": shape.path.d,
            }
            for s, shape in zip(result.slices, result.shapes)
        ],
        "routes": [
            {
                "index": r.index,
                "label": r.label,
                "text_width": r.text_width,
                "side": r.side.value,
                "zone": r.zone.value,
                "is_elbow": r.is_elbow,
                "truncated": r.truncated,
                "text_anchor": r.text_anchor,
                "start": list(r.start),
                "bend": list(r.bend),
                "end": list(r.end),
                "label_anchor": list(r.label_anchor(config.label_pad)),
            }
            for r in result.routes
        ],
        "warnings": list(result.warnings),
    }


def generate_json(result: LayoutResult, config: ChartConfig, output_file: Path) -> None:
    """Write the layout geometry as JSON.

    Args:
        result: The computed layout.
        config: Configuration the layout was computed with.
        output_file: Path to write the JSON file.
    """
    with open(output_file, "w") as f:
        json.dump(layout_to_dict(result, config), f, indent=2)


def generate_summary(result: LayoutResult, config: ChartConfig, output_file: Path) -> None:
    """Write a human-readable summary of the layout.

    Args:
        result: The computed layout.
        config: Configuration the layout was computed with.
        output_file: Path to write the summary file.
    """
    with open(output_file, "w") as f:
        f.write("=" * 60 + "\n")
        f.write("Donut Layout Summary\n")
        f.write("=" * 60 + "\n\n")

        f.write(f"Canvas: {config.width:g} x {config.height:g}\n")
        f.write(f"Radii: outer {config.outer_radius:.1f}, inner {config.inner_radius:.1f}\n")
        f.write(f"Slices: {len(result.slices)}\n")
        f.write(f"Elbow routes: {sum(1 for r in result.routes if r.is_elbow)}\n\n")

        if result.is_empty:
            f.write("No data to draw.\n")
        else:
            f.write("Labels:\n")
            f.write("-" * 40 + "\n")
            for r in result.routes:
                shape = "elbow" if r.is_elbow else "straight"
                f.write(f"  {r.side.value:5s}  y={r.end.y:7.1f}  {shape:8s}  {r.label}\n")

        if result.warnings:
            f.write("\nExcluded rows:\n")
            f.write("-" * 40 + "\n")
            for warning in result.warnings:
                f.write(f"  {warning}\n")
