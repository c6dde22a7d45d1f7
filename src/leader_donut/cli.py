"""CLI for leader-donut."""

import argparse
from pathlib import Path

from .config import ChartConfig, split_options
from .layout import compute_layout, memoize_measure, pillow_measurer
from .rows import load_records
from .visualize import generate_json, generate_summary, generate_svg


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dictionary of configuration values.

    Raises:
        ValueError: If the file does not hold a mapping at the top level.
    """
    try:
        import yaml

        with open(config_path) as f:
            config = yaml.safe_load(f) or {}
    except ImportError as err:
        raise ImportError("PyYAML required for config files: pip install pyyaml") from err

    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_path} must hold a mapping, got {type(config).__name__}")
    return config


def read_config(args: argparse.Namespace, parser: argparse.ArgumentParser) -> dict:
    """Load the --config file, if any, reporting a malformed file as a usage error."""
    if not args.config:
        return {}
    try:
        return load_config(args.config)
    except ValueError as err:
        parser.error(str(err))


def parse_overrides(pairs: list[str] | None) -> dict[str, str]:
    """Parse repeated KEY=VALUE options into a dict."""
    overrides: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        overrides[key.strip()] = value.strip()
    return overrides


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments shared between subcommands."""
    parser.add_argument("--data", type=Path, help="CSV, JSON or YAML file with chart rows")
    parser.add_argument("--config", type=Path, help="Path to YAML config file")
    parser.add_argument("--label-column", type=str, help="Column holding labels (default: label)")
    parser.add_argument("--value-column", type=str, help="Column holding values (default: value)")
    parser.add_argument("--color-column", type=str, help="Column holding colors (default: color)")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        metavar="KEY=VALUE",
        help="Override a chart option, e.g. --set font_size=12 (can be repeated)",
    )
    parser.add_argument("--font", type=Path, help="TrueType font used to measure label widths")


def resolve_common_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ChartConfig:
    """Resolve common arguments: load config, validate, build the chart config."""
    config = read_config(args, parser)
    if config:
        if not args.data and "data" in config:
            args.data = Path(config["data"])
        if not args.font and "font" in config:
            args.font = Path(config["font"])
        columns = config.get("columns") or {}
        if not isinstance(columns, dict):
            parser.error("'columns' in the config file must be a mapping")
        for name in ("label", "value", "color"):
            attr = f"{name}_column"
            if not getattr(args, attr) and name in columns:
                setattr(args, attr, str(columns[name]))

    if not args.data:
        parser.error("--data is required")

    try:
        overrides = parse_overrides(args.overrides)
    except ValueError as err:
        parser.error(str(err))

    chart = config.get("chart") or {}
    if not isinstance(chart, dict):
        parser.error("'chart' in the config file must be a mapping")
    options = dict(chart)
    options.update(overrides)
    known, unknown = split_options(options)
    for key in unknown:
        print(f"Warning: unknown chart option '{key}' ignored")

    args.data = args.data.resolve()
    return ChartConfig(**known)


def build_layout(args: argparse.Namespace, chart_config: ChartConfig):
    """Load rows and compute the layout.

    Returns:
        Tuple of (result, measure) where measure is the text width function used.
    """
    print(f"Reading {args.data}...")
    records = load_records(
        args.data,
        label_column=args.label_column or "label",
        value_column=args.value_column or "value",
        color_column=args.color_column or "color",
    )
    print(f"Found {len(records)} rows")

    measure = None
    if args.font:
        print(f"Measuring labels with {args.font}")
        measure = memoize_measure(pillow_measurer(args.font))

    result = compute_layout(records, chart_config, measure=measure)
    for warning in result.warnings:
        print(f"Warning: {warning}")

    if result.is_empty:
        print("No drawable rows; output shows the empty placeholder.")
    else:
        elbows = sum(1 for r in result.routes if r.is_elbow)
        print(f"Laid out {len(result.slices)} slices ({elbows} elbow leader lines)")
    return result, measure


def cmd_layout(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Run the layout subcommand: write geometry as JSON."""
    if args.output is None:
        config = read_config(args, parser)
        if "output" in config:
            args.output = Path(config["output"])

    chart_config = resolve_common_args(args, parser)
    output = (args.output or Path("layout.json")).resolve()
    output.parent.mkdir(parents=True, exist_ok=True)

    result, _ = build_layout(args, chart_config)
    generate_json(result, chart_config, output)
    print(f"Wrote {output}")


def cmd_render(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Run the render subcommand: write the chart as SVG."""
    config = read_config(args, parser)
    if config:
        if args.output is None and "output" in config:
            args.output = Path(config["output"])
        if args.summary is None and "summary" in config:
            args.summary = Path(config["summary"])

    chart_config = resolve_common_args(args, parser)
    output = (args.output or Path("chart.svg")).resolve()
    output.parent.mkdir(parents=True, exist_ok=True)

    result, measure = build_layout(args, chart_config)
    generate_svg(result, chart_config, output, measure=measure)
    print(f"Wrote {output}")

    if args.summary:
        summary = args.summary.resolve()
        generate_summary(result, chart_config, summary)
        print(f"Wrote {summary}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Lay out and render donut charts with leader-line labels",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    layout_parser = subparsers.add_parser(
        "layout",
        help="Compute slice and label geometry and write it as JSON",
    )
    add_common_args(layout_parser)
    layout_parser.add_argument(
        "--output",
        type=Path,
        help="Output JSON path (default: layout.json)",
    )

    render_parser = subparsers.add_parser(
        "render",
        help="Render the chart as SVG",
    )
    add_common_args(render_parser)
    render_parser.add_argument(
        "--output",
        type=Path,
        help="Output SVG path (default: chart.svg)",
    )
    render_parser.add_argument(
        "--summary",
        type=Path,
        help="Optional text summary path",
    )

    args = parser.parse_args(argv)

    if args.command == "layout":
        cmd_layout(args, layout_parser)
    elif args.command == "render":
        cmd_render(args, render_parser)
    else:
        # No subcommand provided - show help
        parser.print_help()


if __name__ == "__main__":
    main()
