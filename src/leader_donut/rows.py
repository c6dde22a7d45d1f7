"""Row parsing at the data boundary.

Values arrive as numbers, strings or decimal objects from whatever produced
the data. They are coerced here, once, so the layout engine only ever sees
finite floats.
"""

import csv
import json
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from pathlib import Path

DEFAULT_COLOR = "#9aa"


@dataclass(frozen=True)
class Row:
    """One chart row: a labelled, coloured positive value."""

    label: str
    value: float
    color: str = DEFAULT_COLOR


@dataclass
class RowSet:
    """Rows that survived validation, plus warnings for the ones that did not."""

    rows: list[Row] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)  # "Row 3 ('X'): value 'abc' is not a number"

    @property
    def total(self) -> float:
        return sum(row.value for row in self.rows)


def _unwrap(raw: object) -> object:
    """Pull the payload out of attribute wrappers exposing .value/.display_value."""
    for attr in ("value", "display_value"):
        inner = getattr(raw, attr, None)
        if inner is not None and not callable(inner):
            return inner
    return raw


def parse_row_value(raw: object) -> float | None:
    """Coerce a raw value to a finite float.

    Args:
        raw: A number, numeric string, Decimal/Fraction, or an object whose
            ``value`` (or ``display_value``) attribute holds one of those.

    Returns:
        The float, or None if the value is missing, not numeric or not finite.
    """
    if raw is None:
        return None
    if not isinstance(raw, (int, float, str, bytes, Decimal, Fraction)):
        raw = _unwrap(raw)
    if isinstance(raw, bool):
        return None
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    try:
        if isinstance(raw, str):
            text = raw.strip()
            if not text:
                return None
            number = float(Decimal(text))
        elif isinstance(raw, (int, float, Decimal, Fraction)):
            number = float(raw)
        else:
            return None
    except (InvalidOperation, ValueError, OverflowError):
        return None

    if not math.isfinite(number):
        return None
    return number


def parse_row_text(raw: object, default: str = "") -> str:
    """Coerce a raw label/color to a string, falling back to default."""
    if raw is None:
        return default
    if not isinstance(raw, str):
        raw = _unwrap(raw)
    if raw is None:
        return default
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (int, float, Decimal)) and not isinstance(raw, bool):
        return str(raw)
    return default


def _split_record(record: object) -> tuple[object, object, object]:
    """Return (value, label, color) from a Row, mapping or triple."""
    if isinstance(record, Row):
        return record.value, record.label, record.color
    if isinstance(record, Mapping):
        return record.get("value"), record.get("label"), record.get("color")
    if isinstance(record, (tuple, list)):
        padded = list(record[:3]) + [None] * (3 - min(len(record), 3))
        return padded[0], padded[1], padded[2]
    return record, None, None


def normalize_rows(records: Iterable[object] | None) -> RowSet:
    """Validate raw records into chart rows.

    Records may be ``Row`` instances, mappings with ``label``/``value``/
    ``color`` keys, or ``(value, label, color)`` sequences. Rows whose value
    cannot be parsed, or is not strictly positive, are excluded and reported
    in ``RowSet.warnings``. Nothing here raises on bad data.

    Args:
        records: Raw records in display order.

    Returns:
        RowSet with the usable rows in input order.
    """
    result = RowSet()
    if records is None:
        return result

    for i, record in enumerate(records):
        raw_value, raw_label, raw_color = _split_record(record)
        label = parse_row_text(raw_label, "")
        color = parse_row_text(raw_color, "") or DEFAULT_COLOR
        value = parse_row_value(raw_value)

        if value is None:
            result.warnings.append(f"Row {i} ({label!r}): value {raw_value!r} is not a finite number")
            continue
        if value <= 0:
            result.warnings.append(f"Row {i} ({label!r}): value {value:g} is not positive")
            continue
        result.rows.append(Row(label=label, value=value, color=color))

    return result


def load_records(
    path: Path,
    label_column: str = "label",
    value_column: str = "value",
    color_column: str = "color",
) -> list[dict]:
    """Load raw records from a CSV, JSON or YAML file.

    JSON/YAML files hold either a list of objects or an object with a
    ``rows`` list; anything else gives no records. Values are left
    unparsed; ``normalize_rows`` does that.

    Args:
        path: Data file. The format is chosen by suffix.
        label_column: Column/key holding the label.
        value_column: Column/key holding the value.
        color_column: Column/key holding the color.

    Returns:
        List of {"label", "value", "color"} dicts.
    """
    suffix = path.suffix.lower()
    if suffix in (".json", ".yaml", ".yml"):
        with open(path) as f:
            if suffix == ".json":
                data = json.load(f)
            else:
                import yaml

                data = yaml.safe_load(f)
        if isinstance(data, Mapping):
            data = data.get("rows", [])
        if not isinstance(data, list):
            data = []
        items = [item for item in data if isinstance(item, Mapping)]
    else:
        with open(path, newline="") as f:
            items = list(csv.DictReader(f))

    return [
        {
            "label": item.get(label_column),
            "value": item.get(value_column),
            "color": item.get(color_column),
        }
        for item in items
    ]
