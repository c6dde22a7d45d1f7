"""Pytest fixtures for layout module tests."""

import pytest

from leader_donut.config import ChartConfig
from leader_donut.rows import Row


@pytest.fixture
def default_config() -> ChartConfig:
    """Default 420x360 chart."""
    return ChartConfig()


@pytest.fixture
def three_rows() -> list[Row]:
    """A=30, B=30, C=40: the reference scenario."""
    return [
        Row("A", 30, "red"),
        Row("B", 30, "blue"),
        Row("C", 40, "green"),
    ]


@pytest.fixture
def twelve_equal_rows() -> list[Row]:
    """Twelve equal slices, 30 degrees each."""
    return [Row(f"R{i}", 1, "#888") for i in range(12)]


@pytest.fixture
def crowded_rows() -> list[Row]:
    """Eight tiny slices bunched around three o'clock plus one large slice.

    With rotation_deg=-14.4 the tiny slices span [-14.4, 14.4] degrees, all on
    the right side, four above and four below the center line.
    """
    rows = [Row(f"Item {i}", 1, "#4a90d9") for i in range(8)]
    rows.append(Row("Rest", 92, "#cccccc"))
    return rows


@pytest.fixture
def crowded_config() -> ChartConfig:
    """300px tall canvas with 12px labels for the crowding scenario."""
    return ChartConfig(height=300, font_size=12, rotation_deg=-14.4)


@pytest.fixture
def mixed_records() -> list[object]:
    """Raw records with values in different representations, some unusable."""
    from decimal import Decimal

    return [
        {"label": "Stocks", "value": Decimal("45.5"), "color": "#1f77b4"},
        ("12", "Bonds", "#ff7f0e"),
        {"label": "Cash", "value": "not a number", "color": "#2ca02c"},
        {"label": "Gold", "value": 0, "color": "#d62728"},
        {"label": "Crypto", "value": float("nan")},
        {"label": "Real estate", "value": 20},
    ]
