"""Read-only projections of the ledger: recent list, trend chart and total."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import ExpenseRecord

RECENT_LIMIT = 5


class View(str, Enum):
    """Tabs shown by both rendering surfaces."""

    ADD = "add"
    LIST = "list"
    CHART = "chart"

    @property
    def heading(self) -> str:
        return VIEW_HEADINGS[self]

    @classmethod
    def parse(cls, value: object, default: Optional["View"] = None) -> "View":
        try:
            return cls(value)
        except ValueError:
            return default or cls.ADD


VIEW_HEADINGS = {
    View.ADD: "Add Expense",
    View.LIST: "Recent Expenses",
    View.CHART: "Spending Chart",
}


@dataclass(frozen=True)
class RecentRow:
    id: str
    date: str
    category: str
    amount: str
    description: str


@dataclass(frozen=True)
class TrendPoint:
    label: str
    amount: Decimal


def format_amount(value: Decimal) -> str:
    return f"{value:.2f}"


def format_currency(value: Decimal) -> str:
    return f"${value:.2f}"


def format_display_date(value: date) -> str:
    """Human-readable date such as ``Mar 10, 2024``."""
    return f"{value:%b} {value.day}, {value.year}"


def format_day_label(value: date) -> str:
    """Day label without year, the trend grouping key."""
    return value.strftime("%m/%d")


def recent_expenses(records: Sequence[ExpenseRecord], limit: int = RECENT_LIMIT) -> List[RecentRow]:
    return [
        RecentRow(
            id=record.id,
            date=format_display_date(record.date),
            category=record.category,
            amount=format_currency(record.amount),
            description=record.description or "-",
        )
        for record in list(records)[:limit]
    ]


def trend_series(records: Iterable[ExpenseRecord]) -> List[TrendPoint]:
    """Sum amounts per day label.

    Points keep the order in which each label is first met while walking the
    ledger newest-first; they are not sorted by calendar date.
    """
    totals: Dict[str, Decimal] = {}
    for record in records:
        label = format_day_label(record.date)
        totals[label] = totals.get(label, Decimal("0.00")) + record.amount
    return [TrendPoint(label=label, amount=amount) for label, amount in totals.items()]


def total_spend(records: Iterable[ExpenseRecord]) -> Decimal:
    return sum((record.amount for record in records), start=Decimal("0.00"))


def total_display(records: Iterable[ExpenseRecord]) -> str:
    return format_amount(total_spend(records))


# Chart geometry -----------------------------------------------------------
@dataclass(frozen=True)
class ChartPadding:
    left: int = 48
    right: int = 16
    top: int = 16
    bottom: int = 28


def _chart_max(series: Sequence[TrendPoint]) -> Decimal:
    peak = max((point.amount for point in series), default=Decimal("0"))
    return peak if peak > 0 else Decimal("1")


def chart_points(
    series: Sequence[TrendPoint],
    width: int,
    height: int,
    padding: ChartPadding = ChartPadding(),
) -> List[Tuple[float, float]]:
    """Scale a series into canvas coordinates, origin at the top-left corner."""
    if not series:
        return []
    plot_w = max(width - padding.left - padding.right, 1)
    plot_h = max(height - padding.top - padding.bottom, 1)
    step = plot_w / len(series)
    peak = _chart_max(series)
    baseline = height - padding.bottom

    points = []
    for index, point in enumerate(series):
        x = padding.left + step * index + step / 2
        y = baseline - plot_h * float(point.amount / peak)
        points.append((round(x, 2), round(y, 2)))
    return points


def axis_ticks(
    series: Sequence[TrendPoint],
    height: int,
    padding: ChartPadding = ChartPadding(),
    count: int = 4,
) -> List[Tuple[Decimal, float]]:
    """Evenly spaced y-axis values from zero up to the series maximum, with their y coordinate."""
    if not series or count < 1:
        return []
    peak = _chart_max(series)
    plot_h = max(height - padding.top - padding.bottom, 1)
    baseline = height - padding.bottom
    ticks = []
    for index in range(count + 1):
        value = (peak * index / count).quantize(Decimal("0.01"))
        ticks.append((value, round(baseline - plot_h * index / count, 2)))
    return ticks
