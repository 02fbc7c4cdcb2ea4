from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from memory_diagnostic.core.domain.usage import UsageSnapshot


LEGEND = "Units = relative object+cache estimate (not bytes)"
CALCULATING = "Calculating..."


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class UsageRow:
    name: str
    units: int
    share: float  # 0.0 - 100.0
    units_label: str
    percent_label: str


@dataclass(frozen=True, slots=True)
class UsageReport:
    title: str
    total_units: int
    total_label: str
    rows: List[UsageRow]
    hidden_count: int
    status: str | None


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def share_percent(units: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return (units * 100.0) / total


def format_units(units: int) -> str:
    if units >= 1_000_000:
        return f"{units / 1_000_000:.1f}M units"
    if units >= 1_000:
        return f"{units / 1_000:.1f}k units"
    return f"{units} units"


def format_percent(units: int, total: int) -> str:
    if total <= 0:
        return "0%"
    share = Decimal(share_percent(units, total)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{share}%"


# ---------------------------------------------------------------------------
# Report builder
# ---------------------------------------------------------------------------

def summarize_usage(
    snapshot: UsageSnapshot,
    *,
    max_rows: int,
) -> UsageReport:
    total = snapshot.total_units

    if snapshot.is_empty:
        return UsageReport(
            title="Plugin Memory (est.)",
            total_units=total,
            total_label="",
            rows=[],
            hidden_count=0,
            status=CALCULATING,
        )

    limit = max(1, max_rows)
    shown = snapshot.entries[:limit]

    rows = [
        UsageRow(
            name=entry.name,
            units=entry.units,
            share=share_percent(entry.units, total),
            units_label=format_units(entry.units),
            percent_label=format_percent(entry.units, total),
        )
        for entry in shown
    ]

    return UsageReport(
        title="Plugin Memory (est.)",
        total_units=total,
        total_label=format_units(total) if total > 0 else "",
        rows=rows,
        hidden_count=len(snapshot.entries) - len(shown),
        status=None,
    )


# ---------------------------------------------------------------------------
# Pretty printer
# ---------------------------------------------------------------------------

def render_usage_report(report: UsageReport) -> str:
    lines: list[str] = []

    header = report.title
    if report.total_label:
        header = f"{header} - {report.total_label}"
    lines.append(header)
    lines.append(LEGEND)
    lines.append("")

    if report.status is not None:
        lines.append(f"  {report.status}")
        return "\n".join(lines)

    name_width = max(len(row.name) for row in report.rows)
    for row in report.rows:
        lines.append(
            f"  {row.name:<{name_width}}  "
            f"{row.percent_label:>4}  "
            f"{row.units_label}"
        )

    if report.hidden_count > 0:
        lines.append(f"  +{report.hidden_count} more")

    return "\n".join(lines)


def print_usage_report(report: UsageReport) -> None:
    print(render_usage_report(report))
