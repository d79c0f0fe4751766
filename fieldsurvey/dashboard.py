"""
Design (dashboard.py)
- Purpose: Derived, display-ready data for the dashboard: stats, percentages, chart slices
           and table rows. No widget code here (ui.py renders what this produces).
- Inputs: A record collection (newest first, as kept by the store).
- Outputs: Stats, ints, lists of tuples.
- Side effects: Dashboard subscribes to the store and recomputes on every publication.
"""

import math
from typing import Callable, List, Optional, Sequence, Tuple

from .models import BeneficiaryRecord, Stats, ValidationStatus
from .repository import RecordStore, Records
from .utils import format_timestamp

TABLE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

Slice = Tuple[str, int, int]  # (label, count, percent)
Row = Tuple[str, str, str, str, str, str, str]


def compute_stats(records: Sequence[BeneficiaryRecord]) -> Stats:
    """Single pass count of total / eligible / ineligible."""
    total = eligible = ineligible = 0
    for record in records:
        total += 1
        if record.status is ValidationStatus.ELIGIBLE:
            eligible += 1
        elif record.status is ValidationStatus.INELIGIBLE:
            ineligible += 1
    return Stats(total=total, eligible=eligible, ineligible=ineligible)


def percentage(count: int, total: int) -> int:
    """Whole percent of count in total, halves rounded up; 0 when total is 0."""
    if total == 0:
        return 0
    return int(math.floor(100 * count / total + 0.5))


def chart_slices(stats: Stats) -> List[Slice]:
    """Eligible and Ineligible slices; empty when there is nothing to draw."""
    if stats.total == 0:
        return []
    return [
        (ValidationStatus.ELIGIBLE.value, stats.eligible, percentage(stats.eligible, stats.total)),
        (ValidationStatus.INELIGIBLE.value, stats.ineligible, percentage(stats.ineligible, stats.total)),
    ]


def legend_text(stats: Stats) -> List[str]:
    """Legend labels, shown even when the chart is empty: 'Eligible (75%)'."""
    return [
        f"Eligible ({percentage(stats.eligible, stats.total)}%)",
        f"Ineligible ({percentage(stats.ineligible, stats.total)}%)",
    ]


def table_rows(records: Sequence[BeneficiaryRecord]) -> List[Row]:
    """One display row per record, in collection order (newest first)."""
    return [
        (
            r.serial_number,
            r.beneficiary_name,
            r.beneficiary_id,
            f"{r.village}, {r.gp_name}",
            r.status.value,
            r.superior_name,
            format_timestamp(r.timestamp, TABLE_TIMESTAMP_FORMAT),
        )
        for r in records
    ]


class Dashboard:
    """
    Design (Dashboard)
    - Purpose: Keep stats/slices/rows in step with the store via subscription.
    - Public attributes: stats, slices, rows, legend (recomputed on each publication).
    - on_update: optional callback (e.g. the UI repaint) run after recomputing.
    """

    def __init__(self, store: RecordStore, on_update: Optional[Callable[[], None]] = None) -> None:
        self.on_update = on_update
        self._unsubscribe = store.subscribe(self.refresh)
        self.refresh(store.snapshot())

    def refresh(self, records: Records) -> None:
        self.stats = compute_stats(records)
        self.slices = chart_slices(self.stats)
        self.legend = legend_text(self.stats)
        self.rows = table_rows(records)
        if self.on_update is not None:
            self.on_update()

    def close(self) -> None:
        self._unsubscribe()
