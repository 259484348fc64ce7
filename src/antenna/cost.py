"""Cost accounting for session transcripts — lifetime totals and today's share."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from antenna.models import TranscriptRecord


@dataclass
class CostTotals:
    message_count: int = 0
    total_cost: float = 0.0
    today_cost: float = 0.0


def start_of_today(now: datetime) -> datetime:
    """Local midnight of the day containing ``now``."""
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def accumulate(records: Iterable[TranscriptRecord], today_start_ms: int) -> CostTotals:
    """Count messages and sum their costs.

    A message's cost is also today's cost when its timestamp lies strictly
    after ``today_start_ms``. Messages without a timestamp only count
    towards the lifetime total.
    """
    totals = CostTotals()
    for record in records:
        if not record.is_message:
            continue
        totals.message_count += 1
        if record.cost is None:
            continue
        totals.total_cost += record.cost
        if record.timestamp > today_start_ms:
            totals.today_cost += record.cost
    return totals
