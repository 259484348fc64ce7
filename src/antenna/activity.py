"""Hourly activity histogram over the rolling last 24 hours."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from antenna.models import HourlyBucket
from antenna.parser import discover_transcripts, iter_transcript
from antenna.timeutil import HOUR_MS, format_hour, to_epoch_ms

HISTOGRAM_HOURS = 24


def empty_buckets(cutoff_ms: int) -> list[HourlyBucket]:
    """24 zeroed buckets; bucket i is labelled with the hour ending it."""
    return [
        HourlyBucket(hour=format_hour(cutoff_ms + (i + 1) * HOUR_MS))
        for i in range(HISTOGRAM_HOURS)
    ]


def bucket_index(timestamp: int, cutoff_ms: int, now_ms: int) -> int | None:
    """Bucket for a message timestamp, or None outside (cutoff, now]."""
    if timestamp <= 0 or timestamp <= cutoff_ms or timestamp > now_ms:
        return None
    index = (timestamp - cutoff_ms) // HOUR_MS
    return min(max(index, 0), HISTOGRAM_HOURS - 1)


def build_hourly_activity(sessions_dir: Path, now: datetime) -> list[HourlyBucket]:
    """Count messages and cost per hour across every transcript.

    The catalog plays no part here: every .jsonl file in the sessions
    directory is scanned, whatever its kind.
    """
    now_ms = to_epoch_ms(now)
    cutoff_ms = now_ms - HISTOGRAM_HOURS * HOUR_MS
    buckets = empty_buckets(cutoff_ms)

    for path in discover_transcripts(sessions_dir):
        for record in iter_transcript(path):
            if not record.is_message:
                continue
            index = bucket_index(record.timestamp, cutoff_ms, now_ms)
            if index is None:
                continue
            bucket = buckets[index]
            bucket.messages += 1
            if record.cost is not None:
                bucket.cost += record.cost

    return buckets
