"""Session summarizer — one SessionSummary per transcript file.

The filesystem decides which sessions exist; the catalog, when it has an
entry, decides their label, model, kind and last-update time. A catalog
entry without a transcript is ignored.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from antenna.catalog import classify_kind, extract_cron_id
from antenna.cost import accumulate, start_of_today
from antenna.models import KIND_CRON, KIND_MAIN, CatalogEntry, SessionSummary
from antenna.parser import discover_transcripts, iter_transcript, session_id_for
from antenna.timeutil import MINUTE_MS, format_short, to_epoch_ms

logger = logging.getLogger(__name__)

ACTIVE_THRESHOLD_MS = 30 * MINUTE_MS


def is_active(updated_at: int, now_ms: int) -> bool:
    """A session is active when it was updated less than 30 minutes ago."""
    if updated_at <= 0:
        return False
    return now_ms - updated_at < ACTIVE_THRESHOLD_MS


def fallback_name(
    kind: str,
    session_id: str,
    updated_at: int,
    cron_name: str | None = None,
) -> str:
    """Display name for a session whose catalog entry has no label."""
    if kind == KIND_MAIN:
        return format_short(updated_at) or session_id[:12]
    if kind == KIND_CRON:
        if cron_name:
            return cron_name
        return "cron-" + session_id[:8]
    return session_id[:12]


def summarize_session(
    file_path: Path,
    catalog: dict[str, CatalogEntry],
    cron_names: dict[str, str],
    now: datetime,
) -> SessionSummary:
    """Build the summary for one transcript file."""
    file_path = Path(file_path)
    session_id = session_id_for(file_path)
    now_ms = to_epoch_ms(now)

    try:
        mtime_ms = file_path.stat().st_mtime_ns // 1_000_000
    except OSError as e:
        logger.debug("Could not stat %s: %s", file_path, e)
        mtime_ms = 0

    summary = SessionSummary(
        session_id=session_id,
        kind=KIND_MAIN,
        updated_at=mtime_ms,
        is_active=is_active(mtime_ms, now_ms),
    )

    entry = catalog.get(session_id)
    cron_name = None
    if entry is not None:
        summary.name = entry.label
        summary.model = entry.model
        summary.kind = classify_kind(entry.key)
        if entry.updated_at > 0:
            summary.updated_at = entry.updated_at
            summary.is_active = is_active(entry.updated_at, now_ms)
        cron_id = extract_cron_id(entry.key)
        if cron_id is not None:
            cron_name = cron_names.get(cron_id)

    if not summary.name:
        summary.name = fallback_name(summary.kind, session_id, summary.updated_at, cron_name)

    today_start_ms = to_epoch_ms(start_of_today(now))
    totals = accumulate(iter_transcript(file_path), today_start_ms)
    summary.message_count = totals.message_count
    summary.total_cost = totals.total_cost
    summary.today_cost = totals.today_cost

    return summary


def collect_sessions(
    sessions_dir: Path,
    catalog: dict[str, CatalogEntry],
    cron_names: dict[str, str],
    now: datetime,
) -> list[SessionSummary]:
    """Summarize every transcript in the sessions directory, newest first."""
    summaries = [
        summarize_session(path, catalog, cron_names, now)
        for path in discover_transcripts(sessions_dir)
    ]
    summaries.sort(key=lambda s: s.updated_at, reverse=True)
    return summaries
