"""JSONL parser — reads OpenClaw session transcripts into TranscriptRecord objects."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterator
from pathlib import Path

from antenna.models import TranscriptRecord

logger = logging.getLogger(__name__)

TRANSCRIPT_SUFFIX = ".jsonl"


def parse_record(line: str) -> TranscriptRecord | None:
    """Parse one transcript line. Returns None for blank or malformed lines."""
    line = line.strip()
    if not line:
        return None
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        logger.debug("Skipping malformed transcript line: %s", e)
        return None
    if not isinstance(data, dict):
        return None

    record_type = data.get("type")
    if not isinstance(record_type, str):
        record_type = ""

    message = data.get("message")
    if not isinstance(message, dict):
        return TranscriptRecord(type=record_type)

    return TranscriptRecord(
        type=record_type,
        has_message=True,
        timestamp=_positive_ms(message.get("timestamp")),
        cost=_message_cost(message),
    )


def iter_transcript(file_path: Path) -> Iterator[TranscriptRecord]:
    """Yield every parseable record of a transcript file.

    An unreadable file yields nothing. The file is read whole before parsing
    so a transcript being appended to is seen at a single point in time.
    """
    file_path = Path(file_path)
    try:
        text = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Could not read transcript %s: %s", file_path, e)
        return

    for line in text.split("\n"):
        record = parse_record(line)
        if record is not None:
            yield record


def discover_transcripts(sessions_dir: Path) -> list[Path]:
    """Find the transcript files directly inside the sessions directory.

    Only regular files ending in .jsonl count (sessions.json is thereby
    excluded). Results are sorted by name and unique by session id.
    """
    sessions_dir = Path(sessions_dir)
    try:
        entries = sorted(sessions_dir.iterdir())
    except OSError as e:
        logger.debug("Could not list sessions directory %s: %s", sessions_dir, e)
        return []

    results: list[Path] = []
    seen: set[str] = set()
    for entry in entries:
        if not entry.name.endswith(TRANSCRIPT_SUFFIX):
            continue
        try:
            if not entry.is_file():
                continue
        except OSError:
            continue
        session_id = session_id_for(entry)
        if session_id in seen:
            continue
        seen.add(session_id)
        results.append(entry)
    return results


def session_id_for(file_path: Path) -> str:
    """'abc123.jsonl' -> 'abc123'"""
    return Path(file_path).name[: -len(TRANSCRIPT_SUFFIX)]


def _positive_ms(value: object) -> int:
    if not _is_number(value):
        return 0
    return int(value) if value > 0 else 0


def _message_cost(message: dict) -> float | None:
    """message.usage.cost.total, or None when usage or cost is missing.

    A missing, non-numeric or negative total counts as 0.0.
    """
    usage = message.get("usage")
    if not isinstance(usage, dict):
        return None
    cost = usage.get("cost")
    if not isinstance(cost, dict):
        return None
    total = cost.get("total")
    if not _is_number(total) or total < 0:
        return 0.0
    return float(total)


def _is_number(value: object) -> bool:
    """Finite int or float; json.loads also yields NaN and Infinity."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
