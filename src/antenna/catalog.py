"""Catalog loaders — sessions.json and cron/jobs.json.

Both files are optional and may be mid-write when read. A missing,
unreadable or malformed file loads as an empty mapping.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path

from antenna.models import KIND_CRON, KIND_MAIN, KIND_SUBAGENT, CatalogEntry, CronJob

logger = logging.getLogger(__name__)

KEY_SEPARATOR = ":"


def _read_json(path: Path) -> object | None:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug("Could not load %s: %s", path, e)
        return None


def load_catalog(path: Path) -> dict[str, CatalogEntry]:
    """Load sessions.json and re-key it by session id.

    The file maps structured key -> entry. The structured key is kept on each
    CatalogEntry since it carries the session kind and cron job id.
    """
    data = _read_json(Path(path))
    if not isinstance(data, dict):
        return {}

    catalog: dict[str, CatalogEntry] = {}
    for key, raw in data.items():
        if not isinstance(raw, dict):
            continue
        session_id = raw.get("sessionId")
        if not isinstance(session_id, str) or not session_id:
            continue
        catalog[session_id] = CatalogEntry(
            session_id=session_id,
            key=key,
            updated_at=_int_field(raw, "updatedAt"),
            label=_str_field(raw, "label"),
            model=_str_field(raw, "model"),
            total_tokens=_int_field(raw, "totalTokens"),
        )
    return catalog


def load_cron_jobs(path: Path) -> list[CronJob]:
    """Load the job list from cron/jobs.json."""
    data = _read_json(Path(path))
    if not isinstance(data, dict):
        return []
    jobs = data.get("jobs")
    if not isinstance(jobs, list):
        return []

    result: list[CronJob] = []
    for raw in jobs:
        if not isinstance(raw, dict):
            continue
        job_id = raw.get("id")
        if not isinstance(job_id, str):
            continue
        result.append(CronJob(id=job_id, name=_str_field(raw, "name")))
    return result


def load_cron_names(path: Path) -> dict[str, str]:
    """Map cron job id -> human name."""
    return {job.id: job.name for job in load_cron_jobs(path)}


def classify_kind(key: str | None) -> str:
    """Derive the session kind from segment 2 of a structured key.

    'agent:main:cron:JOB' -> 'cron', 'agent:main:subagent:X' -> 'subagent',
    anything else (including no key) -> 'main'.
    """
    if not key:
        return KIND_MAIN
    parts = key.split(KEY_SEPARATOR)
    if len(parts) >= 3:
        if parts[2] == KIND_CRON:
            return KIND_CRON
        if parts[2] == KIND_SUBAGENT:
            return KIND_SUBAGENT
    return KIND_MAIN


def extract_cron_id(key: str | None) -> str | None:
    """Cron job id from 'agent:main:cron:<id>', or None."""
    if not key:
        return None
    parts = key.split(KEY_SEPARATOR)
    if len(parts) >= 4 and parts[2] == KIND_CRON and parts[3]:
        return parts[3]
    return None


def _str_field(raw: dict, name: str) -> str:
    value = raw.get(name)
    return value if isinstance(value, str) else ""


def _int_field(raw: dict, name: str) -> int:
    value = raw.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if not math.isfinite(value):
        return 0
    return int(value)
