"""Shared test fixtures for antenna tests."""

import json
import os
from datetime import datetime

import pytest

from antenna.client import AggregationClient

# Pinned "now" for every test that depends on the clock. Mid-June keeps the
# 24h window clear of daylight-saving transitions.
NOW = datetime(2026, 6, 15, 15, 30, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def openclaw_root(tmp_path):
    """Root of an OpenClaw state tree (not created until a writer needs it)."""
    return tmp_path / ".openclaw"


@pytest.fixture
def sessions_dir(openclaw_root):
    """The agents/main/sessions directory, created empty."""
    path = openclaw_root / "agents" / "main" / "sessions"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def write_transcript(sessions_dir):
    """Write <session_id>.jsonl from dicts (JSON-encoded) or raw strings.

    ``mtime`` pins the file's modification time.
    """

    def _write(session_id, records=(), mtime=None):
        path = sessions_dir / f"{session_id}.jsonl"
        lines = [r if isinstance(r, str) else json.dumps(r) for r in records]
        path.write_text("".join(line + "\n" for line in lines))
        if mtime is not None:
            ts = mtime.timestamp()
            os.utime(path, (ts, ts))
        return path

    return _write


@pytest.fixture
def write_catalog(sessions_dir):
    """Write sessions.json from a {structured key: entry} mapping."""

    def _write(entries):
        path = sessions_dir / "sessions.json"
        path.write_text(json.dumps(entries))
        return path

    return _write


@pytest.fixture
def write_cron_jobs(openclaw_root):
    """Write cron/jobs.json from a list of job dicts."""

    def _write(jobs):
        path = openclaw_root / "cron" / "jobs.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({"version": 1, "jobs": jobs}))
        return path

    return _write


@pytest.fixture
def client(openclaw_root):
    """AggregationClient over the temporary tree with the clock pinned to NOW."""
    return AggregationClient(openclaw_root, clock=lambda: NOW)
