"""AggregationClient — the single entry point front-ends read from.

The client holds nothing but the state-tree root and a clock. Every call
re-scans the tree, so two front-ends (or two threads) can share one client.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from antenna.activity import build_hourly_activity
from antenna.catalog import load_catalog, load_cron_names
from antenna.models import DashboardData, HourlyBucket
from antenna.sessions import collect_sessions


def default_root() -> Path:
    """$HOME/.openclaw"""
    return Path(os.environ.get("HOME", "~")).expanduser() / ".openclaw"


class AggregationClient:
    """Reads OpenClaw session data directly from the state tree.

    Args:
        root: The OpenClaw state directory. Defaults to ``$HOME/.openclaw``.
        clock: Zero-argument callable returning the current local time.
            Tests pass a fixed clock; defaults to ``datetime.now``.
    """

    def __init__(
        self,
        root: Path | str | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.root = Path(root).expanduser() if root else default_root()
        self._clock = clock or datetime.now

    @property
    def sessions_dir(self) -> Path:
        return self.root / "agents" / "main" / "sessions"

    @property
    def catalog_path(self) -> Path:
        return self.sessions_dir / "sessions.json"

    @property
    def cron_path(self) -> Path:
        return self.root / "cron" / "jobs.json"

    def get_dashboard(self) -> DashboardData:
        """All sessions, newest first, with lifetime and today cost totals."""
        now = self._clock()
        catalog = load_catalog(self.catalog_path)
        cron_names = load_cron_names(self.cron_path)
        sessions = collect_sessions(self.sessions_dir, catalog, cron_names, now)
        return DashboardData.from_sessions(sessions)

    def get_hourly_activity(self) -> list[HourlyBucket]:
        """24 hourly buckets covering (now - 24h, now], oldest first."""
        return build_hourly_activity(self.sessions_dir, self._clock())
