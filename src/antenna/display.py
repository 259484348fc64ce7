"""Presentation helpers shared by the CLI and the JSON API."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from antenna.models import KIND_CRON, KIND_SUBAGENT, DashboardData, HourlyBucket, SessionSummary
from antenna.timeutil import DAY_MS, HOUR_MS, MINUTE_MS

SPARK_BLOCKS = "▁▂▃▄▅▆▇█"
MODEL_PREFIXES = ("anthropic/", "openai/")


@dataclass
class SessionGroups:
    """Sessions split the way the dashboard lays them out."""

    active: list[SessionSummary] = field(default_factory=list)
    idle: list[SessionSummary] = field(default_factory=list)
    subagents: list[SessionSummary] = field(default_factory=list)
    cron: list[SessionSummary] = field(default_factory=list)
    total_count: int = 0
    total_cost: float = 0.0
    today_cost: float = 0.0

    def to_dict(self) -> dict:
        return {
            "activeCount": len(self.active),
            "idleCount": len(self.idle),
            "subCount": len(self.subagents),
            "cronCount": len(self.cron),
            "totalCount": self.total_count,
            "totalCost": self.total_cost,
            "todayCost": self.today_cost,
        }


def group_sessions(data: DashboardData) -> SessionGroups:
    """Split into sub-agents, cron runs, and main sessions by activity."""
    groups = SessionGroups(
        total_count=data.total_count,
        total_cost=data.total_cost,
        today_cost=data.today_cost,
    )
    for s in data.sessions:
        if s.kind == KIND_SUBAGENT:
            groups.subagents.append(s)
        elif s.kind == KIND_CRON:
            groups.cron.append(s)
        elif s.is_active:
            groups.active.append(s)
        else:
            groups.idle.append(s)
    return groups


def time_ago(ms: int, now_ms: int) -> str:
    elapsed = now_ms - ms
    if elapsed < MINUTE_MS:
        return "just now"
    if elapsed < HOUR_MS:
        return f"{elapsed // MINUTE_MS}m ago"
    if elapsed < DAY_MS:
        return f"{elapsed // HOUR_MS}h ago"
    return f"{elapsed // DAY_MS}d ago"


def model_display(model: str) -> str:
    if not model:
        return "unknown"
    for prefix in MODEL_PREFIXES:
        if model.startswith(prefix):
            model = model[len(prefix):]
    return model


def format_cost(value: float) -> str:
    return f"${value:.2f}"


def sparkline(buckets: list[HourlyBucket], width: int = 48) -> str:
    """One block character per bucket, scaled to the busiest hour.

    Only the most recent ``width`` buckets are drawn.
    """
    if not buckets or width <= 0:
        return ""
    shown = buckets[-width:]
    peak = max(b.messages for b in shown)
    if peak == 0:
        return SPARK_BLOCKS[0] * len(shown)

    chars = []
    for b in shown:
        if b.messages <= 0:
            chars.append(SPARK_BLOCKS[0])
            continue
        idx = int(math.floor(b.messages / peak * (len(SPARK_BLOCKS) - 1) + 0.5))
        chars.append(SPARK_BLOCKS[idx])
    return "".join(chars)
