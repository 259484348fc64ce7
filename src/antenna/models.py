"""Shared data models — the contract between the aggregation core and its consumers.

Loaders and the parser produce CatalogEntry, CronJob and TranscriptRecord.
The summarizer and histogram builder turn them into SessionSummary and
HourlyBucket values, which front-ends serialize with ``to_dict()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

KIND_MAIN = "main"
KIND_CRON = "cron"
KIND_SUBAGENT = "subagent"


@dataclass
class TranscriptRecord:
    """One parsed line of a session transcript."""

    type: str
    has_message: bool = False
    timestamp: int = 0  # epoch ms, 0 when absent or non-positive
    cost: float | None = None  # message.usage.cost.total

    @property
    def is_message(self) -> bool:
        return self.type == "message" and self.has_message


@dataclass
class CatalogEntry:
    """A sessions.json entry, re-keyed by session id."""

    session_id: str
    key: str  # structured key, e.g. "agent:main:cron:<job-id>"
    updated_at: int = 0
    label: str = ""
    model: str = ""
    total_tokens: int = 0


@dataclass
class CronJob:
    id: str
    name: str


@dataclass
class SessionSummary:
    """Dashboard row for a single transcript file."""

    session_id: str
    name: str = ""
    kind: str = KIND_MAIN
    model: str = ""
    message_count: int = 0
    total_cost: float = 0.0
    today_cost: float = 0.0
    updated_at: int = 0  # epoch ms
    is_active: bool = False

    def to_dict(self) -> dict:
        return {
            "sessionId": self.session_id,
            "name": self.name,
            "kind": self.kind,
            "model": self.model,
            "messageCount": self.message_count,
            "totalCost": self.total_cost,
            "todayCost": self.today_cost,
            "updatedAt": self.updated_at,
            "isActive": self.is_active,
        }


@dataclass
class DashboardData:
    """Full dashboard response: sessions newest first plus totals."""

    sessions: list[SessionSummary] = field(default_factory=list)
    total_count: int = 0
    total_cost: float = 0.0
    today_cost: float = 0.0

    @classmethod
    def from_sessions(cls, sessions: list[SessionSummary]) -> DashboardData:
        return cls(
            sessions=sessions,
            total_count=len(sessions),
            total_cost=sum(s.total_cost for s in sessions),
            today_cost=sum(s.today_cost for s in sessions),
        )

    def to_dict(self) -> dict:
        return {
            "sessions": [s.to_dict() for s in self.sessions],
            "totalCount": self.total_count,
            "totalCost": self.total_cost,
            "todayCost": self.today_cost,
        }


@dataclass
class HourlyBucket:
    """Activity in one hour of the rolling 24h window."""

    hour: str  # "HH:00" local time
    messages: int = 0
    cost: float = 0.0

    def to_dict(self) -> dict:
        return {"hour": self.hour, "messages": self.messages, "cost": self.cost}
