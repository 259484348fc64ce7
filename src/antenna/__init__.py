"""antenna — read-only monitor for OpenClaw session transcripts."""

from antenna.client import AggregationClient
from antenna.models import DashboardData, HourlyBucket, SessionSummary

__all__ = ["AggregationClient", "DashboardData", "HourlyBucket", "SessionSummary"]
