"""End-to-end tests for AggregationClient over a temporary OpenClaw tree."""

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path

from antenna.client import AggregationClient
from antenna.timeutil import to_epoch_ms

NOW = datetime(2026, 6, 15, 15, 30, 0)


def _msg(when, cost=None):
    message = {"role": "assistant", "timestamp": to_epoch_ms(when)}
    if cost is not None:
        message["usage"] = {"cost": {"total": cost}}
    return {"type": "message", "message": message}


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_default_root(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert AggregationClient().root == tmp_path / ".openclaw"

    def test_paths(self, tmp_path):
        client = AggregationClient(tmp_path)
        assert client.sessions_dir == tmp_path / "agents" / "main" / "sessions"
        assert client.catalog_path == tmp_path / "agents" / "main" / "sessions" / "sessions.json"
        assert client.cron_path == tmp_path / "cron" / "jobs.json"

    def test_accepts_string_root(self, tmp_path):
        assert AggregationClient(str(tmp_path)).root == Path(tmp_path)


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


def test_empty_tree(client):
    data = client.get_dashboard()
    assert data.to_dict() == {"sessions": [], "totalCount": 0, "totalCost": 0, "todayCost": 0}

    buckets = client.get_hourly_activity()
    assert len(buckets) == 24
    assert all(b.messages == 0 and b.cost == 0 for b in buckets)
    assert buckets[0].hour == "16:00"
    assert buckets[-1].hour == "15:00"


def test_single_main_session_today(client, write_transcript):
    mtime = NOW - timedelta(minutes=2, seconds=30)
    write_transcript("a1b2c3d4e5f6g7h8", [_msg(NOW, 0.5)], mtime=mtime)

    data = client.get_dashboard()

    assert data.total_count == 1
    s = data.sessions[0]
    assert s.kind == "main"
    assert s.message_count == 1
    assert s.total_cost == 0.5
    assert s.today_cost == 0.5
    assert s.is_active is True
    assert s.name == "Jun 15 15:27"
    assert data.total_cost == 0.5
    assert data.today_cost == 0.5


def test_cron_session_resolved_by_name(client, write_transcript, write_catalog, write_cron_jobs):
    write_catalog({"agent:main:cron:JOB-123": {"sessionId": "S", "label": "", "totalTokens": 0}})
    write_cron_jobs([{"id": "JOB-123", "name": "Nightly Report", "enabled": True}])
    write_transcript("S", [])

    data = client.get_dashboard()

    assert len(data.sessions) == 1
    s = data.sessions[0]
    assert s.kind == "cron"
    assert s.name == "Nightly Report"
    assert s.message_count == 0
    assert s.total_cost == 0.0
    assert s.today_cost == 0.0


def test_cost_split_by_today(client, write_transcript):
    write_transcript("s", [
        _msg(NOW - timedelta(hours=48), 1.0),
        _msg(NOW - timedelta(hours=1), 2.0),
    ])
    s = client.get_dashboard().sessions[0]
    assert s.total_cost == 3.0
    assert s.today_cost == 2.0


def test_today_boundary_is_local_midnight(openclaw_root, write_transcript):
    early = datetime(2026, 6, 15, 0, 30, 0)
    write_transcript("s", [
        _msg(early - timedelta(hours=1), 2.0),
        _msg(early - timedelta(minutes=10), 1.0),
    ])
    client = AggregationClient(openclaw_root, clock=lambda: early)
    s = client.get_dashboard().sessions[0]
    assert s.total_cost == 3.0
    assert s.today_cost == 1.0


def test_malformed_lines_tolerated(client, write_transcript):
    write_transcript("s", [
        _msg(NOW - timedelta(minutes=3), 0.1),
        "not-json",
        _msg(NOW - timedelta(minutes=2), 0.2),
    ])
    s = client.get_dashboard().sessions[0]
    assert s.message_count == 2
    assert abs(s.total_cost - 0.3) < 1e-9


def test_histogram_bucketing(client, write_transcript):
    write_transcript("s1", [_msg(NOW - timedelta(hours=1.5), 0.1)])
    write_transcript("s2", [_msg(NOW - timedelta(hours=3.5), 0.2)])

    buckets = client.get_hourly_activity()

    assert [i for i, b in enumerate(buckets) if b.messages] == [20, 22]
    assert buckets[20].messages == 1
    assert buckets[22].messages == 1


def test_transcript_without_catalog_entry_listed_as_main(client, write_transcript, write_catalog):
    write_catalog({"agent:main:subagent:x": {"sessionId": "known"}})
    write_transcript("known", [])
    write_transcript("unknown", [])
    kinds = {s.session_id: s.kind for s in client.get_dashboard().sessions}
    assert kinds == {"known": "subagent", "unknown": "main"}


def test_malformed_catalog_treated_as_empty(client, write_transcript, sessions_dir):
    (sessions_dir / "sessions.json").write_text("{{{")
    write_transcript("s1", [])
    data = client.get_dashboard()
    assert [s.kind for s in data.sessions] == ["main"]


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------


def _populate(write_transcript, write_catalog, write_cron_jobs):
    write_catalog({
        "agent:main:main": {"sessionId": "m1", "label": "Main chat", "updatedAt": to_epoch_ms(NOW - timedelta(minutes=5))},
        "agent:main:cron:J1": {"sessionId": "c1"},
        "agent:main:subagent:x": {"sessionId": "sub1234567890", "updatedAt": to_epoch_ms(NOW - timedelta(days=2))},
    })
    write_cron_jobs([{"id": "J1", "name": "Digest"}])
    write_transcript("m1", [
        _msg(NOW - timedelta(hours=30), 0.8),
        _msg(NOW - timedelta(hours=2), 0.3),
        {"type": "session", "cwd": "/home"},
    ], mtime=NOW - timedelta(hours=1))
    write_transcript("c1", [_msg(NOW - timedelta(hours=6), 0.05)], mtime=NOW - timedelta(hours=6))
    write_transcript("sub1234567890", [_msg(NOW - timedelta(days=2), 1.25)])
    write_transcript("bare", [_msg(NOW - timedelta(minutes=1))], mtime=NOW - timedelta(days=10))


def test_dashboard_invariants(client, write_transcript, write_catalog, write_cron_jobs, sessions_dir):
    _populate(write_transcript, write_catalog, write_cron_jobs)

    data = client.get_dashboard()

    assert data.total_count == len(data.sessions) == 4
    assert sorted(s.session_id for s in data.sessions) == sorted(
        p.stem for p in sessions_dir.glob("*.jsonl")
    )
    assert abs(data.total_cost - sum(s.total_cost for s in data.sessions)) < 1e-9
    assert abs(data.today_cost - sum(s.today_cost for s in data.sessions)) < 1e-9
    for s in data.sessions:
        assert 0 <= s.today_cost <= s.total_cost
    updated = [s.updated_at for s in data.sessions]
    assert updated == sorted(updated, reverse=True)
    assert [s.session_id for s in data.sessions] == ["m1", "c1", "sub1234567890", "bare"]
    names = {s.session_id: s.name for s in data.sessions}
    assert names["m1"] == "Main chat"
    assert names["c1"] == "Digest"
    assert names["sub1234567890"] == "sub123456789"


def test_histogram_invariants(client, write_transcript, write_catalog, write_cron_jobs):
    _populate(write_transcript, write_catalog, write_cron_jobs)

    buckets = client.get_hourly_activity()

    assert len(buckets) == 24
    assert all(b.messages >= 0 and b.cost >= 0 for b in buckets)
    # m1 at -2h, c1 at -6h, bare at -1min; the -30h and -2d messages fall outside.
    assert sum(b.messages for b in buckets) == 3
    assert buckets[22].messages == 1
    assert buckets[18].messages == 1
    assert buckets[23].messages == 1


def test_repeated_calls_are_equal(client, write_transcript, write_catalog, write_cron_jobs):
    _populate(write_transcript, write_catalog, write_cron_jobs)
    assert client.get_dashboard() == client.get_dashboard()
    assert client.get_hourly_activity() == client.get_hourly_activity()


def test_catalog_updated_at_beyond_datetime_range(client, write_transcript, write_catalog):
    # Nanosecond values land past year 9999 when read as milliseconds.
    write_catalog({"agent:main:main": {"sessionId": "s1", "updatedAt": 253_402_300_800_000}})
    write_transcript("s1", [])
    data = client.get_dashboard()
    assert [s.session_id for s in data.sessions] == ["s1"]
    assert data.sessions[0].name == "s1"


def test_negative_costs_keep_today_within_total(client, write_transcript):
    write_transcript("s", [
        _msg(NOW - timedelta(seconds=1), -1.0),
        _msg(NOW - timedelta(minutes=1), 0.5),
    ])
    s = client.get_dashboard().sessions[0]
    assert s.message_count == 2
    assert 0 <= s.today_cost <= s.total_cost
    assert s.total_cost == 0.5
