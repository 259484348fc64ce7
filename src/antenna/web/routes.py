"""Route handlers — each request re-reads the state tree through AggregationClient."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from antenna.client import AggregationClient
from antenna.display import group_sessions

bp = Blueprint("api", __name__, url_prefix="/api")


def _client() -> AggregationClient:
    return AggregationClient(
        current_app.config["OPENCLAW_DIR"],
        clock=current_app.config["CLOCK"],
    )


@bp.route("/dashboard")
def dashboard():
    """Sessions plus totals."""
    return jsonify(_client().get_dashboard().to_dict())


@bp.route("/sessions")
def sessions():
    """Session list only, newest first."""
    data = _client().get_dashboard()
    return jsonify([s.to_dict() for s in data.sessions])


@bp.route("/summary")
def summary():
    """Session counts by group and cost totals."""
    return jsonify(group_sessions(_client().get_dashboard()).to_dict())


@bp.route("/hourly")
def hourly():
    """24 hourly buckets, oldest first."""
    return jsonify([b.to_dict() for b in _client().get_hourly_activity()])
