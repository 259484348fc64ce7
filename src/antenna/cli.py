"""CLI entrypoint — antenna dashboard, antenna hourly, antenna serve."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

import click
import yaml

from antenna.client import AggregationClient
from antenna.config import load_config
from antenna.display import format_cost, group_sessions, model_display, sparkline, time_ago
from antenna.timeutil import to_epoch_ms


@click.group()
@click.option("--root", type=click.Path(path_type=Path), default=None,
              help="OpenClaw state directory (default: ~/.openclaw).")
@click.option("--verbose", "-v", is_flag=True, help="Log skipped files and lines.")
@click.pass_context
def cli(ctx, root: Path | None, verbose: bool):
    """antenna — monitor OpenClaw sessions, costs and activity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        config = load_config()
    except (ValueError, OSError, yaml.YAMLError) as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        raise SystemExit(1)
    if root is not None:
        config.openclaw_dir = root.expanduser()
    ctx.obj = config


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the raw dashboard JSON.")
@click.pass_obj
def dashboard(config, as_json: bool):
    """List sessions with message counts and costs."""
    client = AggregationClient(config.openclaw_dir)
    data = client.get_dashboard()

    if as_json:
        click.echo(json.dumps(data.to_dict(), indent=2))
        return

    if not data.sessions:
        click.echo(f"No sessions found in {client.sessions_dir}")
        return

    now_ms = to_epoch_ms(datetime.now())
    groups = group_sessions(data)
    click.echo(
        f"{data.total_count} sessions "
        f"({len(groups.active)} active, {len(groups.subagents)} sub-agents, "
        f"{len(groups.cron)} cron). "
        f"Today: {format_cost(data.today_cost)}. Total: {format_cost(data.total_cost)}."
    )
    click.echo("")
    for s in data.sessions:
        status = "●" if s.is_active else "○"
        click.echo(
            f"  {status} {s.name[:28]:<28} {s.kind:<8} {model_display(s.model)[:24]:<24} "
            f"{s.message_count:>6} msgs  {format_cost(s.today_cost):>8} today  "
            f"{format_cost(s.total_cost):>9} total  {time_ago(s.updated_at, now_ms)}"
        )


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the raw bucket JSON.")
@click.pass_obj
def hourly(config, as_json: bool):
    """Show message volume and cost for each of the last 24 hours."""
    client = AggregationClient(config.openclaw_dir)
    buckets = client.get_hourly_activity()

    if as_json:
        click.echo(json.dumps([b.to_dict() for b in buckets], indent=2))
        return

    click.echo(f"24h activity  {sparkline(buckets)}")
    click.echo("")
    for b in buckets:
        click.echo(f"  {b.hour}  {b.messages:>6} msgs  {format_cost(b.cost):>8}")


@cli.command()
@click.option("--port", default=None, type=int, help="Port to serve on (default: 3600).")
@click.pass_obj
def serve(config, port: int | None):
    """Start the read-only JSON API."""
    serve_port = port or config.port

    click.echo(f"Serving {config.openclaw_dir} at http://{config.host}:{serve_port}")
    click.echo("Press Ctrl+C to stop.")

    from antenna.web.app import create_app

    app = create_app(config)
    app.run(host=config.host, port=serve_port)
