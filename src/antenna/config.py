"""Configuration loader — reads optional YAML config and merges with defaults."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import yaml

CONFIG_PATH = Path("~/.config/antenna/config.yaml")

DEFAULTS = {
    "openclaw_dir": "~/.openclaw",
    "port": 3600,
    "host": "localhost",
}

# Environment overrides, as understood by the OpenClaw tooling.
ENV_OVERRIDES = {
    "OPENCLAW_DIR": "openclaw_dir",
    "PORT": "port",
}


@dataclass
class AntennaConfig:
    openclaw_dir: Path
    port: int
    host: str


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AntennaConfig:
    """Load config from ~/.config/antenna/config.yaml, merged with defaults.

    Non-empty OPENCLAW_DIR and PORT environment variables win over the file.
    Expand ~ in paths. If no config file exists, return defaults (don't error).
    """
    if config_path is None:
        config_path = CONFIG_PATH
    if environ is None:
        environ = os.environ

    config_path = config_path.expanduser()

    merged = dict(DEFAULTS)

    if config_path.is_file():
        with open(config_path) as f:
            user_config = yaml.safe_load(f)
        if isinstance(user_config, dict):
            for key in DEFAULTS:
                if key in user_config:
                    merged[key] = user_config[key]

    for env_name, key in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            merged[key] = value

    return AntennaConfig(
        openclaw_dir=Path(str(merged["openclaw_dir"])).expanduser(),
        port=int(merged["port"]),
        host=str(merged["host"]),
    )
