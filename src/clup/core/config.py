"""clup configuration management.

Credentials are read from ~/.clup/config.json, then ./.clup.json in the
current directory, then the CLICKUP_API_TOKEN / CLICKUP_TEAM_ID environment
variables; each later source overrides the earlier ones.
"""

import os
from pathlib import Path

import orjson

from clup.core.session import Credentials

TOKEN_ENV = "CLICKUP_API_TOKEN"
TEAM_ENV = "CLICKUP_TEAM_ID"
LOCAL_CONFIG_NAME = ".clup.json"


def get_clup_dir() -> Path:
    """Get clup's per-user directory."""
    return Path.home() / ".clup"


def get_config_path() -> Path:
    """Get the path to the per-user config file."""
    return get_clup_dir() / "config.json"


def get_local_config_path() -> Path:
    """Get the path to the current directory's override file."""
    return Path.cwd() / LOCAL_CONFIG_NAME


def read_config(config_path: Path | None = None) -> dict:
    """Read a config file, returning empty dict if missing or unreadable."""
    if config_path is None:
        config_path = get_config_path()
    if not config_path.exists():
        return {}
    try:
        content = config_path.read_bytes()
        data = orjson.loads(content) if content else {}
    except (orjson.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def write_config(config: dict) -> None:
    """Write the per-user config, readable by the owner only."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_bytes(orjson.dumps(config, option=orjson.OPT_INDENT_2))
    config_path.chmod(0o600)


def load_credentials() -> Credentials:
    """Load credentials from all sources.

    Returns:
        Credentials with empty strings for anything not configured.
    """
    merged: dict[str, str] = {}
    for path in (get_config_path(), get_local_config_path()):
        config = read_config(path)
        for key in ("api_token", "team_id"):
            if config.get(key):
                merged[key] = str(config[key])

    if token := os.environ.get(TOKEN_ENV):
        merged["api_token"] = token
    if team_id := os.environ.get(TEAM_ENV):
        merged["team_id"] = team_id

    return Credentials(
        api_token=merged.get("api_token", ""),
        team_id=merged.get("team_id", ""),
    )


def save_credentials(credentials: Credentials) -> None:
    """Persist credentials to the per-user config, keeping other keys."""
    config = read_config()
    config["api_token"] = credentials.api_token
    config["team_id"] = credentials.team_id
    write_config(config)
