from __future__ import annotations

import json
import ntpath
import os
from collections.abc import Mapping
from dataclasses import dataclass

from result import Err, Ok, Result

from reclaim.config.defaults import default_config
from reclaim.config.schema import AppConfig, ConfigError, from_dict, known_keys
from reclaim.services.fs import DEFAULT_FS, FileSystem

FALLBACK_CONFIG_PATH = "~/.config/reclaim/config.json"


@dataclass(slots=True, frozen=True)
class LoadedConfig:
    config: AppConfig
    # None when no config file exists and defaults are in use.
    path: str | None = None
    ignored_keys: tuple[str, ...] = ()


def default_config_path(fs: FileSystem = DEFAULT_FS, env: Mapping[str, str] | None = None) -> str:
    """``%APPDATA%\\reclaim\\config.json``, or ``~/.config`` where APPDATA is unset."""
    env = os.environ if env is None else env
    appdata = env.get("APPDATA")
    if appdata:
        return ntpath.join(appdata, "reclaim", "config.json")
    return fs.expanduser(FALLBACK_CONFIG_PATH)


def load_config(
    path: str | None = None,
    fs: FileSystem = DEFAULT_FS,
    env: Mapping[str, str] | None = None,
) -> Result[LoadedConfig, str]:
    resolved = path or default_config_path(fs, env)
    if not fs.exists(resolved):
        if path is not None:
            return Err(f"Config file {resolved} does not exist.")
        return Ok(LoadedConfig(config=default_config()))

    try:
        payload = json.loads(fs.read_text(resolved))
    except OSError as exc:
        return Err(f"Cannot read config at {resolved}: {exc}.")
    except json.JSONDecodeError as exc:
        return Err(f"Config at {resolved} is not valid JSON: {exc}.")
    if not isinstance(payload, dict):
        return Err(f"Config at {resolved} must be a JSON object.")

    try:
        config = from_dict(payload, default_config())
    except ConfigError as exc:
        return Err(f"Invalid config at {resolved}: {exc}.")
    ignored = tuple(sorted(set(payload) - known_keys()))
    return Ok(LoadedConfig(config=config, path=resolved, ignored_keys=ignored))


def sample_config_json() -> str:
    return json.dumps(default_config().to_dict(), indent=2)
