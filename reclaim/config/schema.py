from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

_VALID_LOG_LEVELS: set[str] = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigError(ValueError):
    """A config value has the wrong shape."""


@dataclass(slots=True)
class AppConfig:
    update_service: str = "wuauserv"
    cleanup_utility: str = "cleanmgr.exe"
    additional_temp_paths: list[str] = field(default_factory=list)
    log_level: str = "WARNING"

    def to_dict(self) -> dict[str, Any]:
        return {
            "updateService": self.update_service,
            "cleanupUtility": self.cleanup_utility,
            "additionalTempPaths": self.additional_temp_paths,
            "logLevel": self.log_level,
        }


def known_keys() -> frozenset[str]:
    return frozenset(AppConfig().to_dict())


def _parse_log_level(value: Any, default: str) -> str:
    raw = str(value).upper()
    if raw in _VALID_LOG_LEVELS:
        return raw
    return default


def _name(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key} must be a non-empty string")
    return value.strip()


def _string_list(data: dict[str, Any], key: str, default: list[str]) -> list[str]:
    value = data.get(key, default)
    # A bare string would otherwise be iterated one character at a time.
    if not isinstance(value, list) or not all(isinstance(x, str) for x in value):
        raise ConfigError(f"{key} must be a list of strings")
    return list(value)


def from_dict(data: dict[str, Any], defaults: AppConfig) -> AppConfig:
    return AppConfig(
        update_service=_name(data, "updateService", defaults.update_service),
        cleanup_utility=_name(data, "cleanupUtility", defaults.cleanup_utility),
        additional_temp_paths=_string_list(
            data, "additionalTempPaths", defaults.additional_temp_paths
        ),
        log_level=_parse_log_level(data.get("logLevel", defaults.log_level), defaults.log_level),
    )
