"""
Configuration loading.

Layers, lowest first:
    built-in defaults -> [tool.exswallow] in pyproject.toml (or --config file) -> CLI flags
"""
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable

from .data_structures import DEFAULT_ACCEPTABLE_CALLS, RuleConfiguration

logger = logging.getLogger(__name__)

PRIORITIES = ("high", "normal", "low")

_KNOWN_KEYS = {
    "acceptable_calls",
    "extend_acceptable_calls",
    "skip_test_files",
    "exclude",
    "priority",
}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class HostSettings:
    """Settings the host applies around the rule; the rule never sees these."""

    exclude: tuple[str, ...] = ()
    priority: str = "high"


@dataclass(frozen=True)
class LoadedConfig:
    rule: RuleConfiguration
    settings: HostSettings
    source: Path | None = None


def find_pyproject(start: str | Path) -> Path | None:
    """Nearest pyproject.toml at or above start that has a [tool.exswallow] table."""
    current = Path(start).resolve()
    if current.is_file():
        current = current.parent

    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file() and _tool_table(_read_toml(candidate)) is not None:
            return candidate
    return None


def load_config(path: str | Path | None = None, start_dir: str | Path = ".") -> LoadedConfig:
    """
    Resolve configuration.

    With an explicit path the file must exist; its settings may sit at the
    top level or under [tool.exswallow]. Without one, pyproject.toml files
    are searched upward from start_dir; if none is found the defaults apply.
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        raw = _read_toml(config_path)
        table = _tool_table(raw)
        if table is None:
            table = raw
    else:
        config_path = find_pyproject(start_dir)
        if config_path is None:
            logger.debug("No [tool.exswallow] configuration found, using defaults")
            return LoadedConfig(rule=RuleConfiguration(), settings=HostSettings())
        table = _tool_table(_read_toml(config_path))

    logger.debug("Loading configuration from %s", config_path)
    rule, settings = parse_table(table)
    return LoadedConfig(rule=rule, settings=settings, source=config_path)


def parse_table(raw: Any) -> tuple[RuleConfiguration, HostSettings]:
    if not isinstance(raw, dict):
        raise ConfigError("exswallow configuration must be a table")

    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    calls = list(DEFAULT_ACCEPTABLE_CALLS)
    if "acceptable_calls" in raw:
        calls = _ensure_string_list(raw["acceptable_calls"], "acceptable_calls")
    calls = merge_calls(calls, _ensure_string_list(raw.get("extend_acceptable_calls", []), "extend_acceptable_calls"))

    skip_test_files = raw.get("skip_test_files", True)
    if not isinstance(skip_test_files, bool):
        raise ConfigError("'skip_test_files' must be a boolean")

    rule = RuleConfiguration(acceptable_calls=tuple(calls), skip_test_files=skip_test_files)
    settings = HostSettings(
        exclude=tuple(_ensure_string_list(raw.get("exclude", []), "exclude")),
        priority=_ensure_priority(raw.get("priority", "high")),
    )
    return rule, settings


def apply_overrides(
    loaded: LoadedConfig,
    extra_calls: Iterable[str] = (),
    skip_test_files: bool | None = None,
    exclude: Iterable[str] = (),
) -> LoadedConfig:
    """Layer command line flags over a loaded configuration."""
    rule = loaded.rule
    calls = merge_calls(rule.acceptable_calls, extra_calls)
    rule = RuleConfiguration(
        acceptable_calls=tuple(calls),
        skip_test_files=rule.skip_test_files if skip_test_files is None else skip_test_files,
    )
    settings = replace(loaded.settings, exclude=loaded.settings.exclude + tuple(exclude))
    return replace(loaded, rule=rule, settings=settings)


def merge_calls(base: Iterable[str], extra: Iterable[str]) -> list[str]:
    """Append extra to base keeping first-seen order and dropping duplicates."""
    merged: list[str] = []
    for name in (*base, *extra):
        if name not in merged:
            merged.append(name)
    return merged


def _read_toml(path: Path) -> dict:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc


def _tool_table(raw: dict) -> Any:
    tool = raw.get("tool")
    if not isinstance(tool, dict):
        return None
    return tool.get("exswallow")


def _ensure_string_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list of strings")
    out: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(f"'{key}' must contain only non-empty strings")
        out.append(item.strip())
    return out


def _ensure_priority(value: Any) -> str:
    if value not in PRIORITIES:
        raise ConfigError(f"'priority' must be one of: {', '.join(PRIORITIES)}")
    return value
