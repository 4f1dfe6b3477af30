"""Configuration file parser for Smart Terminal."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python 3.10

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".smart-terminal.toml"
DEFAULT_ENVIRONMENT = "PowerShell"
DEFAULT_ENVIRONMENT_ENV = "SMART_TERMINAL_DEFAULT"


@dataclass
class CustomTerminalConfig:
    """A user-defined terminal."""

    name: str
    path: str
    args: List[str] = field(default_factory=list)


@dataclass
class TerminalConfig:
    """Terminal selection configuration."""

    default: str = DEFAULT_ENVIRONMENT
    auto_detect_on_startup: bool = True
    show_recommendations: bool = True
    auto_run_confirmation: bool = True
    probe_timeout_ms: int = 3000
    # Command class -> environment name or category keyword
    priority: Dict[str, str] = field(default_factory=dict)
    custom: List[CustomTerminalConfig] = field(default_factory=list)


@dataclass
class StatisticsConfig:
    """Usage statistics configuration."""

    enabled: bool = False
    max_history: int = 1000


@dataclass
class SmartTerminalConfig:
    """Complete Smart Terminal configuration."""

    terminal: TerminalConfig = field(default_factory=TerminalConfig)
    statistics: StatisticsConfig = field(default_factory=StatisticsConfig)

    # Project root the config was loaded from
    project_root: Path = field(default_factory=Path.cwd)

    @property
    def probe_timeout(self) -> float:
        """Per-probe timeout in seconds."""
        return self.terminal.probe_timeout_ms / 1000

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view of the configuration."""
        return {
            "project_root": str(self.project_root),
            "terminal": {
                "default": self.terminal.default,
                "auto_detect_on_startup": self.terminal.auto_detect_on_startup,
                "show_recommendations": self.terminal.show_recommendations,
                "auto_run_confirmation": self.terminal.auto_run_confirmation,
                "probe_timeout_ms": self.terminal.probe_timeout_ms,
                "priority": dict(self.terminal.priority),
                "custom": [
                    {"name": c.name, "path": c.path, "args": list(c.args)}
                    for c in self.terminal.custom
                ],
            },
            "statistics": {
                "enabled": self.statistics.enabled,
                "max_history": self.statistics.max_history,
            },
        }


def find_config_file(project_path: Path) -> Optional[Path]:
    """Find .smart-terminal.toml in project root.

    Args:
        project_path: Root path of the project

    Returns:
        Path to the config file if found, None otherwise
    """
    config_file = Path(project_path) / CONFIG_FILE_NAME
    if config_file.exists():
        return config_file
    return None


def _typed(data: Dict[str, Any], key: str, expected: type, default: Any) -> Any:
    """Read ``key`` from ``data``, falling back to ``default`` on a type mismatch."""
    value = data.get(key, default)
    # bool is an int subclass; don't accept it where an int is expected
    if expected is int and isinstance(value, bool):
        value = None
    if not isinstance(value, expected):
        logger.warning(
            f"Ignoring {key}={value!r} in {CONFIG_FILE_NAME}: "
            f"expected {expected.__name__}"
        )
        return default
    return value


def _parse_priority(raw: Any) -> Dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    priority = {}
    for command_class, target in raw.items():
        if isinstance(target, str):
            priority[str(command_class)] = target
        else:
            logger.warning(f"Ignoring non-string priority for {command_class!r}")
    return priority


def _parse_custom(raw: Any) -> List[CustomTerminalConfig]:
    if not isinstance(raw, list):
        return []
    customs = []
    for entry in raw:
        if not isinstance(entry, dict) or not entry.get("name") or not entry.get("path"):
            logger.warning(f"Ignoring custom terminal without name and path: {entry!r}")
            continue
        args = entry.get("args", [])
        customs.append(
            CustomTerminalConfig(
                name=str(entry["name"]),
                path=str(entry["path"]),
                args=[str(a) for a in args] if isinstance(args, list) else [],
            )
        )
    return customs


def load_config(project_path: Path) -> SmartTerminalConfig:
    """Load configuration from .smart-terminal.toml or use defaults.

    The ``SMART_TERMINAL_DEFAULT`` environment variable, when set,
    overrides the default terminal.

    Args:
        project_path: Root path of the project

    Returns:
        SmartTerminalConfig with loaded or default configuration
    """
    config = SmartTerminalConfig(project_root=Path(project_path))

    config_file = find_config_file(project_path)
    if config_file:
        try:
            with open(config_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            # If TOML parsing fails, use defaults
            logger.warning(f"Could not read {config_file}: {e}")
            data = {}

        _apply(config, data)

    env_default = os.getenv(DEFAULT_ENVIRONMENT_ENV)
    if env_default:
        config.terminal.default = env_default

    return config


def _apply(config: SmartTerminalConfig, data: Dict[str, Any]) -> None:
    """Apply parsed TOML data onto a default configuration."""
    # Parse terminal config
    terminal_data = data.get("terminal", {})
    if isinstance(terminal_data, dict):
        terminal = config.terminal
        terminal.default = _typed(terminal_data, "default", str, terminal.default)
        terminal.auto_detect_on_startup = _typed(
            terminal_data, "auto_detect_on_startup", bool, True
        )
        terminal.show_recommendations = _typed(
            terminal_data, "show_recommendations", bool, True
        )
        terminal.auto_run_confirmation = _typed(
            terminal_data, "auto_run_confirmation", bool, True
        )
        terminal.probe_timeout_ms = _typed(terminal_data, "probe_timeout_ms", int, 3000)

        # TOML sections use dotted keys: [terminal.priority] creates a nested dict
        terminal.priority = _parse_priority(terminal_data.get("priority", {}))
        terminal.custom = _parse_custom(terminal_data.get("custom", []))

    # Parse statistics config
    stats_data = data.get("statistics", {})
    if isinstance(stats_data, dict):
        config.statistics.enabled = _typed(stats_data, "enabled", bool, False)
        config.statistics.max_history = _typed(stats_data, "max_history", int, 1000)
