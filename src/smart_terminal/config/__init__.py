"""Configuration management for Smart Terminal."""

from .parser import (
    CONFIG_FILE_NAME,
    CustomTerminalConfig,
    SmartTerminalConfig,
    StatisticsConfig,
    TerminalConfig,
    find_config_file,
    load_config,
)
from .preferences import FilePreferenceStore, InMemoryPreferenceStore

__all__ = [
    "CONFIG_FILE_NAME",
    "SmartTerminalConfig",
    "TerminalConfig",
    "StatisticsConfig",
    "CustomTerminalConfig",
    "load_config",
    "find_config_file",
    "FilePreferenceStore",
    "InMemoryPreferenceStore",
]
