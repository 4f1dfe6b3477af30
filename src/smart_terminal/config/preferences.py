"""Preference stores consulted by the target resolver."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping, Optional

from ..routing.classifier import classify
from .parser import DEFAULT_ENVIRONMENT, load_config


def _normalize_rules(rules: Mapping[str, str]) -> Dict[str, str]:
    # "Git.exe" in a config file should match the "git" class
    return {classify(key): value for key, value in rules.items() if classify(key)}


class InMemoryPreferenceStore:
    """Preference store backed by a plain dict."""

    def __init__(
        self,
        rules: Optional[Mapping[str, str]] = None,
        default_environment: str = DEFAULT_ENVIRONMENT,
    ):
        self.rules = _normalize_rules(rules or {})
        self.default_environment = default_environment

    def get_rule(self, command_class: str) -> Optional[str]:
        return self.rules.get(command_class)

    def get_default_environment_name(self) -> str:
        return self.default_environment


class FilePreferenceStore:
    """Preference store backed by the project's .smart-terminal.toml.

    The file is re-read on every call so edits made between two
    resolutions take effect immediately.
    """

    def __init__(self, project_path: Path):
        self.project_path = Path(project_path)

    def get_rule(self, command_class: str) -> Optional[str]:
        priority = load_config(self.project_path).terminal.priority
        return _normalize_rules(priority).get(command_class)

    def get_default_environment_name(self) -> str:
        return load_config(self.project_path).terminal.default
