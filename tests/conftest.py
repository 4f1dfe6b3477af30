"""Pytest configuration and shared fixtures."""

from typing import Callable, List

import pytest

from smart_terminal.environments import Environment, EnvironmentCategory


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's shell settings out of config tests."""
    monkeypatch.delenv("SMART_TERMINAL_DEFAULT", raising=False)
    monkeypatch.delenv("SMART_TERMINAL_PROJECT_PATH", raising=False)


@pytest.fixture
def make_env() -> Callable[..., Environment]:
    """Factory for usable environments with sensible defaults."""

    def _make(
        identity: str,
        category: EnvironmentCategory,
        handle: str = "",
        usable: bool = True,
    ) -> Environment:
        return Environment(
            identity=identity,
            handle=handle or f"/opt/{identity.lower().replace(' ', '-')}",
            category=category,
            usable=usable,
        )

    return _make


@pytest.fixture
def windows_environments(make_env) -> List[Environment]:
    """A typical Windows host: every built-in kind is usable.

    Order mirrors the catalog: PowerShell, Command Prompt, Git Bash, WSL.
    """
    return [
        make_env("PowerShell", EnvironmentCategory.POWERSHELL),
        make_env("Command Prompt", EnvironmentCategory.CMD),
        make_env("Git Bash", EnvironmentCategory.BASH),
        make_env("WSL", EnvironmentCategory.WSL),
    ]
