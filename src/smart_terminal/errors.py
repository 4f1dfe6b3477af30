"""Errors raised by the resolution engine."""

from __future__ import annotations


class NoUsableEnvironment(RuntimeError):
    """Raised when a command must be resolved but no environment is usable."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(self._format_error_message(command))

    @staticmethod
    def _format_error_message(command: str) -> str:
        lines = [
            f"No usable terminal environment for command: {command!r}",
            "",
            "None of the known terminals were detected on this host.",
            "Install PowerShell, Git Bash or WSL, or register a custom",
            "terminal in .smart-terminal.toml:",
            "  [[terminal.custom]]",
            '  name = "My Shell"',
            '  path = "/path/to/shell"',
        ]
        return "\n".join(lines)
