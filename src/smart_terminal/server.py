from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .config import FilePreferenceStore, SmartTerminalConfig, load_config
from .environments import DetectionResult, EnvironmentRegistry
from .routing import ResolutionResult, TargetResolver
from .stats import CommandRecord, ExecutionType, StatisticsCollector


class SmartTerminalServer:
    """Facade wiring discovery, preferences, resolution and statistics.

    Configuration is re-read on every detection and resolution so edits
    to .smart-terminal.toml apply without a restart. Detected terminals
    are never cached between calls.
    """

    def __init__(self, project_path: Optional[str] = None) -> None:
        self.project_path = Path(project_path or os.getcwd())

        config = load_config(self.project_path)
        self.preferences = FilePreferenceStore(self.project_path)
        self.resolver = TargetResolver(self.preferences)
        self.statistics = StatisticsCollector(
            enabled=config.statistics.enabled,
            max_history=config.statistics.max_history,
        )

    def get_config(self) -> SmartTerminalConfig:
        return load_config(self.project_path)

    async def detect_environments(self) -> DetectionResult:
        config = self.get_config()
        registry = EnvironmentRegistry(probe_timeout=config.probe_timeout)
        return await registry.detect(config.terminal.custom)

    async def recommend(self, command: str) -> ResolutionResult:
        """Detect terminals and resolve ``command`` against the usable ones.

        Raises:
            NoUsableEnvironment: If no terminal is usable on this host
        """
        detection = await self.detect_environments()
        return self.resolver.resolve_with_reason(command, detection.available)

    def requires_specific_environment(self, command: str) -> bool:
        return self.resolver.requires_specific_environment(command)

    def record_execution(
        self, command: str, environment: str, execution_type: ExecutionType
    ) -> Optional[CommandRecord]:
        return self.statistics.record(command, environment, execution_type)
