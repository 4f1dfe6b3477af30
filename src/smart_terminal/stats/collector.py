"""In-memory usage statistics for routed commands."""

from __future__ import annotations

import json
import time
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Literal, Optional

from ..routing.classifier import classify

ExecutionType = Literal["manual", "auto"]

MOST_USED_LIMIT = 20


@dataclass
class CommandRecord:
    """One executed command. Only the command class is kept, never arguments."""

    command_class: str
    environment: str
    execution_type: ExecutionType
    timestamp: float


@dataclass
class UsageStatistics:
    """Aggregate usage counters."""

    total_commands: int = 0
    commands_by_class: Dict[str, int] = field(default_factory=dict)
    environment_usage: Dict[str, int] = field(default_factory=dict)
    auto: int = 0
    manual: int = 0
    most_used: List[Dict[str, int | str]] = field(default_factory=list)
    last_updated: float = field(default_factory=time.time)


def _percentage(value: int, total: int) -> int:
    if total == 0:
        return 0
    return round(value / total * 100)


class StatisticsCollector:
    """Aggregates reports of ``(command, environment, manual|auto)``.

    Disabled collectors ignore every report. History is capped at
    ``max_history`` records, oldest dropped first.
    """

    def __init__(self, enabled: bool = False, max_history: int = 1000):
        self.enabled = enabled
        self.max_history = max_history
        self._history: List[CommandRecord] = []
        self._by_class: Counter[str] = Counter()
        self._by_environment: Counter[str] = Counter()
        self._by_execution: Counter[str] = Counter()
        self._last_updated = time.time()

    def record(
        self, command: str, environment: str, execution_type: ExecutionType
    ) -> Optional[CommandRecord]:
        """Record an executed command.

        Args:
            command: Command line as run; only its class is stored
            environment: Identity of the environment it ran in
            execution_type: "manual" if the user picked the environment,
                "auto" if the resolver did

        Returns:
            The stored record, or None when statistics are disabled

        Raises:
            ValueError: If execution_type is not "manual" or "auto"
        """
        if execution_type not in ("manual", "auto"):
            raise ValueError(
                f"execution_type must be 'manual' or 'auto', got {execution_type!r}"
            )
        if not self.enabled:
            return None

        record = CommandRecord(
            command_class=classify(command),
            environment=environment,
            execution_type=execution_type,
            timestamp=time.time(),
        )

        self._history.append(record)
        overflow = len(self._history) - max(self.max_history, 0)
        if overflow > 0:
            del self._history[:overflow]

        self._by_class[record.command_class] += 1
        self._by_environment[record.environment] += 1
        self._by_execution[record.execution_type] += 1
        self._last_updated = record.timestamp

        return record

    def get_statistics(self) -> UsageStatistics:
        """Snapshot of the aggregate counters."""
        return UsageStatistics(
            total_commands=sum(self._by_class.values()),
            commands_by_class=dict(self._by_class),
            environment_usage=dict(self._by_environment),
            auto=self._by_execution["auto"],
            manual=self._by_execution["manual"],
            most_used=[
                {"command": command_class, "count": count}
                for command_class, count in self._by_class.most_common(MOST_USED_LIMIT)
            ],
            last_updated=self._last_updated,
        )

    def get_history(self, limit: Optional[int] = None) -> List[CommandRecord]:
        """Recorded commands, oldest first; the last ``limit`` if given."""
        if limit is not None:
            if limit <= 0:
                return []
            return list(self._history[-limit:])
        return list(self._history)

    def clear(self) -> None:
        """Drop all statistics and history."""
        self._history = []
        self._by_class.clear()
        self._by_environment.clear()
        self._by_execution.clear()
        self._last_updated = time.time()

    def export_json(self) -> str:
        """Statistics and history as a JSON document."""
        return json.dumps(
            {
                "statistics": asdict(self.get_statistics()),
                "history": [asdict(r) for r in self._history],
            },
            indent=2,
        )

    def summary(self) -> str:
        """Plain-text usage report."""
        stats = self.get_statistics()
        total = stats.total_commands

        lines = [
            "📊 Smart Terminal - Usage Statistics",
            "",
            f"Total commands: {total}",
            f"Last updated: {time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(stats.last_updated))}",
            "",
            "🎯 Execution type:",
            f"  • Auto: {stats.auto} ({_percentage(stats.auto, total)}%)",
            f"  • Manual: {stats.manual} ({_percentage(stats.manual, total)}%)",
            "",
            "💻 Terminal usage:",
        ]
        for environment, count in self._by_environment.most_common():
            lines.append(f"  • {environment}: {count} ({_percentage(count, total)}%)")

        lines.append("")
        lines.append("📝 Most used command types:")
        for command_class, count in self._by_class.most_common(10):
            lines.append(f"  • {command_class}: {count} ({_percentage(count, total)}%)")

        return "\n".join(lines)
