"""Usage statistics for routed commands."""

from .collector import CommandRecord, ExecutionType, StatisticsCollector, UsageStatistics

__all__ = [
    "StatisticsCollector",
    "CommandRecord",
    "UsageStatistics",
    "ExecutionType",
]
