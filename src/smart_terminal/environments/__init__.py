"""Terminal environment catalog, discovery and ranking."""

from .ranking import dedupe, find_by_category, find_by_identity, recommend
from .registry import EnvironmentRegistry
from .specs import CATEGORY_PRIORITY, ENVIRONMENT_CATALOG, EnvironmentSpec
from .types import DetectionResult, Environment, EnvironmentCategory

__all__ = [
    "EnvironmentRegistry",
    "Environment",
    "EnvironmentCategory",
    "EnvironmentSpec",
    "DetectionResult",
    "ENVIRONMENT_CATALOG",
    "CATEGORY_PRIORITY",
    "dedupe",
    "recommend",
    "find_by_identity",
    "find_by_category",
]
