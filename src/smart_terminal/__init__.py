"""Smart Terminal: routes shell commands to the most suitable terminal."""

from .environments import Environment, EnvironmentCategory, EnvironmentRegistry
from .errors import NoUsableEnvironment
from .routing import ResolutionResult, TargetResolver, classify

__version__ = "0.1.0"

__all__ = [
    "Environment",
    "EnvironmentCategory",
    "EnvironmentRegistry",
    "NoUsableEnvironment",
    "ResolutionResult",
    "TargetResolver",
    "classify",
]
