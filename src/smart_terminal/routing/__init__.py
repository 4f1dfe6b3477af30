"""Command classification and target resolution."""

from .classifier import classify
from .resolver import TargetResolver
from .rules import BUILTIN_RULES, RULE_GROUPS, category_for_name, default_category
from .types import PreferenceStore, ResolutionResult

__all__ = [
    "TargetResolver",
    "ResolutionResult",
    "PreferenceStore",
    "classify",
    "category_for_name",
    "default_category",
    "BUILTIN_RULES",
    "RULE_GROUPS",
]
