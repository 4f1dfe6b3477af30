"""Deduplication and ranking of discovered environments."""

from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .specs import CATEGORY_PRIORITY
from .types import Environment, EnvironmentCategory


def dedupe(environments: Iterable[Environment]) -> List[Environment]:
    """Drop environments that share a (category, handle) pair.

    The first occurrence wins and input order is otherwise preserved, so
    applying this twice gives the same result as applying it once.
    """
    seen: Set[Tuple[EnvironmentCategory, str]] = set()
    unique = []
    for env in environments:
        key = (env.category, env.handle)
        if key in seen:
            continue
        seen.add(key)
        unique.append(env)
    return unique


def recommend(
    environments: Sequence[Environment],
    priority: Sequence[EnvironmentCategory] = CATEGORY_PRIORITY,
) -> List[Environment]:
    """Pick one usable environment per category in priority order.

    Args:
        environments: Candidates, typically the output of a detection pass
        priority: Category order; categories not listed are never recommended

    Returns:
        At most one environment per category, skipping categories with
        no usable representative
    """
    recommendations = []
    for category in priority:
        env = find_by_category(
            category, [e for e in environments if e.usable]
        )
        if env is not None:
            recommendations.append(env)
    return recommendations


def find_by_identity(
    identity: str, environments: Sequence[Environment]
) -> Optional[Environment]:
    """Return the first environment with an exactly matching identity."""
    return next((e for e in environments if e.identity == identity), None)


def find_by_category(
    category: EnvironmentCategory, environments: Sequence[Environment]
) -> Optional[Environment]:
    """Return the first environment of the given category."""
    return next((e for e in environments if e.category == category), None)
