"""Target resolver: picks the environment a command should run in."""

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from ..environments.ranking import find_by_identity
from ..environments.types import Environment, EnvironmentCategory
from ..errors import NoUsableEnvironment
from .classifier import classify
from .rules import (
    BUILTIN_RULES,
    DEFAULT_EXPLANATION,
    EXPLANATIONS,
    REQUIRES_SPECIFIC,
    category_for_name,
    default_category,
)
from .types import Fallback, PreferenceStore, ResolutionResult, RuleSource

logger = logging.getLogger(__name__)


class TargetResolver:
    """Deterministic resolver from command lines to environments.

    Priority for the preferred category:
    1. User override for the command class
    2. Built-in class -> category rules
    3. Default policy for unknown classes

    If no usable environment has the preferred category, the configured
    default environment is used, then the first usable environment.
    """

    def __init__(
        self,
        preferences: PreferenceStore,
        rules: Mapping[str, EnvironmentCategory] = BUILTIN_RULES,
    ):
        """Initialize resolver.

        Args:
            preferences: User preference store, read on every call
            rules: Built-in class -> category table
        """
        self.preferences = preferences
        self.rules = rules

    def resolve(self, command: str, usable: Sequence[Environment]) -> Environment:
        """Pick the environment to run a command in.

        Args:
            command: Raw command line
            usable: Environments currently usable, in tie-break order

        Returns:
            An element of ``usable``

        Raises:
            NoUsableEnvironment: If ``usable`` is empty
        """
        return self._select(command, usable)[0]

    def resolve_with_reason(
        self, command: str, usable: Sequence[Environment]
    ) -> ResolutionResult:
        """Resolve a command and report how the decision was made.

        Raises:
            NoUsableEnvironment: If ``usable`` is empty
        """
        chosen, command_class, category, source, fallback = self._select(command, usable)
        return ResolutionResult(
            chosen=chosen,
            justification=self.explain(command, chosen),
            command_class=command_class,
            preferred_category=category,
            rule_source=source,
            fallback=fallback,
        )

    def explain(self, command: str, chosen: Environment) -> str:
        """Short advisory rationale for running ``command`` in ``chosen``.

        The template depends only on the command class, not on which
        fallback produced ``chosen``.
        """
        template = EXPLANATIONS.get(classify(command), DEFAULT_EXPLANATION)
        return template.format(name=chosen.identity)

    def requires_specific_environment(self, command: str) -> bool:
        """Whether the command only makes sense in its native environment.

        Callers may use this to surface a hard requirement instead of
        silently falling back. It does not affect ``resolve``.
        """
        return classify(command) in REQUIRES_SPECIFIC

    def preferred_category(
        self, command_class: str
    ) -> Tuple[EnvironmentCategory, RuleSource]:
        """Category the policy asks for, and the layer that decided it."""
        return self._preferred(command_class, self._get_override(command_class))

    def _preferred(
        self, command_class: str, override: Optional[str]
    ) -> Tuple[EnvironmentCategory, RuleSource]:
        if override:
            return category_for_name(override), "override"

        if command_class in self.rules:
            return self.rules[command_class], "builtin"

        return default_category(command_class), "default_policy"

    def _select(
        self, command: str, usable: Sequence[Environment]
    ) -> Tuple[Environment, str, EnvironmentCategory, RuleSource, Fallback]:
        if not usable:
            raise NoUsableEnvironment(command)

        command_class = classify(command)
        override = self._get_override(command_class)
        category, source = self._preferred(command_class, override)

        # 1. Preferred category
        candidates = [env for env in usable if env.category == category]
        if candidates:
            chosen = self._pick_candidate(candidates, override)
            logger.debug(
                f"{command_class!r} -> {chosen.identity} ({source} rule, {category.value})"
            )
            return chosen, command_class, category, source, "preferred"

        # 2. Configured default environment
        default_name = self.preferences.get_default_environment_name()
        chosen = find_by_identity(default_name, usable)
        if chosen is not None:
            logger.debug(
                f"{command_class!r} -> {chosen.identity} (no {category.value} terminal, using default)"
            )
            return chosen, command_class, category, source, "default_environment"

        # 3. First usable
        chosen = usable[0]
        logger.debug(
            f"{command_class!r} -> {chosen.identity} (no {category.value} terminal "
            f"and default {default_name!r} missing, using first available)"
        )
        return chosen, command_class, category, source, "first_available"

    def _get_override(self, command_class: str) -> Optional[str]:
        if not command_class:
            return None
        return self.preferences.get_rule(command_class) or None

    @staticmethod
    def _pick_candidate(
        candidates: List[Environment], override: Optional[str]
    ) -> Environment:
        """First candidate, unless the override names one of them exactly."""
        if override:
            wanted = override.strip().lower()
            for env in candidates:
                if env.identity.lower() == wanted:
                    return env
        return candidates[0]
