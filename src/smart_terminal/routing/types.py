"""Data types for target resolution."""

from dataclasses import dataclass
from typing import Literal, Optional, Protocol

from ..environments.types import Environment, EnvironmentCategory

RuleSource = Literal["override", "builtin", "default_policy"]
Fallback = Literal["preferred", "default_environment", "first_available"]


class PreferenceStore(Protocol):
    """Read-only view of the user's routing preferences.

    Implementations must not cache between calls; the resolver reads the
    store on every resolution so freshly edited overrides apply.
    """

    def get_rule(self, command_class: str) -> Optional[str]:
        """Environment name or category the user wants for a class."""
        ...

    def get_default_environment_name(self) -> str:
        """Identity of the environment to use when the preferred one is missing."""
        ...


@dataclass
class ResolutionResult:
    """A resolved environment and why it was picked.

    Attributes:
        chosen: The environment to run the command in
        justification: Human-readable rationale
        command_class: Class token the command was classified to
        preferred_category: Category the policy asked for
        rule_source: Which policy layer produced the preferred category
        fallback: How ``chosen`` was found among the usable environments
    """

    chosen: Environment
    justification: str
    command_class: str
    preferred_category: EnvironmentCategory
    rule_source: RuleSource
    fallback: Fallback
