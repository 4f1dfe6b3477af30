"""Data types for environment discovery."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class EnvironmentCategory(str, Enum):
    """Kinds of execution environments a command can be routed to.

    - POWERSHELL: General-purpose interactive shell
    - CMD: Native Windows command prompt
    - BASH: POSIX-compatible shell (Git Bash, system bash)
    - WSL: Linux-subsystem shell
    - CUSTOM: User-defined environment
    """

    POWERSHELL = "powershell"
    CMD = "cmd"
    BASH = "bash"
    WSL = "wsl"
    CUSTOM = "custom"


@dataclass
class Environment:
    """A target execution context produced by one discovery pass.

    Attributes:
        identity: Stable display name, unique within a result set
        handle: Launch reference (install path or command name)
        category: Kind of environment
        usable: Whether the discovery probe succeeded on this host
        icon: Display hint for front-ends
        launch_args: Arguments the launcher passes when starting the shell
    """

    identity: str
    handle: str
    category: EnvironmentCategory
    usable: bool = False
    icon: str = "terminal"
    launch_args: List[str] = field(default_factory=list)

    def __repr__(self) -> str:
        state = "usable" if self.usable else "unusable"
        return f"<Environment {self.identity} @ {self.handle} ({self.category.value}, {state})>"


@dataclass
class DetectionResult:
    """Outcome of a full detection pass.

    Attributes:
        available: Usable environments, deduplicated, in catalog order
        unavailable: Environments whose probe failed, deduplicated
        recommended: At most one available environment per category,
            in category priority order
    """

    available: List[Environment] = field(default_factory=list)
    unavailable: List[Environment] = field(default_factory=list)
    recommended: List[Environment] = field(default_factory=list)
