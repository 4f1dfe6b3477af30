"""Declarative catalog of known execution environments.

This is DATA, not code. To support a new terminal, just add its spec here.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .types import EnvironmentCategory


@dataclass(frozen=True)
class EnvironmentSpec:
    """Catalog entry for a known environment.

    ``install_path`` is a fixed well-known location. Entries without one
    are identified purely by ``executable`` being on PATH.
    """

    identity: str
    executable: str
    category: EnvironmentCategory
    install_path: Optional[str] = None
    icon: str = "terminal"
    launch_args: Tuple[str, ...] = ()

    @property
    def handle(self) -> str:
        return self.install_path or self.executable


_POWERSHELL_PATH = r"C:\Windows\System32\WindowsPowerShell\v1.0\powershell.exe"

# Catalog order is the de facto tie-break for resolution fallbacks
ENVIRONMENT_CATALOG: Tuple[EnvironmentSpec, ...] = (
    EnvironmentSpec(
        identity="PowerShell",
        executable="powershell.exe",
        category=EnvironmentCategory.POWERSHELL,
        install_path=_POWERSHELL_PATH,
        icon="terminal-powershell",
        launch_args=("-NoLogo",),
    ),
    # Same binary as above; collapsed by dedupe() when both are usable
    EnvironmentSpec(
        identity="Windows PowerShell",
        executable="powershell.exe",
        category=EnvironmentCategory.POWERSHELL,
        install_path=_POWERSHELL_PATH,
        icon="terminal-powershell",
        launch_args=("-NoLogo",),
    ),
    EnvironmentSpec(
        identity="PowerShell 7",
        executable="pwsh",
        category=EnvironmentCategory.POWERSHELL,
        icon="terminal-powershell",
        launch_args=("-NoLogo",),
    ),
    EnvironmentSpec(
        identity="Command Prompt",
        executable="cmd.exe",
        category=EnvironmentCategory.CMD,
        install_path=r"C:\Windows\System32\cmd.exe",
        icon="terminal-cmd",
    ),
    EnvironmentSpec(
        identity="Git Bash",
        executable="bash.exe",
        category=EnvironmentCategory.BASH,
        install_path=r"C:\Program Files\Git\bin\bash.exe",
        icon="terminal-bash",
        launch_args=("--login",),
    ),
    EnvironmentSpec(
        identity="Git Bash (x86)",
        executable="bash.exe",
        category=EnvironmentCategory.BASH,
        install_path=r"C:\Program Files (x86)\Git\bin\bash.exe",
        icon="terminal-bash",
        launch_args=("--login",),
    ),
    EnvironmentSpec(
        identity="Bash",
        executable="bash",
        category=EnvironmentCategory.BASH,
        install_path="/bin/bash",
        icon="terminal-bash",
        launch_args=("--login",),
    ),
    EnvironmentSpec(
        identity="WSL",
        executable="wsl",
        category=EnvironmentCategory.WSL,
        icon="terminal-linux",
    ),
)


# Interactive shell first, legacy prompt last. CUSTOM is never recommended.
CATEGORY_PRIORITY: Tuple[EnvironmentCategory, ...] = (
    EnvironmentCategory.POWERSHELL,
    EnvironmentCategory.BASH,
    EnvironmentCategory.WSL,
    EnvironmentCategory.CMD,
)


_SPECS_BY_IDENTITY: Dict[str, EnvironmentSpec] = {
    spec.identity: spec for spec in ENVIRONMENT_CATALOG
}


def get_environment_spec(identity: str) -> EnvironmentSpec:
    """Get the catalog entry for an environment.

    Args:
        identity: Environment name (e.g., "Git Bash")

    Returns:
        Catalog entry

    Raises:
        ValueError: If the environment is not in the catalog
    """
    if identity not in _SPECS_BY_IDENTITY:
        known = ", ".join(_SPECS_BY_IDENTITY)
        raise ValueError(
            f"Environment '{identity}' not in catalog. "
            f"Known environments: {known}"
        )

    return _SPECS_BY_IDENTITY[identity]
