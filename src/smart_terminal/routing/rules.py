"""Built-in routing rules.

This is DATA, not code. To route a new command, add its class to the
matching ecosystem group below.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from ..environments.types import EnvironmentCategory

_PS = EnvironmentCategory.POWERSHELL
_CMD = EnvironmentCategory.CMD
_BASH = EnvironmentCategory.BASH
_WSL = EnvironmentCategory.WSL


# Ecosystem -> (preferred category, command classes)
RULE_GROUPS: Mapping[str, Tuple[EnvironmentCategory, Tuple[str, ...]]] = MappingProxyType({
    "nodejs": (_PS, ("npm", "npx", "node", "yarn", "pnpm", "bun")),
    "version_control": (_BASH, ("git", "gh", "hub")),
    "python": (_CMD, ("python", "python3", "py", "pip", "pip3", "pipenv", "poetry", "conda")),
    "containers": (_PS, ("docker", "docker-compose", "kubectl", "k9s", "helm", "minikube")),
    "shells": (_BASH, ("bash", "sh", "zsh", "fish")),
    "linux": (_WSL, ("wsl", "ubuntu", "debian", "kali", "apt", "apt-get", "yum", "dnf", "pacman")),
    "build_tools": (_PS, ("make", "cmake", "gradle", "maven", "mvn")),
    "rust": (_PS, ("cargo", "rustc", "rustup")),
    "go": (_PS, ("go", "gofmt")),
    "php": (_CMD, ("php", "composer", "artisan")),
    "ruby": (_CMD, ("ruby", "gem", "bundle", "rails")),
    "dotnet": (_PS, ("dotnet", "nuget", "msbuild")),
    "databases": (_CMD, ("mysql", "psql", "mongo", "redis-cli", "sqlite3")),
    "cloud": (_PS, ("aws", "az", "gcloud", "terraform", "pulumi")),
    "version_managers": (_BASH, ("nvm", "pyenv", "rbenv", "sdkman")),
    "editors": (_PS, ("vim", "nvim", "nano", "emacs", "code")),
    "windows_native": (_CMD, (
        "cmd", "dir", "copy", "move", "del", "type", "cls",
        "ipconfig", "netstat", "tasklist", "taskkill",
    )),
    "posix_utilities": (_BASH, (
        "ls", "cd", "pwd", "cat", "grep", "find", "sed", "awk",
        "curl", "wget", "ssh", "scp", "rsync",
    )),
    "powershell": (_PS, (
        "pwsh", "powershell",
        "get-command", "get-help", "get-process", "get-service",
        "start-process", "stop-process",
    )),
})


def _flatten(groups: Mapping[str, Tuple[EnvironmentCategory, Tuple[str, ...]]]) -> Dict[str, EnvironmentCategory]:
    table: Dict[str, EnvironmentCategory] = {}
    for category, classes in groups.values():
        for command_class in classes:
            table[command_class] = category
    return table


BUILTIN_RULES: Mapping[str, EnvironmentCategory] = MappingProxyType(_flatten(RULE_GROUPS))


def default_category(command_class: str) -> EnvironmentCategory:
    """Category for a class no rule knows about.

    Unix-style paths go to bash, Windows-style paths to cmd, anything
    else to the general-purpose shell.
    """
    if "/" in command_class:
        return _BASH
    if "\\" in command_class:
        return _CMD
    return _PS


# Checked in order; first keyword hit wins
NAME_KEYWORDS: Tuple[Tuple[EnvironmentCategory, Tuple[str, ...]], ...] = (
    (_PS, ("powershell", "pwsh")),
    (_CMD, ("cmd", "command")),
    (_BASH, ("bash", "git")),
    (_WSL, (
        "wsl", "linux", "ubuntu", "debian", "kali", "fedora", "arch", "opensuse", "alpine",
    )),
)


def category_for_name(name: str) -> EnvironmentCategory:
    """Map a free-text environment name to a category.

    Unmatched names map to CUSTOM; this never raises.

    Examples:
        category_for_name("Git Bash") -> BASH
        category_for_name("Ubuntu-22.04") -> WSL
        category_for_name("Alacritty") -> CUSTOM
    """
    lowered = name.lower()
    for category, keywords in NAME_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return EnvironmentCategory.CUSTOM


_NODE_REASON = "{name} is recommended for Node.js commands"
_GIT_REASON = "{name} is the best fit for Git commands"
_PYTHON_REASON = "{name} is preferred for Python commands"
_CONTAINER_REASON = "{name} is recommended for container and orchestration commands"
_LINUX_REASON = "{name} is required for Linux commands"

DEFAULT_EXPLANATION = "{name} is a suitable choice for this command"

EXPLANATIONS: Mapping[str, str] = MappingProxyType({
    "npm": _NODE_REASON,
    "node": _NODE_REASON,
    "yarn": _NODE_REASON,
    "git": _GIT_REASON,
    "python": _PYTHON_REASON,
    "pip": _PYTHON_REASON,
    "docker": _CONTAINER_REASON,
    "kubectl": _CONTAINER_REASON,
    "wsl": _LINUX_REASON,
})

# Commands that make no sense outside their native environment
REQUIRES_SPECIFIC = frozenset({
    "wsl", "bash", "sh", "apt", "apt-get", "yum", "dnf", "pacman",
})
