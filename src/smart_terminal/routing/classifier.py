"""Command classification."""

import re

ELEVATION_PREFIXES = frozenset({"sudo", "doas"})

_EXECUTABLE_SUFFIX = re.compile(r"\.(exe|bat|cmd|sh|ps1)$")


def classify(command: str) -> str:
    """Map a command line to its canonical class token.

    Only the leading executable matters: the line is trimmed and
    lowercased, an elevation prefix (``sudo``/``doas``) is skipped, and a
    platform executable suffix is stripped.

    Examples:
        classify("SUDO Git status") -> "git"
        classify("node.exe") -> "node"
        classify("  ") -> ""

    Args:
        command: Raw command line, possibly with arguments

    Returns:
        Class token; may be empty or unknown to any rule table
    """
    tokens = command.strip().lower().split()
    if not tokens:
        return ""

    executable = tokens[0]
    if executable in ELEVATION_PREFIXES and len(tokens) > 1:
        executable = tokens[1]

    return _EXECUTABLE_SUFFIX.sub("", executable)
