"""MCP Server for Smart Terminal.

Exposes terminal detection and command routing as MCP tools using FastMCP.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from dotenv import load_dotenv
from mcp.server import FastMCP

from .routing import classify
from .server import SmartTerminalServer

PROJECT_PATH_ENV = "SMART_TERMINAL_PROJECT_PATH"
LOG_LEVEL_ENV = "SMART_TERMINAL_LOG_LEVEL"

# Global server instance and project path
_server: Optional[SmartTerminalServer] = None
_project_path: Optional[str] = None


mcp = FastMCP("Smart Terminal")


def set_project_path(path: str) -> None:
    """Set the project path whose .smart-terminal.toml is used."""
    global _project_path, _server
    _project_path = str(Path(path).resolve())
    # Rebuild lazily against the new project
    _server = None


def get_project_path() -> str:
    """Get the current project path."""
    return _project_path or os.getenv(PROJECT_PATH_ENV) or os.getcwd()


def get_server() -> SmartTerminalServer:
    """Get or create the server instance."""
    global _server
    if _server is None:
        _server = SmartTerminalServer(project_path=get_project_path())
    return _server


def _to_dict(obj: Any) -> Any:
    """Convert dataclass objects to dictionaries for JSON serialization."""
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    elif isinstance(obj, list):
        return [_to_dict(item) for item in obj]
    elif isinstance(obj, dict):
        return {k: _to_dict(v) for k, v in obj.items()}
    return obj


# ============================================================================
# Detection Tools
# ============================================================================


@mcp.tool()
async def detect_environments() -> Dict[str, Any]:
    """Detect which terminals are usable on this host.

    Probes the built-in catalog (PowerShell, Command Prompt, Git Bash,
    bash, WSL) and any custom terminals from .smart-terminal.toml.

    Returns:
        Dict with:
            - available: Usable terminals (identity, handle, category, launch_args)
            - unavailable: Terminals that were not found
            - recommended: One usable terminal per category, best first
    """
    detection = await get_server().detect_environments()
    return _to_dict(detection)


# ============================================================================
# Routing Tools
# ============================================================================


@mcp.tool()
async def recommend_environment(command: str) -> Dict[str, Any]:
    """Pick the terminal a shell command should run in.

    Resolution order:
    1. User override for the command's class ([terminal.priority])
    2. Built-in rules (e.g. git -> bash, npm -> powershell)
    3. Default policy for unknown commands
    then, if no terminal of the preferred kind is usable, the configured
    default terminal, then the first usable one.

    Args:
        command: Full command line (e.g. "git status", "sudo apt update")

    Returns:
        Dict with:
            - chosen: The selected terminal
            - justification: Human-readable reason
            - command_class, preferred_category, rule_source, fallback
            - requires_specific_environment: True if the command cannot
              meaningfully run elsewhere
            - auto_run_confirmation: Whether callers should confirm before running
    """
    server = get_server()
    result = await server.recommend(command)
    response = _to_dict(result)
    response["requires_specific_environment"] = server.requires_specific_environment(command)
    response["auto_run_confirmation"] = server.get_config().terminal.auto_run_confirmation
    return response


@mcp.tool()
async def classify_command(command: str) -> Dict[str, Any]:
    """Show how a command line is classified and which terminal kind it prefers.

    Args:
        command: Full command line

    Returns:
        Dict with command_class, preferred_category and rule_source
    """
    server = get_server()
    command_class = classify(command)
    category, source = server.resolver.preferred_category(command_class)
    return {
        "command": command,
        "command_class": command_class,
        "preferred_category": category.value,
        "rule_source": source,
        "requires_specific_environment": server.requires_specific_environment(command),
    }


# ============================================================================
# Statistics Tools
# ============================================================================


@mcp.tool()
async def record_execution(
    command: str,
    environment: str,
    execution_type: Literal["manual", "auto"] = "auto",
) -> Dict[str, Any]:
    """Report that a command was run in a terminal.

    Only the command class is stored. Ignored unless [statistics] enabled = true.

    Args:
        command: Command line that was run
        environment: Identity of the terminal it ran in
        execution_type: "auto" if chosen by recommend_environment, "manual" otherwise
    """
    record = get_server().record_execution(command, environment, execution_type)
    return {"recorded": record is not None, "record": _to_dict(record)}


@mcp.tool()
async def get_statistics() -> Dict[str, Any]:
    """Get aggregated usage statistics and a readable summary."""
    statistics = get_server().statistics
    return {
        "enabled": statistics.enabled,
        "statistics": _to_dict(statistics.get_statistics()),
        "summary": statistics.summary(),
    }


# ============================================================================
# Configuration Tools
# ============================================================================


@mcp.tool()
async def get_smart_terminal_config() -> Dict[str, Any]:
    """Get the effective configuration for the current project."""
    return get_server().get_config().to_dict()


# ============================================================================
# Entry Point
# ============================================================================


def main():
    """Run the MCP server.

    The project path can be set via:
    1. First command line argument
    2. SMART_TERMINAL_PROJECT_PATH environment variable
    3. Current working directory (default)
    """
    # Load environment variables from .env file if present
    load_dotenv()

    logging.basicConfig(
        level=os.getenv(LOG_LEVEL_ENV, "WARNING").upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Allow setting project path from command line argument
    if len(sys.argv) > 1 and not sys.argv[1].startswith("-"):
        set_project_path(sys.argv[1])
        # Remove the argument so FastMCP doesn't see it
        sys.argv = [sys.argv[0]] + sys.argv[2:]

    project_path = get_project_path()

    # Print server info to stderr (stdout is used for MCP protocol)
    print("🚀 Starting Smart Terminal MCP Server", file=sys.stderr)
    print(f"📁 Project: {Path(project_path).name}", file=sys.stderr)
    print(f"📂 Path: {project_path}", file=sys.stderr)
    print("", file=sys.stderr)

    mcp.run()


if __name__ == "__main__":
    main()
