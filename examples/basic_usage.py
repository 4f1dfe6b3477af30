#!/usr/bin/env python3
"""
Example: Basic Smart Terminal Usage - Detection & Routing

This demonstrates the core features:
- Detect usable terminals
- Recommend a terminal for a few commands
- Record executions and print statistics

Usage:
    python examples/basic_usage.py [command ...]
"""

import asyncio
import sys
from pathlib import Path

from smart_terminal.errors import NoUsableEnvironment
from smart_terminal.server import SmartTerminalServer

DEFAULT_COMMANDS = [
    "git status",
    "npm install",
    "pip install requests",
    "sudo apt update",
    "./deploy.sh",
    "frobnicate --all",
]


async def main():
    project_path = Path(".").resolve()
    print(f"📂 Project: {project_path}")
    server = SmartTerminalServer(project_path=str(project_path))
    server.statistics.enabled = True

    # 1. Detection
    print("\n1️⃣  DETECTED TERMINALS")
    print("-" * 70)
    detection = await server.detect_environments()
    for env in detection.available:
        print(f"   ✅ {env.identity:<20} {env.category.value:<11} {env.handle}")
    for env in detection.unavailable:
        print(f"   ❌ {env.identity:<20} {env.category.value:<11} {env.handle}")
    print(f"   ⭐ Recommended: {', '.join(e.identity for e in detection.recommended) or '-'}")

    # 2. Routing
    print("\n2️⃣  ROUTING")
    print("-" * 70)
    for command in sys.argv[1:] or DEFAULT_COMMANDS:
        try:
            result = await server.recommend(command)
        except NoUsableEnvironment as e:
            print(f"   ⚠️  {e}")
            return

        marker = " (required)" if server.requires_specific_environment(command) else ""
        print(f"   {command!r:<28} → {result.chosen.identity}{marker}")
        print(f"   {'':<28}   {result.justification} [{result.rule_source}, {result.fallback}]")
        server.record_execution(command, result.chosen.identity, "auto")

    # 3. Statistics
    print("\n3️⃣  STATISTICS")
    print("-" * 70)
    print(server.statistics.summary())


if __name__ == "__main__":
    asyncio.run(main())
