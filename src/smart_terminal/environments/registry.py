"""Environment registry: determines which terminals are usable on this host."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import re
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Sequence

from .ranking import dedupe, recommend
from .specs import ENVIRONMENT_CATALOG, EnvironmentSpec
from .types import DetectionResult, Environment, EnvironmentCategory

if TYPE_CHECKING:
    from ..config.parser import CustomTerminalConfig

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 3.0


def executable_basename(path: str) -> str:
    """Base name of a path written with either Windows or POSIX separators."""
    return re.split(r"[\\/]", path)[-1]


def path_exists(path: str) -> bool:
    """Check a fixed install path. Any error counts as missing."""
    try:
        return Path(path).exists()
    except (OSError, ValueError) as e:
        logger.debug(f"Existence check failed for {path}: {e}")
        return False


class EnvironmentRegistry:
    """Probes the environment catalog for usable terminals.

    Every probe failure (spawn error, permission error, timeout) is
    absorbed and reported as ``usable=False``. Discovery never raises.
    """

    def __init__(
        self,
        catalog: Sequence[EnvironmentSpec] = ENVIRONMENT_CATALOG,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
    ):
        """Initialize registry.

        Args:
            catalog: Environments to probe, in tie-break order
            probe_timeout: Seconds to wait for a single PATH probe
        """
        self.catalog = tuple(catalog)
        self.probe_timeout = probe_timeout

    async def discover(self) -> List[Environment]:
        """Probe every catalog entry concurrently.

        Returns:
            One Environment per catalog entry, in catalog order, with
            ``usable`` populated
        """
        return list(
            await asyncio.gather(*(self._check_spec(spec) for spec in self.catalog))
        )

    async def discover_custom(
        self, customs: Iterable[CustomTerminalConfig]
    ) -> List[Environment]:
        """Build environments for user-configured terminals.

        A custom terminal is usable when its path exists, or when the
        path's base name is found on PATH.
        """
        return list(
            await asyncio.gather(*(self._check_custom(custom) for custom in customs))
        )

    async def detect(
        self, customs: Iterable[CustomTerminalConfig] = ()
    ) -> DetectionResult:
        """Run a full detection pass over the catalog and custom terminals.

        Custom terminals named like a catalog entry or an earlier custom
        terminal are ignored with a warning.

        Returns:
            DetectionResult with deduplicated available/unavailable lists
            and the recommended ordering
        """
        builtin, custom = await asyncio.gather(
            self.discover(), self.discover_custom(customs)
        )
        environments = builtin + self._unique_custom(builtin, custom)

        available = dedupe(e for e in environments if e.usable)
        unavailable = dedupe(e for e in environments if not e.usable)

        logger.debug(
            f"Detected {len(available)} usable and {len(unavailable)} missing terminals"
        )

        return DetectionResult(
            available=available,
            unavailable=unavailable,
            recommended=recommend(available),
        )

    @staticmethod
    def _unique_custom(
        builtin: Sequence[Environment], custom: Sequence[Environment]
    ) -> List[Environment]:
        """Drop custom terminals whose identity is already taken.

        Identities must stay unique for the resolver's default-name
        lookup; the first occurrence wins.
        """
        taken = {env.identity for env in builtin}
        unique: List[Environment] = []
        for env in custom:
            if env.identity in taken:
                logger.warning(
                    f"Ignoring custom terminal '{env.identity}' ({env.handle}): "
                    f"name already used by another terminal"
                )
                continue
            taken.add(env.identity)
            unique.append(env)
        return unique

    async def _check_spec(self, spec: EnvironmentSpec) -> Environment:
        """Probe a single catalog entry."""
        usable = await self._check_availability(spec.install_path, spec.executable)
        return Environment(
            identity=spec.identity,
            handle=spec.handle,
            category=spec.category,
            usable=usable,
            icon=spec.icon,
            launch_args=list(spec.launch_args),
        )

    async def _check_custom(self, custom: CustomTerminalConfig) -> Environment:
        """Probe a single custom terminal."""
        usable = await self._check_availability(
            custom.path, executable_basename(custom.path)
        )
        return Environment(
            identity=custom.name,
            handle=custom.path,
            category=EnvironmentCategory.CUSTOM,
            usable=usable,
            launch_args=list(custom.args),
        )

    async def _check_availability(
        self, install_path: str | None, executable: str
    ) -> bool:
        # 1. Fixed install path
        if install_path:
            if path_exists(install_path):
                return True
            executable = executable_basename(install_path)

        # 2. PATH lookup
        return await self.probe_path(executable)

    async def probe_path(self, name: str) -> bool:
        """Check whether ``name`` resolves on PATH via ``where``/``which``.

        Args:
            name: Executable name to look up

        Returns:
            True if the lookup succeeded within the probe timeout
        """
        if not name:
            return False

        probe = "where" if sys.platform == "win32" else "which"

        try:
            process = await asyncio.create_subprocess_exec(
                probe,
                name,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except Exception as e:
            logger.debug(f"Could not spawn '{probe} {name}': {e}")
            return False

        try:
            returncode = await asyncio.wait_for(
                process.wait(), timeout=self.probe_timeout
            )
        except asyncio.TimeoutError:
            logger.debug(f"'{probe} {name}' timed out after {self.probe_timeout}s")
            with contextlib.suppress(ProcessLookupError):
                process.kill()
                await process.wait()
            return False
        except Exception as e:
            logger.debug(f"'{probe} {name}' failed: {e}")
            return False

        return returncode == 0
