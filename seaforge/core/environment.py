"""Environment guard — host OS and runtime version preconditions.

Runs once before any pipeline work. Collects every violation and fails hard
with ``UnsupportedEnvironmentError``, so no filesystem state is touched on an
unsupported host.
"""

from __future__ import annotations

import logging
import re
import subprocess
import sys
from collections.abc import Callable

from seaforge.errors import SeaforgeError

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^v?(\d+)\.")


class UnsupportedEnvironmentError(SeaforgeError):
    """Raised when the host OS or runtime cannot produce the artifact."""


def probe_runtime_version(runtime_executable: str) -> str | None:
    """Return ``<runtime> --version`` output, or None if it cannot be run."""
    try:
        result = subprocess.run(
            [runtime_executable, "--version"],
            capture_output=True,
            text=True,
        )
    except OSError:
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def parse_major_version(version: str) -> int | None:
    """Extract the major number from strings like ``v20.11.1``."""
    m = _VERSION_RE.match(version.strip())
    return int(m.group(1)) if m else None


class EnvironmentGuard:
    """Checks the packaging target OS and the runtime's major version.

    Parameters
    ----------
    target_platform:
        Required ``sys.platform`` value (``win32`` for AppX registration).
    runtime_executable:
        The runtime whose version is probed.
    min_runtime_major:
        Lowest accepted major version.
    version_probe:
        Returns the runtime's version string, or None when unavailable.
    """

    def __init__(
        self,
        target_platform: str = "win32",
        runtime_executable: str = "node",
        min_runtime_major: int = 20,
        *,
        version_probe: Callable[[str], str | None] = probe_runtime_version,
    ) -> None:
        self.target_platform = target_platform
        self.runtime_executable = runtime_executable
        self.min_runtime_major = min_runtime_major
        self._version_probe = version_probe

    def check(self, platform: str | None = None) -> None:
        platform = platform or sys.platform
        violations: list[str] = []

        if platform != self.target_platform:
            violations.append(
                f"host platform {platform!r} is not supported; "
                f"packaging requires {self.target_platform!r}"
            )

        version = self._version_probe(self.runtime_executable)
        if version is None:
            violations.append(f"runtime {self.runtime_executable!r} not found or not runnable")
        else:
            major = parse_major_version(version)
            if major is None:
                violations.append(f"could not parse runtime version {version!r}")
            elif major < self.min_runtime_major:
                violations.append(
                    f"runtime {version} is too old; "
                    f"v{self.min_runtime_major} or newer is required"
                )

        if violations:
            msg = "Unsupported environment.\n" + "\n".join(f"  - {v}" for v in violations)
            logger.critical(msg)
            raise UnsupportedEnvironmentError(msg)

        logger.info("Environment check passed (runtime %s)", version)
