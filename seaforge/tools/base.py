"""Tool protocols, error taxonomy and the shared subprocess runner."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from seaforge.errors import SeaforgeError
from seaforge.models.build import ManifestContext

logger = logging.getLogger(__name__)


class ToolError(SeaforgeError):
    """An external tool could not be spawned or exited non-zero."""

    def __init__(self, message: str, *, stderr: str = "", returncode: int | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode


class BuildToolError(ToolError):
    """Raised when the blob compiler fails."""


class PatchToolError(ToolError):
    """Raised when the executable patcher fails."""


class RegistrationError(ToolError):
    """Raised when identity registration fails or its prerequisite is missing."""


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class Compiler(Protocol):
    """Turns the staged script into a blob according to a config file."""

    def compile(self, workspace_dir: Path, config_file: str) -> None:
        ...


@runtime_checkable
class Patcher(Protocol):
    """Injects a blob into an executable as a named resource."""

    def patch(
        self,
        workspace_dir: Path,
        artifact_name: str,
        resource_id: str,
        blob_name: str,
        sentinel: str,
    ) -> None:
        ...


@runtime_checkable
class Registrar(Protocol):
    """Registers the produced executable with the OS identity system."""

    def register(self, manifest_context: ManifestContext) -> None:
        ...


# ---------------------------------------------------------------------------
# Subprocess runner
# ---------------------------------------------------------------------------


class ToolResult(BaseModel):
    """Captured outcome of a completed tool run."""

    model_config = ConfigDict(frozen=True)

    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_tool(
    argv: Sequence[str],
    *,
    cwd: Path | None = None,
    error_cls: type[ToolError] = ToolError,
) -> ToolResult:
    """Run an external tool to completion, capturing its output.

    The first word is resolved through ``PATH`` so wrapper scripts such as
    ``npx.cmd`` are found on Windows. A spawn failure or a non-zero exit is
    raised as *error_cls* with the captured stderr attached.
    """
    argv_list = list(argv)
    resolved = shutil.which(argv_list[0])
    if resolved:
        argv_list[0] = resolved
    logger.info("CMD %s", _fmt_argv(argv_list))

    try:
        p = subprocess.run(
            argv_list,
            cwd=cwd,
            capture_output=True,
            text=True,
            errors="replace",
        )
    except OSError as exc:
        raise error_cls(f"Could not start {argv_list[0]}: {exc}") from exc

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    if p.returncode != 0:
        raise error_cls(
            f"Command failed ({p.returncode}): {_fmt_argv(argv_list)}\n{p.stderr}",
            stderr=p.stderr,
            returncode=p.returncode,
        )

    return ToolResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)
