"""postject-based blob injection."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from seaforge.tools.base import PatchToolError, run_tool


class PostjectPatcher:
    """Injects the SEA blob into an executable with postject.

    Parameters
    ----------
    command:
        Command prefix that invokes postject, ``["npx", "postject"]`` by default.
    """

    def __init__(self, command: Sequence[str] = ("npx", "postject")) -> None:
        self.command = list(command)

    def patch(
        self,
        workspace_dir: Path,
        artifact_name: str,
        resource_id: str,
        blob_name: str,
        sentinel: str,
    ) -> None:
        run_tool(
            [
                *self.command,
                artifact_name,
                resource_id,
                blob_name,
                "--sentinel-fuse",
                sentinel,
            ],
            cwd=workspace_dir,
            error_cls=PatchToolError,
        )
