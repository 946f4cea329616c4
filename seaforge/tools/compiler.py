"""Node.js single executable application blob compiler."""

from __future__ import annotations

from pathlib import Path

from seaforge.tools.base import BuildToolError, run_tool

SEA_CONFIG_FLAG = "--experimental-sea-config"


class SeaCompiler:
    """Runs ``<runtime> --experimental-sea-config <config>`` in the workspace.

    Parameters
    ----------
    runtime_executable:
        The Node.js binary (name on ``PATH`` or absolute path).
    """

    def __init__(self, runtime_executable: str = "node") -> None:
        self.runtime_executable = runtime_executable

    def compile(self, workspace_dir: Path, config_file: str) -> None:
        try:
            run_tool(
                [self.runtime_executable, SEA_CONFIG_FLAG, config_file],
                cwd=workspace_dir,
                error_cls=BuildToolError,
            )
        except BuildToolError as exc:
            if SEA_CONFIG_FLAG in exc.stderr and "bad option" in exc.stderr:
                raise BuildToolError(
                    f"{self.runtime_executable} does not support single executable "
                    f"applications (Node v20 or newer required)",
                    stderr=exc.stderr,
                    returncode=exc.returncode,
                ) from exc
            raise
