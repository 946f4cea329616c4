"""Blob builder — serializes the build config and runs the compiler."""

from __future__ import annotations

import logging

from seaforge.models.build import BuildConfig, BuildWorkspace
from seaforge.tools.base import BuildToolError, Compiler

logger = logging.getLogger(__name__)


class BlobBuilder:
    """Produces the SEA blob for a staged workspace.

    Assumes the environment has already been validated; an unsupported
    runtime surfaces as ``BuildToolError`` from the compiler.

    Parameters
    ----------
    compiler:
        Any object satisfying the ``Compiler`` protocol.
    """

    def __init__(self, compiler: Compiler) -> None:
        self._compiler = compiler

    def build(self, workspace: BuildWorkspace, config: BuildConfig) -> None:
        workspace.root.mkdir(parents=True, exist_ok=True)
        workspace.config_path.write_text(config.to_json(), encoding="utf-8")
        logger.info("Compiling %s -> %s", config.entry_file, config.output_file)

        self._compiler.compile(workspace.root, workspace.config_name)

        if not (workspace.root / config.output_file).is_file():
            raise BuildToolError(
                f"Compiler finished but produced no blob at {config.output_file}"
            )
