"""Artifact assembler — the incremental embedding decision.

The blob is always rebuilt. Embedding it into a fresh copy of the host
binary is the expensive part, and it is skipped when the new blob is
byte-identical (by digest) to the one left by the previous build.

Failure behaviour:
    * A compile failure aborts before the final artifact is touched.
    * A patch failure leaves a copied, unpatched host binary behind and
      discards the blob, so the next run has no previous digest and rebuilds.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from seaforge.core.builder import BlobBuilder
from seaforge.core.hasher import file_digest, optional_file_digest
from seaforge.models.build import AssembleResult, BuildWorkspace
from seaforge.tools.base import Patcher

logger = logging.getLogger(__name__)

SEA_RESOURCE_ID = "NODE_SEA_BLOB"
SEA_SENTINEL_FUSE = "NODE_SEA_FUSE_fce680ab2cc467b6e072b8b5df1996b2"


def should_embed(previous_digest: str | None, new_digest: str) -> bool:
    """Embed unless a previous blob exists with the same digest."""
    return previous_digest is None or previous_digest != new_digest


class ArtifactAssembler:
    """Builds the blob and, when it changed, embeds it into the host binary.

    Parameters
    ----------
    builder:
        The blob builder used for every assemble pass.
    patcher:
        Any object satisfying the ``Patcher`` protocol.
    """

    def __init__(self, builder: BlobBuilder, patcher: Patcher) -> None:
        self._builder = builder
        self._patcher = patcher

    def assemble(self, workspace: BuildWorkspace, host_binary: Path) -> AssembleResult:
        previous = optional_file_digest(workspace.blob_path)

        self._builder.build(workspace, workspace.build_config)
        new = file_digest(workspace.blob_path)

        if not should_embed(previous, new):
            logger.info(
                "Skipping %s rebuild (blob checksums match: %s)",
                workspace.artifact_name,
                new,
            )
            return AssembleResult(rebuilt=False, previous_digest=previous, new_digest=new)

        logger.info("Building %s (blob %s)", workspace.artifact_name, new)
        patched = False
        try:
            shutil.copy(host_binary, workspace.artifact_path)
            self._patcher.patch(
                workspace.root,
                workspace.artifact_name,
                SEA_RESOURCE_ID,
                workspace.blob_name,
                SEA_SENTINEL_FUSE,
            )
            patched = True
        finally:
            if not patched:
                # A kept blob would match next time and mask the unpatched artifact.
                workspace.blob_path.unlink(missing_ok=True)
        return AssembleResult(rebuilt=True, previous_digest=previous, new_digest=new)
