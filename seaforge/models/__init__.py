"""Seaforge data models — all Pydantic v2, all frozen (immutable)."""

from seaforge.models.build import (
    AssembleResult,
    BootstrapContext,
    BuildConfig,
    BuildWorkspace,
    ManifestContext,
)
from seaforge.models.pipeline import (
    VALID_TRANSITIONS,
    PipelineReport,
    PipelineState,
    PipelineTransition,
)

__all__ = [
    # build
    "BuildWorkspace",
    "BuildConfig",
    "BootstrapContext",
    "AssembleResult",
    "ManifestContext",
    # pipeline
    "PipelineState",
    "PipelineTransition",
    "PipelineReport",
    "VALID_TRANSITIONS",
]
