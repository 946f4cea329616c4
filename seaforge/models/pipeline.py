"""Pipeline state machine models — fixed, fail-fast transitions."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PipelineState(str, Enum):
    """States of a single build-and-launch run."""

    IDLE = "idle"
    STAGED = "staged"
    BUILT = "built"
    SKIPPED = "skipped"
    REGISTERED = "registered"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


# Valid state transitions — enforced structurally by PipelineMachine.
# Registration is only reachable from BUILT; a skipped build goes straight
# to RUNNING. DONE and FAILED are terminal.
VALID_TRANSITIONS: dict[PipelineState, set[PipelineState]] = {
    PipelineState.IDLE: {PipelineState.STAGED, PipelineState.FAILED},
    PipelineState.STAGED: {
        PipelineState.BUILT,
        PipelineState.SKIPPED,
        PipelineState.FAILED,
    },
    PipelineState.BUILT: {PipelineState.REGISTERED, PipelineState.FAILED},
    PipelineState.SKIPPED: {PipelineState.RUNNING, PipelineState.FAILED},
    PipelineState.REGISTERED: {PipelineState.RUNNING, PipelineState.FAILED},
    PipelineState.RUNNING: {PipelineState.DONE, PipelineState.FAILED},
    PipelineState.DONE: set(),  # terminal
    PipelineState.FAILED: set(),  # terminal
}


class PipelineTransition(BaseModel):
    """Records a single state transition."""

    model_config = ConfigDict(frozen=True)

    from_state: PipelineState
    to_state: PipelineState
    detail: str = ""
    at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class PipelineReport(BaseModel):
    """Summary of a completed run."""

    model_config = ConfigDict(frozen=True)

    exit_code: int
    rebuilt: bool
    registered: bool
    digest: str
    transitions: list[PipelineTransition] = []
