"""Pipeline state machine.

Enforces the fixed run order: stage, build or skip, register only after a
real build, then launch. Any failure moves the run to FAILED, which is
terminal; there are no retries.
"""

from __future__ import annotations

from seaforge.errors import SeaforgeError
from seaforge.models.pipeline import (
    VALID_TRANSITIONS,
    PipelineState,
    PipelineTransition,
)


class InvalidTransitionError(SeaforgeError):
    """Raised when a requested state transition is not valid."""


class StageFailedError(SeaforgeError):
    """A pipeline stage failed; the original error is chained as ``__cause__``.

    Parameters
    ----------
    stage:
        Short stage name (``environment``, ``stage``, ``assemble``,
        ``register``, ``launch``).
    message:
        Human-readable diagnostic naming the stage.
    exit_code:
        Process exit status the CLI should use.
    """

    def __init__(self, stage: str, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.stage = stage
        self.exit_code = exit_code


class PipelineMachine:
    """Tracks a single run's state and its transition history."""

    def __init__(self) -> None:
        self._state = PipelineState.IDLE
        self._history: list[PipelineTransition] = []

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def history(self) -> list[PipelineTransition]:
        return list(self._history)

    def advance(self, target: PipelineState, detail: str = "") -> PipelineTransition:
        """Move to *target*, recording the transition.

        Raises ``InvalidTransitionError`` if the table does not allow it.
        """
        allowed = VALID_TRANSITIONS.get(self._state, set())
        if target not in allowed:
            raise InvalidTransitionError(
                f"Cannot transition from {self._state.value} to {target.value}. "
                f"Allowed: {sorted(s.value for s in allowed)}"
            )
        transition = PipelineTransition(
            from_state=self._state, to_state=target, detail=detail
        )
        self._history.append(transition)
        self._state = target
        return transition

    def fail(self, detail: str = "") -> None:
        """Move to FAILED unless already terminal."""
        if self._state not in (PipelineState.DONE, PipelineState.FAILED):
            self.advance(PipelineState.FAILED, detail)

    @property
    def is_terminal(self) -> bool:
        return not VALID_TRANSITIONS.get(self._state)
