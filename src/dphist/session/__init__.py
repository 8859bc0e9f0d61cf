"""Interactive noise session: state machine and orchestrator."""

from .controller import (
    DEFAULT_COLUMNS,
    NoiseController,
    SessionClosedError,
    SessionError,
    Snapshot,
)
from .state import (
    Action,
    Field,
    NoiseState,
    initial_state,
    transition,
)

__all__ = [
    "DEFAULT_COLUMNS",
    "NoiseController",
    "SessionClosedError",
    "SessionError",
    "Snapshot",
    "Action",
    "Field",
    "NoiseState",
    "initial_state",
    "transition",
]
