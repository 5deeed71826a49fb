"""undo-fsm - Finite state machine with one-level undo/redo."""
from __future__ import annotations

from undo_fsm.machine import StateMachine
from undo_fsm.types import (
    InvalidStateError,
    InvalidTransitionError,
    MachineConfig,
    StateDef,
)

__all__ = [
    "StateMachine",
    "MachineConfig",
    "StateDef",
    "InvalidStateError",
    "InvalidTransitionError",
]
