"""StateMachine: event-driven state tracking with one-level undo/redo."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from undo_fsm.types import (
    EventName,
    InvalidStateError,
    InvalidTransitionError,
    MachineConfig,
    StateName,
)

logger = logging.getLogger(__name__)

TransitionCallback = Callable[[StateName, StateName], None]


class StateMachine:
    """Finite state machine over a fixed :class:`MachineConfig`.

    Keeps a single slot of history in each direction. ``undo`` steps back to
    the state before the last change; ``redo`` returns to the state that
    ``undo`` left. Neither reaches further back than one step.

    ``on_transition(old, new)`` fires after every successful state change,
    with the new state already in place.
    """

    def __init__(
        self,
        config: MachineConfig | Mapping[str, Any],
        on_transition: TransitionCallback | None = None,
    ) -> None:
        if not isinstance(config, MachineConfig):
            config = MachineConfig.from_dict(config)
        self._config = config
        self._state: StateName = config.initial
        self._previous: StateName | None = None
        self._undone: StateName | None = None
        self._on_transition = on_transition

    def __repr__(self) -> str:
        return (
            f"StateMachine(state={self._state!r}, "
            f"previous={self._previous!r}, undone={self._undone!r})"
        )

    @property
    def config(self) -> MachineConfig:
        return self._config

    @property
    def state(self) -> StateName:
        return self._state

    # --- Queries ---

    def get_state(self) -> StateName:
        """Return the active state name."""
        return self._state

    def list_states(self, event: EventName | None = None) -> list[StateName]:
        """State names in declaration order.

        With ``event``, only states that declare a transition for it.
        """
        if event is None:
            return self._config.state_names()
        return [
            name
            for name, sdef in self._config.states.items()
            if event in sdef.transitions
        ]

    def can_undo(self) -> bool:
        """True if an undo would currently change anything."""
        return self._previous is not None

    def can_redo(self) -> bool:
        """True if a redo would currently change anything."""
        return self._undone is not None

    # --- Transitions ---

    def change_state(self, target: StateName) -> None:
        """Move to ``target`` regardless of the transition table."""
        if target not in self._config:
            logger.debug("rejected change to unknown state %r", target)
            raise InvalidStateError(target)
        self._previous = self._state
        self._set(target)

    def trigger(self, event: EventName) -> None:
        """Fire ``event`` from the current state."""
        sdef = self._config.states.get(self._state)
        target = sdef.target(event) if sdef is not None else None
        if target is None:
            logger.debug("rejected event %r in state %r", event, self._state)
            raise InvalidTransitionError(self._state, event)
        self._previous = self._state
        self._set(target)

    def reset(self) -> None:
        """Return to the configured initial state. History is kept."""
        self._set(self._config.initial)

    # --- History ---

    def undo(self) -> bool:
        """Step back to the previous state. Returns False if there is none."""
        if self._previous is None:
            return False
        self._undone = self._state
        target = self._previous
        self._previous = None
        self._set(target)
        return True

    def redo(self) -> bool:
        """Reapply the last undo. Returns False if nothing was undone."""
        if self._undone is None:
            return False
        target = self._undone
        self._undone = None
        # The previous slot takes the redo target itself, not the state
        # being left, so history never grows past one step.
        self._previous = target
        self._set(target)
        return True

    def clear_history(self) -> None:
        """Forget both history slots. The current state is unchanged."""
        self._previous = None
        self._undone = None

    def _set(self, new: StateName) -> None:
        old = self._state
        self._state = new
        logger.debug("state %r -> %r", old, new)
        if self._on_transition is not None:
            self._on_transition(old, new)
