"""Configuration types and errors for the state machine."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

StateName = str
EventName = str


class InvalidStateError(KeyError):
    """Raised when moving to a state the configuration does not define."""

    def __init__(self, state: str) -> None:
        self.state = state
        super().__init__(f"Unknown state {state!r}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidTransitionError(KeyError):
    """Raised when the current state has no transition for an event."""

    def __init__(self, state: str, event: str) -> None:
        self.state = state
        self.event = event
        super().__init__(f"No transition for event {event!r} from state {state!r}")

    def __str__(self) -> str:
        return self.args[0]


@dataclass(frozen=True, slots=True)
class StateDef:
    """A single state: maps event names to target state names."""

    transitions: Mapping[EventName, StateName] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Copy so the caller's dict can't change the table afterwards.
        object.__setattr__(
            self, "transitions", MappingProxyType(dict(self.transitions))
        )

    def target(self, event: EventName) -> StateName | None:
        """Target state for ``event``, or None if undeclared."""
        return self.transitions.get(event)


@dataclass(frozen=True, slots=True)
class MachineConfig:
    """Immutable state table plus the initial state name.

    ``initial`` is not checked against ``states``; an unknown initial state
    only surfaces when a transition is attempted from it.
    """

    states: Mapping[StateName, StateDef]
    initial: StateName

    def __post_init__(self) -> None:
        object.__setattr__(self, "states", MappingProxyType(dict(self.states)))

    def __contains__(self, name: object) -> bool:
        return name in self.states

    def state_names(self) -> list[StateName]:
        """All state names in declaration order."""
        return list(self.states)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MachineConfig:
        """Build from ``{"initial": ..., "states": {name: {"transitions": {...}}}}``."""
        raw_states = data["states"]
        if not isinstance(raw_states, Mapping):
            raise TypeError("'states' must be a mapping of state name to definition")
        states: dict[str, StateDef] = {}
        for name, raw in raw_states.items():
            if isinstance(raw, StateDef):
                states[name] = raw
                continue
            if not isinstance(raw, Mapping):
                raise TypeError(f"State {name!r} must be a mapping")
            transitions = raw.get("transitions", {})
            if not isinstance(transitions, Mapping):
                raise TypeError(f"Transitions of state {name!r} must be a mapping")
            states[name] = StateDef(transitions=transitions)
        return cls(states=states, initial=data["initial"])

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form, inverse of :meth:`from_dict`."""
        return {
            "initial": self.initial,
            "states": {
                name: {"transitions": dict(sdef.transitions)}
                for name, sdef in self.states.items()
            },
        }
