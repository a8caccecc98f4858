"""Input events funneled into the state machine.

Every state change is driven by one of these: a key press, a terminal
resize, an animation tick, or the outcome of an effect.
"""

from dataclasses import dataclass
from typing import Any

# Sentinel payloads for side-effecting operations that carry no data.
CREATE_SUCCESS = "create_success"
REFRESH_LIST_SUCCESS = "refresh_list_success"
DELETE_SUCCESS = "delete_success"


@dataclass(frozen=True)
class Key:
    """A key press.

    Attributes:
        name: Key name as reported by the terminal (e.g. "enter", "a", "ctrl+d")
        character: Printable character for the key, if any
    """

    name: str
    character: str | None = None

    @property
    def printable(self) -> bool:
        return self.character is not None and self.character.isprintable()

    @property
    def text(self) -> str:
        """The typed character for printable keys, otherwise the key name."""
        return self.character if self.printable else self.name


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Tick:
    """One step of a progress animation."""


@dataclass(frozen=True)
class Result:
    """Successful effect outcome: a decoded payload, a sentinel string, or None."""

    payload: Any


@dataclass(frozen=True)
class Failure:
    """Failed effect outcome carrying the error text shown to the user."""

    message: str


Event = Key | Resize | Tick | Result | Failure
