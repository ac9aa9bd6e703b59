"""
Change notifications published by the board.

Subscribers receive one event per settled change, synchronously, in
registration order.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Tuple

from .cell import Visibility

if TYPE_CHECKING:
    from .board import GameState


Subscriber = Callable[[object], None]


# ============================================================================
# Events
# ============================================================================

@dataclass(frozen=True)
class BoardReset:
    """Emitted after the board has been rebuilt for a new game."""

    dimension: int
    bomb_count: int


@dataclass(frozen=True)
class CellsRevealed:
    """Emitted after a reveal made one or more cells visible."""

    positions: Tuple[Tuple[int, int], ...]
    game_state: "GameState"


@dataclass(frozen=True)
class CellFlagged:
    """Emitted after a flag was placed or removed."""

    x: int
    y: int
    visibility: Visibility


@dataclass(frozen=True)
class GameEnded:
    """Emitted once when the game reaches WON or LOST."""

    game_state: "GameState"


# ============================================================================
# Event Bus
# ============================================================================

class EventBus:
    """
    Publishes events to registered observers.

    Delivery is synchronous: each publish calls every subscriber right
    away. An exception raised by a subscriber stops the broadcast and
    propagates to the publisher.
    """

    __slots__ = ("_subscribers",)

    def __init__(self) -> None:
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a subscriber and return a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, event: object) -> None:
        """Deliver the event to every current subscriber."""
        # Copy so subscribers may unsubscribe while being called.
        for callback in list(self._subscribers):
            callback(event)

    def __len__(self) -> int:
        return len(self._subscribers)
