"""A game of Texas Hold'em with rising blinds."""

from __future__ import annotations

import threading
from datetime import timedelta
from typing import Protocol

from .store import PlayerStore

_BLINDS = (100, 200, 300, 400, 500, 600, 800, 1000, 2000, 4000, 8000)


class _Writer(Protocol):
    def write(self, data: str) -> object: ...


class Game(Protocol):
    """A game that can be started and finished."""

    def start(self, number_of_players: int, alerts_destination: _Writer) -> None: ...

    def finish(self, winner: str) -> None: ...


class BlindAlerter(Protocol):
    """Schedules a message announcing the blind after a delay."""

    def __call__(self, duration: timedelta, amount: int, to: _Writer) -> object: ...


class TexasHoldem:
    """Schedules blind alerts at the start and records the winner at the end."""

    def __init__(self, alerter: BlindAlerter, store: PlayerStore) -> None:
        self.alerter = alerter
        self.store = store

    def start(self, number_of_players: int, alerts_destination: _Writer) -> None:
        """Schedule every blind, spaced by (5 + players) minutes."""
        blind_increment = timedelta(minutes=5 + number_of_players)
        blind_time = timedelta(0)
        for blind in _BLINDS:
            self.alerter(blind_time, blind, alerts_destination)
            blind_time += blind_increment

    def finish(self, winner: str) -> None:
        """Record a win for the winner."""
        self.store.record_win(winner)


def schedule_alert(duration: timedelta, amount: int, to: _Writer) -> threading.Timer:
    """Write ``Blind is now <amount>`` to ``to`` once ``duration`` has passed."""
    timer = threading.Timer(
        duration.total_seconds(), lambda: to.write(f"Blind is now {amount}\n")
    )
    timer.daemon = True
    timer.start()
    return timer