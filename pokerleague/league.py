"""Players and the league table."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import IO, Any, Optional, Union

_JSON_WHITESPACE = " \t\n\r"


@dataclass
class Player:
    """A player and the number of games they have won."""

    name: str = ""
    wins: int = 0


class League(list):
    """The players of the league, as a list of Player."""

    def find(self, name: str) -> Optional[Player]:
        """Return the player called ``name``, or None if there is none."""
        return next((player for player in self if player.name == name), None)


def _field(record: dict, field: str) -> Any:
    if field in record:
        return record[field]
    for key, value in record.items():
        if key.lower() == field:
            return value
    return None


def _player_from(record: Any) -> Player:
    if record is None:
        return Player()
    if not isinstance(record, dict):
        raise ValueError(f"cannot decode {type(record).__name__} into a player")

    name = _field(record, "name")
    if name is None:
        name = ""
    elif not isinstance(name, str):
        raise ValueError(f"player name must be a string, got {name!r}")

    wins = _field(record, "wins")
    if wins is None:
        wins = 0
    elif isinstance(wins, bool) or not isinstance(wins, int):
        raise ValueError(f"player wins must be an integer, got {wins!r}")

    return Player(name=name, wins=wins)


def load_league(reader: IO[Union[str, bytes]]) -> League:
    """Read a league from a JSON array of players.

    Field names are matched case-insensitively, and anything after the
    first JSON value is ignored.
    """
    text = reader.read()
    if isinstance(text, bytes):
        text = text.decode("utf-8")
    try:
        data, _ = json.JSONDecoder().raw_decode(text.lstrip(_JSON_WHITESPACE))
        if data is None:
            return League()
        if not isinstance(data, list):
            raise ValueError(f"cannot decode {type(data).__name__} into a league")
        return League(_player_from(record) for record in data)
    except ValueError as err:
        raise ValueError(f"problem parsing league, {err}") from err