"""A player store kept as a JSON file."""

from __future__ import annotations

import contextlib
import json
import os
from dataclasses import asdict
from typing import IO, Iterator, Protocol

from .league import League, Player, load_league
from .tape import Tape


class PlayerStore(Protocol):
    """Where scores are kept."""

    def get_players_score(self, name: str) -> int: ...

    def record_win(self, name: str) -> None: ...

    def get_league(self) -> League: ...


class StoreError(Exception):
    """The player store could not be opened or loaded."""


def _encode(league: League) -> str:
    text = json.dumps(
        [asdict(player) for player in league],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    for char, escape in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escape)
    return text + "\n"


def _initialise_db_file(file: IO[str]) -> None:
    file.seek(0)
    if file.seek(0, os.SEEK_END) == 0:
        file.write("[]")
        file.flush()
    file.seek(0)


class FileSystemPlayerStore:
    """Player store backed by an open, seekable text file holding JSON."""

    def __init__(self, file: IO[str]) -> None:
        try:
            _initialise_db_file(file)
        except OSError as err:
            raise StoreError(f"problem initialising player db file, {err}") from err

        try:
            self._league = load_league(file)
        except ValueError as err:
            name = getattr(file, "name", "<stream>")
            raise StoreError(
                f"problem loading player store from file {name}, {err}"
            ) from err

        self._database = Tape(file)

    def get_league(self) -> League:
        """Return the league, sorted with the most wins first."""
        self._league.sort(key=lambda player: player.wins, reverse=True)
        return self._league

    def get_players_score(self, name: str) -> int:
        """Return a player's wins, or 0 for an unknown player."""
        player = self._league.find(name)
        return player.wins if player is not None else 0

    def record_win(self, name: str) -> None:
        """Add a win for the player and save the league."""
        player = self._league.find(name)
        if player is not None:
            player.wins += 1
        else:
            self._league.append(Player(name, 1))
        self._database.write(_encode(self._league))


@contextlib.contextmanager
def open_player_store(path: str | os.PathLike) -> Iterator[FileSystemPlayerStore]:
    """Open (creating if needed) the file at ``path`` as a player store."""
    try:
        file = open(
            path,
            "r+",
            encoding="utf-8",
            newline="",
            opener=lambda name, flags: os.open(name, flags | os.O_CREAT, 0o666),
        )
    except OSError as err:
        raise StoreError(f"problem opening {path} {err}") from err

    with file:
        try:
            store = FileSystemPlayerStore(file)
        except StoreError as err:
            raise StoreError(
                f"problem creating file system player store, {err}"
            ) from err
        yield store