"""Play a game of poker from the command line."""

from __future__ import annotations

import argparse
import re
import sys
from typing import IO, Optional, Sequence

from .game import Game, TexasHoldem, schedule_alert
from .store import StoreError, open_player_store

PLAYER_PROMPT = "Please enter the number of players: "
BAD_PLAYER_INPUT_ERR_MSG = (
    "Bad value received for number of players, please try again with a number"
)
BAD_WINNER_INPUT_MSG = "invalid winner input, expect format of 'PlayerName wins'"
DB_FILE_NAME = "game.db.json"

_INTEGER = re.compile(r"[+-]?[0-9]+")
_WINS = " wins"


def extract_winner(user_input: str) -> str:
    """Return the name from input of the form ``<name> wins``."""
    if _WINS not in user_input:
        raise ValueError(BAD_WINNER_INPUT_MSG)
    return user_input.replace(_WINS, "", 1)


class CLI:
    """Asks for the number of players, starts the game and records the winner."""

    def __init__(self, source: IO[str], out: IO[str], game: Game) -> None:
        self.source = source
        self.out = out
        self.game = game

    def play_poker(self) -> None:
        """Run one game, reporting bad input to the output stream."""
        self.out.write(PLAYER_PROMPT)
        self.out.flush()

        number_input = self._read_line().strip("\n")
        if not _INTEGER.fullmatch(number_input):
            self.out.write(BAD_PLAYER_INPUT_ERR_MSG)
            return

        self.game.start(int(number_input), self.out)

        try:
            winner = extract_winner(self._read_line())
        except ValueError as err:
            self.out.write(str(err))
            return

        self.game.finish(winner)

    def _read_line(self) -> str:
        line = self.source.readline()
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        return line


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Play one game of poker on standard input and output."""
    parser = argparse.ArgumentParser(
        prog="pokerleague-cli", description="Play poker and record the winner."
    )
    parser.add_argument(
        "--db", default=DB_FILE_NAME, help="league database file (JSON)"
    )
    args = parser.parse_args(argv)

    try:
        with open_player_store(args.db) as store:
            print("Let's play poker")
            print("Type {Name} wins to record a win")
            game = TexasHoldem(schedule_alert, store)
            CLI(sys.stdin, sys.stdout, game).play_poker()
    except StoreError as err:
        print(err, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())