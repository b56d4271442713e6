# pokerleague

A small poker league tracker. It keeps each player's wins in a JSON file.
You can record results in two ways: in a terminal session, or through a web
server with an HTTP API and a WebSocket. When a game starts, blind alerts are
scheduled at intervals that depend on the number of players.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install ".[test]"
```

## The league file

Both commands use `game.db.json` in the current directory unless you pass
`--db PATH`. If the file does not exist, it is created. An empty file starts
as an empty league (`[]`). Each entry holds a player's name and wins:

```json
[{"name":"Chris","wins":33},{"name":"Cleo","wins":10}]
```

When the file is read, the field names `name` and `wins` are matched without
regard to case, so `{"Name": "Cleo", "Wins": 10}` is read too. After every
recorded win the whole file is rewritten in the form shown above.

## Playing from the terminal

```
pokerleague-cli [--db PATH]
```

The command prints a greeting, then asks for the number of players. If the
answer is not a whole number, it prints
`Bad value received for number of players, please try again with a number`
and stops. Otherwise the game starts, and blind alerts such as
`Blind is now 200` are printed as they fall due. Then type the result in the
form `{Name} wins`:

```
Please enter the number of players: 3
Chris wins
```

That records one win for Chris. Input without ` wins` in it is rejected with
`invalid winner input, expect format of 'PlayerName wins'`. If the league file
cannot be opened or read, the error is printed to standard error and the
command exits with status 1.

### Blind schedule

The blinds are 100, 200, 300, 400, 500, 600, 800, 1000, 2000, 4000 and 8000.
The first alert fires at once. Each later one fires `5 + number_of_players`
minutes after the one before it.

## Running the web server

```
pokerleague-server [--db PATH] [--port PORT]
```

The server listens on port 5000 by default.

| Method | Path              | Effect                                                                 |
|--------|-------------------|------------------------------------------------------------------------|
| GET    | `/league`         | The league as JSON (`application/json`), sorted by wins, most first     |
| GET    | `/players/{name}` | The player's win count as text; status 404 (body `0`) if no wins        |
| POST   | `/players/{name}` | Records a win for the player; status 202                                |
| GET    | `/game`           | The contents of `game.html` as an HTML page                            |
| GET    | `/ws`             | WebSocket for playing a game                                           |

On `/ws`, the first message is the number of players (anything that is not a
whole number counts as 0). It starts the game, and blind alerts come back over
the same socket as text messages. The second message is the winner's name,
which records a win. The socket then stays open so later alerts still arrive.

### What is not included

The package ships no game page. The server reads a `game.html` file from the
current directory when it starts and serves it unchanged at `/game`; without
that file the server logs an error and exits with status 1.

## Using it as a library

```python
from pokerleague.store import open_player_store
from pokerleague.game import TexasHoldem, schedule_alert

with open_player_store("game.db.json") as store:
    store.record_win("Pepper")
    print(store.get_players_score("Pepper"))
    for player in store.get_league():
        print(player.name, player.wins)
```

- `pokerleague.league`: `Player` (a dataclass with `name` and `wins`),
  `League` (a list of players with `find(name)`), and `load_league(reader)`,
  which raises `ValueError` on bad JSON.
- `pokerleague.tape`: `Tape`, whose `write(data)` replaces a file's contents.
- `pokerleague.store`: `FileSystemPlayerStore` over an open text file,
  `open_player_store(path)` as a context manager, the `PlayerStore` protocol,
  and `StoreError`.
- `pokerleague.game`: `TexasHoldem(alerter, store)` with
  `start(number_of_players, alerts_destination)` and `finish(winner)`, and
  `schedule_alert(duration, amount, to)`, which writes the alert from a timer
  thread once `duration` (a `timedelta`) has passed.
- `pokerleague.cli`: `CLI(source, out, game)` with `play_poker()`, and
  `extract_winner(user_input)`.
- `pokerleague.server`: `PlayerServer(store, game, template_path)` with
  `make_app()`, returning an aiohttp application, and `WebSocketWriter`.