"""HTTP and WebSocket server for the poker league."""

from __future__ import annotations

import argparse
import asyncio
import logging
import re
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from aiohttp import WSMsgType, web

from .game import Game, TexasHoldem, schedule_alert
from .store import PlayerStore, StoreError, _encode as _encode_league
from .store import open_player_store

JSON_CONTENT_TYPE = "application/json"
HTML_TEMPLATE_PATH = "game.html"
DB_FILE_NAME = "game.db.json"
PORT = 5000

_INTEGER = re.compile(r"[+-]?[0-9]+")

log = logging.getLogger(__name__)


class WebSocketWriter:
    """A writable stream whose every write is sent as a WebSocket text message.

    It may be written to from the event loop's thread or from any other.
    """

    def __init__(
        self,
        ws: web.WebSocketResponse,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._ws = ws
        self._loop = loop if loop is not None else asyncio.get_running_loop()
        self._pending: set[asyncio.Task] = set()

    def write(self, data: Union[str, bytes]) -> int:
        """Send ``data`` as one text message and return its length."""
        if isinstance(data, (bytes, bytearray)):
            text = bytes(data).decode("utf-8", errors="replace")
        else:
            text = data

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is self._loop:
            task = self._loop.create_task(self._ws.send_str(text))
            self._pending.add(task)
            task.add_done_callback(self._sent)
        else:
            asyncio.run_coroutine_threadsafe(
                self._ws.send_str(text), self._loop
            ).result()
        return len(data)

    def _sent(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            log.warning("error writing to websocket %s", task.exception())


async def _wait_for_msg(ws: web.WebSocketResponse) -> str:
    msg = await ws.receive()
    if msg.type == WSMsgType.TEXT:
        return msg.data
    if msg.type == WSMsgType.BINARY:
        return msg.data.decode("utf-8", errors="replace")
    log.warning("error reading from websocket %s", msg.type.name)
    return ""


def _parse_players(text: str) -> int:
    return int(text) if _INTEGER.fullmatch(text) else 0


class PlayerServer:
    """Serves scores, the league table, the game page and the game socket."""

    def __init__(
        self,
        store: PlayerStore,
        game: Game,
        template_path: Union[str, Path] = HTML_TEMPLATE_PATH,
    ) -> None:
        try:
            self.template = Path(template_path).read_text(encoding="utf-8")
        except OSError as err:
            raise OSError(f"problem opening {template_path} {err}") from err
        self.store = store
        self.game = game

    def make_app(self) -> web.Application:
        """Build the web application with all routes."""
        app = web.Application()
        app.router.add_route("*", "/league", self._league)
        app.router.add_route("*", "/players/{name:.*}", self._players)
        app.router.add_route("*", "/game", self._play_game)
        app.router.add_get("/ws", self._web_socket)
        return app

    async def _league(self, request: web.Request) -> web.Response:
        league = self.store.get_league()
        body = "null\n" if league is None else _encode_league(league)
        return web.Response(
            body=body.encode("utf-8"),
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )

    async def _players(self, request: web.Request) -> web.Response:
        player = request.match_info["name"]
        if request.method == "POST":
            self.store.record_win(player)
            return web.Response(status=202)
        if request.method == "GET":
            score = self.store.get_players_score(player)
            return web.Response(status=404 if score == 0 else 200, text=str(score))
        return web.Response()

    async def _play_game(self, request: web.Request) -> web.Response:
        return web.Response(text=self.template, content_type="text/html")

    async def _web_socket(self, request: web.Request) -> web.WebSocketResponse:
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        writer = WebSocketWriter(ws)

        number_of_players = _parse_players(await _wait_for_msg(ws))
        self.game.start(number_of_players, writer)

        winner = await _wait_for_msg(ws)
        self.game.finish(winner)

        # Keep the connection open so that later blind alerts still arrive.
        async for _ in ws:
            pass
        return ws


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Serve the poker league over HTTP."""
    parser = argparse.ArgumentParser(
        prog="pokerleague-server", description="Serve the poker league."
    )
    parser.add_argument("--db", default=DB_FILE_NAME, help="league database file")
    parser.add_argument("--port", type=int, default=PORT, help="port to listen on")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    try:
        with open_player_store(args.db) as store:
            game = TexasHoldem(schedule_alert, store)
            try:
                server = PlayerServer(store, game)
            except OSError as err:
                log.error("problem creating player server %s", err)
                return 1
            try:
                web.run_app(server.make_app(), port=args.port, print=None)
            except OSError as err:
                log.error("could not listen on port %d %s", args.port, err)
                return 1
    except StoreError as err:
        log.error("%s", err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())