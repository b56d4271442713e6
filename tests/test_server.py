import asyncio
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

import pytest
from aiohttp.test_utils import TestClient, TestServer

from pokerleague.game import TexasHoldem, schedule_alert
from pokerleague.league import League, Player
from pokerleague.server import PlayerServer, main
from pokerleague.store import FileSystemPlayerStore

TEMPLATE = "<html><body>poker</body></html>"


@dataclass
class GameSpy:
    started_with: int = 0
    start_called: bool = False
    blind_alert: str = ""
    written: Optional[int] = None
    finished_with: str = ""
    finish_called: bool = False

    def start(self, number_of_players, to):
        self.start_called = True
        self.started_with = number_of_players
        self.written = to.write(self.blind_alert)

    def finish(self, winner):
        self.finish_called = True
        self.finished_with = winner


@dataclass
class StubPlayerStore:
    scores: dict = field(default_factory=dict)
    win_calls: list = field(default_factory=list)
    league: Optional[League] = None

    def get_players_score(self, name):
        return self.scores.get(name, 0)

    def record_win(self, name):
        self.win_calls.append(name)

    def get_league(self):
        return self.league


@pytest.fixture
def template(tmp_path):
    path = tmp_path / "game.html"
    path.write_text(TEMPLATE, encoding="utf-8")
    return path


def make_client(store, game, template_path):
    server = PlayerServer(store, game, template_path)
    return TestClient(TestServer(server.make_app()))


async def eventually(check, timeout=1.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while loop.time() < deadline:
        if check():
            return True
        await asyncio.sleep(0.01)
    return check()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name, status, body",
    [("Pepper", 200, "20"), ("Floyd", 200, "10"), ("Apollo", 404, "0")],
)
async def test_get_players(template, name, status, body):
    store = StubPlayerStore(scores={"Pepper": 20, "Floyd": 10})
    async with make_client(store, GameSpy(), template) as client:
        response = await client.get(f"/players/{name}")
        assert response.status == status
        assert await response.text() == body


@pytest.mark.asyncio
async def test_post_records_win_and_returns_accepted(template):
    store = StubPlayerStore()
    async with make_client(store, GameSpy(), template) as client:
        response = await client.post("/players/Pepper")
        assert response.status == 202
    assert store.win_calls == ["Pepper"]


@pytest.mark.asyncio
async def test_other_methods_on_players_do_nothing(template):
    store = StubPlayerStore(scores={"Pepper": 20})
    async with make_client(store, GameSpy(), template) as client:
        response = await client.put("/players/Pepper")
        assert response.status == 200
        assert await response.text() == ""
    assert store.win_calls == []


@pytest.mark.asyncio
async def test_league_returned_as_json(template):
    wanted = League([Player("Cleo", 32), Player("Chris", 20), Player("Tiest", 14)])
    store = StubPlayerStore(league=wanted)
    async with make_client(store, GameSpy(), template) as client:
        response = await client.get("/league")
        assert response.status == 200
        assert response.headers["Content-Type"] == "application/json"
        assert await response.json() == [
            {"name": "Cleo", "wins": 32},
            {"name": "Chris", "wins": 20},
            {"name": "Tiest", "wins": 14},
        ]


@pytest.mark.asyncio
async def test_missing_league_is_null(template):
    async with make_client(StubPlayerStore(), GameSpy(), template) as client:
        response = await client.get("/league")
        assert await response.text() == "null\n"


@pytest.mark.asyncio
async def test_get_game_returns_page(template):
    async with make_client(StubPlayerStore(), GameSpy(), template) as client:
        response = await client.get("/game")
        assert response.status == 200
        assert await response.text() == TEMPLATE


def test_missing_template_is_an_error(tmp_path):
    with pytest.raises(OSError, match="problem opening"):
        PlayerServer(StubPlayerStore(), GameSpy(), tmp_path / "missing.html")


@pytest.mark.asyncio
async def test_websocket_message_is_winner(template):
    game = GameSpy()
    async with make_client(StubPlayerStore(), game, template) as client:
        ws = await client.ws_connect("/ws")
        await ws.send_str("3")
        await ws.send_str("Ruth")
        finished = await eventually(lambda: game.finished_with == "Ruth")
        await ws.close()
    assert finished


@pytest.mark.asyncio
async def test_websocket_game_sends_blind_alerts(template):
    game = GameSpy(blind_alert="Blind is 100")
    async with make_client(StubPlayerStore(), game, template) as client:
        ws = await client.ws_connect("/ws")
        await ws.send_str("3")
        await ws.send_str("Ruth")

        assert await eventually(lambda: game.started_with == 3)
        assert await eventually(lambda: game.finished_with == "Ruth")
        assert await ws.receive_str(timeout=1) == "Blind is 100"
        await ws.close()
    assert game.written == len("Blind is 100")


@pytest.mark.asyncio
async def test_non_numeric_player_count_starts_with_zero(template):
    game = GameSpy()
    async with make_client(StubPlayerStore(), game, template) as client:
        ws = await client.ws_connect("/ws")
        await ws.send_str("many")
        await ws.send_str("Ruth")
        assert await eventually(lambda: game.finish_called)
        await ws.close()
    assert game.start_called is True
    assert game.started_with == 0


@pytest.mark.asyncio
async def test_alerts_from_timer_threads_reach_the_socket(template):
    store = StubPlayerStore()
    game = TexasHoldem(
        lambda duration, amount, to: schedule_alert(timedelta(0), amount, to), store
    )
    async with make_client(store, game, template) as client:
        ws = await client.ws_connect("/ws")
        await ws.send_str("2")
        received = {await ws.receive_str(timeout=2) for _ in range(11)}
        await ws.send_str("Ruth")
        recorded = await eventually(lambda: store.win_calls == ["Ruth"])
        await ws.close()

    assert received == {
        f"Blind is now {amount}\n"
        for amount in (100, 200, 300, 400, 500, 600, 800, 1000, 2000, 4000, 8000)
    }
    assert recorded


@pytest.mark.asyncio
async def test_recording_wins_and_retrieving_them(tmp_path, template):
    db = tmp_path / "db.json"
    db.write_text("[]", encoding="utf-8")
    with open(db, "r+", encoding="utf-8", newline="") as database:
        store = FileSystemPlayerStore(database)
        async with make_client(store, GameSpy(), template) as client:
            for _ in range(3):
                await client.post("/players/Pepper")

            score = await client.get("/players/Pepper")
            assert score.status == 200
            assert await score.text() == "3"

            league = await client.get("/league")
            assert league.status == 200
            assert await league.json() == [{"name": "Pepper", "wins": 3}]


def test_main_fails_when_store_cannot_open(tmp_path):
    assert main(["--db", str(tmp_path)]) == 1


def test_main_fails_without_template(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["--db", str(tmp_path / "game.db.json")]) == 1
    assert (tmp_path / "game.db.json").read_text(encoding="utf-8") == "[]"