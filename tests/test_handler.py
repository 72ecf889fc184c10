import threading

import pytest
from aiohttp import web
from aiohttp.test_utils import TestClient, TestServer

from killchime.args import Args
from killchime.handler import APP_STATE, BodyError, KillEvent, evaluate, update
from killchime.preset import Preset
from killchime.state import AppState, KillState


def make_preset(**overrides):
    values = dict(
        has_variant=False,
        has_voice=True,
        has_common=True,
        has_headshot=False,
        has_common_headshot=False,
        start=1,
        end=5,
    )
    values.update(overrides)
    return Preset(**values)


def body(kills, hs=0, steamid="111", name="alice"):
    return {
        "map": {"name": "de_dust2"},
        "player": {
            "steamid": steamid,
            "name": name,
            "state": {"round_kills": kills, "round_killhs": hs},
        },
    }


class FakeStream:
    def __init__(self):
        self.calls = []
        self.done = threading.Event()

    def play(self, paths, volume=1.0):
        names = [str(p) for p in paths]
        self.calls.append((names, volume))
        self.done.set()
        return names


def make_state(**args):
    return AppState(args=Args(**args), preset=make_preset())


def test_missing_map_is_ignored():
    state = make_state()
    data = body(1)
    del data["map"]
    assert evaluate(state, data) is None
    assert state.snapshot() == KillState()


def test_first_kill_creates_event_and_records():
    state = make_state()
    event = evaluate(state, body(1, hs=1))
    assert event == KillEvent(
        player_name="alice",
        sound_num=1,
        current_kills=1,
        origin_hs_kills=0,
        current_hs_kills=1,
        sound_num_max=5,
    )
    assert state.snapshot() == KillState(steamid="111", ply_kills=1, ply_hs_kills=1)


def test_sound_number_clamped_to_preset_end():
    state = make_state()
    state.record("111", 6, 0)
    event = evaluate(state, body(7))
    assert event.sound_num == state.preset.end
    assert event.current_kills == 7


def test_same_kill_count_gives_no_event():
    state = make_state()
    evaluate(state, body(2))
    assert evaluate(state, body(2)) is None


def test_other_player_not_announced_but_recorded():
    state = make_state()
    state.record("111", 0, 0)
    assert evaluate(state, body(3, steamid="222")) is None
    assert state.snapshot().steamid == "222"


def test_whitelist_mismatch_leaves_state():
    state = make_state(steamid="999")
    assert evaluate(state, body(1, steamid="111")) is None
    assert state.snapshot() == KillState()


def test_whitelist_match_creates_event():
    state = make_state(steamid="111")
    assert evaluate(state, body(1, steamid="111")).current_kills == 1


def test_origin_hs_kills_from_previous_update():
    state = make_state()
    evaluate(state, body(1, hs=1))
    event = evaluate(state, body(2, hs=2))
    assert (event.origin_hs_kills, event.current_hs_kills) == (1, 2)


def test_missing_player_state_raises():
    data = body(1)
    del data["player"]["state"]
    with pytest.raises(BodyError):
        evaluate(make_state(), data)


def test_negative_kill_count_raises():
    with pytest.raises(BodyError):
        evaluate(make_state(), body(-1))


def test_non_object_body_raises():
    with pytest.raises(BodyError):
        evaluate(make_state(), [1, 2])


@pytest.mark.asyncio
async def test_update_plays_sounds(tmp_path):
    stream = FakeStream()
    state = AppState(
        args=Args(volume=0.25), preset=make_preset(), stream=stream, sound_root=tmp_path
    )
    app = web.Application()
    app[APP_STATE] = state
    app.router.add_post("/", update)
    async with TestClient(TestServer(app)) as client:
        resp = await client.post("/", json=body(1))
        assert resp.status == 200
    assert stream.done.wait(5)
    assert stream.calls == [
        (
            [
                str(tmp_path / "crossfire" / "common.wav"),
                str(tmp_path / "crossfire" / "1.wav"),
            ],
            0.25,
        )
    ]


@pytest.mark.asyncio
async def test_update_rejects_bad_shape():
    state = make_state()
    app = web.Application()
    app[APP_STATE] = state
    app.router.add_post("/", update)
    data = body(1)
    del data["player"]["state"]
    async with TestClient(TestServer(app)) as client:
        resp = await client.post("/", json=data)
        assert resp.status == 422
    assert state.snapshot() == KillState()