from __future__ import annotations

import random

import pytest

from traffic_racer.road import Viewport
from traffic_racer.session import InputState, Session, SessionState, advance_lane_offset, simulate_step
from traffic_racer.settings import ControlScheme
from traffic_racer.traffic import TrafficManager
from traffic_racer.vehicle import Vehicle, VehicleKind

VIEWPORT = Viewport(1000, 760)


def _session() -> Session:
    session = Session.create(VIEWPORT)
    session.reset()
    return session


def _step(session: Session, keys: InputState | None = None, spawn_chance: float = 0.0):
    return simulate_step(
        session,
        keys or InputState(),
        ControlScheme(),
        TrafficManager(spawn_chance=spawn_chance),
        random.Random(0),
    )


def test_lane_offset_wraps() -> None:
    assert advance_lane_offset(0, boosting=False) == 10
    assert advance_lane_offset(40, boosting=True) == 0
    assert advance_lane_offset(50, boosting=False) == 0


def test_session_states() -> None:
    session = Session.create(VIEWPORT)
    assert session.state == SessionState.READY
    session.reset()
    assert session.state == SessionState.RUNNING
    session.paused = True
    assert session.state == SessionState.PAUSED
    session.game_over = True
    assert session.state == SessionState.GAME_OVER


def test_step_scores_and_tracks_highscore() -> None:
    session = _session()
    session.highscore = 2
    results = [_step(session) for _ in range(3)]
    assert session.score == 3
    assert session.highscore == 3
    assert [r.new_highscore for r in results] == [False, False, True]


def test_step_reads_keys_case_insensitively() -> None:
    session = _session()
    keys = InputState()
    keys.set("D", True)
    start = session.player.x
    _step(session, keys)
    assert session.player.speed_x == 1
    assert session.player.x == start + 1


def test_held_opposite_keys_cancel_without_friction() -> None:
    session = _session()
    session.player.speed_x = 3.0
    keys = InputState()
    keys.set("left", True)
    keys.set("right", True)
    _step(session, keys)
    assert session.player.speed_x == pytest.approx(3.0)


def test_boost_doubles_enemy_speed_and_dash_rate() -> None:
    session = _session()
    session.boosting = True
    session.enemies.append(Vehicle.of_kind(VehicleKind.CAR, 300, 0, (1, 2, 3)))
    _step(session)
    assert session.enemies[0].y == 10
    assert session.lane_offset == 20


def test_enemies_below_screen_are_removed() -> None:
    session = _session()
    session.enemies.append(Vehicle.of_kind(VehicleKind.CAR, 300, 758, (1, 2, 3)))
    _step(session)
    assert session.enemies == []


def test_collision_ends_run_without_scoring() -> None:
    session = _session()
    player = session.player
    session.enemies.append(Vehicle.of_kind(VehicleKind.CAR, player.x, player.y - 5, (1, 2, 3)))
    result = _step(session)
    assert result.collided
    assert session.game_over
    assert session.score == 0


def test_reset_keeps_highscore() -> None:
    session = _session()
    for _ in range(5):
        _step(session)
    session.enemies.append(Vehicle.of_kind(VehicleKind.TRUCK, 300, 100, (1, 2, 3)))
    session.reset((9, 9, 9))
    assert session.score == 0
    assert session.highscore == 5
    assert session.enemies == []
    assert session.player.color == (9, 9, 9)


def test_spawning_during_steps_keeps_cap() -> None:
    session = _session()
    for _ in range(300):
        result = _step(session, spawn_chance=1.0)
        assert len(session.enemies) <= 4
        if result.collided:
            break
