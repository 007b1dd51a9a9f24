from __future__ import annotations

import pytest

from traffic_racer.road import Viewport, road_margin
from traffic_racer.vehicle import PlayerCar, Vehicle, VehicleKind, is_colliding


def _car(x: float, y: float, width: float = 50, height: float = 100) -> Vehicle:
    return Vehicle(x=x, y=y, width=width, height=height, color=(200, 200, 200))


def test_identical_rectangles_collide() -> None:
    assert is_colliding(_car(100, 100), _car(100, 100))


@pytest.mark.parametrize(
    "other",
    [
        _car(160, 100),  # right of
        _car(40, 100),  # left of
        _car(100, 210),  # below
        _car(100, -10),  # above
    ],
)
def test_separating_axis_cases_do_not_collide(other: Vehicle) -> None:
    box = _car(100, 100)
    assert not is_colliding(box, other)
    assert not is_colliding(other, box)


@pytest.mark.parametrize(
    "other",
    [
        _car(150, 100),  # shares the right edge
        _car(100, 200),  # shares the bottom edge
    ],
)
def test_touching_edges_count_as_collision(other: Vehicle) -> None:
    box = _car(100, 100)
    assert is_colliding(box, other) is True
    assert is_colliding(other, box) is True


def test_partial_overlap_collides_both_ways() -> None:
    a = _car(100, 100)
    b = _car(130, 150, width=70, height=160)
    assert is_colliding(a, b)
    assert is_colliding(b, a)


def test_shifted_clear_of_both_axes_never_collides() -> None:
    a = _car(100, 100)
    b = _car(100 + a.width + 1, 100 + a.height + 1)
    assert not is_colliding(a, b)


def test_vehicle_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        Vehicle(x=0, y=0, width=0, height=10, color=(1, 2, 3))


def test_vehicle_of_kind_uses_fixed_footprint() -> None:
    truck = Vehicle.of_kind(VehicleKind.TRUCK, 10, 20, (1, 2, 3))
    assert (truck.width, truck.height) == (70, 160)
    car = Vehicle.of_kind(VehicleKind.CAR, 10, 20, (1, 2, 3))
    assert (car.width, car.height) == (50, 100)


def test_road_margin_for_wide_viewport() -> None:
    assert road_margin(1000) == 300
    assert Viewport(1000, 760).road_margin == 300


def test_viewport_fit_enforces_minimum() -> None:
    viewport = Viewport.fit(250, 100)
    assert viewport.width == 400
    assert viewport.height == 300
    assert viewport.road_margin == 0


def test_player_spawns_in_middle_lane() -> None:
    viewport = Viewport(1000, 760)
    player = PlayerCar.spawn(viewport)
    assert player.x == 300 + 80 * 2 + 40 - 25
    assert player.y == 760 - 150
    assert player.speed_x == 0


def test_player_friction_decays_speed() -> None:
    player = PlayerCar.spawn(Viewport(1000, 760))
    player.speed_x = 5.0
    player.steer(left=False, right=False)
    assert player.speed_x == pytest.approx(4.0)


def test_player_speed_is_capped() -> None:
    player = PlayerCar.spawn(Viewport(1000, 760))
    for _ in range(25):
        player.steer(left=False, right=True)
    assert player.speed_x == player.max_speed_x
    for _ in range(40):
        player.steer(left=True, right=False)
    assert player.speed_x == -player.max_speed_x


def test_player_stays_on_road() -> None:
    viewport = Viewport(1000, 760)
    player = PlayerCar.spawn(viewport)
    low, high = viewport.player_bounds(player.width)
    for _ in range(100):
        player.steer(left=True, right=False)
        player.move(viewport)
        assert low <= player.x <= high
    assert player.x == 300
    for _ in range(100):
        player.steer(left=False, right=True)
        player.move(viewport)
        assert low <= player.x <= high
    assert player.x == 1000 - 300 - player.width
