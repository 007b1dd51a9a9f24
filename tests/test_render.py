from __future__ import annotations

import copy

import pygame

from traffic_racer.render import render_frame, vehicle_sprite
from traffic_racer.road import Viewport
from traffic_racer.session import Session
from traffic_racer.utils import ROAD_COLOR, SIDEWALK_COLOR
from traffic_racer.vehicle import Vehicle, VehicleKind


def _session() -> Session:
    session = Session.create(Viewport(1000, 760))
    session.reset((10, 20, 30))
    session.lane_offset = 20
    session.enemies.append(Vehicle.of_kind(VehicleKind.TRUCK, 330, 40, (200, 150, 180)))
    session.enemies.append(Vehicle.of_kind(VehicleKind.CAR, 500, -50, (180, 200, 150)))
    return session


def test_render_does_not_mutate_session() -> None:
    pygame.init()
    session = _session()
    before = copy.deepcopy(session)
    surface = pygame.Surface(session.viewport.size)
    render_frame(surface, session)
    assert session == before


def test_render_paints_sidewalks_and_road() -> None:
    pygame.init()
    session = _session()
    surface = pygame.Surface(session.viewport.size)
    render_frame(surface, session)
    assert tuple(surface.get_at((10, 400)))[:3] == SIDEWALK_COLOR
    assert tuple(surface.get_at((990, 400)))[:3] == SIDEWALK_COLOR
    assert tuple(surface.get_at((310, 400)))[:3] == ROAD_COLOR


def test_vehicle_sprite_is_flipped_with_wheels_at_top() -> None:
    pygame.init()
    car = Vehicle.of_kind(VehicleKind.CAR, 0, 0, (200, 200, 200))
    sprite = vehicle_sprite(car)
    assert sprite.get_size() == (50, 100)
    # Wheels sit near the bottom of the template, so after the flip they are near the top.
    assert tuple(sprite.get_at((12, 15)))[:3] == (34, 34, 34)
    assert tuple(sprite.get_at((25, 97)))[:3] != (34, 34, 34)
