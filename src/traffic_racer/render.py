"""Drawing of the road and vehicles. Reads session state, never writes it."""

from __future__ import annotations

import pygame

from .road import LANE_COUNT, Viewport
from .session import Session
from .utils import (
    LANE_DASH_PERIOD,
    LANE_MARK_COLOR,
    OUTLINE_COLOR,
    ROAD_COLOR,
    ROOF_COLOR,
    SIDEWALK_COLOR,
    WHEEL_COLOR,
)
from .vehicle import Vehicle, VehicleKind

DASH_LENGTH = 30
LANE_MARK_WIDTH = 4
OUTLINE_WIDTH = 2


def draw_road(surface: pygame.Surface, viewport: Viewport, lane_offset: int) -> None:
    """Paint asphalt, both sidewalks and the scrolling lane dividers."""
    surface.fill(ROAD_COLOR)
    margin = int(viewport.road_margin)
    if margin > 0:
        pygame.draw.rect(surface, SIDEWALK_COLOR, (0, 0, margin, viewport.height))
        pygame.draw.rect(surface, SIDEWALK_COLOR, (viewport.width - margin, 0, margin, viewport.height))

    for lane in range(1, LANE_COUNT):
        x = int(viewport.lane_left(lane))
        for y in range(-DASH_LENGTH + lane_offset, viewport.height, LANE_DASH_PERIOD):
            pygame.draw.line(surface, LANE_MARK_COLOR, (x, y), (x, y + DASH_LENGTH), LANE_MARK_WIDTH)


def vehicle_sprite(vehicle: Vehicle) -> pygame.Surface:
    """Render the body, roof and wheels of a vehicle into its own surface."""
    width, height = int(vehicle.width), int(vehicle.height)
    sprite = pygame.Surface((width, height), pygame.SRCALPHA)

    body = sprite.get_rect()
    pygame.draw.rect(sprite, vehicle.color, body)
    pygame.draw.rect(sprite, OUTLINE_COLOR, body, OUTLINE_WIDTH)

    roof = [
        (width * 0.2, height * 0.1),
        (width * 0.8, height * 0.1),
        (width * 0.7, height * 0.4),
        (width * 0.3, height * 0.4),
    ]
    pygame.draw.polygon(sprite, ROOF_COLOR, roof)
    pygame.draw.polygon(sprite, OUTLINE_COLOR, roof, OUTLINE_WIDTH)

    if vehicle.kind == VehicleKind.TRUCK:
        radius_x, radius_y = width * 0.2, height * 0.12
    else:
        radius_x, radius_y = width * 0.15, height * 0.1
    for center_x in (width * 0.25, width * 0.75):
        center_y = height * 0.85
        wheel = pygame.Rect(
            int(center_x - radius_x),
            int(center_y - radius_y),
            int(radius_x * 2),
            int(radius_y * 2),
        )
        pygame.draw.ellipse(sprite, WHEEL_COLOR, wheel)

    # Drawn nose-down, flipped so the car faces up the road.
    return pygame.transform.flip(sprite, False, True)


def draw_vehicle(surface: pygame.Surface, vehicle: Vehicle) -> None:
    surface.blit(vehicle_sprite(vehicle), (round(vehicle.x), round(vehicle.y)))


def render_frame(surface: pygame.Surface, session: Session) -> None:
    """Paint one complete frame of the playfield."""
    draw_road(surface, session.viewport, session.lane_offset)
    draw_vehicle(surface, session.player)
    for enemy in session.enemies:
        draw_vehicle(surface, enemy)
