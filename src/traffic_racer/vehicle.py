"""Car and truck entities plus the rectangle overlap test."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .road import LANE_WIDTH, Viewport
from .utils import PLAYER_COLOR, Color, clamp

PLAYER_ACCELERATION = 1.0
PLAYER_FRICTION = 0.8
PLAYER_MAX_SPEED_X = 10.0
PLAYER_BOTTOM_OFFSET = 150


class VehicleKind(str, Enum):
    """Vehicle categories; each has a fixed footprint."""

    CAR = "car"
    TRUCK = "truck"


VEHICLE_SIZES: dict[VehicleKind, tuple[int, int]] = {
    VehicleKind.CAR: (50, 100),
    VehicleKind.TRUCK: (70, 160),
}


class Box(Protocol):
    x: float
    y: float
    width: float
    height: float


def is_colliding(a: Box, b: Box) -> bool:
    """Axis-aligned bounding box test: true unless a separating axis exists."""
    return not (
        a.x > b.x + b.width
        or a.x + a.width < b.x
        or a.y > b.y + b.height
        or a.y + a.height < b.y
    )


@dataclass(slots=True)
class Vehicle:
    """A car or truck on the road, positioned by its top-left corner."""

    x: float
    y: float
    width: float
    height: float
    color: Color
    kind: VehicleKind = VehicleKind.CAR

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"vehicle size must be positive, got {self.width}x{self.height}")

    @classmethod
    def of_kind(cls, kind: VehicleKind, x: float, y: float, color: Color) -> "Vehicle":
        width, height = VEHICLE_SIZES[kind]
        return cls(x=x, y=y, width=width, height=height, color=color, kind=kind)


@dataclass(slots=True)
class PlayerCar(Vehicle):
    """The steerable car; only moves sideways."""

    speed_x: float = 0.0
    max_speed_x: float = PLAYER_MAX_SPEED_X

    @classmethod
    def spawn(cls, viewport: Viewport, color: Color = PLAYER_COLOR) -> "PlayerCar":
        width, height = VEHICLE_SIZES[VehicleKind.CAR]
        player = cls(x=0.0, y=0.0, width=width, height=height, color=color)
        player.reset(viewport, color)
        return player

    def reset(self, viewport: Viewport, color: Color) -> None:
        """Park the car in the middle lane near the bottom of the screen."""
        self.x = viewport.road_margin + LANE_WIDTH * 2 + LANE_WIDTH / 2 - self.width / 2
        self.y = viewport.height - PLAYER_BOTTOM_OFFSET
        self.speed_x = 0.0
        self.color = color

    def steer(self, left: bool, right: bool) -> None:
        """Accelerate toward held directions, or coast down when none is held."""
        if left:
            self.speed_x -= PLAYER_ACCELERATION
        if right:
            self.speed_x += PLAYER_ACCELERATION
        if not (left or right):
            self.speed_x *= PLAYER_FRICTION
        self.speed_x = clamp(self.speed_x, -self.max_speed_x, self.max_speed_x)

    def move(self, viewport: Viewport) -> None:
        """Apply horizontal speed and keep the whole car on the road."""
        self.x += self.speed_x
        low, high = viewport.player_bounds(self.width)
        if self.x < low:
            self.x = low
        if self.x > high:
            self.x = high
