"""Enemy traffic: lane-based spawn placement, movement and pruning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
import logging
import random

from .road import LANE_COUNT, Viewport
from .utils import SPAWN_CHANCE, random_pastel_color
from .vehicle import VEHICLE_SIZES, Vehicle, VehicleKind

log = logging.getLogger(__name__)

MIN_SPAWN_DISTANCE_Y = 200
SPAWN_TABLE: tuple[VehicleKind, ...] = (
    VehicleKind.CAR,
    VehicleKind.CAR,
    VehicleKind.CAR,
    VehicleKind.TRUCK,
)


def can_spawn_at(
    x: float,
    y: float,
    width: float,
    height: float,
    existing: Iterable[Vehicle],
    min_distance_y: float = MIN_SPAWN_DISTANCE_Y,
) -> bool:
    """Reject a spot only when an enemy is close on both axes at once."""
    for enemy in existing:
        if abs(enemy.x - x) < width and abs(enemy.y - y) < min_distance_y:
            return False
    return True


def advance_enemies(enemies: list[Vehicle], speed: float, viewport_height: float) -> int:
    """Scroll enemies down and drop the ones past the bottom edge.

    The list is rebuilt in place so callers holding a reference see the result.
    Returns how many enemies were removed.
    """
    for enemy in enemies:
        enemy.y += speed
    kept = [enemy for enemy in enemies if enemy.y <= viewport_height]
    removed = len(enemies) - len(kept)
    enemies[:] = kept
    return removed


@dataclass(slots=True)
class TrafficManager:
    """Spawner for enemy cars and trucks."""

    max_enemies: int = 4
    spawn_chance: float = SPAWN_CHANCE
    max_tries: int = 15
    lateral_jitter: float = 10.0
    spawn_depth: float = 300.0

    def maybe_spawn(self, enemies: list[Vehicle], viewport: Viewport, rng: random.Random) -> Vehicle | None:
        """Roll the per-tick spawn chance and try to place one enemy."""
        if rng.random() >= self.spawn_chance:
            return None
        return self.spawn_enemy(enemies, viewport, rng)

    def spawn_enemy(self, enemies: list[Vehicle], viewport: Viewport, rng: random.Random) -> Vehicle | None:
        """Place a random car or truck above the screen, or give up quietly."""
        if len(enemies) >= self.max_enemies:
            return None

        kind = rng.choice(SPAWN_TABLE)
        width, height = VEHICLE_SIZES[kind]
        # Skipped as a candidate only; enemies already in it stay put.
        empty_lane = rng.randrange(LANE_COUNT)

        for _ in range(self.max_tries):
            lane = rng.randrange(LANE_COUNT)
            if lane == empty_lane:
                continue
            x = viewport.lane_center(lane) - width / 2 + rng.uniform(-self.lateral_jitter, self.lateral_jitter)
            y = -height - rng.random() * self.spawn_depth
            if can_spawn_at(x, y, width, height, enemies):
                enemy = Vehicle.of_kind(kind, x, y, random_pastel_color(rng))
                enemies.append(enemy)
                return enemy

        log.debug("no free spot for a %s after %d tries", kind.value, self.max_tries)
        return None
