"""Per-run game state and the simulation step that advances it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
import random

from .road import Viewport
from .settings import ControlScheme
from .traffic import TrafficManager, advance_enemies
from .utils import BOOST_MULTIPLIER, ENEMY_SPEED, LANE_DASH_PERIOD, LANE_DASH_STEP, PLAYER_COLOR, Color, clamp
from .vehicle import PLAYER_BOTTOM_OFFSET, PlayerCar, Vehicle, is_colliding


class SessionState(Enum):
    """Lifecycle states of a play-through."""

    READY = auto()
    RUNNING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


@dataclass(slots=True)
class InputState:
    """Latest known up/down state per lowercase key name."""

    pressed: dict[str, bool] = field(default_factory=dict)

    def set(self, key_name: str, down: bool) -> None:
        self.pressed[key_name.lower()] = down

    def any_down(self, names: tuple[str, ...]) -> bool:
        return any(self.pressed.get(name.lower(), False) for name in names)


@dataclass(slots=True)
class StepResult:
    """What a single simulation step produced."""

    collided: bool = False
    new_highscore: bool = False


@dataclass(slots=True)
class Session:
    """Everything that changes while a run is in progress."""

    viewport: Viewport
    player: PlayerCar
    enemies: list[Vehicle] = field(default_factory=list)
    score: int = 0
    highscore: int = 0
    boosting: bool = False
    paused: bool = False
    game_over: bool = False
    started: bool = False
    lane_offset: int = 0

    @classmethod
    def create(cls, viewport: Viewport, highscore: int = 0) -> "Session":
        return cls(viewport=viewport, player=PlayerCar.spawn(viewport), highscore=highscore)

    @property
    def state(self) -> SessionState:
        if not self.started:
            return SessionState.READY
        if self.game_over:
            return SessionState.GAME_OVER
        if self.paused:
            return SessionState.PAUSED
        return SessionState.RUNNING

    @property
    def enemy_speed(self) -> int:
        return ENEMY_SPEED * (BOOST_MULTIPLIER if self.boosting else 1)

    def reset(self, player_color: Color = PLAYER_COLOR) -> None:
        """Start a fresh run; the highscore carries over."""
        self.player.reset(self.viewport, player_color)
        self.enemies.clear()
        self.score = 0
        self.boosting = False
        self.paused = False
        self.game_over = False
        self.started = True
        self.lane_offset = 0

    def resize(self, viewport: Viewport) -> None:
        """Adopt a new viewport and pull the player back onto the road."""
        self.viewport = viewport
        self.player.y = viewport.height - PLAYER_BOTTOM_OFFSET
        low, high = viewport.player_bounds(self.player.width)
        self.player.x = clamp(self.player.x, low, high)


def advance_lane_offset(offset: int, boosting: bool) -> int:
    """Scroll the dashed lane markings, wrapping once a full dash cycle passes."""
    offset += LANE_DASH_STEP * (BOOST_MULTIPLIER if boosting else 1)
    if offset >= LANE_DASH_PERIOD:
        offset = 0
    return offset


def simulate_step(
    session: Session,
    keys: InputState,
    controls: ControlScheme,
    traffic: TrafficManager,
    rng: random.Random,
) -> StepResult:
    """Advance a running session by one tick.

    Order matters: input and player motion, enemy motion and pruning, a
    possible spawn, then the collision check. A collision sets the game-over
    flag and skips scoring for this tick.
    """
    result = StepResult()
    session.lane_offset = advance_lane_offset(session.lane_offset, session.boosting)

    player = session.player
    player.steer(keys.any_down(controls.left), keys.any_down(controls.right))
    player.move(session.viewport)

    advance_enemies(session.enemies, session.enemy_speed, session.viewport.height)
    traffic.maybe_spawn(session.enemies, session.viewport, rng)

    for enemy in session.enemies:
        if is_colliding(player, enemy):
            session.game_over = True
            result.collided = True
            return result

    session.score += 1
    if session.score > session.highscore:
        session.highscore = session.score
        result.new_highscore = True
    return result
