"""Game loop, session state machine and collaborator wiring."""

from __future__ import annotations

import logging
import random
import pygame

from .hud import Hud
from .render import render_frame
from .road import Viewport
from .scheduler import FrameScheduler
from .session import InputState, Session, SessionState, simulate_step
from .settings import GameSettings, SettingsManager
from .storage import ValueStore, load_highscore
from .traffic import TrafficManager
from .utils import (
    FPS,
    HIGHSCORE_KEY,
    HIGHSCORE_TTL_DAYS,
    SCORES_FILE,
    ensure_data_dirs,
    random_pastel_color,
)

log = logging.getLogger(__name__)


class RacerGame:
    """Single-screen traffic dodging game."""

    def __init__(self, store: ValueStore | None = None, rng: random.Random | None = None) -> None:
        pygame.init()
        pygame.font.init()
        ensure_data_dirs()

        self.settings_manager = SettingsManager()
        self.settings: GameSettings = self.settings_manager.settings
        display = self.settings.display

        self.viewport = Viewport.fit(display.width, display.height)
        self.screen = self._open_window(self.viewport)
        pygame.display.set_caption("Traffic Racer")
        self.clock = pygame.time.Clock()
        self.frame = pygame.Surface(self.viewport.size)

        self.hud = Hud(
            body_font=pygame.font.SysFont("consolas", 26, bold=True),
            small_font=pygame.font.SysFont("consolas", 18),
        )
        self.hud.layout(self.viewport.size)

        self.store = store or ValueStore(SCORES_FILE)
        self.rng = rng or random.Random()
        self.traffic = TrafficManager()
        self.scheduler = FrameScheduler()
        self.tick_handle: int | None = None
        self.keys = InputState()

        self.session = Session.create(self.viewport, highscore=load_highscore(self.store, HIGHSCORE_KEY))
        self.hud.update_highscore(self.session.highscore)

        self.start_game()

    def _open_window(self, viewport: Viewport) -> pygame.Surface:
        flags = pygame.FULLSCREEN if self.settings.display.fullscreen else pygame.RESIZABLE
        return pygame.display.set_mode(viewport.size, flags)

    @property
    def state(self) -> SessionState:
        return self.session.state

    # --- State machine ------------------------------------------------------

    def start_game(self) -> None:
        """Begin a fresh run from any state."""
        self._cancel_tick()
        self.session.reset(random_pastel_color(self.rng))
        self.hud.update_score(0)
        self.hud.hide_overlay()
        self.hud.show_running_controls()
        render_frame(self.frame, self.session)
        log.info("run started (highscore %d)", self.session.highscore)
        self._schedule_tick()

    def pause_game(self) -> None:
        """Freeze a running session."""
        if self.state != SessionState.RUNNING:
            return
        self._cancel_tick()
        self.session.paused = True
        self.hud.show_paused_controls()

    def resume_game(self) -> None:
        """Continue a paused session; ignored once the run is over."""
        if self.session.game_over:
            return
        self.session.paused = False
        self.hud.show_running_controls()
        if self.tick_handle is None:
            self._schedule_tick()

    def end_game(self) -> None:
        """Stop the run after a crash and show the summary."""
        self._cancel_tick()
        self.session.game_over = True
        self.hud.show_overlay(self.session.score, self.session.highscore)
        log.info("run over with score %d", self.session.score)

    def toggle_pause(self) -> None:
        if self.state == SessionState.RUNNING:
            self.pause_game()
        elif self.state == SessionState.PAUSED:
            self.resume_game()

    # --- Ticking ------------------------------------------------------------

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        self.tick_handle = self.scheduler.request(self._tick)

    def _cancel_tick(self) -> None:
        self.scheduler.cancel(self.tick_handle)
        self.tick_handle = None

    def _tick(self) -> None:
        self.tick_handle = None
        if self.state != SessionState.RUNNING:
            return

        result = simulate_step(self.session, self.keys, self.settings.controls, self.traffic, self.rng)
        if result.collided:
            self.end_game()
            return

        self.hud.update_score(self.session.score)
        if result.new_highscore:
            self.hud.update_highscore(self.session.highscore)
            self._persist_highscore()

        render_frame(self.frame, self.session)
        self._schedule_tick()

    def _persist_highscore(self) -> None:
        try:
            self.store.set(HIGHSCORE_KEY, self.session.highscore, ttl_days=HIGHSCORE_TTL_DAYS)
        except OSError as exc:
            log.warning("could not save highscore: %s", exc)

    # --- Input and window ---------------------------------------------------

    def handle_key(self, key_name: str, down: bool) -> None:
        """Record a key transition; boost follows the shift key directly."""
        name = key_name.lower()
        controls = self.settings.controls
        self.keys.set(name, down)
        if name in controls.boost:
            self.session.boosting = down
        if not down:
            return
        if name in controls.pause:
            self.toggle_pause()
        elif name in controls.restart:
            self.start_game()

    def handle_action(self, action: str | None) -> None:
        """Dispatch a HUD button action."""
        if action == "pause":
            self.pause_game()
        elif action == "play":
            self.resume_game()
        elif action == "restart":
            if not self.session.game_over:
                self.start_game()
        elif action == "overlay_restart":
            self.start_game()

    def resize(self, width: int, height: int) -> None:
        """Fit the playfield to a new window size and repaint the current frame."""
        self.viewport = Viewport.fit(width, height)
        if (width, height) != self.viewport.size:
            self.screen = self._open_window(self.viewport)
        else:
            self.screen = pygame.display.get_surface()
        self.frame = pygame.Surface(self.viewport.size)
        self.session.resize(self.viewport)
        self.hud.layout(self.viewport.size)
        render_frame(self.frame, self.session)

    def run(self) -> None:
        """Main event/dispatch/present loop."""
        running = True
        while running:
            self.clock.tick(FPS)
            running = self._handle_events()
            if not running:
                break
            self.scheduler.dispatch()
            self._present()

        if not self.settings.display.fullscreen:
            self.settings_manager.set_window_size(*self.viewport.size)
        pygame.quit()

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_F3:
                    self.settings_manager.toggle_fps()
                    continue
                self.handle_key(pygame.key.name(event.key), True)
            elif event.type == pygame.KEYUP:
                self.handle_key(pygame.key.name(event.key), False)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.handle_action(self.hud.hit_test(event.pos))
            elif event.type == pygame.VIDEORESIZE:
                self.resize(event.w, event.h)
        return True

    def _present(self) -> None:
        self.hud.fps_text = f"{self.clock.get_fps():.0f} FPS" if self.settings.display.show_fps else ""
        self.screen.blit(self.frame, (0, 0))
        self.hud.render(self.screen)
        pygame.display.flip()
