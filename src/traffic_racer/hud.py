"""Score display, toolbar buttons and the game-over overlay."""

from __future__ import annotations

from dataclasses import dataclass, field
import pygame

from .utils import BUTTON_BORDER, BUTTON_COLOR, SHADOW_COLOR, TEXT_COLOR, YELLOW

BUTTON_SIZE = (96, 36)
BUTTON_GAP = 10
EDGE_PADDING = 16


@dataclass(slots=True)
class Button:
    """Clickable labelled rectangle."""

    label: str
    action: str
    rect: pygame.Rect = field(default_factory=lambda: pygame.Rect(0, 0, *BUTTON_SIZE))
    visible: bool = True

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.visible and self.rect.collidepoint(pos)


class Hud:
    """On-screen chrome the game talks to; holds no game rules."""

    def __init__(self, body_font: pygame.font.Font, small_font: pygame.font.Font) -> None:
        self.body_font = body_font
        self.small_font = small_font
        self.score = 0
        self.highscore = 0
        self.overlay_visible = False
        self.overlay_lines: list[str] = []
        self.fps_text = ""

        self.play_button = Button("Play", "play", visible=False)
        self.pause_button = Button("Pause", "pause")
        self.restart_button = Button("Restart", "restart")
        self.overlay_restart_button = Button("Restart", "overlay_restart", visible=False)
        self.toolbar = [self.play_button, self.pause_button, self.restart_button]

    def layout(self, size: tuple[int, int]) -> None:
        """Position buttons for the current window size."""
        width, height = size
        self.restart_button.rect.topright = (width - EDGE_PADDING, EDGE_PADDING)
        # Play and Pause are never shown together, so they share a slot.
        self.pause_button.rect.topright = (self.restart_button.rect.left - BUTTON_GAP, EDGE_PADDING)
        self.play_button.rect.topleft = self.pause_button.rect.topleft
        self.overlay_restart_button.rect.center = (width // 2, height // 2 + 60)

    def update_score(self, score: int) -> None:
        self.score = score

    def update_highscore(self, highscore: int) -> None:
        self.highscore = highscore

    def show_running_controls(self) -> None:
        self.play_button.visible = False
        self.pause_button.visible = True

    def show_paused_controls(self) -> None:
        self.play_button.visible = True
        self.pause_button.visible = False

    def show_overlay(self, score: int, highscore: int) -> None:
        """Show the game-over summary and hide play/pause."""
        self.overlay_visible = True
        self.overlay_lines = [f"Score: {score}", f"Highscore: {highscore}"]
        self.overlay_restart_button.visible = True
        self.play_button.visible = False
        self.pause_button.visible = False

    def hide_overlay(self) -> None:
        self.overlay_visible = False
        self.overlay_restart_button.visible = False

    def hit_test(self, pos: tuple[int, int]) -> str | None:
        """Return the action of the button under pos, if any."""
        if self.overlay_visible:
            return self.overlay_restart_button.action if self.overlay_restart_button.hit(pos) else None
        for button in self.toolbar:
            if button.hit(pos):
                return button.action
        return None

    def render(self, surface: pygame.Surface) -> None:
        """Draw HUD elements on top of the playfield."""
        self._blit_shadowed(surface, f"Score: {self.score}", (EDGE_PADDING, EDGE_PADDING))
        self._blit_shadowed(surface, f"Highscore: {self.highscore}", (EDGE_PADDING, EDGE_PADDING + 34))
        if self.fps_text:
            text = self.small_font.render(self.fps_text, True, TEXT_COLOR)
            surface.blit(text, (EDGE_PADDING, surface.get_height() - 28))

        for button in self.toolbar:
            self._draw_button(surface, button)

        if self.overlay_visible:
            self._render_overlay(surface)

    def _blit_shadowed(self, surface: pygame.Surface, line: str, pos: tuple[int, int]) -> None:
        shadow = self.body_font.render(line, True, SHADOW_COLOR)
        text = self.body_font.render(line, True, TEXT_COLOR)
        surface.blit(shadow, (pos[0] + 2, pos[1] + 2))
        surface.blit(text, pos)

    def _draw_button(self, surface: pygame.Surface, button: Button) -> None:
        if not button.visible:
            return
        pygame.draw.rect(surface, BUTTON_COLOR, button.rect, border_radius=6)
        pygame.draw.rect(surface, BUTTON_BORDER, button.rect, 2, border_radius=6)
        label = self.small_font.render(button.label, True, TEXT_COLOR)
        surface.blit(label, label.get_rect(center=button.rect.center))

    def _render_overlay(self, surface: pygame.Surface) -> None:
        width, height = surface.get_size()
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 160))
        surface.blit(overlay, (0, 0))

        title = self.body_font.render("GAME OVER", True, YELLOW)
        surface.blit(title, (width // 2 - title.get_width() // 2, height // 2 - 90))
        for idx, line in enumerate(self.overlay_lines):
            text = self.body_font.render(line, True, TEXT_COLOR)
            surface.blit(text, (width // 2 - text.get_width() // 2, height // 2 - 45 + idx * 32))
        self._draw_button(surface, self.overlay_restart_button)
