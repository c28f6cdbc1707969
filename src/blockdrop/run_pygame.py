"""Simple pygame front-end for the engine.

This module glues a :class:`~blockdrop.session.GameSession` to ``pygame`` for
rendering and keyboard input.  All game rules live in the engine; the loop
below only forwards key presses, feeds frame time to the gravity clock and
draws the current projection.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import pygame

from .config import GameConfig
from .controls import command_for_key
from .pieces import TOKEN_COLORS
from .session import GameSession
from .utils import RenderView


LOGGER = logging.getLogger(__name__)

BACKGROUND = (26, 26, 26)
GRID_LINE = (50, 50, 50)
TEXT_COLOR = (230, 230, 230)
GAME_OVER_COLOR = (239, 68, 68)

# Height in pixels of the score strip above the board
HUD_HEIGHT = 32


def draw_view(screen: pygame.Surface, view: RenderView, cell_size: int) -> None:
    """Render the board projection below the score strip."""

    rows, cols = view.grid.shape
    for r in range(rows):
        for c in range(cols):
            value = int(view.grid[r, c])
            color = pygame.Color(TOKEN_COLORS[value]) if value else BACKGROUND
            rect = pygame.Rect(
                c * cell_size, HUD_HEIGHT + r * cell_size, cell_size, cell_size
            )
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_hud(screen: pygame.Surface, font: pygame.font.Font, view: RenderView) -> None:
    label = font.render(f"Score: {view.score}", True, TEXT_COLOR)
    screen.blit(label, (8, 6))
    if view.game_over:
        banner = font.render("Game Over! Press Enter", True, GAME_OVER_COLOR)
        rect = banner.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
        screen.blit(banner, rect)


def handle_key(event: pygame.event.Event, session: GameSession) -> None:
    """Translate a key press into an engine command."""

    command = command_for_key(pygame.key.name(event.key))
    if command is not None:
        session.dispatch(command)


class GameRunner:
    """Own the pygame window and drive a session until the window closes."""

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self._running = False
        self._screen: pygame.Surface | None = None
        self._session: GameSession | None = None
        self._clock: pygame.time.Clock | None = None

    async def _run_loop(self) -> None:
        pygame.init()
        cell = self.config.cell_size
        size = (self.config.width * cell, self.config.height * cell + HUD_HEIGHT)
        self._screen = pygame.display.set_mode(size)
        pygame.display.set_caption("Blockdrop")
        font = pygame.font.Font(None, 28)
        self._clock = pygame.time.Clock()

        self._session = GameSession(self.config)
        self._session.start()

        self._running = True
        while self._running:
            dt = self._clock.tick(self.config.fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN:
                    handle_key(event, self._session)

            self._session.advance(dt)

            view = self._session.view()
            self._screen.fill(BACKGROUND)
            draw_view(self._screen, view, cell)
            draw_hud(self._screen, font, view)
            pygame.display.flip()

            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def start(self) -> None:
        asyncio.run(self._run_loop())


def main(config: Optional[GameConfig] = None) -> None:
    """Run the game in a desktop window until it is closed."""

    GameRunner(config).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
