"""Pygame front-end for lastline hot-seat matches."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

try:
    import pygame
except ImportError as exc:  # pragma: no cover - handled at runtime
    raise SystemExit(
        "Pygame is required for the graphical client. Install it with 'pip install lastline[pygame]'."
    ) from exc

from ..game.board import PlayerId
from ..game.rules import GameRules
from ..grid import Point


LOG = logging.getLogger("lastline.client")


# ---------------------------------------------------------------------------
# Rendering configuration
# ---------------------------------------------------------------------------

BOARD_PIXELS = 400
STATUS_HEIGHT = 90
WINDOW_WIDTH = BOARD_PIXELS
WINDOW_HEIGHT = BOARD_PIXELS + STATUS_HEIGHT
FPS = 30

DOT_RADIUS = 10
LINE_WIDTH = 4

BOARD_BG = (255, 255, 255)
DOT_FILL = (255, 253, 232)
DOT_BLOCKED_FILL = (204, 204, 204)
DOT_OUTLINE = (255, 165, 0)
PLAYER_COLORS = {1: (255, 0, 0), 2: (0, 0, 255)}
TEXT_COLOR = (33, 33, 33)


def pixel_position(point: Point, cell_size: float) -> Tuple[float, float]:
    return (point.col * cell_size + cell_size / 2, point.row * cell_size + cell_size / 2)


def point_at_pixel(
    points: Sequence[Point],
    cell_size: float,
    pos: Tuple[float, float],
    radius: float = DOT_RADIUS,
) -> Optional[Point]:
    """First point whose centre lies within ``2 * radius`` of ``pos``."""

    mx, my = pos
    for point in points:
        x, y = pixel_position(point, cell_size)
        if (mx - x) ** 2 + (my - y) ** 2 <= (radius * 2) ** 2:
            return point
    return None


@dataclass
class Button:
    label: str
    rect: pygame.Rect

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, hovered: bool) -> None:
        base_color = (33, 150, 243)
        color = tuple(min(c + 40, 255) for c in base_color) if hovered else base_color
        pygame.draw.rect(surface, color, self.rect, border_radius=6)
        pygame.draw.rect(surface, (13, 71, 161), self.rect, width=2, border_radius=6)
        text_surf = font.render(self.label, True, (255, 255, 255))
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


class LastlinePygameApp:
    def __init__(self) -> None:
        pygame.init()
        pygame.display.set_caption("lastline")
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        self.clock = pygame.time.Clock()

        self.font_small = pygame.font.Font(None, 24)
        self.font_medium = pygame.font.Font(None, 32)

        self.reset_button = Button("Reset", pygame.Rect(WINDOW_WIDTH - 130, BOARD_PIXELS + 25, 110, 45))

        self.game = GameRules()
        self.cell_size = BOARD_PIXELS / self.game.board.size

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------
    def handle_click(self, pos: Tuple[int, int]) -> None:
        if self.reset_button.contains(pos):
            self.game.reset()
            return

        clicked = point_at_pixel(self.game.board.points, self.cell_size, pos)
        if clicked is None:
            return

        result = self.game.handle_point_activation(clicked)
        if result.error is not None:
            LOG.debug("Click on %d ignored: %s", clicked.index, result.error)

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def draw(self) -> None:
        self.screen.fill(BOARD_BG)
        self._draw_segments()
        self._draw_dots()
        self._draw_selection()
        self._draw_ui()

    def _draw_segments(self) -> None:
        board = self.game.board
        for segment in board.segments:
            start = pixel_position(board.point(segment.origin), self.cell_size)
            end = pixel_position(board.point(segment.target), self.cell_size)
            pygame.draw.line(self.screen, self._color(segment.player), start, end, LINE_WIDTH)

    def _draw_dots(self) -> None:
        board = self.game.board
        for point in board.points:
            center = pixel_position(point, self.cell_size)
            fill = DOT_BLOCKED_FILL if board.is_blocked(point.index) else DOT_FILL
            pygame.draw.circle(self.screen, fill, center, DOT_RADIUS)
            pygame.draw.circle(self.screen, DOT_OUTLINE, center, DOT_RADIUS, 6)

    def _draw_selection(self) -> None:
        if self.game.selected is None:
            return
        center = pixel_position(self.game.board.point(self.game.selected), self.cell_size)
        radius = int(DOT_RADIUS * 1.5)
        pygame.draw.circle(self.screen, DOT_FILL, center, radius)
        pygame.draw.circle(self.screen, self._color(self.game.turn.to_move), center, radius, LINE_WIDTH)

    def _draw_ui(self) -> None:
        self.reset_button.draw(
            self.screen, self.font_small, self.reset_button.contains(pygame.mouse.get_pos())
        )
        status = self.font_medium.render(self.game.status_text(), True, TEXT_COLOR)
        self.screen.blit(status, (20, BOARD_PIXELS + 35))

    @staticmethod
    def _color(player: PlayerId) -> Tuple[int, int, int]:
        return PLAYER_COLORS.get(player, (120, 120, 120))

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click(event.pos)

            self.draw()
            pygame.display.flip()
            self.clock.tick(FPS)

        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="lastline graphical client")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    app = LastlinePygameApp()
    app.run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
