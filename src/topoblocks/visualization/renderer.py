from __future__ import annotations

import math
from typing import Tuple

import pygame

from topoblocks.game import BlockGame, MirrorDualTopology, RingTopology, format_status


def _rgb(color: int, dim: bool = False) -> Tuple[int, int, int]:
    r, g, b = (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF
    if dim:
        return r * 6 // 10, g * 6 // 10, b * 6 // 10
    return r, g, b


class Renderer:
    """Draws a running game: linear boards as a grid, ring boards in polar layout."""

    def __init__(self, cell_size: int = 30, margin: int = 20, status_height: int = 30) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.status_height = status_height
        self._font = None

    def window_size(self, game: BlockGame) -> Tuple[int, int]:
        topo = game.topology
        if isinstance(topo, RingTopology):
            side = 2 * (topo.ring_count + 1) * self.cell_size + 2 * self.margin
            return side, side + self.status_height
        width = topo.line_length * self.cell_size + 2 * self.margin
        height = topo.line_count * self.cell_size + 2 * self.margin
        return width, height + self.status_height

    def _color_for(self, game: BlockGame, cell_id: int) -> Tuple[int, int, int]:
        attrs = game.attributes_of(cell_id)
        return _rgb(attrs.color, dim=attrs.mirrored)

    def _cells(self, game: BlockGame):
        """Yield (line, slot, color) for locked and falling cells."""
        grid = game.board.grid
        for line in range(grid.shape[0]):
            for slot in range(grid.shape[1]):
                cid = int(grid[line, slot])
                if cid:
                    yield line, slot, self._color_for(game, cid)
        piece = game.active_piece
        if piece is None:
            return
        topo = game.topology
        for coord, cid in zip(game.piece_cells(), piece.cell_ids):
            if topo.on_board(coord):
                yield topo.line_of(coord), topo.slot_of(coord), self._color_for(game, cid)

    def _draw_linear(self, surf: pygame.Surface, game: BlockGame) -> None:
        topo = game.topology
        h, w = topo.line_count, topo.line_length
        for line in range(h):
            for slot in range(w):
                rect = self._linear_rect(line, slot, h)
                pygame.draw.rect(surf, (30, 30, 36), rect)
        for line, slot, color in self._cells(game):
            pygame.draw.rect(surf, color, self._linear_rect(line, slot, h))
        if isinstance(topo, MirrorDualTopology):
            x = self.margin + w * self.cell_size // 2
            pygame.draw.line(surf, (255, 255, 0), (x, self.margin), (x, self.margin + h * self.cell_size), 2)

    def _linear_rect(self, line: int, slot: int, height: int) -> pygame.Rect:
        # y grows upward on screen
        row = height - 1 - line
        return pygame.Rect(
            self.margin + slot * self.cell_size,
            self.margin + row * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _draw_ring(self, surf: pygame.Surface, game: BlockGame) -> None:
        topo = game.topology
        cx = cy = self.margin + (topo.ring_count + 1) * self.cell_size
        for ring in range(topo.ring_count):
            radius = (topo.ring_count - ring) * self.cell_size
            pygame.draw.circle(surf, (50, 50, 60), (cx, cy), radius, 1)
        pygame.draw.circle(surf, (120, 40, 120), (cx, cy), int(self.cell_size * 0.8))
        for ring, slot, color in self._cells(game):
            radius = (topo.ring_count - ring) * self.cell_size
            angle = slot / topo.slots_per_ring * 2 * math.pi
            x = cx + math.cos(angle) * radius
            y = cy + math.sin(angle) * radius
            size = int(self.cell_size * 0.8)
            rect = pygame.Rect(0, 0, size, size)
            rect.center = (int(x), int(y))
            pygame.draw.rect(surf, color, rect)

    def draw(self, screen: pygame.Surface, game: BlockGame) -> None:
        screen.fill((10, 10, 14))
        if isinstance(game.topology, RingTopology):
            self._draw_ring(screen, game)
        else:
            self._draw_linear(screen, game)
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        status = self._font.render(format_status(game.get_state()), True, (230, 230, 230))
        screen.blit(status, (self.margin, screen.get_height() - self.status_height + 5))
        pygame.display.flip()
