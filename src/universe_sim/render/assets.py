from __future__ import annotations

from collections import OrderedDict
from typing import Iterable

import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]

_GLOW_RINGS = 6


class GlowLibrary:
    """Cache of pre-rendered soft halos keyed by size, color and blur."""

    def __init__(self, *, outer_alpha: int = 60, inner_alpha: int = 120, max_size: int = 512) -> None:
        self._outer_alpha = outer_alpha
        self._inner_alpha = inner_alpha
        self._max_size = max_size
        self._cache: OrderedDict[tuple[int, tuple[int, int, int], int], pygame.Surface] = OrderedDict()

    def __len__(self) -> int:
        return len(self._cache)

    def get_glow(self, radius: int, color: tuple[int, int, int], blur: int) -> pygame.Surface:
        if radius < 0 or blur < 0:
            raise ValueError("glow radius and blur must not be negative")
        key = (radius, color, blur)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            return cached
        glow = self._render_glow(radius, color, blur)
        self._cache[key] = glow
        if len(self._cache) > self._max_size:
            self._cache.popitem(last=False)
        return glow

    def _render_glow(self, radius: int, color: tuple[int, int, int], blur: int) -> pygame.Surface:
        extent = max(1, radius + blur)
        surface = pygame.Surface((extent * 2, extent * 2), pygame.SRCALPHA)
        center = (extent, extent)
        # outermost ring first, each inner ring brighter
        for ring in range(_GLOW_RINGS):
            fraction = ring / (_GLOW_RINGS - 1)
            ring_radius = int(extent - (extent - radius) * fraction)
            alpha = int(self._outer_alpha + (self._inner_alpha - self._outer_alpha) * fraction)
            alpha = alpha // _GLOW_RINGS
            if ring_radius > 0 and alpha > 0:
                pygame.draw.circle(surface, (*color, alpha), center, ring_radius)
        return surface


_TEXT_SURFACE_CACHE_MAX_SIZE = 256
_TEXT_SURFACE_CACHE: OrderedDict[tuple[int, str, Color], pygame.Surface] = OrderedDict()


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    """Return a cached rendered surface for the given font, text and color."""

    key = (id(font), text, color)
    cached = _TEXT_SURFACE_CACHE.get(key)
    if cached is not None:
        _TEXT_SURFACE_CACHE.move_to_end(key)
        return cached
    rendered = font.render(text, True, color)
    _TEXT_SURFACE_CACHE[key] = rendered
    if len(_TEXT_SURFACE_CACHE) > _TEXT_SURFACE_CACHE_MAX_SIZE:
        _TEXT_SURFACE_CACHE.popitem(last=False)
    return rendered


def load_font(preferred_names: Iterable[str], size: int, *, bold: bool = False) -> pygame.font.Font:
    names = list(preferred_names)
    for name in names:
        match = pygame.font.match_font(name, bold=bold)
        if match:
            return pygame.font.Font(match, size)
    fallback = names[0] if names else None
    return pygame.font.SysFont(fallback, size, bold=bold)
