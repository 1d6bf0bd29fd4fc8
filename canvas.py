# canvas.py
"""
A small 2D drawing surface on top of Pygame.

The galaxy's draw code only needs a handful of primitives: translucent
rectangles and circles, radial gradients, stroked paths, a global alpha and
a save/restore stack for drawing state. PygameCanvas provides exactly those
on a pygame.Surface. Translucent shapes are rendered onto a temporary
SRCALPHA surface and blitted, so they blend with what is already drawn.
"""
import math
import pygame
from typing import List, Sequence, Tuple, Union

from colors import HSLA, RGBA
from constants import GRADIENT_MAX_RINGS

Color = Union[HSLA, RGBA]
ColorStop = Tuple[float, Color]

# --- Data Contracts ---
#
# class PygameCanvas:
#   - __init__(self, surface: pygame.Surface)
#   - State (saved and restored together):
#     - global_alpha: float in [0, 1], multiplied into every color's alpha.
#     - stroke_style: Color used by stroke().
#     - line_width: float, rounded to at least 1 pixel.
#   - fill_rect(x, y, w, h, color), fill_circle(x, y, radius, color),
#     fill_radial_gradient(x, y, radius, stops), begin_path(), move_to(x, y),
#     line_to(x, y), stroke(), save(), restore().
#   - Invariants: Shapes with a non-positive radius or a fully transparent
#     color draw nothing. restore() without a matching save() is a no-op.


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def to_pygame_color(color: Color, global_alpha: float = 1.0) -> pygame.Color:
    """Converts an HSLA or RGBA color to a pygame.Color with the global alpha applied."""
    if isinstance(color, HSLA):
        result = pygame.Color(0, 0, 0)
        result.hsla = (
            float(color.hue) % 360,
            _clamp(float(color.saturation), 0.0, 100.0),
            _clamp(float(color.lightness), 0.0, 100.0),
            100.0,
        )
    else:
        result = pygame.Color(int(color.r), int(color.g), int(color.b))
    result.a = int(round(_clamp(float(color.alpha) * global_alpha, 0.0, 1.0) * 255))
    return result


def _color_at(stops: List[Tuple[float, pygame.Color]], offset: float) -> pygame.Color:
    """Linearly interpolates the gradient stops at `offset` in [0, 1]."""
    if offset <= stops[0][0]:
        return stops[0][1]
    for (start, start_color), (end, end_color) in zip(stops, stops[1:]):
        if offset <= end:
            span = end - start
            amount = (offset - start) / span if span > 0 else 1.0
            return start_color.lerp(end_color, _clamp(amount, 0.0, 1.0))
    return stops[-1][1]


class PygameCanvas:
    """
    Draws the galaxy's primitives onto a pygame.Surface.
    """
    def __init__(self, surface: pygame.Surface):
        self.surface = surface
        self.global_alpha = 1.0
        self.stroke_style: Color = RGBA(0, 0, 0, 1.0)
        self.line_width = 1.0
        self._state_stack = []
        self._path: List[List[Tuple[float, float]]] = []
        # The fade overlay has the same size and color every frame
        self._rect_cache_key = None
        self._rect_cache_surface = None

    def set_surface(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self._rect_cache_key = None
        self._rect_cache_surface = None

    # --- Drawing state ---

    def save(self) -> None:
        self._state_stack.append((self.global_alpha, self.stroke_style, self.line_width))

    def restore(self) -> None:
        if self._state_stack:
            self.global_alpha, self.stroke_style, self.line_width = self._state_stack.pop()

    # --- Fills ---

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        pg_color = to_pygame_color(color, self.global_alpha)
        if pg_color.a == 0 or w <= 0 or h <= 0:
            return
        rect = pygame.Rect(int(x), int(y), int(math.ceil(w)), int(math.ceil(h)))
        if pg_color.a == 255:
            self.surface.fill(pg_color, rect)
            return

        key = (rect.size, tuple(pg_color))
        if key != self._rect_cache_key:
            overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
            overlay.fill(pg_color)
            self._rect_cache_key = key
            self._rect_cache_surface = overlay
        self.surface.blit(self._rect_cache_surface, rect.topleft)

    def fill_circle(self, x: float, y: float, radius: float, color: Color) -> None:
        if radius <= 0:
            return
        pg_color = to_pygame_color(color, self.global_alpha)
        if pg_color.a == 0:
            return
        if pg_color.a == 255:
            pygame.draw.circle(self.surface, pg_color, (x, y), radius)
            return

        size = int(math.ceil(radius * 2)) + 2
        center = size / 2
        temp = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(temp, pg_color, (center, center), radius)
        self.surface.blit(temp, (int(round(x - center)), int(round(y - center))))

    def fill_radial_gradient(self, x: float, y: float, radius: float,
                             stops: Sequence[ColorStop]) -> None:
        """
        Fills a disk whose color runs through `stops` from the center
        (offset 0) to the rim (offset 1).
        """
        if radius <= 0 or not stops:
            return
        pg_stops = [(offset, to_pygame_color(color, self.global_alpha)) for offset, color in stops]
        rings = max(1, min(GRADIENT_MAX_RINGS, int(math.ceil(radius))))

        size = int(math.ceil(radius * 2)) + 2
        center = size / 2
        temp = pygame.Surface((size, size), pygame.SRCALPHA)
        # Outermost ring first; each smaller disk overwrites the pixels inside it
        for ring in range(rings, 0, -1):
            ring_color = _color_at(pg_stops, (ring - 0.5) / rings)
            pygame.draw.circle(temp, ring_color, (center, center), radius * ring / rings)
        self.surface.blit(temp, (int(round(x - center)), int(round(y - center))))

    # --- Paths ---

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x: float, y: float) -> None:
        self._path.append([(float(x), float(y))])

    def line_to(self, x: float, y: float) -> None:
        if not self._path:
            self._path.append([])
        self._path[-1].append((float(x), float(y)))

    def stroke(self) -> None:
        pg_color = to_pygame_color(self.stroke_style, self.global_alpha)
        if pg_color.a == 0:
            return
        width = max(1, int(round(self.line_width)))

        for points in self._path:
            if len(points) < 2:
                continue
            xs = [p[0] for p in points]
            ys = [p[1] for p in points]
            left = int(math.floor(min(xs))) - width
            top = int(math.floor(min(ys))) - width
            w = int(math.ceil(max(xs))) - left + width + 1
            h = int(math.ceil(max(ys))) - top + width + 1

            temp = pygame.Surface((w, h), pygame.SRCALPHA)
            local = [(px - left, py - top) for px, py in points]
            pygame.draw.lines(temp, pg_color, False, local, width)
            self.surface.blit(temp, (left, top))
