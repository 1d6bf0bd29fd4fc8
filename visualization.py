# visualization.py
"""
Hosts the galaxy in a Pygame window.

The Visualizer owns the window, the persistent simulation surface that the
galaxy draws onto, frame pacing and the settings readout. Keyboard and mouse
events are translated into Galaxy commands by dispatch_event.
"""
import logging
import pygame
from typing import Any, Dict, List, Tuple

from canvas import PygameCanvas
from colors import next_color_mode
from constants import (
    BACKGROUND_COLOR, FULLSCREEN, DEFAULT_WINDOW_SIZE, FPS,
    HUD_BACKGROUND, HUD_TEXT_COLOR, HUD_KEY_COLOR,
    PARTICLE_COUNT_STEP, PARTICLE_COUNT_RANGE,
    GRAVITY_STEP, GRAVITY_RANGE, SPEED_STEP, SPEED_RANGE,
)
from galaxy import Galaxy

# --- Data Contracts ---
#
# dispatch_event(event: pygame.event.Event, galaxy: Galaxy) -> bool:
#   - Outputs: False if the event asks the application to quit, True otherwise.
#   - Side Effects: Calls the matching Galaxy command (spawn attractor,
#     pointer move, reset, pause, big bang, settings changes).
#
# class Visualizer:
#   - __init__(self, display_params: Dict[str, Any]):
#     - Inputs: the "display" section of config.json.
#     - Side Effects: Initializes Pygame and creates the window.
#     - Raises: ValueError for a non-positive window size or frame rate.
#
#   - handle_events(self, galaxy: Galaxy) -> bool:
#     - Drains the Pygame event queue. Returns False if the user has quit.
#
#   - present(self, galaxy: Galaxy) -> None:
#     - Shows the simulation surface and the settings readout, then waits
#       for the next frame.

KEY_COLOR_MODES = {
    pygame.K_1: "rainbow",
    pygame.K_2: "galaxy",
    pygame.K_3: "fire",
    pygame.K_4: "ocean",
    pygame.K_5: "neon",
    pygame.K_6: "default",
}

HELP_TEXT = "Click: attractor | Space: pause | R: reset | B: big bang | H: hide"


def _step_value(value: float, step: float, value_range: Tuple[float, float]) -> float:
    low, high = value_range
    # Rounded so repeated steps don't accumulate float noise like 0.30000000000000004
    return round(min(max(value + step, low), high), 2)


def dispatch_event(event: pygame.event.Event, galaxy: Galaxy) -> bool:
    """
    Applies a single Pygame event to the galaxy.
    """
    if event.type == pygame.QUIT:
        logging.info("Quit event received. Shutting down visualizer.")
        return False

    if event.type == pygame.MOUSEBUTTONDOWN:
        if event.button == 1: # Left mouse click
            galaxy.spawn_attractor(float(event.pos[0]), float(event.pos[1]))

    elif event.type == pygame.MOUSEMOTION:
        galaxy.move_pointer(float(event.pos[0]), float(event.pos[1]))

    elif event.type == pygame.KEYDOWN:
        settings = galaxy.settings
        key = event.key

        if key == pygame.K_ESCAPE:
            logging.info("ESC key pressed. Shutting down visualizer.")
            return False
        elif key == pygame.K_SPACE:
            galaxy.toggle_pause()
        elif key == pygame.K_r:
            galaxy.reset()
        elif key == pygame.K_b:
            galaxy.big_bang()
        elif key in (pygame.K_UP, pygame.K_DOWN):
            step = PARTICLE_COUNT_STEP if key == pygame.K_UP else -PARTICLE_COUNT_STEP
            galaxy.set_particle_count(
                int(_step_value(settings.particle_count, step, PARTICLE_COUNT_RANGE))
            )
        elif key in (pygame.K_LEFTBRACKET, pygame.K_RIGHTBRACKET):
            step = GRAVITY_STEP if key == pygame.K_RIGHTBRACKET else -GRAVITY_STEP
            galaxy.set_gravity(_step_value(settings.gravity, step, GRAVITY_RANGE))
        elif key in (pygame.K_COMMA, pygame.K_PERIOD):
            step = SPEED_STEP if key == pygame.K_PERIOD else -SPEED_STEP
            galaxy.set_speed(_step_value(settings.speed, step, SPEED_RANGE))
        elif key == pygame.K_c:
            galaxy.set_color_mode(next_color_mode(settings.color_mode))
        elif key in KEY_COLOR_MODES:
            galaxy.set_color_mode(KEY_COLOR_MODES[key])

    return True


class Visualizer:
    """
    Owns the Pygame window and renders the galaxy into it.
    """
    def __init__(self, display_params: Dict[str, Any]):
        """
        Initializes Pygame and the display window.
        """
        fullscreen = display_params.get('fullscreen', FULLSCREEN)
        self.fps = display_params.get('fps', FPS)
        if not self.fps or self.fps <= 0:
            msg = f"Configuration error: fps must be positive, got {self.fps!r}."
            logging.critical(msg)
            raise ValueError(msg)

        pygame.init()
        pygame.font.init()

        if fullscreen:
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width = display_params.get('width', DEFAULT_WINDOW_SIZE[0])
            height = display_params.get('height', DEFAULT_WINDOW_SIZE[1])
            if width <= 0 or height <= 0:
                msg = f"Configuration error: window size must be positive, got {width}x{height}."
                logging.critical(msg)
                pygame.quit()
                raise ValueError(msg)
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

        # The galaxy draws onto its own surface, which keeps the faded
        # previous frames. The readout is drawn on the screen only.
        self.sim_surface = pygame.Surface((width, height))
        self.sim_surface.fill(BACKGROUND_COLOR)
        self.canvas = PygameCanvas(self.sim_surface)

        pygame.display.set_caption("Galaxy")
        self.clock = pygame.time.Clock()
        self.show_hud = display_params.get('show_hud', True)

        try:
            self.font_main = pygame.font.SysFont("Segoe UI", 14)
            self.font_main_bold = pygame.font.SysFont("Segoe UI", 14, bold=True)
        except pygame.error:
            logging.warning("Segoe UI font not found, falling back to default sans-serif.")
            self.font_main = pygame.font.SysFont(None, 18)
            self.font_main_bold = pygame.font.SysFont(None, 18, bold=True)

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    @property
    def width(self) -> int:
        return self.sim_surface.get_width()

    @property
    def height(self) -> int:
        return self.sim_surface.get_height()

    def handle_events(self, galaxy: Galaxy) -> bool:
        """
        Processes pending events.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.VIDEORESIZE:
                self.resize(event.w, event.h, galaxy)
                continue
            if event.type == pygame.KEYDOWN and event.key == pygame.K_h:
                self.show_hud = not self.show_hud
                continue
            if not dispatch_event(event, galaxy):
                return False
        return True

    def resize(self, width: int, height: int, galaxy: Galaxy) -> None:
        """Resizes the window. The drawing surface starts over blank."""
        width, height = max(width, 1), max(height, 1)
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.sim_surface = pygame.Surface((width, height))
        self.sim_surface.fill(BACKGROUND_COLOR)
        self.canvas.set_surface(self.sim_surface)
        galaxy.resize(width, height)

    def present(self, galaxy: Galaxy) -> None:
        self.screen.blit(self.sim_surface, (0, 0))
        if self.show_hud:
            self._draw_hud(galaxy)
        pygame.display.flip()
        self.clock.tick(self.fps)

    def _hud_rows(self, galaxy: Galaxy) -> List[Tuple[str, str]]:
        settings = galaxy.settings
        return [
            ("Particles", str(galaxy.particles.particle_count)),
            ("Gravity", f"{settings.gravity:.2f}"),
            ("Speed", f"{settings.speed:.2f}"),
            ("Color Mode", settings.color_mode.title()),
            ("Attractors", str(len(galaxy.attractors))),
            ("FPS", f"{self.clock.get_fps():.0f}"),
            ("State", "Running" if galaxy.is_running else "Paused"),
        ]

    def _draw_hud(self, galaxy: Galaxy) -> None:
        """Renders the current settings in a translucent box in the top-left corner."""
        rows = self._hud_rows(galaxy)
        padding = 8
        line_height = self.font_main.get_linesize()
        key_width = max(self.font_main_bold.size(key)[0] for key, _ in rows)
        help_surf = self.font_main.render(HELP_TEXT, True, HUD_KEY_COLOR)

        box_width = max(key_width + 120, help_surf.get_width()) + padding * 2
        box_height = line_height * (len(rows) + 1) + padding * 2
        box = pygame.Surface((box_width, box_height), pygame.SRCALPHA)
        pygame.draw.rect(box, HUD_BACKGROUND, box.get_rect(), border_radius=6)
        self.screen.blit(box, (10, 10))

        y = 10 + padding
        for key, value in rows:
            key_surf = self.font_main_bold.render(key, True, HUD_KEY_COLOR)
            value_surf = self.font_main.render(value, True, HUD_TEXT_COLOR)
            self.screen.blit(key_surf, (10 + padding, y))
            self.screen.blit(value_surf, (10 + padding + key_width + 20, y))
            y += line_height
        self.screen.blit(help_surf, (10 + padding, y))

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()
