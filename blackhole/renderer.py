import numpy as np
from typing import List, Tuple, Optional
from dataclasses import dataclass
import logging
import os

import blackhole as B
from blackhole import controls
from blackhole.engine import SimulationState, Snapshot

os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame

logger = logging.getLogger(__name__)

WELL_FILL = (0, 0, 0)
WELL_OUTLINE = (255, 255, 255)
BOUNDARY_COLOR = (160, 160, 160)


@dataclass
class AppearanceConfig:
    """Window and theme settings. Affect pixels, never physics."""
    width: int = B.WINDOW_SIZE[0]
    height: int = B.WINDOW_SIZE[1]
    dark_mode: bool = True
    show_hud: bool = True

    @property
    def bg_color(self) -> Tuple[int, int, int]:
        return B.DARK_BG if self.dark_mode else B.LIGHT_BG

    @property
    def text_color(self) -> Tuple[int, int, int]:
        return (220, 220, 220) if self.dark_mode else (30, 30, 30)


def _px(x: float, y: float) -> Tuple[int, int]:
    return int(round(x)), int(round(y))


class Renderer:
    """Maps simulation snapshots → pixel frames, and runs the interactive loop."""

    def __init__(self, config: Optional[AppearanceConfig] = None):
        self.config = config or AppearanceConfig()
        self.selected = 0
        self._font = None
        self._display_initialized = False

    def draw(self, surface: pygame.Surface, snapshot: Snapshot):
        surface.fill(self.config.bg_color)
        center = _px(*snapshot.well_position)

        well_r = int(round(snapshot.well_radius))
        if well_r > 0:
            pygame.draw.circle(surface, WELL_FILL, center, well_r)
            pygame.draw.circle(surface, WELL_OUTLINE, center, well_r, 1)
        pygame.draw.circle(surface, BOUNDARY_COLOR, center,
                           int(round(snapshot.max_dist)), 1)

        pr = max(1, int(round(snapshot.particle_radius)))
        for pos, color in zip(snapshot.positions, snapshot.colors):
            pygame.draw.circle(surface, color.tolist(), _px(pos[0], pos[1]), pr)

    def render(self, snapshot: Snapshot) -> np.ndarray:
        """Render single frame → (height, width, 3) uint8."""
        surface = pygame.Surface((self.config.width, self.config.height))
        self.draw(surface, snapshot)
        return pygame.surfarray.array3d(surface).transpose(1, 0, 2)

    def draw_hud(self, surface: pygame.Surface, state: SimulationState):
        if self._font is None:
            self._font = pygame.font.Font(None, 22)
        selected = controls.PARAMETERS[self.selected].label
        y = 10
        for line in controls.describe(state):
            prefix = '> ' if line.startswith(selected + ':') else '  '
            text = self._font.render(prefix + line, True, self.config.text_color)
            surface.blit(text, (10, y))
            y += 20

    def handle_key(self, state: SimulationState, key: int, shift: bool = False) -> bool:
        """Apply one key press to the simulation or appearance. False means quit."""
        if key in (pygame.K_q, pygame.K_ESCAPE):
            return False
        if key == pygame.K_SPACE:
            controls.toggle_pause(state)
        elif key == pygame.K_k:
            kill = controls.toggle_boundary(state)
            logger.info(f"Boundary mode: {'kill' if kill else 'sticky'}")
        elif key == pygame.K_r:
            state.reset()
        elif key == pygame.K_d:
            self.config.dark_mode = not self.config.dark_mode
        elif key == pygame.K_h:
            self.config.show_hud = not self.config.show_hud
        elif key == pygame.K_TAB:
            offset = -1 if shift else 1
            self.selected = (self.selected + offset) % len(controls.PARAMETERS)
        elif key in (pygame.K_LEFT, pygame.K_RIGHT):
            steps = 10 if shift else 1
            if key == pygame.K_LEFT:
                steps = -steps
            controls.adjust(state, controls.PARAMETERS[self.selected].name, steps)
        return True

    def play(self, state: SimulationState, fps: int = B.FPS) -> SimulationState:
        """Run the simulation in a pygame window. Press Q to exit."""
        if not self._display_initialized:
            pygame.init()
            self._display_initialized = True

        screen = pygame.display.set_mode((self.config.width, self.config.height))
        pygame.display.set_caption('Black Hole Simulation')
        clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                if event.type == pygame.KEYDOWN:
                    shift = bool(event.mod & pygame.KMOD_SHIFT)
                    running = self.handle_key(state, event.key, shift) and running

            state.step()
            self.draw(screen, state.render_snapshot())
            if self.config.show_hud:
                self.draw_hud(screen, state)
            pygame.display.flip()
            clock.tick(fps)

        pygame.quit()
        self._font = None
        self._display_initialized = False
        return state


def save_frames(state: SimulationState, n_steps: int, path: str,
                config: Optional[AppearanceConfig] = None) -> List[str]:
    """Step headlessly and write each snapshot as path/frame_NNNNN.png. Returns the file names."""
    os.makedirs(path, exist_ok=True)
    renderer = Renderer(config)
    surface = pygame.Surface((renderer.config.width, renderer.config.height))
    written = []
    for frame in range(n_steps + 1):
        if frame:
            state.step()
        renderer.draw(surface, state.render_snapshot())
        name = os.path.join(path, f'frame_{frame:05d}.png')
        pygame.image.save(surface, name)
        written.append(name)
    logger.info(f"Wrote {len(written)} frames to {path}")
    return written
