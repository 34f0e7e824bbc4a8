import numpy as np
import pygame
import pytest

import blackhole as B
from blackhole.engine import Particle, SimulationConfig, SimulationState, Well
from blackhole.renderer import AppearanceConfig, Renderer, save_frames


@pytest.fixture
def small_state():
    return SimulationState(
        well=Well(x=100.0, y=100.0, radius=5.0, gravity=500.0),
        config=SimulationConfig(max_dist=80.0, particle_radius=3.0),
        particles=[Particle(x=150.0, y=100.0, vx=0.0, vy=0.0, color=(255, 0, 0))],
    )


def test_render_draws_well_particles_and_background(small_state):
    renderer = Renderer(AppearanceConfig(width=200, height=200))
    frame = renderer.render(small_state.render_snapshot())
    assert frame.shape == (200, 200, 3)
    assert frame.dtype == np.uint8
    assert tuple(frame[100, 100]) == (0, 0, 0)
    assert tuple(frame[100, 150]) == (255, 0, 0)
    assert tuple(frame[2, 2]) == B.DARK_BG


def test_light_mode_background(small_state):
    renderer = Renderer(AppearanceConfig(width=200, height=200, dark_mode=False))
    frame = renderer.render(small_state.render_snapshot())
    assert tuple(frame[2, 2]) == B.LIGHT_BG


def test_handle_key_drives_state(small_state):
    renderer = Renderer(AppearanceConfig(width=200, height=200))
    assert renderer.handle_key(small_state, pygame.K_SPACE)
    assert small_state.config.paused
    renderer.handle_key(small_state, pygame.K_k)
    assert small_state.config.kill_boundary is False
    renderer.handle_key(small_state, pygame.K_d)
    assert renderer.config.dark_mode is False
    renderer.handle_key(small_state, pygame.K_h)
    assert renderer.config.show_hud is False


def test_handle_key_selects_and_adjusts(small_state):
    renderer = Renderer(AppearanceConfig(width=200, height=200))
    renderer.handle_key(small_state, pygame.K_TAB)
    assert renderer.selected == 1
    renderer.handle_key(small_state, pygame.K_TAB, shift=True)
    renderer.handle_key(small_state, pygame.K_TAB, shift=True)
    assert renderer.selected == 7  # wraps to particle radius
    renderer.handle_key(small_state, pygame.K_RIGHT)
    assert small_state.config.particle_radius == pytest.approx(3.5)
    renderer.handle_key(small_state, pygame.K_LEFT, shift=True)
    assert small_state.config.particle_radius == pytest.approx(1.0)


def test_handle_key_reset_and_quit(small_state):
    renderer = Renderer(AppearanceConfig(width=200, height=200))
    renderer.handle_key(small_state, pygame.K_r)
    assert small_state.particles == []
    assert small_state.well == Well()
    assert renderer.handle_key(small_state, pygame.K_q) is False
    assert renderer.handle_key(small_state, pygame.K_ESCAPE) is False


def test_save_frames_writes_one_png_per_frame(small_state, tmp_path):
    written = save_frames(small_state, n_steps=3, path=str(tmp_path / "frames"),
                          config=AppearanceConfig(width=200, height=200))
    assert len(written) == 4
    assert small_state.frame == 3
    image = pygame.image.load(written[0])
    assert image.get_size() == (200, 200)
    assert tuple(image.get_at((150, 100)))[:3] == (255, 0, 0)
