"""
Live tuning of a running simulation.

Each adjustable value is addressed as '<owner>.<attr>' on a SimulationState,
e.g. 'well.gravity' or 'config.max_dist'. Every write is clamped to the
parameter's range, and the spawn bounds are kept ordered so step() can spawn
from them.
"""

from dataclasses import dataclass
from typing import List, Tuple

from blackhole.engine import SimulationConfig, SimulationState


@dataclass(frozen=True)
class Parameter:
    name: str
    label: str
    low: float
    high: float
    step: float

    def clamp(self, value: float) -> float:
        return min(max(value, self.low), self.high)


PARAMETERS: List[Parameter] = [
    Parameter('well.x', 'Black Hole X Pos', 0.0, 1600.0, 5.0),
    Parameter('well.y', 'Black Hole Y Pos', 0.0, 1200.0, 5.0),
    Parameter('well.radius', 'Black Hole Radius', 0.0, 100.0, 1.0),
    Parameter('well.gravity', 'Black Hole Gravity', 0.0, 10000.0, 50.0),
    Parameter('config.max_dist', 'Max Distance', 50.0, 1000.0, 10.0),
    Parameter('config.min_spawn_dist', 'Min Spawn Distance', 50.0, 1000.0, 5.0),
    Parameter('config.max_spawn_dist', 'Max Spawn Distance', 50.0, 1000.0, 5.0),
    Parameter('config.particle_radius', 'Particle Radius', 1.0, 10.0, 0.5),
]

BY_NAME = {p.name: p for p in PARAMETERS}


def _target(state: SimulationState, name: str) -> Tuple[object, str]:
    owner, attr = name.split('.')
    return getattr(state, owner), attr


def enforce_spawn_order(config: SimulationConfig, changed: str = 'min_spawn_dist'):
    """Push the bound that was not edited so that min_spawn_dist <= max_spawn_dist."""
    if config.min_spawn_dist <= config.max_spawn_dist:
        return
    if changed == 'max_spawn_dist':
        config.min_spawn_dist = config.max_spawn_dist - 1.0
    else:
        config.max_spawn_dist = config.min_spawn_dist + 1.0


def get_value(state: SimulationState, name: str) -> float:
    if name not in BY_NAME:
        raise KeyError(f"Unknown parameter: {name}")
    owner, attr = _target(state, name)
    return getattr(owner, attr)


def set_value(state: SimulationState, name: str, value: float) -> float:
    param = BY_NAME.get(name)
    if param is None:
        raise KeyError(f"Unknown parameter: {name}")
    owner, attr = _target(state, name)
    setattr(owner, attr, param.clamp(float(value)))
    enforce_spawn_order(state.config, changed=attr)
    return getattr(owner, attr)


def adjust(state: SimulationState, name: str, steps: float = 1) -> float:
    """Move a parameter by `steps` increments. Raises KeyError for unknown names."""
    value = get_value(state, name)
    return set_value(state, name, value + steps * BY_NAME[name].step)


def toggle_pause(state: SimulationState) -> bool:
    state.config.paused = not state.config.paused
    return state.config.paused


def toggle_boundary(state: SimulationState) -> bool:
    state.config.kill_boundary = not state.config.kill_boundary
    return state.config.kill_boundary


def describe(state: SimulationState) -> List[str]:
    lines = [f"{p.label}: {get_value(state, p.name):.1f}" for p in PARAMETERS]
    boundary = 'kill' if state.config.kill_boundary else 'sticky'
    lines.append(f"Boundary: {boundary}   {'Paused' if state.config.paused else 'Running'}")
    lines.append(f"Particles: {len(state.particles)}")
    return lines
