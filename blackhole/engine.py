"""
2D gravity-well simulation: particles orbiting and falling into a black hole.

- One well pulling every particle with an inverse-square force
- No particle-particle interaction
- Absorbed particles are replaced by two fresh ones on the spawn annulus
- Outer boundary either kills particles or holds them (sticky)
- State per particle: (x, y, vx, vy, color)
"""

import logging
import numpy as np
from dataclasses import dataclass, asdict, fields
from typing import List, Tuple, Optional, Dict

import blackhole as B

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


def known_fields(cls, data: Dict) -> Dict:
    """Drop keys that are not fields of the dataclass `cls`."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


def coerce_fields(cls, data: Dict) -> Dict:
    """known_fields, with numeric fields cast to finite numbers and bool fields checked."""
    kwargs = known_fields(cls, data)
    for f in fields(cls):
        if f.name not in kwargs:
            continue
        value = kwargs[f.name]
        if f.type is bool:
            if not isinstance(value, bool):
                raise TypeError(f"{cls.__name__}.{f.name} must be a bool, got {value!r}")
        elif f.type in (float, int):
            if isinstance(value, bool):
                raise TypeError(f"{cls.__name__}.{f.name} must be a number, got {value!r}")
            value = f.type(value)
            if not np.isfinite(value):
                raise ValueError(f"{cls.__name__}.{f.name} must be finite, got {value!r}")
            kwargs[f.name] = value
    return kwargs


def _color(raw) -> Color:
    channels = tuple(int(c) for c in raw)
    if len(channels) != 3 or not all(0 <= c <= 255 for c in channels):
        raise ValueError(f"color must be 3 channels in 0-255, got {raw!r}")
    return channels


@dataclass
class Particle:
    """Physics state plus draw color."""
    x: float
    y: float
    vx: float
    vy: float
    color: Color = (255, 255, 255)

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y])

    @property
    def velocity(self) -> np.ndarray:
        return np.array([self.vx, self.vy])

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    @property
    def state(self) -> np.ndarray:
        return np.array([self.x, self.y, self.vx, self.vy])

    def distance_to(self, x: float, y: float) -> float:
        return float(np.linalg.norm(self.position - np.array([x, y])))


@dataclass
class Well:
    x: float = B.WELL_POSITION[0]
    y: float = B.WELL_POSITION[1]
    radius: float = B.WELL_RADIUS
    gravity: float = B.WELL_GRAVITY

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass
class SimulationConfig:
    max_dist: float = B.MAX_DIST
    particle_radius: float = B.PARTICLE_RADIUS
    min_spawn_dist: float = B.MIN_SPAWN_DIST
    max_spawn_dist: float = B.MAX_SPAWN_DIST
    paused: bool = False
    kill_boundary: bool = B.KILL_BOUNDARY


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the host for drawing."""
    well_position: Tuple[float, float]
    well_radius: float
    max_dist: float
    particle_radius: float
    positions: np.ndarray  # (n, 2)
    colors: np.ndarray     # (n, 3) uint8

    def __len__(self) -> int:
        return self.positions.shape[0]


class ParticleFactory:
    """Spawns particles on an annulus around a center with tangential velocity."""

    def __init__(self, rng: Optional[np.random.RandomState] = None,
                 speed_range: Tuple[float, float] = B.SPEED_RANGE):
        self.rng = rng if rng is not None else np.random.RandomState()
        self.speed_range = speed_range

    def make(self, center: Tuple[float, float], min_distance: float,
             max_distance: float) -> Particle:
        # min_distance <= max_distance is the caller's job
        angle = self.rng.uniform(0, 2 * np.pi)
        distance = self.rng.uniform(min_distance, max_distance)
        speed = self.rng.uniform(*self.speed_range)
        color = tuple(self.rng.randint(0, 256, size=3).tolist())
        return Particle(
            x=float(center[0] + np.cos(angle) * distance),
            y=float(center[1] + np.sin(angle) * distance),
            vx=float(-np.sin(angle) * speed),
            vy=float(np.cos(angle) * speed),
            color=color,
        )


class SimulationState:
    """
    Gravity-well particle system, advanced one frame per step().

    Step: reseed if empty → per particle: absorb | gravity → velocity →
    position → boundary → append replacements
    """

    def __init__(self, well: Optional[Well] = None,
                 config: Optional[SimulationConfig] = None,
                 factory: Optional[ParticleFactory] = None,
                 particles: Optional[List[Particle]] = None):
        self.well = well if well is not None else Well()
        self.config = config if config is not None else SimulationConfig()
        self.factory = factory if factory is not None else ParticleFactory()
        self.particles: List[Particle] = list(particles) if particles else []
        self.frame: int = 0
        self.absorbed: int = 0
        self.killed: int = 0

    # Spawning

    def spawn(self, n: int) -> List[Particle]:
        """n new particles on the current spawn annulus. Not added to the live set."""
        return [self.factory.make(self.well.position,
                                  self.config.min_spawn_dist,
                                  self.config.max_spawn_dist)
                for _ in range(n)]

    def reseed(self, n: int = B.RESEED_COUNT) -> List[Particle]:
        self.particles = self.spawn(n)
        logger.debug(f"Reseeded {n} particles at frame {self.frame}")
        return self.particles

    def reset(self):
        """Back to the default well and config with an empty particle set."""
        self.well = Well()
        self.config = SimulationConfig()
        self.particles = []
        self.frame = 0
        self.absorbed = 0
        self.killed = 0
        logger.info("Simulation reset to defaults")

    # Update

    def step(self) -> List[Particle]:
        if self.config.paused:
            return self.particles

        if not self.particles:
            self.reseed()

        wx, wy = self.well.x, self.well.y
        max_dist = self.config.max_dist
        survivors = []
        spawned = []

        for p in self.particles:
            dx = wx - p.x
            dy = wy - p.y
            distance = np.sqrt(dx**2 + dy**2)

            # Covers distance == 0 as well, radius is never negative
            absorbed = distance <= self.well.radius
            if not absorbed:
                with np.errstate(over='ignore', divide='ignore'):
                    force = self.well.gravity / distance**2
                # Close enough to the center that the pull overflows
                absorbed = not np.isfinite(force)
            if absorbed:
                spawned.extend(self.spawn(B.ABSORB_REPLACEMENTS))
                self.absorbed += 1
                continue

            nx, ny = dx / distance, dy / distance
            p.vx += nx * force
            p.vy += ny * force
            next_x = p.x + p.vx
            next_y = p.y + p.vy

            if np.sqrt((wx - next_x)**2 + (wy - next_y)**2) > max_dist:
                if self.config.kill_boundary:
                    self.killed += 1
                    continue
                p.x = wx - nx * max_dist
                p.y = wy - ny * max_dist
                p.vx *= B.BOUNDARY_DAMPING
                p.vy *= B.BOUNDARY_DAMPING
            else:
                p.x, p.y = next_x, next_y

            survivors.append(p)

        # Replacements join after the pass so they are not moved this frame
        survivors.extend(spawned)
        self.particles = survivors
        self.frame += 1
        return self.particles

    # State access

    def render_snapshot(self) -> Snapshot:
        n = len(self.particles)
        positions = np.array([[p.x, p.y] for p in self.particles],
                             dtype=np.float64).reshape(n, 2)
        colors = np.array([p.color for p in self.particles],
                          dtype=np.uint8).reshape(n, 3)
        return Snapshot(
            well_position=self.well.position,
            well_radius=self.well.radius,
            max_dist=self.config.max_dist,
            particle_radius=self.config.particle_radius,
            positions=positions,
            colors=colors,
        )

    def get_state(self) -> np.ndarray:
        """(n_particles, 4) → [x, y, vx, vy]"""
        return np.array([p.state for p in self.particles]).reshape(-1, 4)

    def population_stats(self) -> Dict[str, float]:
        if not self.particles:
            return {'count': 0, 'mean_distance': 0.0, 'mean_speed': 0.0}
        wx, wy = self.well.position
        return {
            'count': len(self.particles),
            'mean_distance': float(np.mean([p.distance_to(wx, wy) for p in self.particles])),
            'mean_speed': float(np.mean([p.speed for p in self.particles])),
        }

    # Persistence

    def to_dict(self) -> Dict:
        return {
            'well': asdict(self.well),
            'config': asdict(self.config),
            'particles': [asdict(p) for p in self.particles],
        }

    @classmethod
    def from_dict(cls, data: Dict,
                  factory: Optional[ParticleFactory] = None) -> 'SimulationState':
        """
        Missing fields fall back to defaults, unknown ones are ignored.
        Raises ValueError or TypeError when a field has the wrong type.
        """
        particles = []
        for raw in data.get('particles', []):
            kwargs = coerce_fields(Particle, raw)
            if 'color' in kwargs:
                kwargs['color'] = _color(kwargs['color'])
            particles.append(Particle(**kwargs))
        return cls(
            well=Well(**coerce_fields(Well, data.get('well', {}))),
            config=SimulationConfig(**coerce_fields(SimulationConfig, data.get('config', {}))),
            factory=factory,
            particles=particles,
        )


def generate_run(state: SimulationState, n_steps: int = B.N_STEPS) -> Dict:
    """Steps `state` n_steps times. Returns dict with states, population, absorbed, killed."""
    states = [state.get_state()]
    population = [len(state.particles)]
    absorbed = [state.absorbed]
    killed = [state.killed]

    for _ in range(n_steps):
        state.step()
        states.append(state.get_state())
        population.append(len(state.particles))
        absorbed.append(state.absorbed)
        killed.append(state.killed)

    return {
        'states': states,
        'center': state.well.position,
        'population': np.array(population),
        'absorbed': np.array(absorbed),
        'killed': np.array(killed),
        'final': state.population_stats(),
    }
