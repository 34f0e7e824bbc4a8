"""
Session persistence.

The whole session (well, config, live particles and appearance) is written as
one JSON document on exit and restored on start. A missing or unreadable file
falls back to a default session.
"""
import json
import logging
import os
from dataclasses import asdict
from typing import Optional, Tuple

from blackhole.engine import ParticleFactory, SimulationState, coerce_fields
from blackhole.renderer import AppearanceConfig

logger = logging.getLogger(__name__)


def session_to_dict(state: SimulationState,
                    appearance: Optional[AppearanceConfig] = None) -> dict:
    return {
        'simulation': state.to_dict(),
        'appearance': asdict(appearance or AppearanceConfig()),
    }


def session_from_dict(data: dict, factory: Optional[ParticleFactory] = None
                      ) -> Tuple[SimulationState, AppearanceConfig]:
    state = SimulationState.from_dict(data.get('simulation', {}), factory=factory)
    appearance = AppearanceConfig(**coerce_fields(AppearanceConfig, data.get('appearance', {})))
    return state, appearance


def save_session(path: str, state: SimulationState,
                 appearance: Optional[AppearanceConfig] = None) -> None:
    logger.info(f"Saving session to: {path}")
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(session_to_dict(state, appearance), f, indent=2)


def load_session(path: str, factory: Optional[ParticleFactory] = None
                 ) -> Tuple[SimulationState, AppearanceConfig]:
    if not os.path.exists(path):
        logger.info(f"No saved session at '{path}', starting from defaults")
        return SimulationState(factory=factory), AppearanceConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        state, appearance = session_from_dict(data, factory=factory)
    except (OSError, ValueError, TypeError, KeyError, AttributeError) as e:
        logger.warning(f"Could not restore session from '{path}': {e}")
        return SimulationState(factory=factory), AppearanceConfig()

    logger.info(f"Restored session with {len(state.particles)} particles from: {path}")
    return state, appearance
