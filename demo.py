"""
Interactive demo: watch particles spiral into the black hole.
Run: python demo.py [session.json]

Space pause, K kill/sticky boundary, R reset, D dark mode, H HUD,
Tab/Shift+Tab pick a parameter, Left/Right adjust it (Shift = x10), Q quit.
The session is saved on exit and restored on the next run.
"""
import logging
import sys

import blackhole as B
from blackhole.logging_config import setup_logging
from blackhole.renderer import Renderer
from blackhole.storage import load_session, save_session

session_path = sys.argv[1] if len(sys.argv) > 1 else 'results/session.json'

setup_logging(level=logging.INFO)
state, appearance = load_session(session_path)
print(f"Particles: {len(state.particles)}")

renderer = Renderer(appearance)
renderer.play(state, fps=B.FPS)
save_session(session_path, state, renderer.config)

print(f"Frames: {state.frame}, absorbed: {state.absorbed}, killed at boundary: {state.killed}")
