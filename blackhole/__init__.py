# ── Central defaults (tune here, not scattered across files) ──

# Well
WELL_POSITION = (640.0, 400.0)
WELL_RADIUS = 5.0
WELL_GRAVITY = 500.0

# Boundary
MAX_DIST = 500.0
BOUNDARY_DAMPING = 0.1
KILL_BOUNDARY = True

# Spawning
MIN_SPAWN_DIST = 50.0
MAX_SPAWN_DIST = 100.0
SPEED_RANGE = (1.0, 3.0)
RESEED_COUNT = 50
ABSORB_REPLACEMENTS = 2

# Rendering
PARTICLE_RADIUS = 2.0
WINDOW_SIZE = (1280, 1024)
FPS = 60
DARK_BG = (27, 27, 27)
LIGHT_BG = (248, 248, 248)

# Runs
N_STEPS = 2000
SEED = 42
