import numpy as np


def radial_distances(states, center):
    """(n, 4) or (n, 2) → (n,) distances from center."""
    pos = np.asarray(states)[:, :2]
    return np.linalg.norm(pos - np.asarray(center)[None, :], axis=1)


def mean_radius(states, center):
    """Per-step mean distance from the well, nan where the population is empty."""
    return np.array([radial_distances(s, center).mean() if len(s) else np.nan
                     for s in states])


def angular_momentum(states, center):
    """Per-step total z angular momentum about the well (unit masses)."""
    cx, cy = center
    out = []
    for s in states:
        s = np.asarray(s).reshape(-1, 4)
        out.append(((s[:, 0] - cx) * s[:, 3] - (s[:, 1] - cy) * s[:, 2]).sum())
    return np.array(out)
