import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import os
import blackhole as B
from blackhole.engine import (generate_run, Particle, ParticleFactory,
                              SimulationConfig, SimulationState, Well)
from blackhole.metrics import mean_radius, angular_momentum
from blackhole.renderer import save_frames


def radial_infall(n_steps=500):
    """One particle released at rest on the boundary, sticky mode."""
    well = Well()
    config = SimulationConfig(kill_boundary=False)
    particle = Particle(x=well.x + config.max_dist, y=well.y, vx=0.0, vy=0.0)
    state = SimulationState(well=well, config=config, particles=[particle],
                            factory=ParticleFactory(np.random.RandomState(B.SEED)))

    distances = [particle.distance_to(well.x, well.y)]
    for _ in range(n_steps):
        state.step()
        if not any(p is particle for p in state.particles):
            break
        distances.append(particle.distance_to(well.x, well.y))
    return np.array(distances), state


def population_run(kill_boundary, n_steps=B.N_STEPS):
    state = SimulationState(
        config=SimulationConfig(kill_boundary=kill_boundary),
        factory=ParticleFactory(np.random.RandomState(B.SEED)),
    )
    return generate_run(state, n_steps=n_steps)


def evaluate(save_video_frames=False):
    os.makedirs('results/plots', exist_ok=True)

    distances, state = radial_infall()
    print(f"Infall: {len(distances) - 1} steps, absorbed: {state.absorbed}, "
          f"closest approach: {distances.min():.3f}")

    plt.figure(figsize=(10, 5))
    plt.plot(distances, color='black')
    plt.axhline(B.WELL_RADIUS, color='red', linestyle='--', label='Well radius')
    plt.title('Radial infall from the boundary (sticky)')
    plt.xlabel('Step')
    plt.ylabel('Distance from well')
    plt.legend()
    plt.savefig('results/plots/radial_infall.png')
    plt.close()

    runs = {'kill': population_run(True), 'sticky': population_run(False)}
    for name, run in runs.items():
        print(f"{name:>6}: population {run['population'][0]} → {run['population'][-1]}, "
              f"absorbed {run['absorbed'][-1]}, killed {run['killed'][-1]}, "
              f"mean distance {run['final']['mean_distance']:.1f}, "
              f"mean speed {run['final']['mean_speed']:.2f}")

    plt.figure(figsize=(10, 5))
    for name, run in runs.items():
        plt.plot(run['population'], label=f'{name} boundary')
    plt.title('Population over time')
    plt.xlabel('Step')
    plt.legend()
    plt.savefig('results/plots/population.png')
    plt.close()

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    for name, run in runs.items():
        axes[0].plot(mean_radius(run['states'], run['center']), label=name)
        axes[1].plot(angular_momentum(run['states'], run['center']), label=name)
    axes[0].set_title('Mean distance from well')
    axes[1].set_title('Total angular momentum')
    for ax in axes:
        ax.set_xlabel('Step')
        ax.legend()
    fig.savefig('results/plots/orbits.png')
    plt.close(fig)

    if save_video_frames:
        state = SimulationState(factory=ParticleFactory(np.random.RandomState(B.SEED)))
        save_frames(state, n_steps=120, path="results/frames")
        print("Frames saved to results/frames/")

    print("Plots saved to results/plots/")


if __name__ == "__main__":
    import sys
    evaluate(save_video_frames='--frames' in sys.argv)
