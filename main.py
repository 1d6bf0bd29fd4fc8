# main.py
"""
Main entry point for the Galaxy simulation.

This script orchestrates the entire application lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window and populates the galaxy.
4. Runs the frame loop until the window closes (or max_steps is reached).
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config
import numpy as np
import cProfile
import pstats
import io


def main(config_path: str = 'config.json'):
    """
    The main function to run the simulation.
    """
    # Load configuration from the JSON file first.
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Galaxy Simulation Starting ---")

    galaxy_params = config['galaxy']
    physics_params = config['physics']
    display_params = config['display']
    run_params = config['run_control']

    from galaxy import Galaxy
    from settings import Settings
    from visualization import Visualizer
    import pygame

    # --- Component Initialization ---
    # 1. The visualizer determines the surface dimensions.
    visualizer = Visualizer(display_params)

    # 2. The galaxy wraps particles at those dimensions.
    galaxy = Galaxy(
        Settings.from_config(galaxy_params),
        visualizer.width,
        visualizer.height,
        use_spatial_grid=physics_params.get('spatial_grid', False),
        seed=galaxy_params.get('seed'),
    )

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    log_throttle = max(run_params.get('log_throttle_steps', 300), 1)
    max_steps = run_params.get('max_steps', 0)
    initial_attractor_delay = display_params.get('initial_attractor_delay_ms', 1000)
    start_ticks = pygame.time.get_ticks()
    initial_attractors_added = False

    running = True
    if profiler:
        profiler.enable()
    while running:
        if not visualizer.handle_events(galaxy):
            break

        if not initial_attractors_added and pygame.time.get_ticks() - start_ticks >= initial_attractor_delay:
            galaxy.add_initial_attractors()
            initial_attractors_added = True

        # A paused galaxy neither advances nor redraws; the last frame stays up.
        if galaxy.tick(visualizer.canvas):
            step_num = galaxy.tick_count

            # Hot loops must throttle logs
            if step_num % log_throttle == 0:
                logging.info(f"Simulation step {step_num}")
                velocities = galaxy.particles.velocities
                if len(velocities):
                    avg_velocity = np.mean(np.linalg.norm(velocities, axis=1))
                    logging.debug(
                        f"Step {step_num} | Average Velocity: {avg_velocity:.4f} | "
                        f"Attractors: {len(galaxy.attractors)}"
                    )

            if max_steps and step_num >= max_steps:
                logging.info(f"Reached max_steps ({max_steps}). Stopping simulation.")
                running = False

        visualizer.present(galaxy)
    if profiler:
        profiler.disable()

    visualizer.close()
    logging.info("Simulation loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20) # Print top 20 slowest functions
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Galaxy Simulation Shutting Down ---")


if __name__ == "__main__":
    main()
