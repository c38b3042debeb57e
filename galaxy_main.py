"""
Spiral Galaxy Simulation
========================

Generates a spiral galaxy (Kroupa-sampled stars on logarithmic arms around a
massive center), gives every star a circular orbit and integrates it in real
time.

Controls:
    - W/S: Rotate camera up/down
    - A/D: Rotate camera left/right
    - Q/E: Zoom in/out
    - Mouse drag: Rotate camera
    - Mouse wheel: Zoom
    - SPACE: Pause/Resume simulation
    - R: Regenerate galaxy
    - F: Frame the whole galaxy
    - ,/.: Slower/faster simulation
    - H: Toggle help text
    - ESC: Quit
"""

import argparse
import time

from config import galaxy as config
from galaxy import GalaxyConfig, GalaxyConfigError, GalaxySimulation
from tools.presets import get_preset_config, print_preset_menu


def build_config(preset=None, count=None) -> GalaxyConfig:
    """GalaxyConfig from the base GALAXY values, a preset and command-line overrides."""
    if preset:
        values = get_preset_config(preset)
        if values is None:
            raise GalaxyConfigError(f"Unknown preset '{preset}' (use --list-presets)")
    else:
        values = dict(config.GALAXY)
    if count is not None:
        values["count"] = count
    return GalaxyConfig.from_dict(values).validate()


def run_headless(galaxy_config: GalaxyConfig, steps: int, dt: float, seed=None):
    """Generate and step the galaxy without a window, printing diagnostics."""
    simulation = GalaxySimulation(galaxy_config, seed=seed, use_gpu=False)

    start = time.perf_counter()
    for _ in range(steps):
        simulation.update(dt)
    elapsed = time.perf_counter() - start

    report = simulation.diagnostics()
    print(f"[Headless] {steps} steps in {elapsed:.2f}s ({steps / max(elapsed, 1e-9):.1f} steps/s)")
    for key in ("count", "time", "steps", "mean_stellar_mass", "total_mass", "max_radius"):
        print(f"[Headless] {key}: {report[key]}")
    print(f"[Headless] mass_histogram: {report['mass_histogram']}")
    return report


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Real-time spiral galaxy simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python galaxy_main.py                              # Default galaxy
  python galaxy_main.py --preset grand_design        # Use a preset
  python galaxy_main.py --count 50000 --seed 7       # Bigger, reproducible
  python galaxy_main.py --headless 500 --dt 0.02     # No window, print stats
        """
    )
    parser.add_argument("--preset", help="Galaxy preset key (see --list-presets)")
    parser.add_argument("--count", type=int, help="Number of bodies including the center")
    parser.add_argument("--seed", type=int, default=config.SIMULATION["seed"],
                        help="Random seed for reproducible galaxies")
    parser.add_argument("--list-presets", action="store_true",
                        help="Print available presets and exit")
    parser.add_argument("--headless", type=int, metavar="STEPS",
                        help="Run STEPS simulation steps without a window")
    parser.add_argument("--dt", type=float, default=0.02,
                        help="Time step for --headless (default: 0.02)")
    parser.add_argument("--cpu", action="store_true",
                        help="Disable the CUDA backend")

    args = parser.parse_args(argv)

    if args.list_presets:
        print_preset_menu()
        return 0

    try:
        galaxy_config = build_config(args.preset, args.count)
    except GalaxyConfigError as e:
        print(f"[Galaxy] Error: {e}")
        return 1

    if args.headless is not None:
        run_headless(galaxy_config, args.headless, args.dt, seed=args.seed)
        return 0

    # Imported here so headless runs do not need a display
    from core.application import GalaxyApplication

    use_gpu = False if args.cpu else None
    app = GalaxyApplication(galaxy_config, seed=args.seed, use_gpu=use_gpu)
    app.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
