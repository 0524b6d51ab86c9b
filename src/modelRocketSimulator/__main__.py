# Licensed under the PolyForm Noncommercial License 1.0.0
"""
Command-line interface for the model rocket simulator.
"""

import argparse
import logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='model-rocket-sim',
        description='Vertical flight of a single stage model rocket',
    )
    parser.add_argument('--dt', type=float, default=0.1, help='Time step in seconds (default: 0.1)')
    parser.add_argument('--t-max', dest='t_max', type=float, default=10.0,
                        help='Simulated time limit in seconds (default: 10)')
    parser.add_argument('--thrust-to-weight', dest='thrust_to_weight', type=float, default=5.0)
    parser.add_argument('--mass', type=float, default=1.5, help='Lift-off mass in kg (default: 1.5)')
    parser.add_argument('--propellant', type=float, default=0.5, help='Propellant mass in kg (default: 0.5)')
    parser.add_argument('--diameter', type=float, default=0.1, help='Body diameter in m (default: 0.1)')
    parser.add_argument('--drag-coefficient', dest='drag_coefficient', type=float, default=0.75)
    parser.add_argument('--save', default=None, help='Save the figure to this path')
    parser.add_argument('--no-show', dest='show', action='store_false', help='Do not open the plot window')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log every integration step')
    return parser.parse_args(argv)


def main(argv=None):
    """Run the model rocket simulator with command-line parameters."""
    from .core import run, summarize
    from .models import RocketConfig
    from .plotting import plot_results

    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    print("Model Rocket Simulator")
    print("======================")

    config = RocketConfig.from_design(
        thrust_to_weight=args.thrust_to_weight,
        initial_mass=args.mass,
        propellant_mass=args.propellant,
        diameter=args.diameter,
        drag_coefficient=args.drag_coefficient,
    )

    # Run simulation
    print("Running simulation...")
    series = run(config, dt=args.dt, t_max=args.t_max)
    summary = summarize(series)

    # Plot results
    if args.show or args.save:
        print("Plotting results...")
        plot_results(series, show=args.show, save_path=args.save)

    print(f"\nSimulation Complete! ({summary.outcome})")
    print(f"Peak altitude: {summary.apogee:.1f} m at t = {summary.apogee_time:.1f} s")
    print(f"Maximum speed: {summary.max_velocity:.1f} m/s")
    if summary.burnout_time is not None:
        print(f"Burnout: t = {summary.burnout_time:.1f} s")
    print(f"Total impulse: {summary.total_impulse:.1f} N s")


if __name__ == "__main__":
    main()
