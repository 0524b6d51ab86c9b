# Licensed under the PolyForm Noncommercial License 1.0.0
"""Plotting functions for model rocket simulation results."""

from typing import Optional
import numpy as np
import matplotlib.pyplot as plt

from .models import TimeSeries


def plot_results(series: TimeSeries, show: bool = True, save_path: Optional[str] = None) -> None:
    """
    Plot simulation results.

    Args:
        series: Time series returned by the simulator
        show: Whether to display the plot
        save_path: If provided, save the plot to this path
    """
    results = series.to_dict()
    t = results['time']

    fig, axes = plt.subplots(3, 2, figsize=(12, 12))

    # 1. Altitude vs Time
    axes[0, 0].plot(t, results['altitude'])
    axes[0, 0].set_ylim(0, 1.5 * max(np.max(results['altitude']), 1.0))
    axes[0, 0].set_title("Rocket altitude")
    axes[0, 0].set_xlabel("time (s)")
    axes[0, 0].set_ylabel("altitude (m)")

    # 2. Velocity vs Time
    v = results['velocity']
    axes[0, 1].plot(t, v)
    if np.ptp(v) > 0:
        axes[0, 1].set_ylim(1.5 * min(np.min(v), 0.0), 1.5 * max(np.max(v), 0.0))
    axes[0, 1].set_title("Rocket velocity")
    axes[0, 1].set_xlabel("time (s)")
    axes[0, 1].set_ylabel("velocity (m/s)")

    # 3. Thrust force
    thrust_force = results['thrust_force']
    axes[1, 0].plot(t, thrust_force)
    if np.max(thrust_force) > 0:
        axes[1, 0].set_ylim(-0.5 * np.max(thrust_force), 1.5 * np.max(thrust_force))
    axes[1, 0].set_title("Thrust force")
    axes[1, 0].set_xlabel("time (s)")
    axes[1, 0].set_ylabel("force (N)")

    # 4. Drag force, sign changes on the way down
    axes[1, 1].plot(t, results['drag_force'])
    axes[1, 1].plot(t, np.zeros_like(t), '--k')
    axes[1, 1].set_title("Drag force")
    axes[1, 1].set_xlabel("time (s)")
    axes[1, 1].set_ylabel("force (N)")

    # 5. Gravity
    axes[2, 0].plot(t, results['gravity'])
    axes[2, 0].set_title("Gravitational acceleration")
    axes[2, 0].set_xlabel("time (s)")
    axes[2, 0].set_ylabel("g (m/s^2)")

    # 6. Air density and temperature seen by the rocket
    axes[2, 1].plot(t, results['density'], color='tab:blue')
    axes[2, 1].set_title("Air density and temperature")
    axes[2, 1].set_xlabel("time (s)")
    axes[2, 1].set_ylabel("density (kg/m^3)", color='tab:blue')
    temperature_axis = axes[2, 1].twinx()
    temperature_axis.plot(t, results['temperature'], color='tab:red')
    temperature_axis.set_ylabel("temperature (K)", color='tab:red')

    if series.burnout_time is not None:
        for ax in axes.flat:
            ax.axvline(series.burnout_time, color='grey', ls=':', lw=0.8)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
    if show:
        plt.show()

    plt.close(fig)
