# Licensed under the PolyForm Noncommercial License 1.0.0
"""Model Rocket Simulator - vertical flight of a single stage model rocket through Earth's atmosphere."""

from .models import (
    G,
    R_earth,
    M_earth,
    g0,
    CRASHED,
    STOPPED,
    BALLISTIC,
    RocketConfig,
    PropulsionPhase,
    SimulationState,
    AtmosphereSample,
    FlightRecord,
    TimeSeries,
    FlightSummary,
    default_model_rocket,
)

from .atmosphere import sample, atmosphere_profile
from .drag import effective_drag_coefficient, mach_number, speed_of_sound
from .core import VerticalFlightSimulator, run, summarize
from .plotting import plot_results

__version__ = "0.1.0"
__all__ = [
    "RocketConfig",
    "PropulsionPhase",
    "SimulationState",
    "AtmosphereSample",
    "FlightRecord",
    "TimeSeries",
    "FlightSummary",
    "default_model_rocket",
    "VerticalFlightSimulator",
    "run",
    "summarize",
    "sample",
    "atmosphere_profile",
    "effective_drag_coefficient",
    "mach_number",
    "speed_of_sound",
    "plot_results",
    "G",
    "R_earth",
    "M_earth",
    "g0",
    "CRASHED",
    "STOPPED",
    "BALLISTIC",
]
