# Licensed under the PolyForm Noncommercial License 1.0.0
"""Mach dependent drag coefficient."""

import numpy as np

GAMMA_AIR = 1.4  # Ratio of specific heats
R_AIR = 287  # Specific gas constant of air (J kg^-1 K^-1)
MACH_ONE_SUBSTITUTE = 0.99999


def speed_of_sound(temperature: float) -> float:
    """Ideal gas speed of sound (m/s) at the given temperature (K)."""
    return np.sqrt(GAMMA_AIR * R_AIR * temperature)


def mach_number(velocity: float, temperature: float) -> float:
    """Signed Mach number; negative while descending."""
    return velocity / speed_of_sound(temperature)


def effective_drag_coefficient(velocity: float, temperature: float, base_coefficient: float) -> float:
    """
    Apply the Prandtl-Glauert correction to the reference drag coefficient.

    Args:
        velocity: Vertical velocity (m/s), signed
        temperature: Local air temperature (K)
        base_coefficient: Incompressible drag coefficient

    Returns:
        Effective drag coefficient
    """
    mach = mach_number(velocity, temperature)

    if mach < -1:
        # supersonic descent
        return base_coefficient
    elif mach < 1:
        return base_coefficient / np.sqrt(1 - mach ** 2)
    elif mach == 1:
        mach = MACH_ONE_SUBSTITUTE  # singularity
        return base_coefficient / np.sqrt(1 - mach ** 2)
    else:
        # supersonic
        return base_coefficient
