# Licensed under the PolyForm Noncommercial License 1.0.0
"""Piecewise standard atmosphere, from sea level to above 150 km."""

from typing import Tuple, Union
import numpy as np

from .models import molar_mass, gas_constant, AtmosphereSample

RHO_ABOVE_150 = 2.0763e-09


# Fits above 86 km (h in km), summed term by term
def _pressure_86_110(h):
    return np.exp(-4.22012E-08*h**5 + 2.13489E-05*h**4 - 4.26388E-03*h**3 + 0.421404*h**2 - 20.8270*h + 416.225)


def _density_86_110(h):
    return np.exp(7.5691E-08*h**5 - 3.76113E-05*h**4 + 0.0074765*h**3 - 0.743012*h**2 + 36.7280*h - 729.346)


def _density_110_120(h):
    return np.exp(-8.854164E-05*h**3 + 0.03373254*h**2 - 4.390837*h + 176.5294)


def _density_120_150(h):
    return np.exp(3.661771E-07*h**4 - 2.154344E-04*h**3 + 0.04809214*h**2 - 4.884744*h + 172.3597)


def _thermosphere_temperature(h):
    return 1000 - 640 * np.exp(-0.01875 * (h - 120) * (6356.766 + 120) / (6356.766 + h))


def atmosphere_profile(altitude: Union[float, int, np.ndarray]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorised atmosphere model.

    Args:
        altitude: Altitude above sea level (m). Can be float/int or np.ndarray.

    Returns:
        Tuple of (density in kg/m^3, temperature in K, pressure in Pa)
    """
    z = np.atleast_1d(np.asarray(altitude, dtype=float))
    h = z / 1000  # km

    T = np.empty_like(h)
    p = np.empty_like(h)
    rho = np.empty_like(h)

    # Troposphere (also takes negative altitudes)
    mask = h <= 11
    T[mask] = 288.15 - 6.5 * h[mask]
    p[mask] = 101325 * ((288.15 / (288.15 - 6.5 * h[mask])) ** (34.1632 / -6.5))

    # Tropopause
    mask = (h > 11) & (h <= 20)
    T[mask] = 216.65
    p[mask] = 22632.06 * np.exp(-34.1632 * (h[mask] - 11) / 216.65)

    # Stratosphere
    mask = (h > 20) & (h <= 32)
    T[mask] = 196.65 + 0.001 * z[mask]
    p[mask] = 5474.889 * ((216.65 / (216.65 + (h[mask] - 20))) ** 34.1632)

    mask = (h > 32) & (h <= 47)
    T[mask] = 139.05 + 2.8 * h[mask]
    p[mask] = 868.0187 * ((228.65 / (228.65 + 2.8 * (h[mask] - 32))) ** (34.1632 / 2.8))

    # Stratopause
    mask = (h > 47) & (h <= 51)
    T[mask] = 270.65
    p[mask] = 110.9063 * np.exp(-34.1632 * (h[mask] - 47) / 270.65)

    # Mesosphere
    mask = (h > 51) & (h <= 71)
    T[mask] = 413.45 - 2.8 * h[mask]
    p[mask] = 66.93887 * ((270.65 / (270.65 - 2.8 * (h[mask] - 51))) ** (34.1632 / -2.8))

    mask = (h > 71) & (h <= 86)
    T[mask] = 356.65 - 2.0 * h[mask]
    p[mask] = 3.956420 * ((214.65 / (214.65 - 2 * (h[mask] - 71))) ** (34.1632 / -2))

    mask = h <= 86
    rho[mask] = (molar_mass * p[mask]) / (gas_constant * T[mask])

    # Above 86 km pressure and density come from direct fits
    mask = (h > 86) & (h <= 110)
    p[mask] = _pressure_86_110(h[mask])
    rho[mask] = _density_86_110(h[mask])

    mask = (h > 86) & (h <= 91)
    T[mask] = 186.8673

    mask = (h > 91) & (h <= 110)
    T[mask] = 263.1905 - 76.3232 * np.sqrt(1 - ((h[mask] - 91) / -19.9429) ** 2)

    mask = (h > 110) & (h <= 120)
    p[mask] = 0.0
    rho[mask] = _density_110_120(h[mask])
    T[mask] = 240 + 12 * (h[mask] - 110)

    mask = (h > 120) & (h <= 150)
    p[mask] = 0.0
    rho[mask] = _density_120_150(h[mask])
    T[mask] = _thermosphere_temperature(h[mask])

    mask = h > 150
    p[mask] = 0.0
    rho[mask] = RHO_ABOVE_150
    T[mask] = _thermosphere_temperature(h[mask])

    return rho, T, p


def sample(altitude_m: float) -> AtmosphereSample:
    """Density, temperature and pressure at a single altitude (m)."""
    rho, T, p = atmosphere_profile(altitude_m)
    return AtmosphereSample(density=float(rho[0]), temperature=float(T[0]), pressure=float(p[0]))
