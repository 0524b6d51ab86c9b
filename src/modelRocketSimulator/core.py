# Licensed under the PolyForm Noncommercial License 1.0.0
"""Core simulation logic for the vertical model rocket simulator."""

import logging
import numpy as np
from scipy.integrate import cumulative_trapezoid, trapezoid

from . import atmosphere, drag as drag_model
from .models import (
    G, M_earth, R_earth, g0, P0, T0, rho0,
    CRASHED, STOPPED, BALLISTIC,
    FlightRecord, FlightSummary, PropulsionPhase, RocketConfig, SimulationState, TimeSeries,
)

logger = logging.getLogger(__name__)


class VerticalFlightSimulator:
    """
    Simulates the vertical flight of a single stage model rocket with a fixed
    step Euler-Cromer scheme: velocity is advanced with the acceleration of
    the old state, altitude with the new velocity.
    """

    def __init__(self, config: RocketConfig):
        """
        Initialize the simulator.

        Args:
            config: Rocket description, fixed for the whole flight
        """
        self.config = config
        self.phase = PropulsionPhase.powered(config)

    def _gravity(self, altitude: float) -> float:
        """Calculate gravitational acceleration at given altitude."""
        return G * M_earth / (altitude + R_earth) ** 2

    @staticmethod
    def _crashed(altitude: float) -> bool:
        return altitude < 0

    def _launch_record(self, state: SimulationState) -> FlightRecord:
        return FlightRecord(
            time=state.time,
            altitude=state.altitude,
            velocity=state.velocity,
            mass=state.mass,
            gravity=g0,
            thrust=self.phase.thrust / state.mass,
            drag=0.0,
            density=rho0,
            temperature=T0,
            pressure=P0,
        )

    def _step(self, state: SimulationState, t: float, dt: float) -> FlightRecord:
        """Advance state in place to time t, one step of dt, and return the step's record."""
        z, v = state.altitude, state.velocity

        g = self._gravity(z)
        state.mass = state.mass - self.phase.mass_flow_rate * dt
        air = atmosphere.sample(z)

        cd = drag_model.effective_drag_coefficient(v, air.temperature, self.config.drag_coefficient)
        thrust = self.phase.thrust / state.mass
        drag = 0.5 * air.density * v ** 2 * cd * self.config.area / state.mass

        if v < 0:
            # v**2 loses the sign, drag must still oppose the motion
            drag = -drag

        state.velocity = v + (thrust - drag - g) * dt
        state.altitude = z + state.velocity * dt
        state.time = t

        return FlightRecord(
            time=state.time,
            altitude=state.altitude,
            velocity=state.velocity,
            mass=state.mass,
            gravity=g,
            thrust=thrust,
            drag=drag,
            density=air.density,
            temperature=air.temperature,
            pressure=air.pressure,
        )

    def simulate(self, dt: float = 0.1, t_max: float = 10.0,
                 initial_altitude: float = 0.0, initial_velocity: float = 0.0) -> TimeSeries:
        """
        Fly the rocket until it crashes or t_max is reached.

        Args:
            dt: Fixed time step (s)
            t_max: Simulated time limit (s)
            initial_altitude: Launch altitude (m)
            initial_velocity: Launch vertical velocity (m/s)

        Returns:
            TimeSeries starting with the launch record at t=0
        """
        if dt <= 0:
            raise ValueError("Time step must be a positive non zero value")
        if t_max <= 0:
            raise ValueError("Simulation time must be a positive non zero value")
        if initial_altitude < 0:
            raise ValueError("Initial altitude must be greater or equal to zero")

        self.phase = PropulsionPhase.powered(self.config)
        state = SimulationState(time=0.0, altitude=initial_altitude, velocity=initial_velocity,
                                mass=self.config.initial_mass)
        series = TimeSeries([self._launch_record(state)])

        n_steps = int(np.floor(t_max / dt + 1e-9))
        logger.info("Starting simulation: dt=%.3f s, t_max=%.1f s, %d steps", dt, t_max, n_steps)

        outcome = STOPPED
        for k in range(1, n_steps + 1):
            record = self._step(state, k * dt, dt)
            series.append(record)
            logger.debug("t=%.2f s z=%.3f m v=%.3f m/s m=%.4f kg", state.time, state.altitude,
                         state.velocity, state.mass)

            if self._crashed(state.altitude):
                logger.info("Rocket hit the ground at t=%.2f s", state.time)
                outcome = CRASHED
                break
            elif state.mass < self.config.dry_mass and self.phase.is_powered:
                logger.info("Burnout at t=%.2f s, mass %.4f kg", state.time, state.mass)
                self.phase = BALLISTIC
                state.fueled = False
                series.burnout_time = state.time

        series.freeze(outcome)
        logger.info("Simulation finished (%s) after %d steps, final altitude %.2f m",
                    outcome, len(series) - 1, state.altitude)
        return series


def run(config: RocketConfig, dt: float = 0.1, t_max: float = 10.0,
        initial_altitude: float = 0.0, initial_velocity: float = 0.0) -> TimeSeries:
    """Simulate one flight of config and return its time series."""
    return VerticalFlightSimulator(config).simulate(dt, t_max, initial_altitude=initial_altitude,
                                                    initial_velocity=initial_velocity)


def summarize(series: TimeSeries) -> FlightSummary:
    """Apogee, burnout, impulse and delta-v of a finished flight."""
    t = series['time']
    z = series['altitude']
    v = series['velocity']

    i_apogee = int(np.argmax(z))
    # Δv = ∫(thrust / m) dt, trapezoid integration
    delta_v = cumulative_trapezoid(series['thrust'], t, initial=0.0)

    return FlightSummary(
        outcome=series.outcome,
        flight_time=float(t[-1]),
        apogee=float(z[i_apogee]),
        apogee_time=float(t[i_apogee]),
        max_velocity=float(np.max(v)),
        max_drag=float(np.max(np.abs(series['drag']))),
        burnout_time=series.burnout_time,
        total_impulse=float(trapezoid(series['thrust_force'], t)),
        ideal_delta_v=float(delta_v[-1]),
        delta_v_history=delta_v,
    )
