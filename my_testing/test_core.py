"""Unit tests for the model rocket simulator core functionality."""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest
from modelRocketSimulator import (
    CRASHED,
    STOPPED,
    BALLISTIC,
    FlightRecord,
    FlightSummary,
    RocketConfig,
    TimeSeries,
    VerticalFlightSimulator,
    default_model_rocket,
    mach_number,
    plot_results,
    run,
    summarize,
)
from modelRocketSimulator.models import G, M_earth, R_earth, g0, rho0, T0, P0


def weak_rocket(**overrides):
    """A rocket whose motor cannot lift it."""
    params = dict(
        initial_mass=1.5,
        dry_mass=1.0,
        thrust=1.0,
        mass_flow_rate=0.01,
        drag_coefficient=0.75,
        area=0.01,
    )
    params.update(overrides)
    return RocketConfig(**params)


def test_default_rocket_initialization():
    """Test that the default rocket derives thrust, area and mass flow from its design numbers."""
    config = default_model_rocket()

    assert np.isclose(config.thrust, 5 * 1.5 * 9.81)
    assert config.initial_mass == 1.5
    assert np.isclose(config.dry_mass, 1.0)
    assert np.isclose(config.propellant_mass, 0.5)
    assert np.isclose(config.area, np.pi * 0.05 ** 2)
    assert np.isclose(config.specific_impulse, 5 * 9.81)
    assert np.isclose(config.mass_flow_rate, config.thrust / (9.81 * 5 * 9.81))
    assert config.length == 0.6


@pytest.mark.parametrize("overrides", [
    dict(dry_mass=1.5),
    dict(dry_mass=2.0),
    dict(dry_mass=0.0),
    dict(thrust=0.0),
    dict(thrust=-5.0),
    dict(mass_flow_rate=0.0),
    dict(drag_coefficient=0.0),
    dict(area=-0.01),
])
def test_invalid_config_rejected(overrides):
    """Construction fails fast on nonsensical rockets."""
    with pytest.raises(ValueError):
        weak_rocket(**overrides)


def test_config_is_immutable():
    config = default_model_rocket()
    with pytest.raises(AttributeError):
        config.thrust = 0.0


@pytest.mark.parametrize("kwargs", [
    dict(dt=0.0),
    dict(dt=-0.1),
    dict(t_max=0.0),
    dict(initial_altitude=-1.0),
])
def test_invalid_run_parameters_rejected(kwargs):
    with pytest.raises(ValueError):
        run(default_model_rocket(), **kwargs)


def test_gravity_calculation():
    """Test that gravity is calculated correctly at different altitudes."""
    simulator = VerticalFlightSimulator(default_model_rocket())

    # Test at sea level
    g_sea = simulator._gravity(0)
    assert np.isclose(g_sea, 9.8, rtol=0.01)

    # Test at 100km altitude
    g_100km = simulator._gravity(100000)
    assert g_100km < g_sea
    assert np.isclose(g_100km, 9.5, rtol=0.01)


def test_crash_requires_strictly_negative_altitude():
    assert not VerticalFlightSimulator._crashed(0.0)
    assert not VerticalFlightSimulator._crashed(1e-12)
    assert VerticalFlightSimulator._crashed(-1e-12)


def test_launch_record():
    """The series starts with the launch state and sea-level reference values."""
    config = default_model_rocket()
    series = run(config)
    launch = series[0]

    assert launch.time == 0.0
    assert launch.altitude == 0.0
    assert launch.velocity == 0.0
    assert launch.mass == config.initial_mass
    assert launch.gravity == g0
    assert launch.drag == 0.0
    assert np.isclose(launch.thrust, config.thrust / config.initial_mass)
    assert (launch.density, launch.temperature, launch.pressure) == (rho0, T0, P0)


def test_first_step_is_euler_cromer():
    """Velocity uses the old state, altitude the new velocity."""
    config = default_model_rocket()
    dt = 0.1
    series = run(config, dt=dt, t_max=1.0)
    first = series[1]

    m1 = config.initial_mass - config.mass_flow_rate * dt
    g = G * M_earth / R_earth ** 2
    expected_v = (config.thrust / m1 - g) * dt

    assert np.isclose(first.time, dt)
    assert np.isclose(first.mass, m1)
    assert np.isclose(first.gravity, g)
    assert first.drag == 0.0  # launched from rest
    assert np.isclose(first.velocity, expected_v)
    assert first.altitude == first.velocity * dt

    second = series[2]
    assert np.isclose(second.altitude, first.altitude + second.velocity * dt)


def test_default_flight_stops_at_time_limit():
    """With the default 10 s limit the rocket is still airborne."""
    series = run(default_model_rocket(), dt=0.1, t_max=10.0)

    assert series.outcome == STOPPED
    assert len(series) == 101
    assert np.isclose(series['time'][-1], 10.0)
    assert np.allclose(np.diff(series['time']), 0.1)
    assert np.all(series['altitude'] >= 0)


def test_default_flight_burnout():
    """0.5 kg of propellant is gone after 3.3 s; thrust and mass flow stop for good."""
    config = default_model_rocket()
    series = run(config, dt=0.1, t_max=10.0)

    assert np.isclose(series.burnout_time, 3.3)

    t = series['time']
    mass = series['mass']
    thrust = series['thrust']
    after = t > series.burnout_time + 1e-9

    assert np.all(thrust[~after] > 0)
    assert np.all(thrust[after] == 0)
    assert mass[after].min() == mass[after].max()
    assert mass[after][0] < config.dry_mass
    # gravity keeps acting
    assert np.all(series['gravity'] > 9.7)


def test_default_flight_climbs_peaks_and_crashes():
    """Powered climb, apogee, then ballistic descent into the ground."""
    series = run(default_model_rocket(), dt=0.1, t_max=60.0)
    z = series['altitude']
    v = series['velocity']

    assert series.outcome == CRASHED
    assert z[-1] < 0
    assert np.all(z[:-1] >= 0)

    # altitude keeps rising while the motor burns
    assert np.all(np.diff(z[:34]) > 0)

    i_apogee = int(np.argmax(z))
    assert 0 < i_apogee < len(z) - 1
    assert series['time'][i_apogee] > series.burnout_time
    assert np.all(v[i_apogee + 1:] < 0)


def test_drag_opposes_descent():
    """Falling from altitude, the recorded drag is negative and helps against gravity."""
    series = run(weak_rocket(), dt=0.1, t_max=60.0, initial_altitude=2000.0)

    assert series.outcome == CRASHED
    # drag of step k is computed from the velocity of step k-1
    previous_velocity = series['velocity'][:-1]
    drag = series['drag'][1:]
    assert np.all(drag[previous_velocity < 0] < 0)
    assert np.all(drag[previous_velocity < 0] > -series['gravity'][1:][previous_velocity < 0])


def test_supersonic_fall_from_thermosphere_crashes():
    """A drop from 150 km goes supersonic, stays finite and still ends in a crash."""
    series = run(weak_rocket(), dt=0.1, t_max=1500.0, initial_altitude=150000.0)
    v = series['velocity']

    assert np.all(np.isfinite(v))
    assert np.all(np.isfinite(series['altitude']))
    assert np.all(np.isfinite(series['drag']))
    assert np.any(mach_number(v, series['temperature']) < -1)
    assert series.outcome == CRASHED
    assert series[-1].altitude < 0


def test_weak_motor_crashes_on_first_step():
    """Thrust below weight: the first step already ends below ground."""
    series = run(weak_rocket(), dt=0.1, t_max=10.0)

    assert series.outcome == CRASHED
    assert len(series) == 2
    assert series[-1].altitude < 0
    assert series.burnout_time is None


def test_initial_velocity():
    """A rocket launched upward coasts higher than one launched from rest."""
    at_rest = summarize(run(weak_rocket(), t_max=30.0, initial_altitude=100.0))
    thrown = summarize(run(weak_rocket(), t_max=30.0, initial_altitude=100.0, initial_velocity=50.0))

    assert thrown.apogee > at_rest.apogee
    assert thrown.flight_time > at_rest.flight_time


def test_simulator_can_be_reused():
    """Every simulate() call starts powered, whatever the previous flight did."""
    simulator = VerticalFlightSimulator(default_model_rocket())
    first = simulator.simulate(dt=0.1, t_max=10.0)
    assert simulator.phase is BALLISTIC

    second = simulator.simulate(dt=0.1, t_max=10.0)
    assert np.array_equal(first['altitude'], second['altitude'])
    assert np.array_equal(first['velocity'], second['velocity'])


def test_time_series_is_frozen_after_run():
    series = run(default_model_rocket(), t_max=1.0)

    assert series.frozen
    with pytest.raises(RuntimeError):
        series.append(series[-1])


def test_time_series_columns():
    series = run(default_model_rocket(), t_max=5.0)
    results = series.to_dict()

    for key in ['time', 'altitude', 'velocity', 'mass', 'gravity', 'thrust', 'drag',
                'density', 'temperature', 'pressure', 'thrust_force', 'drag_force']:
        assert len(results[key]) == len(series)

    assert np.allclose(results['thrust_force'], results['thrust'] * results['mass'])
    assert np.allclose(series['drag_force'], [record.drag_force for record in series])
    assert results['outcome'] == STOPPED
    assert isinstance(series.records, tuple)

    with pytest.raises(KeyError):
        series.column('acceleration')


def test_time_series_append():
    record = FlightRecord(0.0, 0.0, 0.0, 1.0, 9.81, 0.0, 0.0, 1.2, 288.15, 101325.0)
    series = TimeSeries()
    series.append(record)
    series.append(record)
    assert len(series) == 2
    assert series.outcome is None


def test_summary():
    """Impulse, apogee and delta-v of the default flight."""
    config = default_model_rocket()
    series = run(config, dt=0.1, t_max=60.0)
    summary = summarize(series)

    assert summary.outcome == CRASHED
    assert summary.apogee == series['altitude'].max()
    assert summary.burnout_time == series.burnout_time
    assert summary.max_velocity == series['velocity'].max()
    assert summary.apogee_time > summary.burnout_time
    # constant thrust force up to the 3.3 s record, zero from 3.4 s
    assert np.isclose(summary.total_impulse, config.thrust * 3.35)
    assert summary.ideal_delta_v > summary.max_velocity
    assert len(summary.delta_v_history) == len(series)
    assert summary.delta_v_history[0] == 0.0


def test_summary_history_is_optional():
    summary = FlightSummary(STOPPED, 1.0, 2.0, 0.5, 3.0, 0.1, None, 0.0, 0.0)
    assert summary.delta_v_history is None
    assert summary == FlightSummary(STOPPED, 1.0, 2.0, 0.5, 3.0, 0.1, None, 0.0, 0.0, np.zeros(3))


def test_plot_results(tmp_path):
    """Plotting accepts a finished flight and writes the figure."""
    series = run(default_model_rocket(), dt=0.1, t_max=30.0)
    path = tmp_path / "flight.png"

    plot_results(series, show=False, save_path=str(path))

    assert path.exists()


def test_command_line(capsys):
    from modelRocketSimulator.__main__ import main

    main(['--no-show', '--t-max', '20'])
    out = capsys.readouterr().out

    assert "Peak altitude" in out
    assert "Burnout: t = 3.3 s" in out
