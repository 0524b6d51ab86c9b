# Licensed under the PolyForm Noncommercial License 1.0.0
"""Data models and constants for the model rocket simulator."""

from dataclasses import dataclass, field, fields
from typing import Dict, Iterator, List, Optional
import numpy as np

# Physical constants
G = 6.674e-11  # Gravitational constant (m^3 kg^-1 s^-2)
R_earth = 6.371e6  # Earth's radius (m)
M_earth = 5.972e24  # Earth's mass (kg)
g0 = 9.81  # Gravitational acceleration at sea level (m/s^2)

# Air
molar_mass = 0.029  # Molar mass of air (kg/mol)
gas_constant = 8.314  # Universal gas constant (J mol^-1 K^-1)
P0 = 101325.0  # Sea level pressure (Pa)
T0 = 300.0  # Launch site temperature (K)
rho0 = (molar_mass * P0) / (gas_constant * T0)  # Launch site density (kg/m^3)

CRASHED = "CRASHED"
STOPPED = "STOPPED"


@dataclass(frozen=True)
class RocketConfig:
    """Immutable description of a single stage model rocket.

    Attributes:
        initial_mass: Lift-off mass including propellant (kg)
        dry_mass: Mass once the propellant is expended (kg)
        thrust: Thrust force while fueled (N)
        mass_flow_rate: Propellant consumption (kg/s)
        drag_coefficient: Reference (incompressible) drag coefficient
        area: Cross-sectional reference area (m^2)
        thrust_to_weight: Nominal thrust-to-weight ratio at lift-off
        specific_impulse: Effective exhaust velocity (m/s)
        length: Overall length, informational only (m)
    """
    initial_mass: float
    dry_mass: float
    thrust: float
    mass_flow_rate: float
    drag_coefficient: float
    area: float
    thrust_to_weight: Optional[float] = None
    specific_impulse: Optional[float] = None
    length: Optional[float] = None

    def __post_init__(self):
        if any(value <= 0 for value in [self.thrust, self.mass_flow_rate, self.drag_coefficient, self.area]):
            raise ValueError("Thrust, mass flow rate, drag coefficient and area must be positive numbers.")
        if self.dry_mass <= 0:
            raise ValueError("Dry mass must be a positive number.")
        if self.dry_mass >= self.initial_mass:
            raise ValueError(f"Dry mass ({self.dry_mass} kg) must be smaller than the initial mass "
                             f"({self.initial_mass} kg).")

    @classmethod
    def from_design(cls, thrust_to_weight: float, initial_mass: float, propellant_mass: float,
                    diameter: float, drag_coefficient: float, length: Optional[float] = None) -> "RocketConfig":
        """
        Derive a configuration from the usual hobby rocket design numbers.

        Thrust is thrust_to_weight * initial weight, the specific impulse is
        taken as thrust_to_weight * g0 (m/s) and the mass flow rate follows
        from dm = FT / (g0 * Isp).

        Args:
            thrust_to_weight: Lift-off thrust-to-weight ratio
            initial_mass: Lift-off mass (kg)
            propellant_mass: Propellant carried (kg)
            diameter: Body diameter (m)
            drag_coefficient: Reference drag coefficient
            length: Optional overall length (m)
        """
        if diameter <= 0:
            raise ValueError("Diameter must be a positive number.")

        thrust = thrust_to_weight * initial_mass * g0
        isp = thrust_to_weight * g0
        return cls(
            initial_mass=initial_mass,
            dry_mass=initial_mass - propellant_mass,
            thrust=thrust,
            mass_flow_rate=thrust / (g0 * isp),
            drag_coefficient=drag_coefficient,
            area=np.pi * (diameter / 2) ** 2,
            thrust_to_weight=thrust_to_weight,
            specific_impulse=isp,
            length=length,
        )

    @property
    def propellant_mass(self) -> float:
        return self.initial_mass - self.dry_mass


def default_model_rocket() -> RocketConfig:
    """5:1 thrust-to-weight, 1.5 kg rocket carrying 0.5 kg of propellant, 10 cm diameter."""
    return RocketConfig.from_design(
        thrust_to_weight=5,
        initial_mass=1.5,
        propellant_mass=0.5,
        diameter=0.1,
        drag_coefficient=0.75,
        length=0.6,
    )


@dataclass(frozen=True)
class PropulsionPhase:
    """Thrust and mass flow in effect for a step: Powered until burnout, then Ballistic."""
    name: str
    thrust: float
    mass_flow_rate: float

    @classmethod
    def powered(cls, config: RocketConfig) -> "PropulsionPhase":
        return cls("Powered", config.thrust, config.mass_flow_rate)

    @property
    def is_powered(self) -> bool:
        return self.name == "Powered"


BALLISTIC = PropulsionPhase("Ballistic", 0.0, 0.0)


@dataclass
class SimulationState:
    """Mutable flight state, advanced once per time step."""
    time: float
    altitude: float
    velocity: float
    mass: float
    fueled: bool = True


@dataclass(frozen=True)
class AtmosphereSample:
    """Air density (kg/m^3), temperature (K) and pressure (Pa) at one altitude."""
    density: float
    temperature: float
    pressure: float


@dataclass(frozen=True)
class FlightRecord:
    """
    Snapshot of one integration step.

    thrust and drag are specific (per unit mass, m/s^2), gravity is the local
    gravitational acceleration.
    """
    time: float
    altitude: float
    velocity: float
    mass: float
    gravity: float
    thrust: float
    drag: float
    density: float
    temperature: float
    pressure: float

    @property
    def thrust_force(self) -> float:
        return self.thrust * self.mass

    @property
    def drag_force(self) -> float:
        return self.drag * self.mass


FIELDS = tuple(f.name for f in fields(FlightRecord))


class TimeSeries:
    """
    Append-only history of FlightRecord objects.

    Columns are available as numpy arrays, either through column() or by
    indexing with a field name (series['altitude']).
    """

    def __init__(self, records: Optional[List[FlightRecord]] = None):
        self._records: List[FlightRecord] = list(records or [])
        self._frozen = False
        self.outcome: Optional[str] = None
        self.burnout_time: Optional[float] = None

    def append(self, record: FlightRecord) -> None:
        if self._frozen:
            raise RuntimeError("Cannot append to a finished time series.")
        self._records.append(record)

    def freeze(self, outcome: str) -> None:
        self.outcome = outcome
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def records(self) -> tuple:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FlightRecord]:
        return iter(self._records)

    def __getitem__(self, key):
        if isinstance(key, str):
            return self.column(key)
        return self._records[key]

    def column(self, name: str) -> np.ndarray:
        """Return one field (or thrust_force / drag_force) for every record."""
        if name in ("thrust_force", "drag_force"):
            return self.column(name.split("_")[0]) * self.column("mass")
        if name not in FIELDS:
            raise KeyError(f"Unknown time series column {name!r}, expected one of {FIELDS}")
        return np.array([getattr(record, name) for record in self._records], dtype=float)

    def to_dict(self) -> Dict[str, np.ndarray]:
        results = {name: self.column(name) for name in FIELDS}
        results.update({
            'thrust_force': results['thrust'] * results['mass'],
            'drag_force': results['drag'] * results['mass'],
            'outcome': self.outcome,
            'burnout_time': self.burnout_time,
        })
        return results


@dataclass(frozen=True)
class FlightSummary:
    """Key figures of a finished flight."""
    outcome: str
    flight_time: float
    apogee: float
    apogee_time: float
    max_velocity: float
    max_drag: float
    burnout_time: Optional[float]
    total_impulse: float
    ideal_delta_v: float
    delta_v_history: Optional[np.ndarray] = field(repr=False, compare=False, default=None)
