"""
Projectile State Machine
========================
One live flight: Idle → Flying → Landed.

The solver is chosen once, when the projectile is created:
  - ANALYTICAL  no drag, no wind: every tick re-evaluates the closed form
                at the new time, so the path never drifts.
  - NUMERICAL   drag or wind: every tick takes one Euler step.

A ProjectileState is never reused across parameter changes; callers
create a new one instead.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from . import analytical
from .config import DEFAULT_CONFIG, PhysicsConfig
from .integrator import euler_step
from .projectile import BodyParameters, KinematicState, TrajectoryPoint, coerce_parameters

logger = logging.getLogger(__name__)


class FlightPhase(Enum):
    IDLE = 'idle'
    FLYING = 'flying'
    LANDED = 'landed'


class SolverKind(Enum):
    ANALYTICAL = 'analytical'
    NUMERICAL = 'numerical'

    @classmethod
    def for_params(cls, params: BodyParameters) -> 'SolverKind':
        return cls.NUMERICAL if params.resistance_active else cls.ANALYTICAL


@dataclass(frozen=True)
class TelemetrySample:
    """One row of flight data, as fed to graphs and data export."""
    time: float
    x: float
    y: float
    vx: float
    vy: float
    speed: float
    kinetic_energy: float
    potential_energy: float
    total_energy: float


class ProjectileState:
    """
    Mutable state of one projectile flight.

    Readable by collaborators: state, time, is_flying, has_landed,
    trajectory, max_height, range.
    """

    def __init__(self, params: BodyParameters,
                 config: PhysicsConfig = DEFAULT_CONFIG):
        self.params = params
        self.config = config
        self.solver = SolverKind.for_params(params)
        self.reset()

    # ── Transitions ───────────────────────────────────────────────────────

    def reset(self):
        """Return to Idle at the launch point."""
        p = self.params
        self.state = analytical.position_at(p.v0, p.angle, p.gravity, 0.0)
        self.time = 0.0
        self.phase = FlightPhase.IDLE
        self.trajectory: List[TrajectoryPoint] = []
        self.max_height = 0.0
        self.range = 0.0

    def launch(self):
        self.reset()
        self.phase = FlightPhase.FLYING
        logger.debug("launch: v0=%.2f m/s angle=%.1f° solver=%s",
                     self.params.v0, self.params.angle, self.solver.value)

    def update(self):
        """Advance one tick. No-op unless the projectile is flying."""
        if self.phase is not FlightPhase.FLYING:
            return

        if len(self.trajectory) < self.config.trajectory_cap:
            self.trajectory.append(TrajectoryPoint(self.state.x, self.state.y))

        dt = self.config.dt
        self.state = self._next_state(dt)
        self.time += dt

        if self.state.y > self.max_height:
            self.max_height = self.state.y

        if self.state.y <= 0 and self.time > self.config.landing_guard():
            self.state = KinematicState(self.state.x, 0.0, self.state.vx, self.state.vy)
            self.phase = FlightPhase.LANDED
            self.range = self.state.x
            logger.debug("landed: range=%.3f m t=%.3f s max_height=%.3f m",
                         self.range, self.time, self.max_height)

    def _next_state(self, dt: float) -> KinematicState:
        p = self.params
        if self.solver is SolverKind.NUMERICAL:
            return euler_step(self.state, p, dt, self.config)
        # Evaluated at the new time so that state always matches position_at(time)
        return analytical.position_at(p.v0, p.angle, p.gravity, self.time + dt)

    # ── Flags ─────────────────────────────────────────────────────────────

    @property
    def is_flying(self) -> bool:
        return self.phase is FlightPhase.FLYING

    @property
    def has_landed(self) -> bool:
        return self.phase is FlightPhase.LANDED

    # ── Derived quantities ────────────────────────────────────────────────

    def speed(self) -> float:
        return math.sqrt(self.state.vx ** 2 + self.state.vy ** 2)

    def velocity_angle(self) -> float:
        """Direction of travel in radians (atan2(vy, vx))."""
        return math.atan2(self.state.vy, self.state.vx)

    def impact_speed(self) -> float:
        return self.speed() if self.has_landed else 0.0

    def kinetic_energy(self) -> float:
        return 0.5 * self.params.mass * self.speed() ** 2

    def potential_energy(self) -> float:
        # Ground is the zero level; overshoot below it counts as zero
        return self.params.mass * self.params.gravity * max(0.0, self.state.y)

    def total_energy(self) -> float:
        return self.kinetic_energy() + self.potential_energy()

    def initial_kinetic_energy(self) -> float:
        return 0.5 * self.params.mass * self.params.v0 ** 2

    def max_potential_energy(self) -> float:
        return self.params.mass * self.params.gravity * self.max_height

    def telemetry(self) -> TelemetrySample:
        ke = self.kinetic_energy()
        pe = self.potential_energy()
        return TelemetrySample(
            time=self.time,
            x=self.state.x,
            y=self.state.y,
            vx=self.state.vx,
            vy=self.state.vy,
            speed=self.speed(),
            kinetic_energy=ke,
            potential_energy=pe,
            total_energy=ke + pe,
        )

    def __repr__(self):
        return (f"ProjectileState(phase={self.phase.value}, t={self.time:.3f}, "
                f"x={self.state.x:.3f}, y={self.state.y:.3f})")


def create_projectile(params, config: Optional[PhysicsConfig] = None) -> ProjectileState:
    """
    Validate launch parameters and build an idle projectile.

    params is a BodyParameters or a mapping of its fields; invalid values
    raise InvalidParameterError here, before any state exists.
    """
    return ProjectileState(coerce_parameters(params), config or DEFAULT_CONFIG)
