"""
Numerical Integration Engine
=============================
Time-stepping for flights with drag or wind, where no closed form exists.

1. **Euler Method** (1st order) — the live simulation's stepper.
   Local error O(dt²), global error O(dt); the reference tick is
   dt = 0.016 s.
2. **Runge-Kutta 4th Order (RK4)** — used only by the validation tools
   to show how far the Euler flight is from a higher-order one.

Both integrate the equations of motion:
    dx/dt = v
    dv/dt = a(v)  (from forces.compute_forces)

Neither stepper clamps y: overshoot below the ground is left for the
caller's landing test.
"""

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np

from .config import DEFAULT_CONFIG, PhysicsConfig
from .forces import compute_forces
from .projectile import BodyParameters, KinematicState

logger = logging.getLogger(__name__)

Stepper = Callable[[KinematicState, BodyParameters, float, PhysicsConfig], KinematicState]


def euler_step(state: KinematicState, params: BodyParameters, dt: float,
               config: PhysicsConfig = DEFAULT_CONFIG) -> KinematicState:
    """
    Forward Euler step.

    x_{n+1} = x_n + v_n * dt
    v_{n+1} = v_n + a(v_n) * dt
    """
    ax, ay = compute_forces(state, params, config)
    return KinematicState(
        x=state.x + state.vx * dt,
        y=state.y + state.vy * dt,
        vx=float(state.vx + ax * dt),
        vy=float(state.vy + ay * dt),
    )


def rk4_step(state: KinematicState, params: BodyParameters, dt: float,
             config: PhysicsConfig = DEFAULT_CONFIG) -> KinematicState:
    """4th-order Runge-Kutta step over the same force model."""
    def deriv(s: np.ndarray) -> np.ndarray:
        acc = compute_forces(KinematicState.from_array(s), params, config)
        return np.array([s[2], s[3], acc[0], acc[1]])

    s0 = state.as_array()
    k1 = deriv(s0)
    k2 = deriv(s0 + 0.5 * dt * k1)
    k3 = deriv(s0 + 0.5 * dt * k2)
    k4 = deriv(s0 + dt * k3)
    return KinematicState.from_array(s0 + (dt / 6.0) * (k1 + 2*k2 + 2*k3 + k4))


STEPPERS = {
    'euler': euler_step,
    'rk4': rk4_step,
}


@dataclass
class TrajectoryResult:
    """Complete flight history produced by simulate()."""
    params: BodyParameters
    method: str               # 'euler' or 'rk4'
    dt: float                 # timestep used

    # Arrays — each has shape (N,)
    time: np.ndarray
    x: np.ndarray
    y: np.ndarray
    vx: np.ndarray
    vy: np.ndarray

    @property
    def speed(self) -> np.ndarray:
        return np.hypot(self.vx, self.vy)

    @property
    def range_total(self) -> float:
        """Downrange distance where the path crosses y = 0 (m)."""
        if len(self.x) < 2 or self.y[-1] > 0:
            return float(self.x[-1])
        # Linear interpolation between the last sample above ground and
        # the first one below it
        x0, x1 = self.x[-2], self.x[-1]
        y0, y1 = self.y[-2], self.y[-1]
        if y0 == y1:
            return float(x1)
        return float(x0 + (x1 - x0) * y0 / (y0 - y1))

    @property
    def max_altitude(self) -> float:
        return float(np.max(self.y))

    @property
    def flight_time(self) -> float:
        return float(self.time[-1])

    @property
    def impact_velocity(self) -> float:
        return float(self.speed[-1])

    @property
    def impact_angle_deg(self) -> float:
        """Angle of descent at impact (degrees below horizontal)."""
        return float(np.degrees(np.arctan2(-self.vy[-1], self.vx[-1])))

    def summary(self) -> str:
        """Human-readable summary string."""
        p = self.params
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  TRAJECTORY SUMMARY{'':<34s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Method       : {self.method.upper():<36s} ║",
            f"║  Timestep     : {self.dt:<36.4f} ║",
            f"║  Drag         : {'on' if p.drag_enabled else 'off':<36s} ║",
            f"║  Wind         : {p.wind_speed:>10.1f} m/s{'':<22s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Launch vel   : {p.v0:>10.1f} m/s{'':<22s} ║",
            f"║  Elevation    : {p.angle:>10.1f} °{'':<24s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Range        : {self.range_total:>10.2f} m{'':<24s} ║",
            f"║  Max altitude : {self.max_altitude:>10.2f} m{'':<24s} ║",
            f"║  Flight time  : {self.flight_time:>10.2f} s{'':<24s} ║",
            f"║  Impact vel   : {self.impact_velocity:>10.2f} m/s{'':<22s} ║",
            f"║  Impact angle : {self.impact_angle_deg:>10.1f} °{'':<24s} ║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def simulate(params: BodyParameters, method: str = 'euler', dt: float = None,
             max_time: float = None,
             config: PhysicsConfig = DEFAULT_CONFIG) -> TrajectoryResult:
    """
    Integrate a whole flight from launch until the body drops below y = 0.

    Unlike ProjectileState this always integrates numerically, even when
    drag and wind are off, so the stepper's own error can be measured
    against the closed form.
    """
    if method not in STEPPERS:
        raise ValueError(f"Unknown method '{method}'. Available: {list(STEPPERS.keys())}")
    step = STEPPERS[method]
    dt = config.dt if dt is None else dt
    max_time = config.max_sim_time if max_time is None else max_time
    guard = config.landing_guard(dt)

    vx0, vy0 = params.initial_velocity()
    state = KinematicState(0.0, 0.0, vx0, vy0)
    t = 0.0
    history = [(t, state)]

    n_steps = int(np.ceil(max_time / dt))
    for i in range(1, n_steps + 1):
        state = step(state, params, dt, config)
        t = i * dt
        history.append((t, state))
        if state.y < 0 and t > guard:
            break

    logger.debug("simulate(%s, dt=%g): %d steps, t=%.3f s",
                 method, dt, len(history) - 1, t)
    return _build_result(history, params, method, dt)


def _build_result(history, params, method, dt):
    """Convert history list to TrajectoryResult."""
    times = np.array([t for t, _ in history])
    states = np.array([s.as_array() for _, s in history])

    return TrajectoryResult(
        params=params,
        method=method,
        dt=dt,
        time=times,
        x=states[:, 0],
        y=states[:, 1],
        vx=states[:, 2],
        vy=states[:, 3],
    )
