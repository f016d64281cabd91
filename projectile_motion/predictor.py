"""
Trajectory Predictor
====================
Forward-simulates a whole flight on a throwaway state to preview the
path before firing. Uses the same analytical/numerical dispatch as the
live projectile, but with a coarser step (0.05 s) and a hard horizon
(30 s), so the predicted landing point only approximates the live range.
"""

import logging
from typing import List, Optional

from . import analytical
from .config import DEFAULT_CONFIG, PhysicsConfig
from .integrator import euler_step
from .projectile import KinematicState, TrajectoryPoint, coerce_parameters

logger = logging.getLogger(__name__)


def predict_trajectory(params, config: Optional[PhysicsConfig] = None) -> List[TrajectoryPoint]:
    """
    Preview path as a list of (x, y) points.

    The point is recorded before each step; the loop stops at the first
    recorded point below ground once the landing window has passed, or at
    the time horizon.
    """
    params = coerce_parameters(params)
    config = config or DEFAULT_CONFIG
    dt = config.prediction_dt
    guard = config.landing_guard(dt)

    vx0, vy0 = params.initial_velocity()
    state = KinematicState(0.0, 0.0, vx0, vy0)
    points = []

    step = 0
    t = 0.0
    while t < config.max_sim_time:
        points.append(TrajectoryPoint(state.x, state.y))
        if state.y < 0 and t > guard:
            break

        if params.resistance_active:
            state = euler_step(state, params, dt, config)
        else:
            # Closed form at the next sample time, matching the live flight
            state = analytical.position_at(params.v0, params.angle, params.gravity, t + dt)
        step += 1
        t = step * dt

    logger.debug("predicted %d points, landing near x=%.2f m",
                 len(points), points[-1].x)
    return points


def predicted_landing(params, config: Optional[PhysicsConfig] = None) -> float:
    """Downrange x (m) of the last predicted point."""
    return predict_trajectory(params, config)[-1].x
