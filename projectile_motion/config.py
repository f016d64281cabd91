"""
Physics Configuration
=====================
Constants that used to be global state in the simulator (air density,
drag coefficient, tick length) are bundled into an immutable
PhysicsConfig that is passed explicitly to the force model, integrator,
projectile state and predictor.

Alternate constants (thin air, lunar gravity) only require a new
PhysicsConfig or a different gravity value in the launch parameters.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidParameterError


# ── Reference constants ───────────────────────────────────────────────────
AIR_DENSITY          = 1.225    # kg/m³  (sea level)
DRAG_COEFFICIENT     = 0.47     # sphere
TICK_DT              = 0.016    # s  (~60 steps per second)
PREDICTION_DT        = 0.05     # s  coarser sub-step for previews
MAX_SIM_TIME         = 30.0     # s  preview horizon
TRAJECTORY_CAP       = 500      # recorded samples per flight
STANDARD_GRAVITY     = 9.81     # m/s²

GRAVITY_PRESETS = {
    'earth':   9.81,
    'moon':    1.62,
    'mars':    3.71,
    'jupiter': 24.79,
}


@dataclass(frozen=True)
class PhysicsConfig:
    """
    Tunable constants of the simulation.

    landing_epsilon is the time window after launch during which a
    y <= 0 reading is not treated as a landing. When left as None it is
    derived from the step length as half a tick.
    """
    air_density: float = AIR_DENSITY          # kg/m³
    drag_coefficient: float = DRAG_COEFFICIENT
    dt: float = TICK_DT                       # s
    prediction_dt: float = PREDICTION_DT      # s
    max_sim_time: float = MAX_SIM_TIME        # s
    trajectory_cap: int = TRAJECTORY_CAP
    landing_epsilon: Optional[float] = None   # s

    def __post_init__(self):
        for name in ('dt', 'prediction_dt', 'max_sim_time'):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidParameterError(name, value, "must be a positive number")
        for name in ('air_density', 'drag_coefficient'):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidParameterError(name, value, "must be non-negative")
        if self.trajectory_cap < 0:
            raise InvalidParameterError('trajectory_cap', self.trajectory_cap,
                                        "must be non-negative")
        if self.landing_epsilon is not None and self.landing_epsilon < 0:
            raise InvalidParameterError('landing_epsilon', self.landing_epsilon,
                                        "must be non-negative")

    def landing_guard(self, dt: Optional[float] = None) -> float:
        """Landing epsilon for a given step (defaults to the live tick)."""
        if self.landing_epsilon is not None:
            return self.landing_epsilon
        return 0.5 * (self.dt if dt is None else dt)


DEFAULT_CONFIG = PhysicsConfig()


def gravity_preset(name: str) -> float:
    """Gravitational acceleration (m/s²) for a named body."""
    key = name.lower()
    if key not in GRAVITY_PRESETS:
        raise InvalidParameterError(
            'gravity_preset', name,
            f"available: {list(GRAVITY_PRESETS.keys())}"
        )
    return GRAVITY_PRESETS[key]
