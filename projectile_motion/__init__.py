"""
Projectile Motion Simulator
===========================
Physics engine for an educational simulator of projectile motion in air:
  - Gravity (any body: Earth, Moon, Mars, ...)
  - Quadratic aerodynamic drag on a sphere
  - Horizontal wind (head/tail)

No-resistance flights follow the closed-form solution exactly; flights
with drag or wind are advanced with a fixed-step Euler integrator. A
predictor previews a whole flight without touching live state.
"""

from .errors import InvalidParameterError
from .config import PhysicsConfig, DEFAULT_CONFIG, GRAVITY_PRESETS, gravity_preset
from .projectile import KinematicState, BodyParameters, TrajectoryPoint
from .forces import acceleration, drag_force, wind_force, compute_forces
from .integrator import euler_step, rk4_step, simulate, TrajectoryResult
from .analytical import (
    position_at, max_range, max_height, flight_time,
    theoretical_summary, TheoreticalPrediction,
)
from .state import (
    ProjectileState, FlightPhase, SolverKind, TelemetrySample, create_projectile,
)
from .predictor import predict_trajectory, predicted_landing
from .simulation import Simulation
from .validation import (
    check_analytical_consistency, energy_drift, convergence_study,
    observed_order, run_all_validations,
)
from .visualization import (
    plot_trajectory, plot_drag_comparison, plot_energy, plot_convergence,
    ensure_output_dir,
)

__version__ = "2.0.0"
__all__ = [
    'InvalidParameterError',
    'PhysicsConfig', 'DEFAULT_CONFIG', 'GRAVITY_PRESETS', 'gravity_preset',
    'KinematicState', 'BodyParameters', 'TrajectoryPoint',
    'acceleration', 'drag_force', 'wind_force', 'compute_forces',
    'euler_step', 'rk4_step', 'simulate', 'TrajectoryResult',
    'position_at', 'max_range', 'max_height', 'flight_time',
    'theoretical_summary', 'TheoreticalPrediction',
    'ProjectileState', 'FlightPhase', 'SolverKind', 'TelemetrySample',
    'create_projectile',
    'predict_trajectory', 'predicted_landing',
    'Simulation',
    'check_analytical_consistency', 'energy_drift', 'convergence_study',
    'observed_order', 'run_all_validations',
    'plot_trajectory', 'plot_drag_comparison', 'plot_energy', 'plot_convergence',
    'ensure_output_dir',
]
