"""
Validation of the Physics Core
==============================
Checks the simulator against results that are known independently:

  - Analytical consistency: with drag and wind off, the live tick path
    must reproduce the closed-form solution.
  - Energy: with drag and wind off, kinetic + potential energy must stay
    at the launch kinetic energy.
  - Convergence: the Euler range error against a tight-tolerance
    reference (scipy's solve_ivp, DOP853 with a ground-impact event)
    must shrink linearly with dt.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np
from scipy.integrate import solve_ivp

from . import analytical
from .config import DEFAULT_CONFIG, PhysicsConfig
from .forces import compute_forces
from .integrator import simulate
from .projectile import BodyParameters, KinematicState
from .state import create_projectile

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
#  Reference cases
# ══════════════════════════════════════════════════════════════════════════

REFERENCE_CASES = {
    'textbook_45': BodyParameters(v0=20.0, angle=45.0, mass=1.0, diameter=0.1,
                                  gravity=9.81),
    'dragged_ball': BodyParameters(v0=30.0, angle=40.0, mass=0.45, diameter=0.22,
                                   gravity=9.81, drag_enabled=True),
    'lunar_lob': BodyParameters(v0=15.0, angle=60.0, mass=2.0, diameter=0.3,
                                gravity=1.62),
}


# ══════════════════════════════════════════════════════════════════════════
#  Closed-form checks
# ══════════════════════════════════════════════════════════════════════════

def check_analytical_consistency(params: BodyParameters, ticks: int = 100,
                                 config: PhysicsConfig = DEFAULT_CONFIG) -> float:
    """
    Largest position deviation (m) between the live tick path and the
    closed form over the given number of ticks.
    """
    projectile = create_projectile(params, config)
    projectile.launch()
    worst = 0.0
    for _ in range(ticks):
        if not projectile.is_flying:
            break
        projectile.update()
        if projectile.has_landed:
            break  # y is clamped on the landing tick
        exact = analytical.position_at(params.v0, params.angle, params.gravity,
                                       projectile.time)
        worst = max(worst, abs(projectile.state.x - exact.x),
                    abs(projectile.state.y - exact.y))
    return worst


def energy_drift(params: BodyParameters, ticks: int = 10000,
                 config: PhysicsConfig = DEFAULT_CONFIG) -> float:
    """
    Largest relative deviation of mechanical energy from the launch
    kinetic energy while the projectile is above ground.
    """
    projectile = create_projectile(params, config)
    projectile.launch()
    e0 = projectile.initial_kinetic_energy()
    if e0 == 0:
        return 0.0
    worst = 0.0
    for _ in range(ticks):
        projectile.update()
        if not projectile.is_flying:
            break
        worst = max(worst, abs(projectile.total_energy() - e0) / e0)
    return worst


# ══════════════════════════════════════════════════════════════════════════
#  Convergence against a high-accuracy reference
# ══════════════════════════════════════════════════════════════════════════

def reference_range(params: BodyParameters,
                    config: PhysicsConfig = DEFAULT_CONFIG) -> float:
    """Range (m) from solve_ivp with a terminal y = 0 event."""
    def rhs(t, s):
        acc = compute_forces(KinematicState.from_array(s), params, config)
        return [s[2], s[3], acc[0], acc[1]]

    def ground(t, s):
        return s[1]
    ground.terminal = True
    ground.direction = -1

    vx0, vy0 = params.initial_velocity()
    sol = solve_ivp(rhs, (0.0, config.max_sim_time * 10), [0.0, 0.0, vx0, vy0],
                    method='DOP853', events=ground, rtol=1e-10, atol=1e-12)
    if len(sol.t_events[0]) == 0:
        return float(sol.y[0, -1])
    return float(sol.y_events[0][0][0])


@dataclass
class ConvergenceResult:
    """Range error of one stepper at one timestep."""
    method: str
    dt: float
    sim_range: float
    ref_range: float

    @property
    def error(self) -> float:
        return abs(self.sim_range - self.ref_range)


def convergence_study(params: BodyParameters,
                      dts: Sequence[float] = (0.064, 0.032, 0.016, 0.008, 0.004),
                      methods: Sequence[str] = ('euler', 'rk4'),
                      config: PhysicsConfig = DEFAULT_CONFIG) -> List[ConvergenceResult]:
    ref = reference_range(params, config)
    results = []
    for method in methods:
        for dt in dts:
            traj = simulate(params, method=method, dt=dt, config=config)
            results.append(ConvergenceResult(method, dt, traj.range_total, ref))
    return results


def observed_order(results: List[ConvergenceResult], method: str = 'euler') -> float:
    """Slope of log(error) vs log(dt): ~1 for a first-order method."""
    rows = [r for r in results if r.method == method and r.error > 0]
    if len(rows) < 2:
        raise ValueError(f"Need at least two non-zero errors for '{method}'")
    log_dt = np.log([r.dt for r in rows])
    log_err = np.log([r.error for r in rows])
    slope, _ = np.polyfit(log_dt, log_err, 1)
    return float(slope)


# ══════════════════════════════════════════════════════════════════════════
#  Report
# ══════════════════════════════════════════════════════════════════════════

def run_all_validations(verbose: bool = True) -> Dict[str, dict]:
    """Run every check on every reference case."""
    report = {}
    for name, params in REFERENCE_CASES.items():
        entry = {}
        if not params.resistance_active:
            entry['analytical_deviation'] = check_analytical_consistency(params)
            entry['energy_drift'] = energy_drift(params)
        conv = convergence_study(params)
        entry['convergence'] = conv
        entry['euler_order'] = observed_order(conv, 'euler')
        report[name] = entry

        if verbose:
            print(f"\n{'='*64}")
            print(f"  VALIDATION: {name}")
            print(f"  v0={params.v0} m/s  angle={params.angle}°  g={params.gravity}  "
                  f"drag={'on' if params.drag_enabled else 'off'}")
            print(f"{'='*64}")
            if 'analytical_deviation' in entry:
                print(f"  Closed-form deviation : {entry['analytical_deviation']:.3e} m")
                print(f"  Energy drift          : {entry['energy_drift']:.3e}")
            print(f"  Reference range       : {conv[0].ref_range:.4f} m")
            print(f"{'Method':>8} {'dt (s)':>8} {'Range (m)':>12} {'Error (m)':>12}")
            print("-" * 44)
            for r in conv:
                print(f"{r.method:>8} {r.dt:>8.3f} {r.sim_range:>12.4f} {r.error:>12.2e}")
            print("-" * 44)
            status = "✓ PASS" if 0.7 < entry['euler_order'] < 1.3 else "✗ CHECK"
            print(f"  Observed Euler order: {entry['euler_order']:.2f}  {status}")

    logger.info("validated %d reference cases", len(report))
    return report


if __name__ == "__main__":
    run_all_validations(verbose=True)
