#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  PROJECTILE MOTION SIMULATOR — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes the complete simulation pipeline:
    1. Theoretical (no-resistance) predictions
    2. Live flight, tick by tick, with preview
    3. Drag and wind comparison
    4. Energy telemetry
    5. Multi-projectile volley
    6. Validation (closed form, energy, Euler convergence)

  All outputs saved to outputs/ directory.

  Usage:
    python main.py              # Run everything
    python main.py --quick      # Skip validation (faster)
    python main.py --verbose    # Debug logging from the physics core
═══════════════════════════════════════════════════════════════════════════════
"""

import sys
import os
import time
import logging

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from projectile_motion import (
    BodyParameters, Simulation, create_projectile, predict_trajectory,
    theoretical_summary, gravity_preset, GRAVITY_PRESETS,
    run_all_validations, convergence_study, observed_order, simulate,
    plot_trajectory, plot_drag_comparison, plot_energy, plot_convergence,
    ensure_output_dir,
)

log = logging.getLogger("main")


def banner():
    print("""
╔═══════════════════════════════════════════════════════════════════════╗
║                                                                       ║
║     PROJECTILE MOTION SIMULATOR                                       ║
║     ─────────────────────────────────────────────────────             ║
║     Physics: Gravity · Quadratic drag · Wind                          ║
║     Solvers: Closed form · Euler (dt = 0.016 s)                       ║
║                                                                       ║
╚═══════════════════════════════════════════════════════════════════════╝
""")


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def fly(params):
    """Launch a projectile and tick it until it lands."""
    projectile = create_projectile(params)
    projectile.launch()
    while projectile.is_flying:
        projectile.update()
    return projectile


def main():
    start_time = time.time()
    quick = '--quick' in sys.argv
    logging.basicConfig(
        level=logging.DEBUG if '--verbose' in sys.argv else logging.INFO,
        format="%(asctime)s  %(levelname)-7s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )

    banner()
    out = ensure_output_dir('outputs')

    base = BodyParameters(v0=20.0, angle=45.0, mass=1.0, diameter=0.5, gravity=9.81)

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Theoretical predictions
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Theoretical Predictions (no resistance)")
    print(f"  {'Body':<10} {'g (m/s²)':>9} {'Range (m)':>11} {'Apex (m)':>10} {'Time (s)':>9}")
    for body in GRAVITY_PRESETS:
        pred = theoretical_summary(BodyParameters(v0=base.v0, angle=base.angle,
                                                  gravity=gravity_preset(body)))
        print(f"  {body:<10} {gravity_preset(body):>9.2f} {pred.range:>11.2f} "
              f"{pred.max_height:>10.2f} {pred.flight_time:>9.3f}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Live flight with preview
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Live Flight (v₀=20 m/s, θ=45°, drag on)")
    dragged = BodyParameters(v0=20.0, angle=45.0, mass=1.0, diameter=0.5,
                             gravity=9.81, drag_enabled=True)
    preview = predict_trajectory(dragged)
    flight = fly(dragged)
    print(f"  Predicted landing : {preview[-1].x:>8.2f} m")
    print(f"  Actual range      : {flight.range:>8.2f} m")
    print(f"  Max height        : {flight.max_height:>8.2f} m")
    print(f"  Flight time       : {flight.time:>8.3f} s")
    print(f"  Impact speed      : {flight.impact_speed():>8.2f} m/s")

    fig = plot_trajectory(flight, preview, save_path=f'{out}/01_live_flight.png')
    plt.close(fig)
    print(f"\n  ✓ Saved: {out}/01_live_flight.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Drag and wind comparison
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Drag & Wind Effects")
    cases = {
        'No resistance': dict(),
        'Drag': dict(drag_enabled=True),
        'Drag + tailwind 10 m/s': dict(drag_enabled=True, wind_speed=10.0),
        'Drag + headwind 10 m/s': dict(drag_enabled=True, wind_speed=-10.0),
    }
    flights = {}
    for label, extra in cases.items():
        params = BodyParameters(v0=base.v0, angle=base.angle, mass=base.mass,
                                diameter=base.diameter, gravity=base.gravity, **extra)
        flights[label] = fly(params)
        print(f"  {label:<25s}  Range: {flights[label].range:>7.2f} m  "
              f"Apex: {flights[label].max_height:>6.2f} m")

    fig = plot_drag_comparison(flights, save_path=f'{out}/02_drag_wind.png')
    plt.close(fig)
    print(f"\n  ✓ Saved: {out}/02_drag_wind.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Energy telemetry
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Energy Telemetry")
    sim = Simulation()
    sim.fire(base)
    frames = sim.run_until_landed()
    data = sim.telemetry_arrays()
    print(f"  Frames            : {frames}")
    print(f"  Initial KE        : {sim.current.initial_kinetic_energy():.2f} J")
    print(f"  Max PE            : {sim.current.max_potential_energy():.2f} J")
    print(f"  Total energy span : {data['total_energy'].min():.2f} – "
          f"{data['total_energy'].max():.2f} J")

    fig = plot_energy(data, save_path=f'{out}/03_energy.png')
    plt.close(fig)
    print(f"\n  ✓ Saved: {out}/03_energy.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Multi-projectile volley
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Multi-Projectile Volley (2× speed)")
    volley = Simulation(multi_projectile=True, speed=2.0)
    for angle in (15.0, 30.0, 45.0, 60.0, 75.0):
        volley.fire(BodyParameters(v0=base.v0, angle=angle, mass=base.mass,
                                   diameter=base.diameter, gravity=base.gravity,
                                   drag_enabled=True))
    frames = volley.run_until_landed()
    for p in volley.projectiles:
        print(f"  θ={p.params.angle:>4.0f}°  Range: {p.range:>7.2f} m  "
              f"Time: {p.time:>6.3f} s")
    print(f"  Frames: {frames}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Validation
    # ══════════════════════════════════════════════════════════════════════
    if not quick:
        section("PHASE 6: Validation")
        run_all_validations(verbose=True)
        print(simulate(dragged, method='euler').summary())
        conv = convergence_study(dragged)
        print(f"\n  Drag case Euler order: {observed_order(conv):.2f}")
        fig = plot_convergence(conv, save_path=f'{out}/04_convergence.png')
        plt.close(fig)
        print(f"  ✓ Saved: {out}/04_convergence.png")
    else:
        section("PHASE 6: Validation SKIPPED (--quick mode)")

    elapsed = time.time() - start_time
    section("COMPLETE")
    log.info("All outputs saved to %s", os.path.abspath(out))
    print(f"\n  Total runtime: {elapsed:.1f} seconds\n")


if __name__ == "__main__":
    main()
