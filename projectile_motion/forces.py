"""
Force Model
===========
Instantaneous acceleration acting on the projectile:
  - Gravity (always)
  - Aerodynamic drag, opposite the velocity (optional)
  - Horizontal wind push (when wind speed is non-zero)

Drag uses the quadratic law with a constant drag coefficient:

    F_drag = -½ ρ |v|² Cd A v̂

The wind term is a simplified horizontal force with the same
coefficients, signed by the wind direction:

    F_wind = ½ ρ w|w| Cd A  (x only)
"""

import numpy as np

from .config import DEFAULT_CONFIG, PhysicsConfig


def cross_section_area(diameter: float) -> float:
    """Reference area (m²) of a sphere of the given diameter."""
    return np.pi * (diameter / 2) ** 2


def drag_force(vx: float, vy: float, diameter: float,
               config: PhysicsConfig = DEFAULT_CONFIG) -> np.ndarray:
    """
    Compute aerodynamic drag force vector (N).

    Parameters
    ----------
    vx, vy : float
        Velocity components (m/s)
    diameter : float
        Body diameter (m)
    config : PhysicsConfig
        Supplies air density and drag coefficient

    Returns
    -------
    np.ndarray
        Drag force [Fx, Fy] (N). Zero when the body is at rest.
    """
    v_mag = np.hypot(vx, vy)
    if v_mag == 0:
        return np.zeros(2)

    area = cross_section_area(diameter)
    F_mag = 0.5 * config.air_density * v_mag ** 2 * config.drag_coefficient * area
    return np.array([-F_mag * vx / v_mag, -F_mag * vy / v_mag])


def wind_force(wind_speed: float, diameter: float,
               config: PhysicsConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Horizontal wind force [Fx, 0] (N); positive wind pushes downrange."""
    area = cross_section_area(diameter)
    F_x = (0.5 * config.air_density * wind_speed * abs(wind_speed)
           * config.drag_coefficient * area)
    return np.array([F_x, 0.0])


def acceleration(vx: float, vy: float, mass: float, diameter: float,
                 gravity: float, drag_enabled: bool, wind_speed: float = 0.0,
                 config: PhysicsConfig = DEFAULT_CONFIG) -> np.ndarray:
    """
    Total acceleration [ax, ay] (m/s²) for the given velocity.

    mass must be positive; BodyParameters guarantees this before any
    flight is simulated.
    """
    # ── 1. Gravity ────────────────────────────────────────────────────────
    acc = np.array([0.0, -gravity])

    # ── 2. Aerodynamic drag ───────────────────────────────────────────────
    if drag_enabled:
        acc = acc + drag_force(vx, vy, diameter, config) / mass

    # ── 3. Wind ───────────────────────────────────────────────────────────
    if wind_speed != 0:
        acc = acc + wind_force(wind_speed, diameter, config) / mass

    return acc


def compute_forces(state, params, config: PhysicsConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Acceleration for a KinematicState under the given BodyParameters."""
    return acceleration(state.vx, state.vy, params.mass, params.diameter,
                        params.gravity, params.drag_enabled, params.wind_speed,
                        config)
