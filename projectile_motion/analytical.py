"""
Analytical Solver
=================
Closed-form kinematics for a projectile with no drag and no wind over
flat ground:

    x(t)  = v0·cosθ·t
    y(t)  = v0·sinθ·t − ½·g·t²
    vx(t) = v0·cosθ
    vy(t) = v0·sinθ − g·t

The readouts (range, apex height, flight time) are the theoretical
prediction shown next to a live flight even when that flight has drag
enabled.
"""

from dataclasses import dataclass

import numpy as np

from .projectile import KinematicState


def position_at(v0: float, angle_deg: float, g: float, t: float) -> KinematicState:
    """Exact state at time t (s) after launch."""
    rad = np.radians(angle_deg)
    v0x = v0 * np.cos(rad)
    v0y = v0 * np.sin(rad)

    x = v0x * t
    y = v0y * t - 0.5 * g * t * t
    vx = v0x
    vy = v0y - g * t
    return KinematicState(float(x), float(y), float(vx), float(vy))


def max_range(v0: float, angle_deg: float, g: float) -> float:
    """Horizontal distance to the landing point (m)."""
    rad = np.radians(angle_deg)
    return float(v0 ** 2 * np.sin(2 * rad) / g)


def max_height(v0: float, angle_deg: float, g: float) -> float:
    """Apex altitude (m)."""
    v0y = v0 * np.sin(np.radians(angle_deg))
    return float(v0y ** 2 / (2 * g))


def flight_time(v0: float, angle_deg: float, g: float) -> float:
    """Time from launch to landing (s)."""
    v0y = v0 * np.sin(np.radians(angle_deg))
    return float(2 * v0y / g)


@dataclass(frozen=True)
class TheoreticalPrediction:
    """No-resistance readouts for one set of launch parameters."""
    range: float
    max_height: float
    flight_time: float


def theoretical_summary(params) -> TheoreticalPrediction:
    return TheoreticalPrediction(
        range=max_range(params.v0, params.angle, params.gravity),
        max_height=max_height(params.v0, params.angle, params.gravity),
        flight_time=flight_time(params.v0, params.angle, params.gravity),
    )
