"""
Projectile Definition
=====================
Value types shared by every part of the simulator:
  - KinematicState   position + velocity of the body
  - BodyParameters   launch and body properties, fixed for one flight
  - TrajectoryPoint  one recorded (x, y) sample

Coordinate system:
  x = downrange (horizontal, direction of travel)
  y = altitude  (vertical, up positive)
  origin at the launch point
"""

import math
import numbers
from dataclasses import dataclass, fields
from typing import Mapping, Tuple

import numpy as np

from .errors import InvalidParameterError
from .forces import cross_section_area


@dataclass(frozen=True)
class KinematicState:
    """Snapshot of position (m) and velocity (m/s)."""
    x: float
    y: float
    vx: float
    vy: float

    def as_array(self) -> np.ndarray:
        """[x, y, vx, vy] as a numpy vector."""
        return np.array([self.x, self.y, self.vx, self.vy])

    @classmethod
    def from_array(cls, arr) -> 'KinematicState':
        x, y, vx, vy = (float(v) for v in arr)
        return cls(x, y, vx, vy)


@dataclass(frozen=True)
class TrajectoryPoint:
    x: float
    y: float


@dataclass(frozen=True)
class BodyParameters:
    """
    Complete specification of one launch.

    Positive wind_speed is a tailwind (air moving in +x), negative a
    headwind.
    """
    v0: float = 15.0                 # m/s  launch speed
    angle: float = 45.0              # degrees above horizontal
    mass: float = 1.0                # kg
    diameter: float = 0.5            # m
    gravity: float = 9.81            # m/s²
    drag_enabled: bool = False
    wind_speed: float = 0.0          # m/s

    def __post_init__(self):
        if not isinstance(self.drag_enabled, (bool, np.bool_)):
            raise InvalidParameterError('drag_enabled', self.drag_enabled, "must be a bool")
        for f in fields(self):
            if f.name == 'drag_enabled':
                continue
            value = getattr(self, f.name)
            if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
                raise InvalidParameterError(f.name, value, "must be a number")
            if not math.isfinite(value):
                raise InvalidParameterError(f.name, value, "must be finite")
        if self.mass <= 0:
            raise InvalidParameterError('mass', self.mass, "must be > 0")
        if self.diameter <= 0:
            raise InvalidParameterError('diameter', self.diameter, "must be > 0")
        if self.gravity <= 0:
            raise InvalidParameterError('gravity', self.gravity, "must be > 0")
        if self.v0 < 0:
            raise InvalidParameterError('v0', self.v0, "must be >= 0")
        if not 0.0 <= self.angle <= 90.0:
            raise InvalidParameterError('angle', self.angle,
                                        "must be between 0 and 90 degrees")

    @property
    def area(self) -> float:
        """Cross-sectional reference area (m²)."""
        return cross_section_area(self.diameter)

    @property
    def resistance_active(self) -> bool:
        """True when drag or wind makes the closed-form solution invalid."""
        return self.drag_enabled or self.wind_speed != 0

    def initial_velocity(self) -> Tuple[float, float]:
        """Convert launch speed + angle to (vx, vy)."""
        rad = np.radians(self.angle)
        return float(self.v0 * np.cos(rad)), float(self.v0 * np.sin(rad))

    @classmethod
    def from_mapping(cls, params: Mapping) -> 'BodyParameters':
        """
        Build parameters from a plain dict.

        Accepts the keys of this class plus the controller-style aliases
        'velocity' (for v0) and 'air_resistance' (for drag_enabled). A
        'wind_enabled' flag set to False forces the wind speed to zero.
        """
        data = dict(params)
        if 'velocity' in data:
            data.setdefault('v0', data.pop('velocity'))
        if 'air_resistance' in data:
            data.setdefault('drag_enabled', data.pop('air_resistance'))
        if not data.pop('wind_enabled', True):
            data['wind_speed'] = 0.0

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidParameterError('params', sorted(unknown), "unknown keys")
        if data.get('wind_speed') is None:
            data.pop('wind_speed', None)
        return cls(**data)


def coerce_parameters(params) -> BodyParameters:
    if isinstance(params, BodyParameters):
        return params
    return BodyParameters.from_mapping(params)
