"""
Unit Tests for the Physics Core
===============================
Force model, integrator, closed-form solver and configuration.
Run: python -m pytest tests/ -v
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from projectile_motion.config import (
    PhysicsConfig, DEFAULT_CONFIG, gravity_preset, AIR_DENSITY, DRAG_COEFFICIENT,
)
from projectile_motion.errors import InvalidParameterError
from projectile_motion.projectile import BodyParameters, KinematicState
from projectile_motion.forces import (
    acceleration, drag_force, wind_force, cross_section_area,
)
from projectile_motion.integrator import euler_step, rk4_step, simulate
from projectile_motion import analytical


class TestConfig:
    """Verify configuration defaults and validation."""

    def test_reference_constants(self):
        assert DEFAULT_CONFIG.air_density == 1.225
        assert DEFAULT_CONFIG.drag_coefficient == 0.47
        assert DEFAULT_CONFIG.dt == 0.016
        assert DEFAULT_CONFIG.prediction_dt == 0.05
        assert DEFAULT_CONFIG.max_sim_time == 30.0
        assert DEFAULT_CONFIG.trajectory_cap == 500

    def test_landing_guard_derived_from_tick(self):
        assert DEFAULT_CONFIG.landing_guard() == pytest.approx(0.008)
        assert DEFAULT_CONFIG.landing_guard(0.05) == pytest.approx(0.025)

    def test_explicit_landing_epsilon_wins(self):
        cfg = PhysicsConfig(landing_epsilon=0.01)
        assert cfg.landing_guard() == 0.01
        assert cfg.landing_guard(0.05) == 0.01

    @pytest.mark.parametrize('field', ['dt', 'prediction_dt', 'max_sim_time'])
    def test_non_positive_step_rejected(self, field):
        with pytest.raises(InvalidParameterError):
            PhysicsConfig(**{field: 0.0})

    def test_negative_density_rejected(self):
        with pytest.raises(InvalidParameterError):
            PhysicsConfig(air_density=-1.0)

    def test_gravity_presets(self):
        assert gravity_preset('earth') == 9.81
        assert gravity_preset('Moon') == 1.62
        with pytest.raises(InvalidParameterError):
            gravity_preset('pluto')


class TestBodyParameters:
    """Invalid input is rejected before any flight exists."""

    @pytest.mark.parametrize('field,value', [
        ('mass', 0.0), ('mass', -1.0),
        ('diameter', 0.0), ('diameter', -0.1),
        ('gravity', 0.0), ('gravity', -9.81),
        ('angle', -1.0), ('angle', 91.0),
        ('v0', -5.0),
        ('v0', float('nan')),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(InvalidParameterError) as exc:
            BodyParameters(**{field: value})
        assert exc.value.field == field

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            BodyParameters(mass=0.0)

    def test_area(self):
        p = BodyParameters(diameter=0.5)
        assert abs(p.area - np.pi * 0.25 ** 2) < 1e-12

    def test_initial_velocity(self):
        vx, vy = BodyParameters(v0=100.0, angle=30.0).initial_velocity()
        assert abs(vx - 100 * np.cos(np.radians(30))) < 1e-9
        assert abs(vy - 50.0) < 1e-9

    def test_resistance_active(self):
        assert not BodyParameters().resistance_active
        assert BodyParameters(drag_enabled=True).resistance_active
        assert BodyParameters(wind_speed=-3.0).resistance_active

    def test_from_mapping_aliases(self):
        p = BodyParameters.from_mapping({
            'velocity': 12.0, 'angle': 30.0, 'mass': 2.0, 'diameter': 0.2,
            'gravity': 9.81, 'air_resistance': True, 'wind_speed': 4.0,
            'wind_enabled': False,
        })
        assert p.v0 == 12.0
        assert p.drag_enabled is True
        assert p.wind_speed == 0.0

    @pytest.mark.parametrize('field,value', [
        ('v0', '10'), ('angle', None), ('mass', [1.0]), ('gravity', True),
    ])
    def test_non_numeric_rejected(self, field, value):
        with pytest.raises(InvalidParameterError) as exc:
            BodyParameters.from_mapping({field: value})
        assert exc.value.field == field

    def test_drag_flag_must_be_bool(self):
        with pytest.raises(InvalidParameterError) as exc:
            BodyParameters.from_mapping({'v0': 10.0, 'air_resistance': 'false'})
        assert exc.value.field == 'drag_enabled'

    def test_numpy_values_accepted(self):
        p = BodyParameters(v0=np.float64(12.0), mass=np.int64(2), drag_enabled=np.bool_(True))
        assert p.resistance_active

    def test_from_mapping_unknown_key(self):
        with pytest.raises(InvalidParameterError):
            BodyParameters.from_mapping({'v0': 10.0, 'color': '#ff4444'})


class TestForces:
    """Verify gravity, drag and wind contributions."""

    def test_gravity_only(self):
        acc = acceleration(10.0, 5.0, mass=1.0, diameter=0.5, gravity=9.81,
                           drag_enabled=False, wind_speed=0.0)
        assert np.allclose(acc, [0.0, -9.81])

    def test_drag_magnitude(self):
        F = drag_force(10.0, 0.0, diameter=0.5)
        expected = 0.5 * AIR_DENSITY * 100.0 * DRAG_COEFFICIENT * cross_section_area(0.5)
        assert abs(F[0] + expected) < 1e-9
        assert F[1] == 0.0

    def test_drag_force_opposes_motion(self):
        v = np.array([12.0, -7.0])
        F = drag_force(v[0], v[1], diameter=0.3)
        assert np.dot(F, v) < 0
        # Anti-parallel: cross product vanishes
        assert abs(F[0] * v[1] - F[1] * v[0]) < 1e-9

    def test_drag_force_zero_at_rest(self):
        assert np.allclose(drag_force(0.0, 0.0, diameter=0.5), 0.0)

    def test_drag_scales_with_mass(self):
        light = acceleration(20.0, 0.0, 1.0, 0.5, 9.81, True)
        heavy = acceleration(20.0, 0.0, 10.0, 0.5, 9.81, True)
        assert abs(light[0]) == pytest.approx(10 * abs(heavy[0]))

    def test_wind_sign_and_direction(self):
        tail = wind_force(5.0, diameter=0.5)
        head = wind_force(-5.0, diameter=0.5)
        assert tail[0] > 0 and head[0] < 0
        assert tail[1] == 0.0 and head[1] == 0.0
        assert tail[0] == pytest.approx(-head[0])

    def test_wind_applies_without_drag(self):
        acc = acceleration(0.0, 0.0, 1.0, 0.5, 9.81, drag_enabled=False, wind_speed=5.0)
        assert acc[0] > 0
        assert acc[1] == pytest.approx(-9.81)

    def test_custom_constants(self):
        thin = PhysicsConfig(air_density=0.0)
        acc = acceleration(30.0, 10.0, 1.0, 0.5, 1.62, True, 4.0, config=thin)
        assert np.allclose(acc, [0.0, -1.62])


class TestAnalytical:
    """Closed-form kinematics and readouts."""

    def test_reference_readouts(self):
        assert abs(analytical.max_range(20.0, 45.0, 9.81) - 40.77) < 0.01
        assert abs(analytical.max_height(20.0, 45.0, 9.81) - 10.19) < 0.01
        assert abs(analytical.flight_time(20.0, 45.0, 9.81) - 2.885) < 0.01

    def test_state_at_zero(self):
        s = analytical.position_at(20.0, 30.0, 9.81, 0.0)
        assert s.x == 0.0 and s.y == 0.0
        assert abs(s.vy - 10.0) < 1e-9

    def test_lands_at_flight_time(self):
        T = analytical.flight_time(15.0, 60.0, 1.62)
        s = analytical.position_at(15.0, 60.0, 1.62, T)
        assert abs(s.y) < 1e-9
        assert abs(s.x - analytical.max_range(15.0, 60.0, 1.62)) < 1e-9

    def test_apex_height(self):
        t_apex = analytical.flight_time(20.0, 70.0, 9.81) / 2
        s = analytical.position_at(20.0, 70.0, 9.81, t_apex)
        assert abs(s.vy) < 1e-9
        assert abs(s.y - analytical.max_height(20.0, 70.0, 9.81)) < 1e-9

    def test_range_symmetric_about_45(self):
        assert analytical.max_range(20.0, 30.0, 9.81) == pytest.approx(
            analytical.max_range(20.0, 60.0, 9.81))

    def test_summary(self):
        pred = analytical.theoretical_summary(BodyParameters(v0=20.0, angle=45.0))
        assert pred.range == pytest.approx(400.0 / 9.81)
        assert pred.flight_time == pytest.approx(2 * 20.0 * np.sin(np.pi / 4) / 9.81)


class TestIntegrators:
    """Verify numerical integration steps."""

    def test_euler_step_formula(self):
        params = BodyParameters(v0=10.0, angle=45.0, drag_enabled=True)
        s = KinematicState(1.0, 2.0, 7.0, 3.0)
        dt = 0.016
        ax, ay = acceleration(7.0, 3.0, params.mass, params.diameter, params.gravity,
                              True, 0.0)
        n = euler_step(s, params, dt)
        assert n.x == 1.0 + 7.0 * dt
        assert n.y == 2.0 + 3.0 * dt
        assert abs(n.vx - (7.0 + ax * dt)) < 1e-12
        assert abs(n.vy - (3.0 + ay * dt)) < 1e-12

    def test_euler_does_not_clamp(self):
        params = BodyParameters(drag_enabled=True)
        n = euler_step(KinematicState(0.0, 0.0, 1.0, -5.0), params, 0.016)
        assert n.y < 0

    def test_euler_is_deterministic(self):
        params = BodyParameters(v0=25.0, angle=35.0, drag_enabled=True, wind_speed=-3.0)
        s = KinematicState(0.0, 0.0, 20.0, 14.0)
        assert euler_step(s, params, 0.016) == euler_step(s, params, 0.016)

    def test_rk4_exact_for_gravity(self):
        """Constant acceleration is integrated exactly by RK4."""
        params = BodyParameters(v0=20.0, angle=45.0, gravity=9.81)
        vx, vy = params.initial_velocity()
        s = KinematicState(0.0, 0.0, vx, vy)
        for _ in range(10):
            s = rk4_step(s, params, 0.1)
        exact = analytical.position_at(20.0, 45.0, 9.81, 1.0)
        assert abs(s.y - exact.y) < 1e-9
        assert abs(s.vy - exact.vy) < 1e-9

    def test_simulate_hits_ground(self):
        params = BodyParameters(v0=30.0, angle=40.0, drag_enabled=True)
        result = simulate(params, method='rk4', dt=0.01)
        assert result.y[-1] < 0
        assert result.range_total > 0
        assert result.flight_time > 0

    def test_rk4_more_accurate_than_euler(self):
        params = BodyParameters(v0=20.0, angle=45.0)
        exact = analytical.max_range(20.0, 45.0, 9.81)
        euler = simulate(params, method='euler', dt=0.05)
        rk4 = simulate(params, method='rk4', dt=0.05)
        assert abs(rk4.range_total - exact) < abs(euler.range_total - exact)

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            simulate(BodyParameters(), method='leapfrog')


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
