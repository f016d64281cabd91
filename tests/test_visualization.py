"""
Tests for the analysis figures.
"""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from projectile_motion.config import PhysicsConfig
from projectile_motion.validation import ConvergenceResult
from projectile_motion.visualization import plot_convergence


RESULTS = [
    ConvergenceResult('euler', 0.032, 41.2, 40.77),
    ConvergenceResult('euler', 0.016, 41.0, 40.77),
    ConvergenceResult('rk4', 0.032, 40.78, 40.77),
]


class TestConvergencePlot:

    def _tick_marker(self, fig):
        ax = fig.axes[0]
        return [line for line in ax.get_lines() if line.get_label() == 'Live tick'][0]

    def test_marker_at_default_tick(self):
        fig = plot_convergence(RESULTS)
        assert list(self._tick_marker(fig).get_xdata()) == [0.016, 0.016]
        plt.close(fig)

    def test_marker_follows_config(self):
        fig = plot_convergence(RESULTS, config=PhysicsConfig(dt=0.01))
        assert list(self._tick_marker(fig).get_xdata()) == [0.01, 0.01]
        plt.close(fig)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
