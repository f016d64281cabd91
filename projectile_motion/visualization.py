"""
Visualization
=============
Static analysis figures written by the runner script:
  1. Flight path (live ticks vs preview vs closed form)
  2. Drag / wind comparison for the same launch
  3. Energy vs time from flight telemetry
  4. Euler convergence (range error vs dt, log-log)
"""

import os
from typing import Dict, List, Optional

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from . import analytical
from .config import DEFAULT_CONFIG, PhysicsConfig
from .state import ProjectileState
from .projectile import TrajectoryPoint
from .validation import ConvergenceResult


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'accent_colors': ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b',
                      '#e040fb', '#ff5252'],
}

LEGEND_KW = dict(facecolor='#1a1a1a', edgecolor='#444', labelcolor=STYLE['text_color'])


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    axes = np.atleast_1d(axes).flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def _save(fig, save_path):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


def _xy(points: List[TrajectoryPoint]):
    return (np.array([p.x for p in points]), np.array([p.y for p in points]))


# ══════════════════════════════════════════════════════════════════════════
#  1. Flight path
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectory(projectile: ProjectileState,
                    prediction: Optional[List[TrajectoryPoint]] = None,
                    save_path: str = None) -> plt.Figure:
    """Recorded path of a flight, with its preview and the closed form."""
    p = projectile.params
    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)

    x, y = _xy(projectile.trajectory)
    ax.plot(x, y, color=STYLE['accent_colors'][0], linewidth=2.5, label='Live flight')

    if prediction:
        px, py = _xy(prediction)
        ax.plot(px, py, color='#6464ff', linewidth=2, linestyle='--',
                label='Predicted')

    t_flight = analytical.flight_time(p.v0, p.angle, p.gravity)
    t = np.linspace(0.0, t_flight, 200)
    rad = np.radians(p.angle)
    ax.plot(p.v0 * np.cos(rad) * t, p.v0 * np.sin(rad) * t - 0.5 * p.gravity * t**2,
            color='#888888', linewidth=1.5, linestyle=':', label='No resistance (theory)')

    if projectile.has_landed:
        ax.plot(projectile.range, 0.0, 'x', color='#ff5252', markersize=12,
                markeredgewidth=3, label=f'Impact ({projectile.range:.1f} m)', zorder=5)

    ax.set_xlabel('Distance (m)', fontsize=12)
    ax.set_ylabel('Height (m)', fontsize=12)
    ax.set_title(f'Projectile Trajectory (v₀={p.v0:.1f} m/s, θ={p.angle:.0f}°, '
                 f'g={p.gravity:.2f} m/s²)', fontsize=13, fontweight='bold')
    ax.legend(loc='upper right', fontsize=10, **LEGEND_KW)
    ax.set_ylim(bottom=0)
    ax.set_xlim(left=0)

    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Drag / wind comparison
# ══════════════════════════════════════════════════════════════════════════

def plot_drag_comparison(flights: Dict[str, ProjectileState],
                         save_path: str = None) -> plt.Figure:
    """Paths and ranges of several landed flights side by side."""
    fig, axes = plt.subplots(1, 2, figsize=(16, 6))
    _apply_dark_style(fig, axes)
    colors = STYLE['accent_colors']

    ax = axes[0]
    for (label, flight), color in zip(flights.items(), colors):
        x, y = _xy(flight.trajectory)
        ax.plot(x, y, color=color, linewidth=2, label=label)
    ax.set_xlabel('Distance (m)')
    ax.set_ylabel('Height (m)')
    ax.set_title('Trajectory Comparison', fontweight='bold')
    ax.legend(fontsize=9, **LEGEND_KW)
    ax.set_ylim(bottom=0)

    ax = axes[1]
    names = list(flights)
    ranges = [flights[k].range for k in names]
    bars = ax.barh(names, ranges, color=colors[:len(names)], alpha=0.85, edgecolor='#555')
    ax.set_xlabel('Range (m)')
    ax.set_title('Range Comparison', fontweight='bold')
    for bar, r in zip(bars, ranges):
        ax.text(bar.get_width() + 0.1, bar.get_y() + bar.get_height()/2,
                f'{r:.2f} m', va='center', color=STYLE['text_color'], fontsize=10)

    fig.suptitle('Effect of Drag and Wind — Same Launch Conditions',
                 fontsize=15, fontweight='bold', color=STYLE['text_color'], y=1.02)
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  3. Energy
# ══════════════════════════════════════════════════════════════════════════

def plot_energy(telemetry: Dict[str, np.ndarray], save_path: str = None) -> plt.Figure:
    """Kinetic, potential and total energy from Simulation.telemetry_arrays()."""
    fig, ax = plt.subplots(figsize=(11, 6))
    _apply_dark_style(fig, ax)

    t = telemetry['time']
    ax.plot(t, telemetry['kinetic_energy'], color='#ff6b35', linewidth=2, label='Kinetic')
    ax.plot(t, telemetry['potential_energy'], color='#00e676', linewidth=2, label='Potential')
    ax.plot(t, telemetry['total_energy'], color='#00d4ff', linewidth=2.5, label='Total')

    ax.set_xlabel('Time (s)', fontsize=12)
    ax.set_ylabel('Energy (J)', fontsize=12)
    ax.set_title('Energy vs Time', fontsize=13, fontweight='bold')
    ax.legend(fontsize=10, **LEGEND_KW)
    ax.set_ylim(bottom=0)

    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  4. Convergence
# ══════════════════════════════════════════════════════════════════════════

def plot_convergence(results: List[ConvergenceResult], save_path: str = None,
                     config: PhysicsConfig = DEFAULT_CONFIG) -> plt.Figure:
    """Range error vs timestep on log-log axes, one line per method."""
    fig, ax = plt.subplots(figsize=(10, 6))
    _apply_dark_style(fig, ax)

    for method, color in zip(('euler', 'rk4'), ('#ff6b35', '#00d4ff')):
        rows = [r for r in results if r.method == method and r.error > 0]
        if not rows:
            continue
        ax.loglog([r.dt for r in rows], [r.error for r in rows], 'o-',
                  color=color, linewidth=2, label=method.upper())

    ax.axvline(x=config.dt, color='#ff5252', linestyle='--', alpha=0.6, label='Live tick')
    ax.set_xlabel('Timestep dt (s)', fontsize=12)
    ax.set_ylabel('Range error (m)', fontsize=12)
    ax.set_title('Integrator Convergence', fontsize=13, fontweight='bold')
    ax.legend(fontsize=10, **LEGEND_KW)

    _save(fig, save_path)
    return fig
