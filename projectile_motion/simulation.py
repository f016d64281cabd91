"""
Simulation Driver
=================
Tick driver for one or many independent projectiles.

The caller invokes tick() once per animation frame. Each tick runs
steps_per_frame physics updates (the simulation-speed multiplier) for
every projectile, records telemetry for the current projectile while it
flies, and reports which projectiles landed so the caller can react.

Projectiles share no state, so the order in which they are updated
within a tick does not matter.
"""

import logging
import math
from typing import Dict, List, Optional

import numpy as np

from .config import DEFAULT_CONFIG, PhysicsConfig
from .state import ProjectileState, TelemetrySample, create_projectile

logger = logging.getLogger(__name__)

TELEMETRY_FIELDS = ('time', 'x', 'y', 'vx', 'vy', 'speed',
                    'kinetic_energy', 'potential_energy', 'total_energy')


class Simulation:
    """
    Owns the live projectiles.

    In single mode firing replaces the previous projectile; in
    multi_projectile mode earlier shots stay in flight (or on the ground)
    alongside the new one.
    """

    def __init__(self, config: PhysicsConfig = DEFAULT_CONFIG,
                 multi_projectile: bool = False, speed: float = 1.0):
        self.config = config
        self.multi_projectile = multi_projectile
        self.speed = speed
        self.paused = False
        self.projectiles: List[ProjectileState] = []
        self.current: Optional[ProjectileState] = None
        self.telemetry: List[TelemetrySample] = []

    @property
    def steps_per_frame(self) -> int:
        # Halves round up, e.g. 2.5 -> 3
        return max(1, int(math.floor(self.speed + 0.5)))

    def fire(self, params) -> ProjectileState:
        """Create and launch a projectile; telemetry restarts with it."""
        projectile = create_projectile(params, self.config)
        projectile.launch()

        if self.multi_projectile:
            self.projectiles.append(projectile)
        else:
            self.projectiles = [projectile]
        self.current = projectile
        self.telemetry = []
        self.paused = False
        logger.info("fired projectile %d (v0=%.1f m/s, angle=%.1f°)",
                    len(self.projectiles), projectile.params.v0, projectile.params.angle)
        return projectile

    def tick(self) -> List[ProjectileState]:
        """Run one frame; returns projectiles that landed during it."""
        landed = []
        if self.paused:
            return landed
        for _ in range(self.steps_per_frame):
            for projectile in self.projectiles:
                was_flying = projectile.is_flying
                projectile.update()
                if was_flying and projectile.has_landed:
                    landed.append(projectile)
                if projectile is self.current and projectile.is_flying:
                    self.telemetry.append(projectile.telemetry())
        for projectile in landed:
            logger.info("projectile landed: range=%.2f m after %.2f s",
                        projectile.range, projectile.time)
        return landed

    def toggle_pause(self) -> bool:
        """Flip the pause flag; tick() does nothing while paused."""
        self.paused = not self.paused
        return self.paused

    @property
    def any_flying(self) -> bool:
        return any(p.is_flying for p in self.projectiles)

    def run_until_landed(self, max_ticks: int = 100000) -> int:
        """Tick until nothing is flying; returns the number of frames run."""
        frames = 0
        while self.any_flying and not self.paused and frames < max_ticks:
            self.tick()
            frames += 1
        if self.any_flying:
            logger.warning("stopped after %d frames with projectiles still flying", frames)
        return frames

    def reset(self):
        if self.multi_projectile:
            self.projectiles = []
        else:
            for projectile in self.projectiles:
                projectile.reset()
        self.current = None
        self.telemetry = []
        self.paused = False

    def telemetry_arrays(self) -> Dict[str, np.ndarray]:
        """Telemetry columns as numpy arrays, keyed by field name."""
        return {
            name: np.array([getattr(row, name) for row in self.telemetry], dtype=float)
            for name in TELEMETRY_FIELDS
        }
