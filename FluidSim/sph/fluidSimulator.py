# -- Real-Time SPH Fluid Simulator -- #

'''
Simulation controller for the 2D SPH fluid sandbox.

Owns the particle store and runs a fixed three-pass pipeline once
per rendered frame:

    1. Density / pressure pass     (poly6 summation, linear EOS)
    2. Force pass                  (pressure + viscosity + gravity,
                                    with the elastic collision branch)
    3. Integrate pass              (symplectic Euler, speed cap, walls)

The controller is also the only command surface seen by the outer
application: particle seeding, clear, shake, wind, update and the
render snapshot. Renderers and input handlers never touch the
particle store directly.

Randomness (shake, seeding jitter) is drawn from an injected
numpy.random.Generator so runs are reproducible under a fixed seed.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import numpy as np

from FluidSim import constants as const
from FluidSim.sph.protocols import (
    FluidConfig,
    Direction,
    RenderMode,
    RenderFrame,
    SimulationState,
    RandomSource,
)
from FluidSim.sph.kernels import MullerKernels, createKernels
from FluidSim.sph.particles import ParticleStore
from FluidSim.sph.forceModel import computeDensityPressure, computeForces
from FluidSim.sph.collisions import ElasticCollisionResolver
from FluidSim.sph.boundaryHandling import BoundaryHandler
from FluidSim.sph.timeIntegration import TimeIntegrator, SymplecticEuler


# Unit vectors indexed by Direction value
_SHAKE_DIRECTIONS = np.array([d.unitVector for d in Direction])


class FluidSimulator:
    '''
    Real-time SPH fluid simulator.

    Parameters:
    -----------
    config : FluidConfig | None
        Simulation configuration (defaults to FluidConfig.default())
    rng : RandomSource | None
        Random generator for shake and seeding jitter. If None, a
        numpy Generator is created from seed.
    seed : int | None
        Seed for the default generator (ignored when rng is given)
    '''

    def __init__(
        self,
        config: FluidConfig | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
    ) -> None:
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._particles = ParticleStore.empty()
        self._time: float = 0.0
        self._step: int = 0
        self._dt: float = const.frameTimeStep
        self._nCollisions: int = 0

        self._applyConfig(config if config is not None else FluidConfig.default())

    def _applyConfig(self, config: FluidConfig) -> None:
        '''Cache kernel constants and rebuild the pipeline stages for config.'''
        self._config = config
        self._kernels = createKernels(config.smoothingLength, config.poly6Exponent)
        self._resolver = ElasticCollisionResolver(
            particleRadius=config.particleRadius,
            restitution=config.restitution,
        )
        self._boundaryHandler = BoundaryHandler(
            bounds=config.bounds,
            particleRadius=config.particleRadius,
            damping=config.damping,
        )
        self._integrator: TimeIntegrator = SymplecticEuler(maxVelocity=config.maxVelocity)

    def reconfigure(self, config: FluidConfig) -> None:
        '''
        Replace the configuration at a reset boundary.

        Kernel constants are recomputed from the new smoothing
        length. Existing particles are kept.

        Parameters:
        -----------
        config : FluidConfig
            New (already validated) configuration
        '''
        self._applyConfig(config)

    ######################################################################
    # -- Particle Lifecycle -- #
    ######################################################################

    def addParticle(self, position) -> int:
        '''
        Add one particle at rest. No overlap check is made.

        Parameters:
        -----------
        position : array-like
            Particle position (x, y) [px]

        Returns:
        --------
        int : Index of the new particle
        '''
        return self._particles.add(position)

    def seedGrid(
        self,
        rows: int,
        cols: int,
        spacing: float = const.gridSpacing,
        origin=None,
        jitter: float = const.gridJitter,
    ) -> int:
        '''
        Add a rows x cols block of particles with random jitter.

        Particle (row, col) is placed at
            origin + (col * spacing, row * spacing) + U(-jitter, jitter)^2
        in row-major order.

        Parameters:
        -----------
        rows, cols : int
            Grid size
        spacing : float
            Distance between grid nodes [px]
        origin : array-like | None
            Position of node (0, 0) [px]; defaults to a quarter of
            the way into the world from its top-left corner
        jitter : float
            Half-width of the uniform positional jitter [px]

        Returns:
        --------
        int : Number of particles added

        Raises:
        -------
        ValueError : For negative counts, spacing or jitter
        '''
        if rows < 0 or cols < 0:
            raise ValueError(f'Grid size must be non-negative, got {rows} x {cols}')
        if spacing < 0.0 or jitter < 0.0:
            raise ValueError(f'Spacing and jitter must be non-negative, got {spacing}, {jitter}')

        nNew = rows * cols
        if nNew == 0:
            return 0

        if origin is None:
            bounds = self._config.bounds
            origin = (
                bounds.left + bounds.width * const.gridOriginFraction,
                bounds.top + bounds.height * const.gridOriginFraction,
            )
        origin = np.asarray(origin, dtype=float)

        rowIdx, colIdx = np.meshgrid(np.arange(rows), np.arange(cols), indexing='ij')
        offsets = np.column_stack([colIdx.ravel(), rowIdx.ravel()]) * spacing
        positions = origin[np.newaxis, :] + offsets

        if jitter > 0.0:
            positions = positions + self._rng.uniform(-jitter, jitter, size=(nNew, 2))

        self._particles.addMany(positions)
        return nNew

    def clear(self) -> None:
        '''Remove all particles and reset the step counters.'''
        self._particles.clear()
        self._time = 0.0
        self._step = 0
        self._nCollisions = 0

    ######################################################################
    # -- Commands -- #
    ######################################################################

    def shake(self) -> None:
        '''
        Kick every particle in a random cardinal direction.

        Each particle independently gets one of up/right/down/left
        with equal probability and a speed uniform in [0, 10000).
        The result is bounded by the speed cap at the next update.
        '''
        n = self._particles.nParticles
        if n == 0:
            return

        directions = self._rng.integers(0, len(Direction), size=n)
        magnitudes = self._rng.uniform(0.0, const.shakeMagnitude, size=n)
        self._particles.velocities += _SHAKE_DIRECTIONS[directions] * magnitudes[:, np.newaxis]

    def wind(self, direction: Direction | int | str, force: float = const.windForce) -> None:
        '''
        Add a one-off velocity delta to every particle.

        Parameters:
        -----------
        direction : Direction | int | str
            Direction enum, index 0-3 (up, right, down, left), or name
        force : float
            Size of the velocity delta [px/s]

        Raises:
        -------
        ValueError : For an unknown direction or a non-numeric or non-finite force
        '''
        heading = Direction.parse(direction)
        try:
            force = float(force)
        except (TypeError, ValueError):
            raise ValueError(f'Wind force must be a number, got {force!r}') from None
        if not np.isfinite(force):
            raise ValueError(f'Wind force must be finite, got {force}')

        if self._particles.isEmpty:
            return
        self._particles.velocities += heading.unitVector * force

    ######################################################################
    # -- Main Time Step -- #
    ######################################################################

    def update(self, dt: float = const.frameTimeStep) -> SimulationState:
        '''
        Run the three-pass pipeline exactly once.

        An empty store is a no-op apart from advancing the clock.

        Parameters:
        -----------
        dt : float
            Time step [s], > 0

        Returns:
        --------
        SimulationState : Diagnostics after the step

        Raises:
        -------
        ValueError : If dt is not positive
        '''
        if not dt > 0.0:
            raise ValueError(f'Time step must be > 0, got {dt}')

        p = self._particles
        self._nCollisions = 0

        if not p.isEmpty:
            # 1. Density and pressure (all particles before any force)
            computeDensityPressure(p, self._config, self._kernels)

            # 2. Forces, with collision correction
            self._nCollisions = computeForces(
                p, self._config, self._kernels, self._resolver,
            )

            # 3. Integrate (Symplectic Euler) and enforce walls
            self._integrator.integrate(p, dt)
            self._boundaryHandler.enforceBoundary(p)

        self._dt = dt
        self._time += dt
        self._step += 1

        return self.currentState

    ######################################################################
    # -- Render Query -- #
    ######################################################################

    def snapshotForRender(self, mode: RenderMode | str = RenderMode.PRESSURE) -> RenderFrame:
        '''
        Positions and normalised pressures for the renderer.

        Pressure is divided by the frame's maximum pressure, floored
        at a small epsilon so an all-non-positive frame does not
        divide by zero, then clipped into [0, 1]. In PLAIN mode the
        pressure values are all zero.

        Parameters:
        -----------
        mode : RenderMode | str
            Application display mode

        Returns:
        --------
        RenderFrame : Copied positions and normalised pressures
        '''
        mode = RenderMode(mode)
        p = self._particles

        maxPressure = max(p.maxPressure(), const.pressureFloor)

        if mode is RenderMode.PLAIN:
            normalized = np.zeros(p.nParticles)
        else:
            normalized = np.clip(p.pressures / maxPressure, 0.0, 1.0)

        return RenderFrame(
            positions=p.positions.copy(),
            normalizedPressures=normalized,
            maxPressure=maxPressure,
            mode=mode,
        )

    ######################################################################
    # -- Properties -- #
    ######################################################################

    @property
    def currentState(self) -> SimulationState:
        '''Current simulation diagnostics snapshot.'''
        p = self._particles
        return SimulationState(
            time=self._time,
            step=self._step,
            dt=self._dt,
            nParticles=p.nParticles,
            kineticEnergy=p.kineticEnergy(self._config.particleMass),
            maxSpeed=p.maxSpeed(),
            maxPressure=p.maxPressure(),
            minDensity=p.minDensity(),
            nCollisions=self._nCollisions,
        )

    @property
    def config(self) -> FluidConfig:
        '''Active configuration.'''
        return self._config

    @property
    def kernels(self) -> MullerKernels:
        '''Kernel set cached for the active smoothing length.'''
        return self._kernels

    @property
    def particles(self) -> ParticleStore:
        '''Access the particle store (read-only use outside the pipeline).'''
        return self._particles

    @property
    def nParticles(self) -> int:
        '''Live particle count.'''
        return self._particles.nParticles

    @property
    def time(self) -> float:
        '''Accumulated simulated time [s].'''
        return self._time

    @property
    def stepCount(self) -> int:
        '''Number of completed update() calls.'''
        return self._step
