# -- SPH Particle Store -- #

'''
Dataclass holding the mutable state of every particle.

Stores positions, velocities, forces, densities and pressures as
contiguous NumPy arrays for vectorized operations. Row i of every
array belongs to particle i; rows are only appended (add) or all
removed together (clear), so particle order is stable for the
lifetime of a seeding.

The store holds no physics: the force model and integrator mutate
the arrays in place.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass
class ParticleStore:
    '''
    SPH particle state.

    Vector arrays have shape (nParticles, 2), scalar arrays
    shape (nParticles,). All particles share one mass, held by
    the FluidConfig rather than per row.

    Parameters:
    -----------
    positions : np.ndarray
        Particle positions [px], shape (N, 2)
    velocities : np.ndarray
        Particle velocities [px/s], shape (N, 2)
    forces : np.ndarray
        Force accumulated this frame, shape (N, 2)
    densities : np.ndarray
        Particle densities, shape (N,)
    pressures : np.ndarray
        Particle pressures (signed), shape (N,)
    '''

    positions: np.ndarray
    velocities: np.ndarray
    forces: np.ndarray
    densities: np.ndarray
    pressures: np.ndarray

    @classmethod
    def empty(cls) -> ParticleStore:
        '''Create a store with no particles.'''
        return cls(
            positions=np.zeros((0, 2)),
            velocities=np.zeros((0, 2)),
            forces=np.zeros((0, 2)),
            densities=np.zeros(0),
            pressures=np.zeros(0),
        )

    @property
    def nParticles(self) -> int:
        '''Number of live particles.'''
        return self.positions.shape[0]

    def __len__(self) -> int:
        return self.nParticles

    @property
    def isEmpty(self) -> bool:
        '''True when the store holds no particles.'''
        return self.nParticles == 0

    ######################################################################
    # -- Lifecycle -- #
    ######################################################################

    def add(self, position) -> int:
        '''
        Append one particle at rest.

        Parameters:
        -----------
        position : array-like
            Particle position (x, y) [px]

        Returns:
        --------
        int : Index of the new particle

        Raises:
        -------
        ValueError : If position is not a finite 2-vector
        '''
        self.addMany(np.asarray(position, dtype=float).reshape(1, -1))
        return self.nParticles - 1

    def addMany(self, positions: np.ndarray) -> None:
        '''
        Append particles at rest, one per row of positions.

        Parameters:
        -----------
        positions : np.ndarray
            New particle positions [px], shape (M, 2)

        Raises:
        -------
        ValueError : If positions is not (M, 2) or holds non-finite values
        '''
        newPositions = np.asarray(positions, dtype=float)
        if newPositions.ndim != 2 or newPositions.shape[1] != 2:
            raise ValueError(
                f'Particle positions must have shape (M, 2), got {newPositions.shape}'
            )
        if not np.all(np.isfinite(newPositions)):
            raise ValueError('Particle positions must be finite')

        nNew = newPositions.shape[0]
        self.positions = np.vstack([self.positions, newPositions])
        self.velocities = np.vstack([self.velocities, np.zeros((nNew, 2))])
        self.forces = np.vstack([self.forces, np.zeros((nNew, 2))])
        self.densities = np.concatenate([self.densities, np.zeros(nNew)])
        self.pressures = np.concatenate([self.pressures, np.zeros(nNew)])

    def clear(self) -> None:
        '''Remove every particle.'''
        self.positions = np.zeros((0, 2))
        self.velocities = np.zeros((0, 2))
        self.forces = np.zeros((0, 2))
        self.densities = np.zeros(0)
        self.pressures = np.zeros(0)

    ######################################################################
    # -- Diagnostics -- #
    ######################################################################

    def kineticEnergy(self, mass: float) -> float:
        '''
        Total kinetic energy.

        KE = (1/2) * m * sum_i |v_i|^2

        Parameters:
        -----------
        mass : float
            Particle mass

        Returns:
        --------
        float : Kinetic energy
        '''
        speedsSq = np.sum(self.velocities * self.velocities, axis=1)
        return float(0.5 * mass * np.sum(speedsSq))

    def speeds(self) -> np.ndarray:
        '''Velocity magnitudes, shape (N,).'''
        return np.linalg.norm(self.velocities, axis=1)

    def maxSpeed(self) -> float:
        '''Maximum velocity magnitude (0 for an empty store).'''
        if self.isEmpty:
            return 0.0
        return float(np.max(self.speeds()))

    def maxPressure(self) -> float:
        '''Maximum pressure (0 for an empty store).'''
        if self.isEmpty:
            return 0.0
        return float(np.max(self.pressures))

    def minDensity(self) -> float:
        '''Minimum density (0 for an empty store).'''
        if self.isEmpty:
            return 0.0
        return float(np.min(self.densities))
