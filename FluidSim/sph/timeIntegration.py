# -- SPH Time Integration Schemes -- #

'''
Time integration for the SPH particle store.

Implements the Symplectic Euler (semi-implicit Euler) integrator
with a hard speed cap. The cap runs unconditionally every step, so
velocities injected by commands such as shake() are bounded at the
next integration regardless of their size.

References:
-----------
Monaghan (2005) -- Smoothed Particle Hydrodynamics
Hairer et al. (2003) -- Geometric Numerical Integration

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

from typing import Protocol

import numpy as np

from FluidSim.sph.particles import ParticleStore


######################################################################
# -- Time Integrator Protocol -- #
######################################################################

class TimeIntegrator(Protocol):
    '''Protocol for time integration schemes.'''

    def integrate(self, particles: ParticleStore, dt: float) -> None:
        '''
        Advance all particles by one time step.

        Parameters:
        -----------
        particles : ParticleStore
            Particle store to advance
        dt : float
            Time step size [s]
        '''
        ...


######################################################################
# -- Symplectic Euler Integrator -- #
######################################################################

class SymplecticEuler:
    '''
    Symplectic (semi-implicit) Euler integrator with a speed cap.

    Update sequence:
        v(t+dt) = v(t) + f(t) / rho * dt          (kick)
        |v(t+dt)| <= vMax                          (clamp, direction kept)
        x(t+dt) = x(t) + v(t+dt) * dt             (drift)

    The drift uses the updated, clamped velocity.

    Parameters:
    -----------
    maxVelocity : float
        Speed cap vMax [px/s]
    '''

    def __init__(self, maxVelocity: float) -> None:
        self._maxVelocity = maxVelocity

    @property
    def maxVelocity(self) -> float:
        '''Speed cap [px/s].'''
        return self._maxVelocity

    def integrate(self, particles: ParticleStore, dt: float) -> None:
        '''
        Advance all particles by one time step.

        Parameters:
        -----------
        particles : ParticleStore
            Particle store to advance
        dt : float
            Time step size [s]
        '''
        if particles.isEmpty:
            return

        densities = particles.densities

        # Kick: a = f / rho; rows without a density pass get no force
        accelerations = np.zeros_like(particles.forces)
        positive = densities > 0.0
        accelerations[positive] = particles.forces[positive] / densities[positive, np.newaxis]
        particles.velocities += accelerations * dt

        # Clamp speed, preserving direction
        speeds = np.linalg.norm(particles.velocities, axis=1)
        tooFast = speeds > self._maxVelocity
        if np.any(tooFast):
            particles.velocities[tooFast] *= (self._maxVelocity / speeds[tooFast])[:, np.newaxis]

        # Drift: update positions from (new) velocities
        particles.positions += particles.velocities * dt
