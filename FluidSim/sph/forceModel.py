# -- SPH Density, Pressure and Force Model -- #

'''
Density/pressure and force passes of the SPH pipeline.

Neighbour search is brute force: every pass builds the full N x N
table of pair displacements with NumPy broadcasting and masks out
pairs beyond the support radius. This is O(N^2) in time and memory,
which is fine for the few hundred particles of the sandbox.

Density (poly6, self term included):
    rho_i = sum_j m * W_poly6(|x_i - x_j|^2, h)         r^2 < h^2

Pressure (linear equation of state, no clamping):
    p_i = k * (rho_i - rho_0)

Forces, for eps < r_ij < h:
    f_i^press += m * (p_i + p_j) / (2 rho_i rho_j) * C_spiky (h - r)^2 * x_ij / r
    f_i^visc  += m * mu / rho_j * C_visc (h - r) * (v_j - v_i)
    f_i        = f_i^press + f_i^visc + g * rho_i,   |f_i| <= vMax * rho_i

The density pass must finish for every particle before the force
pass reads any neighbour's density.

References:
-----------
Muller, Charypar & Gross (2003) -- Particle-based fluid simulation
    for interactive applications

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from FluidSim import constants as const
from FluidSim.sph.protocols import FluidConfig
from FluidSim.sph.kernels import MullerKernels
from FluidSim.sph.particles import ParticleStore

if TYPE_CHECKING:
    from FluidSim.sph.collisions import ElasticCollisionResolver


######################################################################
# -- Pair Geometry -- #
######################################################################

def pairDisplacements(positions: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    '''
    All pairwise displacements x_i - x_j and their squared lengths.

    Parameters:
    -----------
    positions : np.ndarray
        Particle positions, shape (N, 2)

    Returns:
    --------
    tuple[np.ndarray, np.ndarray] :
        (dr, rSq) with shapes (N, N, 2) and (N, N)
    '''
    dr = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
    rSq = np.sum(dr * dr, axis=2)
    return (dr, rSq)


######################################################################
# -- Density and Pressure Pass -- #
######################################################################

def computeDensityPressure(
    particles: ParticleStore,
    config: FluidConfig,
    kernels: MullerKernels,
) -> None:
    '''
    Compute every particle's density and pressure in place.

    The diagonal (j = i, r = 0) always lies inside the support, so
    each density is at least m * W_poly6(0) > 0.

    Parameters:
    -----------
    particles : ParticleStore
        Particle state, densities and pressures are overwritten
    config : FluidConfig
        Mass and equation of state parameters
    kernels : MullerKernels
        Kernel set for the configured smoothing length
    '''
    if particles.isEmpty:
        return

    _, rSq = pairDisplacements(particles.positions)

    # poly6Batch is zero outside r^2 < h^2
    weights = kernels.poly6Batch(rSq)
    particles.densities[:] = config.particleMass * np.sum(weights, axis=1)

    # Linear EOS; negative pressure (expansion) is kept
    particles.pressures[:] = config.gasConstant * (
        particles.densities - config.restDensity
    )


######################################################################
# -- Pairwise Force Contributions -- #
######################################################################

def pairForceContributions(
    particles: ParticleStore,
    config: FluidConfig,
    kernels: MullerKernels,
) -> tuple[np.ndarray, np.ndarray]:
    '''
    Pressure and viscosity force exerted on particle i by particle j.

    Entry [i, j] of each returned array is the contribution to
    particle i from neighbour j. Pairs with r <= eps (including the
    diagonal) or r >= h contribute zero.

    Parameters:
    -----------
    particles : ParticleStore
        Particle state with densities and pressures already computed
    config : FluidConfig
        Mass and viscosity parameters
    kernels : MullerKernels
        Kernel set for the configured smoothing length

    Returns:
    --------
    tuple[np.ndarray, np.ndarray] :
        (pressureTerms, viscosityTerms), each shape (N, N, 2)
    '''
    mass = config.particleMass
    dr, rSq = pairDisplacements(particles.positions)
    r = np.sqrt(rSq)

    active = (r > const.distanceEpsilon) & (r < kernels.smoothingLength)
    safeR = np.where(active, r, 1.0)
    unit = dr / safeR[:, :, np.newaxis]

    rho = particles.densities
    p = particles.pressures

    # --- Pressure: m * (p_i + p_j) / (2 rho_i rho_j) * C_spiky (h - r)^2 --- #
    pressureScale = (p[:, np.newaxis] + p[np.newaxis, :]) / (
        2.0 * rho[:, np.newaxis] * rho[np.newaxis, :]
    )
    pressureMag = np.where(
        active, mass * pressureScale * kernels.spikyGradientBatch(r), 0.0,
    )
    pressureTerms = pressureMag[:, :, np.newaxis] * unit

    # --- Viscosity: m * mu / rho_j * C_visc (h - r) * (v_j - v_i) --- #
    dv = particles.velocities[np.newaxis, :, :] - particles.velocities[:, np.newaxis, :]
    viscosityMag = np.where(
        active,
        mass * config.viscosity / rho[np.newaxis, :] * kernels.viscosityLaplacianBatch(r),
        0.0,
    )
    viscosityTerms = viscosityMag[:, :, np.newaxis] * dv

    return (pressureTerms, viscosityTerms)


######################################################################
# -- Force Pass -- #
######################################################################

def computeForces(
    particles: ParticleStore,
    config: FluidConfig,
    kernels: MullerKernels,
    resolver: ElasticCollisionResolver | None = None,
) -> int:
    '''
    Compute every particle's total force in place.

    Continuous forces are evaluated from the state at the start of
    the pass. The collision branch (if a resolver is given) then
    corrects velocities and positions of overlapping pairs, and the
    forces of colliding particles are discarded according to
    config.collisionForcePolicy:

        'discardAll'  : the whole force of both particles is zeroed
        'discardPair' : only the pair's pressure and viscosity terms
                        are removed before gravity and clamping

    Parameters:
    -----------
    particles : ParticleStore
        Particle state with densities and pressures already computed
    config : FluidConfig
        Simulation configuration
    kernels : MullerKernels
        Kernel set for the configured smoothing length
    resolver : ElasticCollisionResolver | None
        Collision branch; None disables it

    Returns:
    --------
    int : Number of particle pairs the collision branch fired for
    '''
    if particles.isEmpty:
        return 0

    pressureTerms, viscosityTerms = pairForceContributions(particles, config, kernels)
    pairTerms = pressureTerms + viscosityTerms
    forces = np.sum(pairTerms, axis=1)

    collidedPairs: list[tuple[int, int]] = []
    if resolver is not None:
        collidedPairs = resolver.resolve(particles)

    if config.collisionForcePolicy == 'discardPair':
        for i, j in collidedPairs:
            forces[i] -= pairTerms[i, j]
            forces[j] -= pairTerms[j, i]

    # Gravity as a body force proportional to density
    forces += config.gravity[np.newaxis, :] * particles.densities[:, np.newaxis]

    # Clamp |f| to vMax * rho (stability heuristic)
    forceLimit = config.maxVelocity * particles.densities
    magnitudes = np.linalg.norm(forces, axis=1)
    tooLarge = magnitudes > forceLimit
    if np.any(tooLarge):
        forces[tooLarge] *= (forceLimit[tooLarge] / magnitudes[tooLarge])[:, np.newaxis]

    # Every overlapping pair counts as collided, including pairs already
    # moving apart, so resting overlaps are separated and lose their force.
    if config.collisionForcePolicy == 'discardAll' and collidedPairs:
        involved = np.unique(np.array(collidedPairs, dtype=np.int64).ravel())
        forces[involved] = 0.0

    particles.forces[:] = forces
    return len(collidedPairs)
