# -- SPH Engine Package -- #

'''
Core Smoothed Particle Hydrodynamics (SPH) engine.

Provides the configuration types, kernel functions, particle store,
force model, collision resolver, boundary handling, time integration
and the FluidSimulator controller.

Sean Bowman [02/12/2026]
'''

from FluidSim.sph.protocols import (
    FluidConfig,
    WorldBounds,
    Direction,
    RenderMode,
    RenderFrame,
    SimulationState,
)
from FluidSim.sph.kernels import KernelScales, MullerKernels, createKernels
from FluidSim.sph.particles import ParticleStore
from FluidSim.sph.fluidSimulator import FluidSimulator
