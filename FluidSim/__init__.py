# -- FluidSim Package -- #

'''
Real-time 2D fluid sandbox using Smoothed Particle Hydrodynamics (SPH).

A few hundred particles in a closed box, stepped once per rendered
frame, with interactive shake and wind commands. The window, input
and drawing live in the host application; this package is the
simulation core plus a headless runner and offline diagnostics.

Sean Bowman [02/12/2026]
'''

__version__ = '0.1.0'

from FluidSim.sph.protocols import FluidConfig, WorldBounds, Direction, RenderMode
from FluidSim.sph.fluidSimulator import FluidSimulator
from FluidSim.scenarios.particleGrid import GridSeedConfig, createGridScenario
from FluidSim.export.frameExporter import FrameExporter
