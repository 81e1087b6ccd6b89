# -- Simulation Scenarios Package -- #

'''
Pre-configured starting layouts for the SPH sandbox.

Each scenario provides a seeding layout and returns a ready-to-step
FluidSimulator.

Sean Bowman [02/12/2026]
'''

from FluidSim.scenarios.particleGrid import GridSeedConfig, createGridScenario
