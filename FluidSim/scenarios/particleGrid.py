# -- Particle Grid Scenario -- #

'''
Square block of fluid dropped into the sandbox.

Reproduces the start menu of the interactive sandbox: a square grid
of particles with spacing slightly larger than one particle diameter
is placed a quarter of the way into the world and released under
gravity. Each particle gets a small random offset so the block
does not collapse as a perfect lattice.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

from dataclasses import dataclass

from FluidSim import constants as const
from FluidSim.sph.protocols import FluidConfig, RandomSource
from FluidSim.sph.fluidSimulator import FluidSimulator


# Grid-size slider range of the start menu
MIN_GRID_SIZE: int = 1
MAX_GRID_SIZE: int = 35


######################################################################
# -- Grid Seeding Configuration -- #
######################################################################

@dataclass
class GridSeedConfig:
    '''
    Configuration for a seeded particle grid.

    Parameters:
    -----------
    rows : int
        Number of grid rows
    cols : int
        Number of grid columns
    spacing : float
        Distance between grid nodes [px]
    jitter : float
        Half-width of the uniform per-axis position jitter [px]
    originFraction : float
        Grid origin as a fraction of the world width / height,
        measured from the top-left corner
    '''

    rows: int = 20
    cols: int = 20
    spacing: float = const.gridSpacing
    jitter: float = const.gridJitter
    originFraction: float = const.gridOriginFraction

    @classmethod
    def fromGridSize(cls, gridSize: int) -> GridSeedConfig:
        '''
        Square grid from the start-menu slider value.

        Raises:
        -------
        ValueError : If gridSize is outside the slider range
        '''
        if not MIN_GRID_SIZE <= gridSize <= MAX_GRID_SIZE:
            raise ValueError(
                f'Grid size must be in [{MIN_GRID_SIZE}, {MAX_GRID_SIZE}], got {gridSize}'
            )
        return cls(rows=gridSize, cols=gridSize)

    @classmethod
    def small(cls) -> GridSeedConfig:
        '''
        Small block for quick runs.

        100 particles, a few hundred frames per second.
        '''
        return cls(rows=10, cols=10)

    @classmethod
    def standard(cls) -> GridSeedConfig:
        '''Standard 20 x 20 block (400 particles).'''
        return cls(rows=20, cols=20)

    @classmethod
    def large(cls) -> GridSeedConfig:
        '''Largest block the start menu allows (1225 particles).'''
        return cls(rows=MAX_GRID_SIZE, cols=MAX_GRID_SIZE)

    @property
    def nParticles(self) -> int:
        '''Number of particles the grid seeds.'''
        return self.rows * self.cols


######################################################################
# -- Scenario Creation -- #
######################################################################

def createGridScenario(
    gridConfig: GridSeedConfig,
    fluidConfig: FluidConfig | None = None,
    rng: RandomSource | None = None,
    seed: int | None = None,
) -> FluidSimulator:
    '''
    Create a simulator seeded with a particle grid.

    Parameters:
    -----------
    gridConfig : GridSeedConfig
        Grid layout
    fluidConfig : FluidConfig | None
        Simulation configuration (default sandbox if None)
    rng : RandomSource | None
        Random generator for jitter and later shakes
    seed : int | None
        Seed for the default generator (ignored when rng is given)

    Returns:
    --------
    FluidSimulator : Simulator holding gridConfig.nParticles particles
    '''
    simulator = FluidSimulator(config=fluidConfig, rng=rng, seed=seed)
    bounds = simulator.config.bounds

    origin = (
        bounds.left + bounds.width * gridConfig.originFraction,
        bounds.top + bounds.height * gridConfig.originFraction,
    )

    simulator.seedGrid(
        rows=gridConfig.rows,
        cols=gridConfig.cols,
        spacing=gridConfig.spacing,
        origin=origin,
        jitter=gridConfig.jitter,
    )

    return simulator
