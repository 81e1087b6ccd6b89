# -- SPH Simulation Protocols -- #

'''
Configuration, command enums, and result dataclasses for the SPH sandbox.

Defines the data passed across the simulator boundary: the validated
FluidConfig (with its WorldBounds), the Direction and RenderMode
command values, the RenderFrame returned to the renderer, and the
SimulationState diagnostics snapshot.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field, asdict
from typing import Protocol

import numpy as np

from FluidSim import constants as const


# Accepted poly6 normalisation exponents (see DESIGN.md)
POLY6_EXPONENTS: tuple[int, ...] = (4, 9)

# Collision force-discard policies
COLLISION_POLICIES: tuple[str, ...] = ('discardAll', 'discardPair')


######################################################################
# -- World Bounds -- #
######################################################################

@dataclass(frozen=True)
class WorldBounds:
    '''
    Axis-aligned world rectangle in screen coordinates (y down).

    Parameters:
    -----------
    left : float
        X coordinate of the left edge [px]
    top : float
        Y coordinate of the top edge [px]
    width : float
        Horizontal extent [px], must be > 0
    height : float
        Vertical extent [px], must be > 0
    '''

    left: float
    top: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if not self.width > 0.0 or not self.height > 0.0:
            raise ValueError(
                f'World bounds must have positive extent, got '
                f'width={self.width}, height={self.height}'
            )

    @property
    def right(self) -> float:
        '''X coordinate of the right edge [px].'''
        return self.left + self.width

    @property
    def bottom(self) -> float:
        '''Y coordinate of the bottom edge [px].'''
        return self.top + self.height

    @property
    def lower(self) -> np.ndarray:
        '''Per-axis lower bounds (left, top).'''
        return np.array([self.left, self.top])

    @property
    def upper(self) -> np.ndarray:
        '''Per-axis upper bounds (right, bottom).'''
        return np.array([self.right, self.bottom])


######################################################################
# -- Fluid Configuration -- #
######################################################################

@dataclass(frozen=True, eq=False)
class FluidConfig:
    '''
    Physical constants and world bounds for one simulation run.

    The configuration is immutable; changing parameters goes through
    FluidSimulator.reconfigure() so the cached kernel constants are
    rebuilt. Invalid values are rejected on construction.

    Parameters:
    -----------
    particleMass : float
        Mass of every particle, > 0
    restDensity : float
        Rest density rho_0 of the linear equation of state
    gasConstant : float
        Equation of state stiffness k
    viscosity : float
        Viscosity coefficient mu
    smoothingLength : float
        Kernel support radius h [px], > 0
    particleRadius : float
        Collision / wall radius [px], > 0, independent of h
    maxVelocity : float
        Speed cap [px/s], > 0
    damping : float
        Fraction of wall-normal velocity kept on a bounce, in [0, 1]
    gravity : np.ndarray
        Gravity vector [px/s^2], shape (2,)
    bounds : WorldBounds
        World rectangle
    restitution : float
        Particle-particle coefficient of restitution, in [0, 1]
    poly6Exponent : int
        Exponent k in the poly6 normalisation 315 / (64 pi h^k)
    collisionForcePolicy : str
        'discardAll' drops the whole per-frame force of a colliding
        particle; 'discardPair' removes only the colliding pair's terms
    '''

    particleMass: float = const.particleMass
    restDensity: float = const.restDensity
    gasConstant: float = const.gasConstant
    viscosity: float = const.viscosity
    smoothingLength: float = const.smoothingLength
    particleRadius: float = const.particleRadius
    maxVelocity: float = const.maxVelocity
    damping: float = const.damping
    gravity: np.ndarray = field(
        default_factory=lambda: np.array([const.gravityX, const.gravityY])
    )
    bounds: WorldBounds = field(
        default_factory=lambda: WorldBounds(
            const.worldLeft, const.worldTop, const.worldWidth, const.worldHeight,
        )
    )
    restitution: float = const.restitution
    poly6Exponent: int = const.poly6Exponent
    collisionForcePolicy: str = 'discardAll'

    def __post_init__(self) -> None:
        # Normalise gravity to a float array without mutating the caller's
        gravity = np.array(self.gravity, dtype=float)
        if gravity.shape != (2,):
            raise ValueError(f'Gravity must be a 2-vector, got shape {gravity.shape}')
        object.__setattr__(self, 'gravity', gravity)

        if not self.smoothingLength > 0.0:
            raise ValueError(f'smoothingLength must be > 0, got {self.smoothingLength}')
        if not self.particleMass > 0.0:
            raise ValueError(f'particleMass must be > 0, got {self.particleMass}')
        if not self.particleRadius > 0.0:
            raise ValueError(f'particleRadius must be > 0, got {self.particleRadius}')
        if not self.maxVelocity > 0.0:
            raise ValueError(f'maxVelocity must be > 0, got {self.maxVelocity}')
        if not 0.0 <= self.damping <= 1.0:
            raise ValueError(f'damping must be in [0, 1], got {self.damping}')
        if not 0.0 <= self.restitution <= 1.0:
            raise ValueError(f'restitution must be in [0, 1], got {self.restitution}')
        if self.poly6Exponent not in POLY6_EXPONENTS:
            raise ValueError(
                f'poly6Exponent must be one of {POLY6_EXPONENTS}, got {self.poly6Exponent}'
            )
        if self.collisionForcePolicy not in COLLISION_POLICIES:
            raise ValueError(f'Unknown collision policy: {self.collisionForcePolicy}')
        if self.bounds.width < self.collisionDistance or self.bounds.height < self.collisionDistance:
            raise ValueError(
                f'World bounds must fit one particle (2 * radius = {self.collisionDistance}), '
                f'got {self.bounds.width} x {self.bounds.height}'
            )

    @property
    def smoothingLengthSq(self) -> float:
        '''Squared support radius h^2.'''
        return self.smoothingLength * self.smoothingLength

    @property
    def collisionDistance(self) -> float:
        '''Centre distance below which two particles overlap (2 * radius).'''
        return 2.0 * self.particleRadius

    ######################################################################
    # -- Presets and Loaders -- #
    ######################################################################

    @classmethod
    def default(cls) -> FluidConfig:
        '''Default sandbox configuration (800x600 window, y down).'''
        return cls()

    @classmethod
    def fromMenuSettings(
        cls,
        particleRadius: float = const.particleRadius,
        dampingPercent: float = 60.0,
        maxVelocity: float = const.maxVelocity,
        particleMass: float = const.particleMass,
        bounds: WorldBounds | None = None,
    ) -> FluidConfig:
        '''
        Build a configuration from the start-menu slider values.

        The damping slider is a loss percentage: 0% keeps the full
        wall-normal velocity, 100% stops the particle dead.

        Parameters:
        -----------
        particleRadius : float
            Radius slider value (3 - 10) [px]
        dampingPercent : float
            Damping slider value (0 - 100) [%]
        maxVelocity : float
            Max velocity slider value (300 - 1000) [px/s]
        particleMass : float
            Mass slider value (4 - 10)
        bounds : WorldBounds | None
            World rectangle (default window bounds if None)

        Returns:
        --------
        FluidConfig : Validated configuration
        '''
        kwargs = {}
        if bounds is not None:
            kwargs['bounds'] = bounds

        return cls(
            particleRadius=float(particleRadius),
            damping=1.0 - float(dampingPercent) / 100.0,
            maxVelocity=float(maxVelocity),
            particleMass=float(particleMass),
            **kwargs,
        )

    @classmethod
    def fromDict(cls, data: dict) -> FluidConfig:
        '''
        Build a configuration from a parsed JSON dictionary.

        Reads the 'fluid', 'particles' and 'world' sections; missing
        keys fall back to the defaults in FluidSim.constants.

        Parameters:
        -----------
        data : dict
            Parsed configuration

        Returns:
        --------
        FluidConfig : Validated configuration
        '''
        fluidSection = data.get('fluid', {})
        particleSection = data.get('particles', {})
        worldSection = data.get('world', {})

        gravity = fluidSection.get('gravity', [const.gravityX, const.gravityY])
        bounds = WorldBounds(
            left=worldSection.get('left', const.worldLeft),
            top=worldSection.get('top', const.worldTop),
            width=worldSection.get('width', const.worldWidth),
            height=worldSection.get('height', const.worldHeight),
        )

        return cls(
            particleMass=particleSection.get('mass', const.particleMass),
            restDensity=fluidSection.get('restDensity', const.restDensity),
            gasConstant=fluidSection.get('gasConstant', const.gasConstant),
            viscosity=fluidSection.get('viscosity', const.viscosity),
            smoothingLength=particleSection.get('smoothingLength', const.smoothingLength),
            particleRadius=particleSection.get('radius', const.particleRadius),
            maxVelocity=particleSection.get('maxVelocity', const.maxVelocity),
            damping=worldSection.get('damping', const.damping),
            gravity=np.array(gravity, dtype=float),
            bounds=bounds,
            restitution=particleSection.get('restitution', const.restitution),
            poly6Exponent=fluidSection.get('poly6Exponent', const.poly6Exponent),
            collisionForcePolicy=particleSection.get('collisionForcePolicy', 'discardAll'),
        )

    @classmethod
    def fromJson(cls, configPath: str) -> FluidConfig:
        '''
        Load a configuration from a JSON file.

        Parameters:
        -----------
        configPath : str
            Path to the JSON configuration file

        Returns:
        --------
        FluidConfig : Validated configuration
        '''
        with open(configPath, 'r') as f:
            data = json.load(f)

        return cls.fromDict(data)

    def toDict(self) -> dict:
        '''JSON-serialisable dictionary in the fromDict layout.'''
        return {
            'fluid': {
                'restDensity': self.restDensity,
                'gasConstant': self.gasConstant,
                'viscosity': self.viscosity,
                'gravity': self.gravity.tolist(),
                'poly6Exponent': self.poly6Exponent,
            },
            'particles': {
                'mass': self.particleMass,
                'radius': self.particleRadius,
                'smoothingLength': self.smoothingLength,
                'maxVelocity': self.maxVelocity,
                'restitution': self.restitution,
                'collisionForcePolicy': self.collisionForcePolicy,
            },
            'world': {**asdict(self.bounds), 'damping': self.damping},
        }


######################################################################
# -- Command Values -- #
######################################################################

class Direction(enum.IntEnum):
    '''Cardinal directions for wind and shake, screen coordinates (y down).'''

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def unitVector(self) -> np.ndarray:
        '''Unit vector pointing in this direction.'''
        return _DIRECTION_VECTORS[self.value].copy()

    @classmethod
    def parse(cls, value: Direction | int | str) -> Direction:
        '''
        Convert an enum, index (0-3) or name ('up', 'RIGHT', ...) to a Direction.

        Raises:
        -------
        ValueError : If the value names no direction
        '''
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f'Unknown direction: {value!r}') from None
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValueError(f'Unknown direction: {value!r}') from None


# Indexed by Direction value
_DIRECTION_VECTORS = np.array([
    [0.0, -1.0],
    [1.0, 0.0],
    [0.0, 1.0],
    [-1.0, 0.0],
])


class RenderMode(enum.Enum):
    '''Application display mode passed into render queries.'''

    PRESSURE = 'pressure'
    PLAIN = 'plain'


######################################################################
# -- Render Frame -- #
######################################################################

@dataclass
class RenderFrame:
    '''
    Render-facing view of the particles for one frame.

    Parameters:
    -----------
    positions : np.ndarray
        Particle positions [px], shape (N, 2), a copy of the store
    normalizedPressures : np.ndarray
        Pressure / max(frame pressure, floor), clipped to [0, 1], shape (N,)
    maxPressure : float
        Normalisation denominator used for this frame
    mode : RenderMode
        Display mode the frame was produced for
    '''

    positions: np.ndarray
    normalizedPressures: np.ndarray
    maxPressure: float
    mode: RenderMode = RenderMode.PRESSURE

    def __len__(self) -> int:
        return self.positions.shape[0]

    def __iter__(self):
        '''Iterate (position, normalizedPressure) pairs in particle order.'''
        for position, pressure in zip(self.positions, self.normalizedPressures):
            yield position, float(pressure)


######################################################################
# -- Simulation State -- #
######################################################################

@dataclass
class SimulationState:
    '''
    Scalar diagnostics after a step.

    Parameters:
    -----------
    time : float
        Accumulated simulated time [s]
    step : int
        Number of completed update() calls
    dt : float
        Last time step [s]
    nParticles : int
        Live particle count
    kineticEnergy : float
        Sum of 0.5 * m * |v|^2
    maxSpeed : float
        Largest velocity magnitude [px/s]
    maxPressure : float
        Largest pressure (may be negative)
    minDensity : float
        Smallest density (0 when there are no particles)
    nCollisions : int
        Particle pairs resolved by the collision branch this step
    '''

    time: float
    step: int
    dt: float
    nParticles: int
    kineticEnergy: float
    maxSpeed: float
    maxPressure: float
    minDensity: float
    nCollisions: int = 0


######################################################################
# -- Random Source Protocol -- #
######################################################################

class RandomSource(Protocol):
    '''Subset of numpy.random.Generator used by shake and grid seeding.'''

    def integers(self, low, high=None, size=None): ...

    def uniform(self, low=0.0, high=1.0, size=None): ...

