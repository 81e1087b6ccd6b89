# -- Configuration and Command Value Tests -- #

'''
FluidConfig validation, presets and JSON loading, plus the
Direction and RenderMode command values.

Sean Bowman [02/12/2026]
'''

import json
from pathlib import Path

import numpy as np
import pytest

from FluidSim import constants as const
from FluidSim.sph.protocols import FluidConfig, WorldBounds, Direction, RenderMode


projectRoot = Path(__file__).parent.parent


def testDefaultConfig():
    config = FluidConfig.default()

    assert config.particleMass == const.particleMass
    assert config.smoothingLength == 15.0
    assert config.smoothingLengthSq == 225.0
    assert config.collisionDistance == 10.0
    assert config.poly6Exponent == 4
    assert config.collisionForcePolicy == 'discardAll'
    np.testing.assert_array_equal(config.gravity, [0.0, 981.0])
    assert config.bounds.right == 776.0
    assert config.bounds.bottom == 576.0


def testGravityCopiedToFloatArray():
    gravity = [0, 10]
    config = FluidConfig(gravity=gravity)

    assert config.gravity.dtype == float
    gravity[1] = 99
    assert config.gravity[1] == 10.0


@pytest.mark.parametrize('kwargs', [
    {'smoothingLength': 0.0},
    {'particleMass': -1.0},
    {'particleRadius': 0.0},
    {'maxVelocity': 0.0},
    {'damping': 1.5},
    {'restitution': -0.1},
    {'poly6Exponent': 6},
    {'collisionForcePolicy': 'ignore'},
    {'gravity': [0.0, 1.0, 2.0]},
])
def testInvalidConfigRejected(kwargs):
    with pytest.raises(ValueError):
        FluidConfig(**kwargs)


def testInvalidBoundsRejected():
    with pytest.raises(ValueError):
        WorldBounds(0.0, 0.0, 0.0, 100.0)
    with pytest.raises(ValueError):
        WorldBounds(0.0, 0.0, 100.0, -5.0)


def testBoundsMustFitOneParticle():
    with pytest.raises(ValueError):
        FluidConfig(bounds=WorldBounds(0.0, 0.0, 4.0, 4.0), particleRadius=5.0)
    with pytest.raises(ValueError):
        FluidConfig(bounds=WorldBounds(0.0, 0.0, 200.0, 9.0), particleRadius=5.0)

    config = FluidConfig(bounds=WorldBounds(0.0, 0.0, 10.0, 10.0), particleRadius=5.0)
    assert config.bounds.width == 10.0


def testFromMenuSettings():
    config = FluidConfig.fromMenuSettings(
        particleRadius=7, dampingPercent=60, maxVelocity=500, particleMass=8,
    )

    assert config.particleRadius == 7.0
    assert config.damping == pytest.approx(0.4)
    assert config.maxVelocity == 500.0
    assert config.particleMass == 8.0

    assert FluidConfig.fromMenuSettings(dampingPercent=100).damping == pytest.approx(0.0)
    with pytest.raises(ValueError):
        FluidConfig.fromMenuSettings(dampingPercent=120)


def testFromDictPartialSections():
    config = FluidConfig.fromDict({
        'fluid': {'gravity': [0.0, 0.0], 'poly6Exponent': 9},
        'world': {'width': 200.0, 'damping': 0.9},
    })

    np.testing.assert_array_equal(config.gravity, [0.0, 0.0])
    assert config.poly6Exponent == 9
    assert config.bounds.width == 200.0
    assert config.bounds.height == const.worldHeight
    assert config.damping == 0.9
    assert config.particleRadius == const.particleRadius


def testToDictRoundTrip(tmp_path):
    original = FluidConfig(viscosity=3000.0, collisionForcePolicy='discardPair')
    path = tmp_path / 'config.json'
    path.write_text(json.dumps(original.toDict()))

    loaded = FluidConfig.fromJson(str(path))

    assert loaded.viscosity == 3000.0
    assert loaded.collisionForcePolicy == 'discardPair'
    assert loaded.bounds == original.bounds
    np.testing.assert_array_equal(loaded.gravity, original.gravity)


def testShippedDefaultJsonMatchesDefaults():
    loaded = FluidConfig.fromJson(str(projectRoot / 'configs' / 'default.json'))
    default = FluidConfig.default()

    assert loaded.toDict() == default.toDict()


#--------------------------------------------------------------------#
# -- Command Values -- #
#--------------------------------------------------------------------#

def testDirectionUnitVectors():
    np.testing.assert_array_equal(Direction.UP.unitVector, [0.0, -1.0])
    np.testing.assert_array_equal(Direction.RIGHT.unitVector, [1.0, 0.0])
    np.testing.assert_array_equal(Direction.DOWN.unitVector, [0.0, 1.0])
    np.testing.assert_array_equal(Direction.LEFT.unitVector, [-1.0, 0.0])


def testDirectionParse():
    assert Direction.parse(Direction.DOWN) is Direction.DOWN
    assert Direction.parse(1) is Direction.RIGHT
    assert Direction.parse(' Left ') is Direction.LEFT
    assert Direction.parse('up') is Direction.UP

    for bad in ('north', 4, -1, None):
        with pytest.raises(ValueError):
            Direction.parse(bad)


def testRenderModeValues():
    assert RenderMode('pressure') is RenderMode.PRESSURE
    assert RenderMode('plain') is RenderMode.PLAIN
    with pytest.raises(ValueError):
        RenderMode('wireframe')
