# -- Kernel Function Tests -- #

'''
Checks the Muller kernel constants, support radius cutoffs, and
agreement between the scalar and batch kernel evaluations.

Sean Bowman [02/12/2026]
'''

import math

import numpy as np
import pytest

from FluidSim.sph.kernels import KernelScales, MullerKernels, createKernels


def testScalesForSmoothingLength():
    h = 15.0
    scales = KernelScales.fromSmoothingLength(h)

    assert math.isclose(scales.poly6, 315.0 / (64.0 * math.pi * h ** 4))
    assert math.isclose(scales.spikyGradient, -45.0 / (math.pi * h ** 6))
    assert math.isclose(scales.viscosityLaplacian, 45.0 / (math.pi * h ** 6))
    assert scales.smoothingLengthSq == 225.0


def testNinthPowerNormalisation():
    scales = KernelScales.fromSmoothingLength(15.0, poly6Exponent=9)
    assert math.isclose(scales.poly6, 315.0 / (64.0 * math.pi * 15.0 ** 9))


def testKernelsVanishAtSupportRadius():
    kernels = MullerKernels(15.0)

    assert kernels.poly6(225.0) == 0.0
    assert kernels.poly6(400.0) == 0.0
    assert kernels.spikyGradient(15.0) == 0.0
    assert kernels.viscosityLaplacian(20.0) == 0.0


def testKernelSignsInsideSupport():
    kernels = MullerKernels(15.0)

    assert kernels.poly6(0.0) > 0.0
    assert kernels.spikyGradient(5.0) < 0.0
    assert kernels.viscosityLaplacian(5.0) > 0.0


def testSelfDensity():
    kernels = MullerKernels(15.0)
    expected = 5.0 * 315.0 / (64.0 * math.pi * 15.0 ** 4) * 15.0 ** 6

    assert math.isclose(kernels.selfDensity(5.0), expected)


def testBatchMatchesScalar():
    kernels = MullerKernels(15.0)
    r = np.array([0.0, 3.0, 9.5, 14.99, 15.0, 30.0])

    poly6 = kernels.poly6Batch(r * r)
    spiky = kernels.spikyGradientBatch(r)
    visc = kernels.viscosityLaplacianBatch(r)

    for idx, dist in enumerate(r):
        assert math.isclose(poly6[idx], kernels.poly6(dist * dist), abs_tol=1e-15)
        assert math.isclose(spiky[idx], kernels.spikyGradient(dist), abs_tol=1e-15)
        assert math.isclose(visc[idx], kernels.viscosityLaplacian(dist), abs_tol=1e-15)


def testBatchKeepsShape():
    kernels = MullerKernels(15.0)
    rSq = np.zeros((3, 4))
    assert kernels.poly6Batch(rSq).shape == (3, 4)


def testCreateKernelsRejectsBadInput():
    with pytest.raises(ValueError):
        createKernels(15.0, poly6Exponent=5)
    with pytest.raises(ValueError):
        createKernels(0.0)
    with pytest.raises(ValueError):
        createKernels(-2.0)


def testCreateKernelsCachesSmoothingLength():
    kernels = createKernels(20.0, poly6Exponent=9)
    assert kernels.smoothingLength == 20.0
    assert kernels.scales.poly6Exponent == 9
