# -- SPH Smoothing Kernels -- #

'''
Smoothing kernel functions for the real-time SPH force model.

Implements the three kernels of Muller et al. (2003), each used for
one field quantity:

    poly6               W(r, h) = C_poly6 * (h^2 - r^2)^3       density
    spiky gradient      dW/dr   = C_spiky * (h - r)^2            pressure
    viscosity laplacian lap(W)  = C_visc  * (h - r)              viscosity

with normalisation constants

    C_poly6 = 315 / (64 * pi * h^k)
    C_spiky = -45 / (pi * h^6)
    C_visc  =  45 / (pi * h^6)

All kernels have compact support: they vanish for r >= h.

The constants depend only on h (and the poly6 exponent k), so they
are computed once into a KernelScales value and cached by the
MullerKernels instance. A configuration change builds a new instance.

References:
-----------
Muller, Charypar & Gross (2003) -- Particle-based fluid simulation
    for interactive applications
Kelager (2006) -- Lagrangian fluid dynamics using SPH

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


######################################################################
# -- Kernel Normalisation Constants -- #
######################################################################

@dataclass(frozen=True)
class KernelScales:
    '''
    Cached kernel normalisation constants for one smoothing length.

    Parameters:
    -----------
    smoothingLength : float
        Support radius h [px]
    poly6Exponent : int
        Exponent k of h in the poly6 normalisation
    poly6 : float
        C_poly6 = 315 / (64 * pi * h^k)
    spikyGradient : float
        C_spiky = -45 / (pi * h^6)
    viscosityLaplacian : float
        C_visc = 45 / (pi * h^6)
    '''

    smoothingLength: float
    poly6Exponent: int
    poly6: float
    spikyGradient: float
    viscosityLaplacian: float

    @classmethod
    def fromSmoothingLength(cls, h: float, poly6Exponent: int = 4) -> KernelScales:
        '''
        Compute the normalisation constants for smoothing length h.

        Parameters:
        -----------
        h : float
            Smoothing length [px], > 0
        poly6Exponent : int
            Exponent k of h in the poly6 normalisation

        Returns:
        --------
        KernelScales : Cached constants

        Raises:
        -------
        ValueError : If h is not positive
        '''
        if not h > 0.0:
            raise ValueError(f'Smoothing length must be > 0, got {h}')

        h6 = h ** 6
        return cls(
            smoothingLength=h,
            poly6Exponent=poly6Exponent,
            poly6=315.0 / (64.0 * math.pi * h ** poly6Exponent),
            spikyGradient=-45.0 / (math.pi * h6),
            viscosityLaplacian=45.0 / (math.pi * h6),
        )

    @property
    def smoothingLengthSq(self) -> float:
        '''h^2.'''
        return self.smoothingLength * self.smoothingLength


######################################################################
# -- Muller Kernel Set -- #
######################################################################

class MullerKernels:
    '''
    Poly6, spiky-gradient and viscosity-laplacian kernels for one h.

    Scalar methods take a single distance; the *Batch methods take
    arrays of any shape and return arrays of the same shape with
    zeros outside the support radius.

    Parameters:
    -----------
    smoothingLength : float
        Support radius h [px]
    poly6Exponent : int
        Exponent k of h in the poly6 normalisation (4 or 9)
    '''

    def __init__(self, smoothingLength: float, poly6Exponent: int = 4) -> None:
        self._scales = KernelScales.fromSmoothingLength(smoothingLength, poly6Exponent)

    @property
    def scales(self) -> KernelScales:
        '''Cached normalisation constants.'''
        return self._scales

    @property
    def smoothingLength(self) -> float:
        '''Support radius h [px].'''
        return self._scales.smoothingLength

    ######################################################################
    # -- Scalar Kernels -- #
    ######################################################################

    def poly6(self, rSq: float) -> float:
        '''
        Density kernel W_poly6 evaluated at squared distance r^2.

        Parameters:
        -----------
        rSq : float
            Squared distance between particles [px^2]

        Returns:
        --------
        float : C_poly6 * (h^2 - r^2)^3 inside the support, else 0
        '''
        hSq = self._scales.smoothingLengthSq
        if rSq >= hSq:
            return 0.0
        diff = hSq - rSq
        return self._scales.poly6 * diff * diff * diff

    def spikyGradient(self, r: float) -> float:
        '''
        Scalar part of the spiky kernel gradient, C_spiky * (h - r)^2.

        The full gradient is spikyGradient(r) * (r_i - r_j) / r.
        Negative inside the support because C_spiky < 0.
        '''
        h = self._scales.smoothingLength
        if r >= h:
            return 0.0
        return self._scales.spikyGradient * (h - r) * (h - r)

    def viscosityLaplacian(self, r: float) -> float:
        '''Viscosity kernel laplacian, C_visc * (h - r) inside the support.'''
        h = self._scales.smoothingLength
        if r >= h:
            return 0.0
        return self._scales.viscosityLaplacian * (h - r)

    def selfDensity(self, mass: float) -> float:
        '''
        Density contributed by a particle to itself, m * W_poly6(0).

        This is the lower bound of every particle's density.
        '''
        return mass * self.poly6(0.0)

    ######################################################################
    # -- Vectorized (Batch) Operations -- #
    ######################################################################

    def poly6Batch(self, rSq: np.ndarray) -> np.ndarray:
        '''
        Evaluate W_poly6 for an array of squared distances.

        Parameters:
        -----------
        rSq : np.ndarray
            Squared distances [px^2], any shape

        Returns:
        --------
        np.ndarray : Kernel values, same shape
        '''
        hSq = self._scales.smoothingLengthSq
        diff = np.where(rSq < hSq, hSq - rSq, 0.0)
        return self._scales.poly6 * diff ** 3

    def spikyGradientBatch(self, r: np.ndarray) -> np.ndarray:
        '''
        Evaluate C_spiky * (h - r)^2 for an array of distances.

        Parameters:
        -----------
        r : np.ndarray
            Distances [px], any shape

        Returns:
        --------
        np.ndarray : Scalar gradient values, same shape
        '''
        h = self._scales.smoothingLength
        diff = np.where(r < h, h - r, 0.0)
        return self._scales.spikyGradient * diff * diff

    def viscosityLaplacianBatch(self, r: np.ndarray) -> np.ndarray:
        '''
        Evaluate C_visc * (h - r) for an array of distances.

        Parameters:
        -----------
        r : np.ndarray
            Distances [px], any shape

        Returns:
        --------
        np.ndarray : Laplacian values, same shape
        '''
        h = self._scales.smoothingLength
        diff = np.where(r < h, h - r, 0.0)
        return self._scales.viscosityLaplacian * diff


######################################################################
# -- Kernel Factory -- #
######################################################################

def createKernels(smoothingLength: float, poly6Exponent: int = 4) -> MullerKernels:
    '''
    Create the kernel set for a smoothing length.

    Parameters:
    -----------
    smoothingLength : float
        Support radius h [px]
    poly6Exponent : int
        Exponent k of h in the poly6 normalisation

    Returns:
    --------
    MullerKernels : Kernel set with cached constants

    Raises:
    -------
    ValueError : If the exponent is not 4 or 9, or h is not positive
    '''
    if poly6Exponent not in (4, 9):
        raise ValueError(f'Unknown poly6 exponent: {poly6Exponent}')
    return MullerKernels(smoothingLength, poly6Exponent)
