# -- Default Constants for the SPH Fluid Sandbox -- #

'''
Default physical and numerical constants for the real-time SPH sandbox.

Units are screen units: lengths in pixels, time in seconds, with the
y axis pointing down (gravity is positive y). The values are tuned
together; changing one usually means re-tuning the others.

References:
-----------
Muller, Charypar & Gross (2003) -- Particle-based fluid simulation
    for interactive applications

Sean Bowman [02/12/2026]
'''

#--------------------------------------------------------------------#
# -- Fluid Properties -- #
#--------------------------------------------------------------------#

# Rest density rho_0 of the equation of state
restDensity: float = 1000.0

# Gas constant k (stiffness): p = k * (rho - rho_0)
gasConstant: float = 100.0

# Viscosity coefficient mu
viscosity: float = 7000.0

# Gravity acceleration, screen coordinates (y down) [px/s^2]
gravityX: float = 0.0
gravityY: float = 981.0

#--------------------------------------------------------------------#
# -- Particle Properties -- #
#--------------------------------------------------------------------#

# Particle mass
particleMass: float = 5.0

# Particle radius used for collisions and walls [px]
particleRadius: float = 5.0

# Smoothing length h (kernel support radius) [px]
smoothingLength: float = 15.0

#--------------------------------------------------------------------#
# -- Stability Parameters -- #
#--------------------------------------------------------------------#

# Velocity cap; force magnitude is also capped at maxVelocity * rho
maxVelocity: float = 300.0

# Fraction of wall-normal velocity kept on a bounce
damping: float = 0.4

# Coefficient of restitution for particle-particle collisions
restitution: float = 0.8

# Pairs closer than this are treated as coincident
distanceEpsilon: float = 1e-4

# Floor for the render-normalisation maximum pressure
pressureFloor: float = 1e-4

# Poly6 normalisation exponent: C = 315 / (64 * pi * h^k)
poly6Exponent: int = 4

#--------------------------------------------------------------------#
# -- World and Timing -- #
#--------------------------------------------------------------------#

# Window 800x600 with a 20 px border padding and a 4 px border
worldLeft: float = 24.0
worldTop: float = 24.0
worldWidth: float = 752.0
worldHeight: float = 552.0

# Fixed frame time step [s]
frameTimeStep: float = 1.0 / 60.0

#--------------------------------------------------------------------#
# -- Seeding and Commands -- #
#--------------------------------------------------------------------#

# Grid seeding spacing [px] and jitter half-width [px]
gridSpacing: float = 12.0
gridJitter: float = 1.0

# Grid origin as a fraction of the world extent
gridOriginFraction: float = 0.25

# Upper bound (exclusive) of the random shake impulse magnitude
shakeMagnitude: float = 10000.0

# Velocity delta applied by one wind command
windForce: float = 10.0
