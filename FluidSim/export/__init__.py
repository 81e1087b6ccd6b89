# -- Export Package -- #

'''
Data export utilities for SPH sandbox runs.

Exports render frames and diagnostics as JSON for offline
inspection and plotting.

Sean Bowman [02/12/2026]
'''

from FluidSim.export.frameExporter import FrameExporter
