# -- Visualization Subpackage -- #

'''
Plotly-based offline diagnostics for sandbox runs.
'''

from FluidSim.visualization.diagnosticsPlots import createDiagnosticsFigure, saveDiagnosticsFigure
