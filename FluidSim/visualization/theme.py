# -- Visualization Theme -- #

'''
Centralized dark-mode theme for all FluidSim Plotly figures.

Change colors or template here to restyle every plot at once.

Sean Bowman [02/12/2026]
'''

# Plotly template
TEMPLATE = 'plotly_dark'

# Series colors (Material Design, visible on dark backgrounds)
ENERGY_COLOR = '#42A5F5'
SPEED_COLOR = '#66BB6A'
PRESSURE_COLOR = '#EF5350'
COLLISION_COLOR = '#FFA726'

# Neutrals
REFERENCE_LINE = '#888888'
