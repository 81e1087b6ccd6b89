# -- Run Diagnostics Plots -- #

'''
Multi-panel Plotly figure of a sandbox run's diagnostics history.

Plots kinetic energy, maximum speed (against the speed cap),
maximum pressure and collision count over simulated time, from
the history collected by FrameExporter.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import os

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from FluidSim.visualization import theme


def createDiagnosticsFigure(
    history: dict[str, list[float]],
    maxVelocity: float | None = None,
    title: str = 'FluidSim Run Diagnostics',
) -> go.Figure:
    '''
    Create a 4-panel diagnostics figure.

    Layout:
        Row 1: Kinetic Energy  |  Max Speed
        Row 2: Max Pressure    |  Collisions per Step

    Parameters:
    -----------
    history : dict[str, list[float]]
        Time series keyed 'times', 'kineticEnergy', 'maxSpeed',
        'maxPressure', 'nCollisions' (FrameExporter.history)
    maxVelocity : float | None
        Speed cap drawn as a reference line on the speed panel
    title : str
        Figure title

    Returns:
    --------
    go.Figure : Plotly figure with 4 subplots
    '''
    times = history['times']

    fig = make_subplots(
        rows=2, cols=2,
        subplot_titles=(
            'Kinetic Energy', 'Max Speed [px/s]',
            'Max Pressure', 'Collisions per Step',
        ),
        vertical_spacing=0.12,
        horizontal_spacing=0.08,
    )

    fig.add_trace(go.Scatter(x=times, y=history['kineticEnergy'], mode='lines',
                             line=dict(color=theme.ENERGY_COLOR, width=2), name='KE'),
                  row=1, col=1)

    fig.add_trace(go.Scatter(x=times, y=history['maxSpeed'], mode='lines',
                             line=dict(color=theme.SPEED_COLOR, width=2), name='max |v|'),
                  row=1, col=2)
    if maxVelocity is not None and times:
        fig.add_trace(go.Scatter(x=[times[0], times[-1]], y=[maxVelocity, maxVelocity],
                                 mode='lines', name='speed cap',
                                 line=dict(color=theme.REFERENCE_LINE, width=1, dash='dash')),
                      row=1, col=2)

    fig.add_trace(go.Scatter(x=times, y=history['maxPressure'], mode='lines',
                             line=dict(color=theme.PRESSURE_COLOR, width=2), name='max p'),
                  row=2, col=1)

    fig.add_trace(go.Bar(x=times, y=history['nCollisions'],
                         marker=dict(color=theme.COLLISION_COLOR), name='collisions'),
                  row=2, col=2)

    for col in (1, 2):
        fig.update_xaxes(title_text='Time [s]', row=2, col=col)

    fig.update_layout(
        title=title,
        template=theme.TEMPLATE,
        height=800,
        showlegend=False,
    )

    return fig


def saveDiagnosticsFigure(fig: go.Figure, outputDir: str, name: str = 'diagnostics') -> str:
    '''
    Write a figure to a standalone HTML file.

    Parameters:
    -----------
    fig : go.Figure
        Figure to write
    outputDir : str
        Output directory (created if missing)
    name : str
        File name without extension

    Returns:
    --------
    str : Path to the HTML file
    '''
    os.makedirs(outputDir, exist_ok=True)
    filepath = os.path.join(outputDir, f'{name}.html')
    fig.write_html(filepath, include_plotlyjs='cdn')
    return filepath
