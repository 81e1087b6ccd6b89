# -- Simulation Frame Exporter -- #

'''
Exports sandbox frames as JSON for offline visualization.

Collects render snapshots (positions and normalised pressures) and
per-step diagnostics during a run and writes them to one compact
JSON file, along with the configuration used.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import json
import os
from datetime import datetime

import numpy as np

from FluidSim.sph.protocols import FluidConfig, RenderFrame, SimulationState


class FrameExporter:
    '''
    Collects and exports sandbox frame data as JSON.

    Usage:
        exporter = FrameExporter()
        # During the frame loop:
        exporter.addFrame(state, simulator.snapshotForRender())
        # After the run:
        exporter.export(config, outputDir='output')

    Output JSON format:
    {
        "meta": { "type": "fluidSim", "nFrames": 61, "created": "...", ... },
        "config": { "fluid": {...}, "particles": {...}, "world": {...} },
        "frames": [
            {
                "time": 0.0,
                "step": 0,
                "positions": [[x0, y0], [x1, y1], ...],
                "pressures": [s0, s1, ...]
            },
            ...
        ],
        "diagnostics": {
            "times": [...],
            "kineticEnergy": [...],
            "maxSpeed": [...],
            "maxPressure": [...],
            "nCollisions": [...]
        }
    }
    '''

    def __init__(self) -> None:
        self._frames: list[dict] = []
        self._history: dict[str, list[float]] = {
            'times': [],
            'kineticEnergy': [],
            'maxSpeed': [],
            'maxPressure': [],
            'nCollisions': [],
        }

    @property
    def nFrames(self) -> int:
        '''Number of collected frames.'''
        return len(self._frames)

    @property
    def history(self) -> dict[str, list[float]]:
        '''Diagnostics time series, one entry per recorded state.'''
        return self._history

    def addState(self, state: SimulationState) -> None:
        '''
        Record diagnostics only (no particle data).

        Parameters:
        -----------
        state : SimulationState
            Diagnostics after a step
        '''
        self._history['times'].append(round(state.time, 6))
        self._history['kineticEnergy'].append(round(state.kineticEnergy, 6))
        self._history['maxSpeed'].append(round(state.maxSpeed, 6))
        self._history['maxPressure'].append(round(state.maxPressure, 6))
        self._history['nCollisions'].append(state.nCollisions)

    def addFrame(self, state: SimulationState, frame: RenderFrame) -> None:
        '''
        Record a render frame together with its diagnostics.

        Parameters:
        -----------
        state : SimulationState
            Diagnostics after the step
        frame : RenderFrame
            Render snapshot taken after the same step
        '''
        self._frames.append({
            'time': round(state.time, 6),
            'step': state.step,
            'positions': np.round(frame.positions, 4).tolist(),
            'pressures': np.round(frame.normalizedPressures, 4).tolist(),
        })
        self.addState(state)

    def export(
        self,
        config: FluidConfig,
        outputDir: str = 'FluidSim/output',
        scenarioName: str = 'grid',
    ) -> str:
        '''
        Write all collected frames to a JSON file.

        Parameters:
        -----------
        config : FluidConfig
            Configuration of the run, stored as metadata
        outputDir : str
            Output directory path (created if missing)
        scenarioName : str
            Scenario name for the filename

        Returns:
        --------
        str : Path to the exported JSON file
        '''
        os.makedirs(outputDir, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        filename = f'fluidSim_{scenarioName}_{timestamp}.json'
        filepath = os.path.join(outputDir, filename)

        output = {
            'meta': {
                'type': 'fluidSim',
                'scenario': scenarioName,
                'nFrames': len(self._frames),
                'nParticles': len(self._frames[0]['positions']) if self._frames else 0,
                'created': datetime.now().isoformat(),
            },
            'config': config.toDict(),
            'frames': self._frames,
            'diagnostics': self._history,
        }

        with open(filepath, 'w') as f:
            json.dump(output, f, indent=None, separators=(',', ':'))

        return filepath
