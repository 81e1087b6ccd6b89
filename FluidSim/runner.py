# -- Fluid Sandbox Runner -- #

'''
Command-line entry point for headless SPH sandbox runs.

Seeds a particle grid, steps the simulator for a fixed number of
frames at the real-time frame step, fires scripted shake / wind
commands at chosen frames, displays progress, and optionally
exports frame data and a diagnostics figure.

Usage:
    python -m FluidSim                                   # Small grid, 600 frames
    python -m FluidSim --preset standard --frames 1200
    python -m FluidSim --config configs/default.json --seed 7
    python -m FluidSim --shake-at 120 --wind right:40@240 --plot
    python -m FluidSim --no-export                       # Skip frame export

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import argparse
import time as timeModule
from dataclasses import dataclass

from FluidSim import constants as const
from FluidSim.sph.protocols import FluidConfig, Direction, RenderMode
from FluidSim.scenarios.particleGrid import GridSeedConfig, createGridScenario
from FluidSim.export.frameExporter import FrameExporter


#--------------------------------------------------------------------#
# -- Scripted Commands -- #
#--------------------------------------------------------------------#

@dataclass
class WindEvent:
    '''
    One scripted wind command.

    Parameters:
    -----------
    frame : int
        Frame index before whose update the command fires
    direction : Direction
        Wind direction
    force : float
        Velocity delta [px/s]
    '''

    frame: int
    direction: Direction
    force: float


def parseWindEvent(text: str) -> WindEvent:
    '''
    Parse a wind command of the form DIRECTION[:FORCE]@FRAME.

    Examples: 'right@120', 'up:25@300'.

    Raises:
    -------
    argparse.ArgumentTypeError : If the text is malformed
    '''
    try:
        command, frameText = text.split('@')
        if ':' in command:
            directionText, forceText = command.split(':')
            force = float(forceText)
        else:
            directionText, force = command, const.windForce
        return WindEvent(
            frame=int(frameText),
            direction=Direction.parse(directionText),
            force=force,
        )
    except ValueError as err:
        raise argparse.ArgumentTypeError(
            f'Invalid wind command {text!r} (expected DIRECTION[:FORCE]@FRAME): {err}'
        ) from err


#--------------------------------------------------------------------#
# -- CLI Argument Parser -- #
#--------------------------------------------------------------------#

def buildParser() -> argparse.ArgumentParser:
    '''Build the CLI argument parser.'''
    parser = argparse.ArgumentParser(
        description='FluidSim -- real-time SPH fluid sandbox (headless)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to JSON fluid configuration file',
    )
    parser.add_argument(
        '--preset', type=str, default='small',
        choices=['small', 'standard', 'large'],
        help='Grid preset (default: small)',
    )
    parser.add_argument(
        '--grid-size', type=int, default=None,
        help='Square grid size 1-35, overrides --preset',
    )
    parser.add_argument(
        '--frames', type=int, default=600,
        help='Number of frames to simulate (default: 600)',
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for jitter and shake (default: unseeded)',
    )
    parser.add_argument(
        '--shake-at', type=int, action='append', default=[],
        metavar='FRAME', help='Shake before this frame (repeatable)',
    )
    parser.add_argument(
        '--wind', type=parseWindEvent, action='append', default=[],
        metavar='DIR[:FORCE]@FRAME', help='Wind command (repeatable)',
    )
    parser.add_argument(
        '--render-mode', type=str, default='pressure',
        choices=[mode.value for mode in RenderMode],
        help='Render mode of exported frames (default: pressure)',
    )
    parser.add_argument(
        '--export-every', type=int, default=2,
        help='Export every Nth frame (default: 2)',
    )
    parser.add_argument(
        '--no-export', action='store_true',
        help='Skip frame data export',
    )
    parser.add_argument(
        '--plot', action='store_true',
        help='Write a Plotly diagnostics figure (HTML)',
    )
    parser.add_argument(
        '--output-dir', type=str, default='FluidSim/output',
        help='Output directory for exports (default: FluidSim/output)',
    )

    return parser


#--------------------------------------------------------------------#
# -- Runner Class -- #
#--------------------------------------------------------------------#

class FluidSimRunner:
    '''
    Runs a scripted sandbox session and stores results.

    Handles the full pipeline: scenario setup, frame loop with
    scripted commands and progress reporting, and optional export.
    '''

    def __init__(self) -> None:
        self._exporter: FrameExporter = FrameExporter()

    @property
    def exporter(self) -> FrameExporter:
        '''Frame exporter holding the recorded run.'''
        return self._exporter

    def run(
        self,
        gridConfig: GridSeedConfig,
        fluidConfig: FluidConfig | None = None,
        nFrames: int = 600,
        seed: int | None = None,
        shakeFrames: list[int] | None = None,
        windEvents: list[WindEvent] | None = None,
        renderMode: RenderMode = RenderMode.PRESSURE,
        exportEvery: int = 2,
        doExport: bool = True,
        doPlot: bool = False,
        exportDir: str = 'FluidSim/output',
        verbose: bool = True,
    ) -> dict:
        '''
        Run a sandbox session.

        Parameters:
        -----------
        gridConfig : GridSeedConfig
            Particle grid to seed
        fluidConfig : FluidConfig | None
            Simulation configuration (default sandbox if None)
        nFrames : int
            Number of update() calls
        seed : int | None
            Random seed for jitter and shake
        shakeFrames : list[int] | None
            Frames before which shake() is called
        windEvents : list[WindEvent] | None
            Scripted wind commands
        renderMode : RenderMode
            Render mode of recorded frames
        exportEvery : int
            Record every Nth frame (diagnostics are kept for all)
        doExport : bool
            Whether to write the frame JSON
        doPlot : bool
            Whether to write the diagnostics HTML figure
        exportDir : str
            Output directory
        verbose : bool
            Print progress to the console

        Returns:
        --------
        dict : Run summary

        Raises:
        -------
        ValueError : For a negative frame count or non-positive export stride
        '''
        if nFrames < 0:
            raise ValueError(f'Frame count must be non-negative, got {nFrames}')
        if exportEvery < 1:
            raise ValueError(f'Export stride must be >= 1, got {exportEvery}')

        out = print if verbose else (lambda *args, **kwargs: None)
        shakeSet = set(shakeFrames or [])
        windByFrame: dict[int, list[WindEvent]] = {}
        for event in windEvents or []:
            windByFrame.setdefault(event.frame, []).append(event)

        out()
        out('=' * 62)
        out('  FLUIDSIM -- SPH SANDBOX RUN')
        out('=' * 62)
        out()

        #--------------------------------------------------------------------#
        # Scenario Setup
        #--------------------------------------------------------------------#
        out('-' * 62)
        out('  SCENARIO SETUP')
        out('-' * 62)

        simulator = createGridScenario(gridConfig, fluidConfig, seed=seed)
        config = simulator.config
        scales = simulator.kernels.scales

        out(f'  Grid:              {gridConfig.rows:4d} x {gridConfig.cols:<4d}')
        out(f'  Particles:         {simulator.nParticles:8d}')
        out(f'  Grid Spacing:      {gridConfig.spacing:8.2f} px')
        out(f'  Particle Radius:   {config.particleRadius:8.2f} px')
        out(f'  Smoothing Length:  {config.smoothingLength:8.2f} px')
        out(f'  Particle Mass:     {config.particleMass:8.2f}')
        out(f'  Max Velocity:      {config.maxVelocity:8.1f} px/s')
        out(f'  Damping:           {config.damping:8.2f}')
        out(f'  Poly6 Scale:       {scales.poly6:12.4e}  (h^{scales.poly6Exponent})')
        out(f'  Frames:            {nFrames:8d}')
        out(f'  Seed:              {str(seed):>8}')
        out()

        # Record initial frame
        self._exporter.addFrame(simulator.currentState, simulator.snapshotForRender(renderMode))

        #--------------------------------------------------------------------#
        # Frame Loop
        #--------------------------------------------------------------------#
        out('-' * 62)
        out('  RUNNING SIMULATION')
        out('-' * 62)
        out()
        out(f'  {"Time":>8}  {"Frame":>8}  {"MaxVel":>8}  {"MaxPress":>10}  {"Collide":>8}  {"KE":>10}')
        out(f'  {"(s)":>8}  {"":>8}  {"(px/s)":>8}  {"":>10}  {"pairs":>8}  {"":>10}')
        out('  ' + '-' * 58)

        wallClockStart = timeModule.time()
        printInterval = max(1, nFrames // 20)
        nShakes = 0
        nWinds = 0

        for frame in range(nFrames):
            if frame in shakeSet:
                simulator.shake()
                nShakes += 1
            for event in windByFrame.get(frame, []):
                simulator.wind(event.direction, event.force)
                nWinds += 1

            state = simulator.update(const.frameTimeStep)

            if (frame + 1) % exportEvery == 0:
                self._exporter.addFrame(state, simulator.snapshotForRender(renderMode))
            else:
                self._exporter.addState(state)

            if (frame + 1) % printInterval == 0:
                out(
                    f'  {state.time:8.3f}  {state.step:8d}  {state.maxSpeed:8.2f}  '
                    f'{state.maxPressure:10.2f}  {state.nCollisions:8d}  '
                    f'{state.kineticEnergy:10.4g}'
                )

        wallClockSeconds = timeModule.time() - wallClockStart
        finalState = simulator.currentState

        out()
        out('  Simulation complete.')
        out(f'  Total frames:      {finalState.step:8d}')
        out(f'  Shakes / winds:    {nShakes:4d} / {nWinds:<4d}')
        out(f'  Wall-clock time:   {wallClockSeconds:8.2f} s')
        if wallClockSeconds > 0.0:
            out(f'  Frames per second: {finalState.step / wallClockSeconds:8.1f}')
        out(f'  Frames recorded:   {self._exporter.nFrames:8d}')
        out()

        #--------------------------------------------------------------------#
        # Export
        #--------------------------------------------------------------------#
        exportPath = None
        plotPath = None
        if doExport or doPlot:
            out('-' * 62)
            out('  EXPORTING')
            out('-' * 62)

        if doExport:
            exportPath = self._exporter.export(
                config=config,
                outputDir=exportDir,
                scenarioName=f'grid{gridConfig.rows}x{gridConfig.cols}',
            )
            out(f'  Frames:      {exportPath}')

        if doPlot:
            from FluidSim.visualization.diagnosticsPlots import (
                createDiagnosticsFigure, saveDiagnosticsFigure,
            )

            fig = createDiagnosticsFigure(self._exporter.history, maxVelocity=config.maxVelocity)
            plotPath = saveDiagnosticsFigure(fig, exportDir)
            out(f'  Diagnostics: {plotPath}')

        if doExport or doPlot:
            out()

        #--------------------------------------------------------------------#
        # Summary
        #--------------------------------------------------------------------#
        out('=' * 62)
        out('  RUN SUMMARY')
        out('=' * 62)
        out(f'  Final KE:          {finalState.kineticEnergy:12.4f}')
        out(f'  Max Velocity:      {finalState.maxSpeed:12.4f} px/s')
        out(f'  Max Pressure:      {finalState.maxPressure:12.4f}')
        out(f'  Min Density:       {finalState.minDensity:12.4f}')
        out('=' * 62)
        out()

        return {
            'finalState': finalState,
            'simulator': simulator,
            'wallClockSeconds': wallClockSeconds,
            'nFrames': self._exporter.nFrames,
            'exportPath': exportPath,
            'plotPath': plotPath,
        }


#--------------------------------------------------------------------#
# -- CLI Entry Point -- #
#--------------------------------------------------------------------#

def main(argv: list[str] | None = None) -> None:
    '''CLI entry point.'''
    parser = buildParser()
    args = parser.parse_args(argv)

    presets = {
        'small': GridSeedConfig.small,
        'standard': GridSeedConfig.standard,
        'large': GridSeedConfig.large,
    }

    try:
        fluidConfig = FluidConfig.fromJson(args.config) if args.config else FluidConfig.default()
        if args.grid_size is not None:
            gridConfig = GridSeedConfig.fromGridSize(args.grid_size)
        else:
            gridConfig = presets[args.preset]()
    except ValueError as err:
        parser.error(str(err))

    runner = FluidSimRunner()
    runner.run(
        gridConfig,
        fluidConfig,
        nFrames=args.frames,
        seed=args.seed,
        shakeFrames=args.shake_at,
        windEvents=args.wind,
        renderMode=RenderMode(args.render_mode),
        exportEvery=args.export_every,
        doExport=not args.no_export,
        doPlot=args.plot,
        exportDir=args.output_dir,
    )


if __name__ == '__main__':
    main()
