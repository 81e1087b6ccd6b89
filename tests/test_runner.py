# -- Runner Tests -- #

'''
Headless runner, scripted command parsing and the CLI entry point.

Sean Bowman [02/12/2026]
'''

import argparse
import os

import pytest

from FluidSim.sph.protocols import Direction, RenderMode
from FluidSim.scenarios.particleGrid import GridSeedConfig
from FluidSim.runner import FluidSimRunner, WindEvent, parseWindEvent, buildParser, main


def testParseWindEvent():
    event = parseWindEvent('up:25@300')
    assert event == WindEvent(frame=300, direction=Direction.UP, force=25.0)

    event = parseWindEvent('right@12')
    assert event.direction is Direction.RIGHT
    assert event.force == 10.0


@pytest.mark.parametrize('text', ['right', 'north@10', 'left:abc@5', 'up@x'])
def testParseWindEventRejectsMalformed(text):
    with pytest.raises(argparse.ArgumentTypeError):
        parseWindEvent(text)


def testParserDefaults():
    args = buildParser().parse_args([])

    assert args.preset == 'small'
    assert args.frames == 600
    assert args.shake_at == []
    assert args.wind == []
    assert args.render_mode == 'pressure'
    assert not args.no_export


def testRunWithoutExport():
    runner = FluidSimRunner()

    result = runner.run(
        GridSeedConfig(rows=3, cols=3),
        nFrames=10,
        seed=1,
        shakeFrames=[2],
        windEvents=[WindEvent(frame=5, direction=Direction.LEFT, force=20.0)],
        renderMode=RenderMode.PLAIN,
        exportEvery=5,
        doExport=False,
        verbose=False,
    )

    assert result['finalState'].step == 10
    assert result['finalState'].nParticles == 9
    assert result['exportPath'] is None
    # Initial frame plus frames 5 and 10
    assert result['nFrames'] == 3
    assert len(runner.exporter.history['times']) == 11


def testRunRejectsBadArguments():
    runner = FluidSimRunner()
    with pytest.raises(ValueError):
        runner.run(GridSeedConfig.small(), nFrames=-1, verbose=False)
    with pytest.raises(ValueError):
        runner.run(GridSeedConfig.small(), exportEvery=0, verbose=False)


def testMainExportsFramesAndPlot(tmp_path, capsys):
    main([
        '--grid-size', '3', '--frames', '6', '--seed', '4',
        '--shake-at', '1', '--wind', 'down:5@3',
        '--plot', '--output-dir', str(tmp_path),
    ])

    written = sorted(os.listdir(tmp_path))
    assert any(name.startswith('fluidSim_grid3x3_') for name in written)
    assert 'diagnostics.html' in written
    assert 'RUN SUMMARY' in capsys.readouterr().out


def testMainRejectsGridSizeOutOfRange():
    with pytest.raises(SystemExit):
        main(['--grid-size', '99', '--no-export'])
