from __future__ import annotations

import logging
from pathlib import Path
import types

import typer

from common.config_setup import ConfigError, Config_settings
from common.utilities import setup_logger
from definitions import DEFAULT_CONFIG_PATH
from engine.errors import ConversionError
from engine.pipeline import run_conversion
from engine.reporting import build_validation_summary, format_validation_summary
from inputs.frames_api import load_frames

app = typer.Typer(help='Convert EV sale targets into GCAM transport coefficient tables and XML.')

logger = logging.getLogger(__name__)


def _fail(stage: str, exc: Exception, code: int) -> None:
    """Log and print a stage failure, then exit with ``code``."""

    logger.error('%s failed: %s', stage, exc)
    typer.secho(f'{stage} failed: {exc}', err=True, fg=typer.colors.RED)
    raise typer.Exit(code)


def _load_settings(config: Path, input_dir: Path | None, out: Path | None, debug: bool) -> Config_settings:
    args = types.SimpleNamespace(input_dir=input_dir, output_dir=out, debug=debug)
    return Config_settings(config_path=config, args=args)


@app.command()
def main(
    config: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        '--config',
        '-c',
        help='Path to the TOML configuration file (defaults to config/run_config.toml).',
    ),
    input_dir: Path | None = typer.Option(
        None,
        '--input-dir',
        '-i',
        help='Directory holding EVTarget.csv and the travel/load factor assumptions.',
    ),
    out: Path | None = typer.Option(
        None,
        '--out',
        '-o',
        help='Directory where the CSV tables, XML document and run.log are written.',
    ),
    debug: bool = typer.Option(False, '--debug', help='Set logging level to DEBUG.'),
) -> None:
    """Run the conversion end-to-end and write both tables and the XML document."""

    try:
        settings = _load_settings(config, input_dir, out, debug)
        setup_logger(settings)
    except (ConfigError, OSError) as exc:
        typer.secho(f'Failed to load configuration: {exc}', err=True, fg=typer.colors.RED)
        raise typer.Exit(1)

    logger.info('Starting Logging')
    logger.debug('Logging level set to DEBUG')
    logger.info(f'Inputs read from: {settings.INPUT_ROOT}')
    logger.info(f'Outputs written to: {settings.OUTPUT_ROOT}')

    try:
        frames = load_frames(settings.target_path, settings.assumptions_path)
    except ConversionError as exc:
        _fail('Loading inputs', exc, 2)

    try:
        outputs = run_conversion(frames, **settings.conversion_options())
    except ConversionError as exc:
        _fail('Conversion', exc, 3)

    try:
        written = outputs.to_files(
            settings.OUTPUT_ROOT,
            coef_filename=settings.coef_file,
            res_filename=settings.res_file,
            xml_filename=settings.xml_file,
            na_rep=settings.csv_na_rep,
        )
    except ConversionError as exc:
        _fail('Writing outputs', exc, 4)

    try:
        summary = build_validation_summary(frames, outputs, written)
        for line in format_validation_summary(summary):
            typer.echo(line)
    except Exception as exc:  # pragma: no cover - reporting never invalidates written outputs
        logger.warning('Validation summary failed: %s', exc)

    typer.secho(f'Saved EV target outputs to {settings.OUTPUT_ROOT}', fg=typer.colors.GREEN)
    logger.info('Ending Logging')


if __name__ == '__main__':  # pragma: no cover - CLI entry point
    app()
