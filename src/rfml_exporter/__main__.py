"""Command-line interface of the RFML exporter.

Options not given on the command line are read from `RAINFOREST_*`
environment variables.
"""

import logging
from pathlib import Path

from click import ClickException, argument, echo, group, option
from click import Path as PathParam

from rfml_exporter.errors import ExportError
from rfml_exporter.exporter import Exporter
from rfml_exporter.settings import ExportOptions

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'

FolderPath = PathParam(
    file_okay=False,
    writable=True,
    path_type=Path,
)


def setup_logging(debug: bool = False) -> None:
    """Configure logging of the command-line tools."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )


@group(help='Command-line utilities for Rainforest RFML files.')
def cli() -> None:
    """Root CLI group for RFML tools."""
    return None


@cli.command(
    name='export',
    help=(
        'Export remote tests into RFML files. '
        'Pass test identifiers to export only those tests.'
    ),
)
@option(
    '--token',
    help='Rainforest API client token [env: RAINFOREST_API_TOKEN].',
)
@option(
    '--test-folder',
    type=FolderPath,
    help='Directory receiving the RFML files [default: spec/rainforest].',
)
@option(
    '--embed-tests',
    is_flag=True,
    help='Reference embedded tests instead of inlining their steps.',
)
@option(
    '--api-url',
    help='Base URL of the Rainforest API.',
)
@option(
    '--debug',
    is_flag=True,
    help='Enable debug logging.',
)
@argument('tests', nargs=-1, type=int)
def export(**params: object) -> None:
    """Export remote tests.

    Only the parameters given on the command line override settings
    resolved from the environment.
    """
    options = ExportOptions(**{
        name: value
        for name, value in params.items()
        if value
    })

    setup_logging(options.debug)

    try:
        paths = Exporter(options).export()
    except ExportError as error:
        raise ClickException(str(error)) from error

    echo(f'Exported {len(paths)} tests into {options.test_folder}')


if __name__ == '__main__':
    cli()
