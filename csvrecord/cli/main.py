"""
Main CLI entry point for csvrecord (Click implementation).
"""

import click
from typing import Optional

from csvrecord import __version__
from csvrecord.cli.commands import convert_layout, dump_rows, show_records
from csvrecord.core.config import Config
from csvrecord.core.exceptions import ConfigurationError
from csvrecord.utils.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, message='csvrecord v%(version)s')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='Path to YAML configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def main(ctx, config_path: Optional[str], verbose: bool):
    """csvrecord - Load and save typed records as CSV."""
    try:
        config = Config(config_path)
        config.validate()
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    logging_config = dict(config.logging_config)
    if verbose:
        logging_config['level'] = 'DEBUG'
    setup_logging(logging_config)

    ctx.obj = config


# Add commands
main.add_command(dump_rows)
main.add_command(show_records)
main.add_command(convert_layout)


if __name__ == '__main__':
    main()
