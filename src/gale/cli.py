"""Command-line entry point for Gale."""

import logging
import sys
from dataclasses import replace
from pathlib import Path

import click

from .config import Config
from .session import Session
from .ui import Ui, make_console


def setup_logging(level: str) -> None:
    """Send log records to stderr so they never mix with task output."""
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@click.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Path to config file")
@click.option("--data-file", type=click.Path(dir_okay=False, path_type=Path),
              help="Task file to use instead of the configured one")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(package_name="gale-cli")
def main(config_path, data_file, verbose):
    """Gale - a breezy command-line task tracker.

    Reads commands from standard input, one per line:

    \b
      todo [priority] DESCRIPTION
      deadline [priority] DESCRIPTION /by DATE
      event [priority] DESCRIPTION /from DATE /to DATE
      list | mark N | unmark N | delete N | find KEYWORD | bye

    DATE is 'yyyy-MM-dd HH:mm' or 'd/M/yyyy HH:mm'; priority is high, medium or low.
    """
    config = Config.reload(config_path)
    if data_file:
        config = replace(config, data_file=str(data_file))
    setup_logging("DEBUG" if verbose else config.log_level)

    ui = Ui(make_console(no_color=config.no_color))
    session = Session.from_config(config, ui)
    session.run(click.get_text_stream("stdin"))


if __name__ == "__main__":
    main()
