"""CLI entry point for prlabeler.

Commands:
  run       — GitHub Action entry point: label the PR named by the triggering event
  evaluate  — compute labels for a live PR from your terminal
  check     — validate a local labeler config file
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.logging import RichHandler

from prlabeler_cli.commands.check import check_cmd
from prlabeler_cli.commands.evaluate import evaluate_cmd
from prlabeler_cli.commands.run import run_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("prlabeler"),
    prog_name="prlabeler",
)
@click.option("--verbose", "-v", is_flag=True, help="Log rule evaluation details.")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """Label pull requests from declarative rules."""
    ctx.ensure_object(dict)
    _configure_logging(verbose)


main.add_command(run_cmd)
main.add_command(evaluate_cmd)
main.add_command(check_cmd)
