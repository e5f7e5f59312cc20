"""CLI entry point for gaslens.

Commands:
  generate — turn gas-diff.txt into gas-report.md
  comment  — post or refresh the report comment from a workflow_run job
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from gaslens_cli.commands.comment import comment_cmd
from gaslens_cli.commands.generate import generate_cmd

err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group(invoke_without_command=True)
@click.version_option(
    version=importlib.metadata.version("gaslens"),
    prog_name="gaslens",
)
@click.option(
    "--config",
    "config_path",
    default=".gaslens.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="GASLENS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Forge gas report generator and PR commenter for GitHub Actions."""
    from gaslens_core.config import load_config

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_usage(), err=True)
        ctx.exit(1)

    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_path)


main.add_command(generate_cmd)
main.add_command(comment_cmd)
