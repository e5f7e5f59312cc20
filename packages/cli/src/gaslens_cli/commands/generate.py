"""generate command — render gas-diff.txt into gas-report.md."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from gaslens_core.config import build_pr_info
from gaslens_core.gas.report import compose_report

console = Console()


@click.command("generate")
@click.option("--diff-file", default=None, help="Diff produced by `forge snapshot --diff`. [default: gas-diff.txt]")
@click.option("--output", "report_file", default=None, help="Where to write the Markdown report. [default: gas-report.md]")
@click.pass_context
def generate_cmd(ctx, diff_file: str | None, report_file: str | None):
    """Generate a Markdown gas report from a forge snapshot diff.

    \b
    Environment variables (all optional):
      BASE_BRANCH        Base branch name shown in the report (default: main)
      HEAD_BRANCH        Head branch name shown in the report (default: feature)
      HEAD_SHA           Commit linked from the report footer
      GITHUB_REPOSITORY  owner/name used for the commit link
    """
    config = ctx.obj["config"]
    diff_path = Path(diff_file or config["diff_file"])
    report_path = Path(report_file or config["report_file"])

    if not diff_path.exists():
        raise click.ClickException(f"{diff_path} not found")

    diff_output = diff_path.read_text(encoding="utf-8")
    report = compose_report(diff_output, build_pr_info(config), table_limit=config.get("table_limit", 20))
    report_path.write_text(report, encoding="utf-8")

    console.print(f"[green]Gas report generated successfully: {report_path}[/green]")
