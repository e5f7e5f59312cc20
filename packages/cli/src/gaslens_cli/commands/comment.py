"""comment command — publish a generated report as a single PR comment."""

from __future__ import annotations

import click
from rich.console import Console

from gaslens_core.gh.client import GithubActionsClient
from gaslens_core.gh.workflow import download_artifact, parse_pr_number, post_or_update_comment, read_report

console = Console()


@click.command("comment")
@click.option("--run-id", type=int, default=None, help="Workflow run that uploaded the artifact. [default: workflow_run.id from the event payload]")
@click.option("--repo", default=None, help="GitHub repository in owner/name format. [default: GITHUB_REPOSITORY]")
@click.option("--artifact", "artifact_name", default=None, help="Artifact name. [default: gas-report]")
@click.option("--data-file", default=None, help="File inside the artifact holding PR_NUMBER=<n>. [default: pr-data.txt]")
@click.option("--report-file", default=None, help="Report file inside the artifact. [default: gas-report.md]")
@click.option("--marker", default=None, help="Substring identifying the bot comment to update.")
@click.option("--type", "comment_type", default=None, help="Label used in log output. [default: gas report]")
@click.pass_context
def comment_cmd(
    ctx,
    run_id: int | None,
    repo: str | None,
    artifact_name: str | None,
    data_file: str | None,
    report_file: str | None,
    marker: str | None,
    comment_type: str | None,
):
    """Download a report artifact and post or update its PR comment.

    Meant for a `workflow_run` job: the triggering run uploads the report and
    a PR_NUMBER=<n> data file; this command fetches both and keeps exactly
    one bot comment per marker on the pull request.

    \b
    Required environment variables:
      GITHUB_TOKEN   Token with pull-requests: write (or use gh CLI)
    """
    from gaslens_cli.auth import resolve_github_token

    config = ctx.obj["config"]
    run_id = run_id or config.get("run_id")
    repo = repo or config["repository"]
    artifact_name = artifact_name or config["artifact_name"]
    workspace = config["workspace"]

    if not run_id:
        raise click.UsageError("No workflow run id. Pass --run-id or run from a workflow_run event.")

    token = resolve_github_token()
    if not token:
        raise click.UsageError("No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.")

    client = GithubActionsClient(repo, token)

    if not download_artifact(client, int(run_id), artifact_name, workspace):
        console.print(f"[yellow]No {artifact_name} artifact on run {run_id}; nothing to post.[/yellow]")
        return

    pr_number = parse_pr_number(data_file or config["pr_data_file"], workspace)
    if pr_number is None:
        console.print("[yellow]Could not determine the pull request number; nothing to post.[/yellow]")
        return

    body = read_report(report_file or config["report_file"], workspace)
    if body is None:
        console.print("[yellow]Report file missing from artifact; nothing to post.[/yellow]")
        return

    outcome = post_or_update_comment(
        client,
        pr_number,
        body,
        marker or config["comment_marker"],
        comment_type or config["comment_type"],
    )
    console.print(f"[green]Comment {outcome} on PR #{pr_number}.[/green]")
