"""Helpers for the workflow_run job that publishes a report to its pull request.

The job that builds the report runs on the PR's (possibly forked) code and
cannot write to the PR. It uploads the report plus a small data file holding
``PR_NUMBER=<n>`` as an artifact; a privileged workflow_run job then uses
these helpers to fetch that artifact and post or refresh a single comment.

"Not found" conditions are logged and reported as False/None so the caller
decides whether they are fatal. API errors propagate.
"""

from __future__ import annotations

import io
import logging
import re
import zipfile
from pathlib import Path

from gaslens_core.gh.base import BaseActionsClient, IssueComment

logger = logging.getLogger(__name__)

_PR_NUMBER_RE = re.compile(r"PR_NUMBER=(\d+)")


def download_artifact(client: BaseActionsClient, run_id: int, artifact_name: str, workspace: str | Path) -> bool:
    """Download the named artifact of a workflow run and extract it into ``workspace``.

    Returns False (after logging the available names) if the run has no such artifact.
    """
    logger.info("Fetching artifacts from workflow run %s...", run_id)
    artifacts = client.list_artifacts(run_id)
    artifact = next((a for a in artifacts if a.name == artifact_name), None)

    if artifact is None:
        logger.warning("No %s artifact found", artifact_name)
        logger.info("Available artifacts: %s", ", ".join(a.name for a in artifacts))
        return False

    logger.info("Found %s artifact, downloading...", artifact_name)
    data = client.download_artifact(artifact)

    workspace = Path(workspace)
    workspace.mkdir(parents=True, exist_ok=True)
    archive_path = workspace / f"{artifact_name}.zip"
    archive_path.write_bytes(data)

    logger.info("Artifact downloaded, extracting...")
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        archive.extractall(workspace)

    return True


def parse_pr_number(data_file: str, workspace: str | Path) -> int | None:
    """Read ``PR_NUMBER=<n>`` from a data file in the workspace."""
    data_path = Path(workspace) / data_file
    if not data_path.exists():
        logger.warning("%s not found", data_file)
        return None

    content = data_path.read_text(encoding="utf-8")
    match = _PR_NUMBER_RE.search(content)
    if not match:
        logger.warning("Could not find PR number in %s", data_file)
        logger.info("File contents: %s", content)
        return None

    return int(match.group(1))


def read_report(report_file: str, workspace: str | Path) -> str | None:
    report_path = Path(workspace) / report_file
    if not report_path.exists():
        logger.warning("%s not found", report_file)
        return None
    return report_path.read_text(encoding="utf-8")


def is_bot_comment(comment: IssueComment) -> bool:
    return comment.user_type == "Bot" or comment.user_login.endswith("[bot]")


def find_bot_comment(client: BaseActionsClient, pr_number: int, marker: str) -> IssueComment | None:
    """Return the first bot-authored comment whose body contains ``marker``, or None."""
    logger.info("Checking for existing comments...")
    for comment in client.list_comments(pr_number):
        if is_bot_comment(comment) and marker in comment.body:
            return comment
    return None


def post_or_update_comment(
    client: BaseActionsClient,
    pr_number: int,
    body: str,
    marker: str,
    comment_type: str,
) -> str:
    """Refresh the existing bot comment identified by ``marker``, or create one.

    Returns "updated" or "created". Only the first matching comment is ever
    edited, so repeated runs keep a single comment per marker.
    """
    existing = find_bot_comment(client, pr_number, marker)

    if existing is not None:
        logger.info("Updating existing %s comment (ID: %d)...", comment_type, existing.id)
        client.update_comment(existing.id, body)
        logger.info("%s comment updated successfully!", comment_type)
        return "updated"

    logger.info("Creating new %s comment...", comment_type)
    client.create_comment(pr_number, body)
    logger.info("%s comment posted successfully!", comment_type)
    return "created"
