from __future__ import annotations

import logging

import requests
from github import Github

from gaslens_core.gh.base import Artifact, BaseActionsClient, IssueComment

logger = logging.getLogger(__name__)

_TIMEOUT = 60


def _to_comment(comment) -> IssueComment:
    user = comment.user
    return IssueComment(
        id=comment.id,
        body=comment.body or "",
        user_login=getattr(user, "login", "") or "",
        user_type=getattr(user, "type", "") or "",
    )


class GithubActionsClient(BaseActionsClient):
    """BaseActionsClient backed by PyGithub.

    Artifact archives and edits of comments that were not listed first go
    through requests, since PyGithub has no call for either. Failures
    propagate unchanged; there is no retry layer.
    """

    def __init__(self, repo_name: str, token: str, gh: Github | None = None):
        self._token = token
        self._repo = (gh or Github(token)).get_repo(repo_name)
        self._comments: dict[int, object] = {}

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self._token}", "Accept": "application/vnd.github+json"}

    def list_artifacts(self, run_id: int) -> list[Artifact]:
        run = self._repo.get_workflow_run(run_id)
        return [Artifact(id=a.id, name=a.name, archive_download_url=a.archive_download_url) for a in run.get_artifacts()]

    def download_artifact(self, artifact: Artifact) -> bytes:
        logger.debug("Downloading artifact %d from %s", artifact.id, artifact.archive_download_url)
        response = requests.get(artifact.archive_download_url, headers=self._headers(), timeout=_TIMEOUT)
        response.raise_for_status()
        return response.content

    def list_comments(self, pr_number: int) -> list[IssueComment]:
        comments = list(self._repo.get_issue(pr_number).get_comments())
        self._comments.update((c.id, c) for c in comments)
        return [_to_comment(c) for c in comments]

    def create_comment(self, pr_number: int, body: str) -> IssueComment:
        comment = self._repo.get_issue(pr_number).create_comment(body)
        self._comments[comment.id] = comment
        return _to_comment(comment)

    def update_comment(self, comment_id: int, body: str) -> None:
        comment = self._comments.get(comment_id)
        if comment is not None:
            comment.edit(body)
            return
        response = requests.patch(
            f"{self._repo.url}/issues/comments/{comment_id}",
            headers=self._headers(),
            json={"body": body},
            timeout=_TIMEOUT,
        )
        response.raise_for_status()
