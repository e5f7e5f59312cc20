"""Minimal GitHub API surface used by the artifact/comment helpers.

The helpers in gaslens_core.gh.workflow depend on BaseActionsClient, never on
PyGithub directly, so tests can hand them a stub and other transports can be
plugged in without touching the helper logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class Artifact:
    id: int
    name: str
    archive_download_url: str = ""


@dataclass
class IssueComment:
    id: int
    body: str
    user_login: str = ""
    user_type: str = ""


class BaseActionsClient(ABC):
    """Artifact and issue-comment operations for a single repository."""

    @abstractmethod
    def list_artifacts(self, run_id: int) -> list[Artifact]:
        """Return the artifacts uploaded by a workflow run."""

    @abstractmethod
    def download_artifact(self, artifact: Artifact) -> bytes:
        """Return the artifact's zip archive as raw bytes."""

    @abstractmethod
    def list_comments(self, pr_number: int) -> list[IssueComment]:
        """Return the conversation comments on a pull request, oldest first."""

    @abstractmethod
    def create_comment(self, pr_number: int, body: str) -> IssueComment:
        """Post a new conversation comment on a pull request."""

    @abstractmethod
    def update_comment(self, comment_id: int, body: str) -> None:
        """Replace the body of an existing comment."""
