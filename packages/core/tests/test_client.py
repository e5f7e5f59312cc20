"""Tests for the PyGithub-backed actions client."""

from unittest.mock import MagicMock

import pytest
import requests

from gaslens_core.gh.base import Artifact
from gaslens_core.gh.client import GithubActionsClient


def _gh_comment(id, body, login="github-actions[bot]", type="Bot"):
    c = MagicMock()
    c.id = id
    c.body = body
    c.user.login = login
    c.user.type = type
    return c


@pytest.fixture
def repo():
    return MagicMock(url="https://api.github.com/repos/acme/vault")


@pytest.fixture
def client(repo):
    gh = MagicMock()
    gh.get_repo.return_value = repo
    return GithubActionsClient("acme/vault", "tok", gh=gh)


class TestListArtifacts:
    def test_maps_workflow_run_artifacts(self, client, repo):
        raw = MagicMock(id=5, archive_download_url="https://example/zip")
        raw.name = "gas-report"
        repo.get_workflow_run.return_value.get_artifacts.return_value = [raw]

        artifacts = client.list_artifacts(123)

        repo.get_workflow_run.assert_called_once_with(123)
        assert artifacts == [Artifact(id=5, name="gas-report", archive_download_url="https://example/zip")]


class TestDownloadArtifact:
    def test_returns_archive_bytes(self, client, mocker):
        response = MagicMock(content=b"PK\x03\x04")
        mock_get = mocker.patch("gaslens_core.gh.client.requests.get", return_value=response)

        data = client.download_artifact(Artifact(5, "gas-report", "https://example/zip"))

        assert data == b"PK\x03\x04"
        assert mock_get.call_args.args == ("https://example/zip",)
        assert mock_get.call_args.kwargs["headers"]["Authorization"] == "Bearer tok"
        response.raise_for_status.assert_called_once()

    def test_http_error_propagates(self, client, mocker):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("410 Gone")
        mocker.patch("gaslens_core.gh.client.requests.get", return_value=response)

        with pytest.raises(requests.HTTPError):
            client.download_artifact(Artifact(5, "gas-report", "https://example/zip"))


class TestComments:
    def test_list_comments_maps_users(self, client, repo):
        repo.get_issue.return_value.get_comments.return_value = [
            _gh_comment(1, "hi", login="alice", type="User"),
            _gh_comment(2, None),
        ]

        comments = client.list_comments(7)

        repo.get_issue.assert_called_with(7)
        assert comments[0].user_login == "alice"
        assert comments[0].user_type == "User"
        assert comments[1].body == ""
        assert comments[1].user_type == "Bot"

    def test_create_comment(self, client, repo):
        repo.get_issue.return_value.create_comment.return_value = _gh_comment(11, "body")

        created = client.create_comment(7, "body")

        repo.get_issue.return_value.create_comment.assert_called_once_with("body")
        assert created.id == 11

    def test_update_listed_comment_edits_in_place(self, client, repo, mocker):
        listed = _gh_comment(3, "old")
        repo.get_issue.return_value.get_comments.return_value = [listed]
        mock_patch = mocker.patch("gaslens_core.gh.client.requests.patch")

        client.list_comments(7)
        client.update_comment(3, "new")

        listed.edit.assert_called_once_with("new")
        mock_patch.assert_not_called()

    def test_update_unlisted_comment_uses_rest(self, client, mocker):
        mock_patch = mocker.patch("gaslens_core.gh.client.requests.patch")

        client.update_comment(99, "new")

        assert mock_patch.call_args.args == ("https://api.github.com/repos/acme/vault/issues/comments/99",)
        assert mock_patch.call_args.kwargs["json"] == {"body": "new"}
        mock_patch.return_value.raise_for_status.assert_called_once()
