import json
import os
from pathlib import Path
from typing import Mapping, Optional
from urllib.parse import urlparse

import yaml

from gaslens_core.models import PRInfo

DEFAULT_CONFIG: dict = {
    "diff_file": "gas-diff.txt",
    "report_file": "gas-report.md",
    "table_limit": 20,
    "base_branch": "main",
    "head_branch": "feature",
    "commit_sha": "",
    "repository": "owner/repo",
    "server_host": "github.com",
    "artifact_name": "gas-report",
    "pr_data_file": "pr-data.txt",
    "comment_marker": "## 📊 Gas Report",
    "comment_type": "gas report",
}

# Environment variable -> config key. Only non-empty values are applied.
_ENV_KEYS = {
    "BASE_BRANCH": "base_branch",
    "HEAD_BRANCH": "head_branch",
    "HEAD_SHA": "commit_sha",
    "GITHUB_REPOSITORY": "repository",
}


def load_config(
    config_path: str = ".gaslens.yml",
    cli_overrides: Optional[dict] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .gaslens.yml in the current directory
      3. Actions environment variables (BASE_BRANCH, HEAD_SHA, ...)
      4. CLI argument overrides
    """
    env = os.environ if environ is None else environ
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    for env_name, key in _ENV_KEYS.items():
        if env.get(env_name):
            config[key] = env[env_name]

    server_url = env.get("GITHUB_SERVER_URL")
    if server_url:
        config["server_host"] = urlparse(server_url).netloc or config["server_host"]

    config["workspace"] = env.get("GITHUB_WORKSPACE") or os.getcwd()
    config["run_id"] = _triggering_run_id(env.get("GITHUB_EVENT_PATH"))

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    return config


def build_pr_info(config: dict) -> PRInfo:
    return PRInfo(
        base_branch=config.get("base_branch") or "base",
        head_branch=config.get("head_branch") or "head",
        commit_sha=config.get("commit_sha") or "",
        repository=config.get("repository") or "owner/repo",
        server_host=config.get("server_host") or "github.com",
    )


def _triggering_run_id(event_path: Optional[str]) -> Optional[int]:
    """Return workflow_run.id from the Actions event payload, if there is one."""
    if not event_path or not Path(event_path).exists():
        return None
    with open(event_path) as f:
        payload = json.load(f)
    run = payload.get("workflow_run") or {}
    return run.get("id")
