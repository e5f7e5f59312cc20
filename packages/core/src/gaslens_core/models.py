"""Value objects shared by the diff parser, the report renderer and the CLI."""

from __future__ import annotations

from dataclasses import dataclass

IMPROVEMENT = "improvement"
REGRESSION = "regression"


@dataclass(frozen=True)
class GasChange:
    """One function whose gas cost moved between the base and head snapshots."""

    type: str  # "improvement" | "regression"
    contract: str
    function: str
    old_gas: int | None
    new_gas: int
    gas_change: int


@dataclass(frozen=True)
class GasSummary:
    improvements: int
    regressions: int
    total_improvement: int
    total_regression: int
    net_change: int
    net_icon: str
    net_text: str


@dataclass(frozen=True)
class PRInfo:
    """Pull request details substituted into the report text."""

    base_branch: str = "base"
    head_branch: str = "head"
    commit_sha: str = ""
    repository: str = "owner/repo"
    server_host: str = "github.com"

    @property
    def short_sha(self) -> str:
        return self.commit_sha[:7] if self.commit_sha else ""

    @property
    def commit_url(self) -> str:
        return f"https://{self.server_host}/{self.repository}/commit/{self.commit_sha}"
