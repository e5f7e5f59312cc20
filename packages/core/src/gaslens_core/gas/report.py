"""Markdown gas report: summary statistics, change table and footer."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Sequence

from gaslens_core.gas.diff import parse_gas_diff
from gaslens_core.models import IMPROVEMENT, REGRESSION, GasChange, GasSummary, PRInfo

logger = logging.getLogger(__name__)

REPORT_HEADER = "## 📊 Gas Report"
DEFAULT_TABLE_LIMIT = 20

_ICON_IMPROVEMENT = "🟢"
_ICON_REGRESSION = "🔴"
_ICON_NEUTRAL = "⚪"

_TABLE_HEADER = "| Contract | Function | Before | After | Change |\n|----------|----------|--------|-------|--------|"

_ABOUT_SECTION = """<details>
<summary>ℹ️ About this report</summary>

This report compares gas usage between the base branch and this PR using `forge snapshot`.
- 🟢 indicates a gas improvement (reduction)
- 🔴 indicates a gas regression (increase)
- Functions not shown have unchanged gas costs

To run this locally:
```bash
# Generate snapshot for current branch
forge snapshot

# Compare with another branch
git checkout main
forge snapshot --diff .gas-snapshot
```

</details>"""


def format_gas_value(value: int) -> str:
    """Group digits in threes: 1234567 -> "1,234,567"."""
    return f"{value:,}"


def percentage_change(old: int | None, new: int) -> str:
    if not old:
        return "N/A"
    return f"{(new - old) / old * 100:.2f}%"


def summarize(changes: Sequence[GasChange]) -> GasSummary:
    """Aggregate improvement/regression counts and totals for the summary block."""
    improvements = [c for c in changes if c.type == IMPROVEMENT]
    regressions = [c for c in changes if c.type == REGRESSION]

    total_improvement = sum(abs(c.gas_change) for c in improvements)
    total_regression = sum(abs(c.gas_change) for c in regressions)
    net_change = total_regression - total_improvement

    if net_change > 0:
        net_icon, net_text = _ICON_REGRESSION, f"+{format_gas_value(net_change)} gas"
    elif net_change < 0:
        net_icon, net_text = _ICON_IMPROVEMENT, f"{format_gas_value(net_change)} gas"
    else:
        net_icon, net_text = _ICON_NEUTRAL, "No change"

    return GasSummary(
        improvements=len(improvements),
        regressions=len(regressions),
        total_improvement=total_improvement,
        total_regression=total_regression,
        net_change=net_change,
        net_icon=net_icon,
        net_text=net_text,
    )


def _format_row(change: GasChange) -> str:
    icon = _ICON_IMPROVEMENT if change.type == IMPROVEMENT else _ICON_REGRESSION
    sign = "+" if change.gas_change > 0 else ""
    before = format_gas_value(change.old_gas) if change.old_gas else "New"
    after = format_gas_value(change.new_gas)
    diff = f"{icon} {sign}{format_gas_value(change.gas_change)}"
    if change.old_gas:
        diff += f" ({percentage_change(change.old_gas, change.new_gas)})"
    return f"| {change.contract} | {change.function}() | {before} | {after} | {diff} |"


def render_table(changes: Sequence[GasChange], limit: int = DEFAULT_TABLE_LIMIT) -> str:
    """Render the biggest changes first as a Markdown table, truncated to ``limit`` rows."""
    if not changes:
        return "No gas changes detected in individual functions."

    # sorted() is stable, so equal deltas keep their diff order.
    ordered = sorted(changes, key=lambda c: abs(c.gas_change), reverse=True)

    lines = [_TABLE_HEADER]
    lines.extend(_format_row(c) for c in ordered[:limit])
    table = "\n".join(lines) + "\n"

    if len(ordered) > limit:
        table += f"\n*Showing top {limit} changes out of {len(ordered)} total.*"
    return table


def render_about() -> str:
    return _ABOUT_SECTION


def render_footer(pr_info: PRInfo, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    timestamp = format_datetime(now.astimezone(timezone.utc), usegmt=True)
    commit_link = f"[`{pr_info.short_sha or 'unknown'}`]({pr_info.commit_url})"
    return f"*Last updated: {timestamp}* for commit {commit_link}"


def render_no_changes(pr_info: PRInfo, now: datetime | None = None) -> str:
    base, head = _branches(pr_info)
    return (
        f"{REPORT_HEADER}\n\n"
        f"No gas usage changes detected between `{base}` and `{head}`.\n\n"
        "All functions maintain the same gas costs. ✅\n\n"
        f"{render_footer(pr_info, now)}"
    )


def _branches(pr_info: PRInfo) -> tuple[str, str]:
    return pr_info.base_branch or "base", pr_info.head_branch or "head"


def compose_report(
    diff_output: str,
    pr_info: PRInfo,
    now: datetime | None = None,
    table_limit: int = DEFAULT_TABLE_LIMIT,
) -> str:
    """Build the full Markdown report for a gas diff.

    Empty input and input with no recognisable gas lines both yield the
    "no changes" variant.
    """
    if not diff_output or not diff_output.strip():
        return render_no_changes(pr_info, now)

    changes = parse_gas_diff(diff_output)
    if not changes:
        logger.info("Diff output contained no recognisable gas changes.")
        return render_no_changes(pr_info, now)

    summary = summarize(changes)
    base, head = _branches(pr_info)

    sections = [
        REPORT_HEADER,
        f"Comparing gas usage between `{base}` and `{head}`",
        "### Summary\n"
        f"- **Optimized:** {summary.improvements} functions "
        f"({_ICON_IMPROVEMENT} -{format_gas_value(summary.total_improvement)} gas)\n"
        f"- **Increased:** {summary.regressions} functions "
        f"({_ICON_REGRESSION} +{format_gas_value(summary.total_regression)} gas)\n"
        f"- **Net Change:** {summary.net_icon} {summary.net_text}",
        "### Details",
        render_table(changes, table_limit),
    ]

    if len(changes) > table_limit:
        sections.append(
            "<details>\n"
            f"<summary>View all {len(changes)} changes</summary>\n\n"
            f"{render_table(changes, len(changes))}\n"
            "</details>"
        )

    sections.append(render_about())
    sections.append(render_footer(pr_info, now))
    return "\n\n".join(sections)
