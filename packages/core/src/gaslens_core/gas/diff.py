"""Parse `forge snapshot --diff` output into GasChange records.

Expected data lines look like:

    +Token:transfer() (gas: 1000 -> 1200)
    -Token:approve() (gas: 500 -> 300)
    +Vault:deposit() (gas: 84211)

Anything else (headers, separators, totals) is skipped.
"""

from __future__ import annotations

import logging
import re

from gaslens_core.models import IMPROVEMENT, REGRESSION, GasChange

logger = logging.getLogger(__name__)

# Sign, contract, function, then the trailing new-gas integer (optionally
# followed by the closing paren of "(gas: ...)").
_CHANGE_LINE_RE = re.compile(r"^([+-]?)([^:]+):([^(]+)\(\).*?(\d+)\)*\s*$")
_BEFORE_AFTER_RE = re.compile(r"(\d+)\s*->\s*(\d+)")


def classify_line(line: str) -> GasChange | None:
    """Return the GasChange described by a single diff line, or None if it carries no data."""
    match = _CHANGE_LINE_RE.match(line)
    if not match:
        return None

    sign, contract, function, new_gas = match.groups()
    if not sign:
        logger.debug("Unsigned gas line treated as improvement: %r", line)

    old_gas: int | None = None
    pair = _BEFORE_AFTER_RE.search(line)
    # A zero baseline carries no information; treat it like a missing one.
    if pair and int(pair.group(1)):
        old_gas = int(pair.group(1))

    new = int(new_gas)
    return GasChange(
        type=REGRESSION if sign == "+" else IMPROVEMENT,
        contract=contract.strip(),
        function=function.strip(),
        old_gas=old_gas,
        new_gas=new,
        gas_change=new - old_gas if old_gas is not None else new,
    )


def parse_gas_diff(diff_output: str) -> list[GasChange]:
    """Parse the whole diff, preserving line order and keeping repeated entries."""
    changes: list[GasChange] = []
    for line in diff_output.splitlines():
        if not line.strip():
            continue
        change = classify_line(line)
        if change is None:
            logger.debug("Skipping unrecognised diff line: %r", line)
            continue
        changes.append(change)
    return changes
