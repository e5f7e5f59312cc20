"""Tests for the forge snapshot diff parser."""

from gaslens_core.gas.diff import classify_line, parse_gas_diff
from gaslens_core.models import IMPROVEMENT, REGRESSION, GasChange


class TestClassifyLine:
    def test_regression_with_before_and_after(self):
        change = classify_line("+Token:transfer() (gas: 1000 -> 1200)")
        assert change == GasChange(
            type=REGRESSION,
            contract="Token",
            function="transfer",
            old_gas=1000,
            new_gas=1200,
            gas_change=200,
        )

    def test_improvement_with_before_and_after(self):
        change = classify_line("-Token:approve() (gas: 500 -> 300)")
        assert change.type == IMPROVEMENT
        assert change.old_gas == 500
        assert change.new_gas == 300
        assert change.gas_change == -200

    def test_new_entry_without_baseline_uses_full_cost(self):
        change = classify_line("+Vault:deposit() (gas: 84211)")
        assert change.old_gas is None
        assert change.new_gas == 84211
        assert change.gas_change == 84211

    def test_bare_trailing_integer(self):
        change = classify_line("-Vault:withdraw() 4200")
        assert change.new_gas == 4200
        assert change.type == IMPROVEMENT

    def test_names_are_trimmed(self):
        change = classify_line("+ MyToken : mint () (gas: 10 -> 20)")
        assert change.contract == "MyToken"
        assert change.function == "mint"

    def test_unsigned_line_is_improvement(self):
        change = classify_line("Token:transfer() (gas: 1000 -> 1200)")
        assert change is not None
        assert change.type == IMPROVEMENT
        assert change.gas_change == 200

    def test_zero_baseline_treated_as_absent(self):
        change = classify_line("+Token:init() (gas: 0 -> 5000)")
        assert change.old_gas is None
        assert change.gas_change == 5000

    def test_no_trailing_integer_is_skipped(self):
        assert classify_line("+Token:transfer() (gas: unknown)") is None

    def test_missing_call_marker_is_skipped(self):
        assert classify_line("+Token:transfer (gas: 1000 -> 1200)") is None

    def test_summary_lines_are_skipped(self):
        assert classify_line("Overall gas change: -200 (-1.2%)") is None


class TestParseGasDiff:
    def test_blank_lines_ignored(self):
        assert parse_gas_diff("\n   \n\t\n") == []

    def test_preserves_order_and_duplicates(self):
        diff = "\n".join(
            [
                "+Token:transfer() (gas: 1000 -> 1200)",
                "",
                "-Token:approve() (gas: 500 -> 300)",
                "+Token:transfer() (gas: 1000 -> 1200)",
            ]
        )
        changes = parse_gas_diff(diff)
        assert [c.function for c in changes] == ["transfer", "approve", "transfer"]
        assert changes[0] == changes[2]

    def test_skips_unrecognised_lines(self):
        diff = "Ran 3 tests\n+Token:transfer() (gas: 1000 -> 1200)\n----------\n"
        changes = parse_gas_diff(diff)
        assert len(changes) == 1
        assert changes[0].contract == "Token"

    def test_handles_crlf_line_endings(self):
        changes = parse_gas_diff("+Token:transfer() (gas: 1000 -> 1200)\r\n-Token:approve() (gas: 500 -> 300)\r\n")
        assert [c.gas_change for c in changes] == [200, -200]
