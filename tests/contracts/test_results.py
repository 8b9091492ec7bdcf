"""Tests for guard and match results.

Tests for:
- CheckResult ok/rejected factories
- CheckResult status is Literal (not enum) - can compare to string directly
- MatchResult validity follows from errors
- MatchResult parse-failure form and JSON-safe dict
"""

import pytest

from shapeguard.contracts import CheckResult, MatchResult


class TestCheckResult:
    """Tests for CheckResult."""

    def test_ok_factory(self) -> None:
        """Ok factory carries the accepted value."""
        result = CheckResult.ok({"id": 1}, "user")

        assert result.status == "ok"
        assert result.value == {"id": 1}
        assert result.guard_name == "user"
        assert result.error is None
        assert result.is_ok

    def test_rejected_factory(self) -> None:
        """Rejected factory drops the value and explains why."""
        result: CheckResult[int] = CheckResult.rejected("x", "number")

        assert result.status == "rejected"
        assert result.value is None
        assert result.error == "value 'x' was rejected by guard 'number'"
        assert not result.is_ok

    def test_result_is_frozen(self) -> None:
        """Results cannot be modified after creation."""
        from dataclasses import FrozenInstanceError

        result = CheckResult.ok(1, "number")
        with pytest.raises(FrozenInstanceError):
            result.status = "rejected"  # type: ignore[misc]


class TestMatchResult:
    """Tests for MatchResult."""

    def test_from_no_errors_is_valid(self) -> None:
        result = MatchResult.from_errors([])

        assert result.valid is True
        assert result.errors == []
        assert result.duration_ms is None

    def test_from_errors_is_invalid(self) -> None:
        result = MatchResult.from_errors(["Missing required field: id"])

        assert result.valid is False
        assert result.errors == ["Missing required field: id"]

    def test_parse_failure(self) -> None:
        result = MatchResult.parse_failure("Unclosed '{' (at offset 3)")

        assert result.valid is False
        assert result.errors == ["Schema parsing error: Unclosed '{' (at offset 3)"]

    def test_match_failure(self) -> None:
        result = MatchResult.match_failure("maximum recursion depth exceeded")

        assert result.valid is False
        assert result.errors == ["Validation error: maximum recursion depth exceeded"]

    def test_to_dict_omits_timing(self) -> None:
        result = MatchResult.from_errors(["e"])
        result.duration_ms = 1.5

        assert result.to_dict() == {"valid": False, "errors": ["e"]}

    def test_duration_not_in_repr(self) -> None:
        result = MatchResult(valid=True, duration_ms=2.0)
        assert "duration_ms" not in repr(result)
