"""Tests for filter expressions."""

import pytest

from fieldcheck.core.context import ExecutionContext
from fieldcheck.core.exceptions import FilterError
from fieldcheck.core.filters import Filter, FilterList, FilterOperator


@pytest.fixture
def staged() -> ExecutionContext:
    return ExecutionContext(
        {"currency": "USD", "amount": "250.50", "name": "Johnson", "note": "", "total": 0}
    )


class TestFilterParsing:
    def test_symbol_operator(self) -> None:
        parsed = Filter.parse("${amount}>=100")
        assert parsed == Filter("${amount}", FilterOperator.GREATER_OR_EQUAL, "100")

    def test_word_operator(self) -> None:
        parsed = Filter.parse("${currency} not in [EUR|GBP]")
        assert parsed.operator is FilterOperator.NOT_IN
        assert parsed.control == "[EUR|GBP]"

    def test_first_operator_wins(self) -> None:
        parsed = Filter.parse("${name} contain a=b")
        assert parsed.operator is FilterOperator.CONTAIN
        assert parsed.control == "a=b"

    def test_unary_operator(self) -> None:
        assert Filter.parse("${note} is not empty").operator is FilterOperator.IS_NOT_EMPTY

    @pytest.mark.parametrize("text", ["${amount}", "   ", "= 5", "${amount} between [1]", "${a} match ("])
    def test_malformed_filters(self, text) -> None:
        with pytest.raises(FilterError):
            Filter.parse(text)

    def test_empty_condition(self) -> None:
        with pytest.raises(FilterError):
            FilterList("  ")


class TestFilterMatching:
    @pytest.mark.parametrize(
        "condition, expected",
        [
            ("${currency} = USD", True),
            ("${currency} != USD", False),
            ("${amount} = 250.5", True),
            ("${amount} > 250", True),
            ("${amount} < 250", False),
            ("${amount} <= 250.50", True),
            ("${currency} in [EUR|USD]", True),
            ("${currency} not in [EUR|USD]", False),
            ("${amount} between [100|300]", True),
            ("${amount} between [300|400]", False),
            ("${name} start with John", True),
            ("${name} end with son", True),
            ("${name} contain hns", True),
            ("${name} not contain xyz", True),
            ("${name} match J[a-z]+", True),
            ("${name} match J", False),
            ("${note} is empty", True),
            ("${name} is empty", False),
            ("${total} = 0", True),
            ("${currency} > 100", False),
        ],
    )
    def test_single_filters(self, staged, condition, expected) -> None:
        assert FilterList(condition).is_matched(staged, "test") is expected

    def test_all_filters_must_match(self, staged) -> None:
        assert FilterList("${currency} = USD & ${amount} > 100").is_matched(staged, "test")
        assert not FilterList("${currency} = USD & ${amount} > 1000").is_matched(staged, "test")

    def test_unknown_token_does_not_match_value(self, staged) -> None:
        assert not FilterList("${missing} = USD").is_matched(staged, "test")
