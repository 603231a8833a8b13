"""Tests for exact-decimal running aggregates."""

from decimal import ROUND_UP, Decimal, localcontext

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fieldcheck.aggregation.accumulator import (
    DEC_SCALE,
    AggregateStore,
    divide_round_up,
    parse_decimal,
)
from fieldcheck.core.exceptions import AggregationError
from fieldcheck.core.models import MapFunction

decimals = st.decimals(
    min_value=Decimal("-1000000000"),
    max_value=Decimal("1000000000"),
    allow_nan=False,
    allow_infinity=False,
    places=4,
)


def reference_average(values: list[Decimal]) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = 200
        exact = sum(values, Decimal(0)) / len(values)
        return exact.quantize(Decimal(1).scaleb(-DEC_SCALE), rounding=ROUND_UP)


class TestParseDecimal:
    def test_trims_and_parses(self) -> None:
        assert parse_decimal("  -12.50 ") == Decimal("-12.50")
        assert parse_decimal("+5") == Decimal("5")

    @pytest.mark.parametrize("text", ["", "12A", "NaN", "Infinity", "- 5"])
    def test_rejects_non_numbers(self, text) -> None:
        with pytest.raises(ValueError):
            parse_decimal(text)


class TestDivideRoundUp:
    def test_rounds_away_from_zero(self) -> None:
        assert divide_round_up(Decimal("2"), 3, scale=2) == Decimal("0.67")
        assert divide_round_up(Decimal("-2"), 3, scale=2) == Decimal("-0.67")
        assert divide_round_up(Decimal("1"), 3, scale=2) == Decimal("0.34")

    def test_exact_quotient_is_not_bumped(self) -> None:
        assert divide_round_up(Decimal("3"), 2, scale=2) == Decimal("1.50")

    def test_default_scale(self) -> None:
        result = divide_round_up(Decimal("1"), 3)
        assert result.as_tuple().exponent == -DEC_SCALE
        assert result == Decimal("0." + "3" * 24 + "4")

    def test_dividend_finer_than_scale(self) -> None:
        dividend = Decimal("1." + "0" * 29 + "1")
        assert divide_round_up(dividend, 1) == Decimal("1." + "0" * 24 + "1")

    def test_zero(self) -> None:
        assert divide_round_up(Decimal("0"), 7) == 0

    def test_rejects_non_positive_divisor(self) -> None:
        with pytest.raises(ValueError):
            divide_round_up(Decimal("1"), 0)


class TestAggregateStore:
    def test_aggregate_sums(self) -> None:
        store = AggregateStore()
        for text in ["1.10", "2.20", "-0.30"]:
            store.aggregate("total", Decimal(text))
        assert store["total"] == Decimal("3.00")

    def test_aggregate_is_exact_beyond_default_precision(self) -> None:
        store = AggregateStore()
        store.aggregate("total", Decimal("1" + "0" * 40))
        store.aggregate("total", Decimal("0.000001"))
        assert store["total"] == Decimal("1" + "0" * 40 + ".000001")

    def test_first_average_keeps_value(self) -> None:
        store = AggregateStore()
        store.average("avg", Decimal("2.5"))
        acc = store.accumulator("avg")
        assert store["avg"] == Decimal("2.5")
        assert (acc.total, acc.counter) == (Decimal("2.5"), 1)

    def test_average_shadow_state(self) -> None:
        store = AggregateStore()
        for value in ["1", "2", "2"]:
            store.average("avg", Decimal(value))
        shadow = store.shadow_values()
        assert shadow["avg#Sum"] == Decimal("5")
        assert shadow["avg#Counter"] == 3
        assert shadow["avg"] == Decimal("1." + "6" * 24 + "7")

    def test_min_max_seed_with_first_value(self) -> None:
        store = AggregateStore()
        store.minimum("low", Decimal("5"))
        store.maximum("high", Decimal("5"))
        assert store["low"] == store["high"] == Decimal("5")

    def test_ties_keep_incoming_value(self) -> None:
        store = AggregateStore()
        store.maximum("high", Decimal("5"))
        store.maximum("high", Decimal("5.00"))
        assert str(store["high"]) == "5.00"

    def test_count_starts_at_one(self) -> None:
        store = AggregateStore()
        store.count("n")
        assert store["n"] == 1
        assert isinstance(store["n"], int)

    def test_apply_dispatches(self) -> None:
        store = AggregateStore()
        store.apply(MapFunction.AGGREGATE, "total", Decimal("2"))
        store.apply(MapFunction.COUNT, "n")
        assert store.values() == {"total": Decimal("2"), "n": 1}

    def test_apply_requires_value(self) -> None:
        with pytest.raises(AggregationError):
            AggregateStore().apply(MapFunction.MIN, "low")

    def test_conflicting_kinds(self) -> None:
        store = AggregateStore()
        store.average("x", Decimal("1"))
        with pytest.raises(AggregationError, match="AVERAGE"):
            store.maximum("x", Decimal("2"))
        assert store["x"] == Decimal("1")

    def test_mapping_behaviour(self) -> None:
        store = AggregateStore()
        store.count("n")
        assert "n" in store
        assert "m" not in store
        assert list(store) == ["n"]
        assert len(store) == 1
        assert store.get("m", 0) == 0


class TestAggregateProperties:
    @given(st.lists(decimals, min_size=1, max_size=30))
    def test_average_matches_rounded_mean(self, values) -> None:
        store = AggregateStore()
        for value in values:
            store.average("avg", value)
        assert store["avg"] == reference_average(values)
        acc = store.accumulator("avg")
        assert acc.counter == len(values)
        assert acc.total == sum(values, Decimal(0))

    @given(st.lists(decimals, min_size=1, max_size=30))
    def test_min_max_track_extremes(self, values) -> None:
        store = AggregateStore()
        for seen, value in enumerate(values, start=1):
            store.minimum("low", value)
            store.maximum("high", value)
            assert store["low"] == min(values[:seen])
            assert store["high"] == max(values[:seen])
        assert store["low"] == min(values)
        assert store["high"] == max(values)

    @given(st.lists(st.sampled_from(["a", "b", "c"]), min_size=1, max_size=50))
    def test_count_ignores_interleaving(self, names) -> None:
        store = AggregateStore()
        for name in names:
            store.count(name)
        for name in set(names):
            assert store[name] == names.count(name)
