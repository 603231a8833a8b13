"""Exact-decimal running aggregates.

Aggregates are cumulative across every record of a run. Each aggregate name
owns one Accumulator holding its exposed value and, for AVERAGE, the running
sum and counter the average is derived from.

Arithmetic is exact: additions run in an unbounded decimal context and the
AVERAGE quotient is computed with integer arithmetic, then rounded to
DEC_SCALE fractional digits away from zero whenever the discarded remainder
is non-zero.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, InvalidOperation

from fieldcheck.core.exceptions import AggregationError
from fieldcheck.core.models import MapFunction

DEC_SCALE = 25

_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def parse_decimal(text: str) -> Decimal:
    """Parse a field value into a finite Decimal.

    Raises:
        ValueError: If the text is not a finite decimal number
    """
    try:
        value = Decimal(text.strip())
    except InvalidOperation as e:
        raise ValueError(f"'{text}' is not a decimal number") from e
    if not value.is_finite():
        raise ValueError(f"'{text}' is not a finite decimal number")
    return value


def divide_round_up(dividend: Decimal, divisor: int, scale: int = DEC_SCALE) -> Decimal:
    """Divide to ``scale`` fractional digits, rounding away from zero.

    Example:
        >>> divide_round_up(Decimal("2"), 3, scale=2)
        Decimal('0.67')
        >>> divide_round_up(Decimal("-1"), 3, scale=2)
        Decimal('-0.34')
    """
    if divisor <= 0:
        raise ValueError("divisor must be positive")

    sign, digits, exponent = dividend.as_tuple()
    coefficient = int("".join(map(str, digits))) if digits else 0

    shift = exponent + scale
    if shift >= 0:
        numerator, denominator = coefficient * 10**shift, divisor
    else:
        numerator, denominator = coefficient, divisor * 10 ** (-shift)

    quotient, remainder = divmod(numerator, denominator)
    if remainder:
        quotient += 1

    return Decimal((sign, tuple(int(d) for d in str(quotient)), -scale))


@dataclass
class Accumulator:
    """Running state of one named aggregate.

    Attributes:
        kind: Function that owns this aggregate
        value: Exposed value (Decimal, or int for COUNT)
        total: Running sum backing an AVERAGE
        counter: Number of values folded into an AVERAGE
    """

    kind: MapFunction
    value: Decimal | int
    total: Decimal | None = None
    counter: int = 0


class AggregateStore:
    """Named aggregates for a whole run.

    Behaves as a read-only mapping from aggregate name to its current value;
    updates go through the function methods so AVERAGE keeps its shadow sum
    and counter in step with the exposed average.

    Example:
        >>> store = AggregateStore()
        >>> store.average("avg", Decimal("1"))
        >>> store.average("avg", Decimal("2"))
        >>> store["avg"]
        Decimal('1.5000000000000000000000000')
    """

    def __init__(self) -> None:
        self._accumulators: dict[str, Accumulator] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._accumulators

    def __getitem__(self, name: str) -> Decimal | int:
        return self._accumulators[name].value

    def __iter__(self) -> Iterator[str]:
        return iter(self._accumulators)

    def __len__(self) -> int:
        return len(self._accumulators)

    def get(self, name: str, default: Decimal | int | None = None) -> Decimal | int | None:
        accumulator = self._accumulators.get(name)
        return default if accumulator is None else accumulator.value

    def accumulator(self, name: str) -> Accumulator | None:
        return self._accumulators.get(name)

    def values(self) -> dict[str, Decimal | int]:
        """Return a snapshot of every exposed aggregate value."""
        return {name: acc.value for name, acc in self._accumulators.items()}

    def shadow_values(self) -> dict[str, Decimal | int]:
        """Return exposed values plus the ``name#Sum``/``name#Counter`` entries of averages."""
        snapshot: dict[str, Decimal | int] = {}
        for name, acc in self._accumulators.items():
            snapshot[name] = acc.value
            if acc.kind is MapFunction.AVERAGE:
                snapshot[f"{name}#Sum"] = acc.total
                snapshot[f"{name}#Counter"] = acc.counter
        return snapshot

    def apply(self, function: MapFunction, name: str, value: Decimal | None = None) -> None:
        """Fold a value into the named aggregate using ``function``."""
        if function is MapFunction.COUNT:
            self.count(name)
            return
        if value is None:
            raise AggregationError(
                "Map function requires a value", map_to=name, function=function.value
            )
        handlers = {
            MapFunction.AVERAGE: self.average,
            MapFunction.AGGREGATE: self.aggregate,
            MapFunction.MIN: self.minimum,
            MapFunction.MAX: self.maximum,
        }
        handlers[function](name, value)

    def aggregate(self, name: str, value: Decimal) -> None:
        acc = self._existing(name, MapFunction.AGGREGATE)
        if acc is None:
            self._accumulators[name] = Accumulator(MapFunction.AGGREGATE, value)
        else:
            acc.value = _EXACT.add(value, acc.value)

    def minimum(self, name: str, value: Decimal) -> None:
        acc = self._existing(name, MapFunction.MIN)
        if acc is None:
            self._accumulators[name] = Accumulator(MapFunction.MIN, value)
        else:
            # ties keep the incoming value
            acc.value = min(value, acc.value)

    def maximum(self, name: str, value: Decimal) -> None:
        acc = self._existing(name, MapFunction.MAX)
        if acc is None:
            self._accumulators[name] = Accumulator(MapFunction.MAX, value)
        else:
            acc.value = max(value, acc.value)

    def average(self, name: str, value: Decimal) -> None:
        acc = self._existing(name, MapFunction.AVERAGE)
        if acc is None:
            self._accumulators[name] = Accumulator(
                MapFunction.AVERAGE, value, total=value, counter=1
            )
            return
        acc.counter += 1
        acc.total = _EXACT.add(value, acc.total)
        acc.value = divide_round_up(acc.total, acc.counter)

    def count(self, name: str) -> None:
        acc = self._existing(name, MapFunction.COUNT)
        if acc is None:
            self._accumulators[name] = Accumulator(MapFunction.COUNT, 1)
        else:
            acc.value += 1

    def _existing(self, name: str, kind: MapFunction) -> Accumulator | None:
        acc = self._accumulators.get(name)
        if acc is not None and acc.kind is not kind:
            raise AggregationError(
                f"Aggregate '{name}' is already computed by {acc.kind.value}",
                map_to=name,
                function=kind.value,
            )
        return acc
