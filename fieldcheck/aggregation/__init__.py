"""Running aggregates computed by map-function directives."""

from fieldcheck.aggregation.accumulator import (
    DEC_SCALE,
    Accumulator,
    AggregateStore,
    divide_round_up,
    parse_decimal,
)
from fieldcheck.aggregation.mapping import MapFunctionAggregator
from fieldcheck.aggregation.stager import ContextStager, truncate_leading_zeroes

__all__ = [
    "DEC_SCALE",
    "Accumulator",
    "AggregateStore",
    "ContextStager",
    "MapFunctionAggregator",
    "divide_round_up",
    "parse_decimal",
    "truncate_leading_zeroes",
]
