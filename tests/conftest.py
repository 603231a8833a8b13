"""Shared fixtures for fieldcheck tests."""

import pytest
from hypothesis import settings

from fieldcheck.core.context import ExecutionContext
from fieldcheck.core.models import (
    DataType,
    Field,
    FieldConfig,
    MapFunction,
    MapFunctionConfig,
    Record,
    RecordConfig,
)

settings.register_profile("fieldcheck", max_examples=100, deadline=None)
settings.load_profile("fieldcheck")


@pytest.fixture
def context() -> ExecutionContext:
    """A fresh execution context per test."""
    return ExecutionContext()


@pytest.fixture
def detail_config() -> RecordConfig:
    """Record layout with a signed amount, a currency and four aggregates."""
    return RecordConfig(
        name="detail",
        fields=(
            FieldConfig("id", datatype=DataType.ALPHANUMERIC),
            FieldConfig("sign"),
            FieldConfig("amount", datatype=DataType.NUMERIC),
            FieldConfig("currency", datatype=DataType.ALPHANUMERIC),
        ),
        map_functions=(
            MapFunctionConfig("amount", MapFunction.AGGREGATE, "totalAmount", sign_field="sign"),
            MapFunctionConfig("amount", MapFunction.AVERAGE, "avgAmount"),
            MapFunctionConfig("amount", MapFunction.MAX, "maxUsd", condition="${currency} = USD"),
            MapFunctionConfig("id", MapFunction.COUNT, "recordCount"),
        ),
    )


@pytest.fixture
def make_record():
    """Factory building a Record from a config and a name -> value mapping."""

    def _make(record_config: RecordConfig, values: dict, record_number: int = 1) -> Record:
        fields = [Field(config=f, value=values.get(f.fieldname)) for f in record_config.fields]
        return Record(record_number=record_number, fields=fields)

    return _make
