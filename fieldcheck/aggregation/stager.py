"""Staging of field and aggregate values into the execution context.

Before map-function conditions are evaluated, the current aggregate values
and the record's field values are written into the context so conditions can
reference them as ``${name}``. After the record is aggregated its field
entries are removed again.

Field and aggregate names may collide with entries an enclosing run already
placed in the context. A caller nesting one run inside another snapshots
those entries with move_dup_values_from_context and puts them back with
restore_values_to_context once the nested run completes.
"""

import re
from collections.abc import Iterable
from typing import Any

from fieldcheck.aggregation.accumulator import AggregateStore
from fieldcheck.core.context import ExecutionContext
from fieldcheck.core.models import Record, RecordConfig

_LEADING_ZEROES = re.compile(r"^0+")


def truncate_leading_zeroes(text: str | None) -> str | None:
    """Strip leading zeroes from a value while keeping its sign.

    A leading ``+`` is dropped, a leading ``-`` is kept, and a ``0`` is
    restored in front of a value that would otherwise start with the decimal
    point. A value with nothing left after stripping is blank and returns None.

    Example:
        >>> truncate_leading_zeroes("-007")
        '-7'
        >>> truncate_leading_zeroes("0.5")
        '0.5'
        >>> truncate_leading_zeroes("000") is None
        True
    """
    if text is None:
        return None

    negative = text.startswith("-")
    if text.startswith("+"):
        text = text[1:]
    if text.startswith("-"):
        text = text[1:]

    text = _LEADING_ZEROES.sub("", text, count=1)
    if not text.strip():
        return None

    if text.startswith("."):
        text = "0" + text
    if negative:
        text = "-" + text
    return text


class ContextStager:
    """Writes record state into, and removes it from, an ExecutionContext."""

    def __init__(self, context: ExecutionContext) -> None:
        self.context = context

    def update_values_to_context(
        self,
        record_config: RecordConfig,
        record: Record,
        map_values: AggregateStore,
    ) -> None:
        """Stage aggregates and field values for condition evaluation.

        Every directive's target aggregate is written under its ``map_to``
        name (0 while absent). Every field is written under its name after
        leading-zero normalization; fields without a value are removed.
        """
        if not record_config.map_functions:
            return

        for map_function in record_config.map_functions:
            if map_function.map_to is not None:
                self.context.set_data(map_function.map_to, map_values.get(map_function.map_to, 0))

        for record_field in record.fields:
            if record_field.value is None:
                self.context.remove_data(record_field.name)
            else:
                self.context.set_data(record_field.name, truncate_leading_zeroes(record_field.value))

    def clean_values_from_context(self, record: Record) -> None:
        for record_field in record.fields:
            self.context.remove_data(record_field.name)

    def move_dup_values_from_context(
        self, record_configs: Iterable[RecordConfig | None]
    ) -> dict[str, Any]:
        """Snapshot context entries that directives of ``record_configs`` would overwrite.

        Returns:
            Side table of key -> value for every existing ``map_to`` and
            source field entry
        """
        dup_values: dict[str, Any] = {}
        for record_config in record_configs:
            if record_config is None:
                continue
            for map_function in record_config.map_functions:
                if map_function.map_to is None:
                    continue
                if self.context.has_data(map_function.map_to):
                    dup_values[map_function.map_to] = self.context.get_object_data(
                        map_function.map_to
                    )
                if self.context.has_data(map_function.field_name):
                    dup_values[map_function.field_name] = self.context.get_object_data(
                        map_function.field_name
                    )
        return dup_values

    def restore_values_to_context(self, dup_values: dict[str, Any]) -> None:
        for key, value in dup_values.items():
            self.context.set_data(key, value)
            self.context.log_current_step(
                f"var '{key}' is restored to context with value "
                f"'{self.context.get_object_data(key)}'"
            )
