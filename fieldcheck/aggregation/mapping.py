"""Map-function aggregation across records.

For each record, every map-function directive of the record's configuration
is matched against the record's fields and, when its condition holds, the
source field's decimal value is folded into the target aggregate.
"""

import logging
from decimal import Decimal

from fieldcheck.aggregation.accumulator import AggregateStore, parse_decimal
from fieldcheck.aggregation.stager import ContextStager
from fieldcheck.core.context import ExecutionContext
from fieldcheck.core.exceptions import AggregationError
from fieldcheck.core.filters import FilterList
from fieldcheck.core.models import Field, MapFunction, MapFunctionConfig, Record, RecordConfig

logger = logging.getLogger(__name__)


class MapFunctionAggregator:
    """Applies a record configuration's map functions to records.

    The aggregator stages each record into the shared context, evaluates
    directive conditions against it, updates the AggregateStore and removes
    the record's field entries again, even when directives were skipped.

    Attributes:
        context: Execution context conditions are evaluated against
        stager: Stager writing record state into the context

    Example:
        >>> context = ExecutionContext()
        >>> aggregator = MapFunctionAggregator(context)
        >>> store = aggregator.collect_map_values(record_config, record, AggregateStore())
        >>> store["totalAmount"]
        Decimal('150.25')
    """

    def __init__(self, context: ExecutionContext, stager: ContextStager | None = None) -> None:
        self.context = context
        self.stager = stager or ContextStager(context)

    def collect_map_values(
        self,
        record_config: RecordConfig,
        record: Record,
        map_values: AggregateStore,
    ) -> AggregateStore:
        """Fold one record into the running aggregates.

        Args:
            record_config: Configuration carrying the map-function directives
            record: Record whose field values feed the aggregates
            map_values: Aggregates of the run so far; updated in place

        Returns:
            The same AggregateStore, updated

        Raises:
            AggregationError: If a matched value is not a decimal number or an
                aggregate name is reused by a different function
            FilterError: If a directive's condition is malformed
        """
        if not record_config.map_functions:
            return map_values

        self.stager.update_values_to_context(record_config, record, map_values)
        try:
            for map_function in record_config.map_functions:
                self._apply(map_function, record, map_values)
        finally:
            self.stager.clean_values_from_context(record)

        return map_values

    def _apply(
        self,
        map_function: MapFunctionConfig,
        record: Record,
        map_values: AggregateStore,
    ) -> None:
        function = map_function.function.value
        sign_field = record.get(map_function.sign_field)

        for record_field in record.fields:
            if record_field.name != map_function.field_name:
                continue

            if record_field.data_type_error:
                self.context.log_current_step(
                    f"skipped map function '{function}' due to validation error "
                    f"at field '{record_field.name}'"
                )
                break

            condition = map_function.condition
            if condition is not None and not self.is_match(condition):
                self.context.log_current_step(
                    f"skipped map function for record number '{record.record_number}' "
                    f"due to failed condition '{condition}'"
                )
                continue

            if map_function.function is MapFunction.COUNT:
                map_values.count(map_function.map_to)
                continue

            value = self._decimal_value(record_field, sign_field, map_function)
            map_values.apply(map_function.function, map_function.map_to, value)

    def _decimal_value(
        self,
        record_field: Field,
        sign_field: Field | None,
        map_function: MapFunctionConfig,
    ) -> Decimal:
        text = (record_field.value or "").strip()
        if sign_field is not None and sign_field.value is not None:
            text = sign_field.value.strip() + text
        try:
            return parse_decimal(text)
        except ValueError as e:
            raise AggregationError(
                f"Cannot apply {map_function.function.value} to non-numeric value",
                map_to=map_function.map_to,
                field=record_field.name,
                value=text,
                function=map_function.function.value,
            ) from e

    def is_match(self, condition: str) -> bool:
        return FilterList(condition).is_matched(self.context, "filtering records with")
