"""Validation run orchestration.

ValidationsExecutor drives one run over a RecordData:

1. Per record, in ascending position: basic validation of every field, chain
   validation of every field that carries rules, then map-function
   aggregation into the run's AggregateStore. Fields flagged with a data-type
   error by either validation pass never reach an aggregate
2. Error collection, stamping record lines and setting the pass/fail flag

The executor owns no state beyond its collaborators; the execution context
and the record data are created per run by the caller.
"""

import logging
from collections.abc import Iterable
from typing import Any

from fieldcheck.aggregation.accumulator import AggregateStore
from fieldcheck.aggregation.mapping import MapFunctionAggregator
from fieldcheck.aggregation.stager import ContextStager
from fieldcheck.core.context import ExecutionContext
from fieldcheck.core.models import Error, Record, RecordConfig
from fieldcheck.core.records import RecordData
from fieldcheck.validation.basic import BasicValidator
from fieldcheck.validation.chain import ValidationChain
from fieldcheck.validation.collector import collect_errors

logger = logging.getLogger(__name__)


class ValidationsExecutor:
    """Runs basic validation, chain validation and aggregation over a record set.

    Attributes:
        context: Execution context shared by aggregation and conditions
        chain: Validation chain applied to fields with rules
        basic_validator: Structural validator applied to every field

    Example:
        >>> context = ExecutionContext()
        >>> executor = ValidationsExecutor(context)
        >>> record_data = executor.run(record_config, records_from_frame(df, record_config))
        >>> record_data.has_error
        False
    """

    def __init__(
        self,
        context: ExecutionContext,
        chain: ValidationChain | None = None,
        basic_validator: BasicValidator | None = None,
    ) -> None:
        self.context = context
        self.chain = chain or ValidationChain.default()
        self.basic_validator = basic_validator or BasicValidator()
        self.stager = ContextStager(context)
        self.aggregator = MapFunctionAggregator(context, self.stager)

    def run(self, record_config: RecordConfig, record_data: RecordData) -> RecordData:
        """Validate and aggregate every record, then collect errors."""
        for _, record in record_data.ordered():
            self.do_basic_validations(record)
            self.do_field_validations(record)
            self.collect_map_values(record_config, record, record_data.map_values)
        return self.execute_validations(record_data)

    def execute_validations(self, record_data: RecordData) -> RecordData:
        """Log the aggregates of validated records and collect their errors."""
        record_data.log_map_values()
        self.collect_errors(record_data)
        return record_data

    def do_basic_validations(self, record: Record) -> None:
        for record_field in record.fields:
            self.basic_validator.validate_field(record_field)

    def do_field_validations(self, record: Record) -> None:
        for record_field in record.fields:
            if record_field.config.validations:
                self.chain.validate(record_field)

    def collect_map_values(
        self,
        record_config: RecordConfig,
        record: Record,
        map_values: AggregateStore,
    ) -> AggregateStore:
        return self.aggregator.collect_map_values(record_config, record, map_values)

    def collect_errors(self, record_data: RecordData) -> list[Error]:
        return collect_errors(record_data)

    def move_dup_values_from_context(
        self, record_configs: Iterable[RecordConfig | None]
    ) -> dict[str, Any]:
        return self.stager.move_dup_values_from_context(record_configs)

    def restore_values_to_context(self, dup_values: dict[str, Any]) -> None:
        self.stager.restore_values_to_context(dup_values)
