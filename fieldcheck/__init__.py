"""fieldcheck: per-record field validation and running aggregation.

Typical use:

    >>> from fieldcheck import ExecutionContext, ValidationsExecutor, load_record_config
    >>> from fieldcheck import records_from_frame
    >>> config = load_record_config("detail_record.yaml")
    >>> record_data = records_from_frame(df, config)
    >>> ValidationsExecutor(ExecutionContext()).run(config, record_data)
    >>> record_data.has_error, record_data.map_values.values()
"""

from fieldcheck.aggregation import AggregateStore, ContextStager, MapFunctionAggregator
from fieldcheck.core.context import ExecutionContext
from fieldcheck.core.exceptions import (
    AggregationError,
    ContextError,
    FieldcheckError,
    FilterError,
)
from fieldcheck.core.filters import FilterList
from fieldcheck.core.frames import errors_to_frame, records_from_frame
from fieldcheck.core.models import (
    Alignment,
    DataType,
    Error,
    Field,
    FieldConfig,
    MapFunction,
    MapFunctionConfig,
    Record,
    RecordConfig,
    Severity,
    ValidationConfig,
    ValidationType,
)
from fieldcheck.core.records import RecordData
from fieldcheck.validation import (
    ConfigurationSchemaError,
    ValidationChain,
    ValidationsExecutor,
    load_record_config,
    parse_record_config,
)

__version__ = "0.1.0"

__all__ = [
    "AggregateStore",
    "AggregationError",
    "Alignment",
    "ConfigurationSchemaError",
    "ContextError",
    "ContextStager",
    "DataType",
    "Error",
    "ExecutionContext",
    "Field",
    "FieldConfig",
    "FieldcheckError",
    "FilterError",
    "FilterList",
    "MapFunction",
    "MapFunctionAggregator",
    "MapFunctionConfig",
    "Record",
    "RecordConfig",
    "RecordData",
    "Severity",
    "ValidationChain",
    "ValidationConfig",
    "ValidationType",
    "ValidationsExecutor",
    "errors_to_frame",
    "load_record_config",
    "parse_record_config",
    "records_from_frame",
]
