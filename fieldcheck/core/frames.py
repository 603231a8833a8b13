"""Polars adapters between host pipeline frames and record data.

Host pipelines hold their parsed source rows as Polars DataFrames. These
helpers build the run's RecordData from such a frame and expose the collected
errors as a frame for downstream reporting.
"""

import polars as pl

from fieldcheck.core.exceptions import ContextError
from fieldcheck.core.models import Error, Field, Record, RecordConfig
from fieldcheck.core.records import RecordData

ERROR_SCHEMA = {
    "record_line": pl.Int64,
    "field_name": pl.Utf8,
    "severity": pl.Utf8,
    "validation_type": pl.Utf8,
    "message": pl.Utf8,
}


def records_from_frame(df: pl.DataFrame, record_config: RecordConfig) -> RecordData:
    """Build RecordData from a DataFrame.

    Each configured field reads the column of the same name, cast to string.
    Nulls stay None. Record numbers are 1-based row numbers.

    Args:
        df: Source rows, one per record
        record_config: Field layout of the records

    Returns:
        RecordData with positions 0..len(df)-1

    Raises:
        ContextError: If a configured field has no matching column

    Example:
        >>> df = pl.DataFrame({"amount": ["10", "20"]})
        >>> config = RecordConfig("detail", fields=(FieldConfig("amount"),))
        >>> data = records_from_frame(df, config)
        >>> data.records[1].get("amount").value
        '20'
    """
    missing = [f.fieldname for f in record_config.fields if f.fieldname not in df.columns]
    if missing:
        raise ContextError(
            f"Fields not found in DataFrame: {', '.join(missing)}",
            record=record_config.name,
            field=missing[0],
            reason="Missing column",
        )

    columns = [f.fieldname for f in record_config.fields]
    text = df.select(pl.col(name).cast(pl.Utf8) for name in columns)

    records = []
    for index, row in enumerate(text.iter_rows(named=True)):
        fields = [Field(config=f, value=row[f.fieldname]) for f in record_config.fields]
        records.append(Record(record_number=index + 1, fields=fields))

    return RecordData.from_records(records)


def errors_to_frame(errors: list[Error]) -> pl.DataFrame:
    """Return collected errors as a DataFrame in collection order."""
    return pl.DataFrame(
        {
            "record_line": [e.record_line for e in errors],
            "field_name": [e.field_name for e in errors],
            "severity": [e.severity.value for e in errors],
            "validation_type": [e.validation_type for e in errors],
            "message": [e.message for e in errors],
        },
        schema=ERROR_SCHEMA,
    )
