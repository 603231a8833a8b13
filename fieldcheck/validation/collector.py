"""Error collection across a record set."""

import logging

from fieldcheck.core.models import Error, Severity
from fieldcheck.core.records import RecordData

logger = logging.getLogger(__name__)


def collect_errors(record_data: RecordData) -> list[Error]:
    """Stamp and gather every error of the run.

    Records are walked in ascending position, fields in declared order and
    errors in append order. Each error's ``record_line`` becomes its record's
    position + 1. The run fails when any collected error has ERROR severity;
    WARNING entries never change the outcome.

    Args:
        record_data: Validated records; its ``errors`` and ``has_error`` are set

    Returns:
        The collected errors, also stored on ``record_data.errors``

    Example:
        >>> errors = collect_errors(record_data)
        >>> [e.record_line for e in errors]
        [1, 1, 3]
    """
    errors: list[Error] = []
    has_error = False

    for position, record in record_data.ordered():
        for record_field in record.fields:
            for error in record_field.errors:
                error.record_line = position + 1
                if error.severity is Severity.ERROR:
                    has_error = True
                errors.append(error)

    record_data.errors = errors
    record_data.has_error = has_error
    logger.info(
        "collected %d error(s) across %d record(s), has_error=%s",
        len(errors),
        len(record_data),
        has_error,
    )
    return errors
