"""Basic structural validation.

The basic validator runs once on every field of every record, regardless of
the field's declared rules. It checks the value against the field's declared
data type and alignment. A data-type mismatch raises the field's
data-type-error flag, which keeps the value out of every map function.
"""

import re

from fieldcheck.core.models import Alignment, DataType, Field, Severity, build_error

DATA_TYPE_ERROR = "DataType"
ALIGNMENT_ERROR = "Alignment"

_NUMERIC = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")
_ALPHANUMERIC = re.compile(r"[A-Za-z0-9 ]*")


class BasicValidator:
    """Checks data-type conformance and alignment of a single field.

    Absent values are not checked.

    Example:
        >>> field = Field(FieldConfig("amount", datatype=DataType.NUMERIC), "12A")
        >>> BasicValidator().validate_field(field)
        >>> field.data_type_error
        True
    """

    def validate_field(self, field: Field) -> None:
        if field.value is None:
            return
        self._check_data_type(field)
        self._check_alignment(field)

    def _check_data_type(self, field: Field) -> None:
        datatype = field.config.datatype
        value = field.value

        if datatype is DataType.NUMERIC:
            valid = _NUMERIC.fullmatch(value.strip()) is not None
        elif datatype is DataType.ALPHANUMERIC:
            valid = _ALPHANUMERIC.fullmatch(value) is not None
        elif datatype is DataType.BLANK:
            valid = value.strip() == ""
        else:
            valid = True

        if not valid:
            field.data_type_error = True
            field.add_error(
                build_error(
                    field,
                    Severity.ERROR,
                    f"Field value '{value}' is not of data type {datatype.value}",
                    DATA_TYPE_ERROR,
                )
            )

    def _check_alignment(self, field: Field) -> None:
        alignment = field.config.alignment
        value = field.value
        if alignment is None or value.strip() == "":
            return

        if alignment is Alignment.LEFT and value != value.lstrip():
            message = f"Field value '{value}' is not left aligned"
        elif alignment is Alignment.RIGHT and value != value.rstrip():
            message = f"Field value '{value}' is not right aligned"
        else:
            return

        field.add_error(build_error(field, Severity.ERROR, message, ALIGNMENT_ERROR))
