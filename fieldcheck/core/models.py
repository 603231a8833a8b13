"""Record, field and configuration models.

This module defines the data model shared by every stage of a validation run:

Configuration (immutable, produced by the declarative loader):
    - ValidationConfig: One validation rule attached to a field
    - FieldConfig: Column definition with its rules and data-type metadata
    - MapFunctionConfig: One aggregation directive
    - RecordConfig: Field and map-function definitions for a record layout

Run data (mutated by validators only):
    - Field: One value within a record plus its validation outcome
    - Record: Ordered fields with a record number
    - Error: One recorded validation failure

Data types and alignments are resolved from their textual aliases through
static lookup tables built once at import time.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValidationType(Enum):
    """Validation kinds a rule can declare."""

    REGEX = "REGEX"
    EQUALS = "EQUALS"
    SQL = "SQL"
    API = "API"
    DB = "DB"
    IN = "IN"
    DATE = "DATE"


class Severity(Enum):
    """Severity of a recorded error.

    Only ERROR entries fail a run; WARNING entries are reported but never
    flip the overall result.
    """

    ERROR = "ERROR"
    WARNING = "WARNING"


class MapFunction(Enum):
    """Aggregate functions available to map-function directives."""

    AVERAGE = "AVERAGE"
    AGGREGATE = "AGGREGATE"
    MIN = "MIN"
    MAX = "MAX"
    COUNT = "COUNT"


class DataType(Enum):
    """Structural data type a field value must conform to."""

    NUMERIC = "Numeric"
    ALPHANUMERIC = "Alphanumeric"
    BLANK = "Blank"
    ANY = "Any"

    @classmethod
    def from_alias(cls, text: str) -> "DataType":
        """Resolve a configured alias such as ``"N"`` or ``"A/N"``.

        Raises:
            KeyError: If the alias is not known
        """
        # an all-space alias means ANY
        return DATA_TYPE_ALIASES[text.strip().lower() or " "]


class Alignment(Enum):
    """Expected padding side of a fixed-width value."""

    LEFT = "Left"
    RIGHT = "Right"

    @classmethod
    def from_alias(cls, text: str) -> "Alignment":
        return ALIGNMENT_ALIASES[text.strip().lower()]


DATA_TYPE_ALIASES: dict[str, DataType] = {
    "n": DataType.NUMERIC,
    "numeric": DataType.NUMERIC,
    "num": DataType.NUMERIC,
    "number": DataType.NUMERIC,
    "a/n": DataType.ALPHANUMERIC,
    "alphanumeric": DataType.ALPHANUMERIC,
    "alpha numeric": DataType.ALPHANUMERIC,
    "blank": DataType.BLANK,
    "*": DataType.ANY,
    "any": DataType.ANY,
    " ": DataType.ANY,
}

ALIGNMENT_ALIASES: dict[str, Alignment] = {
    "l": Alignment.LEFT,
    "left": Alignment.LEFT,
    "r": Alignment.RIGHT,
    "right": Alignment.RIGHT,
}


@dataclass(frozen=True)
class ValidationConfig:
    """One validation rule.

    Attributes:
        type: Validation kind selecting the strategy that evaluates the rule
        severity: Severity recorded when the rule fails
        params: Kind-specific parameters (pattern, expected value, list, format)
        error_message: Message recorded on failure; a default is built when None
    """

    type: ValidationType
    severity: Severity = Severity.ERROR
    params: Any = None
    error_message: str | None = None


@dataclass(frozen=True)
class FieldConfig:
    """Column definition shared by every Field of the same name across records."""

    fieldname: str
    validations: tuple[ValidationConfig, ...] = ()
    datatype: DataType = DataType.ANY
    alignment: Alignment | None = None

    def validation_types(self) -> set[ValidationType]:
        """Return the distinct validation kinds declared on this field."""
        return {rule.type for rule in self.validations}


@dataclass(frozen=True)
class MapFunctionConfig:
    """One aggregation directive.

    Attributes:
        field_name: Source field whose value feeds the aggregate
        function: Aggregate function to apply
        map_to: Name of the target aggregate
        sign_field: Optional field whose value is prepended as the sign
        condition: Optional filter expression gating the update
    """

    field_name: str
    function: MapFunction
    map_to: str
    sign_field: str | None = None
    condition: str | None = None


@dataclass(frozen=True)
class RecordConfig:
    """Field layout and map-function directives for one record type."""

    name: str
    fields: tuple[FieldConfig, ...] = ()
    map_functions: tuple[MapFunctionConfig, ...] = ()

    def field_config(self, fieldname: str) -> FieldConfig | None:
        for field_config in self.fields:
            if field_config.fieldname == fieldname:
                return field_config
        return None


@dataclass
class Error:
    """A recorded validation failure.

    Built by validators; the collector later stamps ``record_line`` with the
    1-based line number of the record that carries it.
    """

    field_name: str
    severity: Severity
    validation_type: str
    message: str
    record_line: int | None = None

    def format(self) -> str:
        """Format the error as a single human-readable line.

        Example:
            >>> Error("amount", Severity.ERROR, "REGEX", "bad value", 3).format()
            '[ERROR] line 3, field amount (REGEX): bad value'
        """
        line = "?" if self.record_line is None else str(self.record_line)
        return (
            f"[{self.severity.value}] line {line}, field {self.field_name} "
            f"({self.validation_type}): {self.message}"
        )


@dataclass
class Field:
    """One value within a record plus its validation outcome.

    The value is never changed by validation or aggregation; validators only
    append errors and raise the data-type-error flag.
    """

    config: FieldConfig
    value: str | None
    errors: list[Error] = field(default_factory=list)
    data_type_error: bool = False

    @property
    def name(self) -> str:
        return self.config.fieldname

    def add_error(self, error: Error) -> None:
        self.errors.append(error)


@dataclass
class Record:
    """Ordered fields of one source record."""

    record_number: int
    fields: list[Field] = field(default_factory=list)

    def get(self, fieldname: str | None) -> Field | None:
        """Return the first field with the given name, or None."""
        if fieldname is None:
            return None
        for record_field in self.fields:
            if record_field.name == fieldname:
                return record_field
        return None


def build_error(
    field: Field,
    severity: Severity,
    message: str,
    validation_type: ValidationType | str,
) -> Error:
    """Build an Error for a field.

    Args:
        field: Field the error belongs to
        severity: Severity of the failure
        message: Failure description
        validation_type: Validation kind, or a free-form tag such as "DataType"

    Returns:
        Unstamped Error carrying the field's name
    """
    type_name = (
        validation_type.value
        if isinstance(validation_type, ValidationType)
        else validation_type
    )
    return Error(
        field_name=field.name,
        severity=severity,
        validation_type=type_name,
        message=message,
    )
