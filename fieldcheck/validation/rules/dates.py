"""Date rule validator."""

from datetime import datetime

from fieldcheck.core.models import Field, ValidationConfig, ValidationType
from fieldcheck.validation.exceptions import ValidatorConfigurationError
from fieldcheck.validation.rules.base import RuleValidatorBase


class DateValidator(RuleValidatorBase):
    """Checks that the trimmed value parses with the rule's date format.

    The rule's params are a ``strptime`` format, given either directly or as
    ``{"format": ...}``. A value that does not parse also raises the field's
    data-type-error flag so no map function consumes it.

    Example:
        >>> rule = ValidationConfig(ValidationType.DATE, params="%Y%m%d")
        >>> field = Field(FieldConfig("posted", validations=(rule,)), "20240230")
        >>> DateValidator().validate(field).errors[0].message
        "Field value '20240230' is not a valid date for format '%Y%m%d'"
    """

    kinds = frozenset({ValidationType.DATE})
    validator_name = "DateValidator"

    def check(self, field: Field, rule: ValidationConfig) -> bool:
        date_format = self._format(field, rule)
        try:
            datetime.strptime((field.value or "").strip(), date_format)
        except ValueError:
            field.data_type_error = True
            return False
        return True

    def default_message(self, field: Field, rule: ValidationConfig) -> str:
        date_format = rule.params.get("format") if isinstance(rule.params, dict) else rule.params
        return f"Field value '{field.value}' is not a valid date for format '{date_format}'"

    def _format(self, field: Field, rule: ValidationConfig) -> str:
        params = self.require_params(field, rule)
        date_format = params.get("format") if isinstance(params, dict) else params
        if not isinstance(date_format, str) or not date_format:
            raise ValidatorConfigurationError(
                f"DATE rule on field '{field.name}' requires a format string",
                validator_name=self.validator_name,
                field=field.name,
                validation_type=rule.type.value,
                parameter="format",
                value=params,
                reason="Missing or invalid format",
            )
        return date_format
