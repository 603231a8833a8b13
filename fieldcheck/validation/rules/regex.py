"""Regex rule validator."""

import re

from fieldcheck.core.models import Field, ValidationConfig, ValidationType
from fieldcheck.validation.exceptions import ValidatorConfigurationError
from fieldcheck.validation.rules.base import RuleValidatorBase


class RegexValidator(RuleValidatorBase):
    """Checks that the whole value matches the rule's pattern.

    Trailing whitespace padding is ignored. An absent value is matched as the
    empty string.
    """

    kinds = frozenset({ValidationType.REGEX})
    validator_name = "RegexValidator"

    def __init__(self) -> None:
        self._compiled: dict[str, re.Pattern] = {}

    def check(self, field: Field, rule: ValidationConfig) -> bool:
        pattern = self._pattern(field, rule)
        return pattern.fullmatch((field.value or "").rstrip()) is not None

    def default_message(self, field: Field, rule: ValidationConfig) -> str:
        return f"Field value '{field.value}' does not match pattern '{rule.params}'"

    def _pattern(self, field: Field, rule: ValidationConfig) -> re.Pattern:
        source = str(self.require_params(field, rule))
        if source not in self._compiled:
            try:
                self._compiled[source] = re.compile(source)
            except re.error as e:
                raise ValidatorConfigurationError(
                    f"Invalid regex for field '{field.name}': {e}",
                    validator_name=self.validator_name,
                    field=field.name,
                    validation_type=rule.type.value,
                    parameter="params",
                    value=source,
                    reason=str(e),
                ) from e
        return self._compiled[source]
