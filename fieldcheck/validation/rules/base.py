"""Base class for validation chain strategies.

RuleValidatorBase implements the FieldValidator protocol: it selects the
field's rules of the kinds a subclass handles, asks the subclass to check each
one, and records an Error for every rule that fails.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from fieldcheck.core.models import Field, ValidationConfig, ValidationType, build_error
from fieldcheck.validation.exceptions import ValidatorConfigurationError
from fieldcheck.validation.result import RuleResult


def values_equal(value: str, expected: Any) -> bool:
    """Compare a field value to a configured value, numerically when both are numbers.

    Example:
        >>> values_equal("0100.0", 100)
        True
        >>> values_equal("USD", "USD")
        True
    """
    expected_text = str(expected).strip()
    try:
        left, right = Decimal(value), Decimal(expected_text)
    except InvalidOperation:
        return value == expected_text
    if left.is_finite() and right.is_finite():
        return left == right
    return value == expected_text


class RuleValidatorBase:
    """Template for chain strategies.

    Subclasses set ``kinds`` and ``validator_name`` and implement ``check``.
    """

    kinds: frozenset[ValidationType] = frozenset()
    validator_name: str = "rule_validator"

    def validate(self, field: Field) -> RuleResult:
        rules = [rule for rule in field.config.validations if rule.type in self.kinds]
        if not rules:
            return RuleResult(handled=False)

        result = RuleResult(handled=True)
        for rule in rules:
            result.evaluated += 1
            if self.check(field, rule):
                continue
            error = build_error(
                field,
                rule.severity,
                rule.error_message or self.default_message(field, rule),
                rule.type,
            )
            field.add_error(error)
            result.errors.append(error)
        return result

    def check(self, field: Field, rule: ValidationConfig) -> bool:
        """Return True when the field passes ``rule``."""
        raise NotImplementedError

    def default_message(self, field: Field, rule: ValidationConfig) -> str:
        return f"Field '{field.name}' failed {rule.type.value} validation"

    def require_params(self, field: Field, rule: ValidationConfig) -> Any:
        """Return the rule's parameters, raising when they are absent."""
        if rule.params is None:
            raise ValidatorConfigurationError(
                f"{rule.type.value} rule on field '{field.name}' requires params",
                validator_name=self.validator_name,
                field=field.name,
                validation_type=rule.type.value,
                parameter="params",
                reason="Missing parameter",
            )
        return rule.params
