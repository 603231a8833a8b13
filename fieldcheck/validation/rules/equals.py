"""Equality and list-membership rule validators."""

from fieldcheck.core.models import Field, ValidationConfig, ValidationType
from fieldcheck.validation.exceptions import ValidatorConfigurationError
from fieldcheck.validation.rules.base import RuleValidatorBase, values_equal


class EqualsValidator(RuleValidatorBase):
    """Checks that the trimmed value equals the rule's expected value."""

    kinds = frozenset({ValidationType.EQUALS})
    validator_name = "EqualsValidator"

    def check(self, field: Field, rule: ValidationConfig) -> bool:
        expected = self.require_params(field, rule)
        return values_equal((field.value or "").strip(), expected)

    def default_message(self, field: Field, rule: ValidationConfig) -> str:
        return f"Field value '{field.value}' is not equal to '{rule.params}'"


class InListValidator(RuleValidatorBase):
    """Checks that the trimmed value is one of the rule's listed values."""

    kinds = frozenset({ValidationType.IN})
    validator_name = "InListValidator"

    def check(self, field: Field, rule: ValidationConfig) -> bool:
        allowed = self.require_params(field, rule)
        if isinstance(allowed, str) or not hasattr(allowed, "__iter__"):
            raise ValidatorConfigurationError(
                f"IN rule on field '{field.name}' requires a list of values",
                validator_name=self.validator_name,
                field=field.name,
                validation_type=rule.type.value,
                parameter="params",
                value=allowed,
                reason="Expected a list",
            )
        value = (field.value or "").strip()
        return any(values_equal(value, candidate) for candidate in allowed)

    def default_message(self, field: Field, rule: ValidationConfig) -> str:
        allowed = ", ".join(str(v) for v in rule.params)
        return f"Field value '{field.value}' is not one of [{allowed}]"
