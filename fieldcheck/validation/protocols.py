"""Validator protocol definitions.

Protocols:
    - FieldValidator: A chain strategy evaluating the rules of the kinds it handles
    - LookupBackend: An external SQL/API/DB verdict source

Every FieldValidator implementation must:
    - Declare the validation kinds it handles in ``kinds``
    - Evaluate every rule of those kinds on the field, not only the first
    - Record failed rules as Error entries on the field, never raise for them
    - Raise only for unusable configuration or unreachable lookups
"""

from typing import TYPE_CHECKING, Protocol

from fieldcheck.core.models import Field, ValidationConfig, ValidationType

if TYPE_CHECKING:
    from fieldcheck.validation.result import RuleResult


class FieldValidator(Protocol):
    """Protocol for validation chain strategies.

    Example:
        >>> class NotEmptyValidator:
        ...     kinds = frozenset({ValidationType.EQUALS})
        ...
        ...     def validate(self, field: Field) -> RuleResult:
        ...         ...
    """

    kinds: frozenset[ValidationType]

    def validate(self, field: Field) -> "RuleResult":
        """Evaluate the field's rules of the kinds this validator handles.

        Args:
            field: Field to validate; failed rules are appended to its errors

        Returns:
            RuleResult with ``handled`` False when none of the field's rules
            are of a handled kind

        Raises:
            ValidatorConfigurationError: If a rule's parameters are unusable
            ValidatorExecutionError: If an external verdict cannot be obtained
        """
        ...


class LookupBackend(Protocol):
    """Source of verdicts for SQL, API and DB rules.

    Implementations block until the verdict is known and raise when the
    backend cannot be reached.
    """

    def lookup(self, field: Field, rule: ValidationConfig) -> bool:
        """Return True when the field's value passes the rule."""
        ...
