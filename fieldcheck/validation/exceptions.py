"""Validation-specific exceptions.

This module defines the exception hierarchy for validators and for the
declarative configuration loader. All exceptions extend from FieldcheckError
for consistent error handling.

A failed rule is never an exception; these signal configuration defects and
unreachable lookups, which abort the run.
"""

from typing import Any

from fieldcheck.core.exceptions import FieldcheckError


class ValidatorError(FieldcheckError):
    """Base exception for rule strategies.

    Every validator error concerns one rule on one field.

    Context typically includes:
        - validator_name: Strategy that raised the error
        - field: Field carrying the rule
        - validation_type: Kind of the rule being evaluated (REGEX, DB, ...)
    """

    def __init__(
        self,
        message: str,
        validator_name: str | None = None,
        field: str | None = None,
        validation_type: str | None = None,
        **extra_context: Any,
    ) -> None:
        located = {
            "validator_name": validator_name,
            "field": field,
            "validation_type": validation_type,
        }
        context = {key: value for key, value in located.items() if value is not None}
        context.update((k, v) for k, v in extra_context.items() if v is not None)
        super().__init__(message, context)


class ValidatorConfigurationError(ValidatorError):
    """A rule carries parameters its strategy cannot use.

    Raised for missing parameters, invalid regex patterns, a DATE rule
    without a format, or lookup kinds with no registered backend.

    Context adds ``parameter`` (the offending rule key), ``value`` and
    ``reason``.

    Example:
        >>> raise ValidatorConfigurationError(
        ...     "REGEX rule requires a pattern",
        ...     validator_name="RegexValidator",
        ...     field="amount",
        ...     validation_type="REGEX",
        ...     parameter="params",
        ...     reason="Missing parameter"
        ... )
    """

    def __init__(
        self,
        message: str,
        validator_name: str | None = None,
        field: str | None = None,
        validation_type: str | None = None,
        parameter: str | None = None,
        value: Any = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(
            message,
            validator_name=validator_name,
            field=field,
            validation_type=validation_type,
            parameter=parameter,
            value=value,
            reason=reason,
        )


class ValidatorExecutionError(ValidatorError):
    """A lookup backend failed before it could pass or fail the rule.

    Unlike a failed rule, which is recorded on the field, this aborts the
    run. Context adds ``backend`` (the backend's class name) and ``reason``.
    """

    def __init__(
        self,
        message: str,
        validator_name: str | None = None,
        field: str | None = None,
        validation_type: str | None = None,
        backend: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(
            message,
            validator_name=validator_name,
            field=field,
            validation_type=validation_type,
            backend=backend,
            reason=reason,
        )


class ConfigurationSchemaError(FieldcheckError):
    """Exception raised when a declarative record configuration is invalid.

    Context typically includes:
        - section: Configuration section ("fields", "map_functions", ...)
        - index: Index of the offending entry within its section
        - field: Configuration key that is invalid
        - value: Invalid value provided
        - reason: Why the configuration is invalid

    Example:
        >>> raise ConfigurationSchemaError(
        ...     "Unknown validation type: 'LOOKUP'",
        ...     section="fields",
        ...     index=0,
        ...     field="type",
        ...     value="LOOKUP",
        ...     reason="Validation type not recognized"
        ... )
    """

    def __init__(
        self,
        message: str,
        section: str | None = None,
        index: int | None = None,
        field: str | None = None,
        value: Any = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize configuration schema error.

        Args:
            message: Human-readable error description
            section: Configuration section containing the fault
            index: Index of the entry within its section
            field: Configuration key that is invalid
            value: Invalid value provided
            reason: Why the configuration is invalid
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if section is not None:
            context["section"] = section
        if index is not None:
            context["index"] = index
        if field is not None:
            context["field"] = field
        if value is not None:
            context["value"] = value
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)
