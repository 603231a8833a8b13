"""Custom exception classes for fieldcheck error handling.

This module defines the exception hierarchy for the validation run:
- AggregationError: Map-function values that cannot be accumulated
- FilterError: Malformed filter-expression conditions
- ContextError: Record data inconsistent with its configuration

Validation failures are never raised; they are recorded as Error entries on
the offending field. Exceptions here signal structural faults that abort the
run. All exceptions inherit from FieldcheckError for consistent error handling.
"""

from typing import Any


class FieldcheckError(Exception):
    """Base exception for all fieldcheck errors.

    Provides a common base class for all custom exceptions raised during a
    validation run, enabling catch-all error handling when needed.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            context: Optional dictionary of contextual information (field names,
                    aggregate names, values, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


class AggregationError(FieldcheckError):
    """Exception raised when a map-function value cannot be accumulated.

    Raised when a field value feeding an aggregate does not parse as a
    decimal, or when an aggregate name already holds an accumulator of a
    different function kind.

    Context typically includes:
        - map_to: Target aggregate name
        - field: Source field name
        - value: Offending raw value
        - function: Map function being applied
    """

    def __init__(
        self,
        message: str,
        map_to: str | None = None,
        field: str | None = None,
        value: Any = None,
        function: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize aggregation error with accumulator details.

        Args:
            message: Human-readable error description
            map_to: Target aggregate name
            field: Source field name
            value: Offending raw value
            function: Map function being applied
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if map_to is not None:
            context["map_to"] = map_to
        if field is not None:
            context["field"] = field
        if value is not None:
            context["value"] = value
        if function is not None:
            context["function"] = function
        context.update(extra_context)

        super().__init__(message, context)


class FilterError(FieldcheckError):
    """Exception raised when a filter condition cannot be compiled.

    Context typically includes:
        - condition: The full condition string
        - filter: The individual filter that failed to parse
        - reason: Why it failed
    """

    def __init__(
        self,
        message: str,
        condition: str | None = None,
        filter: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize filter error with expression details.

        Args:
            message: Human-readable error description
            condition: The full condition string
            filter: The individual filter that failed to parse
            reason: Why the filter is malformed
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if condition is not None:
            context["condition"] = condition
        if filter is not None:
            context["filter"] = filter
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class ContextError(FieldcheckError):
    """Exception raised when record data does not line up with its configuration.

    Context typically includes:
        - record: Record configuration name
        - field: Field that could not be resolved
        - reason: Specific reason for the failure
    """

    def __init__(
        self,
        message: str,
        record: str | None = None,
        field: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if record is not None:
            context["record"] = record
        if field is not None:
            context["field"] = field
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)
