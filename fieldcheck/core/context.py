"""Shared evaluation context for a validation run.

The context is the key-value store that filter conditions are resolved
against. Field values and aggregate values are staged into it before a
condition is evaluated and removed afterwards. It also carries the step log
that records skipped map functions and restored values.

A context belongs to exactly one run. Nothing here is locked, so concurrent
runs must each create their own instance.
"""

import logging
import re
from decimal import Decimal
from typing import Any

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"\$\{([^}]+)\}")


class ExecutionContext:
    """In-memory evaluation context.

    Attributes:
        steps: Messages logged through log_current_step, in order

    Example:
        >>> context = ExecutionContext()
        >>> context.set_data("currency", "USD")
        >>> context.replace_tokens("${currency} = USD")
        'USD = USD'
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})
        self.steps: list[str] = []

    def set_data(self, key: str, value: Any) -> None:
        """Store a value; storing None removes the key."""
        if value is None:
            self.remove_data(key)
            return
        self._data[key] = value

    def get_object_data(self, key: str) -> Any:
        return self._data.get(key)

    def has_data(self, key: str) -> bool:
        return key in self._data

    def remove_data(self, key: str) -> Any:
        return self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def replace_tokens(self, text: str) -> str:
        """Substitute ``${name}`` tokens with their stored values.

        Tokens naming absent keys are left as written.
        """

        def _substitute(match: re.Match) -> str:
            key = match.group(1)
            if key not in self._data:
                return match.group(0)
            return _to_text(self._data[key])

        return TOKEN_PATTERN.sub(_substitute, text)

    def log_current_step(self, message: str) -> None:
        """Record an advisory step message."""
        self.steps.append(message)
        logger.info(message)


def _to_text(value: Any) -> str:
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)
