"""External lookup rule validator.

SQL, API and DB rules are evaluated by backends the host pipeline registers
per validation kind. The validator blocks on the backend call; a backend
failure aborts the run.
"""

import logging
from collections.abc import Mapping

from fieldcheck.core.models import Field, ValidationConfig, ValidationType
from fieldcheck.validation.exceptions import (
    ValidatorConfigurationError,
    ValidatorError,
    ValidatorExecutionError,
)
from fieldcheck.validation.protocols import LookupBackend
from fieldcheck.validation.rules.base import RuleValidatorBase

logger = logging.getLogger(__name__)

LOOKUP_KINDS = frozenset({ValidationType.SQL, ValidationType.API, ValidationType.DB})


class LookupValidator(RuleValidatorBase):
    """Delegates SQL, API and DB rules to registered backends.

    Attributes:
        backends: Backend per validation kind

    Example:
        >>> class InMemoryBackend:
        ...     def __init__(self, known):
        ...         self.known = known
        ...     def lookup(self, field, rule):
        ...         return field.value in self.known
        >>> validator = LookupValidator({ValidationType.DB: InMemoryBackend({"1001"})})
    """

    kinds = LOOKUP_KINDS
    validator_name = "LookupValidator"

    def __init__(self, backends: Mapping[ValidationType, LookupBackend] | None = None) -> None:
        self.backends: dict[ValidationType, LookupBackend] = dict(backends or {})

    def register(self, kind: ValidationType, backend: LookupBackend) -> None:
        if kind not in LOOKUP_KINDS:
            raise ValueError(f"{kind.value} is not a lookup validation type")
        self.backends[kind] = backend

    def check(self, field: Field, rule: ValidationConfig) -> bool:
        backend = self.backends.get(rule.type)
        if backend is None:
            raise ValidatorConfigurationError(
                f"No lookup backend registered for {rule.type.value} rule on field '{field.name}'",
                validator_name=self.validator_name,
                field=field.name,
                validation_type=rule.type.value,
                reason="Missing backend",
            )
        try:
            passed = backend.lookup(field, rule)
        except ValidatorError:
            raise
        except Exception as e:
            raise ValidatorExecutionError(
                f"{rule.type.value} lookup failed for field '{field.name}': {e}",
                validator_name=self.validator_name,
                field=field.name,
                validation_type=rule.type.value,
                backend=type(backend).__name__,
                reason=str(e),
            ) from e
        logger.debug("%s lookup for field %s: %s", rule.type.value, field.name, passed)
        return bool(passed)

    def default_message(self, field: Field, rule: ValidationConfig) -> str:
        return f"Field value '{field.value}' failed {rule.type.value} lookup"
