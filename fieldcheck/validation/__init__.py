"""Field validation for fieldcheck.

This package provides the validation chain and its rule strategies, the
basic structural validator, error collection, the declarative record
configuration loader, and the executor that drives a validation run.
"""

# Basic validation
from fieldcheck.validation.basic import BasicValidator

# Validation chain
from fieldcheck.validation.chain import ValidationChain

# Error collection
from fieldcheck.validation.collector import collect_errors

# Declarative configuration
from fieldcheck.validation.declarative import load_record_config, parse_record_config

# Exceptions
from fieldcheck.validation.exceptions import (
    ConfigurationSchemaError,
    ValidatorConfigurationError,
    ValidatorError,
    ValidatorExecutionError,
)

# Run orchestration
from fieldcheck.validation.executor import ValidationsExecutor

# Core protocols
from fieldcheck.validation.protocols import FieldValidator, LookupBackend
from fieldcheck.validation.result import RuleResult

# Rule strategies
from fieldcheck.validation.rules import (
    DateValidator,
    EqualsValidator,
    InListValidator,
    LookupValidator,
    RegexValidator,
    RuleValidatorBase,
)

__all__ = [
    # Core protocols and data structures
    "FieldValidator",
    "LookupBackend",
    "RuleResult",
    # Chain and strategies
    "ValidationChain",
    "RuleValidatorBase",
    "RegexValidator",
    "EqualsValidator",
    "InListValidator",
    "DateValidator",
    "LookupValidator",
    # Basic validation and collection
    "BasicValidator",
    "collect_errors",
    # Orchestration
    "ValidationsExecutor",
    # Declarative configuration
    "load_record_config",
    "parse_record_config",
    # Exceptions
    "ValidatorError",
    "ValidatorConfigurationError",
    "ValidatorExecutionError",
    "ConfigurationSchemaError",
]
