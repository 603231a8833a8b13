"""Validation rule strategies plugged into the validation chain."""

from fieldcheck.validation.rules.base import RuleValidatorBase, values_equal
from fieldcheck.validation.rules.dates import DateValidator
from fieldcheck.validation.rules.equals import EqualsValidator, InListValidator
from fieldcheck.validation.rules.lookup import LOOKUP_KINDS, LookupValidator
from fieldcheck.validation.rules.regex import RegexValidator

__all__ = [
    "LOOKUP_KINDS",
    "DateValidator",
    "EqualsValidator",
    "InListValidator",
    "LookupValidator",
    "RegexValidator",
    "RuleValidatorBase",
    "values_equal",
]
