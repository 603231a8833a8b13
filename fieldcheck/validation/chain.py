"""Validation chain.

The chain is a fixed, ordered list of rule strategies. Each field with rules
is offered to every strategy in turn; a strategy that recognizes any of the
field's declared kinds evaluates those rules, the rest pass the field along
untouched. A field with several kinds is therefore checked by every strategy
that applies, in chain order.
"""

import logging
from collections.abc import Mapping, Sequence

from fieldcheck.core.models import Field, ValidationType
from fieldcheck.validation.protocols import FieldValidator, LookupBackend
from fieldcheck.validation.result import RuleResult
from fieldcheck.validation.rules.dates import DateValidator
from fieldcheck.validation.rules.equals import EqualsValidator, InListValidator
from fieldcheck.validation.rules.lookup import LookupValidator
from fieldcheck.validation.rules.regex import RegexValidator

logger = logging.getLogger(__name__)


class ValidationChain:
    """Ordered dispatch of a field's rules to the strategies that handle them.

    The default order is REGEX, EQUALS, IN, DATE, then SQL/API/DB lookup.

    Attributes:
        validators: Strategies in dispatch order

    Example:
        >>> chain = ValidationChain.default()
        >>> result = chain.validate(field)
        >>> result.evaluated
        2
    """

    def __init__(self, validators: Sequence[FieldValidator]) -> None:
        self.validators = tuple(validators)

    @classmethod
    def default(
        cls, lookup_backends: Mapping[ValidationType, LookupBackend] | None = None
    ) -> "ValidationChain":
        """Build the standard chain, wiring any SQL/API/DB lookup backends."""
        return cls(
            [
                RegexValidator(),
                EqualsValidator(),
                InListValidator(),
                DateValidator(),
                LookupValidator(lookup_backends),
            ]
        )

    def validate(self, field: Field) -> RuleResult:
        """Run every applicable strategy against the field.

        Fields without rules are not offered to any strategy.

        Returns:
            Combined RuleResult; ``handled`` is False for fields without rules
            or whose kinds no strategy recognizes
        """
        declared = field.config.validation_types()
        if not declared:
            return RuleResult(handled=False)

        results = [
            validator.validate(field)
            for validator in self.validators
            if validator.kinds & declared
        ]
        combined = RuleResult.combine(results)
        if combined.errors:
            logger.debug("field %s: %s", field.name, combined.format())
        return combined
