"""RuleResult data structure.

This module defines the outcome a field validator reports back to the
validation chain: whether it recognized any of the field's rules, and the
errors it recorded.
"""

from dataclasses import dataclass, field

from fieldcheck.core.models import Error, Severity


@dataclass
class RuleResult:
    """Outcome of one validator applied to one field.

    Attributes:
        handled: True if the validator recognized at least one of the field's rules
        errors: Errors recorded for failed rules, in evaluation order
        evaluated: Number of rules the validator evaluated

    Example:
        >>> result = RuleResult(handled=True, evaluated=2)
        >>> result.has_errors()
        False
    """

    handled: bool
    errors: list[Error] = field(default_factory=list)
    evaluated: int = 0

    def has_errors(self) -> bool:
        """Check if any recorded error has ERROR severity."""
        return any(e.severity is Severity.ERROR for e in self.errors)

    def format(self) -> str:
        """Format the result as a human-readable string.

        Example:
            >>> print(RuleResult(handled=False).format())
            not applicable
        """
        if not self.handled:
            return "not applicable"
        lines = [f"{self.evaluated} rule(s) evaluated, {len(self.errors)} failed"]
        lines.extend(f"  - {e.format()}" for e in self.errors)
        return "\n".join(lines)

    @staticmethod
    def combine(results: list["RuleResult"]) -> "RuleResult":
        """Combine per-validator results for one field.

        The combined result is handled if any input was, and carries every
        error in input order.
        """
        errors: list[Error] = []
        for result in results:
            errors.extend(result.errors)
        return RuleResult(
            handled=any(r.handled for r in results),
            errors=errors,
            evaluated=sum(r.evaluated for r in results),
        )
