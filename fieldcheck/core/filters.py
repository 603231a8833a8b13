"""Filter expressions evaluated against the execution context.

A condition string holds one or more filters joined by ``&``; the condition
matches only when every filter matches. Each filter reads
``subject operator control``, where subject and control may reference
context values as ``${name}``:

    ${currency} = USD & ${amount} between [100|500]

Supported operators:
    - Comparison: ``=``, ``!=``, ``>``, ``>=``, ``<``, ``<=``
    - Lists (written ``[a|b|c]``): ``in``, ``not in``, ``between`` (inclusive)
    - Text: ``contain``, ``not contain``, ``start with``, ``end with``,
      ``match`` (whole-value regex)
    - Unary: ``is empty``, ``is not empty``

Operands that both parse as decimals compare numerically; anything else
compares as text. Ordering operators never match non-numeric operands.
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from fieldcheck.core.context import ExecutionContext
from fieldcheck.core.exceptions import FilterError

logger = logging.getLogger(__name__)

FILTER_SEPARATOR = "&"


class FilterOperator(Enum):
    EQUAL = "="
    NOT_EQUAL = "!="
    GREATER = ">"
    GREATER_OR_EQUAL = ">="
    LESSER = "<"
    LESSER_OR_EQUAL = "<="
    IN = "in"
    NOT_IN = "not in"
    BETWEEN = "between"
    CONTAIN = "contain"
    NOT_CONTAIN = "not contain"
    START_WITH = "start with"
    END_WITH = "end with"
    MATCH = "match"
    IS_EMPTY = "is empty"
    IS_NOT_EMPTY = "is not empty"


_UNARY = re.compile(r"^(?P<subject>.*?)\s+(?P<op>is not empty|is empty)$", re.IGNORECASE)
_SYMBOL = re.compile(r"^(?P<subject>.+?)\s*(?P<op>!=|>=|<=|=|>|<)\s*(?P<control>.*)$")
_WORD = re.compile(
    r"^(?P<subject>.+?)\s+"
    r"(?P<op>not in|not contain|start with|end with|between|contain|match|in)"
    r"\s+(?P<control>.+)$",
    re.IGNORECASE,
)

_LIST_OPERATORS = {FilterOperator.IN, FilterOperator.NOT_IN, FilterOperator.BETWEEN}


def _to_number(text: str) -> Decimal | None:
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _equals(left: str, right: str) -> bool:
    left_number, right_number = _to_number(left), _to_number(right)
    if left_number is not None and right_number is not None:
        return left_number == right_number
    return left == right


def _split_list(control: str) -> list[str]:
    text = control.strip()
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1]
    return [item.strip() for item in text.split("|")]


@dataclass(frozen=True)
class Filter:
    """One ``subject operator control`` comparison."""

    subject: str
    operator: FilterOperator
    control: str = ""

    @classmethod
    def parse(cls, text: str, condition: str | None = None) -> "Filter":
        """Compile one filter.

        Raises:
            FilterError: If no operator can be found or operands are missing
        """
        text = text.strip()
        if not text:
            raise FilterError(
                "Empty filter in condition", condition=condition, reason="Blank filter"
            )

        unary = _UNARY.match(text)
        if unary and unary.group("subject").strip():
            return cls(unary.group("subject").strip(), FilterOperator(unary.group("op").lower()))

        # the operator that appears first wins
        candidates = [m for m in (_SYMBOL.match(text), _WORD.match(text)) if m]
        if not candidates:
            raise FilterError(
                f"No operator found in filter '{text}'",
                condition=condition,
                filter=text,
                reason="Missing operator",
            )
        match = min(candidates, key=lambda m: m.start("op"))
        subject = match.group("subject").strip()
        control = match.group("control").strip()
        operator = FilterOperator(" ".join(match.group("op").lower().split()))

        if not subject:
            raise FilterError(
                f"Missing subject in filter '{text}'",
                condition=condition,
                filter=text,
                reason="Missing subject",
            )
        if operator is FilterOperator.BETWEEN and len(_split_list(control)) != 2:
            raise FilterError(
                f"'between' requires exactly two bounds in filter '{text}'",
                condition=condition,
                filter=text,
                reason="Invalid bounds",
            )
        if operator is FilterOperator.MATCH:
            try:
                re.compile(control)
            except re.error as e:
                raise FilterError(
                    f"Invalid regex in filter '{text}': {e}",
                    condition=condition,
                    filter=text,
                    reason="Invalid regex",
                ) from e

        return cls(subject, operator, control)

    def is_match(self, context: ExecutionContext) -> bool:
        subject = context.replace_tokens(self.subject).strip()
        control = context.replace_tokens(self.control).strip()
        op = self.operator

        if op is FilterOperator.IS_EMPTY:
            return subject == ""
        if op is FilterOperator.IS_NOT_EMPTY:
            return subject != ""
        if op is FilterOperator.EQUAL:
            return _equals(subject, control)
        if op is FilterOperator.NOT_EQUAL:
            return not _equals(subject, control)

        if op in _LIST_OPERATORS:
            items = _split_list(control)
            if op is FilterOperator.IN:
                return any(_equals(subject, item) for item in items)
            if op is FilterOperator.NOT_IN:
                return not any(_equals(subject, item) for item in items)
            value, low, high = _to_number(subject), _to_number(items[0]), _to_number(items[1])
            if value is None or low is None or high is None:
                return False
            return low <= value <= high

        if op is FilterOperator.CONTAIN:
            return control in subject
        if op is FilterOperator.NOT_CONTAIN:
            return control not in subject
        if op is FilterOperator.START_WITH:
            return subject.startswith(control)
        if op is FilterOperator.END_WITH:
            return subject.endswith(control)
        if op is FilterOperator.MATCH:
            return re.fullmatch(control, subject) is not None

        left, right = _to_number(subject), _to_number(control)
        if left is None or right is None:
            return False
        if op is FilterOperator.GREATER:
            return left > right
        if op is FilterOperator.GREATER_OR_EQUAL:
            return left >= right
        if op is FilterOperator.LESSER:
            return left < right
        return left <= right


class FilterList:
    """A compiled condition: every filter must match.

    Example:
        >>> context = ExecutionContext({"currency": "USD", "amount": "250"})
        >>> FilterList("${currency} = USD & ${amount} > 100").is_matched(context, "check")
        True
    """

    def __init__(self, condition: str) -> None:
        if condition is None or not condition.strip():
            raise FilterError("Condition must not be empty", condition=condition)
        self.condition = condition
        self.filters = [
            Filter.parse(part, condition) for part in condition.split(FILTER_SEPARATOR)
        ]

    def is_matched(self, context: ExecutionContext, label: str) -> bool:
        matched = all(f.is_match(context) for f in self.filters)
        logger.debug("%s '%s': %s", label, self.condition, matched)
        return matched
