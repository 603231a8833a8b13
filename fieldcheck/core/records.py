"""Record set produced and consumed by a validation run.

RecordData is created once per run, mutated by the validation and
aggregation passes, and finally handed to reporting with every error stamped
and the overall pass/fail flag set.
"""

import logging
from dataclasses import dataclass, field

from fieldcheck.aggregation.accumulator import AggregateStore
from fieldcheck.core.models import Error, Record

logger = logging.getLogger(__name__)


@dataclass
class RecordData:
    """Records of one run keyed by 0-based position.

    Attributes:
        records: Records by position; positions are contiguous from 0
        map_values: Aggregates accumulated across all records of the run
        errors: Stamped errors in (position, field, append) order after collection
        has_error: True once any ERROR-severity entry has been collected
    """

    records: dict[int, Record] = field(default_factory=dict)
    map_values: AggregateStore = field(default_factory=AggregateStore)
    errors: list[Error] = field(default_factory=list)
    has_error: bool = False

    @classmethod
    def from_records(cls, records: list[Record]) -> "RecordData":
        return cls(records=dict(enumerate(records)))

    def __len__(self) -> int:
        return len(self.records)

    def ordered(self) -> list[tuple[int, Record]]:
        """Return (position, record) pairs in ascending position order."""
        return sorted(self.records.items())

    def log_map_values(self) -> None:
        for name, value in self.map_values.values().items():
            logger.info("map function value %s = %s", name, value)
