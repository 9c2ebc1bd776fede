from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class LineMatch:
    """
    Raw fields pulled out of one matching log line.

    Nothing here is converted yet:
    - elapsed_time is the token as written
    - timestamp is the 23-char prefix, or None for plain lines
    """
    query_string: str
    elapsed_time: str
    timestamp: Optional[str] = None


@dataclass(frozen=True)
class NoMatch:
    reason: str  # no_match | bad_elapsed | bad_timestamp | empty_query


ParseResult = Union[LineMatch, NoMatch]


@dataclass(frozen=True)
class Record:
    """
    One query execution.

    query_string is the only key used for matching and sorting.
    The timestamp is carried along for the diff output only.
    """
    query_string: str
    elapsed_time: float
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class ReconciliationResult:
    common_count: int
    common_time_left: float
    common_time_right: float
    unique_left: Tuple[Record, ...]
    unique_right: Tuple[Record, ...]

    @property
    def unique_time_left(self) -> float:
        return sum_times(self.unique_left)

    @property
    def unique_time_right(self) -> float:
        return sum_times(self.unique_right)


def sum_times(records) -> float:
    total = 0.0
    for r in records:
        total += r.elapsed_time
    return total
