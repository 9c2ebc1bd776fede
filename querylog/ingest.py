import math
from datetime import datetime
from typing import Optional, Union

from .detect import LineShape
from .parsers import DEFAULT_MARKER, parse_line
from .types import LineMatch, NoMatch, Record


TIMESTAMP_PARSE_FORMAT = "%Y-%m-%d %H:%M:%S,%f"


def to_record(match: LineMatch) -> Union[Record, NoMatch]:
    """
    Convert raw matched fields into a Record.

    Anything that does not convert cleanly turns the line into a NoMatch;
    the caller treats those exactly like lines of some other format.
    """
    if not match.query_string:
        return NoMatch("empty_query")

    try:
        elapsed = float(match.elapsed_time)
    except ValueError:
        return NoMatch("bad_elapsed")

    if not math.isfinite(elapsed) or elapsed < 0:
        return NoMatch("bad_elapsed")

    timestamp = None
    if match.timestamp is not None:
        try:
            timestamp = datetime.strptime(match.timestamp, TIMESTAMP_PARSE_FORMAT)
        except ValueError:
            return NoMatch("bad_timestamp")

    return Record(
        query_string=match.query_string,
        elapsed_time=elapsed,
        timestamp=timestamp,
    )


def classify_line(
    line: str,
    shape: LineShape = LineShape.TIMESTAMPED,
    marker: str = DEFAULT_MARKER,
) -> Union[Record, NoMatch]:
    """
    Turn a single raw log line into a Record, or say why it is not one.

    Pipeline:
      raw line
        → trailing newline stripped
          → shape-specific parser
            → field conversion
              → Record
    """
    parsed = parse_line(line.rstrip("\r\n"), shape, marker)
    if isinstance(parsed, NoMatch):
        return parsed
    return to_record(parsed)


def ingest_line(
    line: str,
    shape: LineShape = LineShape.TIMESTAMPED,
    marker: str = DEFAULT_MARKER,
) -> Optional[Record]:
    result = classify_line(line, shape, marker)
    if isinstance(result, NoMatch):
        return None
    return result
