import re
from functools import lru_cache
from typing import Pattern

from .detect import LineShape, detect_shape
from .types import LineMatch, NoMatch, ParseResult


DEFAULT_MARKER = "[RDFServiceLogger]"

TIMESTAMP_WIDTH = 23  # "2015-05-29 17:30:01,474"


# -----------------------------
# PLAIN PARSER
# -----------------------------

@lru_cache(maxsize=16)
def plain_pattern(marker: str) -> Pattern:
    return re.compile(
        re.escape(marker)
        + r"""
        \s+
        (?P<elapsed>\S+)     # elapsed seconds, validated later
        \s+
        (?P<query>.*)        # rest of the line, opaque
        $
        """,
        re.VERBOSE,
    )


def parse_plain(line: str, marker: str = DEFAULT_MARKER) -> ParseResult:
    """
    Parse lines like:
      INFO  [RDFServiceLogger]    0.001 sparqlSelectQuery [JSON, SELECT ...]
    """
    m = plain_pattern(marker).search(line)
    if not m:
        return NoMatch("no_match")

    return LineMatch(
        query_string=m.group("query"),
        elapsed_time=m.group("elapsed"),
    )


# -----------------------------
# TIMESTAMPED PARSER
# -----------------------------

@lru_cache(maxsize=16)
def timestamped_pattern(marker: str) -> Pattern:
    return re.compile(
        r"^(?P<ts>.{%d})" % TIMESTAMP_WIDTH
        + r".*?"             # first marker wins, as in the plain shape
        + re.escape(marker)
        + r"""
        \s+
        (?P<elapsed>\S+)
        \s+
        (?P<query>.*)
        $
        """,
        re.VERBOSE,
    )


def parse_timestamped(line: str, marker: str = DEFAULT_MARKER) -> ParseResult:
    """
    Parse lines like:
      2015-05-29 17:30:01,474 INFO  [RDFServiceLogger]    0.001 sparqlSelectQuery [...]

    The first 23 characters are taken as the timestamp without looking at
    them; conversion happens at ingest.
    """
    m = timestamped_pattern(marker).match(line)
    if not m:
        return NoMatch("no_match")

    return LineMatch(
        query_string=m.group("query"),
        elapsed_time=m.group("elapsed"),
        timestamp=m.group("ts"),
    )


def parse_line(
    line: str,
    shape: LineShape = LineShape.TIMESTAMPED,
    marker: str = DEFAULT_MARKER,
) -> ParseResult:
    if shape == LineShape.AUTO:
        shape = detect_shape(line)

    if shape == LineShape.TIMESTAMPED:
        return parse_timestamped(line, marker)
    return parse_plain(line, marker)
