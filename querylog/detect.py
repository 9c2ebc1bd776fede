import re
from enum import Enum


class LineShape(str, Enum):
    """
    Supported record line layouts.

    TIMESTAMPED lines carry a 23-char timestamp prefix, PLAIN lines do not.
    AUTO picks one of the two per line.
    """
    TIMESTAMPED = "timestamped"
    PLAIN = "plain"
    AUTO = "auto"


SHAPE_NAMES = [s.value for s in LineShape]

# Cheap structural check: "2015-05-29 ..."
DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2} ")


def parse_shape(name: str) -> LineShape:
    """Raises ValueError for names outside SHAPE_NAMES."""
    return LineShape(name.strip().lower())


def detect_shape(line: str) -> LineShape:
    """
    Decide which concrete layout an AUTO line should be parsed with.

    Never returns AUTO and never throws.
    """
    if DATE_PREFIX.match(line):
        return LineShape.TIMESTAMPED
    return LineShape.PLAIN
