from typing import List, Sequence

from querylog.types import ReconciliationResult, Record, sum_times


# ---------- Layout ----------

HEADER_TEMPLATE = "%*s     total        common       unique"
ROW_TEMPLATE = "%*s %5d %6.3f %5d %6.3f %5d %6.3f"


def render_report(
    name_left: str,
    name_right: str,
    left: Sequence[Record],
    right: Sequence[Record],
    result: ReconciliationResult,
) -> List[str]:
    """
    Render the comparison table, one string per line:

                    total        common       unique
      filename1   900  1.234   124  1.500   102 11.500
      filename2  1024  6.103   124 12.105   600  4.123

    The name column is as wide as the longer file name.
    """
    width = max(len(name_left), len(name_right))

    return [
        HEADER_TEMPLATE % (width, " "),
        ROW_TEMPLATE % (
            width,
            name_left,
            len(left),
            sum_times(left),
            result.common_count,
            result.common_time_left,
            len(result.unique_left),
            result.unique_time_left,
        ),
        ROW_TEMPLATE % (
            width,
            name_right,
            len(right),
            sum_times(right),
            result.common_count,
            result.common_time_right,
            len(result.unique_right),
            result.unique_time_right,
        ),
    ]


def write_report(path: str, lines: Sequence[str]) -> None:
    with open(path, "w", encoding="utf-8", errors="surrogateescape") as handle:
        for line in lines:
            handle.write(line + "\n")
