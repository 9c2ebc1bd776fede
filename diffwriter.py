from typing import Iterable

from querylog.types import Record


TIMESTAMP_PRINT_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_record(record: Record) -> str:
    elapsed = "%8.3f" % record.elapsed_time

    if record.timestamp is None:
        return f"{elapsed} {record.query_string}"

    # milliseconds are truncated, not rounded
    ts = record.timestamp
    millis = ts.microsecond // 1000
    stamp = f"{ts.strftime(TIMESTAMP_PRINT_FORMAT)},{millis:03d}"
    return f"{stamp} {elapsed} {record.query_string}"


def write_diff(path: str, records: Iterable[Record]) -> int:
    """Write one line per record, in the given order. Returns the line count."""
    count = 0
    with open(path, "w", encoding="utf-8", errors="surrogateescape") as handle:
        for record in records:
            handle.write(format_record(record) + "\n")
            count += 1
    return count
