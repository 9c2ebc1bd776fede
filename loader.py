import os
from typing import Dict, Iterable, Iterator, List

from querylog.detect import LineShape
from querylog.ingest import classify_line
from querylog.parsers import DEFAULT_MARKER
from querylog.types import NoMatch, Record


# ---------- Metrics ----------

class LoadMetrics:
    def __init__(self):
        self.lines = 0
        self.parsed = 0
        self.skipped = 0
        self.skipped_by_reason: Dict[str, int] = {}

    def record_success(self):
        self.lines += 1
        self.parsed += 1

    def record_skip(self, reason: str):
        self.lines += 1
        self.skipped += 1
        self.skipped_by_reason[reason] = (
            self.skipped_by_reason.get(reason, 0) + 1
        )


# ---------- Loader ----------

def sort_records(records: Iterable[Record]) -> List[Record]:
    # sorted() is stable: equal query strings keep file order
    return sorted(records, key=lambda r: r.query_string)


class LogLoader:
    def __init__(
        self,
        shape: LineShape = LineShape.TIMESTAMPED,
        marker: str = DEFAULT_MARKER,
    ):
        self.shape = shape
        self.marker = marker
        self.metrics = LoadMetrics()

    def ingest(self, lines: Iterable[str]) -> Iterator[Record]:
        for line in lines:
            result = classify_line(line, self.shape, self.marker)
            if isinstance(result, NoMatch):
                self.metrics.record_skip(result.reason)
                continue

            self.metrics.record_success()
            yield result

    def load(self, path: str) -> List[Record]:
        """
        Read every record line of a log file, sorted by query string.

        Metrics are reset per call, so after load() they describe this file.
        """
        if not os.path.isfile(path):
            raise FileNotFoundError(f"File not found: '{path}'")

        self.metrics = LoadMetrics()
        with open(path, "r", encoding="utf-8", errors="surrogateescape") as handle:
            records = list(self.ingest(handle))

        return sort_records(records)


def load(
    path: str,
    shape: LineShape = LineShape.TIMESTAMPED,
    marker: str = DEFAULT_MARKER,
) -> List[Record]:
    return LogLoader(shape=shape, marker=marker).load(path)
