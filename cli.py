import argparse
import os
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Sequence, Union

from diffwriter import write_diff
from loader import LoadMetrics, LogLoader
from querylog.detect import SHAPE_NAMES, parse_shape
from querylog.types import Record
from reconcile import reconcile
from report import render_report, write_report
from settings import Settings


USAGE = "Usage: querycmp filename1 filename2"


# ---------------- CLI ----------------

def parse_args(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(
        prog="querycmp",
        description="Compare the timed queries recorded in two log files",
    )
    # Counted by hand so a wrong count reports the plain usage line;
    # parsed intermixed so options may sit between the two files
    parser.add_argument("files", nargs="*", metavar="FILE")
    parser.add_argument(
        "--shape",
        choices=SHAPE_NAMES,
        help="Record line layout (default: $QUERYCMP_SHAPE or timestamped)",
    )
    parser.add_argument(
        "--marker",
        help="Token that precedes the elapsed time (default: [RDFServiceLogger])",
    )
    parser.add_argument(
        "--output-dir",
        help="Where report and diff files go (default: current directory)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print an ingestion summary for each file",
    )

    return parser.parse_intermixed_args(argv)


# ---------------- Input validation ----------------

class FailureKind(Enum):
    USAGE = auto()
    FILE_NOT_FOUND = auto()


@dataclass(frozen=True)
class InputFailure:
    kind: FailureKind
    message: str


@dataclass(frozen=True)
class Comparison:
    file_left: str
    file_right: str
    base_left: str
    base_right: str
    report_path: str
    diff_left_path: str
    diff_right_path: str


def prepare_comparison(
    files: Sequence[str],
    output_dir: str = ".",
) -> Union[Comparison, InputFailure]:
    if len(files) != 2:
        return InputFailure(FailureKind.USAGE, USAGE)

    file_left, file_right = (
        os.path.abspath(os.path.expanduser(f)) for f in files
    )
    for path in (file_left, file_right):
        if not os.path.isfile(path):
            return InputFailure(
                FailureKind.FILE_NOT_FOUND,
                f"File not found: '{path}'",
            )

    base_left = os.path.basename(file_left)
    base_right = os.path.basename(file_right)
    out = os.path.abspath(output_dir)

    return Comparison(
        file_left=file_left,
        file_right=file_right,
        base_left=base_left,
        base_right=base_right,
        report_path=os.path.join(out, f"report-{base_left}-{base_right}"),
        diff_left_path=os.path.join(out, f"diff-{base_left}-{base_right}"),
        diff_right_path=os.path.join(out, f"diff-{base_right}-{base_left}"),
    )


# ---------------- Helpers ----------------

def warning(message: str):
    print(f"WARNING: {message}")


def error(message: str):
    print(f"ERROR: {message}")


def print_ingest_summary(name: str, metrics: LoadMetrics):
    print(f"\nIngestion summary: {name}")
    print(f"  Lines read    : {metrics.lines}")
    print(f"  Records       : {metrics.parsed}")
    print(f"  Skipped lines : {metrics.skipped}")

    if metrics.skipped:
        print("  Skip reasons:")
        for reason, count in sorted(metrics.skipped_by_reason.items()):
            print(f"    {reason}: {count}")


# ---------------- Main ----------------

def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError:
        error(
            "Unknown line shape in QUERYCMP_SHAPE "
            f"(expected one of: {', '.join(SHAPE_NAMES)})"
        )
        return 1

    shape = parse_shape(args.shape) if args.shape else settings.shape
    marker = args.marker or settings.marker
    output_dir = args.output_dir or settings.output_dir

    prepared = prepare_comparison(args.files, output_dir)
    if isinstance(prepared, InputFailure):
        error(prepared.message)
        return 1

    if prepared.base_left == prepared.base_right:
        warning(
            f"Both files are named '{prepared.base_left}'; "
            "the second diff file overwrites the first"
        )

    # ---- Load ----
    loader = LogLoader(shape=shape, marker=marker)
    loaded: List[List[Record]] = []
    for path, name in (
        (prepared.file_left, prepared.base_left),
        (prepared.file_right, prepared.base_right),
    ):
        try:
            records = loader.load(path)
        except FileNotFoundError as e:
            error(str(e))
            return 1

        if args.verbose:
            print_ingest_summary(name, loader.metrics)
        if not records:
            warning(f"No query records found in '{path}'")
        loaded.append(records)

    left, right = loaded

    # ---- Compare ----
    result = reconcile(left, right)

    # ---- Report ----
    lines = render_report(
        prepared.base_left,
        prepared.base_right,
        left,
        right,
        result,
    )
    for line in lines:
        print(line)

    os.makedirs(os.path.dirname(prepared.report_path), exist_ok=True)
    write_report(prepared.report_path, lines)

    # ---- Diffs ----
    write_diff(prepared.diff_left_path, result.unique_left)
    write_diff(prepared.diff_right_path, result.unique_right)

    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
