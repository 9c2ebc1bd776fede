from collections import defaultdict, deque
from typing import Deque, Dict, List, Sequence, Set

from querylog.types import ReconciliationResult, Record


class MultisetReconciler:
    """
    Pairs records of two sorted sequences by query string.

    Each left record takes the earliest still-unpaired right record with the
    same query string. Repeated queries therefore pair k-th occurrence with
    k-th occurrence, and only the surplus on either side ends up unique.
    Elapsed times play no part in the pairing.
    """

    def __init__(self, right: Sequence[Record]):
        self.right = list(right)

        # query string -> deque of unpaired indices into right, in order
        self._unpaired: Dict[str, Deque[int]] = defaultdict(deque)
        for idx, r in enumerate(self.right):
            self._unpaired[r.query_string].append(idx)

        self._paired: Set[int] = set()

    def take(self, query_string: str) -> Record | None:
        """Claim the first unpaired right record for query_string, if any."""
        candidates = self._unpaired.get(query_string)
        if not candidates:
            return None

        idx = candidates.popleft()
        self._paired.add(idx)
        return self.right[idx]

    def remaining(self) -> List[Record]:
        return [
            r for idx, r in enumerate(self.right)
            if idx not in self._paired
        ]


def reconcile(
    left: Sequence[Record],
    right: Sequence[Record],
) -> ReconciliationResult:
    reconciler = MultisetReconciler(right)

    common_count = 0
    common_time_left = 0.0
    common_time_right = 0.0
    unique_left: List[Record] = []

    for r in left:
        match = reconciler.take(r.query_string)
        if match is None:
            unique_left.append(r)
            continue

        common_count += 1
        common_time_left += r.elapsed_time
        common_time_right += match.elapsed_time

    return ReconciliationResult(
        common_count=common_count,
        common_time_left=common_time_left,
        common_time_right=common_time_right,
        unique_left=tuple(unique_left),
        unique_right=tuple(reconciler.remaining()),
    )
