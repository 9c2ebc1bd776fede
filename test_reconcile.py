import random

import pytest

from loader import sort_records
from querylog.types import Record, sum_times
from reconcile import MultisetReconciler, reconcile


def records(*items):
    return sort_records(Record(q, t) for q, t in items)


def pairs(seq):
    return [(r.query_string, r.elapsed_time) for r in seq]


def reference_reconcile(left, right):
    """Straightforward first-match-and-delete pairing."""
    remaining = list(right)
    unique_left = []
    count, time_left, time_right = 0, 0.0, 0.0

    for r in left:
        idx = next(
            (i for i, q in enumerate(remaining) if q.query_string == r.query_string),
            None,
        )
        if idx is None:
            unique_left.append(r)
            continue
        count += 1
        time_left += r.elapsed_time
        time_right += remaining[idx].elapsed_time
        del remaining[idx]

    return count, time_left, time_right, unique_left, remaining


def test_end_to_end_scenario():
    left = records(("A", 1.0), ("B", 2.0), ("A", 3.0))
    right = records(("A", 5.0), ("C", 6.0))

    result = reconcile(left, right)

    assert result.common_count == 1
    assert result.common_time_left == 1.0
    assert result.common_time_right == 5.0
    assert pairs(result.unique_left) == [("A", 3.0), ("B", 2.0)]
    assert pairs(result.unique_right) == [("C", 6.0)]


def test_no_common_queries():
    left = records(("A", 1.0), ("B", 2.0))
    right = records(("C", 3.0), ("D", 4.0))

    result = reconcile(left, right)

    assert result.common_count == 0
    assert result.common_time_left == 0.0
    assert result.common_time_right == 0.0
    assert list(result.unique_left) == left
    assert list(result.unique_right) == right
    assert result.unique_time_left == sum_times(left)
    assert result.unique_time_right == sum_times(right)


def test_duplicates_pair_one_to_one():
    left = records(("Q", 1.0), ("Q", 2.0), ("Q", 3.0))
    right = records(("Q", 10.0))

    result = reconcile(left, right)

    assert result.common_count == 1
    assert result.common_time_left == 1.0
    assert result.common_time_right == 10.0
    assert pairs(result.unique_left) == [("Q", 2.0), ("Q", 3.0)]
    assert result.unique_right == ()


def test_kth_occurrence_pairs_with_kth_occurrence():
    left = records(("Q", 1.0), ("Q", 2.0))
    right = records(("Q", 10.0), ("Q", 20.0), ("Q", 30.0))

    result = reconcile(left, right)

    assert result.common_count == 2
    assert result.common_time_left == 3.0
    assert result.common_time_right == 30.0
    assert pairs(result.unique_right) == [("Q", 30.0)]


def test_empty_left():
    right = records(("A", 1.0), ("A", 2.0))

    result = reconcile([], right)

    assert result.common_count == 0
    assert result.unique_left == ()
    assert list(result.unique_right) == right


def test_empty_right():
    left = records(("A", 1.0))

    result = reconcile(left, [])

    assert result.common_count == 0
    assert list(result.unique_left) == left
    assert result.unique_right == ()


def test_inputs_are_not_modified():
    left = records(("A", 1.0), ("B", 2.0))
    right = records(("A", 3.0))
    left_copy, right_copy = list(left), list(right)

    reconcile(left, right)

    assert left == left_copy
    assert right == right_copy


def test_take_claims_in_order():
    reconciler = MultisetReconciler(records(("A", 1.0), ("A", 2.0), ("B", 3.0)))

    assert reconciler.take("A").elapsed_time == 1.0
    assert reconciler.take("A").elapsed_time == 2.0
    assert reconciler.take("A") is None
    assert reconciler.take("Z") is None
    assert pairs(reconciler.remaining()) == [("B", 3.0)]


@pytest.mark.parametrize("seed", range(20))
def test_matches_reference_pairing(seed):
    rng = random.Random(seed)
    keys = ["A", "B", "C", "D", "E"]

    def random_side():
        return records(*[
            (rng.choice(keys), round(rng.uniform(0, 2), 3))
            for _ in range(rng.randint(0, 30))
        ])

    left, right = random_side(), random_side()
    result = reconcile(left, right)
    count, time_left, time_right, unique_left, unique_right = reference_reconcile(left, right)

    assert result.common_count == count
    assert result.common_time_left == time_left
    assert result.common_time_right == time_right
    assert list(result.unique_left) == unique_left
    assert list(result.unique_right) == unique_right

    # counts and times are conserved on both sides
    assert result.common_count + len(result.unique_left) == len(left)
    assert result.common_count + len(result.unique_right) == len(right)
    assert result.common_time_left + result.unique_time_left == pytest.approx(sum_times(left))
    assert result.common_time_right + result.unique_time_right == pytest.approx(sum_times(right))
