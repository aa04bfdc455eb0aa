"""
Unit tests for the Interval Merger
"""

import random
from datetime import datetime, timedelta

from tillauth.app.services.interval_merger import MergedInterval, merge_sessions, merge_spans
from tillauth.domain.entities import UserSession

DAY = datetime(2026, 3, 2)


def at(hour, minute=0):
    return DAY.replace(hour=hour, minute=minute)


def test_overlapping_records_merge():
    """Example 1: 09:00-10:00 and 09:30-11:00 become 09:00-11:00"""
    merged = merge_spans([(at(9), at(10)), (at(9, 30), at(11))])
    assert merged == [MergedInterval(at(9), at(11))]


def test_gap_keeps_records_apart():
    """Example 2: a five minute gap prevents merging"""
    merged = merge_spans([(at(9), at(10)), (at(10, 5), at(11))])
    assert merged == [MergedInterval(at(9), at(10)), MergedInterval(at(10, 5), at(11))]


def test_open_record_stays_open():
    """Example 3: a record without logout merges to an open interval"""
    merged = merge_spans([(at(9), None)])
    assert merged == [MergedInterval(at(9), None)]
    assert merged[0].is_open


def test_touching_records_merge():
    merged = merge_spans([(at(9), at(10)), (at(10), at(11))])
    assert merged == [MergedInterval(at(9), at(11))]


def test_contained_record_does_not_shrink_interval():
    merged = merge_spans([(at(9), at(12)), (at(10), at(11))])
    assert merged == [MergedInterval(at(9), at(12))]


def test_open_record_absorbs_later_records():
    merged = merge_spans([(at(9), None), (at(13), at(14)), (at(18), None)])
    assert merged == [MergedInterval(at(9), None)]


def test_open_record_dominates_its_overlap_group_only():
    merged = merge_spans([(at(8), at(9)), (at(10), at(11)), (at(10, 30), None)])
    assert merged == [MergedInterval(at(8), at(9)), MergedInterval(at(10), None)]


def test_empty_input():
    assert merge_spans([]) == []


def test_logout_before_login_is_an_instant():
    merged = merge_spans([(at(10), at(9))])
    assert merged == [MergedInterval(at(10), at(10))]


def test_merge_sessions_reads_user_session_records():
    records = [
        UserSession(id=1, user_email="a@shop.com", login_time=at(9, 30), logout_time=at(11)),
        UserSession(id=2, user_email="a@shop.com", login_time=at(9), logout_time=at(10)),
    ]
    assert merge_sessions(records) == [MergedInterval(at(9), at(11))]


def _random_spans(rng, count):
    spans = []
    for _ in range(count):
        start = DAY + timedelta(minutes=rng.randint(0, 24 * 60))
        if rng.random() < 0.15:
            spans.append((start, None))
        else:
            spans.append((start, start + timedelta(minutes=rng.randint(0, 180))))
    return spans


def _contains(interval, span, horizon):
    start, end = span
    interval_end = interval.end or horizon
    return interval.start <= start and (end or horizon) <= interval_end


def test_properties_hold_for_random_inputs():
    rng = random.Random(20260302)
    horizon = DAY + timedelta(days=3)
    for _ in range(200):
        spans = _random_spans(rng, rng.randint(1, 12))
        merged = merge_spans(spans)

        # ordered and pairwise non-overlapping, with a real gap between intervals
        for left, right in zip(merged, merged[1:]):
            assert left.end is not None
            assert left.end < right.start

        # idempotent
        assert merge_spans(interval.as_span() for interval in merged) == merged

        # independent of input order
        shuffled = list(spans)
        rng.shuffle(shuffled)
        assert merge_spans(shuffled) == merged

        # every span lies in exactly one interval
        for span in spans:
            assert sum(_contains(interval, span, horizon) for interval in merged) == 1

        # an open span makes its interval open
        for span in spans:
            if span[1] is None:
                owner = next(i for i in merged if _contains(i, span, horizon))
                assert owner.is_open
