"""
Interval Merger

Collapses a principal's session records into the minimal ordered set of
non-overlapping intervals of logged-in time. An interval whose end is None is
open: it extends to "now" and absorbs every later record that starts after it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class MergedInterval:
    start: datetime
    end: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end is None

    def as_span(self) -> Tuple[datetime, Optional[datetime]]:
        return self.start, self.end


def _reaches(end: Optional[datetime], start: datetime) -> bool:
    # Open ends compare as +infinity.
    return end is None or start <= end


def _later_end(a: Optional[datetime], b: Optional[datetime]) -> Optional[datetime]:
    if a is None or b is None:
        return None
    return max(a, b)


def merge_spans(spans: Iterable[Tuple[datetime, Optional[datetime]]]) -> List[MergedInterval]:
    """
    Merge (start, end_or_None) spans.

    Spans touching at a single instant merge; any positive gap keeps them apart.
    A span ending before it starts is treated as the instant at its start.
    """
    ordered = sorted(
        ((start, end if end is None or end >= start else start) for start, end in spans),
        key=lambda span: span[0],
    )
    if not ordered:
        return []

    merged: List[MergedInterval] = []
    current_start, current_end = ordered[0]
    for start, end in ordered[1:]:
        if _reaches(current_end, start):
            current_end = _later_end(current_end, end)
        else:
            merged.append(MergedInterval(current_start, current_end))
            current_start, current_end = start, end
    merged.append(MergedInterval(current_start, current_end))
    return merged


def merge_sessions(records) -> List[MergedInterval]:
    """Merge objects exposing login_time and logout_time (e.g. UserSession)"""
    return merge_spans((record.login_time, record.logout_time) for record in records)
