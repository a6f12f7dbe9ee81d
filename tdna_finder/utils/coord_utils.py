from __future__ import annotations

from bisect import bisect_right
from typing import Iterable

from ..models.data_schemas import CDSInterval


def merge_intervals(intervals: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    """Union of closed 1-based intervals; touching ranges (end + 1 == start) merge."""
    ordered = sorted((min(start, end), max(start, end)) for start, end in intervals)
    if not ordered:
        return []
    merged: list[tuple[int, int]] = []
    cur_start, cur_end = ordered[0]
    for start, end in ordered[1:]:
        if start <= cur_end + 1:
            cur_end = max(cur_end, end)
        else:
            merged.append((cur_start, cur_end))
            cur_start, cur_end = start, end
    merged.append((cur_start, cur_end))
    return merged


def to_cds_intervals(intervals: Iterable[tuple[int, int]]) -> list[CDSInterval]:
    return [CDSInterval(start=start, end=end) for start, end in merge_intervals(intervals)]


def position_in_intervals(position: int, intervals: list[CDSInterval]) -> bool:
    """Closed-interval membership against a sorted, disjoint interval list."""
    if not intervals:
        return False
    idx = bisect_right(intervals, position, key=lambda interval: interval.start) - 1
    if idx < 0:
        return False
    return intervals[idx].contains(position)


def span_of(intervals: Iterable[tuple[int, int]]) -> tuple[int, int] | None:
    starts: list[int] = []
    ends: list[int] = []
    for start, end in intervals:
        starts.append(start)
        ends.append(end)
    if not starts:
        return None
    return min(starts), max(ends)


def build_region_string(chr_name: str, start_1based: int, end_1based: int, strand: str) -> str:
    return f"{chr_name}:{start_1based}-{end_1based}:{strand}"
