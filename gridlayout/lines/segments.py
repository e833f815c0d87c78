"""Collinear segment merging for grid lines.

Segments are ``(coord, start, end)`` triples: ``coord`` is the fixed
coordinate of the line (y for horizontal lines, x for vertical ones) and
``start <= end`` run along it.
"""

from __future__ import annotations

from typing import Iterable


Triple = tuple[int, int, int]


def merge_pair(prev: Triple, cur: Triple) -> Triple | None:
    """Merge two segments on the same line, or None if they are disjoint.

    ``prev`` must not start after ``cur`` (the caller sorts first).
    """
    coord, prev_start, prev_end = prev
    _, cur_start, cur_end = cur

    # ├───────┤           prev
    #         ├───────┤   cur
    if cur_start == prev_end:
        return (coord, prev_start, cur_end)

    # ├───────┤           prev
    #     ├───────┤       cur
    if prev_start <= cur_start <= prev_end and cur_end >= prev_end:
        return (coord, prev_start, cur_end)

    #     ├───────┤       prev
    # ├───────┤           cur
    if prev_start <= cur_end <= prev_end and cur_start <= prev_start:
        return (coord, cur_start, prev_end)

    #     ├───────┤       prev
    # ├───────────────┤   cur
    if cur_start <= prev_start and cur_end >= prev_end:
        return (coord, cur_start, cur_end)

    # ├───────────────┤   prev
    #    ├────────┤       cur
    if cur_start >= prev_start and cur_end <= prev_end:
        return prev

    return None


def merge_segments(segments: Iterable[Triple]) -> list[Triple]:
    """Fold touching and overlapping segments into maximal ones.

    Returns sorted triples; segments on different lines never merge and
    disjoint segments on the same line are kept apart.
    """
    merged: list[Triple] = []
    for seg in sorted(segments):
        if merged and merged[-1][0] == seg[0]:
            joined = merge_pair(merged[-1], seg)
            if joined is not None:
                merged[-1] = joined
                continue
        merged.append(seg)
    return merged
