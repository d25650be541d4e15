"""Aggregate measurements over a window of a timeline.

Every helper reads ``timeline[start:end]`` and treats the window as half-open,
the same as a ``Range``.
"""

from tickrange.core import Timeline, partition
from tickrange.source import RangeSource


def _check_window(start: int, end: int) -> None:
    if end <= start:
        raise ValueError(
            f"Metric window must have end > start, got start={start}, end={end}.\n"
            f"Example: coverage_ratio(notes, 0, 1920)"
        )


def total_length(timeline: Timeline[RangeSource], start: int, end: int) -> int:
    """Count the distinct ticks within [start, end) covered by any source.

    Overlapping sources are counted once, and sources reaching past the window
    are clipped to it.
    """
    _check_window(start, end)
    covered = 0
    for segment in partition(*timeline[start:end]):
        covered += max(0, min(segment.end, end) - max(segment.start, start))
    return covered


def coverage_ratio(timeline: Timeline[RangeSource], start: int, end: int) -> float:
    """Fraction of the window covered by at least one source."""
    return total_length(timeline, start, end) / (end - start)


def count_ranges(timeline: Timeline[RangeSource], start: int, end: int) -> int:
    _check_window(start, end)
    return sum(1 for _ in timeline[start:end])


def max_length(timeline: Timeline[RangeSource], start: int, end: int) -> int | None:
    """Longest unclipped source overlapping the window, or None if empty."""
    _check_window(start, end)
    return max((source.length for source in timeline[start:end]), default=None)


def min_length(timeline: Timeline[RangeSource], start: int, end: int) -> int | None:
    """Shortest unclipped source overlapping the window, or None if empty."""
    _check_window(start, end)
    return min((source.length for source in timeline[start:end]), default=None)
