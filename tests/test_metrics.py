"""Tests for timeline metrics over half-open windows."""

import pytest

from tickrange import (
    Range,
    count_ranges,
    coverage_ratio,
    max_length,
    min_length,
    timeline,
    total_length,
)
from tickrange.util import BAR, QUARTER


def test_total_length_counts_overlaps_once() -> None:
    notes = timeline(
        Range(start=0, end=10),
        Range(start=5, end=15),
    )

    assert total_length(notes, 0, 100) == 15


def test_total_length_clips_to_window() -> None:
    notes = timeline(Range(start=0, end=100))

    assert total_length(notes, 20, 30) == 10


def test_total_length_skips_gaps() -> None:
    notes = timeline(
        Range(start=0, end=10),
        Range(start=20, end=30),
    )

    assert total_length(notes, 5, 25) == 10


def test_total_length_empty_timeline() -> None:
    assert total_length(timeline(), 0, 10) == 0


def test_coverage_ratio() -> None:
    # Two quarter notes in a 4/4 bar
    notes = timeline(
        Range(start=0, end=QUARTER),
        Range(start=QUARTER * 2, end=QUARTER * 3),
    )

    assert coverage_ratio(notes, 0, BAR) == pytest.approx(0.5)


def test_coverage_ratio_full() -> None:
    notes = timeline(Range(start=0, end=QUARTER), Range(start=QUARTER, end=BAR))

    assert coverage_ratio(notes, 0, BAR) == pytest.approx(1.0)


def test_count_ranges_excludes_touching() -> None:
    notes = timeline(
        Range(start=0, end=10),
        Range(start=10, end=20),
        Range(start=20, end=30),
    )

    assert count_ranges(notes, 10, 20) == 1
    assert count_ranges(notes, 0, 30) == 3


def test_max_and_min_length() -> None:
    notes = timeline(
        Range(start=0, end=10),
        Range(start=5, end=50),
        Range(start=60, end=61),
    )

    assert max_length(notes, 0, 100) == 45
    assert min_length(notes, 0, 100) == 1
    # Lengths are measured on the whole source, not the clipped part
    assert max_length(notes, 0, 6) == 45


def test_max_and_min_length_empty_window() -> None:
    notes = timeline(Range(start=0, end=10))

    assert max_length(notes, 20, 30) is None
    assert min_length(notes, 20, 30) is None


@pytest.mark.parametrize(
    "metric", [total_length, coverage_ratio, count_ranges, max_length, min_length]
)
def test_metrics_reject_empty_window(metric) -> None:
    notes = timeline(Range(start=0, end=10))

    with pytest.raises(ValueError, match="end > start"):
        metric(notes, 10, 10)
