from .core import (
    Filter,
    StaticTimeline,
    Timeline,
    intersection,
    partition,
    timeline,
    union,
)
from .metrics import (
    count_ranges,
    coverage_ratio,
    max_length,
    min_length,
    total_length,
)
from .properties import Property, bars, end, length, one_of, quarters, start
from .range import InvalidRangeError, Range
from .source import RangeSource

__all__ = [
    "Range",
    "RangeSource",
    "InvalidRangeError",
    "Timeline",
    "StaticTimeline",
    "Filter",
    "Property",
    "timeline",
    "partition",
    "union",
    "intersection",
    "one_of",
    "start",
    "end",
    "length",
    "quarters",
    "bars",
    "total_length",
    "coverage_ratio",
    "count_ranges",
    "max_length",
    "min_length",
]
