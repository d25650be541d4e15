from dataclasses import dataclass
from typing import TypeVar

from tickrange.source import RangeSource


class InvalidRangeError(ValueError):
    """Raised when a range is constructed with out-of-bounds ticks."""


def _sign(left: int, right: int) -> int:
    return (left > right) - (left < right)


@dataclass(frozen=True, kw_only=True, order=True)
class Range:
    """An immutable tick range, inclusive of start and exclusive of end.

    Ranges order by start, then by end, and compare equal only when both
    ticks match. Operations never mutate an operand; they return a new range,
    one of the operands, or ``None`` when there is no answer.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise InvalidRangeError("start must be >= 0")
        if self.end < 0:
            raise InvalidRangeError("end/length must be >= 0")
        if self.end <= self.start:
            raise InvalidRangeError("length must be > 0")

    @classmethod
    def from_end(cls, start: int, end: int) -> "Range":
        return cls(start=start, end=end)

    @classmethod
    def from_length(cls, start: int, length: int) -> "Range":
        # Checked before normalizing so a negative length is reported as such
        if start < 0:
            raise InvalidRangeError("start must be >= 0")
        if length < 0:
            raise InvalidRangeError("end/length must be >= 0")
        return cls(start=start, end=start + length)

    @classmethod
    def from_source(cls, source: RangeSource) -> "Range":
        """Return ``source`` as a range, reusing it when it already is one."""
        if isinstance(source, cls):
            return source
        return cls.from_length(source.start, source.length)

    @property
    def length(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"

    def __contains__(self, item: "int | RangeSource") -> bool:
        if isinstance(item, int):
            return self.start <= item < self.end
        return self.contains(item)

    def __and__(self, other: RangeSource) -> "Range | None":
        return self.intersect(other)

    def __or__(self, other: RangeSource) -> "Range | None":
        return self.union(other)

    def compare_start(self, other: RangeSource) -> int:
        return _sign(self.start, other.start)

    def compare_end(self, other: RangeSource) -> int:
        return _sign(self.end, other.end)

    def compare_to(self, other: RangeSource) -> int:
        """Compare by start tick, then by end tick when the starts match."""
        return self.compare_start(other) or self.compare_end(other)

    def contains(self, other: RangeSource) -> bool:
        """True if ``other`` lies wholly within this range.

        Equal ranges contain each other.
        """
        return self.start <= other.start and other.end <= self.end

    def intersects(self, other: RangeSource) -> bool:
        """True if the ranges share at least one tick.

        Ranges that only touch (one ends where the other starts) do not
        intersect, since the end tick is exclusive.
        """
        if self.start <= other.start:
            return other.start < self.end
        return self.start < other.end

    def intersect(self, other: RangeSource) -> "Range | None":
        """Return the overlapping part of both ranges, or None if disjoint."""
        if not self.intersects(other):
            return None

        other = Range.from_source(other)
        if self.contains(other):
            return other
        if other.contains(self):
            return self
        return Range(
            start=max(self.start, other.start), end=min(self.end, other.end)
        )

    def union(self, other: RangeSource) -> "Range | None":
        """Return the range spanning both, only if they intersect.

        Disjoint ranges, including ranges that merely touch, return None.
        """
        other = Range.from_source(other)
        if self.contains(other):
            return self
        if other.contains(self):
            return other
        if not self.intersects(other):
            return None
        return Range(
            start=min(self.start, other.start), end=max(self.end, other.end)
        )

    def split_union(self, other: RangeSource) -> list["Range"]:
        """Split the union of two ranges along their boundaries.

        The result holds one to three ranges ordered from lowest to highest:

        - equal ranges give the range itself;
        - disjoint ranges (touching included) give both ranges, unmerged;
        - ranges sharing a start or end tick give the overlap plus the
          leading or trailing part of the longer range;
        - any other overlap gives the leading part of the earlier range, the
          overlap, and the trailing part of the later range.
        """
        other = Range.from_source(other)

        if self == other:
            return [self]

        if not self.intersects(other):
            return sorted((self, other), key=lambda r: r.start)

        start_cmp = self.compare_start(other)
        first, second = (self, other) if start_cmp < 0 else (other, self)

        result: list[Range] = []
        if start_cmp != 0:
            result.append(Range(start=first.start, end=second.start))
            first = Range(start=second.start, end=first.end)

        # Both now start on the same tick; order them by end
        if first.compare_end(second) > 0:
            first, second = second, first
        result.append(first)
        if first.end != second.end:
            result.append(Range(start=first.end, end=second.end))

        assert 1 <= len(result) <= 3
        return result


RangeOut = TypeVar("RangeOut", bound=RangeSource, covariant=True)
RangeIn = TypeVar("RangeIn", bound=RangeSource, contravariant=True)
