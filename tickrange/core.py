import bisect
import heapq
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from functools import reduce
from typing import Any, Generic, Literal, overload

from typing_extensions import override

from tickrange.range import Range, RangeIn, RangeOut
from tickrange.source import RangeSource


def _order(source: RangeSource) -> tuple[int, int]:
    return (source.start, source.end)


class Timeline(ABC, Generic[RangeOut]):

    @abstractmethod
    def fetch(self, start: int | None, end: int | None) -> Iterable[RangeOut]:
        """Yield sources overlapping [start, end), ordered by start then end."""
        pass

    def __getitem__(self, item: slice) -> Iterable[RangeOut]:
        start = self._coerce_bound(item.start, "start")
        end = self._coerce_bound(item.stop, "end")
        return self.fetch(start, end)

    def overlapping(self, tick: int) -> Iterable[RangeOut]:
        """Yield the sources that contain ``tick``."""
        return self.fetch(tick, tick + 1)

    def _coerce_bound(self, bound: Any, edge: Literal["start", "end"]) -> int | None:
        if bound is None or isinstance(bound, int):
            return bound
        raise TypeError(
            f"Timeline slice {edge} bound must be an int tick or None.\n"
            f"Got {type(bound).__name__!r}: {bound!r}\n"
            f"Examples:\n"
            f"  timeline[0:1920]  # first bar at 480 ticks per quarter\n"
            f"  timeline[960:]    # everything from tick 960 on"
        )

    @overload
    def __or__(self, other: "Timeline[RangeOut]") -> "Timeline[RangeOut]": ...

    @overload
    def __or__(self, other: "Filter[Any]") -> "Timeline[RangeOut]": ...

    def __or__(self, other: "Timeline[RangeOut] | Filter[Any]") -> "Timeline[RangeOut]":
        if isinstance(other, Filter):
            raise TypeError(
                f"Cannot union (|) a Timeline with a Filter.\n"
                f"Got: Timeline | {type(other).__name__}\n"
                f"Hint: Use & to apply filters: timeline & (length >= 480)\n"
                f"      Use | to combine timelines: timeline_a | timeline_b"
            )
        return Union(self, other)

    @overload
    def __and__(self, other: "Timeline[Any]") -> "Timeline[Range]": ...

    @overload
    def __and__(self, other: "Filter[RangeOut]") -> "Timeline[RangeOut]": ...

    def __and__(self, other: "Timeline[Any] | Filter[RangeOut]") -> "Timeline[Any]":
        if isinstance(other, Filter):
            return Filtered(self, other)
        return Intersection(self, other)


class Filter(ABC, Generic[RangeIn]):

    @abstractmethod
    def apply(self, source: RangeIn) -> bool:
        pass

    def __getitem__(self, item: slice) -> Iterable[RangeIn]:
        raise NotImplementedError("Not supported for filters")

    @overload
    def __or__(self, other: "Filter[RangeIn]") -> "Filter[RangeIn]": ...

    @overload
    def __or__(self, other: "Timeline[Any]") -> "Filter[RangeIn]": ...

    def __or__(
        self, other: "Filter[RangeIn] | Timeline[Any]"
    ) -> "Filter[RangeIn] | Timeline[Any]":
        if isinstance(other, Timeline):
            raise TypeError(
                f"Cannot union (|) a Filter with a Timeline.\n"
                f"Got: {type(self).__name__} | Timeline\n"
                f"Hint: Use & to apply filters: timeline & (length >= 480)\n"
                f"      Use | to combine filters: (start >= 960) | (length < 120)"
            )
        return Or(self, other)

    @overload
    def __and__(self, other: "Filter[RangeIn]") -> "Filter[RangeIn]": ...

    @overload
    def __and__(self, other: "Timeline[Any]") -> "Timeline[Any]": ...

    def __and__(
        self, other: "Filter[RangeIn] | Timeline[Any]"
    ) -> "Filter[RangeIn] | Timeline[Any]":
        if isinstance(other, Timeline):
            return Filtered(other, self)
        return And(self, other)


class Or(Filter[RangeIn]):
    def __init__(self, *filters: Filter[RangeIn]):
        super().__init__()
        self.filters: tuple[Filter[RangeIn], ...] = filters

    @override
    def apply(self, source: RangeIn) -> bool:
        return any(f.apply(source) for f in self.filters)


class And(Filter[RangeIn]):
    def __init__(self, *filters: Filter[RangeIn]):
        super().__init__()
        self.filters: tuple[Filter[RangeIn], ...] = filters

    @override
    def apply(self, source: RangeIn) -> bool:
        return all(f.apply(source) for f in self.filters)


class Union(Timeline[RangeOut]):
    def __init__(self, *sources: Timeline[RangeOut]):
        self.sources: tuple[Timeline[RangeOut], ...] = sources

    @override
    def fetch(self, start: int | None, end: int | None) -> Iterable[RangeOut]:
        streams = [source.fetch(start, end) for source in self.sources]
        return heapq.merge(*streams, key=_order)


class Intersection(Timeline[Range]):
    def __init__(self, *sources: Timeline[Any]):
        flattened: list[Timeline[Any]] = []
        for source in sources:
            if isinstance(source, Intersection):
                flattened.extend(source.sources)
            else:
                flattened.append(source)

        self.sources: tuple[Timeline[Any], ...] = tuple(flattened)

    @override
    def fetch(self, start: int | None, end: int | None) -> Iterable[Range]:
        """Yield the ticks covered by every source, one range per overlap.

        Advances one current range per source in lockstep, so each source is
        expected to hold non-overlapping ranges (a single voice, or the output
        of ``partition``).
        """
        if not self.sources:
            return ()

        iterators = [iter(source.fetch(start, end)) for source in self.sources]

        def generate() -> Iterable[Range]:
            try:
                current = [next(iterator) for iterator in iterators]
            except StopIteration:
                return

            while True:
                overlap_start = max(source.start for source in current)
                overlap_end = min(source.end for source in current)

                # Touching ranges share no tick
                if overlap_start < overlap_end:
                    yield Range(start=overlap_start, end=overlap_end)

                # At least one current range always ends at the cutoff
                for idx, source in enumerate(current):
                    if source.end == overlap_end:
                        try:
                            current[idx] = next(iterators[idx])
                        except StopIteration:
                            return

        return generate()


class Filtered(Timeline[RangeOut]):
    def __init__(self, source: Timeline[RangeOut], filter: "Filter[Any]"):
        self.source: Timeline[RangeOut] = source
        self.filter: Filter[Any] = filter

    @override
    def fetch(self, start: int | None, end: int | None) -> Iterable[RangeOut]:
        return (e for e in self.source.fetch(start, end) if self.filter.apply(e))


class StaticTimeline(Timeline[RangeOut], Generic[RangeOut]):
    """Timeline backed by a fixed collection of range sources."""

    def __init__(self, sources: Sequence[RangeOut]):
        self._sources: tuple[RangeOut, ...] = tuple(sorted(sources, key=_order))

        # max_end_prefix[i] = max(source.end for source in sources[:i+1])
        self._max_end_prefix: list[int] = []
        max_so_far = 0
        for source in self._sources:
            max_so_far = max(max_so_far, source.end)
            self._max_end_prefix.append(max_so_far)

    def __len__(self) -> int:
        return len(self._sources)

    @override
    def fetch(self, start: int | None, end: int | None) -> Iterable[RangeOut]:
        if not self._sources:
            return

        start_idx = 0
        end_idx = len(self._sources)

        # Everything before the first max_end past `start` ends at or before it
        if start is not None:
            start_idx = bisect.bisect_right(self._max_end_prefix, start)

        # First source starting at or after the exclusive `end`
        if end is not None:
            end_idx = bisect.bisect_left(
                self._sources, end, key=lambda source: source.start
            )

        for source in self._sources[start_idx:end_idx]:
            if start is not None and source.end <= start:
                continue
            yield source


def timeline(*sources: RangeOut) -> StaticTimeline[RangeOut]:
    """Create an in-memory timeline from range sources.

    Example:
        >>> from tickrange import Range, timeline
        >>> notes = timeline(Range(start=0, end=480), Range(start=480, end=960))
        >>> list(notes[0:480])
        [Range(start=0, end=480)]
    """
    return StaticTimeline(sources)


def partition(*sources: RangeSource) -> list[Range]:
    """Split the combined extent of the sources along every boundary.

    Each returned range lies between two consecutive boundary ticks and is
    covered by at least one source. Gaps are left out and touching sources
    stay split, so for two sources this matches ``Range.split_union``.

    Example:
        >>> partition(Range(start=0, end=10), Range(start=5, end=15))
        [Range(start=0, end=5), Range(start=5, end=10), Range(start=10, end=15)]
    """
    deltas: dict[int, int] = {}
    for source in sources:
        deltas[source.start] = deltas.get(source.start, 0) + 1
        deltas[source.end] = deltas.get(source.end, 0) - 1

    boundaries = sorted(deltas)
    segments: list[Range] = []
    active = 0
    for lo, hi in zip(boundaries, boundaries[1:]):
        active += deltas[lo]
        if active > 0:
            segments.append(Range(start=lo, end=hi))
    return segments


def union(*timelines: "Timeline[RangeOut]") -> "Timeline[RangeOut]":
    """Compose timelines with union semantics (equivalent to chaining `|`)."""

    if not timelines:
        raise ValueError(
            f"union() requires at least one timeline argument.\n"
            f"Example: union(melody, bass, drums)"
        )

    def reducer(acc: "Timeline[RangeOut]", nxt: "Timeline[RangeOut]"):
        return acc | nxt

    return reduce(reducer, timelines)


def intersection(*timelines: "Timeline[Any]") -> "Timeline[Any]":
    """Compose timelines with intersection semantics (equivalent to chaining `&`)."""

    if not timelines:
        raise ValueError(
            f"intersection() requires at least one timeline argument.\n"
            f"Example: intersection(melody, bass, drums)"
        )

    def reducer(acc: "Timeline[Any]", nxt: "Timeline[Any]"):
        return acc & nxt

    return reduce(reducer, timelines)
