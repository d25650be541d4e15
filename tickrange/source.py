from typing import Protocol, runtime_checkable


@runtime_checkable
class RangeSource(Protocol):
    """Anything that can report the tick range it occupies.

    A note in a sequence, a region of a track, or a ``Range`` itself. The
    three values are expected to agree: ``end == start + length``.
    """

    @property
    def start(self) -> int: ...

    @property
    def length(self) -> int: ...

    @property
    def end(self) -> int: ...
