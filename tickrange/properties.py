import operator as op
from collections.abc import Iterable
from typing import Any, Callable, Generic, Hashable, Literal

from typing_extensions import override

from tickrange.core import Filter
from tickrange.range import RangeIn
from tickrange.source import RangeSource
from tickrange.util import BAR, QUARTER, TICK


class Operator(Filter[RangeIn]):
    def __init__(
        self,
        left: "Property[RangeIn] | Any",
        right: "Property[RangeIn] | Any",
        operator: Callable[[Any, Any], bool],
    ):
        self.left: "Property[RangeIn] | Any" = left
        self.right: "Property[RangeIn] | Any" = right
        self.operator: Callable[[Any, Any], bool] = operator

    @override
    def apply(self, source: RangeIn) -> bool:
        left_val = (
            self.left.apply(source) if isinstance(self.left, Property) else self.left
        )
        right_val = (
            self.right.apply(source) if isinstance(self.right, Property) else self.right
        )
        return self.operator(left_val, right_val)


class Property(Generic[RangeIn]):
    def apply(self, source: RangeIn) -> Any:
        raise NotImplementedError

    def __ge__(self, other: "Property[RangeIn] | Any") -> Operator[RangeIn]:
        return Operator(self, other, op.ge)

    def __le__(self, other: "Property[RangeIn] | Any") -> Operator[RangeIn]:
        return Operator(self, other, op.le)

    def __gt__(self, other: "Property[RangeIn] | Any") -> Operator[RangeIn]:
        return Operator(self, other, op.gt)

    def __lt__(self, other: "Property[RangeIn] | Any") -> Operator[RangeIn]:
        return Operator(self, other, op.lt)

    @override
    def __eq__(  # pyright: ignore[reportIncompatibleMethodOverride]
        self, other: Any
    ) -> Operator[RangeIn]:
        return Operator(self, other, op.eq)

    @override
    def __ne__(  # pyright: ignore[reportIncompatibleMethodOverride]
        self,
        other: Any,
    ) -> Operator[RangeIn]:
        return Operator(self, other, op.ne)


SCALES = {
    "ticks": TICK,
    "quarters": QUARTER,
    "bars": BAR,
}


class Length(Property[RangeIn]):
    def __init__(self, unit: Literal["ticks", "quarters", "bars"] = "ticks"):
        self.scale: int = SCALES[unit]

    @override
    def apply(self, source: RangeIn) -> int | float:
        # End is exclusive, so the tick count is end - start
        if self.scale == TICK:
            return source.end - source.start
        return (source.end - source.start) / self.scale


class Start(Property[RangeSource]):
    @override
    def apply(self, source: RangeSource) -> int:
        return source.start


class End(Property[RangeSource]):
    @override
    def apply(self, source: RangeSource) -> int:
        return source.end


length: Length[RangeSource] = Length("ticks")
quarters: Length[RangeSource] = Length("quarters")
bars: Length[RangeSource] = Length("bars")
start: Start = Start()
end: End = End()


def one_of(property: Property[RangeIn], values: Iterable[Hashable]) -> Operator[RangeIn]:
    return Operator(set(values), property, op.contains)
