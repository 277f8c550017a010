import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FloatPoint:
    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return self.x, self.y

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    @staticmethod
    def min_point(points: list["FloatPoint"]) -> "FloatPoint":
        return FloatPoint(
            x=min(point.x for point in points),
            y=min(point.y for point in points),
        )

    @staticmethod
    def max_point(points: list["FloatPoint"]) -> "FloatPoint":
        return FloatPoint(
            x=max(point.x for point in points),
            y=max(point.y for point in points),
        )
