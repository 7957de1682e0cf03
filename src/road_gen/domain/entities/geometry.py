# road_gen/domain/entities/geometry.py
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum


@dataclass(frozen=True)
class Point:
    x: float  # map units, origin top-left
    y: float

    def offset(self, angle: float, length: float) -> Point:
        return Point(self.x + math.cos(angle) * length, self.y + math.sin(angle) * length)

    def distance_to(self, other: Point) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class RoadClass(Enum):
    """Road classes, coarse to fine."""

    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"

    def finer(self) -> RoadClass | None:
        return _FINER[self]


_FINER: dict[RoadClass, RoadClass | None] = {
    RoadClass.LARGE: RoadClass.MEDIUM,
    RoadClass.MEDIUM: RoadClass.SMALL,
    RoadClass.SMALL: None,
}


@dataclass(frozen=True)
class Road:
    start: Point
    end: Point
    road_class: RoadClass
    fuel: int = 1  # straight steps left before the road branches

    def __post_init__(self):
        if self.fuel < 0:
            raise ValueError(f"fuel must be >= 0, got {self.fuel}")

    def take_fuel(self) -> tuple[Road, bool]:
        """Burn one unit of fuel; returns (road after the burn, True once the tank is empty)."""
        road = replace(self, fuel=self.fuel - 1) if self.fuel > 0 else self
        return road, road.fuel == 0

    def with_end(self, point: Point) -> Road:
        return replace(self, end=point)

    def heading(self) -> float:
        return math.atan2(self.end.y - self.start.y, self.end.x - self.start.x)

    def length(self) -> float:
        return self.start.distance_to(self.end)

    def points(self) -> tuple[Point, Point]:
        return self.start, self.end


@dataclass(frozen=True)
class Proposal:
    """A candidate road before it is laid down: origin + direction + length."""

    road_class: RoadClass
    angle: float  # radians
    origin: Point
    length: float

    def turned(self, delta: float) -> Proposal:
        return replace(self, angle=self.angle + delta)

    def downgraded(self, road_class: RoadClass) -> Proposal:
        return replace(self, road_class=road_class)

    def to_road(self, fuel: int) -> Road:
        return Road(
            start=self.origin,
            end=self.origin.offset(self.angle, self.length),
            road_class=self.road_class,
            fuel=fuel,
        )
