# road_gen/domain/rules/zones.py
from road_gen.app.protocols import ZoneClassifier
from road_gen.domain.entities.geometry import Point


class BandZoneClassifier(ZoneClassifier):
    def __init__(
        self,
        *,
        low: float = 400.0,
        high: float = 600.0,
        axis: str = "x",
        inside: str = "organic",
        outside: str = "grid",
    ):
        if axis not in ("x", "y"):
            raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
        self.low, self.high, self.axis = low, high, axis
        self.inside, self.outside = inside, outside

    def rule_for(self, point: Point) -> str:
        v = point.x if self.axis == "x" else point.y
        return self.outside if v < self.low or v > self.high else self.inside


class UniformZoneClassifier(ZoneClassifier):
    def __init__(self, rule: str = "grid"):
        self.rule = rule

    def rule_for(self, point: Point) -> str:
        return self.rule
