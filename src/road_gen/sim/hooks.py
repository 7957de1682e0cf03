# road_gen/sim/hooks.py
from typing import Protocol

from road_gen.domain.entities.geometry import Point, Road


class GrowthHooks(Protocol):
    def run_start(self, *, max_steps, qsize, roads): ...
    def run_end(self, *, processed, roads, qsize, wall_ms): ...
    def rejected(self, road: Road, *, reason: str, step: int): ...
    def merged(self, road: Road, *, target: Point, step: int): ...
    def committed(self, road: Road, *, merged: bool, children: int, step: int, qsize: int): ...


class NoopHooks:
    def run_start(self, **_):
        pass

    def run_end(self, **_):
        pass

    def rejected(self, *_, **__):
        pass

    def merged(self, *_, **__):
        pass

    def committed(self, *_, **__):
        pass
