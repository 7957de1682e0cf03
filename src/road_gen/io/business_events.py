# road_gen/io/business_events.py

from dataclasses import dataclass
from typing import Literal


# Base type for analytics events (emitted alongside the run, never fed back into it)
@dataclass
class BizEvent:
    run_id: str
    step: int  # engine step that produced it (total ordering)
    name: str  # stable event name


@dataclass
class RoadCommittedBiz(BizEvent):
    start: tuple[float, float]
    end: tuple[float, float]
    road_class: str
    fuel: int
    merged: bool
    children: int = 0


@dataclass
class RoadRejectedBiz(BizEvent):
    start: tuple[float, float]
    end: tuple[float, float]
    road_class: str
    reason: Literal["out_of_range", "merged_out_of_range"]
