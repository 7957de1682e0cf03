# road_gen/domain/rules/grid.py
import math

from road_gen.app.protocols import ProposalRule
from road_gen.config.models import GenerationModel
from road_gen.domain.entities.geometry import Point, Proposal, RoadClass

# left, straight, right relative to the current heading
GRID_OFFSETS = (-math.pi / 2, 0.0, math.pi / 2)


class GridRule(ProposalRule):
    kind = "grid"

    def __init__(self, *, rng):
        self.rng = rng

    def propose(
        self,
        origin: Point,
        heading: float,
        road_class: RoadClass,
        branch: bool,
        cfg: GenerationModel,
    ) -> list[Proposal]:
        if not branch:
            return [Proposal(road_class, heading, origin, cfg.road_length)]

        # one draw per offset, always, so the stream advances by a fixed amount
        keep = self.rng.random(len(GRID_OFFSETS)) <= cfg.road_chance
        return [
            Proposal(road_class, heading + offset, origin, cfg.road_length)
            for offset, k in zip(GRID_OFFSETS, keep)
            if k
        ]
