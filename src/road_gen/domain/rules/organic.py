# road_gen/domain/rules/organic.py
import math

from road_gen.app.protocols import ProposalRule
from road_gen.config.models import GenerationModel
from road_gen.domain.entities.geometry import Point, Proposal, RoadClass
from road_gen.domain.rules.grid import GridRule


class OrganicRule(ProposalRule):
    """Grid proposals with every surviving angle nudged by up to ±organic_angle."""

    kind = "organic"

    def __init__(self, *, grid: GridRule, rng):
        self.grid, self.rng = grid, rng

    def propose(
        self,
        origin: Point,
        heading: float,
        road_class: RoadClass,
        branch: bool,
        cfg: GenerationModel,
    ) -> list[Proposal]:
        proposals = self.grid.propose(origin, heading, road_class, branch, cfg)
        spread = math.radians(cfg.organic_angle)
        jitter = self.rng.uniform(-spread, spread, size=len(proposals))
        return [p.turned(float(j)) for p, j in zip(proposals, jitter)]
