# road_gen/domain/rules/proposer.py
import math
from collections.abc import Mapping

from road_gen.app.protocols import ProposalRule, RoadProposer, ZoneClassifier
from road_gen.config.models import GenerationsModel
from road_gen.domain.entities.geometry import Point, Proposal, Road

CHILD_TURN = math.pi / 2


class Proposer(RoadProposer):
    """
    Global-goal proposals for an accepted road:
      • pick a rule by the zone of the road's end point,
      • let the rule propose continuations,
      • add finer-class side roads,
      • hand out fuel.
    """

    def __init__(
        self,
        generation: GenerationsModel,
        *,
        rules: Mapping[str, ProposalRule],
        zones: ZoneClassifier,
        rng_child,
        rng_fuel,
    ):
        self.generation = generation
        self.rules = dict(rules)
        self.zones = zones
        self.rng_child, self.rng_fuel = rng_child, rng_fuel

    def rule_for(self, point: Point) -> ProposalRule:
        kind = self.zones.rule_for(point)
        try:
            return self.rules[kind]
        except KeyError:
            raise ValueError(f"No proposal rule registered for {kind!r}")

    def propose(self, road: Road, branch: bool) -> list[Road]:
        cfg = self.generation.for_class(road.road_class)
        rule = self.rule_for(road.end)
        proposals = rule.propose(road.end, road.heading(), road.road_class, branch, cfg)

        finer = road.road_class.finer()
        out: list[Proposal] = []
        for p in proposals:
            out.append(p)
            if finer is not None and self.rng_child.random() <= cfg.child_chance:
                out.append(p.turned(CHILD_TURN).downgraded(finer))

        if not branch:
            # straight continuation keeps burning the parent's tank
            return [p.to_road(road.fuel) for p in out]
        low, high = cfg.fuel_range
        fuels = self.rng_fuel.integers(low, high, size=len(out))
        return [p.to_road(int(f)) for p, f in zip(out, fuels)]
