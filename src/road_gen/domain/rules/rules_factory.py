# road_gen/domain/rules/rules_factory.py

from road_gen.config.models import RoadMapModel
from road_gen.domain.rules.proposer import Proposer
from road_gen.runtime.registries import make_rules, make_zones
from road_gen.sim.rng import GrowthStreams


def build_proposer(cfg: RoadMapModel, streams: GrowthStreams) -> Proposer:
    rules = make_rules(streams)
    zones = make_zones(cfg.zones)
    return Proposer(
        cfg.generation,
        rules=rules,
        zones=zones,
        rng_child=streams.child,
        rng_fuel=streams.fuel,
    )
