# runtime/registries.py
from collections.abc import Callable

from road_gen.app.protocols import ProposalRule, ZoneClassifier
from road_gen.config.models import ZoneBandModel, ZoneUniformModel, ZoneUnion
from road_gen.domain.rules.grid import GridRule
from road_gen.domain.rules.organic import OrganicRule
from road_gen.domain.rules.zones import BandZoneClassifier, UniformZoneClassifier
from road_gen.sim.rng import GrowthStreams

RuleFactory = Callable[[GrowthStreams, dict[str, ProposalRule]], ProposalRule]
ZoneFactory = Callable[[ZoneUnion], ZoneClassifier]

_rule_registry: dict[str, RuleFactory] = {}
_zone_registry: dict[str, ZoneFactory] = {}


# ------------------- Proposal rules ---------------------------


def register_rule(kind: str):
    def deco(fn: RuleFactory):
        _rule_registry[kind] = fn
        return fn

    return deco


def rule_kinds() -> tuple[str, ...]:
    """Registered kinds, in registration order (dependencies first)."""
    return tuple(_rule_registry)


def make_rule(kind: str, *, streams: GrowthStreams, built: dict[str, ProposalRule]) -> ProposalRule:
    try:
        factory = _rule_registry[kind]
    except KeyError:
        raise ValueError(f"Unknown rule kind {kind!r}")
    return factory(streams, built)


def make_rules(streams: GrowthStreams) -> dict[str, ProposalRule]:
    built: dict[str, ProposalRule] = {}
    for kind in rule_kinds():
        built[kind] = make_rule(kind, streams=streams, built=built)
    return built


@register_rule("grid")
def _make_grid(streams: GrowthStreams, built):
    return GridRule(rng=streams.branch)


@register_rule("organic")
def _make_organic(streams: GrowthStreams, built):
    # organic shares the grid instance rather than owning a second one
    return OrganicRule(grid=built["grid"], rng=streams.jitter)


# ----- Zone classifiers --------------------------


def register_zones(kind: str):
    def deco(fn: ZoneFactory):
        _zone_registry[kind] = fn
        return fn

    return deco


def make_zones(cfg: ZoneUnion) -> ZoneClassifier:
    try:
        factory = _zone_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown zones kind {cfg.kind!r}")
    return factory(cfg)


@register_zones("band")
def _make_band(cfg: ZoneBandModel):
    return BandZoneClassifier(
        low=cfg.low, high=cfg.high, axis=cfg.axis, inside=cfg.inside, outside=cfg.outside
    )


@register_zones("uniform")
def _make_uniform(cfg: ZoneUniformModel):
    return UniformZoneClassifier(cfg.rule)
