from typing import Protocol, runtime_checkable

from road_gen.config.models import GenerationModel
from road_gen.domain.entities.geometry import Point, Proposal, Road, RoadClass


# ------------- Proposal rules --------------------
@runtime_checkable
class ProposalRule(Protocol):
    """
    Responsibilities:
      • Turn a growth point + heading into candidate proposals.
      • Own any randomness they need (stream handed in at construction).
    Angles in radians; lengths in map units.
    """

    kind: str

    def propose(
        self,
        origin: Point,
        heading: float,
        road_class: RoadClass,
        branch: bool,
        cfg: GenerationModel,
    ) -> list[Proposal]: ...


@runtime_checkable
class ZoneClassifier(Protocol):
    """Map a growth point to the kind of rule that should grow from it."""

    def rule_for(self, point: Point) -> str: ...


@runtime_checkable
class RoadProposer(Protocol):
    def propose(self, road: Road, branch: bool) -> list[Road]: ...
