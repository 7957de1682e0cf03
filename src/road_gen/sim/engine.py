# road_gen/sim/engine.py

import time
from collections import deque
from collections.abc import Iterable, Mapping

from road_gen.app.protocols import RoadProposer
from road_gen.config.models import RoadMapModel
from road_gen.domain.entities.geometry import Point, Road, RoadClass
from road_gen.domain.network import RoadNetwork
from road_gen.domain.rules.rules_factory import build_proposer
from road_gen.domain.spatial_index import SpatialIndex
from road_gen.sim.hooks import GrowthHooks, NoopHooks
from road_gen.sim.rng import GrowthStreams, RNGRegistry, fresh_master_seed


def index_seed_points(frontier: Iterable[Road]) -> list[Point]:
    """Endpoints of the initial frontier, in order, without the very last one.

    The last end point is left for its own road to insert on commit, so the
    first merge check never finds the seed's end already sitting in the index.
    """
    points = [p for road in frontier for p in road.points()]
    return points[:-1]


def create_seed_road(cfg: RoadMapModel, rng) -> Road:
    road_class = RoadClass(cfg.seed_road.road_class)
    if cfg.seed_road.origin is not None:
        origin = Point(*cfg.seed_road.origin)
    else:
        w, h = cfg.bounds
        origin = Point(float(rng.uniform(0.0, w)), float(rng.uniform(0.0, h)))
    length = cfg.generation.for_class(road_class).road_length
    return Road(
        start=origin,
        end=origin.offset(cfg.seed_heading(), length),
        road_class=road_class,
        fuel=cfg.seed_road.fuel,
    )


class GrowthEngine:
    """
    Frontier-driven road growth.

    Each step pops the oldest candidate, checks it against the map bounds and
    the roads already laid, optionally snaps its end onto a nearby point, asks
    the proposer for follow-up candidates and commits it. Runs are resumable:
    run() can be called repeatedly with a step budget.
    """

    def __init__(
        self,
        cfg: RoadMapModel,
        *,
        frontier: Iterable[Road],
        index: SpatialIndex,
        rng_registry: RNGRegistry,
        hooks: GrowthHooks | None = None,
        proposer: RoadProposer | None = None,
    ):
        self.cfg = cfg
        self.rng = rng_registry
        self._frontier: deque[Road] = deque(frontier)
        self._index = index
        self._roads: list[Road] = []
        self._hooks = hooks or NoopHooks()
        self._proposer = proposer or build_proposer(cfg, GrowthStreams.from_registry(rng_registry))
        self._steps = 0

    @classmethod
    def create(
        cls,
        cfg: RoadMapModel | Mapping,
        *,
        rng_registry: RNGRegistry | None = None,
        hooks: GrowthHooks | None = None,
    ) -> "GrowthEngine":
        model = cfg if isinstance(cfg, RoadMapModel) else RoadMapModel.model_validate(cfg)
        if rng_registry is None:
            seed = model.seed if model.seed is not None else fresh_master_seed()
            rng_registry = RNGRegistry(seed, scenario=model.name)
        seed_road = create_seed_road(model, rng_registry.stream("seed"))
        index = SpatialIndex(index_seed_points([seed_road]), cell_size=model.index.cell_size)
        return cls(model, frontier=[seed_road], index=index, rng_registry=rng_registry, hooks=hooks)

    # --------------- State -----------------------------

    @property
    def width(self) -> int:
        return self.cfg.window.width

    @property
    def height(self) -> int:
        return self.cfg.window.height

    @property
    def roads(self) -> tuple[Road, ...]:
        return tuple(self._roads)

    @property
    def frontier(self) -> tuple[Road, ...]:
        return tuple(self._frontier)

    @property
    def index(self) -> SpatialIndex:
        return self._index

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def done(self) -> bool:
        return not self._frontier

    def network(self) -> RoadNetwork:
        return RoadNetwork(roads=tuple(self._roads), width=self.width, height=self.height)

    def enqueue(self, *roads: Road) -> None:
        self._frontier.extend(roads)

    # --------------- Local constraints -----------------------------

    def in_range(self, road: Road) -> bool:
        # upper edge inclusive: [0, width] x [0, height]
        w, h = self.width + 1, self.height + 1
        return all(0.0 <= p.x < w and 0.0 <= p.y < h for p in road.points())

    def accept_local(self, road: Road) -> tuple[bool, bool, Road]:
        """Return (accepted, merged, road); a merged road comes back with its end snapped."""
        if not self.in_range(road):
            return False, False, road

        merge_range = self.cfg.generation.for_class(road.road_class).merge_range
        if self._index.has_neighbor_within(road.end, merge_range):
            nearest = self._index.nearest(road.end)
            # never snap onto itself or back onto its own start
            if nearest != road.end and nearest != road.start:
                return True, True, road.with_end(nearest)
        return True, False, road

    # --------------------------------------------------------

    def _commit(self, road: Road) -> None:
        self._index.insert(road.start)
        self._index.insert(road.end)
        self._roads.append(road)

    def step(self) -> bool:
        """Process one frontier candidate. False when the frontier is empty."""
        if not self._frontier:
            return False
        road = self._frontier.popleft()
        self._steps += 1

        accepted, merged, road = self.accept_local(road)
        if not accepted:
            self._hooks.rejected(road, reason="out_of_range", step=self._steps)
            return True
        if not self.in_range(road):
            self._hooks.rejected(road, reason="merged_out_of_range", step=self._steps)
            return True

        children: list[Road] = []
        if merged:
            self._hooks.merged(road, target=road.end, step=self._steps)
        else:
            road, branch = road.take_fuel()
            children = self._proposer.propose(road, branch)
            self._frontier.extend(children)

        self._commit(road)
        self._hooks.committed(
            road,
            merged=merged,
            children=len(children),
            step=self._steps,
            qsize=len(self._frontier),
        )
        return True

    def run(self, max_steps: int | None = None) -> int:
        """Step until the frontier is empty or max_steps candidates were processed."""
        if max_steps is not None and max_steps < 0:
            raise ValueError(f"max_steps must be >= 0, got {max_steps}")
        t0 = time.perf_counter()
        self._hooks.run_start(max_steps=max_steps, qsize=len(self._frontier), roads=len(self._roads))
        processed = 0
        while max_steps is None or processed < max_steps:
            if not self.step():
                break
            processed += 1
        self._hooks.run_end(
            processed=processed,
            roads=len(self._roads),
            qsize=len(self._frontier),
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return processed

    def advance(self) -> int:
        """One configured growth increment (everything, when no increment is set)."""
        return self.run(self.cfg.window.growth_increment)
