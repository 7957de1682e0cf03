# road_gen/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from road_gen.config.models import RoadMapModel
from road_gen.io.growth_logging import GrowthLogging, null_logger  # JSON logs
from road_gen.io.recorder import Recorder
from road_gen.sim.engine import GrowthEngine
from road_gen.sim.hooks import GrowthHooks, NoopHooks
from road_gen.sim.rng import RNGRegistry, fresh_master_seed


@dataclass
class App:
    config: RoadMapModel
    rng: RNGRegistry
    engine: GrowthEngine
    hooks: GrowthHooks

    def generate(self):
        """Grow to exhaustion and return the finished network."""
        self.engine.run()
        return self.engine.network()


def build(
    cfg: RoadMapModel | Mapping,
    *,
    use_logging: bool = True,
    recorder: Recorder | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, RoadMapModel) else RoadMapModel.model_validate(cfg)

    # 1) RNG (fresh entropy when no seed is configured; it is logged so the run can be replayed)
    master_seed = model.seed if model.seed is not None else fresh_master_seed()
    rng_registry = RNGRegistry(master_seed, scenario=model.name)

    # 2) Hooks (a recorder alone still needs them, with the run logs muted)
    hooks: GrowthHooks = NoopHooks()
    if use_logging or recorder is not None:
        hooks = GrowthLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
            master_seed=master_seed,
            logger=None if use_logging else null_logger(),
            recorder=recorder,
        )

    # 3) Engine (seed road + index)
    engine = GrowthEngine.create(model, rng_registry=rng_registry, hooks=hooks)

    return App(config=model, rng=rng_registry, engine=engine, hooks=hooks)
