# tests/app/test_build_and_run.py
from road_gen.app.build import build
from road_gen.domain.network import RoadNetwork
from road_gen.io.business_events import RoadCommittedBiz
from road_gen.io.recorder import MemorySink, Recorder
from road_gen.sim.hooks import NoopHooks

CFG = {
    "name": "test",
    "run_id": "t-1",
    "seed": 1,
    "window": {"width": 200, "height": 150},
    "generation": {"large": {"road_length": 12.0, "fuel_range": [2, 5], "child_chance": 0.2}},
    "zones": {"kind": "band", "low": 60.0, "high": 120.0},
    "seed_road": {"origin": [20.0, 75.0]},
}


def test_build_runs():
    app = build(CFG, use_logging=False)
    assert isinstance(app.hooks, NoopHooks)
    network = app.generate()
    assert isinstance(network, RoadNetwork)
    assert len(network) >= 1
    assert app.engine.done
    assert (network.width, network.height) == (200, 150)


def test_build_records_business_events():
    sink = MemorySink()
    app = build({**CFG, "log": {"level": "WARNING"}}, recorder=Recorder(sink))
    network = app.generate()

    committed = [e for e in sink.events if isinstance(e, RoadCommittedBiz)]
    assert len(committed) == len(network)
    assert [e.step for e in sink.events] == sorted(e.step for e in sink.events)
    assert app.hooks.counts["committed"] == len(network)
    assert app.hooks.counts["rejected"] == len(sink.events) - len(committed)
    assert app.hooks.master_seed == 1


def test_unseeded_build_logs_its_seed():
    app = build({**CFG, "seed": None, "log": {"level": "WARNING"}})
    assert app.hooks.master_seed is not None
    assert app.rng.master_seed == app.hooks.master_seed


def test_recorder_without_run_logs(capsys):
    sink = MemorySink()
    app = build(CFG, use_logging=False, recorder=Recorder(sink))
    network = app.generate()
    assert not isinstance(app.hooks, NoopHooks)
    assert len([e for e in sink.events if isinstance(e, RoadCommittedBiz)]) == len(network)
    assert capsys.readouterr().out == ""
