# tests/app/test_cli.py
import json

import pytest

from road_gen.app.main import run

SMALL_MAP = """
seed: 3
window: {width: 160, height: 120}
generation:
  large: {road_length: 10, fuel_range: [2, 4], child_chance: 0.2}
zones: {kind: band, low: 50, high: 100}
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "small.yaml"
    path.write_text(SMALL_MAP)
    return path


def test_generate_prints_summary(config_path, capsys):
    assert run(["-q", "-c", str(config_path), "generate"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["width"] == 160 and summary["height"] == 120
    assert summary["roads"] == sum(summary["by_class"].values())
    assert set(summary["by_class"]) == {"large", "medium", "small"}
    assert summary["steps"] >= summary["roads"]


def test_generate_is_reproducible(config_path, capsys):
    run(["-q", "-c", str(config_path), "generate"])
    first = capsys.readouterr().out
    run(["-q", "-c", str(config_path), "generate"])
    assert capsys.readouterr().out == first


def test_seed_flag_overrides_config(config_path, capsys):
    run(["-q", "-c", str(config_path), "--seed", "3", "generate"])
    same = capsys.readouterr().out
    run(["-q", "-c", str(config_path), "generate"])
    assert capsys.readouterr().out == same


def test_image_writes_count_files(config_path, tmp_path, capsys):
    pytest.importorskip("matplotlib")
    out = tmp_path / "roads"
    assert run(["-q", "-c", str(config_path), "image", "--out", str(out), "--count", "2"]) == 0
    assert sorted(p.name for p in out.iterdir()) == ["road-0.png", "road-1.png"]
    assert "Generating 2 roadmaps" in capsys.readouterr().out


def test_image_keeps_unrelated_files(config_path, tmp_path):
    pytest.importorskip("matplotlib")
    work = tmp_path / "project"
    (work / "src").mkdir(parents=True)
    (work / "thesis.tex").write_text("keep me")
    (work / "src" / "code.py").write_text("x = 1\n")
    (work / "road-7.png").write_bytes(b"old")
    assert run(["-q", "-c", str(config_path), "--seed", "1", "image", "--out", str(work), "--count", "1"]) == 0
    assert (work / "thesis.tex").read_text() == "keep me"
    assert (work / "src" / "code.py").exists()
    assert not (work / "road-7.png").exists()
    assert (work / "road-0.png").exists()


def test_generate_writes_events(config_path, tmp_path, capsys):
    events = tmp_path / "out" / "events.jsonl"
    assert run(["-q", "-c", str(config_path), "generate", "--events", str(events)]) == 0
    summary = json.loads(capsys.readouterr().out)
    lines = [json.loads(line) for line in events.read_text().splitlines()]
    committed = [e for e in lines if e["name"] == "RoadCommitted"]
    assert len(committed) == summary["roads"]
    assert all(e["name"] in ("RoadCommitted", "RoadRejected") for e in lines)
    assert len(lines) == summary["steps"]


def test_bad_count(config_path, capsys):
    assert run(["-q", "-c", str(config_path), "image", "--count", "0"]) == 1
    assert "--count" in capsys.readouterr().err


def test_missing_config(tmp_path, capsys):
    assert run(["-c", str(tmp_path / "missing.yaml"), "generate"]) == 1
    assert "not found" in capsys.readouterr().err


def test_invalid_config(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("window: {width: 4, height: 4}\n")
    assert run(["-c", str(path), "generate"]) == 1
    assert "Error" in capsys.readouterr().err
