# road_gen/app/main.py
import argparse
import json
import sys
from pathlib import Path

from road_gen.app.build import build
from road_gen.config.models import RoadMapModel
from road_gen.io.config import load_config
from road_gen.io.recorder import JsonlSink, Recorder

DEFAULT_RENDER_DIR = "/tmp/roads"
DEFAULT_RENDER_COUNT = 10


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="road-gen", description="Grow a procedural road network.")
    p.add_argument("--config", "-c", help="YAML config file (defaults when omitted)")
    p.add_argument("--seed", type=int, help="master RNG seed (overrides the config)")
    p.add_argument("--quiet", "-q", action="store_true", help="no structured run logs")
    sub = p.add_subparsers(dest="action", required=True)

    gen = sub.add_parser("generate", help="grow one network and print a summary")
    gen.add_argument("--events", help="write committed/rejected road events to this JSONL file")

    img = sub.add_parser("image", help="render several generated networks to PNG")
    img.add_argument("--out", default=DEFAULT_RENDER_DIR, help="output directory; earlier road-*.png files in it are replaced")
    img.add_argument("--count", type=int, default=DEFAULT_RENDER_COUNT)
    img.add_argument("--markers", action="store_true", help="draw road end points")
    return p.parse_args(argv)


def load(args: argparse.Namespace) -> RoadMapModel:
    if args.config:
        return load_config(args.config, seed=args.seed)
    return RoadMapModel.model_validate({} if args.seed is None else {"seed": args.seed})


def generate(cfg: RoadMapModel, *, quiet: bool, events: Path | None = None) -> dict:
    if events is None:
        app = build(cfg, use_logging=not quiet)
        network = app.generate()
    else:
        events.parent.mkdir(parents=True, exist_ok=True)
        with open(events, "w") as fp:
            app = build(cfg, use_logging=not quiet, recorder=Recorder(JsonlSink(fp)))
            network = app.generate()
    counts = {rc.value: len(roads) for rc, roads in network.by_class().items()}
    return {
        "roads": len(network),
        "by_class": counts,
        "steps": app.engine.steps,
        "width": network.width,
        "height": network.height,
    }


def render_images(cfg: RoadMapModel, out: Path, count: int, *, markers: bool, quiet: bool) -> list[Path]:
    from road_gen.io.render import render_network

    out.mkdir(parents=True, exist_ok=True)
    # only images from an earlier run are replaced
    for stale in out.glob("road-*.png"):
        stale.unlink()
    print(f"Generating {count} roadmaps in {out}")
    paths = []
    for i in range(count):
        print(f"Rendering {i + 1}/{count}")
        # distinct, reproducible maps for a seeded config
        run_cfg = cfg if cfg.seed is None else cfg.model_copy(update={"seed": cfg.seed + i})
        network = build(run_cfg, use_logging=not quiet).generate()
        paths.append(render_network(network, out / f"road-{i}.png", markers=markers))
    return paths


def run(argv=None) -> int:
    args = parse_args(argv)
    try:
        cfg = load(args)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.action == "generate":
        events = Path(args.events) if args.events else None
        print(json.dumps(generate(cfg, quiet=args.quiet, events=events)))
    elif args.action == "image":
        if args.count < 1:
            print("Error: --count must be >= 1", file=sys.stderr)
            return 1
        render_images(cfg, Path(args.out), args.count, markers=args.markers, quiet=args.quiet)
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
