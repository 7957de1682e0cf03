# road_gen/io/growth_logging.py
import json
import logging
import sys

from road_gen.domain.entities.geometry import Point, Road
from road_gen.io.business_events import RoadCommittedBiz, RoadRejectedBiz
from road_gen.io.recorder import Recorder
from road_gen.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload)


def null_logger(name="road_gen.silent"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
        logger.propagate = False
    return logger


def _default_json_logger(name="road_gen", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class GrowthLogging(NoopHooks):
    """
    Structured logs for a growth run, plus business events for committed and
    rejected roads when a recorder is attached.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        master_seed: int | None = None,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.master_seed = master_seed
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self.counts = {"committed": 0, "merged": 0, "rejected": 0}

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    @staticmethod
    def _shape_road(road: Road) -> dict:
        return {
            "from": road.start.as_tuple(),
            "to": road.end.as_tuple(),
            "road_class": road.road_class.value,
            "fuel": road.fuel,
        }

    def _sampled(self, step: int) -> bool:
        return self.debug and (step % self.sample_every) == 0

    # --------------------------------------------------------

    # engine lifecycle

    def run_start(self, *, max_steps: int | None, qsize: int, roads: int):
        self._emit(
            "INFO", "run_start", max_steps=max_steps, qsize=qsize, roads=roads, seed=self.master_seed
        )

    def run_end(self, *, processed: int, **extra):
        self._emit("INFO", "run_end", processed=processed, **self.counts, **extra)

    def rejected(self, road: Road, *, reason: str, step: int):
        self.counts["rejected"] += 1
        if self._sampled(step):
            self._emit("DEBUG", "rejected", reason=reason, step=step, **self._shape_road(road))
        self.biz(
            RoadRejectedBiz(
                run_id=self.run_id,
                step=step,
                name="RoadRejected",
                start=road.start.as_tuple(),
                end=road.end.as_tuple(),
                road_class=road.road_class.value,
                reason=reason,
            )
        )

    def merged(self, road: Road, *, target: Point, step: int):
        self.counts["merged"] += 1
        if self._sampled(step):
            self._emit("DEBUG", "merged", step=step, target=target.as_tuple(), **self._shape_road(road))

    def committed(self, road: Road, *, merged: bool, children: int, step: int, qsize: int):
        self.counts["committed"] += 1
        if self._sampled(step):
            self._emit(
                "DEBUG",
                "committed",
                step=step,
                merged=merged,
                children=children,
                qsize=qsize,
                **self._shape_road(road),
            )
        self.biz(
            RoadCommittedBiz(
                run_id=self.run_id,
                step=step,
                name="RoadCommitted",
                start=road.start.as_tuple(),
                end=road.end.as_tuple(),
                road_class=road.road_class.value,
                fuel=road.fuel,
                merged=merged,
                children=children,
            )
        )

    # ------------- Business Event Reporting --------------------------

    def biz(self, ev):
        if self.recorder:
            self.recorder.emit(ev)
