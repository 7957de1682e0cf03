import math
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from road_gen.domain.entities.geometry import RoadClass

# Smallest usable map edge, in map units
MIN_DIMENSION = 16

RuleKind = Literal["grid", "organic"]
RoadClassName = Literal["large", "medium", "small"]


class WindowModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    width: int = Field(960, ge=MIN_DIMENSION)
    height: int = Field(600, ge=MIN_DIMENSION)
    growth_increment: int | None = Field(None, ge=1)  # None => grow to exhaustion


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(1, ge=1)


class IndexModel(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    cell_size: float = Field(32.0, gt=0)


# ----------------- GENERATION ---------------------


class GenerationModel(BaseModel):
    """Growth parameters for one road class."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    road_length: float = Field(20.0, gt=0)
    road_chance: float = Field(0.8, ge=0.0, le=1.0)
    merge_range: float = Field(5.0, ge=0.0)
    fuel_range: tuple[int, int] = (3, 10)  # [low, high)
    child_chance: float = Field(0.1, ge=0.0, le=1.0)
    organic_angle: float = Field(30.0, ge=0.0, le=180.0)  # degrees

    @field_validator("fuel_range")
    @classmethod
    def _check_fuel_range(cls, v: tuple[int, int]) -> tuple[int, int]:
        low, high = v
        if low < 0:
            raise ValueError(f"fuel_range low must be >= 0, got {low}")
        if high <= low:
            raise ValueError(f"fuel_range [{low}, {high}) is empty")
        return v


class GenerationsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    large: GenerationModel = Field(default_factory=GenerationModel)
    medium: GenerationModel | None = None
    small: GenerationModel | None = None

    def for_class(self, road_class: RoadClass) -> GenerationModel:
        """Settings for road_class; classes without their own entry use `large`."""
        cfg = getattr(self, road_class.value)
        return cfg if cfg is not None else self.large


# ----------------- ZONES ---------------------


class ZoneBandModel(BaseModel):
    """Rule `inside` for coordinates within [low, high] on `axis`, `outside` elsewhere."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    kind: Literal["band"] = "band"
    axis: Literal["x", "y"] = "x"
    low: float = 400.0
    high: float = 600.0
    inside: RuleKind = "organic"
    outside: RuleKind = "grid"

    @model_validator(mode="after")
    def _check_band(self):
        if self.high < self.low:
            raise ValueError(f"band high ({self.high}) must be >= low ({self.low})")
        return self


class ZoneUniformModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["uniform"] = "uniform"
    rule: RuleKind = "grid"


ZoneUnion = Annotated[ZoneBandModel | ZoneUniformModel, Field(discriminator="kind")]


# ----------------- SEED ---------------------


class SeedRoadModel(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)
    origin: tuple[float, float] | None = None  # None => uniform over the map
    heading_deg: float = 0.0
    fuel: int = Field(1, ge=0)
    road_class: RoadClassName = "large"


# ------------------------------------------------------------------


class RoadMapModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "roads"
    run_id: str = "local"
    seed: int | None = None  # None => fresh entropy per run
    window: WindowModel = Field(default_factory=WindowModel)
    generation: GenerationsModel = Field(default_factory=GenerationsModel)
    zones: ZoneUnion = Field(default_factory=ZoneBandModel)
    seed_road: SeedRoadModel = Field(default_factory=SeedRoadModel)
    index: IndexModel = Field(default_factory=IndexModel)
    log: LogModel = LogModel()

    @model_validator(mode="after")
    def _check_seed_fits(self):
        w, h = self.window.width, self.window.height
        seed_cfg = self.generation.for_class(RoadClass(self.seed_road.road_class))
        if seed_cfg.road_length >= max(w, h):
            raise ValueError(
                f"window {w}x{h} is too small for a seed road of length {seed_cfg.road_length}"
            )
        if self.seed_road.origin is not None:
            x, y = self.seed_road.origin
            if not (0 <= x <= w and 0 <= y <= h):
                raise ValueError(f"seed_road.origin {self.seed_road.origin} lies outside {w}x{h}")
        return self

    @property
    def bounds(self) -> tuple[int, int]:
        return self.window.width, self.window.height

    def seed_heading(self) -> float:
        return math.radians(self.seed_road.heading_deg)
