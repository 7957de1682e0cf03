# tests/config/test_config_models.py
import math

import pytest
from pydantic import ValidationError

from road_gen.config.models import (
    MIN_DIMENSION,
    GenerationModel,
    GenerationsModel,
    RoadMapModel,
    ZoneBandModel,
    ZoneUniformModel,
)
from road_gen.domain.entities.geometry import RoadClass


def test_defaults_validate():
    cfg = RoadMapModel()
    assert cfg.bounds == (960, 600)
    assert cfg.window.growth_increment is None
    assert isinstance(cfg.zones, ZoneBandModel)
    assert (cfg.zones.low, cfg.zones.high) == (400.0, 600.0)
    assert cfg.seed is None
    assert cfg.seed_road.fuel == 1


def test_empty_fuel_range_is_rejected():
    with pytest.raises(ValidationError, match="empty"):
        GenerationModel(fuel_range=(1, 1))
    with pytest.raises(ValidationError):
        GenerationModel(fuel_range=(5, 2))
    with pytest.raises(ValidationError):
        GenerationModel(fuel_range=(-1, 3))
    # and when nested in a full config, before any growth
    with pytest.raises(ValidationError):
        RoadMapModel.model_validate({"generation": {"medium": {"fuel_range": [1, 1]}}})


def test_fuel_range_from_list():
    assert GenerationModel.model_validate({"fuel_range": [0, 1]}).fuel_range == (0, 1)


@pytest.mark.parametrize(
    "field, value",
    [
        ("road_chance", 1.5),
        ("road_chance", -0.1),
        ("child_chance", 2.0),
        ("road_length", 0.0),
        ("merge_range", -1.0),
        ("organic_angle", -5.0),
        ("road_length", math.nan),
        ("merge_range", math.inf),
    ],
)
def test_generation_bounds(field, value):
    with pytest.raises(ValidationError):
        GenerationModel(**{field: value})


@pytest.mark.parametrize(
    "window",
    [
        {"width": MIN_DIMENSION - 1, "height": 600},
        {"width": 960, "height": 0},
        {"width": 960, "height": 600, "growth_increment": 0},
    ],
)
def test_degenerate_window_is_rejected(window):
    with pytest.raises(ValidationError):
        RoadMapModel.model_validate({"window": window})


def test_window_must_fit_the_seed_road():
    with pytest.raises(ValidationError, match="too small"):
        RoadMapModel.model_validate(
            {"window": {"width": 32, "height": 32}, "generation": {"large": {"road_length": 40}}}
        )


def test_seed_origin_must_be_inside():
    with pytest.raises(ValidationError, match="outside"):
        RoadMapModel.model_validate({"seed_road": {"origin": [970, 10]}})
    cfg = RoadMapModel.model_validate({"seed_road": {"origin": [960, 600]}})
    assert cfg.seed_road.origin == (960.0, 600.0)


def test_unknown_keys_are_rejected():
    with pytest.raises(ValidationError):
        RoadMapModel.model_validate({"generaton": {}})
    with pytest.raises(ValidationError):
        GenerationModel.model_validate({"road_lenght": 3})


def test_class_fallback_to_large():
    gens = GenerationsModel(large=GenerationModel(road_length=11.0), small=GenerationModel(road_length=3.0))
    assert gens.for_class(RoadClass.LARGE).road_length == 11.0
    assert gens.for_class(RoadClass.MEDIUM) is gens.large
    assert gens.for_class(RoadClass.SMALL).road_length == 3.0


def test_zone_discriminator():
    cfg = RoadMapModel.model_validate({"zones": {"kind": "uniform", "rule": "organic"}})
    assert isinstance(cfg.zones, ZoneUniformModel)
    assert cfg.zones.rule == "organic"

    with pytest.raises(ValidationError):
        RoadMapModel.model_validate({"zones": {"kind": "radial"}})
    with pytest.raises(ValidationError):
        RoadMapModel.model_validate({"zones": {"kind": "uniform", "rule": "radial"}})
    with pytest.raises(ValidationError, match="must be >= low"):
        RoadMapModel.model_validate({"zones": {"kind": "band", "low": 600, "high": 400}})


def test_seed_heading_in_radians():
    cfg = RoadMapModel.model_validate({"seed_road": {"heading_deg": 90}})
    assert cfg.seed_heading() == pytest.approx(math.pi / 2)
