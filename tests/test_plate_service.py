"""Tests for plate generation and selection."""

import random
from dataclasses import replace
from uuid import uuid4

import pytest

from lankanutri.domain.nutrition import NutritionTotals
from lankanutri.domain.plates import Goal
from lankanutri.errors import NotFoundError, ValidationError
from lankanutri.services.nutrition import sum_nutrition
from lankanutri.services.plates import (
    LatestPlateSelector,
    PlateGenerator,
    PlateService,
    RandomPlateSelector,
    build_selector,
    parse_goal,
)
from tests.conftest import InMemoryFoodRepository, InMemoryPlateRepository, make_food


def _foods() -> list:
    return [
        make_food("Red rice", 350, glycemic_index=55),
        make_food("Kurakkan roti", 250, glycemic_index=45),
        make_food("Gotukola sambol", 40, glycemic_index=15),
        make_food("Parippu", 116, glycemic_index=30),
        make_food("Kiribath", 180, glycemic_index=80),
        make_food("Pol roti", 320, glycemic_index=60, is_common=False),
    ]


def test_diabetes_plate_only_uses_low_glycemic_foods() -> None:
    foods = _foods()
    low_gi = {food.id for food in foods if food.nutrition.glycemic_index < 55}

    plate = PlateGenerator().generate(Goal.DIABETES, 2000, foods)

    assert plate.items
    assert {item.food_id for item in plate.items} <= low_gi


def test_weight_loss_plate_only_uses_low_calorie_foods() -> None:
    foods = _foods()
    light = {food.id for food in foods if food.nutrition.calories < 200}

    plate = PlateGenerator().generate(Goal.WEIGHT_LOSS, 1500, foods)

    assert {item.food_id for item in plate.items} <= light
    assert plate.is_busy_life_friendly is True


def test_plate_totals_equal_sum_of_items() -> None:
    plate = PlateGenerator().generate(Goal.GENERAL_HEALTH, 2000, _foods())

    assert plate.total_nutrition == sum_nutrition(
        item.nutrition for item in plate.items
    )


def test_first_portion_fills_the_remaining_budget() -> None:
    food = make_food("Red rice", 350, serving=100)

    plate = PlateGenerator().generate(Goal.WEIGHT_GAIN, 700, [food])

    assert plate.items[0].portion == "200g"
    assert plate.items[0].nutrition.calories == pytest.approx(700)


def test_generation_stops_once_ratio_is_reached() -> None:
    foods = [make_food("Red rice", 350), make_food("Parippu", 116)]

    plate = PlateGenerator(target_ratio=0.9).generate(Goal.WEIGHT_GAIN, 700, foods)

    assert len(plate.items) == 1


def test_generation_terminates_when_target_is_unreachable() -> None:
    foods = [make_food(f"Food {n}", 0) for n in range(3)]

    plate = PlateGenerator(candidate_limit=2).generate(Goal.GENERAL_HEALTH, 2000, foods)

    assert len(plate.items) == 2
    assert plate.total_nutrition.calories == 0


def test_generation_with_no_candidates_returns_empty_plate() -> None:
    foods = [make_food("Kiribath", 180, glycemic_index=80)]

    plate = PlateGenerator().generate(Goal.DIABETES, 2000, foods)

    assert plate.items == []
    assert plate.total_nutrition == NutritionTotals()


def test_candidates_prefer_common_foods_then_name() -> None:
    foods = _foods()

    ordered = PlateGenerator().candidates(Goal.WEIGHT_GAIN, foods)

    assert ordered[-1].name.en == "Pol roti"
    names = [food.name.en for food in ordered[:-1]]
    assert names == sorted(names, key=str.lower)


def test_parse_goal_rejects_unknown_values() -> None:
    assert parse_goal("diabetes") is Goal.DIABETES
    with pytest.raises(ValidationError):
        parse_goal("keto")
    with pytest.raises(ValidationError):
        parse_goal(None)


def test_service_generates_and_persists_when_none_stored() -> None:
    foods = InMemoryFoodRepository()
    foods.add(*_foods())
    plates = InMemoryPlateRepository()
    service = PlateService(plates, foods, PlateGenerator(), LatestPlateSelector())

    plate = service.generate(Goal.DIABETES)

    assert plate.id is not None
    assert plates.plates == [plate]
    assert service.generate(Goal.DIABETES) == plate


def test_service_create_recomputes_totals() -> None:
    foods = InMemoryFoodRepository()
    foods.add(*_foods())
    service = PlateService(
        InMemoryPlateRepository(), foods, PlateGenerator(), LatestPlateSelector()
    )
    generated = PlateGenerator().generate(Goal.GENERAL_HEALTH, 1200, _foods())
    tampered = replace(generated, total_nutrition=NutritionTotals(calories=1))

    stored = service.create_plate(tampered)

    assert stored.total_nutrition == generated.total_nutrition


def test_get_plate_missing_is_not_found() -> None:
    service = PlateService(
        InMemoryPlateRepository(),
        InMemoryFoodRepository(),
        PlateGenerator(),
        LatestPlateSelector(),
    )

    with pytest.raises(NotFoundError):
        service.get_plate(uuid4())


def test_random_selector_uses_injected_rng() -> None:
    plates = [
        PlateGenerator().generate(Goal.GENERAL_HEALTH, 500, [make_food("A", 100)]),
        PlateGenerator().generate(Goal.GENERAL_HEALTH, 900, [make_food("B", 100)]),
    ]

    first = RandomPlateSelector(random.Random(7)).pick(plates)
    second = RandomPlateSelector(random.Random(7)).pick(plates)

    assert first is second


def test_build_selector_rejects_unknown_strategy() -> None:
    assert isinstance(build_selector("latest"), LatestPlateSelector)
    with pytest.raises(ValueError, match="Unknown plate selection"):
        build_selector("cheapest")
