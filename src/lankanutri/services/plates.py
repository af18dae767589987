"""Goal-based Sri Lankan plate generation and selection."""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Protocol
from uuid import UUID

from lankanutri.domain.foods import TraditionalFood
from lankanutri.domain.localization import LocalizedText
from lankanutri.domain.plates import Goal, Plate, PlateItem
from lankanutri.errors import NotFoundError, ValidationError
from lankanutri.services.foods import FoodRepository
from lankanutri.services.nutrition import scale_nutrition, sum_nutrition

_logger = logging.getLogger(__name__)

LOW_GLYCEMIC_INDEX = 55
LOW_CALORIE_THRESHOLD = 200
FALLBACK_CALORIES_PER_REFERENCE = 100
GENERATED_PREP_TIME = 30

GOAL_FILTERS: dict[Goal, Callable[[TraditionalFood], bool]] = {
    Goal.DIABETES: lambda food: food.nutrition.glycemic_index < LOW_GLYCEMIC_INDEX,
    Goal.WEIGHT_LOSS: lambda food: food.nutrition.calories < LOW_CALORIE_THRESHOLD,
}


def parse_goal(value: str | None) -> Goal:
    """Validate a goal query value."""
    if not value:
        raise ValidationError("goal is required", field="goal")
    try:
        return Goal(value)
    except ValueError as exc:
        allowed = ", ".join(goal.value for goal in Goal)
        raise ValidationError(
            f"goal must be one of: {allowed}", field="goal"
        ) from exc


def _candidate_sort_key(food: TraditionalFood) -> tuple[bool, str, str]:
    return (not food.is_common_and_affordable, food.name.en.lower(), str(food.id))


@dataclass(frozen=True)
class PlateGenerator:
    """Greedy plate builder that fills a calorie budget from candidate foods."""

    target_ratio: float = 0.9
    candidate_limit: int = 20

    def candidates(
        self, goal: Goal, foods: list[TraditionalFood]
    ) -> list[TraditionalFood]:
        """Return goal-eligible foods in a stable, preference-first order."""
        predicate = GOAL_FILTERS.get(goal)
        eligible = [food for food in foods if predicate is None or predicate(food)]
        return sorted(eligible, key=_candidate_sort_key)[: self.candidate_limit]

    def generate(
        self, goal: Goal, target_calories: float, foods: list[TraditionalFood]
    ) -> Plate:
        """Build an unsaved plate for a goal and calorie target."""
        threshold = target_calories * self.target_ratio
        items: list[PlateItem] = []
        current_calories = 0.0
        for food in self.candidates(goal, foods):
            if current_calories >= threshold:
                break
            grams = _portion_amount(food, target_calories - current_calories)
            nutrition = scale_nutrition(
                food.nutrition, food.serving_size.amount, grams
            )
            items.append(
                PlateItem(
                    food_id=food.id,
                    name=food.name.en,
                    portion=f"{grams:g}{food.serving_size.unit}",
                    nutrition=nutrition,
                )
            )
            current_calories += nutrition.calories
        return Plate(
            id=None,
            name=LocalizedText(en=f"{_title(goal)} Friendly Plate"),
            goal=goal,
            items=items,
            total_nutrition=sum_nutrition(item.nutrition for item in items),
            is_busy_life_friendly=goal is Goal.WEIGHT_LOSS,
            prep_time=GENERATED_PREP_TIME,
        )


def _portion_amount(food: TraditionalFood, remaining_calories: float) -> float:
    calories_per_reference = (
        food.nutrition.calories or FALLBACK_CALORIES_PER_REFERENCE
    )
    amount = remaining_calories / calories_per_reference * food.serving_size.amount
    return float(max(round(amount), 0))


def _title(goal: Goal) -> str:
    return goal.value[:1].upper() + goal.value[1:]


class PlateSelector(Protocol):
    """Strategy choosing one plate among several stored for a goal."""

    def pick(self, plates: list[Plate]) -> Plate:
        """Return one of the given non-empty plates."""


@dataclass
class RandomPlateSelector(PlateSelector):
    """Pick uniformly at random using an injectable random source."""

    rng: random.Random = field(default_factory=random.Random)

    def pick(self, plates: list[Plate]) -> Plate:
        return self.rng.choice(plates)


@dataclass
class LatestPlateSelector(PlateSelector):
    """Pick the first plate, which repositories return newest first."""

    def pick(self, plates: list[Plate]) -> Plate:
        return plates[0]


def build_selector(name: str, rng: random.Random | None = None) -> PlateSelector:
    """Return the selection strategy configured by name."""
    if name == "latest":
        return LatestPlateSelector()
    if name == "random":
        return RandomPlateSelector(rng or random.Random())
    raise ValueError(f"Unknown plate selection strategy: {name}")


class PlateRepository(Protocol):
    """Persistence interface for plates."""

    def list_plates(
        self, goal: Goal | None = None, busy_life_only: bool = False
    ) -> list[Plate]:
        """Return plates, newest first."""

    def get(self, plate_id: UUID) -> Plate | None:
        """Return a plate by id, if present."""

    def create(self, plate: Plate) -> Plate:
        """Persist a plate and return it with its id."""


@dataclass
class PlateService:
    """Serve stored plates and generate new ones on demand."""

    repository: PlateRepository
    food_repository: FoodRepository
    generator: PlateGenerator
    selector: PlateSelector
    default_target_calories: int = 2000

    def generate(self, goal: Goal, target_calories: int | None = None) -> Plate:
        """Return a stored plate for the goal, generating one when none exist."""
        plates = self.repository.list_plates(goal=goal)
        if plates:
            return self.selector.pick(plates)
        target = target_calories or self.default_target_calories
        foods = self.food_repository.list_foods()
        plate = self.generator.generate(goal, target, foods)
        _logger.info(
            "Generated plate: goal=%s target=%s items=%s",
            goal.value,
            target,
            len(plate.items),
        )
        return self.repository.create(plate)

    def list_plates(
        self, goal: Goal | None = None, busy_life_only: bool = False
    ) -> list[Plate]:
        """Return stored plates filtered by goal and busy-life flag."""
        return self.repository.list_plates(goal=goal, busy_life_only=busy_life_only)

    def get_plate(self, plate_id: UUID) -> Plate:
        plate = self.repository.get(plate_id)
        if plate is None:
            raise NotFoundError("Plate")
        return plate

    def create_plate(self, plate: Plate) -> Plate:
        """Persist a curated plate with totals recomputed from its items."""
        total = sum_nutrition(item.nutrition for item in plate.items)
        return self.repository.create(replace(plate, id=None, total_nutrition=total))
