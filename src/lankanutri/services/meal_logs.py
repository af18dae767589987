"""Meal logging and per-day statistics."""

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from lankanutri.domain.foods import TraditionalFood
from lankanutri.domain.meals import (
    MEAL_TYPES,
    DailyTotals,
    ManualItem,
    MealLog,
    RecognizedItem,
)
from lankanutri.domain.nutrition import NutritionFacts, NutritionTotals
from lankanutri.errors import ValidationError
from lankanutri.services.foods import FoodRepository
from lankanutri.services.nutrition import (
    Portion,
    aggregate_nutrition,
    parse_portion_amount,
    round_for_display,
    sum_nutrition,
)
from lankanutri.services.storage import ImageService, ImageUpload

_logger = logging.getLogger(__name__)

IMAGE_FOLDER = "meal-logs"
DEFAULT_LIST_LIMIT = 50
MAX_STATS_DAYS = 365


class MealLogRepository(Protocol):
    """Persistence interface for meal logs."""

    def create(self, meal_log: MealLog) -> MealLog:
        """Persist a new meal log."""

    def list_meal_logs(
        self,
        user_id: UUID,
        meal_type: str | None = None,
        since: datetime | None = None,
        limit: int | None = None,
    ) -> list[MealLog]:
        """Return a user's meal logs, newest first."""


@dataclass(frozen=True)
class MealStats:
    """Per-day totals and meal type counts for a period."""

    days: int
    daily: list[DailyTotals]
    meal_type_counts: dict[str, int]
    total: NutritionTotals


@dataclass
class MealLogService:
    """Record meals and summarize them by day."""

    repository: MealLogRepository
    food_repository: FoodRepository
    images: ImageService

    def log_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_type: str,
        recognized_items: list[RecognizedItem],
        manual_items: list[ManualItem],
        notes: str = "",
        image: ImageUpload | None = None,
    ) -> MealLog:
        """Compute meal totals from known foods and store the log."""
        if meal_type not in MEAL_TYPES:
            raise ValidationError("Invalid meal type", field="mealType")
        total = round_for_display(
            aggregate_nutrition(self._portions(recognized_items, manual_items))
        )
        url = self.images.store_optional(image, IMAGE_FOLDER)
        meal_log = self.repository.create(
            MealLog(
                id=None,
                user_id=user_id,
                meal_type=meal_type,
                total_nutrition=total,
                recognized_items=recognized_items,
                manual_items=manual_items,
                image=url or "",
                notes=notes,
                logged_at=datetime.now(tz=UTC),
            )
        )
        _logger.info(
            "Logged meal: user=%s type=%s calories=%s",
            user_id,
            meal_type,
            total.calories,
        )
        return meal_log

    def list_for_user(
        self,
        user_id: UUID,
        meal_type: str | None = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[MealLog]:
        if limit < 1:
            raise ValidationError("Limit must be positive", field="limit")
        return self.repository.list_meal_logs(
            user_id, meal_type=meal_type, limit=limit
        )

    def stats(
        self, user_id: UUID, days: int = 7, today: date | None = None
    ) -> MealStats:
        """Return totals for each of the last ``days`` days, oldest first."""
        if days < 1 or days > MAX_STATS_DAYS:
            raise ValidationError(
                f"Days must be between 1 and {MAX_STATS_DAYS}", field="days"
            )
        today = today or datetime.now(tz=UTC).date()
        start_day = today - timedelta(days=days - 1)
        since = datetime.combine(start_day, datetime.min.time(), tzinfo=UTC)
        logs = self.repository.list_meal_logs(user_id, since=since)
        daily = [
            _aggregate_day(start_day + timedelta(days=offset), logs)
            for offset in range(days)
        ]
        counts = Counter(
            log.meal_type for log in logs if _log_day(log) >= start_day
        )
        return MealStats(
            days=days,
            daily=daily,
            meal_type_counts={meal_type: counts[meal_type] for meal_type in MEAL_TYPES},
            total=round_for_display(sum_nutrition(day.nutrition for day in daily)),
        )

    def _portions(
        self,
        recognized_items: list[RecognizedItem],
        manual_items: list[ManualItem],
    ) -> list[Portion]:
        portions = []
        for item in manual_items:
            food = (
                self.food_repository.get(item.food_id)
                if item.food_id is not None
                else None
            )
            if food is None:
                portions.append(
                    Portion(NutritionFacts(calories=item.calories), 1.0, 1.0)
                )
                continue
            portions.append(_food_portion(food, item.portion))
        if recognized_items:
            by_name = {
                food.name.en.lower(): food
                for food in self.food_repository.list_foods()
                if food.name.en
            }
            for item in recognized_items:
                food = by_name.get(item.name.strip().lower())
                if food is not None:
                    portions.append(_food_portion(food, item.estimated_portion))
        return portions


def _food_portion(food: TraditionalFood, portion: str) -> Portion:
    reference = food.serving_size.amount
    amount = parse_portion_amount(portion, food.serving_size.unit)
    return Portion(food.nutrition, reference, reference if amount is None else amount)


def _log_day(log: MealLog) -> date:
    logged_at = log.logged_at or datetime.now(tz=UTC)
    return logged_at.astimezone(UTC).date()


def _aggregate_day(day: date, logs: list[MealLog]) -> DailyTotals:
    day_logs = [log for log in logs if _log_day(log) == day]
    return DailyTotals(
        day=day,
        meals=len(day_logs),
        nutrition=round_for_display(
            sum_nutrition(log.total_nutrition for log in day_logs)
        ),
    )
