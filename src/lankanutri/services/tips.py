"""Daily tip selection and management."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol

from lankanutri.domain.tips import TIP_CATEGORIES, TIP_DIFFICULTIES, DailyTip
from lankanutri.errors import NotFoundError, ValidationError


class DailyTipRepository(Protocol):
    """Persistence interface for daily tips."""

    def list_tips(
        self,
        category: str | None = None,
        active_only: bool = True,
        until: date | None = None,
    ) -> list[DailyTip]:
        """Return tips ordered by date, newest first."""

    def create(self, tip: DailyTip) -> DailyTip:
        """Persist a new tip."""


def _utc_today() -> date:
    return datetime.now(tz=UTC).date()


def select_tip_of_day(tips: list[DailyTip], today: date) -> DailyTip:
    """Rotate through the tips by day of year."""
    return tips[today.timetuple().tm_yday % len(tips)]


@dataclass
class DailyTipService:
    """Serve a deterministic tip for each day."""

    repository: DailyTipRepository
    today: Callable[[], date] = field(default=_utc_today)

    def tip_of_the_day(self, category: str | None = None) -> DailyTip:
        today = self.today()
        tips = self.repository.list_tips(
            category=category, active_only=True, until=today
        )
        if not tips:
            raise NotFoundError("Tip")
        return select_tip_of_day(tips, today)

    def list_tips(self, category: str | None = None) -> list[DailyTip]:
        return self.repository.list_tips(category=category, active_only=True)

    def create_tip(self, tip: DailyTip) -> DailyTip:
        if not tip.tip.en:
            raise ValidationError("English tip text is required", field="tip")
        if tip.category not in TIP_CATEGORIES:
            raise ValidationError("Invalid tip category", field="category")
        if tip.difficulty not in TIP_DIFFICULTIES:
            raise ValidationError("Invalid difficulty", field="difficulty")
        return self.repository.create(tip)
