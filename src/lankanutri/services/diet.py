"""Diet plan prompt builder and generation service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from lankanutri.domain.diet import BmiCategory, DietPlanRecord, HealthProfile
from lankanutri.errors import UpstreamServiceError
from lankanutri.services.llm import ChatCompletionProvider

_logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"

DIET_SYSTEM_PROMPT = (
    "You are an expert Sri Lankan nutritionist and dietitian. Provide detailed, "
    "medically appropriate diet plans using traditional Sri Lankan foods."
)

_PROMPT_TEMPLATE = """\
You are an expert Sri Lankan nutritionist and dietitian with specialised \
knowledge of managing medical conditions through diet.

USER PROFILE:
- Age: {age} years
- Weight: {weight} kg
- Height: {height} cm
- BMI: {bmi:.1f} ({bmi_category})
- Body Type: {body_type}
- Activity Level: {activity_level}

MEDICAL CONDITIONS:
- Blood Pressure: {blood_pressure}
- Blood Sugar Level / Diabetes: {sugar}

REQUIREMENTS:
1. Create a personalised 7-day diet plan using only common, affordable Sri \
Lankan foods and ingredients.
2. The plan must be medically appropriate for the conditions above.{guidance}
3. Take the BMI ({bmi:.1f}, {bmi_category}) and body type ({body_type}) into \
account.
4. Use traditional Sri Lankan meals: rice and curry, sambol, mallum and similar.
5. Give portion sizes suited to this person.
6. Name specific Sri Lankan dishes for every meal.

GENERAL CONSIDERATIONS:
- High blood pressure: low sodium, potassium-rich vegetables such as \
gotukola, murunga and kankun.
- High blood sugar or diabetes: low glycemic index foods, whole grains such \
as kurakkan and red rice, no refined sugar.
- Prefer whole, unprocessed foods.
- Recommend 2-3 litres of water per day.
- Add simple lifestyle tips: walking, portion control, meal timing.

FORMAT:
For each day (Day 1 to Day 7) list Breakfast, Mid-morning Snack, Lunch, \
Afternoon Snack, Dinner, Water Intake and Notes. Finish with General Lifestyle \
Tips and Important Reminders, including advice to consult a healthcare \
professional when needed. Write clear, readable text with day headings and Sri \
Lankan food names and measurements.
"""


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Return body mass index from kilograms and centimetres."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def classify_bmi(bmi: float) -> BmiCategory:
    """Map a BMI value onto its category."""
    if bmi < 18.5:  # noqa: PLR2004
        return BmiCategory.UNDERWEIGHT
    if bmi < 25:  # noqa: PLR2004
        return BmiCategory.NORMAL
    if bmi < 30:  # noqa: PLR2004
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def build_diet_prompt(profile: HealthProfile) -> str:
    """Render the diet-plan instruction for a health profile."""
    bmi = round(calculate_bmi(profile.weight, profile.height), 1)
    guidance = []
    if profile.blood_pressure:
        guidance.append(
            f"\n   - For blood pressure ({profile.blood_pressure}): favour low "
            "sodium, potassium-rich foods such as gotukola, murunga and kankun."
        )
    if profile.sugar:
        guidance.append(
            f"\n   - For blood sugar ({profile.sugar}): favour low glycemic index "
            "foods and whole grains such as kurakkan and red rice, avoid refined "
            "sugar."
        )
    return _PROMPT_TEMPLATE.format(
        age=profile.age,
        weight=_format_number(profile.weight),
        height=_format_number(profile.height),
        bmi=bmi,
        bmi_category=classify_bmi(bmi).value,
        body_type=profile.body_type or NOT_SPECIFIED,
        activity_level=profile.activity_level or NOT_SPECIFIED,
        blood_pressure=profile.blood_pressure or NOT_SPECIFIED,
        sugar=profile.sugar or NOT_SPECIFIED,
        guidance="".join(guidance),
    )


def _format_number(value: float) -> str:
    return f"{value:g}"


class DietPlanRepository(Protocol):
    """Persistence interface for generated diet plans."""

    def create(self, record: DietPlanRecord) -> DietPlanRecord:
        """Persist a diet plan and return it with its id."""

    def list_for_user(self, user_id: UUID) -> list[DietPlanRecord]:
        """Return a user's diet plans, newest first."""


@dataclass
class DietPlanService:
    """Generate diet plans with an LLM and keep them per user."""

    provider: ChatCompletionProvider
    repository: DietPlanRepository
    temperature: float = 0.7
    max_tokens: int = 3000

    async def generate(self, user_id: UUID, profile: HealthProfile) -> DietPlanRecord:
        """Build the prompt, dispatch it and persist the returned plan."""
        prompt = build_diet_prompt(profile)
        _logger.info(
            "Generating diet plan: user=%s model=%s", user_id, self.provider.model
        )
        completion = await self.provider.complete(
            [
                {"role": "system", "content": DIET_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        plan_text = completion.content.strip()
        if not plan_text:
            raise UpstreamServiceError("Failed to generate diet plan content from AI")
        return self.repository.create(
            DietPlanRecord(
                id=None,
                user_id=user_id,
                profile=profile,
                plan_text=plan_text,
                metadata={"model": completion.model, "usage": completion.usage},
            )
        )

    def list_for_user(self, user_id: UUID) -> list[DietPlanRecord]:
        """Return the caller's diet plans."""
        return self.repository.list_for_user(user_id)
