"""Pydantic request models for the HTTP API."""

from datetime import date
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from lankanutri.domain.diet import HealthProfile
from lankanutri.domain.localization import LocalizedText
from lankanutri.domain.nutrition import NutritionFacts, NutritionTotals, ServingSize
from lankanutri.errors import ValidationError


class CamelModel(BaseModel):
    """Request model accepting camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LocalizedTextIn(BaseModel):
    """Localized text payload."""

    en: str = ""
    si: str = ""
    ta: str = ""

    def to_domain(self) -> LocalizedText:
        return LocalizedText(en=self.en, si=self.si, ta=self.ta)


class NutritionIn(CamelModel):
    """Nutrient values; omitted fields default to zero."""

    calories: float = Field(default=0, ge=0)
    protein: float = Field(default=0, ge=0)
    carbs: float = Field(default=0, ge=0)
    fat: float = Field(default=0, ge=0)
    fiber: float = Field(default=0, ge=0)
    iron: float = Field(default=0, ge=0)
    calcium: float = Field(default=0, ge=0)
    glycemic_index: float = Field(default=0, ge=0)

    def to_facts(self) -> NutritionFacts:
        return NutritionFacts(**self.model_dump())

    def to_totals(self) -> NutritionTotals:
        return NutritionTotals(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            fiber=self.fiber,
        )


class ServingSizeIn(BaseModel):
    amount: float = Field(default=100, gt=0)
    unit: str = "g"

    def to_domain(self) -> ServingSize:
        return ServingSize(amount=self.amount, unit=self.unit)


class FoodCreate(CamelModel):
    """Traditional food payload."""

    name: LocalizedTextIn
    description: LocalizedTextIn = Field(default_factory=LocalizedTextIn)
    type: str
    category: str
    nutrition: NutritionIn = Field(default_factory=NutritionIn)
    serving_size: ServingSizeIn = Field(default_factory=ServingSizeIn)
    traditional_uses: list[str] = Field(default_factory=list)
    health_benefits: list[str] = Field(default_factory=list)
    preparation_methods: list[str] = Field(default_factory=list)
    image: str = ""
    is_common: bool = True
    is_affordable: bool = True


class PlateItemIn(CamelModel):
    food_id: UUID | None = None
    name: str
    portion: str = ""
    nutrition: NutritionIn = Field(default_factory=NutritionIn)


class SubstitutionIn(CamelModel):
    original: str
    substitute: str
    reason: str = ""


class PlateCreate(CamelModel):
    """Curated plate payload; totals are computed from the items."""

    name: LocalizedTextIn
    description: LocalizedTextIn = Field(default_factory=LocalizedTextIn)
    goal: str
    items: list[PlateItemIn] = Field(min_length=1)
    substitutions: list[SubstitutionIn] = Field(default_factory=list)
    is_busy_life_friendly: bool = False
    prep_time: int = Field(default=0, ge=0)
    image: str = ""


class TipCreate(CamelModel):
    """Daily tip payload."""

    tip: LocalizedTextIn
    category: str
    tip_date: date | None = Field(default=None, alias="date")
    difficulty: str = "easy"
    cultural_relevance: str = "high"
    related_foods: list[str] = Field(default_factory=list)
    is_active: bool = True


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str


class LoginRequest(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class RoleUpdate(BaseModel):
    role: str


class OrderItemIn(CamelModel):
    product_id: UUID = Field(validation_alias=AliasChoices("productId", "product"))
    quantity: int = Field(ge=1)


class ShippingAddressIn(CamelModel):
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    postal_code: str = ""
    country: str = "Sri Lanka"


class OrderCreate(CamelModel):
    """Checkout payload; prices are taken from the catalog."""

    order_items: list[OrderItemIn] = Field(min_length=1)
    shipping_address: ShippingAddressIn
    payment_method: str = "cash"


class OrderStatusUpdate(CamelModel):
    is_paid: bool | None = None
    is_delivered: bool | None = None


class DietPlanRequest(CamelModel):
    """Health profile submitted for a personalised diet plan."""

    weight: float = Field(gt=0)
    height: float = Field(gt=0)
    age: int = Field(gt=0)
    blood_pressure: str | None = None
    sugar: str | None = None
    body_type: str | None = None
    activity_level: str | None = None

    def to_profile(self) -> HealthProfile:
        return HealthProfile(**self.model_dump())


class ChatRequest(CamelModel):
    message: str = ""
    conversation_id: str | None = None


class ClearChatRequest(CamelModel):
    conversation_id: str | None = None


class RecognizedItemIn(CamelModel):
    name: str = Field(min_length=1)
    confidence: float = Field(default=0, ge=0, le=1)
    estimated_portion: str = ""


class ManualItemIn(CamelModel):
    name: str = Field(min_length=1)
    portion: str = ""
    calories: float = Field(default=0, ge=0)
    food_id: UUID | None = None


class CalculatorItemIn(CamelModel):
    product_id: UUID | None = None
    food_id: UUID | None = None
    quantity: float = Field(gt=0)


class CalculateRequest(BaseModel):
    items: list[CalculatorItemIn] = Field(min_length=1)


def parse_json_form(value: str | None, model: type, field: str):
    """Validate a JSON-encoded multipart field against a type."""
    if value is None or not value.strip():
        return None
    try:
        return TypeAdapter(model).validate_json(value)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid {field}", field=field, detail=str(exc)) from exc
