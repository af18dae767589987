"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from lankanutri.api.app import create_app
from lankanutri.config import Settings
from lankanutri.containers import AppContainer
from lankanutri.domain.catalog import Order, Product
from lankanutri.domain.diet import DietPlanRecord
from lankanutri.domain.foods import TraditionalFood
from lankanutri.domain.localization import LocalizedText
from lankanutri.domain.meals import MealLog
from lankanutri.domain.nutrition import NutritionFacts, NutritionTotals, ServingSize
from lankanutri.domain.plates import Goal, Plate
from lankanutri.domain.programs import DietProgram
from lankanutri.domain.tips import DailyTip
from lankanutri.domain.users import Role, UserProfile
from lankanutri.errors import AuthenticationError, UpstreamServiceError, ValidationError
from lankanutri.services.chat import ChatService
from lankanutri.services.conversations import InMemoryConversationStore
from lankanutri.services.diet import DietPlanRepository, DietPlanService
from lankanutri.services.foods import FoodRepository, FoodService
from lankanutri.services.llm import ChatCompletion
from lankanutri.services.meal_logs import MealLogRepository, MealLogService
from lankanutri.services.nutrition import NutritionCalculatorService
from lankanutri.services.orders import OrderRepository, OrderService
from lankanutri.services.plates import (
    LatestPlateSelector,
    PlateGenerator,
    PlateRepository,
    PlateService,
)
from lankanutri.services.products import ProductRepository, ProductService
from lankanutri.services.programs import DietProgramRepository, DietProgramService
from lankanutri.services.storage import ImageService
from lankanutri.services.tips import DailyTipRepository, DailyTipService
from lankanutri.services.users import AuthGateway, UserRepository, UserService

TODAY = date(2025, 3, 14)


def _now() -> datetime:
    return datetime.now(tz=UTC)


def make_food(  # noqa: PLR0913
    name: str,
    calories: float,
    *,
    glycemic_index: float = 50,
    protein: float = 2.0,
    serving: float = 100,
    is_common: bool = True,
    category: str = "vegetables",
    sinhala: str = "",
) -> TraditionalFood:
    return TraditionalFood(
        id=uuid4(),
        name=LocalizedText(en=name, si=sinhala),
        type="dish",
        category=category,
        nutrition=NutritionFacts(
            calories=calories,
            protein=protein,
            carbs=10.0,
            fat=1.0,
            fiber=1.5,
            glycemic_index=glycemic_index,
        ),
        serving_size=ServingSize(amount=serving),
        is_common=is_common,
    )


def make_product(
    name: str = "Red rice",
    price: float = 250.0,
    *,
    stock: int = 10,
    is_available: bool = True,
    calories: float = 350.0,
) -> Product:
    return Product(
        id=uuid4(),
        name=name,
        price=price,
        category="grains",
        stock=stock,
        is_available=is_available,
        nutrition=NutritionTotals(calories=calories, protein=7.0, carbs=76.0),
    )


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    foods: dict[UUID, TraditionalFood] = field(default_factory=dict)

    def add(self, *foods: TraditionalFood) -> None:
        for food in foods:
            self.foods[food.id] = food

    def list_foods(
        self, category: str | None = None, food_type: str | None = None
    ) -> list[TraditionalFood]:
        return [
            food
            for food in self.foods.values()
            if (category is None or food.category == category)
            and (food_type is None or food.type == food_type)
        ]

    def get(self, food_id: UUID) -> TraditionalFood | None:
        return self.foods.get(food_id)

    def create(self, food: TraditionalFood) -> TraditionalFood:
        stored = replace(food, id=uuid4(), created_at=_now())
        self.foods[stored.id] = stored
        return stored


@dataclass
class InMemoryPlateRepository(PlateRepository):
    """In-memory plate repository for tests."""

    plates: list[Plate] = field(default_factory=list)

    def list_plates(
        self, goal: Goal | None = None, busy_life_only: bool = False
    ) -> list[Plate]:
        return [
            plate
            for plate in reversed(self.plates)
            if (goal is None or plate.goal == goal)
            and (not busy_life_only or plate.is_busy_life_friendly)
        ]

    def get(self, plate_id: UUID) -> Plate | None:
        return next((plate for plate in self.plates if plate.id == plate_id), None)

    def create(self, plate: Plate) -> Plate:
        stored = replace(plate, id=uuid4(), created_at=_now())
        self.plates.append(stored)
        return stored


@dataclass
class InMemoryDietPlanRepository(DietPlanRepository):
    """In-memory generated diet plan repository for tests."""

    records: list[DietPlanRecord] = field(default_factory=list)

    def create(self, record: DietPlanRecord) -> DietPlanRecord:
        stored = replace(record, id=uuid4(), created_at=_now())
        self.records.append(stored)
        return stored

    def list_for_user(self, user_id: UUID) -> list[DietPlanRecord]:
        return [r for r in reversed(self.records) if r.user_id == user_id]


@dataclass
class InMemoryDietProgramRepository(DietProgramRepository):
    """In-memory curated diet plan repository for tests."""

    programs: dict[UUID, DietProgram] = field(default_factory=dict)

    def list_programs(
        self, category: str | None = None, active_only: bool = True
    ) -> list[DietProgram]:
        return [
            program
            for program in self.programs.values()
            if (category is None or program.category == category)
            and (not active_only or program.is_active)
        ]

    def get(self, program_id: UUID) -> DietProgram | None:
        return self.programs.get(program_id)

    def create(self, program: DietProgram) -> DietProgram:
        stored = replace(program, id=uuid4(), created_at=_now())
        self.programs[stored.id] = stored
        return stored

    def update(self, program: DietProgram) -> DietProgram:
        self.programs[program.id] = program
        return program

    def delete(self, program_id: UUID) -> None:
        self.programs.pop(program_id, None)


@dataclass
class InMemoryProductRepository(ProductRepository):
    """In-memory product repository for tests."""

    products: dict[UUID, Product] = field(default_factory=dict)

    def add(self, *products: Product) -> None:
        for product in products:
            self.products[product.id] = product

    def list_products(
        self,
        category: str | None = None,
        search: str | None = None,
        available_only: bool = True,
    ) -> list[Product]:
        return [
            product
            for product in self.products.values()
            if (category is None or product.category == category)
            and (search is None or search.lower() in product.name.lower())
            and (not available_only or product.is_available)
        ]

    def get(self, product_id: UUID) -> Product | None:
        return self.products.get(product_id)

    def create(self, product: Product) -> Product:
        stored = replace(product, id=uuid4(), created_at=_now())
        self.products[stored.id] = stored
        return stored

    def update(self, product: Product) -> Product:
        self.products[product.id] = product
        return product

    def delete(self, product_id: UUID) -> None:
        self.products.pop(product_id, None)


@dataclass
class InMemoryOrderRepository(OrderRepository):
    """In-memory order repository for tests."""

    orders: dict[UUID, Order] = field(default_factory=dict)

    def create(self, order: Order) -> Order:
        stored = replace(order, id=uuid4(), created_at=_now())
        self.orders[stored.id] = stored
        return stored

    def get(self, order_id: UUID) -> Order | None:
        return self.orders.get(order_id)

    def list_orders(self, user_id: UUID | None = None) -> list[Order]:
        return [
            order
            for order in self.orders.values()
            if user_id is None or order.user_id == user_id
        ]

    def update(self, order: Order) -> Order:
        self.orders[order.id] = order
        return order


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory profile repository for tests."""

    users: dict[UUID, UserProfile] = field(default_factory=dict)

    def get(self, user_id: UUID) -> UserProfile | None:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserProfile | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def list_users(self) -> list[UserProfile]:
        return list(self.users.values())

    def create(self, profile: UserProfile) -> UserProfile:
        stored = replace(profile, created_at=_now())
        self.users[profile.id] = stored
        return stored

    def update(self, profile: UserProfile) -> UserProfile:
        self.users[profile.id] = profile
        return profile

    def delete(self, user_id: UUID) -> None:
        self.users.pop(user_id, None)


@dataclass
class InMemoryMealLogRepository(MealLogRepository):
    """In-memory meal log repository for tests."""

    logs: list[MealLog] = field(default_factory=list)

    def create(self, meal_log: MealLog) -> MealLog:
        stored = replace(meal_log, id=uuid4())
        self.logs.append(stored)
        return stored

    def list_meal_logs(
        self,
        user_id: UUID,
        meal_type: str | None = None,
        since: datetime | None = None,
        limit: int | None = None,
    ) -> list[MealLog]:
        logs = sorted(
            (
                log
                for log in self.logs
                if log.user_id == user_id
                and (meal_type is None or log.meal_type == meal_type)
                and (since is None or log.logged_at >= since)
            ),
            key=lambda log: log.logged_at,
            reverse=True,
        )
        return logs[:limit] if limit is not None else logs


@dataclass
class InMemoryDailyTipRepository(DailyTipRepository):
    """In-memory daily tip repository for tests."""

    tips: list[DailyTip] = field(default_factory=list)

    def list_tips(
        self,
        category: str | None = None,
        active_only: bool = True,
        until: date | None = None,
    ) -> list[DailyTip]:
        tips = [
            tip
            for tip in self.tips
            if (category is None or tip.category == category)
            and (not active_only or tip.is_active)
            and (until is None or tip.date <= until)
        ]
        return sorted(tips, key=lambda tip: tip.date, reverse=True)

    def create(self, tip: DailyTip) -> DailyTip:
        stored = replace(tip, id=uuid4())
        self.tips.append(stored)
        return stored


@dataclass
class FakeAuthGateway(AuthGateway):
    """Auth gateway issuing opaque tokens from memory."""

    accounts: dict[str, tuple[UUID, str]] = field(default_factory=dict)
    tokens: dict[str, UUID] = field(default_factory=dict)
    deleted: list[UUID] = field(default_factory=list)

    def sign_up(self, email: str, password: str) -> UUID:
        if email in self.accounts:
            raise ValidationError("User already registered", field="email")
        user_id = uuid4()
        self.accounts[email] = (user_id, password)
        return user_id

    def sign_in(self, email: str, password: str) -> tuple[UUID, str]:
        account = self.accounts.get(email)
        if account is None or account[1] != password:
            raise AuthenticationError("Invalid email or password")
        return account[0], self.issue(account[0])

    def verify(self, token: str) -> UUID:
        if token not in self.tokens:
            raise AuthenticationError("Not authorized, token failed")
        return self.tokens[token]

    def delete_user(self, user_id: UUID) -> None:
        self.deleted.append(user_id)
        self.accounts = {
            email: account
            for email, account in self.accounts.items()
            if account[0] != user_id
        }

    def issue(self, user_id: UUID) -> str:
        token = f"token-{user_id}"
        self.tokens[token] = user_id
        return token


@dataclass
class FakeImageStorage:
    """Image storage recording uploads in memory."""

    uploads: list[tuple[str, bytes, str]] = field(default_factory=list)
    fail: bool = False

    @property
    def is_available(self) -> bool:
        return True

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        if self.fail:
            raise UpstreamServiceError("Image upload failed")
        self.uploads.append((path, content, content_type))
        return f"https://storage.test/{path}"


@dataclass
class FakeChatProvider:
    """Chat provider returning canned replies and recording requests."""

    reply: str = "Eat more gotukola."
    model: str = "fake-model"
    calls: list[list[dict[str, str]]] = field(default_factory=list)

    @property
    def is_available(self) -> bool:
        return True

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> ChatCompletion:
        self.calls.append([dict(message) for message in messages])
        return ChatCompletion(
            content=self.reply, model=self.model, usage={"total_tokens": 42}
        )


def add_user(
    container: AppContainer, name: str = "Nimal", role: Role = Role.USER
) -> tuple[UserProfile, str]:
    """Register a profile directly and return it with a bearer token."""
    gateway = container.user_service.gateway
    profile = container.user_service.repository.create(
        UserProfile(
            id=uuid4(), name=name, email=f"{name.lower()}@example.lk", role=role
        )
    )
    return profile, gateway.issue(profile.id)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        supabase_storage_bucket="images",
        openai_api_key="openai-key",
        groq_api_key="groq-key",
        environment="local",
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    food_repository = InMemoryFoodRepository()
    product_repository = InMemoryProductRepository()
    image_service = ImageService(
        FakeImageStorage(), max_bytes=settings.max_upload_bytes
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=UserService(
            gateway=FakeAuthGateway(),
            repository=InMemoryUserRepository(),
            images=image_service,
        ),
        food_service=FoodService(food_repository),
        plate_service=PlateService(
            repository=InMemoryPlateRepository(),
            food_repository=food_repository,
            generator=PlateGenerator(
                target_ratio=settings.plate_target_ratio,
                candidate_limit=settings.plate_candidate_limit,
            ),
            selector=LatestPlateSelector(),
            default_target_calories=settings.default_target_calories,
        ),
        program_service=DietProgramService(
            InMemoryDietProgramRepository(), image_service
        ),
        product_service=ProductService(product_repository, image_service),
        order_service=OrderService(
            repository=InMemoryOrderRepository(),
            product_repository=product_repository,
            shipping_price=settings.shipping_price,
        ),
        tip_service=DailyTipService(InMemoryDailyTipRepository(), today=lambda: TODAY),
        meal_log_service=MealLogService(
            repository=InMemoryMealLogRepository(),
            food_repository=food_repository,
            images=image_service,
        ),
        calculator_service=NutritionCalculatorService(
            product_repository=product_repository, food_repository=food_repository
        ),
        diet_plan_service=DietPlanService(
            provider=FakeChatProvider(reply="## Your plan\nRed rice and parippu."),
            repository=InMemoryDietPlanRepository(),
        ),
        chat_service=ChatService(
            provider=FakeChatProvider(),
            store=InMemoryConversationStore(),
            history_limit=settings.chat_history_limit,
            ttl_seconds=settings.conversation_ttl_seconds,
        ),
        image_service=image_service,
        close_resources=close_resources,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
