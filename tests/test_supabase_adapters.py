"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from types import SimpleNamespace
from uuid import uuid4

import pytest

from lankanutri.adapters.supabase_auth_gateway import SupabaseAuthGateway
from lankanutri.adapters.supabase_diet_plan_repository import (
    SupabaseDietPlanRepository,
)
from lankanutri.adapters.supabase_food_repository import SupabaseFoodRepository
from lankanutri.adapters.supabase_image_storage import SupabaseImageStorage
from lankanutri.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from lankanutri.adapters.supabase_order_repository import SupabaseOrderRepository
from lankanutri.adapters.supabase_product_repository import (
    SupabaseProductRepository,
)
from lankanutri.adapters.supabase_tip_repository import SupabaseDailyTipRepository
from lankanutri.adapters.supabase_user_repository import SupabaseUserRepository
from lankanutri.domain.diet import DietPlanRecord, HealthProfile
from lankanutri.domain.localization import LocalizedText
from lankanutri.domain.tips import DailyTip
from lankanutri.domain.users import Role, UserProfile
from lankanutri.errors import AuthenticationError


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    last_limit: int | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def ilike(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("ilike", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_food_repository_parses_localized_json_columns() -> None:
    client = FakeSupabaseClient()
    food_id = str(uuid4())
    client.table("traditional_foods").queue(
        "select",
        [
            {
                "id": food_id,
                "name": {"en": "Kola kenda", "si": "කොළ කැඳ"},
                "type": "beverage",
                "category": "beverages",
                "nutrition": {"calories": 80, "glycemicIndex": 35},
                "serving_size": {"amount": 250, "unit": "ml"},
                "health_benefits": ["Rich in fibre"],
                "created_at": "2025-01-05T08:00:00+00:00",
            }
        ],
    )

    foods = SupabaseFoodRepository(client).list_foods(category="beverages")

    assert str(foods[0].id) == food_id
    assert foods[0].name.si == "කොළ කැඳ"
    assert foods[0].nutrition.glycemic_index == 35
    assert foods[0].serving_size.amount == 250
    assert foods[0].health_benefits == ["Rich in fibre"]
    assert client.table("traditional_foods").last_filters == [
        ("eq", "category", "beverages")
    ]


def test_food_repository_get_missing_returns_none() -> None:
    assert SupabaseFoodRepository(FakeSupabaseClient()).get(uuid4()) is None


def test_product_repository_search_filters() -> None:
    client = FakeSupabaseClient()
    table = client.table("products")
    table.queue("select", [{"id": str(uuid4()), "name": "Red rice", "price": 250}])

    products = SupabaseProductRepository(client).list_products(search="rice")

    assert products[0].price == 250.0
    assert ("ilike", "name", "%rice%") in table.last_filters
    assert ("eq", "is_available", True) in table.last_filters
    assert table.last_order == ("created_at", True)


def test_order_repository_create_serializes_items() -> None:
    client = FakeSupabaseClient()
    table = client.table("orders")
    user_id = uuid4()
    product_id = uuid4()
    row = {
        "id": str(uuid4()),
        "user_id": str(user_id),
        "order_items": [
            {"product_id": str(product_id), "name": "Red rice", "quantity": 2}
        ],
        "shipping_address": {"address": "12 Galle Road", "city": "Colombo"},
        "items_price": 500,
        "shipping_price": 200,
        "total_price": 700,
    }
    table.queue("insert", [row])
    table.queue("select", [row])

    repository = SupabaseOrderRepository(client)
    fetched = repository.get(uuid4())

    assert fetched is not None
    assert fetched.items[0].product_id == product_id
    assert fetched.shipping_address.country == "Sri Lanka"
    assert fetched.total_price == 700.0
    assert repository.create(fetched).user_id == user_id
    assert table.last_payload["order_items"][0]["product_id"] == str(product_id)


def test_user_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("profiles")
    user_id = uuid4()
    table.queue(
        "insert",
        [{"id": str(user_id), "name": "Nimal", "email": "n@x.lk", "role": "admin"}],
    )

    created = SupabaseUserRepository(client).create(
        UserProfile(id=user_id, name="Nimal", email="n@x.lk", role=Role.ADMIN)
    )

    assert created.role is Role.ADMIN
    assert table.last_payload["id"] == str(user_id)
    assert table.last_payload["role"] == "admin"


def test_meal_log_repository_filters_by_user_and_period() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_logs")
    user_id = uuid4()
    since = datetime(2025, 3, 8, tzinfo=UTC)
    table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "meal_type": "lunch",
                "total_nutrition": {"calories": 650, "protein": 18.5},
                "manual_items": [{"name": "Rice", "calories": 300, "food_id": None}],
                "logged_at": "2025-03-09T12:30:00+00:00",
            }
        ],
    )

    logs = SupabaseMealLogRepository(client).list_meal_logs(
        user_id, since=since, limit=5
    )

    assert logs[0].total_nutrition.calories == 650
    assert logs[0].manual_items[0].food_id is None
    assert logs[0].logged_at == datetime(2025, 3, 9, 12, 30, tzinfo=UTC)
    assert ("gte", "logged_at", since.isoformat()) in table.last_filters
    assert table.last_limit == 5


def test_tip_repository_limits_to_published_tips() -> None:
    client = FakeSupabaseClient()
    table = client.table("daily_tips")
    table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "tip": {"en": "Drink king coconut water"},
                "category": "hydration",
                "date": "2025-03-01",
            }
        ],
    )

    tips = SupabaseDailyTipRepository(client).list_tips(until=date(2025, 3, 14))

    assert tips[0].date == date(2025, 3, 1)
    assert ("lte", "date", "2025-03-14") in table.last_filters
    assert table.last_order == ("date", True)


def test_diet_plan_repository_stores_profile_input() -> None:
    client = FakeSupabaseClient()
    table = client.table("diet_plans")
    user_id = uuid4()
    table.queue(
        "insert",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "input": {"weight": 70, "height": 165, "age": 35},
                "plan_text": "Eat well",
            }
        ],
    )

    record = SupabaseDietPlanRepository(client).create(
        DietPlanRecord(
            id=None,
            user_id=user_id,
            profile=HealthProfile(weight=70, height=165, age=35),
            plan_text="Eat well",
        )
    )

    assert record.profile.weight == 70
    assert table.last_payload["input"]["age"] == 35


def test_insert_without_returned_row_raises() -> None:
    repository = SupabaseDailyTipRepository(FakeSupabaseClient())
    tip = DailyTip(
        id=None,
        tip=LocalizedText(en="Swap white rice for red rice"),
        category="substitution",
        date=date(2025, 3, 14),
    )

    with pytest.raises(RuntimeError, match="create tip"):
        repository.create(tip)


@dataclass
class FakeAuth:
    user_id: str
    session_token: str | None = "access-token"
    deleted: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.admin = SimpleNamespace(delete_user=self.deleted.append)

    def _response(self) -> SimpleNamespace:
        session = (
            SimpleNamespace(access_token=self.session_token)
            if self.session_token
            else None
        )
        return SimpleNamespace(user=SimpleNamespace(id=self.user_id), session=session)

    def sign_up(self, credentials: dict[str, str]) -> SimpleNamespace:
        return self._response()

    def sign_in_with_password(self, credentials: dict[str, str]) -> SimpleNamespace:
        return self._response()

    def get_user(self, token: str) -> SimpleNamespace:
        return self._response()


def test_auth_gateway_signs_in_and_verifies() -> None:
    user_id = uuid4()
    auth = FakeAuth(str(user_id))
    gateway = SupabaseAuthGateway(SimpleNamespace(auth=auth))

    assert gateway.sign_up("a@b.lk", "secret1") == user_id
    assert gateway.sign_in("a@b.lk", "secret1") == (user_id, "access-token")
    assert gateway.verify("access-token") == user_id
    gateway.delete_user(user_id)
    assert auth.deleted == [str(user_id)]


def test_auth_gateway_without_session_rejects_sign_in() -> None:
    gateway = SupabaseAuthGateway(
        SimpleNamespace(auth=FakeAuth(str(uuid4()), session_token=None))
    )

    with pytest.raises(AuthenticationError):
        gateway.sign_in("a@b.lk", "secret1")


@dataclass
class FakeBucket:
    uploads: list[tuple[str, bytes, dict[str, str]]] = field(default_factory=list)

    def upload(self, path: str, content: bytes, options: dict[str, str]) -> None:
        self.uploads.append((path, content, options))

    def get_public_url(self, path: str) -> str:
        return f"https://project.supabase.co/storage/v1/object/public/images/{path}"


def test_image_storage_uploads_to_bucket() -> None:
    bucket = FakeBucket()
    buckets: list[str] = []

    def from_(name: str) -> FakeBucket:
        buckets.append(name)
        return bucket

    storage = SupabaseImageStorage(
        SimpleNamespace(storage=SimpleNamespace(from_=from_)), "images"
    )

    url = storage.upload("products/abc.png", b"png", "image/png")

    assert buckets == ["images"]
    assert bucket.uploads == [
        ("products/abc.png", b"png", {"content-type": "image/png"})
    ]
    assert url.endswith("/images/products/abc.png")
