"""Dependency container wiring for the application."""

import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from lankanutri.adapters.groq_chat_client import GroqChatProvider
from lankanutri.adapters.openai_chat_client import OpenAIChatProvider
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
from lankanutri.adapters.supabase_plate_repository import SupabasePlateRepository
from lankanutri.adapters.supabase_product_repository import (
    SupabaseProductRepository,
)
from lankanutri.adapters.supabase_program_repository import (
    SupabaseDietProgramRepository,
)
from lankanutri.adapters.supabase_tip_repository import SupabaseDailyTipRepository
from lankanutri.adapters.supabase_user_repository import SupabaseUserRepository
from lankanutri.config import Settings, missing_optional_keys
from lankanutri.services.chat import ChatService
from lankanutri.services.conversations import InMemoryConversationStore
from lankanutri.services.diet import DietPlanService
from lankanutri.services.foods import FoodService
from lankanutri.services.llm import ChatCompletionProvider, UnavailableChatProvider
from lankanutri.services.meal_logs import MealLogService
from lankanutri.services.nutrition import NutritionCalculatorService
from lankanutri.services.orders import OrderService
from lankanutri.services.plates import PlateGenerator, PlateService, build_selector
from lankanutri.services.products import ProductService
from lankanutri.services.programs import DietProgramService
from lankanutri.services.storage import (
    ImageService,
    ImageStorage,
    UnavailableImageStorage,
)
from lankanutri.services.tips import DailyTipService
from lankanutri.services.users import UserService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    food_service: FoodService
    plate_service: PlateService
    program_service: DietProgramService
    product_service: ProductService
    order_service: OrderService
    tip_service: DailyTipService
    meal_log_service: MealLogService
    calculator_service: NutritionCalculatorService
    diet_plan_service: DietPlanService
    chat_service: ChatService
    image_service: ImageService
    close_resources: Callable[[], Awaitable[None]]


def _diet_provider(settings: Settings) -> ChatCompletionProvider:
    if not settings.openai_api_key:
        return UnavailableChatProvider(
            hint=(
                "AI diet planner is not configured. "
                "Set OPENAI_API_KEY in your environment."
            )
        )
    return OpenAIChatProvider.create(settings.openai_api_key, settings.openai_model)


def _chat_provider(settings: Settings) -> ChatCompletionProvider:
    if not settings.groq_api_key:
        return UnavailableChatProvider(
            hint=(
                "Chatbot service is not available. "
                "Set GROQ_API_KEY in your environment."
            )
        )
    return GroqChatProvider.create(settings.groq_api_key, settings.groq_model)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    for name in missing_optional_keys(resolved_settings):
        _logger.warning("%s is not set; dependent features will return 503", name)

    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    auth_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )

    storage: ImageStorage
    if resolved_settings.supabase_storage_bucket:
        storage = SupabaseImageStorage(
            supabase_client, resolved_settings.supabase_storage_bucket
        )
    else:
        storage = UnavailableImageStorage()
    image_service = ImageService(storage, max_bytes=resolved_settings.max_upload_bytes)

    food_repository = SupabaseFoodRepository(supabase_client)
    product_repository = SupabaseProductRepository(supabase_client)
    diet_provider = _diet_provider(resolved_settings)
    chat_provider = _chat_provider(resolved_settings)

    user_service = UserService(
        gateway=SupabaseAuthGateway(auth_client),
        repository=SupabaseUserRepository(supabase_client),
        images=image_service,
    )
    food_service = FoodService(food_repository)
    plate_service = PlateService(
        repository=SupabasePlateRepository(supabase_client),
        food_repository=food_repository,
        generator=PlateGenerator(
            target_ratio=resolved_settings.plate_target_ratio,
            candidate_limit=resolved_settings.plate_candidate_limit,
        ),
        selector=build_selector(resolved_settings.plate_selection, random.Random()),
        default_target_calories=resolved_settings.default_target_calories,
    )
    program_service = DietProgramService(
        SupabaseDietProgramRepository(supabase_client), image_service
    )
    product_service = ProductService(product_repository, image_service)
    order_service = OrderService(
        repository=SupabaseOrderRepository(supabase_client),
        product_repository=product_repository,
        shipping_price=resolved_settings.shipping_price,
    )
    tip_service = DailyTipService(SupabaseDailyTipRepository(supabase_client))
    meal_log_service = MealLogService(
        repository=SupabaseMealLogRepository(supabase_client),
        food_repository=food_repository,
        images=image_service,
    )
    calculator_service = NutritionCalculatorService(
        product_repository=product_repository, food_repository=food_repository
    )
    diet_plan_service = DietPlanService(
        provider=diet_provider,
        repository=SupabaseDietPlanRepository(supabase_client),
    )
    chat_service = ChatService(
        provider=chat_provider,
        store=InMemoryConversationStore(),
        history_limit=resolved_settings.chat_history_limit,
        ttl_seconds=resolved_settings.conversation_ttl_seconds,
    )

    async def close_resources() -> None:
        for provider in (diet_provider, chat_provider):
            client = getattr(provider, "client", None)
            if client is not None:
                await client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        food_service=food_service,
        plate_service=plate_service,
        program_service=program_service,
        product_service=product_service,
        order_service=order_service,
        tip_service=tip_service,
        meal_log_service=meal_log_service,
        calculator_service=calculator_service,
        diet_plan_service=diet_plan_service,
        chat_service=chat_service,
        image_service=image_service,
        close_resources=close_resources,
    )
