"""Tests for container wiring."""

import asyncio
from types import SimpleNamespace

import pytest

from lankanutri import containers
from lankanutri.adapters.supabase_image_storage import SupabaseImageStorage
from lankanutri.config import Settings
from lankanutri.containers import build_container
from lankanutri.errors import ServiceUnavailableError
from lankanutri.services.storage import UnavailableImageStorage


@pytest.fixture
def fake_clients(monkeypatch: pytest.MonkeyPatch) -> list[SimpleNamespace]:
    created: list[SimpleNamespace] = []

    def create_client(url: str, key: str) -> SimpleNamespace:
        client = SimpleNamespace(url=url, key=key)
        created.append(client)
        return client

    monkeypatch.setattr(containers, "create_client", create_client)
    return created


def test_build_container_creates_services(
    settings: Settings, fake_clients: list[SimpleNamespace]
) -> None:
    container = build_container(settings)

    assert container.chat_service.provider.is_available
    assert container.diet_plan_service.provider.is_available
    assert isinstance(container.image_service.storage, SupabaseImageStorage)
    assert container.user_service.gateway.client is fake_clients[1]
    assert container.food_service.repository.client is fake_clients[0]
    asyncio.run(container.close_resources())


def test_missing_optional_keys_degrade_to_unavailable(
    fake_clients: list[SimpleNamespace],
) -> None:
    settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        supabase_storage_bucket=None,
        openai_api_key=None,
        groq_api_key=None,
    )

    container = build_container(settings)

    assert not container.chat_service.provider.is_available
    assert isinstance(container.image_service.storage, UnavailableImageStorage)
    with pytest.raises(ServiceUnavailableError, match="GROQ_API_KEY"):
        container.chat_service.start_conversation()
    asyncio.run(container.close_resources())
