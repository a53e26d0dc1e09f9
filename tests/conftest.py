# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from dossier_hub.core.settings import settings
from dossier_hub.db import get_store
from dossier_hub.db.json_store import JsonFileStore
from dossier_hub.main import app as fastapi_app
from dossier_hub.schemas.contact import ContactRecord
from dossier_hub.services.bootstrap import initialize_store
from dossier_hub.services.contacts import ContactService
from dossier_hub.services.conversations import ConversationService
from dossier_hub.services.dossiers import DossierService
from dossier_hub.services.notifications import NotificationService
from dossier_hub.services.realtime import RealtimeGateway, Subscription, get_gateway

AGENTS = ["Omar", "Achraf", "Assane Diop", "Fatou"]


@pytest.fixture(autouse=True)
def isolated_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the application at a fresh data directory for every test."""
    data_dir = tmp_path / "data"
    monkeypatch.setattr(settings, "data_dir", str(data_dir))
    monkeypatch.setattr(settings, "store_backend", "json")
    monkeypatch.setattr(settings, "default_agents", AGENTS)
    get_store.cache_clear()
    get_gateway.cache_clear()
    try:
        yield data_dir
    finally:
        get_store.cache_clear()
        get_gateway.cache_clear()


@pytest.fixture()
def store(isolated_store: Path) -> JsonFileStore:
    """Return the application store, initialized and seeded with agents."""
    document_store = get_store()
    initialize_store(document_store)
    return document_store


@pytest.fixture()
def gateway() -> RealtimeGateway:
    return get_gateway()


@pytest.fixture()
def notification_service(store: JsonFileStore, gateway: RealtimeGateway) -> NotificationService:
    return NotificationService(store, gateway)


@pytest.fixture()
def contact_service(
    store: JsonFileStore,
    gateway: RealtimeGateway,
    notification_service: NotificationService,
) -> ContactService:
    return ContactService(store, gateway, notification_service)


@pytest.fixture()
def conversation_service(
    store: JsonFileStore,
    gateway: RealtimeGateway,
    notification_service: NotificationService,
) -> ConversationService:
    return ConversationService(store, gateway, notification_service)


@pytest.fixture()
def dossier_service(
    store: JsonFileStore,
    gateway: RealtimeGateway,
    notification_service: NotificationService,
) -> DossierService:
    return DossierService(store, gateway, notification_service, admin_agent="Assane Diop")


@pytest.fixture()
def befriend(contact_service: ContactService) -> Callable[[str, str], ContactRecord]:
    """Return a helper that makes two agents accepted contacts."""

    def _befriend(sender: str, recipient: str) -> ContactRecord:
        record = contact_service.request_contact(sender, recipient)
        return contact_service.accept_contact(record.id, recipient)

    return _befriend


@pytest.fixture()
def subscribe(gateway: RealtimeGateway) -> Callable[[str], Subscription]:
    """Return a helper that connects a subscription and joins an agent's room."""

    def _subscribe(agent: str) -> Subscription:
        subscription = gateway.connect()
        gateway.join(subscription, agent)
        return subscription

    return _subscribe


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def client(app: FastAPI, isolated_store: Path) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def events_named() -> Callable[[Subscription, str], list]:
    """Return a helper that drains a subscription and keeps one event's payloads."""

    def _events_named(subscription: Subscription, event: str) -> list:
        return [item["data"] for item in subscription.drain() if item["event"] == event]

    return _events_named
