import os

# Pas de Redis en tests: le lifespan désactive le limiter (à poser avant l'import de l'app)
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Any, Dict, Generator, List
from fastapi.testclient import TestClient

from backend import config
from backend.app import app as fastapi_app
from backend.admin import service as admin_service
from backend.admin.sessions import get_session_store
from backend.orders.repository import get_order_repository
from backend.utils.security import ADMIN_COOKIE_NAME

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

# Stores en mémoire remis à zéro entre chaque test
@pytest.fixture(autouse=True)
def _reset_in_memory_state(monkeypatch):
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)
    fastapi_app.state._rl_store = {}
    get_order_repository().clear()
    get_session_store().clear()
    admin_service.reset_password_cache()
    yield
    get_order_repository().clear()
    get_session_store().clear()
    admin_service.reset_password_cache()

@pytest.fixture
def admin_client(client) -> TestClient:
    """Client avec un jeton admin valide dans le cookie fm_admin."""
    token = get_session_store().issue()
    client.cookies.set(ADMIN_COOKIE_NAME, token)
    return client

@pytest.fixture
def stripe_configured(monkeypatch):
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "sk_test_123", raising=True)
    monkeypatch.setattr(config, "STRIPE_PUBLISHABLE_KEY", "pk_test_123", raising=True)

# Stripe n'est jamais contacté: PaymentIntent simulé et appels enregistrés
@pytest.fixture
def fake_stripe(monkeypatch, stripe_configured) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []

    def _fake_create_payment_intent(*, amount, currency, metadata):
        calls.append({"amount": amount, "currency": currency, "metadata": metadata})
        n = len(calls)
        return {"id": f"pi_test_{n}", "client_secret": f"pi_test_{n}_secret_abc"}

    monkeypatch.setattr("backend.payments.stripe_client.create_payment_intent", _fake_create_payment_intent)
    return calls
