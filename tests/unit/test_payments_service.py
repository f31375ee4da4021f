import pytest

from backend.orders.repository import InMemoryOrderRepository
from backend.payments import service
from backend.payments.models import CreateIntentRequest


def test_order_recorded_then_intent_attached(monkeypatch):
    repo = InMemoryOrderRepository()
    seen = {}

    def fake_create(*, amount, currency, metadata):
        # la commande existe déjà en 'pending' au moment de l'appel Stripe
        order = repo.find_by_id(metadata["order_id"])
        seen["status_during_call"] = order.status
        return {"id": "pi_123", "client_secret": "pi_123_secret"}

    monkeypatch.setattr("backend.payments.stripe_client.create_payment_intent", fake_create)
    req = CreateIntentRequest.model_validate({"amount": 4800, "items": [{"id": "a", "qty": 1}], "delivery": {"name": "Ada"}})
    secret = service.create_intent_for_order(req, repo)

    assert secret == "pi_123_secret"
    assert seen["status_during_call"] == "pending"
    [order] = repo.list()
    assert order.payment_intent_id == "pi_123"
    assert order.amount == 4800
    assert order.delivery == {"name": "Ada"}


def test_stripe_failure_marks_order_failed(monkeypatch):
    repo = InMemoryOrderRepository()

    def boom(**kwargs):
        raise RuntimeError("stripe down")

    monkeypatch.setattr("backend.payments.stripe_client.create_payment_intent", boom)
    with pytest.raises(RuntimeError):
        service.create_intent_for_order(CreateIntentRequest(amount=4800), repo)
    [order] = repo.list()
    assert order.status == "failed"
    assert order.payment_intent_id is None


def test_payments_available_requires_sk_prefix(monkeypatch):
    from backend import config
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "")
    assert service.payments_available() is False
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "pk_live_wrong")
    assert service.payments_available() is False
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "sk_test_ok")
    assert service.payments_available() is True
