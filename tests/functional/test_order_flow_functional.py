import asyncio
from typing import Dict, List, Optional

import httpx

from backend.order_flow import OrderClient, Step
from backend.order_flow.steps import EMPTY_CART_MESSAGE
from backend.orders.repository import get_order_repository

DELIVERY = {
    "name": "Ada Lovelace",
    "address1": "1 Main St",
    "city": "Springfield",
    "zip": "12345",
    "phone": "555-123-4567",
    "window": "Evening",
    "notes": "Ring twice",
}


class RecordingElement:
    """Payment Element simulé: enregistre montage, mises à jour et confirmations."""

    def __init__(self):
        self.mounted: List[str] = []
        self.updated: List[str] = []
        self.confirmed: List[Dict] = []
        self.next_error: Optional[str] = None

    def mount(self, client_secret):
        self.mounted.append(client_secret)

    def update(self, client_secret):
        self.updated.append(client_secret)

    async def confirm(self, *, return_url, billing_details):
        self.confirmed.append({"return_url": return_url, "billing_details": billing_details})
        return self.next_error


def _http(app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


def test_full_order_flow_against_site(app, fake_stripe):
    element = RecordingElement()

    async def scenario():
        async with _http(app) as http:
            order = await OrderClient.from_site(http, element)

            refused = await order.next()
            assert refused.moved is False and refused.reason == EMPTY_CART_MESSAGE

            await order.incr("chicken-bowl")
            await order.incr("chicken-bowl")
            await order.set_quantity("breakfast-box", 1)
            await order.set_quantity("unknown-meal", 3)
            assert order.totals.subtotal == 3400
            assert order.totals.shipping == 800
            assert order.totals.total == 4200

            assert (await order.next()).step == Step.DELIVERY
            missing = await order.next()
            assert missing.moved is False and missing.reason.startswith("Please complete:")
            assert fake_stripe == []

            order.fill_delivery(**DELIVERY)
            assert (await order.next()).step == Step.PAYMENT
            assert element.mounted == ["pi_test_1_secret_abc"]
            assert order.coordinator.session.amount == 4200

            # changement du panier en étape 3: nouvel intent, Element mis à jour sur place
            await order.incr("salmon-rice")
            assert order.totals.total == 5650
            assert element.updated == ["pi_test_2_secret_abc"]
            assert order.coordinator.session.amount == 5650

            assert await order.pay() is True
            assert element.confirmed[0]["return_url"] == "http://testserver/order?status=success"
            assert element.confirmed[0]["billing_details"] == {"name": "Ada Lovelace", "phone": "555-123-4567"}

            # retour du processeur: le résumé en attente devient le bandeau
            page = await http.get("/order?status=success")
            assert "4 items · $56.50 · Delivery: Evening" in page.text
            home = await http.get("/")
            assert "Your recent order" in home.text

    asyncio.run(scenario())

    orders = get_order_repository().list()
    assert sorted(o.amount for o in orders) == [4200, 5650]
    assert all(o.status == "pending" for o in orders)
    recorded = next(o for o in orders if o.amount == 5650)
    assert recorded.delivery["window"] == "Evening"
    assert "notes" not in recorded.delivery
    assert recorded.notes == "Ring twice"
    assert {line["id"] for line in recorded.items} == {"chicken-bowl", "breakfast-box", "salmon-rice"}


def test_emptying_cart_on_payment_step_disables_submit(app, fake_stripe):
    element = RecordingElement()

    async def scenario():
        async with _http(app) as http:
            order = await OrderClient.from_site(http, element)
            await order.incr("breakfast-box")
            order.fill_delivery(**DELIVERY)
            await order.next()
            await order.next()
            assert order.coordinator.submit_enabled is True
            await order.decr("breakfast-box")
            return order

    order = asyncio.run(scenario())
    assert order.totals.total == 0
    assert order.coordinator.submit_enabled is False
    assert order.coordinator.message == "Add meals to reach at least $0.50."
    assert len(fake_stripe) == 1


def test_payment_unavailable_surfaces_server_message(app, monkeypatch):
    from backend import config
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "")
    element = RecordingElement()

    async def scenario():
        async with _http(app) as http:
            order = await OrderClient.from_site(http, element)
            await order.incr("pesto-pasta")
            order.fill_delivery(**DELIVERY)
            await order.next()
            await order.next()
            return order, await order.pay()

    order, paid = asyncio.run(scenario())
    assert order.step == Step.PAYMENT
    assert order.coordinator.message == "Stripe not configured. Payments unavailable."
    assert order.coordinator.submit_enabled is False
    assert paid is None
    assert element.mounted == []
    assert get_order_repository().list() == []


def test_declined_payment_can_be_retried(app, fake_stripe):
    element = RecordingElement()
    element.next_error = "Your card was declined."

    async def scenario():
        async with _http(app) as http:
            order = await OrderClient.from_site(http, element)
            await order.set_quantity("beef-chili", 2)
            order.fill_delivery(**DELIVERY)
            await order.next()
            await order.next()
            first = await order.pay()
            element.next_error = None
            second = await order.pay()
            return order, first, second

    order, first, second = asyncio.run(scenario())
    assert first is False and second is True
    assert len(element.confirmed) == 2
    assert len(fake_stripe) == 1
