from backend.orders.models import ORDER_STATUSES, Order
from backend.orders.repository import InMemoryOrderRepository, get_order_repository


def test_order_defaults():
    order = Order(amount=4800)
    assert order.status == "pending"
    assert order.currency == "usd"
    assert order.items == [] and order.delivery == {} and order.notes == ""
    assert len(order.id) == 32
    assert order.created_at.endswith("+00:00")
    assert Order(amount=1).id != order.id


def test_repository_roundtrip():
    repo = InMemoryOrderRepository()
    order = repo.add(Order(amount=4800))
    assert repo.find_by_id(order.id) is order
    assert repo.set_payment_intent(order.id, "pi_1").payment_intent_id == "pi_1"
    assert repo.update_status(order.id, "preparing").status == "preparing"
    assert repo.update_status("nope", "preparing") is None
    assert repo.set_payment_intent("nope", "pi_2") is None
    repo.clear()
    assert repo.list() == []


def test_statuses_and_shared_repository():
    assert ORDER_STATUSES == ("pending", "preparing", "shipped", "delivered", "cancelled")
    assert get_order_repository() is get_order_repository()
