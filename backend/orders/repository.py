"""
Accès aux données pour la feature 'orders'.
Stockage en mémoire (durée de vie du process) derrière une interface de type repository,
remplaçable par une vraie base sans toucher aux appelants.
"""
import logging
from typing import Dict, List, Optional, Protocol

from .models import Order

logger = logging.getLogger(__name__)

# module backend.orders.repository
class OrderRepository(Protocol):
    def add(self, order: Order) -> Order: ...

    def find_by_id(self, order_id: str) -> Optional[Order]: ...

    def update_status(self, order_id: str, status: str) -> Optional[Order]: ...

    def set_payment_intent(self, order_id: str, payment_intent_id: str) -> Optional[Order]: ...

    def list(self) -> List[Order]: ...


class InMemoryOrderRepository:
    """Pas de verrou: dernière écriture gagnante (concurrence attendue faible)."""

    def __init__(self):
        self._orders: Dict[str, Order] = {}

    def add(self, order: Order) -> Order:
        self._orders[order.id] = order
        return order

    def find_by_id(self, order_id: str) -> Optional[Order]:
        return self._orders.get(order_id)

    def update_status(self, order_id: str, status: str) -> Optional[Order]:
        order = self._orders.get(order_id)
        if order is None:
            return None
        order.status = status
        return order

    def set_payment_intent(self, order_id: str, payment_intent_id: str) -> Optional[Order]:
        order = self._orders.get(order_id)
        if order is None:
            return None
        order.payment_intent_id = payment_intent_id
        return order

    def list(self) -> List[Order]:
        """Plus récentes d'abord."""
        return sorted(self._orders.values(), key=lambda o: o.created_at, reverse=True)

    def clear(self) -> None:
        self._orders.clear()


_repository: OrderRepository = InMemoryOrderRepository()


def get_order_repository() -> OrderRepository:
    """Dépendance FastAPI (surchargée en tests via app.dependency_overrides si besoin)."""
    return _repository
