"""
Panier en mémoire (pas de persistance, pas de réseau).
"""
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

# module backend.order_flow.cart
class CartModel:
    """
    Quantités par plat, bornées à >= 0.
    - Les identifiants inconnus (absents de `prices`) sont ignorés silencieusement.
    - Chaque mutation notifie les écouteurs enregistrés via on_change().
    """

    def __init__(self, prices: Mapping[str, int], names: Optional[Mapping[str, str]] = None):
        self.prices: Dict[str, int] = dict(prices)
        self.names: Dict[str, str] = dict(names or {})
        self.quantities: Dict[str, int] = {item_id: 0 for item_id in self.prices}
        self._listeners: List[Callable[["CartModel"], Any]] = []

    def on_change(self, callback: Callable[["CartModel"], Any]) -> None:
        self._listeners.append(callback)

    def set_quantity(self, item_id: str, value: Any) -> None:
        if item_id not in self.prices:
            logger.debug("cart.set_quantity ignored unknown item_id=%s", item_id)
            return
        try:
            qty = int(value)
        except (TypeError, ValueError):
            qty = 0
        self.quantities[item_id] = max(0, qty)
        for callback in list(self._listeners):
            callback(self)

    def incr(self, item_id: str) -> None:
        self.set_quantity(item_id, self.quantities.get(item_id, 0) + 1)

    def decr(self, item_id: str) -> None:
        self.set_quantity(item_id, self.quantities.get(item_id, 0) - 1)

    def total_item_count(self) -> int:
        return sum(self.quantities.values())

    def lines(self) -> List[Dict[str, Any]]:
        """
        Lignes sélectionnées (qty > 0) au format envoyé à l'API:
        [{id, name, qty, price, lineTotal}, ...]
        """
        out: List[Dict[str, Any]] = []
        for item_id, qty in self.quantities.items():
            if qty <= 0:
                continue
            price = self.prices.get(item_id, 0)
            out.append({
                "id": item_id,
                "name": self.names.get(item_id, item_id),
                "qty": qty,
                "price": price,
                "lineTotal": qty * price,
            })
        return out
