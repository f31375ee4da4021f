"""
Calcul des totaux du panier (sous-total, livraison, total), en centimes.
"""
from dataclasses import dataclass
from typing import Mapping

# module backend.order_flow.fees
@dataclass(frozen=True)
class OrderTotals:
    subtotal: int
    shipping: int
    total: int


def compute_totals(
    quantities: Mapping[str, int],
    prices: Mapping[str, int],
    free_threshold: int,
    flat_fee: int,
) -> OrderTotals:
    """
    - subtotal = somme(qty * prix), les ids sans prix comptent pour 0
    - shipping = 0 si panier vide ou subtotal >= free_threshold, sinon flat_fee
    - total = subtotal + shipping
    """
    subtotal = sum(qty * prices.get(item_id, 0) for item_id, qty in quantities.items())
    shipping = 0 if subtotal == 0 or subtotal >= free_threshold else flat_fee
    return OrderTotals(subtotal=subtotal, shipping=shipping, total=subtotal + shipping)


def format_currency(cents: int) -> str:
    """Affichage uniquement: 1250 -> "$12.50"."""
    return f"${cents / 100:.2f}"
