"""
Module 'order_flow': tunnel de commande multi-étapes.
Réunit panier, calcul des frais, séquenceur d'étapes, coordination de la session
de paiement et résumé de la dernière commande.
"""

from .cart import CartModel
from .fees import OrderTotals, compute_totals, format_currency
from .steps import Step, StepController, StepResult
from .delivery import DeliveryDetails, validate_delivery
from .coordinator import (
    HttpIntentGateway,
    PaymentElement,
    PaymentSession,
    PaymentSessionCoordinator,
    PaymentSessionError,
)
from .summary import (
    LastOrderSummary,
    MemorySummarySink,
    CookieJarSummarySink,
    parse_summary,
    banner_text,
)
from .client import OrderClient

__all__ = [
    # cart / fees
    "CartModel",
    "OrderTotals",
    "compute_totals",
    "format_currency",
    # steps
    "Step",
    "StepController",
    "StepResult",
    "DeliveryDetails",
    "validate_delivery",
    # payment session
    "HttpIntentGateway",
    "PaymentElement",
    "PaymentSession",
    "PaymentSessionCoordinator",
    "PaymentSessionError",
    # summary
    "LastOrderSummary",
    "MemorySummarySink",
    "CookieJarSummarySink",
    "parse_summary",
    "banner_text",
    # client
    "OrderClient",
]
