"""
Cas d'usage 'payments': enregistre la commande puis crée le PaymentIntent Stripe.
"""
import logging

from backend.orders.models import FAILED_STATUS, Order
from backend.orders.repository import OrderRepository

from . import stripe_client
from .models import CreateIntentRequest

logger = logging.getLogger(__name__)

def payments_available() -> bool:
    return stripe_client.is_configured()

def create_intent_for_order(req: CreateIntentRequest, repository: OrderRepository) -> str:
    """
    Politique: la commande est enregistrée 'pending' AVANT l'appel Stripe,
    puis marquée 'failed' si Stripe lève une erreur (l'exception est propagée).
    Retourne le client_secret du PaymentIntent.
    """
    order = repository.add(Order(
        amount=req.amount,
        currency=req.currency,
        items=req.items,
        delivery=req.delivery,
        notes=req.notes,
    ))
    logger.info(
        "payments.create_intent order received id=%s amount=%s currency=%s items=%s",
        order.id, order.amount, order.currency, len(order.items),
    )
    try:
        intent = stripe_client.create_payment_intent(
            amount=order.amount,
            currency=order.currency,
            metadata={"order_id": order.id},
        )
    except Exception:
        repository.update_status(order.id, FAILED_STATUS)
        raise
    repository.set_payment_intent(order.id, intent["id"])
    return intent["client_secret"]
