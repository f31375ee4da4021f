"""
Module 'payments' (feature-first): point d'entrée public.
Réunit le schéma d'entrée, le client Stripe et le cas d'usage de création d'intent.
"""

from .models import CreateIntentRequest
from .stripe_client import is_configured, require_stripe, create_payment_intent
from .service import payments_available, create_intent_for_order

__all__ = [
    # schéma
    "CreateIntentRequest",
    # stripe
    "is_configured",
    "require_stripe",
    "create_payment_intent",
    # services
    "payments_available",
    "create_intent_for_order",
]
