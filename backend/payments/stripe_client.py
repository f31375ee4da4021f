"""
Adaptateur Stripe: centralise les appels et la configuration Stripe.
Seule la création de PaymentIntent est utilisée (pas de webhook ni de Checkout).
"""
import stripe
from typing import Any, Dict

from backend import config

# module backend.payments.stripe_client
def is_configured() -> bool:
    """Stripe est considéré configuré si la clé secrète est présente et de la forme sk_..."""
    key = config.STRIPE_SECRET_KEY or ""
    return key.startswith("sk_")

def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l’emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY si disponible.
    - En absence de clé, les appels Stripe échoueront côté SDK (ex: No API key provided).
    """
    if is_configured():
        stripe.api_key = config.STRIPE_SECRET_KEY
    return stripe

def create_payment_intent(*, amount: int, currency: str, metadata: Dict[str, str]) -> Dict[str, Any]:
    """
    Crée un PaymentIntent Stripe.
    - amount: montant entier dans la plus petite unité (centimes)
    - automatic_payment_methods activé pour le Payment Element
    Retour: {"id": "pi_...", "client_secret": "pi_..._secret_..."}
    """
    require_stripe()
    intent = stripe.PaymentIntent.create(
        amount=amount,
        currency=currency,
        automatic_payment_methods={"enabled": True},
        metadata=metadata,
    )
    return {"id": intent["id"], "client_secret": intent["client_secret"]}
