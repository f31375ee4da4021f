import logging

from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from backend.utils.rate_limit import optional_rate_limit
from backend.orders.repository import OrderRepository, get_order_repository
from backend.payments import service as payments_service
from backend.payments.models import CreateIntentRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/payments", tags=["Payments API"])

# module backend.payments.views
@router.post("/create-intent", dependencies=[Depends(optional_rate_limit(times=30, seconds=60))])
async def create_intent(request: Request, repository: OrderRepository = Depends(get_order_repository)):
    """
    Crée un PaymentIntent Stripe pour le panier courant et enregistre la commande.
    - Entrée JSON: {amount (centimes, requis), currency="usd", items=[], delivery={}, notes=""}
    - 503 si Stripe n'est pas configuré (aucune commande enregistrée)
    - 400 si le corps n'est pas du JSON ou si amount est absent/non numérique
    - 200 {"clientSecret": "..."} en cas de succès
    - 500 si Stripe échoue (commande marquée 'failed', pas de retry)
    """
    if not payments_service.payments_available():
        return JSONResponse({"error": "Stripe not configured. Payments unavailable."}, status_code=503)

    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return JSONResponse({"error": "Missing or invalid amount."}, status_code=400)
    try:
        req = CreateIntentRequest.model_validate(body)
    except ValidationError as e:
        fields = {str((err.get("loc") or ("",))[0]) for err in e.errors()}
        logger.info("payments.create_intent rejected fields=%s", sorted(fields))
        error = "Missing or invalid amount." if "amount" in fields else "Invalid order payload."
        return JSONResponse({"error": error}, status_code=400)

    try:
        client_secret = payments_service.create_intent_for_order(req, repository)
    except Exception:
        logger.exception("Erreur create_intent (Stripe)")
        return JSONResponse({"error": "Unable to create payment intent."}, status_code=500)
    return JSONResponse({"clientSecret": client_secret})
