from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from backend import config
from backend.payments.stripe_client import is_configured
from backend.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/payments")
def health_payments(request: Request):
    # Ne divulgue jamais les clés, seulement leur présence
    return JSONResponse({
        "configured": is_configured(),
        "publishable_key": bool(config.STRIPE_PUBLISHABLE_KEY),
        "rate_limit": rate_limit_health_info(request),
    })
