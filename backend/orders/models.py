# module backend.orders.models
"""Modèle Order (côté serveur) et statuts autorisés."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

ORDER_STATUSES = ("pending", "preparing", "shipped", "delivered", "cancelled")
# Statut interne posé par l'API d'intake si Stripe échoue (non modifiable depuis l'admin)
FAILED_STATUS = "failed"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Order(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    amount: int
    currency: str = "usd"
    items: List[Dict[str, Any]] = Field(default_factory=list)
    delivery: Dict[str, Any] = Field(default_factory=dict)
    notes: str = ""
    status: str = "pending"
    payment_intent_id: Optional[str] = None
    created_at: str = Field(default_factory=_now_iso)
