# module backend.payments.models
"""Schéma d'entrée de POST /api/payments/create-intent."""
import math
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateIntentRequest(BaseModel):
    """
    Champs reconnus (les autres sont ignorés):
    - amount (requis): numérique (ou chaîne numérique), > 0, arrondi à l'entier le plus proche
    - currency (défaut "usd"), items (défaut []), delivery (défaut {}), notes (défaut "")
    """
    model_config = ConfigDict(extra="ignore")

    amount: int
    currency: str = "usd"
    items: List[Dict[str, Any]] = Field(default_factory=list)
    delivery: Dict[str, Any] = Field(default_factory=dict)
    notes: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, v: Any) -> int:
        if v is None or isinstance(v, bool):
            raise ValueError("amount is required")
        try:
            value = float(v)
        except (TypeError, ValueError):
            raise ValueError("amount must be numeric")
        if math.isnan(value) or math.isinf(value):
            raise ValueError("amount must be a finite number")
        # Arrondi "half up" (et non l'arrondi bancaire de round())
        rounded = int(math.floor(value + 0.5))
        if rounded <= 0:
            raise ValueError("amount must be a positive number")
        return rounded

    @field_validator("currency", mode="before")
    @classmethod
    def default_currency(cls, v: Any) -> str:
        return (str(v or "").strip() or "usd").lower()

    @field_validator("items", mode="before")
    @classmethod
    def default_items(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("delivery", mode="before")
    @classmethod
    def default_delivery(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("notes", mode="before")
    @classmethod
    def default_notes(cls, v: Any) -> str:
        return "" if v is None else str(v)
