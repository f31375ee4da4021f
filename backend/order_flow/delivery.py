"""
Formulaire de livraison (étape 2): champs requis validés avant de passer au paiement.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError, field_validator

# module backend.order_flow.delivery
class DeliveryDetails(BaseModel):
    name: str
    address1: str
    address2: str = ""
    city: str
    zip: str
    phone: str
    window: str = ""
    preference: str = ""
    notes: str = ""

    @field_validator("name", "address1", "city", "zip", "phone")
    @classmethod
    def required_not_blank(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("required")
        return v

    @field_validator("phone")
    @classmethod
    def phone_has_digits(cls, v: str) -> str:
        if sum(ch.isdigit() for ch in v) < 7:
            raise ValueError("invalid phone number")
        return v

    def to_payload(self) -> Dict[str, str]:
        """Format envoyé à /api/payments/create-intent (notes séparées)."""
        return self.model_dump(exclude={"notes"})


def validate_delivery(form: Dict[str, Any]) -> Optional[str]:
    """None si le formulaire est valide, sinon un message listant les champs fautifs."""
    try:
        DeliveryDetails.model_validate({k: ("" if v is None else str(v)) for k, v in (form or {}).items()})
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        return "Please complete: " + ", ".join(fields)
    return None
