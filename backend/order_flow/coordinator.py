"""
Coordination de la session de paiement (PaymentIntent Stripe) côté client.

- update_amount(): seul point d'entrée, appelé à chaque recalcul des totaux en étape 3.
  * sous le minimum Stripe: soumission désactivée + message, aucune requête réseau
  * une seule requête de création en vol: un appel concurrent est abandonné (pas mis en file)
  * 1er succès: montage du Payment Element; suivants: mise à jour sur place avec le nouveau secret
  * chaque succès écrit le résumé de commande (best-effort)
- submit(): confirmation déléguée au processeur; erreur -> message + soumission réactivée, jamais de retry.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from .fees import format_currency
from .summary import LastOrderSummary, SummarySink, write_best_effort

logger = logging.getLogger(__name__)

CREATE_INTENT_PATH = "/api/payments/create-intent"
DEFAULT_ERROR = "Unable to create payment intent."
STALE_MESSAGE = "Your order changed. Updating payment…"

# module backend.order_flow.coordinator
class PaymentSessionError(Exception):
    """Erreur affichable à l'utilisateur (création/mise à jour de l'intent)."""


@dataclass(frozen=True)
class PaymentSession:
    client_secret: str
    amount: int


class IntentGateway(Protocol):
    async def create_intent(self, payload: Dict[str, Any]) -> str: ...


class PaymentElement(Protocol):
    """Frontière avec l'UI de paiement hébergée par le processeur."""

    def mount(self, client_secret: str) -> None: ...

    def update(self, client_secret: str) -> None: ...

    async def confirm(self, *, return_url: str, billing_details: Dict[str, str]) -> Optional[str]: ...


class HttpIntentGateway:
    """
    Appelle POST /api/payments/create-intent via un httpx.AsyncClient (base_url = site).
    Lève PaymentSessionError avec le message serveur si la réponse n'est pas exploitable.
    """

    def __init__(self, client: httpx.AsyncClient, path: str = CREATE_INTENT_PATH):
        self.client = client
        self.path = path

    async def create_intent(self, payload: Dict[str, Any]) -> str:
        try:
            res = await self.client.post(self.path, json=payload)
        except httpx.HTTPError as e:
            raise PaymentSessionError(str(e) or DEFAULT_ERROR) from e
        try:
            data = res.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        secret = data.get("clientSecret")
        if res.is_error or not secret:
            raise PaymentSessionError(data.get("error") or data.get("detail") or DEFAULT_ERROR)
        return secret


class PaymentSessionCoordinator:
    def __init__(
        self,
        gateway: IntentGateway,
        element: PaymentElement,
        summary_sink: Optional[SummarySink] = None,
        min_amount: int = 50,
        currency: str = "usd",
    ):
        self.gateway = gateway
        self.element = element
        self.summary_sink = summary_sink
        self.min_amount = min_amount
        self.currency = currency
        self.session: Optional[PaymentSession] = None
        self.requested_amount: Optional[int] = None
        self.submit_enabled = False
        self.message = ""
        self.in_flight = False
        self._mounted = False

    async def update_amount(self, amount: int, snapshot: Optional[Dict[str, Any]] = None) -> Optional[PaymentSession]:
        """
        snapshot: {"items": [...], "delivery": {...}, "notes": "..."} envoyé avec le montant.
        Retourne la session créée, ou None si refusé/abandonné/en échec.
        """
        self.requested_amount = amount
        if self._below_minimum(amount):
            self.submit_enabled = False
            self.message = self._pending_message()
            return None
        if self.in_flight:
            logger.debug("payment session update dropped amount=%s (request in flight)", amount)
            return None

        self.in_flight = True
        self.submit_enabled = False
        self.message = "Preparing payment…"
        snapshot = snapshot or {}
        items = snapshot.get("items") or []
        delivery = snapshot.get("delivery") or {}
        try:
            client_secret = await self.gateway.create_intent({
                "amount": amount,
                "currency": self.currency,
                "items": items,
                "delivery": delivery,
                "notes": snapshot.get("notes") or "",
            })

            write_best_effort(self.summary_sink, LastOrderSummary(
                amount=amount,
                currency=self.currency,
                items_count=sum(int(it.get("qty") or 0) for it in items),
                delivery_window=delivery.get("window") or "",
            ))

            if self._mounted:
                self.element.update(client_secret)
            else:
                self.element.mount(client_secret)
                self._mounted = True
            self.session = PaymentSession(client_secret=client_secret, amount=amount)
            # le panier a pu changer pendant la requête (appel abandonné, passage sous le minimum)
            if self.is_stale:
                self.submit_enabled = False
                self.message = self._pending_message()
            else:
                self.submit_enabled = True
                self.message = ""
            return self.session
        except PaymentSessionError as e:
            self.message = str(e) or DEFAULT_ERROR
            return None
        except Exception as e:
            logger.exception("payment session update failed amount=%s", amount)
            self.message = str(e) or DEFAULT_ERROR
            return None
        finally:
            self.in_flight = False

    def _below_minimum(self, amount: Optional[int]) -> bool:
        return not amount or amount < self.min_amount

    def _pending_message(self) -> str:
        if self._below_minimum(self.requested_amount):
            return f"Add meals to reach at least {format_currency(self.min_amount)}."
        return STALE_MESSAGE

    @property
    def is_stale(self) -> bool:
        return self.session is not None and self.session.amount != self.requested_amount

    async def submit(self, billing_details: Dict[str, str], return_url: str) -> Optional[bool]:
        """
        Confirme le paiement.
        - None: aucune session active (no-op)
        - False: refus (session périmée) ou erreur du processeur (message renseigné)
        - True: confirmation acceptée, le processeur redirige vers return_url
        """
        if self.session is None:
            return None
        if self.is_stale:
            self.submit_enabled = False
            self.message = self._pending_message()
            return False
        self.submit_enabled = False
        self.message = "Confirming payment…"
        error = await self.element.confirm(return_url=return_url, billing_details=billing_details)
        if error:
            self.submit_enabled = True
            self.message = error or "Payment failed."
            return False
        return True
