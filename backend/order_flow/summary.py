"""
Résumé de la dernière commande (bandeau "Your recent order").
- Le tunnel écrit un résumé "en attente" (cookie fm_last_order) à chaque création d'intent.
- Au retour Stripe (?status=success), le serveur le promeut en fm_order_summary (30 jours).
- Le bandeau est rendu sur toutes les pages tant que fm_order_summary est lisible.
L'écriture du résumé est best-effort: une erreur ne doit jamais remonter au tunnel.
"""
import json
import logging
import urllib.parse
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Protocol

from .fees import format_currency

logger = logging.getLogger(__name__)

PENDING_COOKIE_NAME = "fm_last_order"
SUMMARY_COOKIE_NAME = "fm_order_summary"
SUMMARY_MAX_AGE = 30 * 24 * 60 * 60

# module backend.order_flow.summary
@dataclass
class LastOrderSummary:
    amount: Optional[int] = None
    currency: str = "usd"
    items_count: Optional[int] = None
    delivery_window: str = ""

    def to_cookie_value(self) -> str:
        """JSON encodé façon encodeURIComponent (sûr dans un en-tête Cookie)."""
        data = asdict(self)
        return urllib.parse.quote(json.dumps({
            "amount": data["amount"],
            "currency": data["currency"],
            "itemsCount": data["items_count"],
            "deliveryWindow": data["delivery_window"],
        }), safe="")


def parse_summary(raw: Optional[str]) -> Optional[LastOrderSummary]:
    """Décode le JSON du cookie; None si absent ou illisible."""
    if not raw:
        return None
    try:
        data = json.loads(urllib.parse.unquote(raw))
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return LastOrderSummary(
        amount=data.get("amount"),
        currency=data.get("currency") or "usd",
        items_count=data.get("itemsCount"),
        delivery_window=data.get("deliveryWindow") or "",
    )


def banner_text(summary: LastOrderSummary) -> str:
    """Ex: "2 items · $25.00 · Delivery: Evening" (les parties absentes sont omises)."""
    parts = []
    if summary.items_count is not None:
        parts.append(f"{summary.items_count} item{'' if summary.items_count == 1 else 's'}")
    if summary.amount is not None:
        try:
            parts.append(format_currency(int(summary.amount)))
        except (TypeError, ValueError):
            pass
    if summary.delivery_window:
        parts.append(f"Delivery: {summary.delivery_window}")
    return " · ".join(parts)


class SummarySink(Protocol):
    def write(self, summary: LastOrderSummary) -> None: ...


class MemorySummarySink:
    """Garde le dernier résumé en mémoire (kiosque, tests)."""

    def __init__(self):
        self.last: Optional[LastOrderSummary] = None

    def write(self, summary: LastOrderSummary) -> None:
        self.last = summary


class CookieJarSummarySink:
    """
    Dépose le résumé en attente dans le jar de cookies d'un client httpx,
    pour qu'il soit promu par le serveur au retour ?status=success.
    """

    def __init__(self, cookies: Any, domain: str = ""):
        self.cookies = cookies
        self.domain = domain

    def write(self, summary: LastOrderSummary) -> None:
        self.cookies.set(PENDING_COOKIE_NAME, summary.to_cookie_value(), domain=self.domain, path="/")


def write_best_effort(sink: Optional[SummarySink], summary: LastOrderSummary) -> bool:
    if sink is None:
        return False
    try:
        sink.write(summary)
        return True
    except Exception:
        logger.warning("order summary write failed", exc_info=True)
        return False


def promote_pending(cookies: Dict[str, str]) -> Optional[str]:
    """
    Retourne la valeur à promouvoir dans fm_order_summary si un résumé en attente existe.
    Utilisé par la page /order?status=success.
    """
    pending = cookies.get(PENDING_COOKIE_NAME)
    return pending or None
