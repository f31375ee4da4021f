"""
Tunnel de commande complet (panier -> livraison -> paiement) piloté en asyncio
contre le site via httpx. Compose CartModel, compute_totals, StepController et
PaymentSessionCoordinator comme le fait la page /order dans le navigateur.
"""
from typing import Any, Dict, Mapping, Optional

import httpx

from backend import config
from backend.menu import catalog

from .cart import CartModel
from .coordinator import HttpIntentGateway, PaymentElement, PaymentSessionCoordinator
from .delivery import DeliveryDetails, validate_delivery
from .fees import OrderTotals, compute_totals
from .steps import Step, StepController, StepResult
from .summary import CookieJarSummarySink, SummarySink

ORDER_CONFIG_PATH = "/api/order/config"
DELIVERY_FIELDS = tuple(f for f in DeliveryDetails.model_fields if f != "notes")

# module backend.order_flow.client
class OrderClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        element: PaymentElement,
        *,
        prices: Optional[Mapping[str, int]] = None,
        names: Optional[Mapping[str, str]] = None,
        free_threshold: int = 7500,
        flat_fee: int = 800,
        min_amount: int = 50,
        currency: str = "usd",
        return_path: Optional[str] = None,
        summary_sink: Optional[SummarySink] = None,
    ):
        self.http = http
        self.element = element
        self.free_threshold = free_threshold
        self.flat_fee = flat_fee
        self.min_amount = min_amount
        self.currency = currency
        self.return_path = return_path or config.PAYMENT_SUCCESS_PATH
        self.summary_sink = summary_sink if summary_sink is not None else CookieJarSummarySink(http.cookies)

        # sans configuration distante: catalogue embarqué
        if prices is None:
            prices, names = catalog.prices(), catalog.names()
        self.cart = CartModel(prices, names)
        self.delivery_form: Dict[str, str] = {}
        self.totals = OrderTotals(0, 0, 0)
        self.coordinator: Optional[PaymentSessionCoordinator] = None

        self.steps = StepController(self.cart.total_item_count, lambda: validate_delivery(self.delivery_form))
        self.cart.on_change(lambda _cart: self._recompute())
        self.steps.on_enter_payment(self._recompute)
        self.steps.on_enter_payment(self._ensure_coordinator)

    @classmethod
    async def from_site(cls, http: httpx.AsyncClient, element: PaymentElement, **kwargs: Any) -> "OrderClient":
        """Construit le tunnel à partir de GET /api/order/config (menu, seuils, devise)."""
        res = await http.get(ORDER_CONFIG_PATH)
        res.raise_for_status()
        cfg = res.json()
        menu = cfg.get("menu") or []
        kwargs.setdefault("return_path", cfg.get("successPath"))
        return cls(
            http,
            element,
            prices={m["id"]: int(m["unitPrice"]) for m in menu},
            names={m["id"]: m["name"] for m in menu},
            free_threshold=int(cfg.get("freeDeliveryThreshold", 7500)),
            flat_fee=int(cfg.get("shippingFee", 800)),
            min_amount=int(cfg.get("minAmount", 50)),
            currency=cfg.get("currency") or "usd",
            **kwargs,
        )

    @property
    def step(self) -> Step:
        return self.steps.current

    def _recompute(self) -> None:
        self.totals = compute_totals(self.cart.quantities, self.cart.prices, self.free_threshold, self.flat_fee)

    def _ensure_coordinator(self) -> None:
        if self.coordinator is None:
            self.coordinator = PaymentSessionCoordinator(
                HttpIntentGateway(self.http),
                self.element,
                summary_sink=self.summary_sink,
                min_amount=self.min_amount,
                currency=self.currency,
            )

    def snapshot(self) -> Dict[str, Any]:
        return {
            "items": self.cart.lines(),
            "delivery": {f: self.delivery_form.get(f, "") for f in DELIVERY_FIELDS},
            "notes": self.delivery_form.get("notes", ""),
        }

    async def _sync_payment(self) -> None:
        if self.step == Step.PAYMENT and self.coordinator is not None:
            await self.coordinator.update_amount(self.totals.total, self.snapshot())

    async def set_quantity(self, item_id: str, value: Any) -> None:
        self.cart.set_quantity(item_id, value)
        await self._sync_payment()

    async def incr(self, item_id: str) -> None:
        self.cart.incr(item_id)
        await self._sync_payment()

    async def decr(self, item_id: str) -> None:
        self.cart.decr(item_id)
        await self._sync_payment()

    def fill_delivery(self, **fields: str) -> None:
        self.delivery_form.update({k: v for k, v in fields.items() if v is not None})

    async def next(self) -> StepResult:
        result = self.steps.next()
        if result.moved:
            await self._sync_payment()
        return result

    async def prev(self) -> StepResult:
        return self.steps.prev()

    async def pay(self) -> Optional[bool]:
        if self.coordinator is None:
            return None
        # session créée pour un ancien montant: on la renouvelle avant de confirmer
        if self.coordinator.is_stale:
            await self._sync_payment()
        billing = {
            "name": self.delivery_form.get("name", ""),
            "phone": self.delivery_form.get("phone", ""),
        }
        return_url = str(self.http.base_url.join(self.return_path))
        return await self.coordinator.submit(billing, return_url)
