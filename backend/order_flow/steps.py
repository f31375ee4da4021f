"""
Séquenceur des étapes du tunnel de commande: 1 panier -> 2 livraison -> 3 paiement.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, List, Optional

# module backend.order_flow.steps
class Step(IntEnum):
    CART = 1
    DELIVERY = 2
    PAYMENT = 3


@dataclass
class StepResult:
    moved: bool
    step: Step
    reason: Optional[str] = None


EMPTY_CART_MESSAGE = "Please add at least one meal to continue."
UNKNOWN_STEP_MESSAGE = "Unknown step."


class StepController:
    """
    Machine à états linéaire.
    - next(): 1->2 si le panier contient au moins un plat, 2->3 si le formulaire de livraison est valide.
    - prev(): toujours autorisé (plancher à l'étape 1).
    - go_to(): pas de saut en avant (1->3 refusé), retour arrière libre.
    - L'entrée en étape 3 déclenche les hooks on_enter_payment.
    `delivery_check` renvoie None si le formulaire est valide, sinon le message d'erreur.
    """

    def __init__(
        self,
        item_count: Callable[[], int],
        delivery_check: Callable[[], Optional[str]],
    ):
        self._item_count = item_count
        self._delivery_check = delivery_check
        self.current = Step.CART
        self._on_enter_payment: List[Callable[[], Any]] = []

    def on_enter_payment(self, hook: Callable[[], Any]) -> None:
        self._on_enter_payment.append(hook)

    def next(self) -> StepResult:
        if self.current == Step.CART and self._item_count() <= 0:
            return StepResult(False, self.current, EMPTY_CART_MESSAGE)
        if self.current == Step.DELIVERY:
            error = self._delivery_check()
            if error:
                return StepResult(False, self.current, error)
        if self.current == Step.PAYMENT:
            return StepResult(False, self.current)
        return self._show(Step(self.current + 1))

    def prev(self) -> StepResult:
        return self._show(Step(max(Step.CART, self.current - 1)))

    def go_to(self, target: int) -> StepResult:
        try:
            target = Step(target)
        except ValueError:
            return StepResult(False, self.current, UNKNOWN_STEP_MESSAGE)
        if target <= self.current:
            return self._show(target)
        if target - self.current > 1:
            return StepResult(False, self.current, "Steps must be completed in order.")
        return self.next()

    def _show(self, target: Step) -> StepResult:
        self.current = target
        if target == Step.PAYMENT:
            for hook in list(self._on_enter_payment):
                hook()
        return StepResult(True, self.current)
