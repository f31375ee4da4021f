import pytest

from backend.order_flow.steps import EMPTY_CART_MESSAGE, UNKNOWN_STEP_MESSAGE, Step, StepController


def _controller(count=0, delivery_error="Please complete: name"):
    state = {"count": count, "error": delivery_error}
    ctrl = StepController(lambda: state["count"], lambda: state["error"])
    return ctrl, state


def test_next_refused_with_empty_cart():
    ctrl, _ = _controller(count=0)
    res = ctrl.next()
    assert res.moved is False
    assert res.reason == EMPTY_CART_MESSAGE
    assert ctrl.current == Step.CART


def test_next_from_delivery_requires_valid_form():
    ctrl, state = _controller(count=1)
    assert ctrl.next().moved is True
    res = ctrl.next()
    assert res.moved is False
    assert res.reason == "Please complete: name"
    assert ctrl.current == Step.DELIVERY
    state["error"] = None
    assert ctrl.next().moved is True
    assert ctrl.current == Step.PAYMENT


def test_payment_is_terminal():
    ctrl, state = _controller(count=1, delivery_error=None)
    ctrl.next()
    ctrl.next()
    res = ctrl.next()
    assert res.moved is False
    assert ctrl.current == Step.PAYMENT


def test_prev_always_allowed_with_floor():
    ctrl, _ = _controller(count=1, delivery_error=None)
    assert ctrl.prev().step == Step.CART
    ctrl.next()
    ctrl.next()
    assert ctrl.prev().step == Step.DELIVERY
    assert ctrl.prev().step == Step.CART
    assert ctrl.prev().step == Step.CART


def test_no_skip_ahead():
    ctrl, _ = _controller(count=5, delivery_error=None)
    res = ctrl.go_to(3)
    assert res.moved is False
    assert ctrl.current == Step.CART


def test_go_to_next_step_applies_gating():
    ctrl, state = _controller(count=0)
    assert ctrl.go_to(2).moved is False
    state["count"] = 1
    assert ctrl.go_to(2).moved is True


def test_enter_payment_hooks_fire_only_on_step_three():
    ctrl, _ = _controller(count=1, delivery_error=None)
    fired = []
    ctrl.on_enter_payment(lambda: fired.append(ctrl.current))
    ctrl.next()
    assert fired == []
    ctrl.next()
    assert fired == [Step.PAYMENT]


@pytest.mark.parametrize("target", [0, 4, -1])
def test_go_to_unknown_step_is_refused(target):
    ctrl, _ = _controller(count=1)
    ctrl.next()
    res = ctrl.go_to(target)
    assert res.moved is False
    assert res.reason == UNKNOWN_STEP_MESSAGE
    assert ctrl.current == Step.DELIVERY
