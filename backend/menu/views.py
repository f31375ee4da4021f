from fastapi import APIRouter, HTTPException
from backend import config
from backend.menu.catalog import MENU, MenuItem, get_item

router = APIRouter(prefix="/api/order", tags=["Order API"])


def _item_json(item: MenuItem) -> dict:
    return {
        "id": item.id,
        "name": item.name,
        "unitPrice": item.unit_price,
        "description": item.description,
        "tags": list(item.tags),
    }

# module backend.menu.views
@router.get("/config")
def order_config():
    """
    Paramètres du tunnel de commande pour les clients (page /order, backend.order_flow.OrderClient).
    Montants en centimes.
    """
    return {
        "publishableKey": config.STRIPE_PUBLISHABLE_KEY,
        "currency": config.CURRENCY,
        "freeDeliveryThreshold": config.FREE_DELIVERY_THRESHOLD_CENTS,
        "shippingFee": config.SHIPPING_FEE_CENTS,
        "minAmount": config.MIN_CHARGE_CENTS,
        "successPath": config.PAYMENT_SUCCESS_PATH,
        "menu": [_item_json(item) for item in MENU],
    }


@router.get("/menu/{item_id}")
def menu_item(item_id: str):
    item = get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Unknown meal")
    return _item_json(item)
