# module backend.pages.views

"""Pages publiques du restaurant (rendu Jinja2).
- Toutes les pages reçoivent `data` (fondateurs + menu) et le bandeau de dernière commande via le context processor.
- /order reçoit en plus la clé publique Stripe et les paramètres du tunnel (data-attributes).
- Au retour Stripe (/order?status=success), le résumé en attente est promu en fm_order_summary.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.status import HTTP_303_SEE_OTHER

from backend import config
from backend.menu.catalog import MENU
from backend.order_flow.summary import (
    PENDING_COOKIE_NAME,
    SUMMARY_COOKIE_NAME,
    SUMMARY_MAX_AGE,
    banner_text,
    parse_summary,
    promote_pending,
)
from backend.utils.templates import templates

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Pages"])

FOUNDERS = (
    {
        "name": "Zach",
        "role": "Useless Fellow",
        "bio": "Zach is the useless guy who didn't give me a role to put in the website.",
        "image": "https://placehold.co/320x240/png",
    },
    {
        "name": "Emma",
        "role": "Betrayed Fellow",
        "bio": "Emma is the poor victim of Zach's lazyness when I asked for a role.",
        "image": "https://placehold.co/320x240/png",
    },
    {
        "name": "Vishesh",
        "role": "Web Developer",
        "bio": "Vishesh is the web developer who created this website.",
        "image": "https://placehold.co/320x240/png",
    },
)


def site_data() -> Dict[str, Any]:
    return {"founders": FOUNDERS, "menu": MENU}


def _render(request: Request, page: str, extra: Optional[Dict[str, Any]] = None, status_code: int = 200):
    ctx: Dict[str, Any] = {"data": site_data(), "page": page}
    if extra:
        ctx.update(extra)
    return templates.TemplateResponse(request, f"{page}.html", ctx, status_code=status_code)


@router.get("/", response_class=HTMLResponse)
def index_page(request: Request):
    return _render(request, "index")

@router.get("/how", response_class=HTMLResponse)
def how_page(request: Request):
    return _render(request, "how")

@router.get("/menu", response_class=HTMLResponse)
def menu_page(request: Request):
    return _render(request, "menu")

@router.get("/founders", response_class=HTMLResponse)
def founders_page(request: Request):
    return _render(request, "founders")

@router.get("/contact", response_class=HTMLResponse)
def contact_page(request: Request):
    return _render(request, "contact")

@router.get("/reviews", response_class=HTMLResponse)
def reviews_page(request: Request):
    return _render(request, "reviews")

@router.get("/newsletter", response_class=HTMLResponse)
def newsletter_page(request: Request):
    return _render(request, "newsletter")

@router.get("/faq", response_class=HTMLResponse)
def faq_page(request: Request):
    return _render(request, "faq")

@router.get("/allergens", response_class=HTMLResponse)
def allergens_page(request: Request):
    return _render(request, "allergens")


def _promoted_banner(raw: Optional[str]) -> Optional[str]:
    summary = parse_summary(raw)
    return banner_text(summary) if summary else None


@router.get("/order", response_class=HTMLResponse)
def order_page(request: Request, status: Optional[str] = None):
    """Tunnel de commande.
    - Les montants sont rendus en centimes dans les data-attributes (seuil, frais, minimum Stripe).
    - status=success: promotion du résumé fm_last_order -> fm_order_summary, suppression du cookie en attente.
    """
    promoted = promote_pending(request.cookies) if status == "success" else None
    resp = _render(request, "order", {
        "stripe_publishable_key": config.STRIPE_PUBLISHABLE_KEY,
        "free_threshold": config.FREE_DELIVERY_THRESHOLD_CENTS,
        "shipping_fee": config.SHIPPING_FEE_CENTS,
        "min_amount": config.MIN_CHARGE_CENTS,
        "currency": config.CURRENCY,
        "success_path": config.PAYMENT_SUCCESS_PATH,
        "payment_status": status,
        "promoted_banner": _promoted_banner(promoted),
    })
    if promoted:
        resp.set_cookie(
            key=SUMMARY_COOKIE_NAME,
            value=promoted,
            max_age=SUMMARY_MAX_AGE,
            path="/",
            samesite="lax",
            secure=config.COOKIE_SECURE,
        )
        resp.delete_cookie(PENDING_COOKIE_NAME, path="/")
        logger.info("order summary promoted after payment success")
    return resp


@router.post("/contact")
async def contact_submit(request: Request):
    form_data = await request.form()
    logger.info("Contact submission: %s", dict(form_data))
    return RedirectResponse(url="/contact", status_code=HTTP_303_SEE_OTHER)


@router.post("/newsletter")
async def newsletter_submit(request: Request):
    form_data = await request.form()
    logger.info("Newsletter signup: %s", dict(form_data))
    return RedirectResponse(url="/newsletter", status_code=HTTP_303_SEE_OTHER)
