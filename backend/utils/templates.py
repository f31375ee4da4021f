# module backend.utils.templates
from typing import Any, Dict
from fastapi import Request
from fastapi.templating import Jinja2Templates
from backend.config import TEMPLATES_DIR
from backend.order_flow.fees import format_currency
from backend.order_flow.summary import SUMMARY_COOKIE_NAME, banner_text, parse_summary

def order_banner(request: Request) -> Dict[str, Any]:
    """Contexte commun: bandeau "Your recent order" si le cookie de résumé est lisible."""
    summary = parse_summary(request.cookies.get(SUMMARY_COOKIE_NAME))
    return {"order_banner": banner_text(summary) if summary else None}

templates = Jinja2Templates(directory=str(TEMPLATES_DIR), context_processors=[order_banner])
templates.env.filters["currency"] = format_currency
