# module backend.utils.csrf
from typing import Any, Iterable
from fastapi import Request
from fastapi.responses import Response
import secrets
from backend import config

CSRF_COOKIE_NAME = "csrf_token"

def get_or_create_csrf_token(request: Request) -> str:
    """
    Renvoie le token CSRF existant (cookie) ou en crée un nouveau.
    """
    token = request.cookies.get(CSRF_COOKIE_NAME)
    if not token:
        token = secrets.token_urlsafe(32)
    return token

def attach_csrf_cookie_if_missing(response: Response, request: Request, token: str) -> None:
    """
    Pose le cookie CSRF si absent pour le navigateur.
    """
    if not request.cookies.get(CSRF_COOKIE_NAME):
        response.set_cookie(
            key=CSRF_COOKIE_NAME,
            value=token,
            httponly=False,
            secure=config.COOKIE_SECURE,
            samesite="Lax",
            max_age=60 * 60,
            path="/",
        )

def validate_csrf_token(request: Request, form_data: Any, field_names: Iterable[str] = ("csrf_token", "X-CSRF-Token")) -> bool:
    """
    Double-submit: compare le champ du formulaire au cookie.
    - Si le cookie n'existe pas, on ne bloque pas (POST direct sans page préalable).
    """
    token_cookie = request.cookies.get(CSRF_COOKIE_NAME)
    if not token_cookie:
        return True
    token_form = None
    for name in field_names:
        if hasattr(form_data, "get"):
            token_form = form_data.get(name)
            if token_form:
                break
    return bool(token_form) and secrets.compare_digest(str(token_form), token_cookie)
