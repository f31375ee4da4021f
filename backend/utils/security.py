from fastapi import Request, HTTPException
from fastapi.responses import Response
from backend import config

ADMIN_COOKIE_NAME = "fm_admin"
ADMIN_COOKIE_MAX_AGE = 8 * 60 * 60

def set_admin_cookie(response: Response, token: str):
    response.set_cookie(
        key=ADMIN_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite="Lax",
        max_age=ADMIN_COOKIE_MAX_AGE,
        path="/",
    )

def clear_admin_cookie(response: Response):
    response.delete_cookie(ADMIN_COOKIE_NAME, path="/")

def get_admin_token(request: Request) -> str:
    """
    Jeton de session admin présent dans le cookie et connu du store serveur.
    401 sinon (converti en redirection /admin/login par le handler d'exceptions).
    """
    from backend.admin.sessions import get_session_store

    token = request.cookies.get(ADMIN_COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="Non authentifié")
    if not get_session_store().is_valid(token):
        raise HTTPException(status_code=401, detail="Session expirée, veuillez vous connecter")
    return token

def require_admin(request: Request) -> str:
    return get_admin_token(request)
