"""
Gestionnaires d’exceptions utilisés par la factory.
- 401/403 sous /admin: redirection vers /admin/login (HTML comme JSON, aucune donnée divulguée).
- Sinon: réponse JSON standard {"detail": ...} pour les clients programmatiques.
"""
import logging
import urllib.parse
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_303_SEE_OTHER

logger = logging.getLogger(__name__)

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre le handler HTTPException (FastAPI et Starlette, 404 de routage inclus).
    """
    @app.exception_handler(StarletteHTTPException)
    async def redirect_admin_on_auth_errors(request: Request, exc: HTTPException):
        if exc.status_code in (401, 403) and request.url.path.startswith("/admin"):
            logger.info("admin access refused path=%s status=%s", request.url.path, exc.status_code)
            detail = str(getattr(exc, "detail", "")) or "Veuillez vous connecter"
            msg = urllib.parse.quote_plus(detail)
            return RedirectResponse(url=f"/admin/login?error={msg}", status_code=HTTP_303_SEE_OTHER)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )
