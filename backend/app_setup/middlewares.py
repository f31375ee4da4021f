from fastapi import Request, FastAPI
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware
from backend.config import ALLOWED_HOSTS

"""
Middlewares transverses de l’application.
- register_basic_middlewares: TrustedHost et confiance en X-Forwarded-*.
- register_no_cache_middleware: empêche la mise en cache du sous-arbre /admin.
Les en-têtes de sécurité (CSP Stripe) sont dans backend.app_setup.security.
"""
def register_basic_middlewares(app: FastAPI) -> None:
    """
    Ajoute les middlewares « de base »:
    - TrustedHostMiddleware: limite les hôtes acceptés (ALLOWED_HOSTS, "*" par défaut).
    - ProxyHeadersMiddleware: fait confiance aux en-têtes du proxy (x-forwarded-*) pour le retour Stripe.
    """
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=ALLOWED_HOSTS or ["*"])
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

def register_no_cache_middleware(app: FastAPI) -> None:
    """
    Empêche la mise en cache des pages admin (bouton retour après logout).
    """
    @app.middleware("http")
    async def no_cache_for_protected(request: Request, call_next):
        response = await call_next(request)
        path = request.url.path.rstrip("/")
        if request.method == "GET" and path.startswith("/admin"):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response
