from fastapi import FastAPI
from backend import config

STRIPE_JS = "https://js.stripe.com"
STRIPE_API = "https://api.stripe.com"
STRIPE_HOOKS = "https://hooks.stripe.com"

def build_csp() -> str:
    # Stripe.js charge le Payment Element dans des iframes js.stripe.com / hooks.stripe.com
    img_sources = ["https://placehold.co", "https://*.stripe.com"]
    return (
        "default-src 'self'; "
        "base-uri 'self'; object-src 'none'; frame-ancestors 'none'; "
        f"img-src 'self' data: blob: {' '.join(img_sources)}; "
        "style-src 'self' 'unsafe-inline'; "
        f"script-src 'self' 'unsafe-inline' {STRIPE_JS}; "
        f"frame-src {STRIPE_JS} {STRIPE_HOOKS}; "
        f"connect-src 'self' {STRIPE_API}"
    )

def register_security_middleware(app: FastAPI) -> None:
    csp = build_csp()

    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)

        # En-têtes de sécurité
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        response.headers.setdefault("Permissions-Policy", "geolocation=(), microphone=(), camera=()")
        if config.COOKIE_SECURE:
            response.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains; preload")

        response.headers["Content-Security-Policy"] = csp
        return response
