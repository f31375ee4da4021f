"""
Registre central des routers (pages, API, admin, health).
- Pages: pages publiques + tunnel /order
- API: configuration du tunnel (/api/order/config), création d'intent (/api/payments)
- Admin: /admin
- Health: /health
"""
from fastapi import FastAPI
from backend.pages.views import router as pages_router
from backend.menu.views import router as order_config_router
from backend.payments.views import router as payments_router
from backend.admin.views import router as admin_router
from backend.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    """
    Agrège tous les routers de l’application.
    - L’ordre n’a pas d’impact sauf conflits de chemins (évités par préfixes).
    """
    # Pages web (HTML)
    app.include_router(pages_router)
    # API
    app.include_router(order_config_router)
    app.include_router(payments_router)
    # Admin
    app.include_router(admin_router)
    # Health & monitoring
    app.include_router(health_router)
