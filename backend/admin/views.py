from typing import Optional
from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse, JSONResponse
from starlette.status import HTTP_303_SEE_OTHER
from backend.utils.templates import templates
from backend.utils.security import require_admin, set_admin_cookie, clear_admin_cookie
from backend.utils.rate_limit import optional_rate_limit
from backend.utils.csrf import get_or_create_csrf_token, attach_csrf_cookie_if_missing, validate_csrf_token
from backend.admin import service as admin_service
from backend.orders.models import ORDER_STATUSES
from backend.orders.repository import OrderRepository, get_order_repository

router = APIRouter(prefix="/admin", tags=["Admin"])

# module backend.admin.views
@router.get("/login", response_class=HTMLResponse)
def admin_login_page(request: Request, error: Optional[str] = None, message: Optional[str] = None):
    return templates.TemplateResponse(request, "admin_login.html", {"error": error, "message": message})

@router.post("/login", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
async def admin_login(request: Request):
    """
    Connexion admin par mot de passe (bcrypt).
    - 401 + page de login si le mot de passe est refusé
    - sinon nouveau jeton en mémoire, cookie http-only fm_admin, redirection /admin
    """
    form_data = await request.form()
    password = str(form_data.get("password") or "")
    token = admin_service.login(password)
    if not token:
        return templates.TemplateResponse(
            request,
            "admin_login.html",
            {"error": "Invalid password", "message": None},
            status_code=401,
        )
    resp = RedirectResponse(url="/admin", status_code=HTTP_303_SEE_OTHER)
    set_admin_cookie(resp, token)
    return resp

@router.post("/logout")
def admin_logout(request: Request, token: str = Depends(require_admin)):
    admin_service.logout(token)
    resp = RedirectResponse(url="/admin/login?message=Logged%20out", status_code=HTTP_303_SEE_OTHER)
    clear_admin_cookie(resp)
    return resp

@router.get("", response_class=HTMLResponse)
@router.get("/", response_class=HTMLResponse)
def admin_page(
    request: Request,
    message: Optional[str] = None,
    error: Optional[str] = None,
    token: str = Depends(require_admin),
    repository: OrderRepository = Depends(get_order_repository),
):
    orders = admin_service.list_orders(repository)
    csrf = get_or_create_csrf_token(request)
    resp = templates.TemplateResponse(request, "admin.html", {
        "message": message,
        "error": error,
        "orders": orders,
        "statuses": ORDER_STATUSES,
        "csrf_token": csrf,
    })
    attach_csrf_cookie_if_missing(resp, request, csrf)
    return resp

# API JSON: liste des commandes
@router.get("/orders")
def admin_list_orders(
    token: str = Depends(require_admin),
    repository: OrderRepository = Depends(get_order_repository),
):
    orders = admin_service.list_orders(repository)
    return JSONResponse([o.model_dump() for o in orders])

@router.post("/orders/{order_id}/status")
async def admin_update_order_status(
    order_id: str,
    request: Request,
    token: str = Depends(require_admin),
    repository: OrderRepository = Depends(get_order_repository),
):
    form_data = await request.form()
    if repository.find_by_id(order_id) is None:
        raise HTTPException(status_code=404, detail="Order not found")
    if not validate_csrf_token(request, form_data):
        return RedirectResponse(url="/admin?error=CSRF%20invalide", status_code=HTTP_303_SEE_OTHER)
    admin_service.update_order_status(repository, order_id, str(form_data.get("status") or ""))
    return RedirectResponse(url="/admin", status_code=HTTP_303_SEE_OTHER)
