# module backend.admin.service

from typing import List, Optional
import logging
import bcrypt

from backend import config
from backend.admin.sessions import get_session_store
from backend.orders.models import ORDER_STATUSES, Order
from backend.orders.repository import OrderRepository

logger = logging.getLogger(__name__)

_fallback_hash: Optional[bytes] = None

def _admin_hash() -> Optional[bytes]:
    """
    Hash bcrypt de référence:
    - ADMIN_PASSWORD_HASH s'il est défini
    - sinon ADMIN_PASSWORD haché au premier usage (mis en cache pour la durée du process)
    """
    global _fallback_hash
    if config.ADMIN_PASSWORD_HASH:
        return config.ADMIN_PASSWORD_HASH.encode("utf-8")
    if not config.ADMIN_PASSWORD:
        return None
    if _fallback_hash is None:
        _fallback_hash = bcrypt.hashpw(config.ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt())
    return _fallback_hash

def reset_password_cache() -> None:
    global _fallback_hash
    _fallback_hash = None

def verify_password(password: str) -> bool:
    hashed = _admin_hash()
    if not hashed or not password:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed)
    except ValueError:
        # Hash mal formé dans l'environnement
        logger.error("admin.service.verify_password: invalid ADMIN_PASSWORD_HASH")
        return False

def login(password: str) -> Optional[str]:
    """Retourne un nouveau jeton de session si le mot de passe est correct, sinon None."""
    if not verify_password(password):
        logger.warning("admin.service.login rejected")
        return None
    return get_session_store().issue()

def logout(token: Optional[str]) -> None:
    if token:
        get_session_store().revoke(token)

def list_orders(repository: OrderRepository) -> List[Order]:
    return repository.list()

def update_order_status(repository: OrderRepository, order_id: str, status: str) -> Optional[Order]:
    """
    - None si la commande n'existe pas (404 côté vue)
    - statut hors liste autorisée: ignoré, la commande garde son statut
    """
    order = repository.find_by_id(order_id)
    if order is None:
        return None
    status = (status or "").strip().lower()
    if status not in ORDER_STATUSES:
        logger.info("admin.service.update_order_status ignored status=%r id=%s", status, order_id)
        return order
    return repository.update_status(order_id, status)
