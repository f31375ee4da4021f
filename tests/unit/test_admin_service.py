import bcrypt
import pytest

import backend.admin.service as svc
from backend import config
from backend.admin.sessions import AdminSessionStore, get_session_store
from backend.orders.models import Order
from backend.orders.repository import InMemoryOrderRepository


@pytest.fixture
def repo():
    return InMemoryOrderRepository()


def test_login_with_bcrypt_hash(monkeypatch):
    hashed = bcrypt.hashpw(b"s3cret", bcrypt.gensalt(rounds=4)).decode()
    monkeypatch.setattr(config, "ADMIN_PASSWORD_HASH", hashed)
    monkeypatch.setattr(config, "ADMIN_PASSWORD", "")
    token = svc.login("s3cret")
    assert token and get_session_store().is_valid(token)
    assert svc.login("wrong") is None


def test_plain_password_hashed_once_and_cached(monkeypatch):
    monkeypatch.setattr(config, "ADMIN_PASSWORD_HASH", "")
    monkeypatch.setattr(config, "ADMIN_PASSWORD", "letmein")
    calls = []
    real_hashpw = bcrypt.hashpw

    def counting_hashpw(pw, salt):
        calls.append(pw)
        return real_hashpw(pw, bcrypt.gensalt(rounds=4))

    monkeypatch.setattr(svc.bcrypt, "hashpw", counting_hashpw)
    assert svc.verify_password("letmein") is True
    assert svc.verify_password("nope") is False
    assert len(calls) == 1


def test_no_password_configured_rejects_everything(monkeypatch):
    monkeypatch.setattr(config, "ADMIN_PASSWORD_HASH", "")
    monkeypatch.setattr(config, "ADMIN_PASSWORD", "")
    assert svc.login("") is None
    assert svc.login("anything") is None
    assert len(get_session_store()) == 0


def test_malformed_hash_is_rejected(monkeypatch):
    monkeypatch.setattr(config, "ADMIN_PASSWORD_HASH", "not-a-bcrypt-hash")
    assert svc.verify_password("whatever") is False


def test_logout_revokes_token():
    store = get_session_store()
    token = store.issue()
    svc.logout(token)
    assert store.is_valid(token) is False
    svc.logout(None)


def test_session_store_tokens_are_unique():
    store = AdminSessionStore()
    a, b = store.issue(), store.issue()
    assert a != b
    assert len(store) == 2
    assert store.is_valid("") is False
    store.clear()
    assert store.is_valid(a) is False


def test_update_status_valid_unknown_and_missing(repo):
    order = repo.add(Order(amount=4800))
    assert svc.update_order_status(repo, order.id, "shipped").status == "shipped"
    # statut inconnu: ignoré silencieusement
    assert svc.update_order_status(repo, order.id, "bogus").status == "shipped"
    assert svc.update_order_status(repo, order.id, "failed").status == "shipped"
    assert svc.update_order_status(repo, "missing", "shipped") is None


def test_list_orders_newest_first(repo):
    older = repo.add(Order(amount=100, created_at="2024-01-01T00:00:00+00:00"))
    newer = repo.add(Order(amount=200, created_at="2024-02-01T00:00:00+00:00"))
    assert [o.id for o in svc.list_orders(repo)] == [newer.id, older.id]


def test_generated_hash_is_accepted_by_login(monkeypatch):
    from backend.admin.hash_password import generate_hash
    monkeypatch.setattr(config, "ADMIN_PASSWORD_HASH", generate_hash("from-cli"))
    assert svc.verify_password("from-cli") is True
    assert svc.verify_password("other") is False
