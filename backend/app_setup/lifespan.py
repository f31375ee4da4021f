"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Avertit au démarrage si Stripe ou le mot de passe admin ne sont pas configurés.
- Initialise FastAPILimiter (Redis) avec options de test (fakeredis).
- Variables d’environnement supportées:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: désactive complètement (tests)
  - USE_FAKE_REDIS_FOR_TESTS=1: utilise fakeredis (tests)
  - LOCAL_RATE_LIMIT_FALLBACK=1: active un fallback local si l’init échoue
"""
import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter
import redis.asyncio as aioredis
from backend import config

try:
    from fakeredis.aioredis import FakeRedis  # tests only
except ImportError:
    FakeRedis = None


def log_configuration_warnings(logger: logging.Logger) -> None:
    """Fonctionnalités désactivées faute de configuration (pas d'échec au démarrage)."""
    if not config.STRIPE_SECRET_KEY:
        logger.warning("Stripe secret key missing; payments are disabled.")
    elif not config.STRIPE_SECRET_KEY.startswith("sk_"):
        logger.warning("Stripe secret key malformed (expected sk_ prefix); payments are disabled.")
    if not config.STRIPE_PUBLISHABLE_KEY:
        logger.warning("Stripe publishable key missing; client payment form will be disabled.")
    if not (config.ADMIN_PASSWORD_HASH or config.ADMIN_PASSWORD):
        logger.warning("ADMIN_PASSWORD_HASH/ADMIN_PASSWORD missing; admin login is disabled.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Configure le rate limiting et gère les fallbacks.
    - En cas d’échec de Redis et sans fallback, le rate limiting est désactivé proprement.
    - Les logs indiquent l’état effectif (enabled/disabled) pour observabilité.
    """
    logger = logging.getLogger("uvicorn.error")
    log_configuration_warnings(logger)
    try:
        if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
            app.state.rate_limit_enabled = False
            logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
            yield
            return

        use_fake = os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1"
        if use_fake:
            if not FakeRedis:
                raise RuntimeError("USE_FAKE_REDIS_FOR_TESTS=1 mais fakeredis n'est pas installé.")
            r = FakeRedis(decode_responses=True)
        else:
            redis_url = os.getenv("RATE_LIMIT_REDIS_URL", "redis://127.0.0.1:6379/0")
            r = aioredis.from_url(redis_url, encoding="utf-8", decode_responses=True)

        await FastAPILimiter.init(r)
        app.state.rate_limit_enabled = True
        logger.info("Rate limiting enabled")
    except Exception as e:
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            app.state.rate_limit_enabled = True
            logger.warning("Rate limiting falling back to local in-memory due to init error: %s", e)
        else:
            app.state.rate_limit_enabled = False
            logger.warning("Rate limiting disabled due to init error: %s", e)

    logger.info("Site listening on port %s", config.PORT)
    yield
