# backend.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

PUBLIC_DIR = BASE_DIR / "public"
TEMPLATES_DIR = BASE_DIR / "templates"

"""
Configuration centrale du site.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose les chemins utiles (PUBLIC_DIR, TEMPLATES_DIR)
- Normalise les clés Stripe et le secret admin
- Paramètres du tunnel de commande (seuil livraison gratuite, frais, minimum Stripe)
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _int_env(name: str, default: int) -> int:
    raw = _clean_env(os.getenv(name) or "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default

PORT = _int_env("PORT", 3000)

# Cookies / sécurité
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "*").split(",") if h.strip()]

# Admin: hash bcrypt (recommandé) ou mot de passe en clair haché au premier usage
ADMIN_PASSWORD_HASH = _clean_env(os.getenv("ADMIN_PASSWORD_HASH") or "")
ADMIN_PASSWORD = _clean_env(os.getenv("ADMIN_PASSWORD") or "")

# Stripe: clé secrète (serveur) et publique (Payment Element côté client)
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")
STRIPE_PUBLISHABLE_KEY = _clean_env(os.getenv("STRIPE_PUBLISHABLE_KEY") or "")

# Tunnel de commande (montants en centimes)
CURRENCY = _clean_env(os.getenv("CURRENCY") or "usd").lower()
FREE_DELIVERY_THRESHOLD_CENTS = _int_env("FREE_DELIVERY_THRESHOLD_CENTS", 7500)
SHIPPING_FEE_CENTS = _int_env("SHIPPING_FEE_CENTS", 800)
MIN_CHARGE_CENTS = _int_env("MIN_CHARGE_CENTS", 50)

# Retour Stripe après confirmation
PAYMENT_SUCCESS_PATH = os.getenv("PAYMENT_SUCCESS_PATH", "/order?status=success")
