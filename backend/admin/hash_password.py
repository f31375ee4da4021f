"""
Génère la valeur de ADMIN_PASSWORD_HASH à placer dans .env.

Usage:
    python -m backend.admin.hash_password
"""
import getpass
import bcrypt

def generate_hash(password: str) -> str:
    # Hash bcrypt avec salt auto
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")

if __name__ == "__main__":
    secret = getpass.getpass("Admin password: ")
    if not secret:
        raise SystemExit("Empty password refused.")
    print(f"ADMIN_PASSWORD_HASH={generate_hash(secret)}")
