# module backend.admin.sessions
"""
Store des sessions admin: ensemble de jetons opaques en mémoire.
Pas d'expiration côté serveur: un jeton vit jusqu'au logout ou au redémarrage du process
(le cookie porte seulement un max-age indicatif).
"""
import secrets
from typing import Set


class AdminSessionStore:
    def __init__(self):
        self._tokens: Set[str] = set()

    def issue(self) -> str:
        token = secrets.token_urlsafe(32)
        self._tokens.add(token)
        return token

    def revoke(self, token: str) -> None:
        self._tokens.discard(token)

    def is_valid(self, token: str) -> bool:
        return bool(token) and token in self._tokens

    def clear(self) -> None:
        self._tokens.clear()

    def __len__(self) -> int:
        return len(self._tokens)


_store = AdminSessionStore()


def get_session_store() -> AdminSessionStore:
    return _store
