"""
Fournisseur d'authentification par mot de passe admin.

Un seul secret (LETZVIEW_ADMIN_PASSWORD), partagé avec le proxy KV. La
connexion ne donne aucun rôle : elle ouvre seulement les opérations
d'administration du catalogue.
"""

import secrets
from typing import Callable, Optional

from loguru import logger

from letzview.core.exceptions import UnauthorizedError
from letzview.core.ports.auth import AuthCallback, AuthUser, Credentials, IAuthProvider


class PasswordAuthProvider(IAuthProvider):
    """Authentification par comparaison avec le mot de passe admin configuré."""

    def __init__(self, admin_password: str) -> None:
        self._admin_password = admin_password
        self._user: Optional[AuthUser] = None
        self._observers: list[AuthCallback] = []

    @property
    def current_user(self) -> Optional[AuthUser]:
        return self._user

    def login(self, credentials: Credentials) -> AuthUser:
        """Connecte l'utilisateur si le mot de passe correspond."""
        if not secrets.compare_digest(
            credentials.password.encode("utf-8"), self._admin_password.encode("utf-8")
        ):
            logger.warning("Connexion admin refusée", username=credentials.username)
            raise UnauthorizedError("Invalid admin credentials")

        self._user = AuthUser(username=credentials.username or "admin")
        logger.info("Connexion admin", username=self._user.username)
        self._notify()
        return self._user

    def observe_auth(self, callback: AuthCallback) -> Callable[[], None]:
        self._observers.append(callback)
        callback(self._user)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def logout(self) -> None:
        if self._user is None:
            return
        logger.info("Déconnexion admin", username=self._user.username)
        self._user = None
        self._notify()

    def _notify(self) -> None:
        for callback in list(self._observers):
            callback(self._user)
