"""
Interface port pour le fournisseur d'authentification.

L'utilisateur courant ne sert que de garde (présent / absent) pour les
opérations d'administration : aucun rôle, aucune permission fine.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class Credentials:
    """Identifiants de connexion admin."""

    username: str
    password: str


@dataclass(frozen=True)
class AuthUser:
    """Utilisateur connecté."""

    username: str


AuthCallback = Callable[[Optional[AuthUser]], None]


class IAuthProvider(ABC):
    """Contrat login / observation / logout."""

    @property
    @abstractmethod
    def current_user(self) -> Optional[AuthUser]:
        ...

    @abstractmethod
    def login(self, credentials: Credentials) -> AuthUser:
        """Connecte l'utilisateur. Lève UnauthorizedError si refusé."""
        ...

    @abstractmethod
    def observe_auth(self, callback: AuthCallback) -> Callable[[], None]:
        """
        Abonne un observateur aux changements d'état.

        L'observateur est appelé immédiatement avec l'état courant.
        Retourne la fonction de désabonnement.
        """
        ...

    @abstractmethod
    def logout(self) -> None:
        ...
