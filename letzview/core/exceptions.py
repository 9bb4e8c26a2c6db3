"""
Exceptions du domaine catalogue.

Une référence inconnue (série, saison ou épisode supprimé entre-temps) n'est
pas une erreur : les opérations du catalogue ne font rien et retournent
None/False. Les exceptions ci-dessous signalent les refus et les échecs
distants, toujours propagés à l'appelant.
"""

from typing import Optional


class CatalogError(Exception):
    """Erreur de base des opérations du catalogue."""


class CatalogValidationError(CatalogError):
    """
    Champ obligatoire manquant ou invalide.

    Levée avant toute tentative d'écriture : aucune écriture partielle.

    Attributes:
        field: Nom du champ en cause
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class DuplicateSeasonError(CatalogError):
    """Numéro de saison explicite déjà utilisé dans la série."""

    def __init__(self, series_id: str, number: int) -> None:
        self.series_id = series_id
        self.number = number
        super().__init__(f"Season {number} already exists in series {series_id}")


class DuplicateEpisodeError(CatalogError):
    """Numéro d'épisode explicite déjà utilisé dans la saison."""

    def __init__(self, season_id: str, number: int) -> None:
        self.season_id = season_id
        self.number = number
        super().__init__(f"Episode {number} already exists in season {season_id}")


class RemoteWriteError(CatalogError):
    """
    Échec d'écriture vers le magasin distant (réseau, auth, quota).

    L'exception d'origine est conservée dans __cause__. L'arbre en mémoire
    n'a pas été modifié.
    """

    def __init__(self, operation: str, series_id: str) -> None:
        self.operation = operation
        self.series_id = series_id
        super().__init__(f"Remote write failed during {operation} of series {series_id}")


class UnauthorizedError(CatalogError):
    """Opération d'administration sans utilisateur connecté, ou identifiants refusés."""


class TranslationError(Exception):
    """
    Échec de traduction (clé absente, erreur du service amont).

    Attributes:
        status_code: Code HTTP à renvoyer par le proxy, si connu
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)
