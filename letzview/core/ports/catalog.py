"""
Interface port pour les backends de catalogue.

Le CatalogStore ne connaît que ce contrat : la forme de stockage (document
par série, sous-documents, blob clé-valeur) est un détail d'adaptateur.
"""

from abc import ABC, abstractmethod

from letzview.core.entities.catalog import Series


class ICatalogBackend(ABC):
    """
    Interface de persistance du catalogue.

    Une série est toujours écrite en entier (saisons et épisodes compris).
    Les erreurs de transport sont propagées telles quelles.
    """

    @abstractmethod
    async def load_catalog(self) -> list[Series]:
        """Lit tout le catalogue. Catalogue absent -> liste vide."""
        ...

    @abstractmethod
    async def save_series(self, series: Series) -> None:
        """Écrit une série complète (upsert par id, idempotent)."""
        ...

    @abstractmethod
    async def delete_series(self, series_id: str) -> None:
        """Supprime une série et tout son contenu."""
        ...
