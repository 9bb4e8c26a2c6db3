"""
Interface port pour le magasin de documents.

Contrat minimal inspiré des bases documentaires (Firestore) : des documents
JSON adressés par chemin ("series/abc", "series/abc/seasons/1"), regroupés
en collections. Aucune transaction n'est supposée disponible.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Optional


@dataclass
class DocumentSnapshot:
    """
    Document lu depuis le magasin.

    Attributs :
        id : Dernier segment du chemin
        path : Chemin complet du document
        data : Contenu JSON du document
    """

    id: str
    path: str
    data: dict[str, Any] = field(default_factory=dict)


def split_path(doc_path: str) -> tuple[str, str]:
    """
    Découpe un chemin de document en (collection, id).

    Exemple : "series/abc/seasons/1" -> ("series/abc/seasons", "1")
    """
    parts = [part for part in doc_path.strip("/").split("/") if part]
    if len(parts) < 2 or len(parts) % 2:
        raise ValueError(f"Chemin de document invalide : {doc_path!r}")
    return "/".join(parts[:-1]), parts[-1]


class IDocumentStore(ABC):
    """
    Interface d'accès au magasin de documents.

    Toutes les opérations sont asynchrones (E/S distantes). La suppression
    d'un document ne supprime PAS ses sous-collections.
    """

    @abstractmethod
    async def get(self, collection_path: str) -> list[DocumentSnapshot]:
        """Liste les documents d'une collection (ordre du magasin)."""
        ...

    @abstractmethod
    async def get_one(self, doc_path: str) -> Optional[DocumentSnapshot]:
        """Récupère un document, None s'il n'existe pas."""
        ...

    @abstractmethod
    async def set(self, doc_path: str, data: dict[str, Any], merge: bool = False) -> None:
        """
        Écrit un document.

        Args :
            doc_path : Chemin du document
            data : Contenu à écrire
            merge : Si True, fusionne les clés de premier niveau avec
                    le document existant au lieu de le remplacer
        """
        ...

    @abstractmethod
    async def delete(self, doc_path: str) -> None:
        """Supprime un document (sans effet s'il n'existe pas)."""
        ...

    @abstractmethod
    async def query(
        self,
        collection_path: str,
        order_by: str,
        equals: Optional[tuple[str, Any]] = None,
    ) -> list[DocumentSnapshot]:
        """
        Requête simple sur une collection.

        Args :
            collection_path : Collection interrogée
            order_by : Champ numérique de tri croissant
            equals : Filtre optionnel (champ, valeur) par égalité
        """
        ...


def numeric_sort_key(field_name: str) -> Callable[[DocumentSnapshot], tuple[int, float]]:
    """Clé de tri sur un champ numérique, documents sans valeur en dernier."""

    def key(snapshot: DocumentSnapshot) -> tuple[int, float]:
        value = snapshot.data.get(field_name)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return (0, float(value))
        return (1, 0.0)

    return key
