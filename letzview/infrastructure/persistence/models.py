"""
Modeles SQLModel pour la base de donnees LetzView.

Le magasin de documents tient dans une seule table : chaque ligne est un
document JSON adresse par son chemin complet. La colonne `collection`
(chemin sans le dernier segment) permet de lister une collection.

Tables:
- documents: Documents JSON du catalogue
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from sqlmodel import Field, SQLModel


class DocumentModel(SQLModel, table=True):
    """
    Modele representant un document du magasin.

    Le champ data_json stocke le contenu serialise du document.
    """

    __tablename__ = "documents"

    path: str = Field(primary_key=True)
    collection: str = Field(index=True)
    doc_id: str
    data_json: str = "{}"  # JSON: {"title": ..., "seasons": [...]}
    created_at: datetime | None = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = Field(default_factory=datetime.utcnow)

    @property
    def data(self) -> dict[str, Any]:
        """Retourne le contenu deserialise."""
        if self.data_json:
            return json.loads(self.data_json)
        return {}
