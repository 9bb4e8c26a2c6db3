"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports de persistance :
- IDocumentStore : Magasin de documents adressés par chemin
- ICatalogBackend : Lecture/écriture du catalogue par série entière

Ports de lecture :
- IMediaElement : Élément média (vidéo principale ou audio secondaire)

Ports externes :
- IAuthProvider : Connexion admin
- ITranslator : Traduction automatique
"""

from letzview.core.ports.auth import AuthUser, Credentials, IAuthProvider
from letzview.core.ports.catalog import ICatalogBackend
from letzview.core.ports.document_store import DocumentSnapshot, IDocumentStore
from letzview.core.ports.media import IMediaElement
from letzview.core.ports.translator import ITranslator

__all__ = [
    # Persistance
    "DocumentSnapshot",
    "IDocumentStore",
    "ICatalogBackend",
    # Lecture
    "IMediaElement",
    # Externes
    "AuthUser",
    "Credentials",
    "IAuthProvider",
    "ITranslator",
]
