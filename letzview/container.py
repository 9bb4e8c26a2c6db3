"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI d'administration
et l'application web. Aucun singleton global : chaque Container cree son
engine, ses magasins et ses clients a partir de Settings.
"""

from dependency_injector import containers, providers

from .adapters.api.google_translate import GoogleTranslateClient
from .adapters.api.kv_client import KVProxyClient
from .adapters.api.translate_client import TranslateProxyClient
from .adapters.auth import PasswordAuthProvider
from .adapters.storage.embedded import EmbeddedCatalogBackend
from .adapters.storage.kv import KVCatalogBackend
from .adapters.storage.subdocuments import SubDocumentCatalogBackend
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.document_store import SQLModelDocumentStore
from .infrastructure.persistence.kv_store import KVBlobStore
from .services.catalog import CatalogStore


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        store = container.catalog_store()
        await store.fetch_catalog()

    La forme de stockage est choisie par LETZVIEW_STORAGE_BACKEND
    (embedded, subdocuments ou kv).
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - engine par container, Resource pour la creation des tables
    db_engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )
    database = providers.Resource(init_db, engine=db_engine)

    # Magasin de documents (tables creees a la premiere utilisation)
    document_store = providers.Singleton(SQLModelDocumentStore, engine=database)

    # Blob du proxy KV (cote serveur)
    kv_blob_store = providers.Singleton(KVBlobStore, directory=config.provided.kv_dir)

    # Clients HTTP - Singleton, client httpx cree a la demande
    kv_client = providers.Singleton(
        KVProxyClient,
        base_url=config.provided.kv_proxy_url,
        password=config.provided.admin_password,
    )
    google_translate_client = providers.Singleton(
        GoogleTranslateClient,
        api_key=config.provided.google_translate_api_key,
    )
    translate_proxy_client = providers.Singleton(
        TranslateProxyClient,
        base_url=config.provided.translate_proxy_url,
    )

    # Backend du catalogue selon la forme de stockage configuree
    catalog_backend = providers.Selector(
        config.provided.storage_backend,
        embedded=providers.Singleton(EmbeddedCatalogBackend, store=document_store),
        subdocuments=providers.Singleton(
            SubDocumentCatalogBackend,
            store=document_store,
            sort_language=config.provided.default_language,
        ),
        kv=providers.Singleton(KVCatalogBackend, client=kv_client),
    )

    # Authentification admin (mot de passe partage avec le proxy KV)
    auth_provider = providers.Singleton(
        PasswordAuthProvider,
        admin_password=config.provided.admin_password,
    )

    # Catalogue - Singleton : l'arbre en memoire est partage
    catalog_store = providers.Singleton(
        CatalogStore,
        backend=catalog_backend,
        auth=auth_provider,
        fallback_languages=config.provided.fallback_languages,
    )
