"""
Configuration de la base de donnees SQLite pour LetzView.

Ce module fournit :
- create_db_engine : engine SQLite configure pour un acces multi-thread
- init_db : creation des tables
- session_scope : context manager de session

Aucun engine global : l'engine est cree par le Container a partir de
LETZVIEW_DATABASE_URL (defaut: sqlite:///letzview.db) et passe explicitement.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, create_engine


def create_db_engine(database_url: str) -> Engine:
    """
    Cree l'engine SQLModel pour l'URL donnee.

    Le repertoire parent est cree si l'URL designe un fichier SQLite.
    Les operations etant executees dans le pool de threads asyncio,
    check_same_thread est desactive.
    """
    if database_url.startswith("sqlite:///") and not database_url.startswith("sqlite:///:memory:"):
        db_path = Path(database_url.replace("sqlite:///", ""))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, echo=False, connect_args=connect_args)


def init_db(engine: Engine) -> Engine:
    """
    Initialise la base de donnees en creant toutes les tables.

    Importe les modeles pour enregistrer leurs metadonnees dans
    SQLModel.metadata, puis cree les tables absentes.
    """
    # Import ici pour eviter les imports circulaires
    from letzview.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    return engine


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """
    Session SQLModel avec commit en sortie normale et rollback sur erreur.

    Utilisation :
        with session_scope(engine) as session:
            session.add(model)
    """
    with Session(engine) as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
