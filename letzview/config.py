"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe LETZVIEW_,
et peut optionnellement être fournie via un fichier .env.

La clé API de traduction est optionnelle - le proxy de traduction répond 500 si absente.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from letzview.utils.constants import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

# Trouver le fichier .env à la racine du projet (parent de letzview/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

StorageBackend = Literal["embedded", "subdocuments", "kv"]


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe LETZVIEW_.
    Exemple : LETZVIEW_STORAGE_BACKEND=kv

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="LETZVIEW_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Stockage du catalogue
    storage_backend: StorageBackend = Field(default="embedded")
    database_url: str = Field(default="sqlite:///letzview.db")
    kv_dir: Path = Field(default=Path(".cache/kv"))
    kv_proxy_url: str = Field(default="http://localhost:8000")

    # Administration (le proxy KV et la CLI partagent le même secret)
    admin_password: str = Field(default="admin")

    # Traduction (OPTIONNELLE)
    google_translate_api_key: Optional[str] = Field(default=None)
    translate_proxy_url: str = Field(default="http://localhost:8000")

    # Langues
    default_language: str = Field(default=DEFAULT_LANGUAGE)
    supported_languages: list[str] = Field(default_factory=lambda: list(SUPPORTED_LANGUAGES))

    # Lecteur : la tolérance de dérive conditionne la synchro audio/vidéo perçue
    drift_interval_seconds: float = Field(default=0.5, gt=0)
    drift_tolerance_seconds: float = Field(default=0.3, gt=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/letzview.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("kv_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def translate_enabled(self) -> bool:
        """Vérifie si l'API de traduction est configurée."""
        return bool(self.google_translate_api_key)

    @property
    def fallback_languages(self) -> tuple[str, ...]:
        """Chaîne de repli utilisée pour résoudre les textes localisés."""
        return (self.default_language,)
