"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe
FILMOTHEQUE_, et peut optionnellement être fournie via un fichier .env.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de filmotheque/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe FILMOTHEQUE_.
    Exemple : FILMOTHEQUE_POSTERS_DIR=/data/posters

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="FILMOTHEQUE_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Stockage des affiches (original/, thumbnail/, cache/)
    posters_dir: Path = Field(default=Path("~/.filmotheque/posters"))

    # Vignettes et images dérivées
    thumbnail_width: int = Field(default=200, ge=1)
    thumbnail_height: int = Field(default=300, ge=1)
    jpeg_quality: int = Field(default=80, ge=1, le=95)

    # Téléchargement
    fetch_timeout: float = Field(default=30.0, gt=0)
    max_redirects: int = Field(default=10, ge=0)
    user_agent: str = Field(default="Filmotheque/0.1")

    # Cache mémoire (None = illimité)
    resize_cache_max_entries: Optional[int] = Field(default=None, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/filmotheque.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("posters_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalise le niveau de log en majuscules."""
        return v.upper()
