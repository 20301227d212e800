"""
Erreurs du pipeline d'affiches.

Hiérarchie fermée : toutes les erreurs du pipeline dérivent de PosterError
et portent leurs informations de contexte (url, code HTTP, clé, chemin)
sous forme d'attributs plutôt que dans le seul message.

- NetworkError : échec de téléchargement (transport, statut, redirections)
- NotFoundError : fichier local absent, affiche stockée absente
- TransformError : octets non décodables comme image
- AssetIOError : échec d'écriture/suppression sur le disque
"""

from pathlib import Path
from typing import Optional


class PosterError(Exception):
    """Erreur de base du pipeline d'affiches."""


class NetworkError(PosterError):
    """
    Levée quand une affiche distante ne peut pas être téléchargée.

    Attributes:
        url: URL demandée (ou dernière URL de la chaîne de redirections)
        status_code: Code HTTP final, ou None pour une erreur de transport
    """

    def __init__(
        self, url: str, message: str, status_code: Optional[int] = None
    ) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(PosterError):
    """
    Levée quand une ressource demandée n'existe pas.

    Attributes:
        key: Clé de l'affiche recherchée (si applicable)
        path: Chemin du fichier recherché (si applicable)
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        path: Optional[Path] = None,
    ) -> None:
        self.key = key
        self.path = path
        super().__init__(message)


class TransformError(PosterError):
    """
    Levée quand les octets fournis ne sont pas une image décodable.

    Attributes:
        key: Clé de l'affiche source (None pour une image pas encore stockée)
    """

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        self.key = key
        super().__init__(message)


class AssetIOError(PosterError):
    """
    Levée quand une opération disque du stockage échoue.

    Attributes:
        path: Fichier ou répertoire concerné
        operation: Opération en échec ("write", "read", "delete", "clear")
    """

    def __init__(self, path: Path, operation: str, message: str) -> None:
        self.path = path
        self.operation = operation
        super().__init__(message)
