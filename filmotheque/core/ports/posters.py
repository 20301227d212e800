"""
Interfaces ports du pipeline d'affiches.

Interfaces abstraites (ports) définissant les contrats du téléchargement,
de la transformation, du stockage et du cache des affiches. Le service
d'affiches ne dépend que de ces interfaces, ce qui permet de substituer
chaque adaptateur dans les tests (ex: un faux fetcher sans réseau).
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from filmotheque.core.value_objects import AssetKey, ResizeOptions, Variant


class IImageFetcher(ABC):
    """
    Interface de récupération des octets d'une image distante.
    """

    @abstractmethod
    async def fetch(self, url: str) -> bytes:
        """
        Télécharge une image en suivant les redirections.

        Args :
            url : URL http ou https de l'image

        Retourne :
            Les octets bruts de la réponse finale

        Raises :
            NetworkError : Erreur de transport, statut non-2xx ou trop de redirections
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Libère les ressources réseau."""
        ...


class IImageTransformer(ABC):
    """
    Interface de production d'images dérivées (vignettes, redimensionnements).
    """

    @abstractmethod
    async def transform(self, data: bytes, options: ResizeOptions) -> bytes:
        """
        Redimensionne et ré-encode une image au format canonique.

        Args :
            data : Octets de l'image source
            options : Dimensions cibles et politique de redimensionnement

        Retourne :
            Octets de l'image dérivée

        Raises :
            TransformError : Si les octets ne sont pas une image décodable
        """
        ...


class IAssetStore(ABC):
    """
    Interface du stockage durable des affiches, adressé par contenu.

    Le stockage est la seule source de vérité sur l'existence d'une affiche.
    """

    @abstractmethod
    def path_for(self, key: AssetKey, variant: Variant) -> Path:
        """Retourne l'emplacement sur disque d'une variante."""
        ...

    @abstractmethod
    async def write(self, key: AssetKey, variant: Variant, data: bytes) -> None:
        """Écrit une variante (idempotent pour une même clé)."""
        ...

    @abstractmethod
    async def exists(self, key: AssetKey, variant: Variant) -> bool:
        """Vérifie si une variante est stockée."""
        ...

    @abstractmethod
    async def read(self, key: AssetKey, variant: Variant) -> bytes:
        """
        Lit une variante.

        Raises :
            NotFoundError : Si la variante est absente
        """
        ...

    @abstractmethod
    async def delete(self, key: AssetKey) -> bool:
        """
        Supprime l'original et la vignette d'une clé.

        Une variante déjà absente n'est pas une erreur.

        Raises :
            AssetIOError : Si la suppression échoue réellement
        """
        ...

    @abstractmethod
    async def write_derived(self, name: str, data: bytes) -> Path:
        """Écrit une image redimensionnée dans la zone de cache."""
        ...

    @abstractmethod
    async def derived_exists(self, name: str) -> bool:
        """Vérifie si une image redimensionnée existe dans la zone de cache."""
        ...

    @abstractmethod
    async def read_derived(self, name: str) -> bytes:
        """
        Lit une image redimensionnée.

        Raises :
            NotFoundError : Si le fichier est absent
        """
        ...

    @abstractmethod
    async def clear_derived(self) -> int:
        """
        Supprime tous les fichiers de la zone de cache.

        Retourne :
            Le nombre de fichiers supprimés
        """
        ...


class IResizeCache(ABC):
    """
    Interface du cache mémoire des résultats d'ingestion et de redimensionnement.

    Chaque entrée est rattachée à la clé d'affiche qu'elle référence afin
    de pouvoir être purgée lors de la suppression de l'affiche.
    """

    @abstractmethod
    def get(self, cache_key: str) -> Optional[Any]:
        """Retourne le résultat mémorisé, ou None."""
        ...

    @abstractmethod
    def put(self, cache_key: str, asset_key: AssetKey, result: Any) -> None:
        """Mémorise un résultat."""
        ...

    @abstractmethod
    def discard(self, cache_key: str) -> None:
        """Retire une entrée si elle existe."""
        ...

    @abstractmethod
    def purge(self, asset_key: AssetKey) -> int:
        """Supprime les entrées référençant une affiche. Retourne leur nombre."""
        ...

    @abstractmethod
    def invalidate_all(self) -> None:
        """Vide entièrement le cache."""
        ...
