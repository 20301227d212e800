"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports du pipeline d'affiches :
- IImageFetcher : Téléchargement des images distantes
- IImageTransformer : Production des vignettes et redimensionnements
- IAssetStore : Stockage durable adressé par contenu
- IResizeCache : Cache mémoire des résultats
"""

from filmotheque.core.ports.posters import (
    IAssetStore,
    IImageFetcher,
    IImageTransformer,
    IResizeCache,
)

__all__ = [
    "IAssetStore",
    "IImageFetcher",
    "IImageTransformer",
    "IResizeCache",
]
