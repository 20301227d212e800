"""
Adaptateurs du pipeline d'affiches.

- addressing : Cles d'affiches par hash SHA-256 (contenu ou localisateur)
- fetcher : Telechargement httpx avec redirections bornees
- local_reader : Lecture des fichiers locaux
- transformer : Vignettes et redimensionnements Pillow (JPEG)
- asset_store : Stockage sur disque original/, thumbnail/, cache/
- resize_cache : Cache memoire des resultats
- media_type : Detection du type MIME
"""

from filmotheque.adapters.posters.addressing import (
    KEY_EXTENSION,
    address_from_bytes,
    address_from_locator,
    is_valid_key,
)
from filmotheque.adapters.posters.asset_store import FileSystemAssetStore
from filmotheque.adapters.posters.fetcher import HttpxImageFetcher
from filmotheque.adapters.posters.local_reader import read_local_file
from filmotheque.adapters.posters.media_type import guess_media_type
from filmotheque.adapters.posters.resize_cache import InMemoryResizeCache
from filmotheque.adapters.posters.transformer import PillowImageTransformer

__all__ = [
    "KEY_EXTENSION",
    "FileSystemAssetStore",
    "HttpxImageFetcher",
    "InMemoryResizeCache",
    "PillowImageTransformer",
    "address_from_bytes",
    "address_from_locator",
    "guess_media_type",
    "is_valid_key",
    "read_local_file",
]
