"""
Stockage des affiches sur le systeme de fichiers, adresse par contenu.

Arborescence geree sous le repertoire racine des affiches :
    original/<cle>                 image telle qu'ingeree
    thumbnail/<cle>                vignette creee a l'ingestion
    cache/<stem>_<L>x<H>[_fill].jpg  redimensionnements a la demande

Les ecritures passent par un fichier temporaire puis os.replace : deux
ecritures concurrentes de la meme cle (octets identiques) ne laissent
jamais de fichier partiel. La suppression d'une affiche est en deux phases
(mise de cote des deux variantes, puis effacement) avec retour arriere si
la mise de cote echoue, pour ne jamais supprimer une seule variante.
"""

import asyncio
import os
import uuid
from pathlib import Path

from loguru import logger

from filmotheque.adapters.posters.addressing import is_valid_key
from filmotheque.core.exceptions import AssetIOError, NotFoundError
from filmotheque.core.ports.posters import IAssetStore
from filmotheque.core.value_objects import AssetKey, Variant

ORIGINAL_DIR = "original"
THUMBNAIL_DIR = "thumbnail"
CACHE_DIR = "cache"


class FileSystemAssetStore(IAssetStore):
    """
    Implementation de IAssetStore sur le systeme de fichiers local.

    Les repertoires sont crees a la premiere utilisation. Les operations
    disque sont executees dans un thread (asyncio.to_thread).

    Example:
        store = FileSystemAssetStore(Path("~/.filmotheque/posters").expanduser())
        await store.write(key, Variant.ORIGINAL, data)
        data = await store.read(key, Variant.ORIGINAL)
    """

    def __init__(self, root_dir: Path) -> None:
        """
        Args:
            root_dir: Repertoire racine des affiches (cree si inexistant)
        """
        self._root_dir = Path(root_dir)
        self._variant_dirs = {
            Variant.ORIGINAL: self._root_dir / ORIGINAL_DIR,
            Variant.THUMBNAIL: self._root_dir / THUMBNAIL_DIR,
        }
        self._cache_dir = self._root_dir / CACHE_DIR
        self._directories_ready = False

    @property
    def root_dir(self) -> Path:
        """Repertoire racine des affiches."""
        return self._root_dir

    @property
    def cache_dir(self) -> Path:
        """Repertoire des redimensionnements a la demande."""
        return self._cache_dir

    def _ensure_directories(self) -> None:
        """Cree l'arborescence si necessaire (tolere les repertoires existants)."""
        if self._directories_ready:
            return
        for directory in (self._root_dir, *self._variant_dirs.values(), self._cache_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise AssetIOError(
                    directory, "mkdir", f"Creation impossible: {directory} ({e})"
                ) from e
        self._directories_ready = True

    @staticmethod
    def _check_name(name: str) -> None:
        if not is_valid_key(name):
            raise NotFoundError(f"Nom d'affiche invalide: {name!r}", key=name)

    def path_for(self, key: AssetKey, variant: Variant) -> Path:
        """
        Retourne l'emplacement sur disque d'une variante.

        Raises:
            NotFoundError: Si la cle n'est pas un nom de fichier valide
        """
        self._check_name(key)
        return self._variant_dirs[variant] / key

    def derived_path(self, name: str) -> Path:
        """Retourne l'emplacement d'une image redimensionnee."""
        self._check_name(name)
        return self._cache_dir / name

    # Operations synchrones (executees dans un thread)

    def _atomic_write(self, destination: Path, data: bytes) -> None:
        self._ensure_directories()
        temp = destination.with_name(f".tmp_{uuid.uuid4().hex}_{destination.name}")
        try:
            temp.write_bytes(data)
            os.replace(temp, destination)
        except OSError as e:
            try:
                temp.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.warning(f"Fichier temporaire non supprime: {temp} ({cleanup_error})")
            raise AssetIOError(
                destination, "write", f"Ecriture impossible: {destination} ({e})"
            ) from e

    def _read_file(self, path: Path, key: str) -> bytes:
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise NotFoundError(f"Affiche introuvable: {key}", key=key, path=path) from e
        except OSError as e:
            raise AssetIOError(path, "read", f"Lecture impossible: {path} ({e})") from e

    def _delete_sync(self, key: AssetKey) -> bool:
        self._ensure_directories()
        paths = [self.path_for(key, variant) for variant in Variant]

        # Phase 1 : mise de cote des variantes presentes
        staged: list[tuple[Path, Path]] = []
        for path in paths:
            if not path.exists():
                continue
            trash = path.with_name(f".del_{uuid.uuid4().hex}_{path.name}")
            try:
                os.replace(path, trash)
            except FileNotFoundError:
                continue
            except OSError as e:
                self._rollback(staged)
                raise AssetIOError(path, "delete", f"Suppression impossible: {path} ({e})") from e
            staged.append((path, trash))

        # Phase 2 : effacement definitif
        for _, trash in staged:
            try:
                trash.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Fichier mis de cote non efface: {trash} ({e})")

        logger.debug(f"Affiche {key} supprimee ({len(staged)} fichier(s))")
        return True

    @staticmethod
    def _rollback(staged: list[tuple[Path, Path]]) -> None:
        """Restaure les variantes deja mises de cote."""
        for original, trash in reversed(staged):
            try:
                os.replace(trash, original)
            except OSError as e:
                logger.error(f"Restauration impossible de {original}: {e}")

    def _clear_derived_sync(self) -> int:
        self._ensure_directories()
        try:
            entries = list(self._cache_dir.iterdir())
        except OSError as e:
            raise AssetIOError(
                self._cache_dir, "clear", f"Lecture impossible: {self._cache_dir} ({e})"
            ) from e

        removed = 0
        for entry in entries:
            if entry.is_dir() and not entry.is_symlink():
                continue
            try:
                entry.unlink()
            except FileNotFoundError:
                continue
            except OSError as e:
                raise AssetIOError(entry, "clear", f"Suppression impossible: {entry} ({e})") from e
            removed += 1
        return removed

    # Implementation de IAssetStore

    async def write(self, key: AssetKey, variant: Variant, data: bytes) -> None:
        """Ecrit une variante de maniere atomique (idempotent)."""
        path = self.path_for(key, variant)
        await asyncio.to_thread(self._atomic_write, path, data)
        logger.debug(f"Ecrit {variant.value}/{key} ({len(data)} octets)")

    async def exists(self, key: AssetKey, variant: Variant) -> bool:
        """Verifie si une variante est stockee (False pour une cle invalide)."""
        if not is_valid_key(key):
            return False
        return await asyncio.to_thread(self.path_for(key, variant).is_file)

    async def read(self, key: AssetKey, variant: Variant) -> bytes:
        """Lit une variante, NotFoundError si absente."""
        path = self.path_for(key, variant)
        return await asyncio.to_thread(self._read_file, path, key)

    async def delete(self, key: AssetKey) -> bool:
        """Supprime l'original et la vignette (absence toleree)."""
        return await asyncio.to_thread(self._delete_sync, key)

    async def write_derived(self, name: str, data: bytes) -> Path:
        """Ecrit une image redimensionnee dans cache/ et retourne son chemin."""
        path = self.derived_path(name)
        await asyncio.to_thread(self._atomic_write, path, data)
        return path

    async def derived_exists(self, name: str) -> bool:
        """Verifie si une image redimensionnee est presente dans cache/."""
        if not is_valid_key(name):
            return False
        return await asyncio.to_thread(self.derived_path(name).is_file)

    async def read_derived(self, name: str) -> bytes:
        """Lit une image redimensionnee, NotFoundError si absente."""
        path = self.derived_path(name)
        return await asyncio.to_thread(self._read_file, path, name)

    async def clear_derived(self) -> int:
        """Vide le repertoire cache/ (un repertoire deja vide n'est pas une erreur)."""
        removed = await asyncio.to_thread(self._clear_derived_sync)
        logger.debug(f"{removed} fichier(s) supprime(s) de {self._cache_dir}")
        return removed
