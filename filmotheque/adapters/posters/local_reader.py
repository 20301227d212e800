"""Lecture des affiches depuis le systeme de fichiers local."""

import asyncio
from pathlib import Path

from loguru import logger

from filmotheque.core.exceptions import AssetIOError, NotFoundError


async def read_local_file(path: Path) -> bytes:
    """
    Lit les octets d'une image locale sans bloquer la boucle d'evenements.

    Raises:
        NotFoundError: Si le chemin n'existe pas ou n'est pas un fichier
        AssetIOError: Pour toute autre erreur de lecture
    """
    if not path.is_file():
        logger.warning(f"Fichier introuvable: {path}")
        raise NotFoundError(f"Fichier introuvable: {path}", path=path)
    try:
        return await asyncio.to_thread(path.read_bytes)
    except FileNotFoundError as e:
        raise NotFoundError(f"Fichier introuvable: {path}", path=path) from e
    except OSError as e:
        logger.error(f"Lecture impossible de {path}: {e}")
        raise AssetIOError(path, "read", f"Lecture impossible: {path} ({e})") from e
