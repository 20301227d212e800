"""
Service d'adressage par contenu des affiches.

Calcule la cle d'une affiche a partir de ses octets (cas nominal) ou de son
localisateur source (URL ou chemin, utilise pour indexer une source avant
d'en connaitre le contenu).

Algorithme :
    1. Hash SHA-256 de l'entree
    2. Encodage hexadecimal (64 caracteres)
    3. Ajout de l'extension fixe KEY_EXTENSION

Des octets identiques donnent toujours la meme cle, et la cle est un nom
de fichier sur (pas de separateur, longueur fixe).
"""

import hashlib
import re

from filmotheque.core.value_objects import AssetKey

# Extension ajoutee a toutes les cles (format canonique des images derivees)
KEY_EXTENSION = ".jpg"

# Nom de fichier sur : pas de separateur de chemin, pas de "..", une extension
_SAFE_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+\.[A-Za-z0-9]+$")


def address_from_bytes(data: bytes) -> AssetKey:
    """
    Calcule la cle d'une affiche a partir de son contenu.

    Args :
        data : Octets de l'image

    Retourne :
        Hash SHA-256 hexadecimal suivi de l'extension (ex: "9f86...08.jpg")

    Raises :
        ValueError : Si data est vide
    """
    if not data:
        raise ValueError("Impossible d'adresser un contenu vide")
    return hashlib.sha256(data).hexdigest() + KEY_EXTENSION


def address_from_locator(locator: str) -> AssetKey:
    """
    Calcule une cle a partir d'une URL ou d'un chemin source.

    Args :
        locator : URL ou chemin de la source

    Raises :
        ValueError : Si locator est vide
    """
    if not locator:
        raise ValueError("Impossible d'adresser un localisateur vide")
    return hashlib.sha256(locator.encode("utf-8")).hexdigest() + KEY_EXTENSION


def is_valid_key(key: str) -> bool:
    """Verifie qu'une cle est un nom de fichier sur pour le stockage."""
    return bool(key) and _SAFE_KEY_PATTERN.match(key) is not None
