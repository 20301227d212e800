"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- AssetKey : Cle d'une affiche (hash du contenu + extension)
- Variant : Variante stockee (original, vignette)
- FitPolicy : Politique de redimensionnement (contain, fill)
- ResizeOptions : Parametres d'un redimensionnement
- IngestOptions : Options d'ingestion d'une affiche
- IngestResult : Resume d'une ingestion
"""

from filmotheque.core.value_objects.poster import (
    DEFAULT_THUMBNAIL_HEIGHT,
    DEFAULT_THUMBNAIL_WIDTH,
    AssetKey,
    FitPolicy,
    IngestOptions,
    IngestResult,
    ResizeOptions,
    Variant,
)

__all__ = [
    "DEFAULT_THUMBNAIL_HEIGHT",
    "DEFAULT_THUMBNAIL_WIDTH",
    "AssetKey",
    "FitPolicy",
    "IngestOptions",
    "IngestResult",
    "ResizeOptions",
    "Variant",
]
