"""
Objets valeur du pipeline d'affiches.

Objets valeur immutables decrivant les variantes stockees, les politiques de
redimensionnement et les options/resultats des operations d'ingestion.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

# Cle d'affiche : hash hexadecimal du contenu + extension fixe (ex: "3f2a...e1.jpg")
AssetKey = str

# Dimensions par defaut des vignettes creees a l'ingestion
DEFAULT_THUMBNAIL_WIDTH = 200
DEFAULT_THUMBNAIL_HEIGHT = 300


class Variant(Enum):
    """Variante stockee d'une affiche.

    Valeurs:
        ORIGINAL: Image telle qu'ingeree, sans modification
        THUMBNAIL: Vignette creee a l'ingestion
    """

    ORIGINAL = "original"
    THUMBNAIL = "thumbnail"


class FitPolicy(Enum):
    """Strategie de conciliation du ratio source avec la boite cible.

    Valeurs:
        CONTAIN: Conserve le ratio, reduit pour tenir dans la boite, sans agrandir
        FILL: Etire vers les dimensions exactes de la boite
    """

    CONTAIN = "contain"
    FILL = "fill"

    @classmethod
    def parse(cls, value: Union["FitPolicy", str, bool, None]) -> "FitPolicy":
        """
        Convertit une valeur externe en FitPolicy.

        Accepte l'ancien drapeau booleen `fit` (True -> CONTAIN, False -> FILL),
        un nom de politique ("contain", "fill") ou None (CONTAIN).

        Raises:
            ValueError: Si la valeur n'est pas une politique connue
        """
        if value is None:
            return cls.CONTAIN
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.CONTAIN if value else cls.FILL
        return cls(str(value).lower())


@dataclass(frozen=True)
class ResizeOptions:
    """
    Parametres d'un redimensionnement.

    Attributs:
        width: Largeur de la boite cible en pixels (> 0)
        height: Hauteur de la boite cible en pixels (> 0)
        fit: Politique de redimensionnement
    """

    width: int
    height: int
    fit: FitPolicy = FitPolicy.CONTAIN

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Dimensions invalides: {self.width}x{self.height}"
            )


@dataclass(frozen=True)
class IngestOptions:
    """
    Options d'ingestion d'une affiche (telechargement ou fichier local).

    Attributs:
        create_thumbnail: Cree la vignette apres stockage de l'original
        width: Largeur de la vignette
        height: Hauteur de la vignette
    """

    create_thumbnail: bool = True
    width: int = DEFAULT_THUMBNAIL_WIDTH
    height: int = DEFAULT_THUMBNAIL_HEIGHT

    @property
    def thumbnail_options(self) -> ResizeOptions:
        """Options de redimensionnement de la vignette (toujours CONTAIN)."""
        return ResizeOptions(self.width, self.height, FitPolicy.CONTAIN)


@dataclass(frozen=True)
class IngestResult:
    """
    Resume d'une ingestion, sans les octets de l'image.

    Attributs:
        key: Cle de l'affiche (nom de fichier dans le stockage)
        has_original: L'original est present dans le stockage
        has_thumbnail: La vignette est presente dans le stockage
    """

    key: AssetKey
    has_original: bool
    has_thumbnail: bool
