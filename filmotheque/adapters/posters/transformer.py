"""
Transformation des affiches (vignettes et redimensionnements) via Pillow.

Toutes les images derivees sont re-encodees en JPEG a qualite fixe, quel
que soit le format source, pour que le stockage reste uniforme. Le travail
Pillow (CPU) est execute dans un thread pour ne pas bloquer la boucle
d'evenements.
"""

import asyncio
from io import BytesIO

from loguru import logger
from PIL import Image

from filmotheque.core.exceptions import TransformError
from filmotheque.core.ports.posters import IImageTransformer
from filmotheque.core.value_objects import FitPolicy, ResizeOptions

# Qualite JPEG par defaut des images derivees
DEFAULT_JPEG_QUALITY = 80

# Fond utilise pour aplatir la transparence (JPEG n'a pas de canal alpha)
_BACKGROUND_COLOR = (255, 255, 255)


def _to_rgb(img: Image.Image) -> Image.Image:
    """Convertit en RGB en aplatissant la transparence sur un fond blanc."""
    if img.mode == "P":
        img = img.convert("RGBA")
    if img.mode in ("RGBA", "LA"):
        background = Image.new("RGB", img.size, _BACKGROUND_COLOR)
        background.paste(img, mask=img.split()[-1])
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def _target_size(source: tuple[int, int], options: ResizeOptions) -> tuple[int, int]:
    """
    Calcule les dimensions cibles sans jamais agrandir l'image.

    CONTAIN conserve le ratio et tient dans la boite ; FILL prend la boite
    exacte, bornee aux dimensions source.
    """
    src_w, src_h = source
    if options.fit is FitPolicy.FILL:
        return min(options.width, src_w), min(options.height, src_h)

    ratio = min(options.width / src_w, options.height / src_h, 1.0)
    return max(1, round(src_w * ratio)), max(1, round(src_h * ratio))


class PillowImageTransformer(IImageTransformer):
    """
    Implementation de IImageTransformer avec Pillow.

    Example:
        transformer = PillowImageTransformer(quality=80)
        thumb = await transformer.transform(data, ResizeOptions(200, 300))
    """

    def __init__(self, quality: int = DEFAULT_JPEG_QUALITY) -> None:
        """
        Args:
            quality: Qualite JPEG des images produites (1-95)
        """
        self._quality = quality

    def transform_sync(self, data: bytes, options: ResizeOptions) -> bytes:
        """
        Version synchrone de transform().

        Raises:
            TransformError: Si les octets ne sont pas une image decodable
        """
        try:
            with Image.open(BytesIO(data)) as img:
                img.load()
                size = _target_size(img.size, options)
                resized = _to_rgb(img)
                if resized.size != size:
                    resized = resized.resize(size, Image.Resampling.LANCZOS)
                output = BytesIO()
                resized.save(output, "JPEG", quality=self._quality, optimize=True)
                return output.getvalue()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            raise TransformError(f"Image non decodable: {e}") from e

    async def transform(self, data: bytes, options: ResizeOptions) -> bytes:
        """Redimensionne et re-encode une image en JPEG (hors boucle d'evenements)."""
        result = await asyncio.to_thread(self.transform_sync, data, options)
        logger.debug(
            f"Image transformee en {options.width}x{options.height} "
            f"({options.fit.value}): {len(data)} -> {len(result)} octets"
        )
        return result
