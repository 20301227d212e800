"""
Routes des affiches : téléchargement, stockage, lecture, redimensionnement,
suppression et nettoyage du cache.

Les réponses d'ingestion ne contiennent que le nom de fichier (clé) et la
présence des variantes, jamais de chemin disque ni d'octets.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from ...adapters.posters.media_type import guess_media_type
from ...core.value_objects import (
    DEFAULT_THUMBNAIL_HEIGHT,
    DEFAULT_THUMBNAIL_WIDTH,
    FitPolicy,
    IngestOptions,
    IngestResult,
    ResizeOptions,
    Variant,
)
from ...services.poster_service import PosterService
from ..deps import get_poster_service

router = APIRouter(prefix="/posters", tags=["posters"])


class IngestOptionsBody(BaseModel):
    """Options d'ingestion (accepte aussi createThumbnail)."""

    model_config = ConfigDict(populate_by_name=True)

    create_thumbnail: bool = Field(default=True, alias="createThumbnail")
    width: int = Field(default=DEFAULT_THUMBNAIL_WIDTH, ge=1)
    height: int = Field(default=DEFAULT_THUMBNAIL_HEIGHT, ge=1)

    def to_options(self) -> IngestOptions:
        return IngestOptions(self.create_thumbnail, self.width, self.height)


class DownloadRequest(BaseModel):
    url: str
    options: IngestOptionsBody = Field(default_factory=IngestOptionsBody)


class StoreRequest(BaseModel):
    path: str
    options: IngestOptionsBody = Field(default_factory=IngestOptionsBody)


class PosterInfo(BaseModel):
    """Résumé renvoyé après une ingestion."""

    filename: str
    original: bool
    thumbnail: bool


def _to_info(result: IngestResult) -> PosterInfo:
    return PosterInfo(
        filename=result.key,
        original=result.has_original,
        thumbnail=result.has_thumbnail,
    )


def _image_response(data: bytes) -> Response:
    return Response(content=data, media_type=guess_media_type(data))


@router.post("/download", response_model=PosterInfo)
async def download_poster(
    body: DownloadRequest,
    service: PosterService = Depends(get_poster_service),
) -> PosterInfo:
    """Télécharge et stocke une affiche depuis une URL."""
    result = await service.ingest_from_url(body.url, body.options.to_options())
    return _to_info(result)


@router.post("/store", response_model=PosterInfo)
async def store_poster(
    body: StoreRequest,
    service: PosterService = Depends(get_poster_service),
) -> PosterInfo:
    """Stocke une affiche depuis un fichier local."""
    result = await service.ingest_from_file(body.path, body.options.to_options())
    return _to_info(result)


@router.post("/cache/clear")
async def clear_poster_cache(
    service: PosterService = Depends(get_poster_service),
) -> bool:
    """Vide le cache des affiches redimensionnées."""
    return await service.clear_cache()


@router.get("/{filename}")
async def get_poster(
    filename: str,
    size: Variant = Query(default=Variant.ORIGINAL),
    service: PosterService = Depends(get_poster_service),
) -> Response:
    """Retourne les octets d'une affiche (original ou vignette)."""
    return _image_response(await service.get_by_key(filename, size))


@router.get("/{filename}/resize")
async def resize_poster(
    filename: str,
    width: int = Query(ge=1),
    height: int = Query(ge=1),
    fit: str = Query(default=FitPolicy.CONTAIN.value),
    service: PosterService = Depends(get_poster_service),
) -> Response:
    """Retourne une version redimensionnée d'une affiche."""
    # Ancien drapeau booléen : fit=true (contain) / fit=false (fill)
    legacy = {"true": True, "false": False}
    try:
        policy = FitPolicy.parse(legacy.get(fit.lower(), fit))
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Politique inconnue: {fit}")
    options = ResizeOptions(width, height, policy)
    return _image_response(await service.resize_by_key(filename, options))


@router.delete("/{filename}")
async def delete_poster(
    filename: str,
    service: PosterService = Depends(get_poster_service),
) -> bool:
    """Supprime une affiche (original et vignette)."""
    return await service.delete_poster(filename)
