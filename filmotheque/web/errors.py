"""
Traduction des erreurs du pipeline d'affiches en réponses HTTP.

NotFoundError -> 404, NetworkError -> 502, TransformError -> 422,
AssetIOError -> 500.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.exceptions import (
    AssetIOError,
    NetworkError,
    NotFoundError,
    PosterError,
    TransformError,
)

_STATUS_BY_ERROR: dict[type[PosterError], int] = {
    NotFoundError: 404,
    NetworkError: 502,
    TransformError: 422,
    AssetIOError: 500,
}


def _error_body(error: PosterError) -> dict:
    """Corps JSON de l'erreur, avec ses champs structurés."""
    body = {"error": type(error).__name__, "detail": str(error)}
    if isinstance(error, NetworkError):
        body["url"] = error.url
        body["status_code"] = error.status_code
    elif isinstance(error, NotFoundError):
        body["key"] = error.key
    elif isinstance(error, TransformError):
        body["key"] = error.key
    elif isinstance(error, AssetIOError):
        body["operation"] = error.operation
    return body


async def poster_error_handler(request: Request, error: PosterError) -> JSONResponse:
    """Handler FastAPI pour toutes les PosterError."""
    status = _STATUS_BY_ERROR.get(type(error), 500)
    return JSONResponse(status_code=status, content=_error_body(error))


def register_error_handlers(app: FastAPI) -> None:
    """Enregistre les handlers d'erreurs du pipeline sur l'application."""
    app.add_exception_handler(PosterError, poster_error_handler)
