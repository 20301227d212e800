"""
Dépendances partagées de l'application web.

Fournit le service d'affiches issu du Container DI monté sur l'application.
"""

from fastapi import Request

from ..services.poster_service import PosterService


def get_poster_service(request: Request) -> PosterService:
    """Retourne le PosterService singleton du container de l'application."""
    return request.app.state.container.poster_service()
