"""
Couche application (services).

- PosterService : orchestration du pipeline d'affiches
"""

from filmotheque.services.poster_service import PosterService

__all__ = ["PosterService"]
