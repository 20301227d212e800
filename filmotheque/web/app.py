"""
Application FastAPI de Filmotheque.

Initialise l'application web avec le Container DI, monte les routes des
affiches et traduit les erreurs du pipeline en réponses HTTP.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .. import __version__
from ..container import Container
from ..logging_config import configure_logging
from .errors import register_error_handlers
from .routes.posters import router as posters_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise le Container DI au démarrage et ferme le client HTTP à l'arrêt."""
    container = Container()
    configure_logging(container.config())
    app.state.container = container
    yield
    await container.poster_service().close()


app = FastAPI(title="Filmotheque", version=__version__, lifespan=lifespan)

register_error_handlers(app)

# Routes
app.include_router(posters_router)
