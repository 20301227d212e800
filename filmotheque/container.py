"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
"""

from dependency_injector import containers, providers

from .adapters.posters.asset_store import FileSystemAssetStore
from .adapters.posters.fetcher import HttpxImageFetcher
from .adapters.posters.resize_cache import InMemoryResizeCache
from .adapters.posters.transformer import PillowImageTransformer
from .config import Settings
from .services.poster_service import PosterService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        service = container.poster_service()
        result = await service.ingest_from_url(url)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Adapters - Singletons : le client HTTP et le cache memoire sont partages
    image_fetcher = providers.Singleton(
        HttpxImageFetcher,
        timeout=config.provided.fetch_timeout,
        max_redirects=config.provided.max_redirects,
        user_agent=config.provided.user_agent,
    )
    image_transformer = providers.Singleton(
        PillowImageTransformer,
        quality=config.provided.jpeg_quality,
    )
    asset_store = providers.Singleton(
        FileSystemAssetStore,
        root_dir=config.provided.posters_dir,
    )
    resize_cache = providers.Singleton(
        InMemoryResizeCache,
        max_entries=config.provided.resize_cache_max_entries,
    )

    # Service d'affiches - Singleton car il porte le cache et les ingestions en cours
    poster_service = providers.Singleton(
        PosterService,
        fetcher=image_fetcher,
        transformer=image_transformer,
        store=asset_store,
        cache=resize_cache,
    )
