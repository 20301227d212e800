"""
Fixtures pytest partagees pour les tests Filmotheque.

Ce module contient les fixtures communes utilisees dans les tests:
- Images de test (tests/fixtures/images.py)
- Mock de IImageFetcher (pas d'acces reseau)
- Settings de test avec chemins temporaires
- Stockage, cache et PosterService assembles sur un repertoire temporaire
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from filmotheque.adapters.posters.asset_store import FileSystemAssetStore
from filmotheque.adapters.posters.resize_cache import InMemoryResizeCache
from filmotheque.adapters.posters.transformer import PillowImageTransformer
from filmotheque.config import Settings
from filmotheque.core.ports.posters import IImageFetcher
from filmotheque.services.poster_service import PosterService
from tests.fixtures.images import make_image


@pytest.fixture
def sample_jpeg() -> bytes:
    """Affiche JPEG 400x600 (ratio 2:3, comme une affiche de cinema)."""
    return make_image(400, 600)


@pytest.fixture
def other_jpeg() -> bytes:
    """Seconde affiche JPEG, de contenu different."""
    return make_image(300, 450, color=(20, 60, 200))


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler le stockage des affiches
    et le fichier de log de chaque test.
    """
    return Settings(
        posters_dir=tmp_path / "posters",
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def mock_fetcher(sample_jpeg: bytes) -> AsyncMock:
    """
    Mock de IImageFetcher pour les tests.

    Retourne sample_jpeg par defaut. Configurer le mock dans chaque test
    pour des comportements specifiques (side_effect, autre contenu).
    """
    mock = AsyncMock(spec=IImageFetcher)
    mock.fetch.return_value = sample_jpeg
    return mock


@pytest.fixture
def asset_store(tmp_path: Path) -> FileSystemAssetStore:
    """Stockage d'affiches dans un repertoire temporaire."""
    return FileSystemAssetStore(tmp_path / "posters")


@pytest.fixture
def resize_cache() -> InMemoryResizeCache:
    """Cache memoire vide, sans limite."""
    return InMemoryResizeCache()


@pytest.fixture
def transformer() -> PillowImageTransformer:
    """Transformateur Pillow reel (qualite 80)."""
    return PillowImageTransformer(quality=80)


@pytest.fixture
def poster_service(
    mock_fetcher: AsyncMock,
    transformer: PillowImageTransformer,
    asset_store: FileSystemAssetStore,
    resize_cache: InMemoryResizeCache,
) -> PosterService:
    """PosterService avec un fetcher mocke et des adaptateurs reels sur tmp_path."""
    return PosterService(
        fetcher=mock_fetcher,
        transformer=transformer,
        store=asset_store,
        cache=resize_cache,
    )
