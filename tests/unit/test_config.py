"""
Tests pour la configuration (Settings) et le Container DI.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from filmotheque.adapters.posters.asset_store import FileSystemAssetStore
from filmotheque.config import Settings
from filmotheque.container import Container
from filmotheque.services.poster_service import PosterService


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("FILMOTHEQUE_POSTERS_DIR", raising=False)
        settings = Settings(_env_file=None)

        assert settings.posters_dir == Path("~/.filmotheque/posters").expanduser()
        assert (settings.thumbnail_width, settings.thumbnail_height) == (200, 300)
        assert settings.jpeg_quality == 80
        assert settings.fetch_timeout == 30.0
        assert settings.max_redirects == 10
        assert settings.resize_cache_max_entries is None

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("FILMOTHEQUE_POSTERS_DIR", str(tmp_path / "p"))
        monkeypatch.setenv("FILMOTHEQUE_MAX_REDIRECTS", "3")
        monkeypatch.setenv("FILMOTHEQUE_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.posters_dir == tmp_path / "p"
        assert settings.max_redirects == 3
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("jpeg_quality", 0),
            ("jpeg_quality", 100),
            ("thumbnail_width", 0),
            ("fetch_timeout", 0),
            ("resize_cache_max_entries", 0),
        ],
    )
    def test_invalid_values(self, field: str, value) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})


class TestContainer:
    def test_poster_service_wired_from_settings(self, test_settings: Settings) -> None:
        container = Container()
        container.config.override(test_settings)

        service = container.poster_service()

        assert isinstance(service, PosterService)
        assert service is container.poster_service()
        store = container.asset_store()
        assert isinstance(store, FileSystemAssetStore)
        assert store.root_dir == test_settings.posters_dir
