"""
Tests unitaires pour les commandes CLI poster.

Tests couvrant:
- download / store : options de vignette, affichage du resultat
- get / resize : ecriture du fichier de sortie
- delete / clear-cache
- Erreurs du pipeline : message et code de sortie 1
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from filmotheque.adapters.cli.commands.poster_commands import poster_app
from filmotheque.core.exceptions import NetworkError, NotFoundError
from filmotheque.core.value_objects import (
    FitPolicy,
    IngestOptions,
    IngestResult,
    ResizeOptions,
    Variant,
)

_POSTER = "filmotheque.adapters.cli.commands.poster_commands"

runner = CliRunner()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_service() -> MagicMock:
    service = MagicMock()
    service.ingest_from_url = AsyncMock(
        return_value=IngestResult(key="abc.jpg", has_original=True, has_thumbnail=True)
    )
    service.ingest_from_file = AsyncMock(
        return_value=IngestResult(key="def.jpg", has_original=True, has_thumbnail=False)
    )
    service.get_by_key = AsyncMock(return_value=b"jpeg-bytes")
    service.resize_by_key = AsyncMock(return_value=b"resized-bytes")
    service.delete_poster = AsyncMock(return_value=True)
    service.clear_cache = AsyncMock(return_value=True)
    service.close = AsyncMock()
    return service


@pytest.fixture
def mock_container(mock_service: MagicMock):
    """Mock le Container instancie par les commandes poster."""
    with patch(f"{_POSTER}.Container") as mock_cls:
        container_instance = MagicMock()
        mock_cls.return_value = container_instance
        container_instance.poster_service.return_value = mock_service
        container_instance.config.return_value = MagicMock(
            thumbnail_width=200,
            thumbnail_height=300,
        )
        yield container_instance


# ============================================================================
# download / store
# ============================================================================


class TestDownload:
    def test_download_with_default_thumbnail(self, mock_container, mock_service):
        result = runner.invoke(poster_app, ["download", "http://x/poster.jpg"])

        assert result.exit_code == 0
        assert "abc.jpg" in result.output
        mock_service.ingest_from_url.assert_awaited_once_with(
            "http://x/poster.jpg", IngestOptions(True, 200, 300)
        )
        mock_service.close.assert_awaited_once()

    def test_download_custom_options(self, mock_container, mock_service):
        result = runner.invoke(
            poster_app,
            ["download", "http://x/poster.jpg", "--no-thumbnail", "-W", "100", "-H", "150"],
        )

        assert result.exit_code == 0
        mock_service.ingest_from_url.assert_awaited_once_with(
            "http://x/poster.jpg", IngestOptions(False, 100, 150)
        )

    def test_download_network_error(self, mock_container, mock_service):
        mock_service.ingest_from_url.side_effect = NetworkError(
            "http://x/poster.jpg", "Statut HTTP 404", status_code=404
        )

        result = runner.invoke(poster_app, ["download", "http://x/poster.jpg"])

        assert result.exit_code == 1
        assert "Statut HTTP 404" in result.output
        mock_service.close.assert_awaited_once()


class TestStore:
    def test_store_file(self, mock_container, mock_service, tmp_path: Path):
        source = tmp_path / "scan.jpg"

        result = runner.invoke(poster_app, ["store", str(source)])

        assert result.exit_code == 0
        assert "def.jpg" in result.output
        mock_service.ingest_from_file.assert_awaited_once_with(
            source, IngestOptions(True, 200, 300)
        )

    def test_store_missing_file(self, mock_container, mock_service, tmp_path: Path):
        mock_service.ingest_from_file.side_effect = NotFoundError(
            "Fichier introuvable", path=tmp_path / "absent.jpg"
        )

        result = runner.invoke(poster_app, ["store", str(tmp_path / "absent.jpg")])

        assert result.exit_code == 1
        assert "Fichier introuvable" in result.output


# ============================================================================
# get / resize
# ============================================================================


class TestGet:
    def test_get_writes_output(self, mock_container, mock_service, tmp_path: Path):
        output = tmp_path / "out" / "poster.jpg"

        result = runner.invoke(
            poster_app, ["get", "abc.jpg", "-o", str(output), "--size", "thumbnail"]
        )

        assert result.exit_code == 0
        assert output.read_bytes() == b"jpeg-bytes"
        mock_service.get_by_key.assert_awaited_once_with("abc.jpg", Variant.THUMBNAIL)

    def test_get_missing_key(self, mock_container, mock_service, tmp_path: Path):
        mock_service.get_by_key.side_effect = NotFoundError("Affiche introuvable", key="x.jpg")
        output = tmp_path / "poster.jpg"

        result = runner.invoke(poster_app, ["get", "x.jpg", "-o", str(output)])

        assert result.exit_code == 1
        assert not output.exists()


class TestResize:
    def test_resize_writes_output(self, mock_container, mock_service, tmp_path: Path):
        output = tmp_path / "small.jpg"

        result = runner.invoke(
            poster_app,
            ["resize", "abc.jpg", "-W", "100", "-H", "150", "-o", str(output), "--fit", "fill"],
        )

        assert result.exit_code == 0
        assert output.read_bytes() == b"resized-bytes"
        mock_service.resize_by_key.assert_awaited_once_with(
            "abc.jpg", ResizeOptions(100, 150, FitPolicy.FILL)
        )

    def test_resize_rejects_zero_width(self, mock_container, mock_service, tmp_path: Path):
        result = runner.invoke(
            poster_app,
            ["resize", "abc.jpg", "-W", "0", "-H", "150", "-o", str(tmp_path / "x.jpg")],
        )

        assert result.exit_code != 0
        mock_service.resize_by_key.assert_not_called()


# ============================================================================
# delete / clear-cache
# ============================================================================


class TestMaintenance:
    def test_delete(self, mock_container, mock_service):
        result = runner.invoke(poster_app, ["delete", "abc.jpg"])

        assert result.exit_code == 0
        assert "Affiche supprimee" in result.output
        mock_service.delete_poster.assert_awaited_once_with("abc.jpg")

    def test_clear_cache(self, mock_container, mock_service):
        result = runner.invoke(poster_app, ["clear-cache"])

        assert result.exit_code == 0
        assert "Cache des affiches vide" in result.output
        mock_service.clear_cache.assert_awaited_once()
