"""Commandes CLI poster : telechargement, stockage, lecture, redimensionnement et nettoyage des affiches."""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer

from filmotheque.adapters.cli.helpers import console, display_ingest_result, write_output
from filmotheque.container import Container
from filmotheque.core.exceptions import PosterError
from filmotheque.core.value_objects import FitPolicy, IngestOptions, ResizeOptions, Variant

poster_app = typer.Typer(help="Gestion des affiches de films")


def _ingest_options(
    container: Container,
    no_thumbnail: bool,
    width: Optional[int],
    height: Optional[int],
) -> IngestOptions:
    """Construit les options d'ingestion (dimensions par defaut depuis la config)."""
    config = container.config()
    return IngestOptions(
        create_thumbnail=not no_thumbnail,
        width=width or config.thumbnail_width,
        height=height or config.thumbnail_height,
    )


def _fail(error: PosterError) -> None:
    """Affiche une erreur du pipeline et termine avec le code 1."""
    console.print(f"[red]Erreur: {error}[/red]")
    raise typer.Exit(1)


@poster_app.command()
def download(
    url: Annotated[str, typer.Argument(help="URL de l'affiche")],
    no_thumbnail: Annotated[
        bool, typer.Option("--no-thumbnail", help="Ne pas creer de vignette")
    ] = False,
    width: Annotated[Optional[int], typer.Option("--width", "-W", min=1, help="Largeur de la vignette")] = None,
    height: Annotated[Optional[int], typer.Option("--height", "-H", min=1, help="Hauteur de la vignette")] = None,
) -> None:
    """Telecharge et stocke une affiche depuis une URL."""
    asyncio.run(_download_async(url, no_thumbnail, width, height))


async def _download_async(
    url: str, no_thumbnail: bool, width: Optional[int], height: Optional[int]
) -> None:
    """Implementation async de la commande download."""
    container = Container()
    service = container.poster_service()
    try:
        result = await service.ingest_from_url(
            url, _ingest_options(container, no_thumbnail, width, height)
        )
    except PosterError as e:
        _fail(e)
    finally:
        await service.close()
    display_ingest_result(result)


@poster_app.command()
def store(
    path: Annotated[Path, typer.Argument(help="Fichier image local")],
    no_thumbnail: Annotated[
        bool, typer.Option("--no-thumbnail", help="Ne pas creer de vignette")
    ] = False,
    width: Annotated[Optional[int], typer.Option("--width", "-W", min=1, help="Largeur de la vignette")] = None,
    height: Annotated[Optional[int], typer.Option("--height", "-H", min=1, help="Hauteur de la vignette")] = None,
) -> None:
    """Stocke une affiche depuis un fichier local."""
    asyncio.run(_store_async(path, no_thumbnail, width, height))


async def _store_async(
    path: Path, no_thumbnail: bool, width: Optional[int], height: Optional[int]
) -> None:
    """Implementation async de la commande store."""
    container = Container()
    service = container.poster_service()
    try:
        result = await service.ingest_from_file(
            path, _ingest_options(container, no_thumbnail, width, height)
        )
    except PosterError as e:
        _fail(e)
    finally:
        await service.close()
    display_ingest_result(result)


@poster_app.command()
def get(
    key: Annotated[str, typer.Argument(help="Nom de fichier de l'affiche")],
    output: Annotated[Path, typer.Option("--output", "-o", help="Fichier de sortie")],
    size: Annotated[
        Variant, typer.Option("--size", "-s", help="Variante a lire")
    ] = Variant.ORIGINAL,
) -> None:
    """Ecrit une affiche stockee (original ou vignette) dans un fichier."""
    asyncio.run(_get_async(key, size, output))


async def _get_async(key: str, size: Variant, output: Path) -> None:
    """Implementation async de la commande get."""
    service = Container().poster_service()
    try:
        data = await service.get_by_key(key, size)
    except PosterError as e:
        _fail(e)
    write_output(output, data)


@poster_app.command()
def resize(
    key: Annotated[str, typer.Argument(help="Nom de fichier de l'affiche")],
    width: Annotated[int, typer.Option("--width", "-W", min=1, help="Largeur cible")],
    height: Annotated[int, typer.Option("--height", "-H", min=1, help="Hauteur cible")],
    output: Annotated[Path, typer.Option("--output", "-o", help="Fichier de sortie")],
    fit: Annotated[
        FitPolicy, typer.Option("--fit", help="Politique de redimensionnement")
    ] = FitPolicy.CONTAIN,
) -> None:
    """Redimensionne une affiche et ecrit le resultat dans un fichier."""
    asyncio.run(_resize_async(key, ResizeOptions(width, height, fit), output))


async def _resize_async(key: str, options: ResizeOptions, output: Path) -> None:
    """Implementation async de la commande resize."""
    service = Container().poster_service()
    try:
        data = await service.resize_by_key(key, options)
    except PosterError as e:
        _fail(e)
    write_output(output, data)


@poster_app.command()
def delete(
    key: Annotated[str, typer.Argument(help="Nom de fichier de l'affiche")],
) -> None:
    """Supprime une affiche (original et vignette)."""
    asyncio.run(_delete_async(key))


async def _delete_async(key: str) -> None:
    """Implementation async de la commande delete."""
    service = Container().poster_service()
    try:
        deleted = await service.delete_poster(key)
    except PosterError as e:
        _fail(e)
    if deleted:
        console.print(f"[green]Affiche supprimee: {key}[/green]")


@poster_app.command(name="clear-cache")
def clear_cache() -> None:
    """Vide le cache des affiches redimensionnees."""
    asyncio.run(_clear_cache_async())


async def _clear_cache_async() -> None:
    """Implementation async de la commande clear-cache."""
    service = Container().poster_service()
    try:
        await service.clear_cache()
    except PosterError as e:
        _fail(e)
    console.print("[green]Cache des affiches vide[/green]")
