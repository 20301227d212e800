"""
Point d'entrée CLI de Filmotheque.

Configure le logging et fournit les commandes CLI de gestion des affiches.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import poster_app
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="filmotheque",
    help="Gestion des affiches de la filmothèque",
)
container = Container()

# Monter poster_app comme sous-commande
app.add_typer(poster_app, name="poster")


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration Filmotheque")
    typer.echo(f"Affiches : {config.posters_dir}")
    typer.echo(f"Vignettes : {config.thumbnail_width}x{config.thumbnail_height}")
    typer.echo(f"Qualité JPEG : {config.jpeg_quality}")
    typer.echo(f"Timeout téléchargement : {config.fetch_timeout}s")
    typer.echo(f"Redirections max : {config.max_redirects}")
    cache_limit = config.resize_cache_max_entries or "illimité"
    typer.echo(f"Cache mémoire : {cache_limit}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Filmotheque v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web des affiches."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("filmotheque.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    configure_logging(container.config())

    logger.info("Démarrage de Filmotheque", version=__version__)

    app()


if __name__ == "__main__":
    main()
