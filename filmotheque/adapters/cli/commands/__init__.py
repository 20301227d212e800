"""Sous-package CLI commands - re-exporte les commandes publiques."""

from filmotheque.adapters.cli.commands.poster_commands import (
    clear_cache,
    delete,
    download,
    get,
    poster_app,
    resize,
    store,
)

__all__ = [
    "poster_app",
    "download",
    "store",
    "get",
    "resize",
    "delete",
    "clear_cache",
]
