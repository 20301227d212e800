"""
Utilitaires partages pour les commandes CLI de Filmotheque.

Ce module fournit :
- console : instance Rich Console partagee
- display_ingest_result : affichage du resultat d'une ingestion
- write_output : ecriture des octets d'une image vers un fichier
"""

from pathlib import Path

from rich.console import Console
from rich.table import Table

from filmotheque.core.value_objects import IngestResult

console = Console()


def display_ingest_result(result: IngestResult) -> None:
    """Affiche la cle et la presence des variantes d'une affiche ingeree."""
    table = Table(title="Affiche", show_header=False)
    table.add_column("Champ", style="cyan")
    table.add_column("Valeur")
    table.add_row("Fichier", result.key)
    table.add_row("Original", "[green]oui[/green]" if result.has_original else "[red]non[/red]")
    table.add_row("Vignette", "[green]oui[/green]" if result.has_thumbnail else "[red]non[/red]")
    console.print(table)


def write_output(output: Path, data: bytes) -> None:
    """Ecrit une image vers le fichier demande (repertoires parents crees)."""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    console.print(f"[green]{len(data)} octets ecrits dans {output}[/green]")
