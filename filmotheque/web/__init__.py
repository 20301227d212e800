"""Interface web (FastAPI) du pipeline d'affiches."""
