"""
Filmotheque - Gestion des affiches d'une filmothèque personnelle.

Ce package télécharge, stocke, redimensionne et met en cache les affiches
des films de la collection, adressées par le hash de leur contenu.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (ports, objets valeur, erreurs)
- services/ : Couche application (orchestration du pipeline d'affiches)
- adapters/ : Couche infrastructure (réseau, Pillow, disque, cache, CLI)
- web/ : Routes HTTP (FastAPI)
"""

__version__ = "0.1.0"
