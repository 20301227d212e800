"""
Couche infrastructure (adapters).

Implémentations concrètes des ports : téléchargement, transformation,
stockage et cache des affiches, ainsi que les interfaces CLI.
"""
