"""
Couche domaine (core).

Contient les ports (interfaces abstraites), les objets valeur et les erreurs
du pipeline d'affiches. Cette couche n'a AUCUNE dépendance vers
l'infrastructure (adapters, frameworks, réseau).

Sous-packages :
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (Variant, FitPolicy, ResizeOptions)
- exceptions : Hiérarchie fermée des erreurs (NetworkError, NotFoundError...)
"""
