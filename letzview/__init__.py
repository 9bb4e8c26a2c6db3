"""
LetzView - Catalogue de streaming vidéo multilingue.

Ce package fournit le catalogue Séries → Saisons → Épisodes, sa persistance
(magasin de documents ou blob clé-valeur) et la synchronisation de lecture
vidéo + piste audio alternative.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (catalogue, lecteur, navigation)
- adapters/ : Clients HTTP, backends de catalogue, éléments média, CLI
- infrastructure/ : Persistance SQLModel et stockage clé-valeur
- web/ : Application FastAPI (proxies et lecture publique du catalogue)
"""

__version__ = "0.1.0"
