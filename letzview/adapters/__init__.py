"""
Couche adaptateurs.

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- api/ : Clients HTTP (proxy KV, proxy de traduction, Google Translate)
- storage/ : Backends de catalogue et magasin de documents en mémoire
- media/ : Éléments média pour le lecteur
- cli/ : Interface ligne de commande d'administration (Typer)
- auth : Authentification admin par mot de passe

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""
