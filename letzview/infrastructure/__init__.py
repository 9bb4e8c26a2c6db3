"""
Couche infrastructure de LetzView.

Ce module contient les implementations techniques de stockage :

- persistence/ : Magasin de documents SQLite (SQLModel) et blob cle-valeur (diskcache)

Architecture hexagonale : ces implementations satisfont les ports du domaine,
permettant de changer de stockage (ex: Firestore au lieu de SQLite)
sans modifier la logique metier.
"""
