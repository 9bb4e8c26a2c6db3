"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), objets valeur
et exceptions du catalogue.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entités métier (Series, Season, Episode, pistes audio/sous-titres)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (LocalizedText)
"""
