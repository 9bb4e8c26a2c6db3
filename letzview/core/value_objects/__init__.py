"""
Objets valeur immutables representant des concepts du domaine sans identite.

Les objets valeur sont definis par leurs attributs plutot que par une identite.
Ils sont immutables et peuvent etre librement partages et compares par valeur.

Exports :
- PlainText / LocalizedMap : les deux formes d'un texte localise
- LocalizedText : union des deux formes
- resolve : resolution d'un texte pour une langue avec repli
"""

from letzview.core.value_objects.localized_text import (
    LocalizedMap,
    LocalizedText,
    PlainText,
    is_blank,
    languages_of,
    localized_from_raw,
    localized_to_raw,
    resolve,
)

__all__ = [
    "LocalizedMap",
    "LocalizedText",
    "PlainText",
    "is_blank",
    "languages_of",
    "localized_from_raw",
    "localized_to_raw",
    "resolve",
]
