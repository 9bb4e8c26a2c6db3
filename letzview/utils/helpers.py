"""
Fonctions utilitaires partagees dans le projet LetzView.

Ce module centralise les fonctions reutilisees a travers le codebase :
- strip_invisible_chars / clean_text : nettoyage des saisies admin
- normalize_accents : suppression des diacritiques pour comparaison
- search_key : cle de comparaison pour la recherche et le tri des titres
"""

import unicodedata

_LIGATURE_MAP = {"œ": "oe", "Œ": "Oe", "æ": "ae", "Æ": "Ae"}


def strip_invisible_chars(text: str) -> str:
    """
    Retire les caractères Unicode invisibles d'une chaîne.

    Supprime les caractères de contrôle et les marques directionnelles
    qui peuvent provenir d'un copier-coller (LRM, RLM, BOM, etc.).
    """
    return "".join(
        char for char in text if unicodedata.category(char) not in ("Cf", "Cc")
    )


def clean_text(text: str) -> str:
    """Nettoie une saisie : retire les caractères invisibles et les espaces superflus."""
    if not text:
        return ""
    return strip_invisible_chars(text).strip()


def normalize_accents(text: str) -> str:
    """Supprime les diacritiques (é -> e, ë -> e)."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def search_key(text: str) -> str:
    """
    Clé normalisée pour la recherche et le tri.

    Applique dans l'ordre : nettoyage invisibles, expansion ligatures,
    normalisation accents, casefold.
    """
    text = clean_text(text)
    for lig, expanded in _LIGATURE_MAP.items():
        text = text.replace(lig, expanded)
    return normalize_accents(text).casefold()
