"""
Objets valeur pour les textes localisés.

Un titre ou une description est soit un texte brut (format historique),
soit un dictionnaire langue -> texte. Les deux formes sont représentées par
une variante étiquetée, et la résolution se fait en un seul endroit :
`resolve()`.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from letzview.utils.constants import DEFAULT_LANGUAGE


@dataclass(frozen=True)
class PlainText:
    """
    Texte sans langue (données historiques).

    Attributs :
        value : Le texte, identique quelle que soit la langue demandée
    """

    value: str = ""


@dataclass(frozen=True)
class LocalizedMap:
    """
    Texte traduit par langue.

    Attributs :
        values : Dictionnaire code langue -> texte (ordre d'insertion conservé)
    """

    values: Mapping[str, str] = field(default_factory=dict)

    def with_translation(self, lang: str, text: str) -> "LocalizedMap":
        """Retourne une copie avec la traduction `lang` ajoutée ou remplacée."""
        return LocalizedMap({**self.values, lang: text})


LocalizedText = Union[PlainText, LocalizedMap]


def resolve(
    value: Optional[LocalizedText],
    lang: str,
    fallback_chain: Sequence[str] = (DEFAULT_LANGUAGE,),
) -> str:
    """
    Résout un texte localisé pour une langue.

    Ordre : langue demandée, puis chaque langue de repli, puis la première
    entrée non vide, puis "". Une entrée vide compte comme absente.

    Args :
        value : Texte à résoudre (None accepté)
        lang : Code langue demandé (ex: "fr")
        fallback_chain : Langues essayées ensuite, dans l'ordre

    Retourne :
        Le texte résolu, jamais None
    """
    if value is None:
        return ""
    if isinstance(value, PlainText):
        return value.value or ""
    for candidate in (lang, *fallback_chain):
        text = value.values.get(candidate)
        if text:
            return text
    for text in value.values.values():
        if text:
            return text
    return ""


def localized_from_raw(raw: Any) -> LocalizedText:
    """
    Convertit une valeur stockée (str, dict ou None) en LocalizedText.

    Les entrées non textuelles d'un dictionnaire sont ignorées.
    """
    if raw is None:
        return PlainText("")
    if isinstance(raw, (PlainText, LocalizedMap)):
        return raw
    if isinstance(raw, Mapping):
        return LocalizedMap(
            {str(lang): text for lang, text in raw.items() if isinstance(text, str)}
        )
    return PlainText(str(raw))


def localized_to_raw(value: LocalizedText) -> str | dict[str, str]:
    """Convertit un LocalizedText vers sa forme stockée (str ou dict)."""
    if isinstance(value, PlainText):
        return value.value
    return dict(value.values)


def is_blank(value: Optional[LocalizedText]) -> bool:
    """Vrai si aucune langue ne porte de texte non vide."""
    if value is None:
        return True
    if isinstance(value, PlainText):
        return not value.value.strip()
    return not any(text.strip() for text in value.values.values())


def languages_of(value: LocalizedText) -> tuple[str, ...]:
    """Langues renseignées (non vides) d'un texte localisé."""
    if isinstance(value, PlainText):
        return ()
    return tuple(lang for lang, text in value.values.items() if text.strip())
