"""
Pré-remplissage des traductions côté administration.

Complète les langues manquantes d'un texte localisé à partir d'une langue
source. Une traduction qui échoue est journalisée puis ignorée : elle ne
bloque jamais l'enregistrement du texte d'origine.
"""

from typing import Iterable

import httpx
from loguru import logger

from letzview.core.exceptions import TranslationError
from letzview.core.ports.translator import ITranslator
from letzview.core.value_objects.localized_text import (
    LocalizedMap,
    LocalizedText,
    PlainText,
    languages_of,
)
from letzview.utils.constants import DEFAULT_LANGUAGE


async def prefill_translations(
    value: LocalizedText,
    translator: ITranslator,
    source_lang: str = DEFAULT_LANGUAGE,
    target_langs: Iterable[str] = (),
) -> LocalizedText:
    """
    Traduit le texte source vers chaque langue cible encore vide.

    Args:
        value: Texte à compléter (un texte brut devient la langue source)
        translator: Service de traduction
        source_lang: Langue du texte de référence
        target_langs: Langues à remplir ; les langues déjà renseignées sont gardées

    Returns:
        Le texte complété, ou `value` inchangé si la source est vide
    """
    if isinstance(value, PlainText):
        source_text = value.value.strip()
        result = LocalizedMap({source_lang: source_text})
    else:
        source_text = (value.values.get(source_lang) or "").strip()
        result = value
    if not source_text:
        return value

    filled = set(languages_of(result))
    for lang in target_langs:
        if lang == source_lang or lang in filled:
            continue
        try:
            translated = await translator.translate(source_text, lang, source_lang)
        except (TranslationError, httpx.HTTPError) as exc:
            logger.warning("Traduction ignorée", target=lang, error=str(exc))
            continue
        if translated.strip():
            result = result.with_translation(lang, translated.strip())
            filled.add(lang)

    return result
