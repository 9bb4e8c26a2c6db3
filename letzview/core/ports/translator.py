"""
Interface port pour la traduction automatique.

Utilisée uniquement pour pré-remplir les langues alternatives côté admin.
"""

from abc import ABC, abstractmethod


class ITranslator(ABC):
    """Traduit un texte d'une langue source vers une langue cible."""

    @abstractmethod
    async def translate(self, text: str, target: str, source: str = "en") -> str:
        """
        Traduit `text`.

        Lève TranslationError en cas d'échec.
        """
        ...
