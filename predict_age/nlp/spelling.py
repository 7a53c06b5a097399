"""Module for rewriting British spellings into American ones."""

import json
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import override

from predict_age.configuration import config


class SpellingTranslator(ABC):
    """An interface of a spelling translator."""

    @abstractmethod
    def translate(self, text: str) -> str:
        """
        Rewrite a lowercase text to the target spelling.

        Args:
            text (str): A lowercase text.

        Returns:
            str: The text with every known word rewritten.
        """


class DictionarySpellingTranslator(SpellingTranslator):
    """Translator from British to American spelling based on a word list."""

    def __init__(self, mapping_file: Path = config.spelling_file) -> None:
        """Load a JSON mapping of British words to American words."""
        mapping: dict[str, str] = json.loads(mapping_file.read_text(encoding="utf-8"))
        self._mapping = {uk.lower(): us.lower() for uk, us in mapping.items()}
        # Longest first, so that "colours" is not matched as "colour" + "s".
        alternatives = sorted(self._mapping, key=len, reverse=True)
        self._pattern = re.compile(
            r"\b(" + "|".join(re.escape(word) for word in alternatives) + r")\b"
        )

    @override
    def translate(self, text: str) -> str:
        if not self._mapping:
            return text
        return self._pattern.sub(lambda match: self._mapping[match.group(1)], text)
