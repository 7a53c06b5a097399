"""Module with normalisation of input texts."""

from typing import Any

from predict_age.nlp.spelling import SpellingTranslator


def normalise_text(
    value: Any, translator: SpellingTranslator | None = None
) -> str | None:
    """
    Lowercase and trim a text, optionally rewriting its spelling.

    Normalisation is idempotent: normalising its own output changes nothing.

    Args:
        value (Any): A text or any value convertible to a text.
        translator (SpellingTranslator | None, optional): Translator applied
            to the lowercase text, e.g. from British to American spelling.
            Defaults to None.

    Returns:
        str | None: The normalised text, or None if there is no usable text.
    """
    if value is None:
        return None
    text = str(value).lower().strip()
    if not text:
        return None
    if translator is not None:
        text = translator.translate(text).strip()
    return text or None
