"""Module for expanding word sequences with n-grams."""

from collections.abc import Iterable, Sequence

from nltk.util import ngrams

from predict_age.data_models import LOG_INFO, diagnose


def expand_ngrams(
    words: Sequence[str], sizes: Iterable[int], verbosity: int = LOG_INFO
) -> list[str]:
    """
    Build n-gram tokens out of a sequence of words.

    Each n-gram is a window of `n` consecutive words joined with a single space.
    Sizes larger than the number of words are skipped.

    Args:
        words (Sequence[str]): Words of a text in their original order.
        sizes (Iterable[int]): Sizes of windows, e.g. `[2, 3]`. Sizes lower
            than 2 are ignored.
        verbosity (int, optional): Verbosity of diagnostics.
            Defaults to LOG_INFO.

    Returns:
        list[str]: N-gram tokens of all requested sizes, size by size.
    """
    tokens: list[str] = []
    for size in sizes:
        if size < 2:  # noqa: PLR2004, unigrams are the words themselves.
            continue
        if len(words) < size:
            diagnose(
                verbosity,
                LOG_INFO,
                f"Cannot build {size}-grams out of {len(words)} word(s). "
                "Skipping this size.",
            )
            continue
        tokens.extend(" ".join(window) for window in ngrams(words, size))
    return tokens
