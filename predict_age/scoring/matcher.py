"""Module for matching tokens of a text against a lexicon."""

import math
from collections import Counter
from collections.abc import Iterable

from predict_age.data_models import MatchRecord
from predict_age.lexicon import Lexicon


def count_tokens(tokens: Iterable[str]) -> Counter[str]:
    """
    Count occurrences of every distinct token.

    Args:
        tokens (Iterable[str]): Tokens of a text.

    Returns:
        Counter[str]: Frequency table. Its counts sum up to the number of tokens.
    """
    return Counter(tokens)


def find_matches(
    frequencies: Counter[str],
    lexicon: Lexicon,
    min_weight: float = -math.inf,
    max_weight: float = math.inf,
) -> list[MatchRecord]:
    """
    Find lexicon terms present in a text.

    Terms absent from the text produce no record at all.

    Args:
        frequencies (Counter[str]): Frequency table of tokens of the text.
        lexicon (Lexicon): The lexicon to match against.
        min_weight (float, optional): The lowest weight of a term to be matched.
            Defaults to negative infinity.
        max_weight (float, optional): The highest weight of a term to be matched.
            Defaults to positive infinity.

    Returns:
        list[MatchRecord]: Matches in the order of the lexicon.
    """
    matches = []
    for term, weight in lexicon.terms_within(min_weight, max_weight):
        count = frequencies.get(term, 0)
        if count:
            matches.append(MatchRecord(term=term, count=count, weight=weight))
    return matches
