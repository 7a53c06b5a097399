"""Module with the linear model turning matches into an age."""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from predict_age.data_models import (
    Encoding,
    MatchRecord,
    ScoredMatch,
    SortKey,
    SortOrder,
)
from predict_age.errors import EmptyWordCountError


def _check_word_count(word_count: int) -> None:
    if word_count <= 0:
        raise EmptyWordCountError(
            f"Cannot weight matches against a word count of {word_count}."
        )


def contribution(match: MatchRecord, word_count: int, encoding: Encoding) -> float:
    """
    Calculate the contribution of a single match to the score.

    Args:
        match (MatchRecord): The match.
        word_count (int): The number of words in the text.
        encoding (Encoding): The weighting scheme.

    Returns:
        float: `count / word_count * weight` for the frequency encoding,
            the bare weight for the binary encoding.
    """
    if encoding == Encoding.BINARY:
        return match.weight
    return (match.count / word_count) * match.weight


def calculate_score(
    matches: Sequence[MatchRecord],
    word_count: int,
    intercept: float,
    encoding: Encoding = Encoding.FREQUENCY,
    places: int | None = None,
) -> float:
    """
    Calculate the score of the linear model.

    Args:
        matches (Sequence[MatchRecord]): Matches found in the text.
        word_count (int): The number of words in the text.
        intercept (float): The intercept of the model; zero to suppress it.
        encoding (Encoding, optional): The weighting scheme.
            Defaults to Encoding.FREQUENCY.
        places (int | None, optional): Decimal places of the result.
            Defaults to None, i.e. no rounding.

    Raises:
        EmptyWordCountError: Raised if `word_count` is not positive.

    Returns:
        float: `intercept + sum of contributions of all matches`.
    """
    _check_word_count(word_count)
    score = sum(contribution(match, word_count, encoding) for match in matches)
    score += intercept
    return score if places is None else round(score, places)


def _sort_value(match: ScoredMatch, sort_by: SortKey) -> float:
    if sort_by == SortKey.LEX:
        return match.contribution
    if sort_by == SortKey.WEIGHT:
        return match.weight
    return match.count


def rank_matches(
    matches: Sequence[MatchRecord],
    word_count: int,
    encoding: Encoding = Encoding.FREQUENCY,
    places: int | None = None,
    sort_by: SortKey = SortKey.FREQUENCY,
    sort_order: SortOrder = SortOrder.DESCENDING,
) -> list[ScoredMatch]:
    """
    Rank matches with their contributions to the score.

    Sorting is stable: matches with equal keys keep their lexicon order.

    Raises:
        EmptyWordCountError: Raised if `word_count` is not positive.

    Returns:
        list[ScoredMatch]: Sorted matches with rounded contributions.
    """
    _check_word_count(word_count)
    scored = []
    for match in matches:
        value = contribution(match, word_count, encoding)
        scored.append(
            ScoredMatch(
                term=match.term,
                count=match.count,
                weight=match.weight,
                contribution=value if places is None else round(value, places),
            )
        )
    return sorted(
        scored,
        key=lambda match: _sort_value(match, sort_by),
        reverse=sort_order == SortOrder.DESCENDING,
    )


def round_to_age(score: float) -> int:
    """Round a score half away from zero to whole years."""
    return int(Decimal(str(score)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
