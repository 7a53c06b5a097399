import pytest

from predict_age.data_models import (
    Encoding,
    MatchRecord,
    ScoredMatch,
    SortKey,
    SortOrder,
)
from predict_age.errors import EmptyWordCountError
from predict_age.lexicon import Lexicon
from predict_age.scoring.matcher import count_tokens, find_matches
from predict_age.scoring.scorer import calculate_score, rank_matches, round_to_age

MATCHES = [
    MatchRecord("alpha", 1, 2.0),
    MatchRecord("beta", 3, -1.0),
    MatchRecord("gamma", 1, 2.0),
    MatchRecord("delta", 2, 0.5),
]


def test_count_tokens():
    tokens = ["i", "am", "happy", "happy", "today"]
    frequencies = count_tokens(tokens)
    assert frequencies == {"i": 1, "am": 1, "happy": 2, "today": 1}
    assert sum(frequencies.values()) == len(tokens)


def test_find_matches_counts_duplicates(lexicon):
    frequencies = count_tokens(["happy", "happy", "sad", "good", "sad good"])
    assert find_matches(frequencies, lexicon) == [
        MatchRecord("happy", 2, 0.5),
        MatchRecord("sad good", 1, -0.2),
    ]


def test_find_matches_is_sparse(lexicon):
    assert find_matches(count_tokens(["nothing", "here"]), lexicon) == []


def test_find_matches_filters_by_weight(lexicon):
    frequencies = count_tokens(["happy", "sad good"])
    assert find_matches(frequencies, lexicon, min_weight=0) == [
        MatchRecord("happy", 1, 0.5)
    ]
    assert find_matches(frequencies, lexicon, max_weight=-0.2) == [
        MatchRecord("sad good", 1, -0.2)
    ]


def test_find_matches_keeps_lexicon_order():
    lexicon = Lexicon.from_mapping({"b": 1.0, "a": 1.0}, intercept=0.0)
    matches = find_matches(count_tokens(["a", "b"]), lexicon)
    assert [match.term for match in matches] == ["b", "a"]


def test_calculate_score():
    score = calculate_score([MatchRecord("happy", 2, 0.5)], 5, 10.0)
    assert score == pytest.approx(10.2)


def test_calculate_score_without_matches():
    assert calculate_score([], 5, 10.0) == 10.0


def test_calculate_score_rounds():
    assert calculate_score([MatchRecord("x", 1, 1.0)], 3, 0.0, places=2) == 0.33


def test_binary_encoding_ignores_repetitions():
    matches = [MatchRecord("happy", 2, 0.5), MatchRecord("sad", 4, -0.25)]
    assert calculate_score(matches, 10, 1.0, Encoding.BINARY) == pytest.approx(1.25)


@pytest.mark.parametrize("word_count", [0, -1])
def test_empty_word_count(word_count):
    with pytest.raises(EmptyWordCountError):
        calculate_score([], word_count, 10.0)
    with pytest.raises(ValueError):  # noqa: PT011
        rank_matches([], word_count)


def test_rank_by_frequency_is_stable():
    ranked = rank_matches(MATCHES, 10)
    assert [match.term for match in ranked] == ["beta", "delta", "alpha", "gamma"]


def test_rank_by_weight_ascending_is_stable():
    ranked = rank_matches(
        MATCHES, 10, sort_by=SortKey.WEIGHT, sort_order=SortOrder.ASCENDING
    )
    assert [match.term for match in ranked] == ["beta", "delta", "alpha", "gamma"]


def test_rank_by_contribution():
    ranked = rank_matches(MATCHES, 10, places=3, sort_by=SortKey.LEX)
    assert ranked == [
        ScoredMatch("alpha", 1, 2.0, 0.2),
        ScoredMatch("gamma", 1, 2.0, 0.2),
        ScoredMatch("delta", 2, 0.5, 0.1),
        ScoredMatch("beta", 3, -1.0, -0.3),
    ]


def test_contributions_add_up_to_score():
    ranked = rank_matches(MATCHES, 7, places=9)
    total = sum(match.contribution for match in ranked)
    assert total == pytest.approx(calculate_score(MATCHES, 7, 0.0), abs=1e-8)


@pytest.mark.parametrize(
    ("score", "age"), [(22.5, 23), (22.49, 22), (10.2, 10), (-0.5, -1)]
)
def test_round_to_age(score, age):
    assert round_to_age(score) == age
