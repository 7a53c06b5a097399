import math

import pytest
from pydantic import ValidationError

from predict_age.configuration import config
from predict_age.data_models import (
    Encoding,
    Options,
    OutputView,
    SortKey,
    SortOrder,
)


def test_defaults():
    options = Options()
    assert options.encoding == Encoding.FREQUENCY
    assert options.locale == "US"
    assert options.min == -math.inf
    assert options.max == math.inf
    assert options.n_grams == [2, 3]
    assert options.no_int is False
    assert options.output == OutputView.LEX
    assert options.places == config.default_places
    assert options.sort_by == SortKey.FREQUENCY
    assert options.sort_order == SortOrder.DESCENDING
    assert options.wc_grams is False


def test_camel_case_aliases():
    options = Options.build(
        {"nGrams": [2], "noInt": True, "sortBy": "weight", "wcGrams": True}
    )
    assert options.n_grams == [2]
    assert options.no_int is True
    assert options.sort_by == SortKey.WEIGHT
    assert options.wc_grams is True


def test_overrides_take_precedence():
    base = Options.build({"output": "matches", "places": 2})
    options = Options.build(base, places=4)
    assert options.output == OutputView.MATCHES
    assert options.places == 4
    assert Options.build(base) is base


def test_options_are_immutable():
    options = Options()
    with pytest.raises(ValidationError):
        options.places = 3


@pytest.mark.parametrize("value", [[0], [], 0, None, [1]])
def test_disabled_n_grams(value):
    assert Options.build({"nGrams": value}).n_grams == []


def test_single_n_gram_size():
    assert Options.build({"nGrams": 3}).n_grams == [3]


def test_invalid_output_falls_back_to_lex(log_messages):
    options = Options.build({"output": "banana"})
    assert options.output == OutputView.LEX
    assert any("banana" in message for message in log_messages)


def test_invalid_option_is_silent_without_verbosity(log_messages):
    options = Options.build({"output": "banana", "logs": 0})
    assert options.output == OutputView.LEX
    assert log_messages == []


def test_enum_synonyms():
    options = Options.build(
        {"sortBy": "Count", "encoding": "frequency", "sortOrder": "ascending"}
    )
    assert options.sort_by == SortKey.FREQUENCY
    assert options.encoding == Encoding.FREQUENCY
    assert options.sort_order == SortOrder.ASCENDING


def test_min_greater_than_max_disables_filtering(log_messages):
    options = Options.build({"min": 1, "max": -1})
    assert options.min == -math.inf
    assert options.max == math.inf
    assert log_messages


def test_negative_places_fall_back_to_default():
    assert Options.build({"places": -2}).places == config.default_places


def test_locale():
    assert Options.build({"locale": "gb"}).translate_spelling
    assert not Options.build({"locale": "US"}).translate_spelling


def test_logs_are_clamped():
    assert Options.build({"logs": 10}).logs == 3
    assert Options.build({"logs": -1}).logs == 0


@pytest.mark.parametrize(
    ("option", "value"),
    [
        ("places", "abc"),
        ("logs", "x"),
        ("nGrams", ["two"]),
        ("nGrams", object()),
        ("min", "low"),
        ("max", float("nan")),
        ("noInt", "maybe"),
        ("wcGrams", [1]),
    ],
)
def test_wrongly_typed_option_falls_back_to_default(option, value, log_messages):
    assert Options.build({option: value}) == Options()
    assert any(option.lower() in message.replace("_", "") for message in log_messages)


def test_n_grams_from_text():
    assert Options.build({"nGrams": "2, 3"}).n_grams == [2, 3]
    assert Options.build({"nGrams": "0"}).n_grams == []


def test_flags_from_text():
    options = Options.build({"noInt": "yes", "wcGrams": "false"})
    assert options.no_int is True
    assert options.wc_grams is False
