"""Shared fixtures of the test suite."""

from collections.abc import Iterator

import pytest
from loguru import logger

from predict_age.lexicon import Lexicon
from predict_age.predictor import AgePredictor


@pytest.fixture
def lexicon() -> Lexicon:
    """A tiny lexicon with a word, a bigram and an intercept of 10."""
    return Lexicon.from_mapping({"happy": 0.5, "sad good": -0.2}, intercept=10.0)


@pytest.fixture
def predictor(lexicon: Lexicon) -> AgePredictor:
    """A predictor using the tiny lexicon."""
    return AgePredictor(lexicon=lexicon)


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Messages logged with loguru while a test runs."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)
