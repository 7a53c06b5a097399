"""Module with the weighted lexicon used by the age model."""

import json
import math
from collections.abc import Iterator, Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator

from predict_age.configuration import config
from predict_age.errors import LexiconError

INTERCEPT_KEY = "_intercept"


class Lexicon(BaseModel):
    """Immutable mapping of terms (words or space-joined n-grams) to weights."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    category: str
    intercept: float
    # Read-only view, so a lexicon shared by all predictions cannot be altered.
    weights: MappingProxyType

    @field_validator("weights", mode="before")
    @classmethod
    def _freeze_weights(cls, value: Any) -> MappingProxyType:
        if isinstance(value, MappingProxyType):
            return value
        return MappingProxyType(dict(value))

    def __len__(self) -> int:
        return len(self.weights)

    def __contains__(self, term: object) -> bool:
        return term in self.weights

    def terms_within(
        self, min_weight: float = -math.inf, max_weight: float = math.inf
    ) -> Iterator[tuple[str, float]]:
        """
        Iterate over terms with weights in the inclusive range, in lexicon order.

        Args:
            min_weight (float, optional): The lowest accepted weight.
                Defaults to negative infinity.
            max_weight (float, optional): The highest accepted weight.
                Defaults to positive infinity.

        Yields:
            tuple[str, float]: Pairs of a term and its weight.
        """
        for term, weight in self.weights.items():
            if min_weight <= weight <= max_weight:
                yield term, weight

    @classmethod
    def from_mapping(
        cls,
        weights: Mapping[str, float],
        intercept: float | None = None,
        category: str = config.lexicon_category,
    ) -> "Lexicon":
        """
        Build a lexicon from a mapping of terms to weights.

        The mapping may carry its own intercept under the `_intercept` key.
        An explicit `intercept` argument takes precedence over it, and the
        configured default is used if neither is present.

        Raises:
            LexiconError: Raised if any weight is not a finite number.
        """
        # Terms are matched against lowercase tokens separated by single spaces.
        terms: dict[str, float] = {}
        own_intercept = None
        for term, weight in weights.items():
            try:
                value = float(weight)
            except (TypeError, ValueError) as e:
                raise LexiconError(
                    f"Weight of the term `{term}` is not a number: {weight!r}."
                ) from e
            if not math.isfinite(value):
                raise LexiconError(f"Weight of the term `{term}` is not finite.")
            if term == INTERCEPT_KEY:
                own_intercept = value
                continue
            key = " ".join(str(term).lower().split())
            if key in terms:
                logger.warning(
                    f"The term `{term}` of the `{category}` lexicon duplicates "
                    f"`{key}`. Its weight {value} replaces {terms[key]}."
                )
            terms[key] = value

        if intercept is None:
            intercept = (
                own_intercept if own_intercept is not None else config.default_intercept
            )
        return cls(category=category, intercept=intercept, weights=terms)


@lru_cache(maxsize=8)
def load_lexicon(
    path: Path = config.lexicon_file, category: str = config.lexicon_category
) -> Lexicon:
    """
    Load a category of a lexicon file, once per process.

    The file is a JSON object mapping category names to objects mapping
    terms to weights, e.g. `{"AGE": {"_intercept": 23.2, "lol": -0.5}}`.

    Args:
        path (Path, optional): Path to the lexicon file.
            Defaults to the value from the configuration.
        category (str, optional): Category to be loaded.
            Defaults to the value from the configuration.

    Raises:
        LexiconError: Raised if the file is missing, is not valid JSON,
            or does not contain the category.

    Returns:
        Lexicon: The loaded lexicon.
    """
    if not path.exists():
        raise LexiconError(f"There is no lexicon file {path}.")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise LexiconError(f"The lexicon file {path} is not valid JSON.") from e

    if not isinstance(data, dict) or not isinstance(data.get(category), dict):
        raise LexiconError(f"The lexicon file {path} has no category `{category}`.")

    lexicon = Lexicon.from_mapping(data[category], category=category)
    logger.debug(
        f"Loaded {len(lexicon)} terms of the `{category}` lexicon from {path}."
    )
    return lexicon
