"""Module with project-wide data models."""

import math
from enum import Enum
from typing import Annotated, Any, Literal, NamedTuple, Self

from loguru import logger
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from predict_age.configuration import config

# Verbosity levels of per-call diagnostics.
LOG_ERRORS = 1
LOG_WARNINGS = 2
LOG_INFO = 3


class Encoding(str, Enum):
    """Weighting schemes applied while aggregating matches."""

    FREQUENCY = "freq"
    BINARY = "binary"


class OutputView(str, Enum):
    """Views of the matches that a prediction can return."""

    LEX = "lex"
    MATCHES = "matches"
    FULL = "full"


class SortKey(str, Enum):
    """Keys by which a list of matches can be ranked."""

    LEX = "lex"
    FREQUENCY = "freq"
    WEIGHT = "weight"


class SortOrder(str, Enum):
    """Direction of ranking of matches."""

    DESCENDING = "desc"
    ASCENDING = "asc"


# Spellings accepted besides the canonical enum values.
_ENUM_SYNONYMS: dict[type[Enum], dict[str, str]] = {
    Encoding: {"frequency": "freq"},
    SortKey: {"contribution": "lex", "count": "freq"},
    SortOrder: {"descending": "desc", "ascending": "asc"},
}


def diagnose(verbosity: int, level: int, message: str) -> None:
    """
    Emit a diagnostic message if the verbosity of a call allows it.

    Args:
        verbosity (int): Verbosity requested by the caller (`Options.logs`).
        level (int): Level of the message: `LOG_ERRORS`, `LOG_WARNINGS`
            or `LOG_INFO`.
        message (str): The message to be logged.
    """
    if verbosity < level:
        return
    if level <= LOG_ERRORS:
        logger.error(message)
    elif level == LOG_WARNINGS:
        logger.warning(message)
    else:
        logger.info(message)


def _verbosity(info: ValidationInfo) -> int:
    return info.data.get("logs", LOG_INFO)


_TRUE_FLAGS = {"true", "1", "yes", "on"}
_FALSE_FLAGS = {"false", "0", "no", "off", ""}


def _fall_back(verbosity: int, field_name: str, value: Any, default: Any) -> Any:
    """Replace an unusable option value with its default and report it."""
    shown = getattr(default, "value", default)
    diagnose(
        verbosity,
        LOG_WARNINGS,
        f"Unrecognised value {value!r} of option `{field_name}`. "
        f"Falling back to {shown!r}.",
    )
    return default


class Options(BaseModel):
    """
    Validated, immutable options of a single prediction.

    Options are accepted both in snake_case and in the camelCase spelling
    (`nGrams`, `noInt`, `sortBy`, `wcGrams`). Unknown or wrongly typed values
    fall back to their defaults with a warning instead of failing.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # Declared first so that other validators can read it.
    logs: int = LOG_INFO
    encoding: Encoding = Encoding.FREQUENCY
    locale: str = "US"
    min: float = -math.inf
    max: float = math.inf
    n_grams: list[int] = Field(default_factory=lambda: [2, 3], alias="nGrams")
    no_int: bool = Field(False, alias="noInt")
    output: OutputView = OutputView.LEX
    places: int = config.default_places
    sort_by: SortKey = Field(SortKey.FREQUENCY, alias="sortBy")
    sort_order: SortOrder = Field(SortOrder.DESCENDING, alias="sortOrder")
    wc_grams: bool = Field(False, alias="wcGrams")

    @field_validator("logs", mode="before")
    @classmethod
    def _clamp_logs(cls, value: Any) -> int:
        if value is None:
            return LOG_INFO
        try:
            level = int(value)
        except (TypeError, ValueError):
            return _fall_back(LOG_INFO, "logs", value, LOG_INFO)
        return max(0, min(LOG_INFO, level))

    @field_validator("no_int", "wc_grams", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any, info: ValidationInfo) -> bool:
        if value is None:
            return False
        if isinstance(value, bool | int | float):
            return bool(value)
        raw = str(value).strip().lower()
        if raw in _TRUE_FLAGS:
            return True
        if raw in _FALSE_FLAGS:
            return False
        return _fall_back(_verbosity(info), info.field_name or "", value, False)

    @field_validator("encoding", "output", "sort_by", "sort_order", mode="before")
    @classmethod
    def _coerce_enum(cls, value: Any, info: ValidationInfo) -> Any:
        field_name = info.field_name or ""
        default = cls.model_fields[field_name].default
        enum_type = type(default)
        if value is None:
            return default
        if isinstance(value, enum_type):
            return value
        raw = str(value).strip().lower()
        raw = _ENUM_SYNONYMS.get(enum_type, {}).get(raw, raw)
        try:
            return enum_type(raw)
        except ValueError:
            return _fall_back(_verbosity(info), field_name, value, default)

    @field_validator("locale", mode="before")
    @classmethod
    def _normalise_locale(cls, value: Any) -> str:
        if value is None:
            return "US"
        return str(value).strip().upper()

    @field_validator("min", "max", mode="before")
    @classmethod
    def _default_bounds(cls, value: Any, info: ValidationInfo) -> float:
        default = -math.inf if info.field_name == "min" else math.inf
        if value is None:
            return default
        try:
            bound = float(value)
        except (TypeError, ValueError):
            bound = math.nan
        if math.isnan(bound):
            return _fall_back(_verbosity(info), info.field_name or "", value, default)
        return bound

    @field_validator("n_grams", mode="before")
    @classmethod
    def _normalise_n_grams(cls, value: Any, info: ValidationInfo) -> list[int]:
        if value is None or value is False:
            return []
        if isinstance(value, str):
            value = value.split(",")
        elif isinstance(value, int | float):
            value = [value]
        try:
            sizes = [int(size) for size in value]
        except (TypeError, ValueError):
            return _fall_back(_verbosity(info), "n_grams", value, [2, 3])
        # Unigrams are always present, so only sizes from 2 upwards expand.
        return sorted({size for size in sizes if size > 1})

    @field_validator("places", mode="before")
    @classmethod
    def _check_places(cls, value: Any, info: ValidationInfo) -> int:
        if value is None:
            return config.default_places
        try:
            places = int(value)
        except (TypeError, ValueError):
            return _fall_back(_verbosity(info), "places", value, config.default_places)
        if places < 0:
            diagnose(
                _verbosity(info),
                LOG_WARNINGS,
                f"Option `places` cannot be negative ({value}). "
                f"Falling back to {config.default_places}.",
            )
            return config.default_places
        return places

    @model_validator(mode="after")
    def _check_bounds(self) -> Self:
        if self.min > self.max:
            diagnose(
                self.logs,
                LOG_WARNINGS,
                f"Option `min` ({self.min}) is greater than `max` ({self.max}). "
                "Weight filtering has been disabled.",
            )
            object.__setattr__(self, "min", -math.inf)
            object.__setattr__(self, "max", math.inf)
        return self

    @property
    def translate_spelling(self) -> bool:
        """Whether British spellings should be rewritten to American ones."""
        return self.locale == "GB"

    @classmethod
    def build(
        cls, options: "Options | dict[str, Any] | None" = None, **overrides: Any
    ) -> "Options":
        """
        Merge options from all sources into one validated configuration.

        Args:
            options (Options | dict[str, Any] | None, optional): Base options,
                either already validated or as a raw mapping. Defaults to None.
            **overrides (Any): Individual options overriding the base ones.

        Returns:
            Options: Validated options of the call.
        """
        if isinstance(options, Options):
            if not overrides:
                return options
            merged = options.model_dump()
        else:
            merged = dict(options or {})
        merged.update(overrides)
        return cls.model_validate(merged)


class MatchRecord(NamedTuple):
    """A lexicon term found in a text."""

    term: str
    count: int
    weight: float


class ScoredMatch(NamedTuple):
    """A lexicon term found in a text with its contribution to the score."""

    term: str
    count: int
    weight: float
    contribution: float


class ScoreResult(BaseModel):
    """Result of a prediction returning only the estimated age."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["lex"] = "lex"
    score: float
    word_count: int


class MatchesResult(BaseModel):
    """Result of a prediction returning only ranked matches."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["matches"] = "matches"
    matches: list[ScoredMatch]
    word_count: int


class FullResult(BaseModel):
    """Result of a prediction returning both the age and ranked matches."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["full"] = "full"
    score: float
    matches: list[ScoredMatch]
    word_count: int


AgeResult = Annotated[
    ScoreResult | MatchesResult | FullResult, Field(discriminator="kind")
]
