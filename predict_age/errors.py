"""Module with exceptions raised by the age prediction pipeline."""


class PredictAgeError(Exception):
    """Base class of all errors raised by the package."""


class LexiconError(PredictAgeError):
    """Raised if a lexicon cannot be loaded or has an invalid structure."""


class EmptyWordCountError(PredictAgeError, ValueError):
    """Raised if a score is requested for a text without any words."""
