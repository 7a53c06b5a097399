"""Module with the age prediction pipeline."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from predict_age.data_models import (
    LOG_INFO,
    LOG_WARNINGS,
    AgeResult,
    FullResult,
    MatchesResult,
    MatchRecord,
    Options,
    OutputView,
    ScoredMatch,
    ScoreResult,
    diagnose,
)
from predict_age.errors import EmptyWordCountError
from predict_age.lexicon import Lexicon, load_lexicon
from predict_age.nlp.ngrams import expand_ngrams
from predict_age.nlp.normaliser import normalise_text
from predict_age.nlp.spelling import DictionarySpellingTranslator, SpellingTranslator
from predict_age.nlp.tokeniser import NLTKTweetTokeniser, Tokeniser
from predict_age.scoring.matcher import count_tokens, find_matches
from predict_age.scoring.scorer import calculate_score, rank_matches, round_to_age


class AgePredictor:
    """Estimator of the age of a text's author from its word usage."""

    def __init__(
        self,
        lexicon: Lexicon | None = None,
        tokeniser: Tokeniser | None = None,
        translator: SpellingTranslator | None = None,
    ) -> None:
        """
        Set up collaborators of the pipeline.

        Args:
            lexicon (Lexicon | None, optional): The weighted lexicon.
                Defaults to the lexicon from the configuration.
            tokeniser (Tokeniser | None, optional): The word tokeniser.
                Defaults to `NLTKTweetTokeniser`.
            translator (SpellingTranslator | None, optional): Translator used for
                the "GB" locale. Defaults to `DictionarySpellingTranslator`,
                created on first use.
        """
        self.lexicon = lexicon if lexicon is not None else load_lexicon()
        self._tokeniser = tokeniser if tokeniser is not None else NLTKTweetTokeniser()
        self._translator = translator

    @property
    def translator(self) -> SpellingTranslator:
        """Translator from British to American spelling."""
        if self._translator is None:
            self._translator = DictionarySpellingTranslator()
        return self._translator

    def _match(
        self, text: Any, options: Options
    ) -> tuple[list[MatchRecord], int] | None:
        """Run the pipeline up to matching; None if there is nothing to score."""
        translator = self.translator if options.translate_spelling else None
        normalised = normalise_text(text, translator=translator)
        if normalised is None:
            diagnose(options.logs, LOG_WARNINGS, "No input text to predict age from.")
            return None

        words = self._tokeniser.tokenise(normalised)
        if not words:
            diagnose(
                options.logs, LOG_WARNINGS, "The input text does not contain any words."
            )
            return None

        tokens = words + expand_ngrams(words, options.n_grams, verbosity=options.logs)
        word_count = len(tokens) if options.wc_grams else len(words)
        frequencies = count_tokens(tokens)
        matches = find_matches(frequencies, self.lexicon, options.min, options.max)
        diagnose(
            options.logs,
            LOG_INFO,
            f"Found {len(matches)} lexicon match(es) among {len(tokens)} token(s).",
        )
        return matches, word_count

    def _score(
        self, matches: list[MatchRecord], word_count: int, options: Options
    ) -> float:
        intercept = 0.0 if options.no_int else self.lexicon.intercept
        return calculate_score(
            matches, word_count, intercept, options.encoding, options.places
        )

    def _rank(
        self, matches: list[MatchRecord], word_count: int, options: Options
    ) -> list[ScoredMatch]:
        return rank_matches(
            matches,
            word_count,
            options.encoding,
            options.places,
            options.sort_by,
            options.sort_order,
        )

    def predict(
        self,
        text: Any,
        options: Options | dict[str, Any] | None = None,
        **overrides: Any,
    ) -> AgeResult | None:
        """
        Predict the age of the author of a text.

        Args:
            text (Any): The text to be assessed.
            options (Options | dict[str, Any] | None, optional): Options of
                the prediction. Defaults to None, i.e. the default options.
            **overrides (Any): Individual options overriding `options`.

        Returns:
            AgeResult | None: Result of the view selected by the `output` option,
                or None if the text has no usable words.
        """
        options = Options.build(options, **overrides)
        matched = self._match(text, options)
        if matched is None:
            return None
        matches, word_count = matched
        try:
            if options.output == OutputView.FULL:
                # Both views read the same matches; the join waits for both.
                with ThreadPoolExecutor(max_workers=2) as executor:
                    score = executor.submit(self._score, matches, word_count, options)
                    ranked = executor.submit(self._rank, matches, word_count, options)
                    return FullResult(
                        score=score.result(),
                        matches=ranked.result(),
                        word_count=word_count,
                    )
            if options.output == OutputView.MATCHES:
                return MatchesResult(
                    matches=self._rank(matches, word_count, options),
                    word_count=word_count,
                )
            return ScoreResult(
                score=self._score(matches, word_count, options), word_count=word_count
            )
        except EmptyWordCountError as e:
            diagnose(options.logs, LOG_WARNINGS, str(e))
            return None

    async def predict_async(
        self,
        text: Any,
        options: Options | dict[str, Any] | None = None,
        **overrides: Any,
    ) -> AgeResult | None:
        """
        Predict the age of the author of a text without blocking the event loop.

        For the full view, the score and the ranking are computed concurrently
        from the same matches. If either fails, no result is returned.

        Args:
            text (Any): The text to be assessed.
            options (Options | dict[str, Any] | None, optional): Options of
                the prediction. Defaults to None, i.e. the default options.
            **overrides (Any): Individual options overriding `options`.

        Returns:
            AgeResult | None: Result of the view selected by the `output` option,
                or None if the text has no usable words.
        """
        options = Options.build(options, **overrides)
        if options.output != OutputView.FULL:
            return await asyncio.to_thread(self.predict, text, options)

        matched = await asyncio.to_thread(self._match, text, options)
        if matched is None:
            return None
        matches, word_count = matched
        try:
            score, ranked = await asyncio.gather(
                asyncio.to_thread(self._score, matches, word_count, options),
                asyncio.to_thread(self._rank, matches, word_count, options),
            )
        except EmptyWordCountError as e:
            diagnose(options.logs, LOG_WARNINGS, str(e))
            return None
        return FullResult(score=score, matches=ranked, word_count=word_count)

    def estimate_age(
        self,
        text: Any,
        options: Options | dict[str, Any] | None = None,
        **overrides: Any,
    ) -> int | None:
        """
        Estimate the age of the author of a text in whole years.

        Returns:
            int | None: The rounded score, or None if the text has no usable words.
        """
        overrides["output"] = OutputView.LEX
        result = self.predict(text, options, **overrides)
        if not isinstance(result, ScoreResult):
            return None
        return round_to_age(result.score)


_default_predictor: AgePredictor | None = None


def get_predictor() -> AgePredictor:
    """Get the process-wide predictor using the configured lexicon."""
    global _default_predictor  # noqa: PLW0603
    if _default_predictor is None:
        _default_predictor = AgePredictor()
    return _default_predictor


def predict_age(
    text: Any, options: Options | dict[str, Any] | None = None, **overrides: Any
) -> AgeResult | None:
    """Predict the age of the author of a text with the default predictor."""
    return get_predictor().predict(text, options, **overrides)


async def predict_age_async(
    text: Any, options: Options | dict[str, Any] | None = None, **overrides: Any
) -> AgeResult | None:
    """Predict the age of a text's author asynchronously with the default predictor."""
    return await get_predictor().predict_async(text, options, **overrides)


def estimate_age(
    text: Any, options: Options | dict[str, Any] | None = None, **overrides: Any
) -> int | None:
    """Estimate the age of a text's author in years with the default predictor."""
    return get_predictor().estimate_age(text, options, **overrides)
