"""Module with natural language tokenisers."""

from abc import ABC, abstractmethod
from typing import override

from nltk.tokenize import TweetTokenizer


class Tokeniser(ABC):
    """An interface of a natural language word tokeniser."""

    @abstractmethod
    def tokenise(self, text: str) -> list[str]:
        """
        Split a text into word tokens.

        Args:
            text (str): A text to be split.

        Returns:
            list[str]: A list of resulting word tokens in order of appearance.
                Empty if nothing in the text can be recognised as a token.
        """


class NLTKTweetTokeniser(Tokeniser):
    """Wrapper around NLTK's tweet tokeniser conformant with Tokeniser interface."""

    def __init__(self, reduce_len: bool = False) -> None:
        """
        Initialise the casual-text tokeniser of NLTK.

        It is a port of the "happyfuntokenizing" tokeniser, which keeps
        contractions, emoticons, hashtags and mentions as single tokens.

        Args:
            reduce_len (bool, optional): Whether sequences of more than three
                repeated characters are shortened to three. Defaults to False.
        """
        self._tokeniser = TweetTokenizer(preserve_case=False, reduce_len=reduce_len)

    @override
    def tokenise(self, text: str) -> list[str]:
        if not text:
            return []
        return [token for token in self._tokeniser.tokenize(text) if token.strip()]
