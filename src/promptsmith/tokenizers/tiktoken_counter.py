"""Exact token counts for the GPT targets via tiktoken."""

from typing import Dict, List

import tiktoken

from ..core.types import AIModel
from .base import TokenCounter

# Encodings for the GPT models a template can be adapted for, plus
# related names users commonly pass on the command line.
MODEL_ENCODINGS: Dict[str, str] = {
    AIModel.GPT_4.value: "cl100k_base",
    AIModel.GPT_4O_MINI.value: "o200k_base",
    "gpt-4o": "o200k_base",
    "gpt-4-turbo": "cl100k_base",
    "gpt-3.5-turbo": "cl100k_base",
}

DEFAULT_ENCODING = "cl100k_base"


class TiktokenCounter(TokenCounter):
    """
    Token counter backed by a tiktoken encoding.

    The encoding is resolved from MODEL_ENCODINGS first, then from
    tiktoken's own model table, then DEFAULT_ENCODING. Loading an encoding
    may download it on first use, so construction can fail offline.
    """

    MODEL_ENCODINGS = MODEL_ENCODINGS
    DEFAULT_ENCODING = DEFAULT_ENCODING

    def __init__(self, model: str = AIModel.GPT_4.value):
        self.model = model
        self.name = f"tiktoken-{model}"
        self._encoding = self._load_encoding(model)

    @classmethod
    def _load_encoding(cls, model: str) -> "tiktoken.Encoding":
        if model in cls.MODEL_ENCODINGS:
            return tiktoken.get_encoding(cls.MODEL_ENCODINGS[model])
        try:
            return tiktoken.encoding_for_model(model)
        except KeyError:
            return tiktoken.get_encoding(cls.DEFAULT_ENCODING)

    @classmethod
    def get_encoding_for_model(cls, model: str) -> str:
        """Encoding name used for a model without loading it."""
        return cls.MODEL_ENCODINGS.get(model, cls.DEFAULT_ENCODING)

    @property
    def encoding_name(self) -> str:
        return self._encoding.name

    def count(self, text: str) -> int:
        return len(self.encode(text))

    def encode(self, text: str) -> List[int]:
        # Template text may legitimately contain "<|endoftext|>"-style markers
        return self._encoding.encode(text, disallowed_special=())

    def decode(self, tokens: List[int]) -> str:
        return self._encoding.decode(tokens)
