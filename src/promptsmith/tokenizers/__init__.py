"""Tokenizer implementations for token counting."""

from .base import TokenCounter, SimpleTokenCounter
from .registry import TokenizerRegistry, tokenizer_registry, get_tokenizer, count_tokens

__all__ = [
    "TokenCounter",
    "SimpleTokenCounter",
    "TokenizerRegistry",
    "tokenizer_registry",
    "get_tokenizer",
    "count_tokens",
]
