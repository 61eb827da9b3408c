"""Lookup of token counters by model or tokenizer name."""

import logging
from typing import Dict, List, Optional

from ..core.config import get_settings
from ..core.types import AIModel
from .base import TokenCounter, SimpleTokenCounter

logger = logging.getLogger(__name__)


class TokenizerRegistry:
    """
    Caches one token counter per name.

    Names starting with "gpt-" get a TiktokenCounter when tiktoken can load
    the encoding. Claude, Gemini and Llama have no local tokenizer and share
    the heuristic counter, as does any name tiktoken cannot serve.
    """

    def __init__(self):
        self._counters: Dict[str, TokenCounter] = {}
        self._fallback = SimpleTokenCounter()

    def get(self, name: str) -> TokenCounter:
        counter = self._counters.get(name)
        if counter is None:
            counter = self._counters[name] = self._create_counter(name)
        return counter

    def _create_counter(self, name: str) -> TokenCounter:
        if not name.startswith("gpt-"):
            return self._fallback

        try:
            from .tiktoken_counter import TiktokenCounter
            return TiktokenCounter(name)
        except ImportError:
            logger.debug("tiktoken not installed, estimating tokens for %s", name)
        except Exception as e:
            # Encodings are downloaded on first use
            logger.warning("Could not load tiktoken encoding for %s: %s", name, e)
        return self._fallback

    def register(self, name: str, counter: TokenCounter) -> None:
        """Use counter for name, replacing any cached one."""
        self._counters[name] = counter

    def list_available(self) -> List[str]:
        """Names with a cached counter plus every AIModel target."""
        return sorted(set(self._counters) | {m.value for m in AIModel})

    def clear_cache(self) -> None:
        self._counters.clear()

    def is_loaded(self, name: str) -> bool:
        return name in self._counters


tokenizer_registry = TokenizerRegistry()


def get_tokenizer(name: Optional[str] = None) -> TokenCounter:
    """
    Counter from the shared registry.

    Args:
        name: Model or tokenizer name, defaults to PS_DEFAULT_TOKENIZER

    Returns:
        TokenCounter instance
    """
    return tokenizer_registry.get(name or get_settings().tokenizer.default_tokenizer)


def count_tokens(text: str, tokenizer: Optional[str] = None) -> int:
    """Count tokens in text with the named (or configured) tokenizer."""
    return get_tokenizer(tokenizer).count(text)
