"""Token counter interface and the heuristic counter shared with the context adapter."""

from abc import ABC, abstractmethod
from typing import List

from ..templates.context import estimate_tokens


class TokenCounter(ABC):
    """
    Measures rendered prompts in model tokens.

    Subclasses give exact counts (tiktoken) or estimates (SimpleTokenCounter).
    Truncation is built on encode/decode, so counters that can decode get
    token-accurate truncation for free.
    """

    name: str = "base"

    @abstractmethod
    def count(self, text: str) -> int:
        """Number of tokens the prompt costs."""

    @abstractmethod
    def encode(self, text: str) -> List[int]:
        pass

    @abstractmethod
    def decode(self, tokens: List[int]) -> str:
        pass

    def truncate(self, text: str, max_tokens: int) -> str:
        """
        Cut a prompt down to at most max_tokens.

        Args:
            text: Prompt text
            max_tokens: Token limit

        Returns:
            The prompt unchanged when it already fits, otherwise its leading tokens
        """
        tokens = self.encode(text)
        if len(tokens) <= max_tokens:
            return text
        return self.decode(tokens[:max(0, max_tokens)])

    def fits(self, text: str, max_tokens: int) -> bool:
        return self.count(text) <= max_tokens


class SimpleTokenCounter(TokenCounter):
    """Ceil(chars / 4) estimate, identical to estimate_tokens."""

    name = "simple"
    chars_per_token = 4

    def count(self, text: str) -> int:
        return estimate_tokens(text)

    def encode(self, text: str) -> List[int]:
        # Offsets of each 4-character chunk stand in for token ids
        return list(range(0, len(text), self.chars_per_token))

    def decode(self, tokens: List[int]) -> str:
        raise NotImplementedError(
            f"{type(self).__name__} only estimates counts; "
            "use a tiktoken counter to decode token ids"
        )

    def truncate(self, text: str, max_tokens: int) -> str:
        return text[:max(0, max_tokens) * self.chars_per_token]
