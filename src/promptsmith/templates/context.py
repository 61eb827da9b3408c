"""
Context adapter: final adaptation of a rendered prompt.

Covers token-saving rewrites, output format instructions, and
model-specific prefixes, plus a rough token estimate.
"""

import math
import re
from typing import Optional, Union

from ..core.types import AIModel, OutputFormat, AdaptationResult

# Verbose lead-in phrases removed by optimize_tokens. Longer phrases first
# so "could you please" is removed whole rather than leaving "could you".
REDUNDANT_PHRASES = [
    re.compile(r"\bcould you please\s+", re.IGNORECASE),
    re.compile(r"\bI would like you to\s+", re.IGNORECASE),
    re.compile(r"\bI want you to\s+", re.IGNORECASE),
    re.compile(r"\bcan you\s+", re.IGNORECASE),
    re.compile(r"\bplease\s+", re.IGNORECASE),
]

_WHITESPACE = re.compile(r"\s+")


def as_model(model: Union[str, AIModel]) -> AIModel:
    """Coerce a model name to AIModel. Raises ValueError if unknown."""
    return model if isinstance(model, AIModel) else AIModel(model)


def as_format(output_format: Union[str, OutputFormat]) -> OutputFormat:
    """Coerce a format name to OutputFormat. Raises ValueError if unknown."""
    return output_format if isinstance(output_format, OutputFormat) else OutputFormat(output_format)


def estimate_tokens(text: str) -> int:
    """
    Estimate token count as ceil(len(text) / 4).

    This is a rough heuristic for English text, not a provider tokenizer.
    Use promptsmith.tokenizers for exact counts.
    """
    if not text:
        return 0
    return math.ceil(len(text) / 4)


def _optimize_once(text: str) -> str:
    optimized = _WHITESPACE.sub(" ", text)

    for phrase in REDUNDANT_PHRASES:
        optimized = phrase.sub("", optimized)

    optimized = optimized.strip()
    return optimized[:1].upper() + optimized[1:]


def optimize_tokens(text: str) -> str:
    """
    Optimize a prompt for token efficiency.

    Collapses whitespace, strips polite filler phrases ("please",
    "can you", ...), trims, and capitalizes the first character. The
    rewrite is repeated until it no longer changes the text, so applying
    it twice gives the same result as applying it once.

    Args:
        text: Original prompt

    Returns:
        Optimized prompt
    """
    if not text:
        return ""

    optimized = _optimize_once(text)
    while True:
        again = _optimize_once(optimized)
        if again == optimized:
            return optimized
        optimized = again


def add_format_instructions(
    text: str,
    output_format: Union[str, OutputFormat]
) -> str:
    """
    Append output format instructions to a prompt.

    Args:
        text: Original prompt
        output_format: Desired output format

    Returns:
        Prompt with format instructions (unchanged for plain text)
    """
    instruction = as_format(output_format).instruction
    return f"{text}{instruction}" if instruction else text


def adapt_for_model(text: str, model: Union[str, AIModel]) -> str:
    """
    Prefix a prompt with model-specific framing.

    Args:
        text: Original prompt
        model: Target AI model

    Returns:
        Adapted prompt (unchanged for models that need no prefix)
    """
    prefix = as_model(model).prefix
    return f"{prefix}{text}" if prefix else text


def apply_context_adaptations(
    text: str,
    model: Optional[Union[str, AIModel]] = None,
    output_format: Optional[Union[str, OutputFormat]] = None,
    optimize: bool = False
) -> AdaptationResult:
    """
    Apply all requested adaptations to a prompt.

    Order is fixed: token optimization, then format instructions, then
    model prefix. Optimizing first keeps the appended instruction text
    out of the filler-phrase filter.

    Args:
        text: Original prompt
        model: Target model, if any
        output_format: Output format, if any
        optimize: Whether to apply token optimization

    Returns:
        AdaptationResult with the final prompt, its estimated token count,
        and the estimated tokens saved (never negative)
    """
    adapted = text
    original_tokens = estimate_tokens(text)

    if optimize:
        adapted = optimize_tokens(adapted)

    if output_format:
        adapted = add_format_instructions(adapted, output_format)

    if model:
        adapted = adapt_for_model(adapted, model)

    token_count = estimate_tokens(adapted)

    return AdaptationResult(
        prompt=adapted,
        token_count=token_count,
        savings=max(0, original_tokens - token_count),
    )
