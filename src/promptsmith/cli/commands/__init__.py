"""CLI commands."""

from .templates import list_templates, show, render, variables, chain
from .adapt import adapt, tokens

__all__ = [
    "list_templates",
    "show",
    "render",
    "variables",
    "chain",
    "adapt",
    "tokens",
]
