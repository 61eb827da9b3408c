"""Template catalog module - curated templates, favorites, and custom templates."""

from .builtin import CURATED_TEMPLATES
from .catalog import TemplateCatalog, FAVORITES_KEY, CUSTOM_TEMPLATES_KEY

__all__ = [
    "CURATED_TEMPLATES",
    "TemplateCatalog",
    "FAVORITES_KEY",
    "CUSTOM_TEMPLATES_KEY",
]
