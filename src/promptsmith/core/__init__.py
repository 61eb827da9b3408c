"""Core module - foundational types, configuration, logging, and exceptions."""

from .types import (
    TemplateCategory,
    VariableType,
    OutputFormat,
    AIModel,
    VariableDefinition,
    TemplateSection,
    ChainStep,
    ContextOptions,
    Template,
    StepResult,
    ChainResult,
    VariableValidation,
    ChainValidation,
    AdaptationResult,
    RenderedTemplate,
    UserTemplateData,
)
from .config import Settings, get_settings, reload_settings
from .logging_config import setup_logging
from .exceptions import (
    PromptSmithError,
    TemplateError,
    ValidationError,
    ChainError,
    StorageError,
    ConfigurationError,
)

__all__ = [
    # Enums
    "TemplateCategory",
    "VariableType",
    "OutputFormat",
    "AIModel",
    # Types
    "VariableDefinition",
    "TemplateSection",
    "ChainStep",
    "ContextOptions",
    "Template",
    "StepResult",
    "ChainResult",
    "VariableValidation",
    "ChainValidation",
    "AdaptationResult",
    "RenderedTemplate",
    "UserTemplateData",
    # Configuration
    "Settings",
    "get_settings",
    "reload_settings",
    "setup_logging",
    # Exceptions
    "PromptSmithError",
    "TemplateError",
    "ValidationError",
    "ChainError",
    "StorageError",
    "ConfigurationError",
]
