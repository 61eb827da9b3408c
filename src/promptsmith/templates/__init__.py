"""Template module - variable engine, chain executor, context adapter, and service."""

from .variables import (
    VARIABLE_PATTERN,
    VariableEngine,
    extract_variables,
    render_template,
    find_unresolved,
    validate_variables,
    format_variable_label,
    create_variable_definitions,
)
from .history import (
    MAX_HISTORY_ITEMS,
    HistoryStore,
    MemoryHistoryStore,
    KeyValueHistoryStore,
)
from .chain import (
    PromptExecutor,
    PromptTransform,
    validate_chain,
    build_step_prompt,
    execute_step,
    execute_chain,
    execute_chain_sync,
    create_simple_chain,
)
from .context import (
    REDUNDANT_PHRASES,
    estimate_tokens,
    optimize_tokens,
    add_format_instructions,
    adapt_for_model,
    apply_context_adaptations,
)
from .service import TemplateService

__all__ = [
    # Variables
    "VARIABLE_PATTERN",
    "VariableEngine",
    "extract_variables",
    "render_template",
    "find_unresolved",
    "validate_variables",
    "format_variable_label",
    "create_variable_definitions",
    # History
    "MAX_HISTORY_ITEMS",
    "HistoryStore",
    "MemoryHistoryStore",
    "KeyValueHistoryStore",
    # Chains
    "PromptExecutor",
    "PromptTransform",
    "validate_chain",
    "build_step_prompt",
    "execute_step",
    "execute_chain",
    "execute_chain_sync",
    "create_simple_chain",
    # Context
    "REDUNDANT_PHRASES",
    "estimate_tokens",
    "optimize_tokens",
    "add_format_instructions",
    "adapt_for_model",
    "apply_context_adaptations",
    # Service
    "TemplateService",
]
