"""
Variable engine: placeholder extraction, rendering, and auto-suggestions.

Templates use single-brace placeholders such as ``{language}``. Rendering
is partial: a placeholder whose name has no value is left in place, so a
template can be rendered repeatedly while a form is being filled in.
"""

import re
from typing import Any, Dict, List, Mapping, Optional

from ..core.config import HistorySettings, get_settings
from ..core.types import (
    Template,
    VariableDefinition,
    VariableType,
    VariableValidation,
)
from .history import HistoryStore, MemoryHistoryStore

# Matches {variableName}
VARIABLE_PATTERN = re.compile(r"\{(\w+)\}")


def coerce_value(value: Any) -> Optional[str]:
    """Text for a provided value. None means "not provided"."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def extract_variables(template: str) -> List[str]:
    """
    Extract variable names from a template string.

    Args:
        template: Template string with {variables}

    Returns:
        Distinct variable names in order of first appearance
    """
    if not isinstance(template, str):
        return []
    return list(dict.fromkeys(VARIABLE_PATTERN.findall(template)))


def render_template(template: str, values: Optional[Mapping[str, Any]]) -> str:
    """
    Replace {variables} with values.

    A placeholder is substituted when its name is present in values, even
    if the value is an empty string. Otherwise the placeholder is kept.

    Args:
        template: Template string with {variables}
        values: Variable values to inject (None substitutes nothing)

    Returns:
        Rendered string
    """
    if not isinstance(template, str):
        return ""
    if values is None:
        values = {}

    def replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name not in values:
            return match.group(0)
        text = coerce_value(values[name])
        return match.group(0) if text is None else text

    return VARIABLE_PATTERN.sub(replace, template)


def find_unresolved(text: str) -> List[str]:
    """Names of placeholders still present in a rendered string."""
    return extract_variables(text)


def validate_variables(
    template: Template,
    values: Mapping[str, Any]
) -> VariableValidation:
    """
    Check that every required variable has a non-blank value.

    Optional variables never fail validation.

    Args:
        template: Template whose variable definitions are checked
        values: Variable values provided

    Returns:
        VariableValidation with the missing variable names
    """
    missing: List[str] = []

    for variable in template.variables:
        text = coerce_value(values.get(variable.name)) or ""
        if variable.required and not text.strip():
            missing.append(variable.name)

    return VariableValidation(is_valid=not missing, missing=missing)


def format_variable_label(name: str) -> str:
    """
    Turn a camelCase or snake_case name into a display label.

    Example:
        >>> format_variable_label("expectedBehavior")
        'Expected Behavior'
    """
    spaced = re.sub(r"(?<=[a-z0-9])([A-Z])", r" \1", name)
    words = spaced.replace("_", " ").split()
    label = " ".join(words)
    return label[:1].upper() + label[1:]


def create_variable_definitions(template: str) -> List[VariableDefinition]:
    """
    Create basic definitions for every variable found in a template.

    Args:
        template: Template string

    Returns:
        One required free-text VariableDefinition per variable
    """
    definitions = []
    for name in extract_variables(template):
        label = format_variable_label(name)
        definitions.append(VariableDefinition(
            name=name,
            label=label,
            type=VariableType.TEXT,
            placeholder=f"Enter {label.lower()}...",
            required=True,
        ))
    return definitions


class VariableEngine:
    """
    Variable handling with usage history for auto-suggestions.

    Wraps the module-level rendering functions and an injected
    HistoryStore, so the same engine can run against memory in tests
    and against a persistent store in an application.
    """

    def __init__(
        self,
        history_store: Optional[HistoryStore] = None,
        settings: Optional[HistorySettings] = None
    ):
        """
        Initialize the variable engine.

        Args:
            history_store: Store for variable usage history (in-memory if None)
            settings: History settings (defaults to the global settings)
        """
        self.settings = settings or get_settings().history
        self.history_store = history_store or MemoryHistoryStore(
            max_items=self.settings.max_items
        )

    # Rendering
    def extract(self, template: str) -> List[str]:
        return extract_variables(template)

    def render(self, template: str, values: Mapping[str, Any]) -> str:
        return render_template(template, values)

    def validate(self, template: Template, values: Mapping[str, Any]) -> VariableValidation:
        return validate_variables(template, values)

    def create_definitions(self, template: str) -> List[VariableDefinition]:
        return create_variable_definitions(template)

    # History
    def track_usage(self, name: str, value: Any) -> None:
        """
        Track a variable value for auto-suggestions.

        Blank values are ignored.
        """
        text = coerce_value(value)
        if not text or not text.strip():
            return
        self.history_store.record(name, text)

    def track_values(self, values: Mapping[str, Any]) -> None:
        """Track every value in a mapping."""
        for name, value in values.items():
            self.track_usage(name, value)

    def get_suggestions(self, name: str, limit: Optional[int] = None) -> List[str]:
        """
        Get auto-suggestions for a variable.

        Args:
            name: Name of the variable
            limit: Max suggestions to return (default from settings, 5)

        Returns:
            Most recently used values, newest first
        """
        if limit is None:
            limit = self.settings.suggestion_limit
        if limit <= 0:
            return []
        return self.history_store.get(name)[:limit]

    def get_history(self) -> Dict[str, List[str]]:
        """Get the full usage history."""
        return self.history_store.snapshot()

    def clear_history(self) -> None:
        """Clear all usage history."""
        self.history_store.clear()
