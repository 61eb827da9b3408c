"""Custom exceptions for the template system."""

from typing import Optional, Dict, Any, List


class PromptSmithError(Exception):
    """Base exception for all promptsmith errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def _add_detail(self, name: str, value: Any) -> None:
        if value:
            self.details[name] = value

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class TemplateError(PromptSmithError):
    """Unknown template id, or a catalog change that is not allowed."""

    def __init__(self, message: str, template_id: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.template_id = template_id
        self._add_detail("template_id", template_id)


class ValidationError(PromptSmithError):
    """Required template variables are missing."""

    def __init__(self, message: str, missing: Optional[List[str]] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.missing = list(missing or [])
        self._add_detail("missing", self.missing)


class ChainError(PromptSmithError):
    """A chain step could not produce its output."""

    def __init__(self, message: str, step: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.step = step
        self._add_detail("step", step)


class StorageError(PromptSmithError):
    """Reading or writing the key-value store failed."""

    def __init__(self, message: str, key: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.key = key
        self._add_detail("key", key)


class ConfigurationError(PromptSmithError):
    """A setting has an unsupported value."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.config_key = config_key
        self._add_detail("config_key", config_key)
