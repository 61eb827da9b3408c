"""
PromptSmith - Prompt templates for LLM workflows

Reusable prompt templates with {variable} placeholders, multi-step prompt
chains, and model-specific adaptation.

Basic Usage:
    >>> from promptsmith import PromptSmith
    >>> ps = PromptSmith()
    >>>
    >>> # Render a catalog template
    >>> rendered = ps.render("coding-code-review", {"language": "Python", "code": "x = 1"})
    >>> print(rendered.rendered_prompt)
    >>>
    >>> # Run a chain template with your own executor
    >>> result = await ps.run("writing-research-article", values, executor=my_llm_call)
    >>> print(result.final_output)

For more control, use the individual modules:
    - promptsmith.templates: Variable engine, chain executor, context adapter
    - promptsmith.catalog: Curated templates, favorites, custom templates
    - promptsmith.storage: Key-value persistence backends
    - promptsmith.tokenizers: Token counting
    - promptsmith.cli: Command-line interface
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .core.types import (
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
from .core.config import Settings, get_settings
from .core.exceptions import (
    PromptSmithError,
    TemplateError,
    ValidationError,
    ChainError,
    StorageError,
    ConfigurationError,
)
from .storage import KeyValueStore, create_store
from .catalog import TemplateCatalog
from .templates import (
    VariableEngine,
    KeyValueHistoryStore,
    TemplateService,
    PromptExecutor,
    validate_chain,
    create_simple_chain,
    execute_chain,
    apply_context_adaptations,
)

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Main class
    "PromptSmith",
    # Enums
    "TemplateCategory",
    "VariableType",
    "OutputFormat",
    "AIModel",
    # Core types
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
    # Exceptions
    "PromptSmithError",
    "TemplateError",
    "ValidationError",
    "ChainError",
    "StorageError",
    "ConfigurationError",
    # Individual components (for advanced use)
    "TemplateCatalog",
    "TemplateService",
    "VariableEngine",
    "create_simple_chain",
]


class PromptSmith:
    """
    Main interface for template operations.

    All components share one KeyValueStore, so favorites, custom
    templates, and variable history persist together.

    Example:
        >>> ps = PromptSmith()
        >>> ps.render("writing-blog-outline", values, model="llama")
        >>> result = ps.run_sync("writing-research-article", values, executor)
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize PromptSmith.

        Args:
            store: Persistence for user data (configured backend if None)
            settings: Settings (defaults to the global settings)
        """
        self.settings = settings or get_settings()
        self._store = store

        # Initialize components lazily
        self._catalog: Optional[TemplateCatalog] = None
        self._engine: Optional[VariableEngine] = None
        self._service: Optional[TemplateService] = None

    @property
    def store(self) -> KeyValueStore:
        """Get or create the shared store."""
        if self._store is None:
            self._store = create_store(self.settings.storage)
        return self._store

    @property
    def catalog(self) -> TemplateCatalog:
        """Get or create the catalog instance."""
        if self._catalog is None:
            self._catalog = TemplateCatalog(store=self.store)
        return self._catalog

    @property
    def engine(self) -> VariableEngine:
        """Get or create the variable engine instance."""
        if self._engine is None:
            history = KeyValueHistoryStore(
                self.store,
                key=self.settings.history.storage_key,
                max_items=self.settings.history.max_items,
            )
            self._engine = VariableEngine(history_store=history, settings=self.settings.history)
        return self._engine

    @property
    def service(self) -> TemplateService:
        """Get or create the template service instance."""
        if self._service is None:
            self._service = TemplateService(
                catalog=self.catalog,
                engine=self.engine,
                settings=self.settings,
            )
        return self._service

    # Templates
    def get_template(self, template_id: str) -> Template:
        return self.service.get_template(template_id)

    def search(self, query: str) -> List[Template]:
        return self.catalog.search(query)

    def render(
        self,
        template: Union[str, Template],
        values: Mapping[str, Any],
        model: Optional[Union[str, AIModel]] = None,
        output_format: Optional[Union[str, OutputFormat]] = None,
        optimize: Optional[bool] = None,
        exclude_sections: Iterable[str] = ()
    ) -> RenderedTemplate:
        """
        Render a template into a ready-to-send prompt.

        Args:
            template: Template or template id
            values: Variable values
            model: Target model
            output_format: Desired output format
            optimize: Apply token optimization
            exclude_sections: Ids of optional sections to leave out

        Returns:
            RenderedTemplate
        """
        return self.service.render(
            template,
            values,
            model=model,
            output_format=output_format,
            optimize=optimize,
            exclude_sections=exclude_sections,
        )

    # Execution
    async def run(
        self,
        template: Union[str, Template],
        values: Mapping[str, Any],
        executor: PromptExecutor,
        **kwargs
    ) -> ChainResult:
        """
        Execute a template (single prompt or chain) with an executor.

        Args:
            template: Template or template id
            values: Variable values
            executor: Callable that turns a prompt into generated text
            **kwargs: model, output_format, optimize, enforce_validation

        Returns:
            ChainResult
        """
        return await self.service.run(template, values, executor, **kwargs)

    def run_sync(
        self,
        template: Union[str, Template],
        values: Mapping[str, Any],
        executor: PromptExecutor,
        **kwargs
    ) -> ChainResult:
        """Synchronous version of run."""
        return self.service.run_sync(template, values, executor, **kwargs)

    async def run_prompts(
        self,
        prompts: List[str],
        values: Mapping[str, Any],
        executor: PromptExecutor,
    ) -> ChainResult:
        """Run ad-hoc prompts as a linear chain (see create_simple_chain)."""
        return await execute_chain(create_simple_chain(prompts), values, executor)

    def validate_chain(self, template: Union[str, Template]) -> ChainValidation:
        template = self.get_template(template) if isinstance(template, str) else template
        return validate_chain(template.chain_steps or [])

    # Adaptation
    def adapt(
        self,
        prompt: str,
        model: Optional[Union[str, AIModel]] = None,
        output_format: Optional[Union[str, OutputFormat]] = None,
        optimize: bool = False
    ) -> AdaptationResult:
        """Apply model, format, and optimization adaptations to a prompt."""
        return apply_context_adaptations(prompt, model, output_format, optimize)

    def count_tokens(self, text: str, tokenizer: Optional[str] = None) -> int:
        """Count tokens with the named (or default) tokenizer."""
        from .tokenizers import count_tokens
        return count_tokens(text, tokenizer or self.settings.tokenizer.default_tokenizer)

    # User data
    def suggestions(self, name: str, limit: Optional[int] = None) -> List[str]:
        return self.service.suggestions(name, limit)

    def export_user_data(self) -> UserTemplateData:
        return self.service.export_user_data()

    def import_user_data(self, data: Union[UserTemplateData, Dict[str, Any]]) -> None:
        self.service.import_user_data(data)
