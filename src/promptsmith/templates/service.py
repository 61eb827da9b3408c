"""
Template service: the main entry point for using templates.

Ties the catalog, the variable engine, the context adapter, and the chain
executor together. Rendering and running apply the same pipeline:

    validate -> track usage -> render -> adapt (-> execute)
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from ..catalog import TemplateCatalog
from ..core.config import Settings, get_settings
from ..core.exceptions import TemplateError, ValidationError
from ..core.types import (
    AIModel,
    ChainResult,
    ChainStep,
    OutputFormat,
    RenderedTemplate,
    Template,
    UserTemplateData,
)
from ..storage import create_store
from .chain import PromptExecutor, execute_chain
from .context import adapt_for_model, apply_context_adaptations, as_format, as_model
from .history import KeyValueHistoryStore
from .variables import VariableEngine, coerce_value

logger = logging.getLogger(__name__)

# Context key holding the output of a single-template run
OUTPUT_VARIABLE = "output"

TemplateRef = Union[str, Template]


class TemplateService:
    """
    High-level operations on catalog templates.

    Example:
        >>> service = TemplateService()
        >>> rendered = service.render("coding-code-review", {
        ...     "language": "Python",
        ...     "code": "print('hi')",
        ... })
        >>> print(rendered.rendered_prompt)
    """

    def __init__(
        self,
        catalog: Optional[TemplateCatalog] = None,
        engine: Optional[VariableEngine] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize the service.

        With no catalog or engine, both are built on the configured
        storage backend so favorites, custom templates, and variable
        history share one store.

        Args:
            catalog: Template catalog
            engine: Variable engine holding usage history
            settings: Settings (defaults to the global settings)
        """
        self.settings = settings or get_settings()

        store = None
        if catalog is None or engine is None:
            store = create_store(self.settings.storage)

        self.catalog = catalog or TemplateCatalog(store=store)
        self.engine = engine or VariableEngine(
            history_store=KeyValueHistoryStore(
                store,
                key=self.settings.history.storage_key,
                max_items=self.settings.history.max_items,
            ),
            settings=self.settings.history,
        )

    def get_template(self, template: TemplateRef) -> Template:
        """
        Resolve a template or template id.

        Raises:
            TemplateError: If no template has the given id
        """
        if isinstance(template, Template):
            return template
        found = self.catalog.get(template)
        if found is None:
            raise TemplateError(f"Template not found: {template}", template_id=template)
        return found

    def compose(self, template: TemplateRef, exclude_sections: Iterable[str] = ()) -> str:
        """
        Build the template body from its sections.

        Sections are joined by order with blank lines. Only optional
        sections can be excluded; required ones are always kept.
        """
        template = self.get_template(template)
        if not template.sections:
            return template.template

        excluded = set(exclude_sections)
        sections = sorted(template.sections, key=lambda s: s.order)
        return "\n\n".join(
            section.content
            for section in sections
            if not (section.is_optional and section.id in excluded)
        )

    def resolve_values(self, template: TemplateRef, values: Mapping[str, Any]) -> Dict[str, str]:
        """
        Merge provided values over the template's defaults.

        Every defined variable gets an entry (its default, or ""), so
        optional placeholders left blank do not survive rendering.
        """
        template = self.get_template(template)
        resolved: Dict[str, str] = {
            variable.name: variable.default_value or ""
            for variable in template.variables
        }
        for name, value in values.items():
            text = coerce_value(value)
            if text is not None:
                resolved[name] = text
        return resolved

    def _check_required(self, template: Template, values: Mapping[str, Any]) -> None:
        validation = self.engine.validate(template, values)
        if not validation.is_valid:
            raise ValidationError(
                f"Missing required variables: {', '.join(validation.missing)}",
                missing=validation.missing
            )

    def _adaptation_defaults(
        self,
        model: Optional[Union[str, AIModel]],
        output_format: Optional[Union[str, OutputFormat]],
        optimize: Optional[bool]
    ):
        adapter = self.settings.adapter
        model = model or adapter.default_model
        output_format = output_format or adapter.default_format
        if optimize is None:
            optimize = adapter.optimize_tokens
        return (
            as_model(model) if model else None,
            as_format(output_format) if output_format else None,
            optimize,
        )

    def render(
        self,
        template: TemplateRef,
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
            model: Target model (default from settings)
            output_format: Output format (default from settings)
            optimize: Apply token optimization (default from settings)
            exclude_sections: Ids of optional sections to leave out

        Returns:
            RenderedTemplate

        Raises:
            TemplateError: If the template id is unknown
            ValidationError: If required variables are missing
        """
        template = self.get_template(template)
        resolved = self.resolve_values(template, values)
        self._check_required(template, resolved)
        model, output_format, optimize = self._adaptation_defaults(model, output_format, optimize)

        self.engine.track_values(values)
        body = self.compose(template, exclude_sections)
        rendered = self.engine.render(body, resolved)

        adaptation = apply_context_adaptations(
            rendered,
            model=model,
            output_format=output_format,
            optimize=optimize,
        )

        return RenderedTemplate(
            template=template,
            rendered_prompt=adaptation.prompt,
            variables=resolved,
            target_model=model,
            output_format=output_format,
            token_optimized=optimize,
            token_count=adaptation.token_count,
        )

    async def run(
        self,
        template: TemplateRef,
        values: Mapping[str, Any],
        executor: PromptExecutor,
        model: Optional[Union[str, AIModel]] = None,
        output_format: Optional[Union[str, OutputFormat]] = None,
        optimize: Optional[bool] = None,
        enforce_validation: Optional[bool] = None
    ) -> ChainResult:
        """
        Execute a template with the given executor.

        Chain templates run their steps in order. Plain templates run as a
        single step whose output is stored under "output". The model prefix
        goes on every prompt. Token optimization and the format instruction
        only go on the final step, so intermediate outputs reach later steps
        untouched.

        Raises:
            TemplateError: If the template id is unknown
            ValidationError: If required variables are missing
        """
        template = self.get_template(template)
        resolved = self.resolve_values(template, values)
        self._check_required(template, resolved)
        model, output_format, optimize = self._adaptation_defaults(model, output_format, optimize)
        if enforce_validation is None:
            enforce_validation = self.settings.chain.enforce_validation

        self.engine.track_values(values)

        if template.has_chain:
            steps = template.chain_steps
        else:
            steps = [ChainStep(
                id=template.id,
                order=1,
                name=template.name,
                prompt=self.compose(template),
                output_variable=OUTPUT_VARIABLE,
            )]

        def prefix(prompt: str) -> str:
            return adapt_for_model(prompt, model) if model else prompt

        def finish(prompt: str) -> str:
            return apply_context_adaptations(
                prompt,
                model=model,
                output_format=output_format,
                optimize=optimize,
            ).prompt

        logger.debug("Running template %s (%d steps)", template.id, len(steps))
        return await execute_chain(
            steps,
            resolved,
            executor,
            transform=prefix,
            enforce_validation=enforce_validation,
            final_transform=finish,
        )

    def run_sync(
        self,
        template: TemplateRef,
        values: Mapping[str, Any],
        executor: PromptExecutor,
        **kwargs
    ) -> ChainResult:
        """Synchronous version of run."""
        return asyncio.run(self.run(template, values, executor, **kwargs))

    def suggestions(self, name: str, limit: Optional[int] = None):
        """Recently used values for a variable, newest first."""
        return self.engine.get_suggestions(name, limit)

    def export_user_data(self) -> UserTemplateData:
        """Export favorites, custom templates, and variable history."""
        return self.catalog.export_data(self.engine.get_history())

    def import_user_data(self, data: Union[UserTemplateData, Dict[str, Any]]) -> None:
        """
        Import user data. With a dict, only the keys present are replaced.
        """
        if isinstance(data, UserTemplateData):
            data = data.to_dict()
        self.catalog.import_data(data)
        if "variable_history" in data:
            self.engine.history_store.load(dict(data["variable_history"] or {}))
