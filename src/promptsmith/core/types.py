"""Core type definitions for the template system."""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from enum import Enum


class TemplateCategory(Enum):
    """Category of a catalog template."""
    CODING = "coding"
    WRITING = "writing"
    MARKETING = "marketing"
    PRODUCTIVITY = "productivity"
    CREATIVE = "creative"


class VariableType(Enum):
    """Input type of a template variable."""
    TEXT = "text"
    TEXTAREA = "textarea"  # Multi-line text
    SELECT = "select"      # Choice from options
    NUMBER = "number"


class OutputFormat(Enum):
    """Output format requested from the model."""
    TEXT = "text"
    MARKDOWN = "markdown"
    JSON = "json"
    CODE = "code"

    @property
    def instruction(self) -> str:
        """Instruction appended to a prompt for this format."""
        return _FORMAT_INSTRUCTIONS[self]


class AIModel(Enum):
    """Target model a prompt is adapted for."""
    GPT_4 = "gpt-4"
    GPT_4O_MINI = "gpt-4o-mini"
    CLAUDE = "claude"
    GEMINI = "gemini"
    LLAMA = "llama"

    @property
    def prefix(self) -> str:
        """System-style prefix prepended for this model ('' if none)."""
        return _MODEL_PREFIXES[self]


_FORMAT_INSTRUCTIONS: Dict[OutputFormat, str] = {
    OutputFormat.TEXT: "",
    OutputFormat.MARKDOWN: (
        "\n\nFormat your response using Markdown with headers, lists, "
        "and code blocks where appropriate."
    ),
    OutputFormat.JSON: (
        "\n\nRespond ONLY with valid JSON. Do not include any text before "
        "or after the JSON object."
    ),
    OutputFormat.CODE: (
        "\n\nRespond with code only. Include comments for explanation. "
        "Do not include markdown code fences."
    ),
}

_MODEL_PREFIXES: Dict[AIModel, str] = {
    AIModel.GPT_4: "",
    AIModel.GPT_4O_MINI: "",
    AIModel.CLAUDE: "",
    AIModel.GEMINI: "",
    AIModel.LLAMA: "You are a helpful AI assistant. ",
}


@dataclass
class VariableDefinition:
    """Definition of a template variable (used in the template as {name})."""
    name: str
    label: str
    type: VariableType = VariableType.TEXT
    required: bool = True
    default_value: Optional[str] = None
    placeholder: Optional[str] = None
    options: Optional[List[str]] = None  # For SELECT type
    suggestions: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "label": self.label,
            "type": self.type.value,
            "required": self.required,
            "default_value": self.default_value,
            "placeholder": self.placeholder,
            "options": self.options,
            "suggestions": self.suggestions,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VariableDefinition":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            label=data.get("label") or data["name"],
            type=VariableType(data.get("type", "text")),
            required=data.get("required", True),
            default_value=data.get("default_value"),
            placeholder=data.get("placeholder"),
            options=data.get("options"),
            suggestions=data.get("suggestions"),
        )


@dataclass
class TemplateSection:
    """A composable section of a template body."""
    id: str
    name: str
    content: str
    is_optional: bool = False
    order: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "is_optional": self.is_optional,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TemplateSection":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            content=data.get("content", ""),
            is_optional=data.get("is_optional", False),
            order=data.get("order", 0),
        )


@dataclass
class ChainStep:
    """
    A single step of a prompt chain.

    The step's prompt is rendered against the shared chain context; its
    output is stored back into the context under output_variable.
    """
    id: str
    order: int
    name: str
    prompt: str
    output_variable: str = ""
    input_variables: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "order": self.order,
            "name": self.name,
            "prompt": self.prompt,
            "output_variable": self.output_variable,
            "input_variables": list(self.input_variables),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChainStep":
        return cls(
            id=data["id"],
            order=int(data["order"]),
            name=data.get("name", data["id"]),
            prompt=data.get("prompt", ""),
            output_variable=data.get("output_variable", ""),
            input_variables=list(data.get("input_variables", [])),
        )


@dataclass
class ContextOptions:
    """Context adaptation options supported by a template."""
    target_models: List[AIModel] = field(default_factory=list)
    output_formats: List[OutputFormat] = field(default_factory=list)
    token_optimization: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_models": [m.value for m in self.target_models],
            "output_formats": [f.value for f in self.output_formats],
            "token_optimization": self.token_optimization,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContextOptions":
        return cls(
            target_models=[AIModel(m) for m in data.get("target_models", [])],
            output_formats=[OutputFormat(f) for f in data.get("output_formats", [])],
            token_optimization=data.get("token_optimization", False),
        )


@dataclass
class Template:
    """
    A prompt template - the fundamental catalog entry.

    The body contains {variable} placeholders. Templates may optionally be
    split into composable sections or define a chain of dependent steps.
    """
    id: str
    name: str
    template: str
    category: TemplateCategory = TemplateCategory.PRODUCTIVITY
    description: str = ""
    variables: List[VariableDefinition] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    sections: Optional[List[TemplateSection]] = None
    chain_steps: Optional[List[ChainStep]] = None
    context_options: Optional[ContextOptions] = None
    is_custom: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def has_chain(self) -> bool:
        """Whether this template defines multi-step composition."""
        return bool(self.chain_steps)

    def get_variable(self, name: str) -> Optional[VariableDefinition]:
        """Get a variable definition by name."""
        for variable in self.variables:
            if variable.name == name:
                return variable
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (JSON-serializable)."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "template": self.template,
            "variables": [v.to_dict() for v in self.variables],
            "tags": list(self.tags),
            "sections": [s.to_dict() for s in self.sections] if self.sections is not None else None,
            "chain_steps": [s.to_dict() for s in self.chain_steps] if self.chain_steps is not None else None,
            "context_options": self.context_options.to_dict() if self.context_options else None,
            "is_custom": self.is_custom,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Template":
        """Create from dictionary."""
        sections = data.get("sections")
        chain_steps = data.get("chain_steps")
        context_options = data.get("context_options")
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            template=data.get("template", ""),
            category=TemplateCategory(data.get("category", "productivity")),
            description=data.get("description", ""),
            variables=[VariableDefinition.from_dict(v) for v in data.get("variables", [])],
            tags=list(data.get("tags", [])),
            sections=[TemplateSection.from_dict(s) for s in sections] if sections is not None else None,
            chain_steps=[ChainStep.from_dict(s) for s in chain_steps] if chain_steps is not None else None,
            context_options=ContextOptions.from_dict(context_options) if context_options else None,
            is_custom=data.get("is_custom", False),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass(frozen=True)
class StepResult:
    """Result of executing a single chain step."""
    step_id: str
    step_name: str
    prompt: str
    output: str
    output_variable: str


@dataclass
class ChainResult:
    """Result of executing a full chain."""
    success: bool
    steps: List[StepResult] = field(default_factory=list)
    final_output: str = ""
    context: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def steps_completed(self) -> int:
        """Number of steps that completed."""
        return len(self.steps)


@dataclass
class VariableValidation:
    """Result of validating variable values against a template."""
    is_valid: bool
    missing: List[str] = field(default_factory=list)


@dataclass
class ChainValidation:
    """Result of validating chain step dependencies."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class AdaptationResult:
    """Result of applying context adaptations to a prompt."""
    prompt: str
    token_count: int
    savings: int = 0


@dataclass
class RenderedTemplate:
    """A fully rendered template."""
    template: Template
    rendered_prompt: str
    variables: Dict[str, str]
    target_model: Optional[AIModel] = None
    output_format: Optional[OutputFormat] = None
    token_optimized: bool = False
    token_count: int = 0


@dataclass
class UserTemplateData:
    """User-owned template data for backup and sync."""
    favorites: List[str] = field(default_factory=list)
    custom_templates: List[Template] = field(default_factory=list)
    variable_history: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "favorites": list(self.favorites),
            "custom_templates": [t.to_dict() for t in self.custom_templates],
            "variable_history": {k: list(v) for k, v in self.variable_history.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserTemplateData":
        return cls(
            favorites=list(data.get("favorites", [])),
            custom_templates=[Template.from_dict(t) for t in data.get("custom_templates", [])],
            variable_history={k: list(v) for k, v in data.get("variable_history", {}).items()},
        )
