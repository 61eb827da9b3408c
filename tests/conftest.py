"""Shared pytest fixtures for PromptSmith tests."""

import logging
import os
import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from promptsmith.core.config import Settings, get_settings
from promptsmith.core.types import (
    ChainStep,
    Template,
    TemplateCategory,
    TemplateSection,
    VariableDefinition,
    VariableType,
)
from promptsmith.storage import MemoryKeyValueStore


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate every test from PS_* environment variables and .env files."""
    for name in list(os.environ):
        if name.startswith("PS_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

    # setup_logging (called by the CLI) attaches stream handlers
    logger = logging.getLogger("promptsmith")
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings():
    """Default settings with in-memory storage."""
    return Settings()


# Sample templates for testing
@pytest.fixture
def greeting_template():
    """A plain template with one required and one optional variable."""
    return Template(
        id="test-greeting",
        name="Greeting",
        template="Hello {name}! {note}",
        category=TemplateCategory.WRITING,
        variables=[
            VariableDefinition("name", "Name"),
            VariableDefinition("note", "Note", required=False),
        ],
        tags=["greeting", "test"],
    )


@pytest.fixture
def sectioned_template():
    """A template composed of sections, one of them optional."""
    return Template(
        id="test-sections",
        name="Sectioned",
        template="",
        variables=[VariableDefinition("topic", "Topic")],
        sections=[
            TemplateSection("outro", "Outro", "Be concise.", order=3),
            TemplateSection("intro", "Intro", "Explain {topic}.", order=1),
            TemplateSection("extra", "Extra", "Add examples.", is_optional=True, order=2),
        ],
    )


@pytest.fixture
def two_step_chain():
    """Outline then expand."""
    return [
        ChainStep(
            id="s1", order=1, name="Outline",
            prompt="Outline {topic}",
            output_variable="outline",
        ),
        ChainStep(
            id="s2", order=2, name="Expand",
            prompt="Expand {outline}",
            output_variable="article",
            input_variables=["outline"],
        ),
    ]


@pytest.fixture
def chain_template(two_step_chain):
    """A template that runs the two-step chain."""
    return Template(
        id="test-chain",
        name="Chained",
        template="Write about {topic}",
        variables=[VariableDefinition("topic", "Topic", VariableType.TEXT)],
        chain_steps=two_step_chain,
    )


# Mock executors
class MockExecutor:
    """Records prompts and returns canned or echoed responses."""

    def __init__(self, responses=None, fail_on=None):
        self.responses = list(responses or [])
        self.fail_on = fail_on
        self.calls = []

    async def __call__(self, prompt):
        self.calls.append(prompt)
        if self.fail_on is not None and len(self.calls) == self.fail_on:
            raise RuntimeError("executor failed")
        if self.responses:
            return self.responses.pop(0)
        return f"out:{prompt}"


@pytest.fixture
def mock_executor():
    """Async executor echoing prompts with an "out:" prefix."""
    return MockExecutor()


@pytest.fixture
def make_executor():
    """Factory for configured mock executors."""
    return MockExecutor


@pytest.fixture
def memory_store():
    """Empty in-memory key-value store."""
    return MemoryKeyValueStore()
