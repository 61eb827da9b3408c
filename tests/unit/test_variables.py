"""Tests for the variable engine and usage history."""

import json
import logging

import pytest
from promptsmith.core.config import HistorySettings
from promptsmith.core.types import Template, VariableDefinition, VariableType
from promptsmith.storage import FileKeyValueStore, MemoryKeyValueStore
from promptsmith.templates import (
    KeyValueHistoryStore,
    MemoryHistoryStore,
    VariableEngine,
    create_variable_definitions,
    extract_variables,
    find_unresolved,
    format_variable_label,
    render_template,
    validate_variables,
)
from promptsmith.templates.history import push_recent


class TestExtractVariables:
    """Tests for placeholder extraction."""

    def test_distinct_in_order(self):
        """Test that names are unique and ordered by first appearance."""
        template = "Review {language} code: {code} ({language})"
        assert extract_variables(template) == ["language", "code"]

    def test_word_characters_only(self):
        """Test placeholder syntax."""
        assert extract_variables("{a_1} {not valid} {} {b}") == ["a_1", "b"]

    def test_no_variables(self):
        """Test plain text."""
        assert extract_variables("Nothing to fill") == []

    def test_non_string_input(self):
        """Test that malformed input yields no variables."""
        assert extract_variables(None) == []
        assert extract_variables(42) == []


class TestRenderTemplate:
    """Tests for rendering."""

    def test_full_render(self):
        """Test replacing every placeholder."""
        result = render_template("Hello {name}, from {place}", {"name": "Ada", "place": "London"})
        assert result == "Hello Ada, from London"

    def test_repeated_placeholder(self):
        """Test that every occurrence is replaced."""
        assert render_template("{x}-{x}", {"x": "1"}) == "1-1"

    def test_partial_render_keeps_placeholders(self):
        """Test that missing values leave their placeholders."""
        assert render_template("Hi {a} {b}", {"a": "1"}) == "Hi 1 {b}"

    def test_empty_string_is_substituted(self):
        """Test that an empty value still counts as provided."""
        assert render_template("[{a}]", {"a": ""}) == "[]"

    def test_none_is_absent(self):
        """Test that None leaves the placeholder."""
        assert render_template("[{a}]", {"a": None}) == "[{a}]"

    def test_value_coercion(self):
        """Test numbers and unsupported types."""
        assert render_template("{n} {f}", {"n": 3, "f": 1.5}) == "3 1.5"
        assert render_template("[{b}][{l}]", {"b": True, "l": ["x"]}) == "[][]"

    def test_non_string_template(self):
        """Test malformed template input."""
        assert render_template(None, {"a": "1"}) == ""

    def test_missing_values_mapping(self):
        """Test that None values leave every placeholder."""
        assert render_template("Hi {a}", None) == "Hi {a}"

    @pytest.mark.parametrize("values", [
        {},
        {"a": "1"},
        {"a": "1", "c": "3"},
        {"a": "1", "b": "2", "c": "3", "extra": "x"},
    ])
    def test_unresolved_are_missing_keys(self, values):
        """Test that exactly the unprovided names remain."""
        template = "{a} {b} {c} {a}"
        rendered = render_template(template, values)
        expected = [name for name in extract_variables(template) if name not in values]
        assert find_unresolved(rendered) == expected


class TestValidateVariables:
    """Tests for required-variable validation."""

    @pytest.fixture
    def template(self):
        return Template(
            id="t",
            name="T",
            template="{code} {focus}",
            variables=[
                VariableDefinition("code", "Code"),
                VariableDefinition("focus", "Focus", required=False),
            ],
        )

    def test_valid(self, template):
        """Test all required values present."""
        result = validate_variables(template, {"code": "x = 1"})
        assert result.is_valid
        assert result.missing == []

    def test_missing_required(self, template):
        """Test absent required value."""
        result = validate_variables(template, {"focus": "security"})
        assert not result.is_valid
        assert result.missing == ["code"]

    def test_blank_counts_as_missing(self, template):
        """Test whitespace-only values."""
        assert validate_variables(template, {"code": "   \n"}).missing == ["code"]

    def test_optional_never_missing(self, template):
        """Test that optional variables are not reported."""
        assert "focus" not in validate_variables(template, {}).missing

    def test_number_value_is_present(self):
        """Test that numeric values satisfy validation."""
        template = Template(
            id="t", name="T", template="{n}",
            variables=[VariableDefinition("n", "N", VariableType.NUMBER)]
        )
        assert validate_variables(template, {"n": 0}).is_valid


class TestVariableDefinitions:
    """Tests for label formatting and definition derivation."""

    @pytest.mark.parametrize("name,label", [
        ("expectedBehavior", "Expected Behavior"),
        ("first_name", "First name"),
        ("code", "Code"),
        ("userID", "User ID"),
        ("APIKey", "APIKey"),
        ("step2Output", "Step2 Output"),
    ])
    def test_format_label(self, name, label):
        """Test camelCase and snake_case labels."""
        assert format_variable_label(name) == label

    def test_one_definition_per_name(self):
        """Test derived definitions."""
        definitions = create_variable_definitions("{firstName} {age} {firstName}")
        assert [d.name for d in definitions] == ["firstName", "age"]
        first = definitions[0]
        assert first.label == "First Name"
        assert first.type == VariableType.TEXT
        assert first.required is True
        assert first.placeholder == "Enter first name..."


class TestHistoryStores:
    """Tests for history stores."""

    def test_push_recent(self):
        """Test most-recent-first ordering with dedupe and cap."""
        assert push_recent(["b", "a"], "a") == ["a", "b"]
        assert push_recent(["a"], "  ") == ["a"]
        assert push_recent([str(i) for i in range(3)], "x", max_items=3) == ["x", "0", "1"]

    def test_memory_store(self):
        """Test in-memory history."""
        store = MemoryHistoryStore(max_items=2)
        store.record("lang", "Python")
        store.record("lang", "Go")
        store.record("lang", "Rust")
        assert store.get("lang") == ["Rust", "Go"]
        assert store.get("other") == []

    def test_memory_snapshot_is_copy(self):
        """Test that snapshots do not alias internal state."""
        store = MemoryHistoryStore()
        store.record("lang", "Python")
        snapshot = store.snapshot()
        snapshot["lang"].append("mutated")
        assert store.get("lang") == ["Python"]

    def test_key_value_store_persists_json(self):
        """Test persistence under the history key."""
        kv = MemoryKeyValueStore()
        store = KeyValueHistoryStore(kv)
        store.record("lang", "Python")
        assert json.loads(kv.get("variable-history")) == {"lang": ["Python"]}
        assert KeyValueHistoryStore(kv).get("lang") == ["Python"]

    def test_corrupt_history_reads_empty(self, caplog):
        """Test that corrupt data is ignored with a warning."""
        kv = MemoryKeyValueStore()
        kv.set("variable-history", "{not json")
        store = KeyValueHistoryStore(kv)
        with caplog.at_level(logging.WARNING, logger="promptsmith"):
            assert store.snapshot() == {}
        assert "corrupt" in caplog.text

    def test_malformed_history_reads_empty(self):
        """Test non-object JSON."""
        kv = MemoryKeyValueStore()
        kv.set("variable-history", "[1, 2]")
        assert KeyValueHistoryStore(kv).snapshot() == {}

    def test_load_and_clear(self):
        """Test replacing and clearing history."""
        kv = MemoryKeyValueStore()
        store = KeyValueHistoryStore(kv, max_items=2)
        store.load({"lang": ["a", "b", "c"]})
        assert store.get("lang") == ["a", "b"]
        store.clear()
        assert store.snapshot() == {}

    def test_clear_failure_is_logged(self, tmp_path, caplog):
        """Test that a failed clear warns instead of raising."""
        (tmp_path / "variable-history.json").mkdir()
        store = KeyValueHistoryStore(FileKeyValueStore(str(tmp_path)))
        with caplog.at_level(logging.WARNING, logger="promptsmith"):
            store.clear()
        assert "Failed to clear variable history" in caplog.text


class TestVariableEngine:
    """Tests for the VariableEngine class."""

    def test_track_and_suggest(self):
        """Test suggestions come back newest first."""
        engine = VariableEngine()
        engine.track_usage("language", "Python")
        engine.track_usage("language", "Go")
        engine.track_usage("language", "Python")
        assert engine.get_suggestions("language") == ["Python", "Go"]

    def test_blank_values_ignored(self):
        """Test that blank values are not tracked."""
        engine = VariableEngine()
        engine.track_usage("language", "")
        engine.track_usage("language", "   ")
        engine.track_usage("language", None)
        assert engine.get_suggestions("language") == []

    def test_history_cap(self):
        """Test that at most max_items values are kept."""
        engine = VariableEngine()
        for i in range(15):
            engine.track_usage("n", f"value-{i}")
        history = engine.get_history()["n"]
        assert len(history) == 10
        assert history[0] == "value-14"

    def test_suggestion_limit(self):
        """Test default and explicit limits."""
        engine = VariableEngine(settings=HistorySettings(suggestion_limit=2))
        for value in ["a", "b", "c"]:
            engine.track_usage("x", value)
        assert engine.get_suggestions("x") == ["c", "b"]
        assert engine.get_suggestions("x", limit=3) == ["c", "b", "a"]
        assert engine.get_suggestions("x", limit=0) == []

    def test_track_values(self):
        """Test tracking a full mapping."""
        engine = VariableEngine()
        engine.track_values({"a": "1", "b": 2, "c": ""})
        assert engine.get_history() == {"a": ["1"], "b": ["2"]}

    def test_engines_do_not_share_history(self):
        """Test that history is per injected store."""
        first = VariableEngine()
        second = VariableEngine()
        first.track_usage("x", "1")
        assert second.get_suggestions("x") == []

    def test_clear_history(self):
        """Test clearing."""
        engine = VariableEngine(history_store=KeyValueHistoryStore(MemoryKeyValueStore()))
        engine.track_usage("x", "1")
        engine.clear_history()
        assert engine.get_history() == {}

    def test_render_helpers(self):
        """Test rendering helpers on the engine."""
        engine = VariableEngine()
        assert engine.extract("{a}{b}") == ["a", "b"]
        assert engine.render("{a}{b}", {"a": "1"}) == "1{b}"
        assert len(engine.create_definitions("{a}")) == 1
