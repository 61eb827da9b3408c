"""Tests for the psm command-line interface."""

import pytest
from click.testing import CliRunner

from promptsmith import __version__
from promptsmith.cli.main import cli

LLAMA_PREFIX = "You are a helpful AI assistant. "


@pytest.fixture
def runner():
    return CliRunner()


class TestListAndShow:
    """Tests for browsing templates."""

    def test_list_templates(self, runner):
        """Test listing every template."""
        result = runner.invoke(cli, ["list-templates"])
        assert result.exit_code == 0
        assert "coding-code-review" in result.output
        assert "writing-research-article" in result.output

    def test_list_by_category(self, runner):
        """Test the category filter."""
        result = runner.invoke(cli, ["list-templates", "-c", "marketing"])
        assert result.exit_code == 0
        assert "marketing-ad-copy" in result.output
        assert "coding-code-review" not in result.output

    def test_list_no_match(self, runner):
        """Test an empty search."""
        result = runner.invoke(cli, ["list-templates", "-q", "zzzz-nothing"])
        assert result.exit_code == 0
        assert "No templates found" in result.output

    def test_show(self, runner):
        """Test showing a template body."""
        result = runner.invoke(cli, ["show", "coding-bug-fix"])
        assert result.exit_code == 0
        assert "I have a bug in my {language} code." in result.output

    def test_show_unknown(self, runner):
        """Test an unknown id."""
        result = runner.invoke(cli, ["show", "nope"])
        assert result.exit_code != 0
        assert "Template not found" in result.output


class TestRender:
    """Tests for the render command."""

    def test_render(self, runner):
        """Test rendering with -V values."""
        result = runner.invoke(cli, [
            "render", "coding-code-review",
            "-V", "language=Python",
            "-V", "code=x = 1",
        ])
        assert result.exit_code == 0
        assert "```Python\nx = 1\n```" in result.output

    def test_render_with_adaptation(self, runner):
        """Test model and format options."""
        result = runner.invoke(cli, [
            "render", "coding-code-review",
            "-V", "language=Go", "-V", "code=fmt.Println()",
            "-m", "llama", "-f", "json",
        ])
        assert result.exit_code == 0
        assert result.output.startswith(LLAMA_PREFIX)
        assert "valid JSON" in result.output

    def test_render_missing_variables(self, runner):
        """Test validation errors."""
        result = runner.invoke(cli, ["render", "coding-code-review", "-V", "language=Go"])
        assert result.exit_code != 0
        assert "Missing required variables" in result.output
        assert "code" in result.output

    def test_bad_value_syntax(self, runner):
        """Test malformed -V."""
        result = runner.invoke(cli, ["render", "coding-code-review", "-V", "language"])
        assert result.exit_code == 2

    def test_render_to_file(self, runner, tmp_path):
        """Test writing output to a file."""
        target = tmp_path / "prompt.txt"
        result = runner.invoke(cli, [
            "render", "creative-story-prompt",
            "-V", "genre=Fantasy", "-V", "setting=Venice",
            "-V", "character=detective", "-V", "mood=Dark",
            "-o", str(target),
        ])
        assert result.exit_code == 0
        assert "Fantasy genre" in target.read_text()


class TestVariablesAndAdapt:
    """Tests for variables, adapt, and tokens."""

    def test_variables(self, runner):
        """Test variable extraction."""
        result = runner.invoke(cli, ["variables", "Hello {firstName}, welcome to {place}"])
        assert result.exit_code == 0
        assert "firstName" in result.output
        assert "First Name" in result.output
        assert "place" in result.output

    def test_variables_from_file(self, runner, tmp_path):
        """Test reading template text from a file."""
        source = tmp_path / "template.txt"
        source.write_text("Fix {bug}")
        result = runner.invoke(cli, ["variables", "-f", str(source)])
        assert result.exit_code == 0
        assert "bug" in result.output

    def test_variables_none(self, runner):
        """Test text without placeholders."""
        result = runner.invoke(cli, ["variables", "plain text"])
        assert "No variables found" in result.output

    def test_adapt(self, runner):
        """Test optimization and model prefix."""
        result = runner.invoke(cli, ["adapt", "Could you please summarize this", "-m", "llama"])
        assert result.exit_code == 0
        assert result.output.strip() == LLAMA_PREFIX + "Summarize this"

    def test_adapt_no_optimize(self, runner):
        """Test disabling optimization."""
        result = runner.invoke(cli, ["adapt", "please keep", "--no-optimize"])
        assert result.output.strip() == "please keep"

    def test_adapt_from_stdin(self, runner):
        """Test reading the prompt from stdin."""
        result = runner.invoke(cli, ["adapt"], input="can you help\n")
        assert result.output.strip() == "Help"

    def test_tokens(self, runner):
        """Test token counts for a heuristic model."""
        result = runner.invoke(cli, ["tokens", "abcdefgh", "-m", "claude"])
        assert result.exit_code == 0
        assert "2" in result.output
        assert "simple" in result.output


class TestChainCommand:
    """Tests for the chain preview command."""

    def test_chain_preview(self, runner):
        """Test previewing a chain template."""
        result = runner.invoke(cli, [
            "chain", "writing-research-article",
            "-V", "topic=Rust", "-V", "audience=beginners",
        ])
        assert result.exit_code == 0
        assert "Chain is valid" in result.output
        assert "Rust" in result.output

    def test_plain_template_preview(self, runner):
        """Test previewing a single-step template."""
        result = runner.invoke(cli, [
            "chain", "coding-code-review", "-V", "language=Go", "-V", "code=x",
        ])
        assert result.exit_code == 0
        assert "Chain is valid" not in result.output

    def test_chain_missing_variables(self, runner):
        """Test validation errors."""
        result = runner.invoke(cli, ["chain", "writing-research-article"])
        assert result.exit_code != 0
        assert "Missing required variables" in result.output


class TestInfo:
    """Tests for info and version."""

    def test_info(self, runner):
        """Test the info panel."""
        result = runner.invoke(cli, ["info"])
        assert result.exit_code == 0
        assert "PromptSmith" in result.output

    def test_version(self, runner):
        """Test --version."""
        result = runner.invoke(cli, ["--version"])
        assert __version__ in result.output

    def test_bad_log_level(self, runner):
        """Test an invalid log level override."""
        result = runner.invoke(cli, ["--log-level", "LOUD", "info"])
        assert result.exit_code == 2
