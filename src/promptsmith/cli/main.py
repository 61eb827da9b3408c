"""Main CLI entry point."""

import click
from rich.console import Console

from .. import __version__
from ..core.config import get_settings
from ..core.exceptions import ConfigurationError
from ..core.logging_config import setup_logging
from .commands import (
    list_templates,
    show,
    render,
    variables,
    chain,
    adapt,
    tokens,
)

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="promptsmith")
@click.option("--log-level", default=None, help="Override PS_LOG_LEVEL")
def cli(log_level):
    """PromptSmith - Prompt templates with variables, chains, and model adaptation.

    \b
    Examples:
        psm list-templates -c coding
        psm render coding-code-review -V language=Python -V code="x = 1"
        psm chain writing-research-article -V topic=Rust -V audience=beginners
        psm adapt "Could you please summarize this" -m llama -f markdown

    Use --help on any command for more details.
    """
    settings = get_settings().logging
    if log_level:
        settings = settings.model_copy(update={"level": log_level})
    try:
        setup_logging(settings)
    except ConfigurationError as e:
        raise click.BadParameter(e.message, param_hint="--log-level")


# Template commands
cli.add_command(list_templates)
cli.add_command(show)
cli.add_command(render)
cli.add_command(variables)
cli.add_command(chain)

# Adaptation commands
cli.add_command(adapt)
cli.add_command(tokens)


@cli.command()
def info():
    """Show information about PromptSmith and the active settings."""
    from rich.panel import Panel

    settings = get_settings()
    info_text = f"""[bold]PromptSmith[/bold] - Prompt templates for LLM workflows

[bold]Features:[/bold]
  • [cyan]Variables[/cyan]: {{placeholder}} extraction, rendering, and suggestions
  • [cyan]Chains[/cyan]: Multi-step prompts that feed outputs forward
  • [cyan]Adaptation[/cyan]: Model prefixes, output formats, token optimization

[bold]Settings:[/bold]
  Storage: {settings.storage.backend} ({settings.storage.path})
  Default model: {settings.adapter.default_model or '-'}
  Default format: {settings.adapter.default_format or '-'}
  Tokenizer: {settings.tokenizer.default_tokenizer}
  Log level: {settings.logging.level}

[bold]Documentation:[/bold]
  CLI Help: psm --help
  Command Help: psm <command> --help"""

    console.print(Panel(info_text, title=f"PromptSmith v{__version__}", border_style="green"))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
