"""Context adaptation and token counting CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from .templates import MODEL_CHOICES, FORMAT_CHOICES

console = Console()


@click.command()
@click.argument("prompt", required=False)
@click.option("-m", "--model", type=click.Choice(MODEL_CHOICES), help="Target model")
@click.option("-f", "--format", "output_format", type=click.Choice(FORMAT_CHOICES), help="Output format")
@click.option("--optimize/--no-optimize", default=True, help="Apply token optimization")
@click.option("-v", "--verbose", is_flag=True, help="Show token estimates")
def adapt(prompt, model, output_format, optimize, verbose):
    """Adapt a prompt for a target model and output format.

    Examples:

        psm adapt "Could you please summarize this" -m llama

        psm adapt "..." -f json --no-optimize
    """
    from ...templates import apply_context_adaptations

    if not prompt:
        prompt = click.get_text_stream("stdin").read()

    if not prompt or not prompt.strip():
        console.print("[red]Error:[/red] No prompt provided")
        raise click.Abort()

    result = apply_context_adaptations(
        prompt,
        model=model,
        output_format=output_format,
        optimize=optimize,
    )
    click.echo(result.prompt)

    if verbose:
        console.print(f"[bold]Estimated tokens:[/bold] {result.token_count}")
        console.print(f"[bold]Tokens saved:[/bold] {result.savings}")


@click.command()
@click.argument("prompt")
@click.option("-m", "--model", default=None, help="Model for tokenization (default from settings)")
def tokens(prompt, model):
    """Count tokens in a prompt.

    Shows the quick heuristic estimate alongside the model tokenizer count.

    Example:

        psm tokens "Your prompt here..." -m gpt-4o-mini
    """
    from ...templates import estimate_tokens
    from ...tokenizers import get_tokenizer

    counter = get_tokenizer(model)

    table = Table(title="Token Count")
    table.add_column("Method", style="cyan")
    table.add_column("Tokens", style="green")
    table.add_row("Estimate (chars / 4)", str(estimate_tokens(prompt)))
    table.add_row(f"Tokenizer ({counter.name})", str(counter.count(prompt)))
    console.print(table)
