"""Template CLI commands."""

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ...core.exceptions import PromptSmithError
from ...core.types import AIModel, OutputFormat, TemplateCategory

console = Console()

MODEL_CHOICES = [m.value for m in AIModel]
FORMAT_CHOICES = [f.value for f in OutputFormat]
CATEGORY_CHOICES = [c.value for c in TemplateCategory]


def parse_values(ctx, param, pairs):
    """Turn repeated -V name=value options into a dict."""
    values = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected name=value, got '{pair}'", ctx=ctx, param=param)
        values[name.strip()] = value
    return values


def _service():
    from ...templates import TemplateService
    return TemplateService()


def _fail(error: PromptSmithError):
    console.print(f"[red]Error:[/red] {error.message}")
    missing = error.details.get("missing")
    if missing:
        console.print(f"[dim]Missing: {', '.join(missing)}[/dim]")
    raise click.Abort()


@click.command("list-templates")
@click.option("-c", "--category", type=click.Choice(CATEGORY_CHOICES), help="Filter by category")
@click.option("-q", "--query", help="Search name, description, and tags")
def list_templates(category, query):
    """List available prompt templates.

    Examples:

        psm list-templates

        psm list-templates -c coding -q review
    """
    catalog = _service().catalog
    templates = catalog.search(query) if query else catalog.all_templates()
    if category:
        templates = [t for t in templates if t.category.value == category]

    if not templates:
        console.print("[yellow]No templates found[/yellow]")
        return

    table = Table(title="Available Templates")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Category", style="green")
    table.add_column("Name")
    table.add_column("Chain")

    for t in templates:
        table.add_row(
            t.id,
            t.category.value,
            t.name,
            str(len(t.chain_steps)) if t.has_chain else "",
        )

    console.print(table)


@click.command()
@click.argument("template_id")
def show(template_id):
    """Show a template's body, variables, and chain steps.

    Example:

        psm show coding-code-review
    """
    service = _service()
    try:
        template = service.get_template(template_id)
    except PromptSmithError as e:
        _fail(e)

    console.print(f"[bold]{template.name}[/bold] [dim]({template.category.value})[/dim]")
    if template.description:
        console.print(template.description)
    click.echo(service.compose(template))

    if template.variables:
        table = Table(title="Variables")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Label")
        table.add_column("Type")
        table.add_column("Required")
        for v in template.variables:
            table.add_row(v.name, v.label, v.type.value, "yes" if v.required else "no")
        console.print(table)

    if template.has_chain:
        console.print("\n[bold]Chain steps:[/bold]")
        for step in sorted(template.chain_steps, key=lambda s: s.order):
            inputs = ", ".join(step.input_variables) or "-"
            console.print(f"  {step.order}. {step.name} -> {step.output_variable or '-'} (inputs: {inputs})")


@click.command()
@click.argument("template_id")
@click.option("-V", "--var", "values", multiple=True, callback=parse_values, help="Variable as name=value")
@click.option("-m", "--model", type=click.Choice(MODEL_CHOICES), help="Target model")
@click.option("-f", "--format", "output_format", type=click.Choice(FORMAT_CHOICES), help="Output format")
@click.option("--optimize", is_flag=True, help="Apply token optimization")
@click.option("-o", "--output", "output_file", type=click.Path(), help="Write result to file")
def render(template_id, values, model, output_format, optimize, output_file):
    """Render a template with variable values.

    Examples:

        psm render coding-code-review -V language=Python -V code="print(1)"

        psm render writing-blog-outline -V topic=AI ... -m llama -f markdown
    """
    service = _service()
    try:
        rendered = service.render(
            template_id,
            values,
            model=model,
            output_format=output_format,
            optimize=optimize or None,
        )
    except PromptSmithError as e:
        _fail(e)

    if output_file:
        with open(output_file, "w") as f:
            f.write(rendered.rendered_prompt)
        console.print(f"[green]Saved to:[/green] {output_file}")
    else:
        click.echo(rendered.rendered_prompt)


@click.command()
@click.argument("text", required=False)
@click.option("-f", "--file", "input_file", type=click.Path(exists=True), help="Read template text from file")
def variables(text, input_file):
    """List the variables in a template string.

    Example:

        psm variables "Hello {firstName}, welcome to {place}"
    """
    from ...templates import create_variable_definitions

    if input_file:
        with open(input_file) as f:
            text = f.read()
    elif not text:
        text = click.get_text_stream("stdin").read()

    definitions = create_variable_definitions(text or "")
    if not definitions:
        console.print("[yellow]No variables found[/yellow]")
        return

    table = Table(title="Variables")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Label", style="green")
    table.add_column("Placeholder")
    for d in definitions:
        table.add_row(d.name, d.label, d.placeholder)
    console.print(table)


@click.command()
@click.argument("template_id")
@click.option("-V", "--var", "values", multiple=True, callback=parse_values, help="Variable as name=value")
@click.option("--enforce", is_flag=True, help="Refuse to run chains with unmet inputs")
def chain(template_id, values, enforce):
    """Validate a template's chain and preview every step.

    Each step is run with an echo executor, so the preview shows the
    exact prompt each step would send.

    Example:

        psm chain writing-research-article -V topic=Rust -V audience=beginners
    """
    from ...templates import validate_chain

    service = _service()
    try:
        template = service.get_template(template_id)
    except PromptSmithError as e:
        _fail(e)

    if template.has_chain:
        validation = validate_chain(template.chain_steps, initial_variables=values.keys())
        if validation.is_valid:
            console.print("[green]Chain is valid[/green]")
        else:
            console.print("[yellow]Chain has unmet inputs:[/yellow]")
            for error in validation.errors:
                console.print(f"  - {error}")

    def echo(prompt: str) -> str:
        return prompt

    try:
        result = service.run_sync(template, values, echo, enforce_validation=enforce or None)
    except PromptSmithError as e:
        _fail(e)

    for step in result.steps:
        console.print(Panel(Text(step.prompt), title=f"{step.step_name} -> {step.output_variable or '-'}"))

    if not result.success:
        console.print(f"[red]Chain failed:[/red] {result.error}")
        raise SystemExit(1)
