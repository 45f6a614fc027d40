"""CLI interface for inspecting and exercising the file tools.

Typer-based developer tooling: show the tool catalog the generator sees, and
run tool calls embedded in a piece of text against a throwaway grant registry.
"""

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from localwork.config import get_settings
from localwork.files import GrantRegistry
from localwork.telemetry import configure_logging
from localwork.tools import execute, extract_text_content, get_default_catalog, parse_tool_calls

app = typer.Typer(help="LocalWork - grant-gated file tools for a local agent")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show the version and exit"),
) -> None:
    """Configure logging before any command runs."""
    if version:
        settings = get_settings()
        console.print(f"{settings.project_name} {settings.version}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print("[yellow]No command given. Use `localwork --help` for usage.[/yellow]")
        raise typer.Exit(1)

    configure_logging()


@app.command(name="tools")
def tools_command(
    prompt: bool = typer.Option(
        False, "--prompt", help="Print the rendered system-prompt block instead of a table"
    ),
) -> None:
    """Show the tools offered to the generator.

    Examples:
        localwork tools
        localwork tools --prompt
    """
    catalog = get_default_catalog()

    if prompt:
        console.print(catalog.format_for_prompt(), markup=False, highlight=False)
        return

    table = Table(title=f"Tool Catalog ({len(catalog)} tools)")
    table.add_column("Name", style="green")
    table.add_column("Category", style="blue")
    table.add_column("Parameters", style="cyan")
    table.add_column("Description", style="white", overflow="fold")

    for tool_def in catalog.definitions():
        params = ", ".join(
            p.name if p.required else f"[{p.name}]" for p in tool_def.parameters
        )
        table.add_row(tool_def.name, tool_def.category, params, tool_def.description)

    console.print(table)


@app.command(name="exec")
def exec_command(
    text: str = typer.Argument(..., help="Text containing <tool_call> blocks"),
    grant: Optional[List[str]] = typer.Option(
        None, "--grant", "-g", help="Root path to authorize (repeatable)"
    ),
) -> None:
    """Extract tool calls from TEXT and execute them under the given grants.

    Examples:
        localwork exec -g /tmp/ws \
            '<tool_call>{"name": "list_files", "arguments": {"path": "/tmp/ws"}}</tool_call>'
    """
    registry = GrantRegistry()
    for root in grant or []:
        try:
            registry.grant(root)
        except ValueError as e:
            console.print(f"[red]Error: invalid grant {escape(repr(root))}: {escape(str(e))}[/red]")
            raise typer.Exit(1) from e

    calls = parse_tool_calls(text)
    if not calls:
        console.print("[yellow]No tool calls found.[/yellow]")

    for call in calls:
        call.attach_result(execute(registry, call))
        style = "red" if call.result and call.result.startswith("Error:") else "green"
        console.print(f"[bold {style}]{call.id} {call.name}[/bold {style}]")
        console.print(call.result, markup=False, highlight=False)

    prose = extract_text_content(text)
    if prose:
        console.print("\n[bold blue]Prose:[/bold blue]")
        console.print(prose, markup=False, highlight=False)


if __name__ == "__main__":
    app()
