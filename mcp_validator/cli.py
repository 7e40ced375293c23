"""
CLI interface for the MCP tool validator.

Provides commands for validating tool definitions, listing rules and
showing the resolved configuration.
"""

import json
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from mcp_validator.core import get_registry, load_config, parse_rule_overrides, validate as run_validation
from mcp_validator.core.validator import build_config
from mcp_validator.errors import ValidatorError
from mcp_validator.ingestion import fetch_tools_from_server, parse_file
from mcp_validator.output import ReportGenerator
from mcp_validator.schema import IssueCategory, LLMProvider, OutputFormat, ToolDefinition
from mcp_validator.utils.config import get_settings
from mcp_validator.utils.logging import setup_logging

app = typer.Typer(
    name="mcp-validate",
    help="MCP Tool Validator - Check MCP tool definitions for schema, security and LLM-compatibility issues",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _fail(message: str, code: int = 2) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {message}", highlight=False)
    return typer.Exit(code)


def _load_tools(file: Path | None, server: str | None) -> list[ToolDefinition]:
    if file is not None:
        return parse_file(file)
    return fetch_tools_from_server(server, get_settings().server_timeout_seconds)


def _cli_layer(
    format: OutputFormat | None,
    verbose: bool,
    no_color: bool,
    llm: bool,
    llm_provider: LLMProvider | None,
) -> dict[str, Any]:
    """Config values given as flags; only set keys override the file."""
    output: dict[str, Any] = {}
    if format is not None:
        output["format"] = format
    if verbose:
        output["verbose"] = True
    if no_color:
        output["color"] = False

    layer: dict[str, Any] = {"output": output} if output else {}
    if llm or llm_provider is not None:
        section: dict[str, Any] = {"enabled": True}
        if llm_provider is not None:
            section["provider"] = llm_provider
        layer["llm"] = section
    return layer


@app.command()
def validate(
    file: Optional[Path] = typer.Argument(
        None,
        help="Path to a tool definition file (.json, .yaml or .yml)",
    ),
    server: Optional[str] = typer.Option(
        None,
        "-s", "--server",
        help="MCP server URL (http/https) or command to launch over STDIO",
    ),
    format: Optional[OutputFormat] = typer.Option(
        None,
        "-f", "--format",
        help="Output format (defaults to the configured format)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c", "--config",
        help="Config file path (skips config discovery)",
    ),
    rule: Optional[List[str]] = typer.Option(
        None,
        "-r", "--rule",
        help="Rule override RULE-ID=off|on|error|warning|suggestion (repeatable)",
    ),
    llm: bool = typer.Option(
        False,
        "--llm",
        help="Enable LLM-assisted analysis",
    ),
    llm_provider: Optional[LLMProvider] = typer.Option(
        None,
        "--llm-provider",
        help="LLM provider to use (implies --llm)",
    ),
    verbose: bool = typer.Option(
        False,
        "-v", "--verbose",
        help="Show suggestions and debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "-q", "--quiet",
        help="Show only errors and the summary",
    ),
    ci: bool = typer.Option(
        False,
        "--ci",
        help="Exit with code 1 when validation fails",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "-o", "--output",
        help="Write the report to a file instead of stdout",
    ),
):
    """
    Validate MCP tool definitions from a file or a live server.

    Example:
        mcp-validate validate tools.json
        mcp-validate validate --server "python my_server.py" --format sarif -o report.sarif
        mcp-validate validate tools.yaml --rule LLM-004=off --rule NAM-001=error --ci
    """
    setup_logging("DEBUG" if verbose else get_settings().log_level)

    if file is None and server is None:
        raise _fail("Provide a tool definition file or --server")
    if file is not None and server is not None:
        raise _fail("Provide either a tool definition file or --server, not both")

    try:
        loaded = load_config(config)
        overrides = parse_rule_overrides(rule or [])
        layer = _cli_layer(format, verbose, no_color, llm, llm_provider)
        resolved = build_config(layer, loaded.filepath, overrides)
        tools = _load_tools(file, server)
        result = run_validation(tools, resolved, config_path=loaded.filepath)
    except ValidatorError as e:
        raise _fail(str(e))

    options = resolved.output
    report = ReportGenerator(result)

    if output:
        saved_path = report.save(output, format=options.format)
        if not quiet:
            err_console.print(f"[green]Report saved to:[/green] {saved_path}", highlight=False)
    else:
        typer.echo(report.render(options.format, color=options.color, verbose=options.verbose, quiet=quiet))

    if ci and not result.valid:
        raise typer.Exit(1)


@app.command()
def rules(
    category: Optional[IssueCategory] = typer.Option(
        None,
        "--category",
        help="Only list rules in this category",
    ),
):
    """
    List the registered validation rules.

    Example:
        mcp-validate rules --category security
    """
    table = Table(title="Validation Rules")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Category", style="magenta")
    table.add_column("Severity")
    table.add_column("Description", style="white")

    for registered in get_registry().all_rules():
        if category is not None and registered.category != category:
            continue
        table.add_row(
            registered.id,
            registered.category.value,
            registered.default_severity.value,
            registered.description,
        )

    console.print(table)


@app.command("config")
def show_config(
    config: Optional[Path] = typer.Option(
        None,
        "-c", "--config",
        help="Config file path (skips config discovery)",
    ),
):
    """
    Show the resolved configuration.
    """
    try:
        loaded = load_config(config)
    except ValidatorError as e:
        raise _fail(str(e))

    console.print(f"[cyan]Source:[/cyan] {loaded.filepath or 'defaults'}", highlight=False)
    console.print_json(json.dumps(loaded.config.to_dict()))


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
