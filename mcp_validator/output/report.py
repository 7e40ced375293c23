"""
Report generation for the MCP tool validator.

Renders a ValidationResult as a human-readable console report (rich),
JSON, SARIF or Markdown.
"""

import json
from io import StringIO
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from mcp_validator.schema import (
    IssueSeverity,
    MaturityLevel,
    OutputFormat,
    ValidationIssue,
    ValidationResult,
)
from .sarif import to_sarif


SEVERITY_STYLES = {
    IssueSeverity.ERROR: "red",
    IssueSeverity.WARNING: "yellow",
    IssueSeverity.SUGGESTION: "blue",
}

MATURITY_STYLES = {
    MaturityLevel.EXEMPLARY: "green",
    MaturityLevel.MATURE: "cyan",
    MaturityLevel.MODERATE: "yellow",
    MaturityLevel.IMMATURE: "red",
}

FILE_SUFFIXES = {
    OutputFormat.HUMAN: ".txt",
    OutputFormat.JSON: ".json",
    OutputFormat.SARIF: ".sarif",
    OutputFormat.MARKDOWN: ".md",
}

RULE_WIDTH = 50


class ReportGenerator:
    """
    Generates validation reports.

    Supports multiple output formats (human, JSON, SARIF, Markdown).
    """

    def __init__(self, result: ValidationResult):
        self.result = result

    def _issue_lines(self, issue: ValidationIssue, verbose: bool) -> list[str]:
        style = SEVERITY_STYLES[issue.severity]
        lines = [f"  [{style}]{issue.severity.value.upper()}[/{style}] {escape(f'[{issue.id}]')} {escape(issue.message)}"]
        if issue.path:
            lines.append(f"    [dim]at:[/dim] {escape(issue.path)}")
        if issue.suggestion and verbose:
            lines.append(f"    [dim]suggestion:[/dim] {escape(issue.suggestion)}")
        return lines

    def _human_lines(self, verbose: bool, quiet: bool) -> list[str]:
        result = self.result
        summary = result.summary
        lines = []

        if not quiet:
            lines.extend([
                f"MCP Tool Validator v{result.metadata.validator_version}",
                f"[dim]{'─' * RULE_WIDTH}[/dim]",
                "",
                f"Validating: {len(result.tools)} tool(s)",
                "",
            ])

        for tool_result in result.tools:
            issues = tool_result.issues
            if quiet:
                issues = [issue for issue in issues if issue.severity == IssueSeverity.ERROR]
                if not issues:
                    continue

            icon = "[green]✓[/green]" if tool_result.valid else "[red]✗[/red]"
            lines.append(f"{icon} {escape(tool_result.name)}")
            for issue in issues:
                lines.extend(self._issue_lines(issue, verbose))
            lines.append("")

        severity = summary.issues_by_severity
        lines.extend([
            f"[dim]{'─' * RULE_WIDTH}[/dim]",
            f"Summary: {summary.valid_tools}/{summary.total_tools} tools valid",
            "",
            f"  Errors:      {severity[IssueSeverity.ERROR]}",
            f"  Warnings:    {severity[IssueSeverity.WARNING]}",
            f"  Suggestions: {severity[IssueSeverity.SUGGESTION]}",
            "",
        ])

        if not quiet:
            lines.append("  By Category:")
            for category, count in summary.issues_by_category.items():
                if count > 0:
                    lines.append(f"    {category.value}: {count}")
            lines.append("")

        level = summary.maturity_level
        style = MATURITY_STYLES[level]
        lines.extend([
            f"Maturity: [{style}]{level.value.upper()}[/{style}] ({summary.maturity_score}/100)",
            f"  [dim]{level.description}[/dim]",
            "",
        ])

        if result.llm_analysis and not quiet:
            lines.append("LLM Analysis:")
            for name, analysis in result.llm_analysis.items():
                lines.append(
                    f"  {escape(name)}: clarity {analysis.clarity_score}/10, "
                    f"completeness {analysis.completeness_score}/10"
                )
                if verbose:
                    for suggestion in analysis.suggestions:
                        lines.append(f"    [dim]-[/dim] {escape(suggestion)}")
            lines.append("")

        if result.valid:
            lines.append("[green]Validation passed.[/green]")
        else:
            lines.append(f"[red]Validation failed with {severity[IssueSeverity.ERROR]} error(s).[/red]")

        return lines

    def to_human(self, color: bool = True, verbose: bool = False, quiet: bool = False) -> str:
        """Generate the console report; markup is stripped when color is off."""
        buffer = StringIO()
        console = Console(
            file=buffer,
            force_terminal=color,
            no_color=not color,
            color_system="standard" if color else None,
            highlight=False,
            soft_wrap=True,
        )
        for line in self._human_lines(verbose, quiet):
            console.print(line)
        return buffer.getvalue().rstrip("\n")

    def to_dict(self) -> dict[str, Any]:
        return self.result.to_dict()

    def to_json(self) -> str:
        """Generate JSON report with the public camelCase keys."""
        return json.dumps(self.to_dict(), indent=2)

    def to_sarif(self) -> str:
        """Generate a SARIF 2.1.0 log."""
        return json.dumps(to_sarif(self.result), indent=2)

    def to_markdown(self) -> str:
        """Generate markdown report."""
        result = self.result
        summary = result.summary
        severity = summary.issues_by_severity

        lines = [
            "# MCP Tool Validation Report",
            "",
            f"**Validator:** v{result.metadata.validator_version} "
            f"(MCP spec {result.metadata.mcp_spec_version})",
            f"**Generated:** {result.metadata.timestamp.strftime('%Y-%m-%d %H:%M:%S')} UTC",
            "",
            "---",
            "",
            "## Summary",
            "",
            f"- **Status:** {'passed' if result.valid else 'failed'}",
            f"- **Tools valid:** {summary.valid_tools}/{summary.total_tools}",
            f"- **Errors:** {severity[IssueSeverity.ERROR]}",
            f"- **Warnings:** {severity[IssueSeverity.WARNING]}",
            f"- **Suggestions:** {severity[IssueSeverity.SUGGESTION]}",
            f"- **Maturity:** {summary.maturity_level.value} ({summary.maturity_score}/100), "
            f"{summary.maturity_level.description.lower()}",
            "",
            "### By Category",
            "",
            "| Category | Issues |",
            "| --- | --- |",
        ]
        for category, count in summary.issues_by_category.items():
            lines.append(f"| {category.value} | {count} |")

        lines.extend(["", "---", "", "## Tools", ""])

        for tool_result in result.tools:
            status = "valid" if tool_result.valid else "invalid"
            lines.append(f"### `{tool_result.name}` ({status})")
            lines.append("")
            if not tool_result.issues:
                lines.append("No issues found.")
                lines.append("")
                continue

            lines.append("| Severity | Rule | Message | Path |")
            lines.append("| --- | --- | --- | --- |")
            for issue in tool_result.issues:
                message = issue.message.replace("|", "\\|")
                path = f"`{issue.path}`" if issue.path else ""
                lines.append(f"| {issue.severity.value} | {issue.id} | {message} | {path} |")
            lines.append("")

            suggestions = [issue for issue in tool_result.issues if issue.suggestion]
            if suggestions:
                lines.append("**Suggestions:**")
                lines.append("")
                for issue in suggestions:
                    lines.append(f"- {issue.id}: {issue.suggestion}")
                lines.append("")

        if result.llm_analysis:
            lines.extend(["---", "", "## LLM Analysis", ""])
            for name, analysis in result.llm_analysis.items():
                lines.extend([
                    f"### `{name}`",
                    "",
                    f"- Clarity: {analysis.clarity_score}/10",
                    f"- Completeness: {analysis.completeness_score}/10",
                ])
                for label, items in (
                    ("Ambiguities", analysis.ambiguities),
                    ("Conflicts", analysis.conflicts),
                    ("Suggestions", analysis.suggestions),
                ):
                    if items:
                        lines.append(f"- {label}:")
                        lines.extend(f"  - {item}" for item in items)
                lines.append("")

        return "\n".join(lines)

    def render(
        self,
        format: OutputFormat | str = OutputFormat.HUMAN,
        color: bool = True,
        verbose: bool = False,
        quiet: bool = False,
    ) -> str:
        """Render the report in the given format."""
        format = OutputFormat(format)
        if format == OutputFormat.HUMAN:
            return self.to_human(color=color, verbose=verbose, quiet=quiet)
        if format == OutputFormat.JSON:
            return self.to_json()
        if format == OutputFormat.SARIF:
            return self.to_sarif()
        return self.to_markdown()

    def save(self, path: str | Path, format: OutputFormat | str = OutputFormat.JSON) -> Path:
        """Save report to file; human reports are written without color."""
        path = Path(path)
        format = OutputFormat(format)

        content = self.render(format, color=False)
        if not path.suffix:
            path = path.with_suffix(FILE_SUFFIXES[format])

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content + "\n", encoding="utf-8")

        return path
