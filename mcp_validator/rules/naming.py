"""Naming rules (NAM-xxx): tool and parameter naming conventions."""

import re
from collections import Counter

from mcp_validator.schema import IssueCategory, IssueSeverity

from .base import Finding, RuleSet
from .vocabulary import NAME_VERBS, SUGGESTED_NAME_PREFIXES


naming_rules = RuleSet(IssueCategory.NAMING)

KEBAB_CASE = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")
MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 50

# Casing styles, checked in order; the first match wins
CASING_PATTERNS = (
    ("SCREAMING_CASE", re.compile(r"^[A-Z][A-Z0-9]*(_[A-Z0-9]+)+$")),
    ("SCREAMING_CASE", re.compile(r"^[A-Z][A-Z0-9]+$")),
    ("snake_case", re.compile(r"^[a-z][a-z0-9]*(_[a-z0-9]+)+$")),
    ("kebab-case", re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)+$")),
    ("PascalCase", re.compile(r"^[A-Z](?=.*[a-z])[a-zA-Z0-9]*$")),
    ("camelCase", re.compile(r"^[a-z][a-zA-Z0-9]*$")),
)
OTHER_CASING = "other"


def to_kebab_case(name: str) -> str:
    name = re.sub(r"([a-z])([A-Z])", r"\1-\2", name)
    name = re.sub(r"[\s_]+", "-", name)
    name = re.sub(r"-{2,}", "-", name)
    return name.lower()


def to_camel_case(name: str) -> str:
    name = re.sub(r"[-_]([a-z])", lambda m: m.group(1).upper(), name)
    return name[:1].lower() + name[1:]


def detect_casing(name: str) -> str:
    """Classify a parameter name; single lowercase words count as camelCase."""
    for casing, pattern in CASING_PATTERNS:
        if pattern.match(name):
            return casing
    return OTHER_CASING


@naming_rules.rule("NAM-001", IssueSeverity.ERROR, "Tool name must be non-empty")
def check_name_non_empty(tool, ctx):
    if not tool.name.strip():
        yield Finding(
            "Tool name must be non-empty",
            path="name",
            suggestion="Provide a descriptive kebab-case name for the tool",
        )


@naming_rules.rule("NAM-002", IssueSeverity.ERROR, "Tool name must use kebab-case format")
def check_kebab_case(tool, ctx):
    if tool.name.strip() and not KEBAB_CASE.match(tool.name):
        yield Finding(
            f'Tool name "{tool.name}" must use kebab-case format',
            path="name",
            suggestion=f'Use kebab-case format: "{to_kebab_case(tool.name)}"',
        )


@naming_rules.rule("NAM-003", IssueSeverity.WARNING, "Tool name should be 3-50 characters")
def check_name_length(tool, ctx):
    if not tool.name.strip():
        return
    length = len(tool.name)
    if length < MIN_NAME_LENGTH:
        yield Finding(
            f'Tool name "{tool.name}" is too short ({length} characters). '
            f"Should be at least {MIN_NAME_LENGTH} characters.",
            path="name",
            suggestion="Use a more descriptive name that clearly indicates the tool's purpose",
        )
    elif length > MAX_NAME_LENGTH:
        yield Finding(
            f'Tool name "{tool.name}" is too long ({length} characters). '
            f"Should be at most {MAX_NAME_LENGTH} characters.",
            path="name",
            suggestion="Use a shorter, more concise name while keeping it descriptive",
        )


@naming_rules.rule("NAM-004", IssueSeverity.WARNING, "Tool name should not start with numbers")
def check_leading_digit(tool, ctx):
    if tool.name[:1].isdigit():
        yield Finding(
            f'Tool name "{tool.name}" should not start with a number',
            path="name",
            suggestion="Start the tool name with a descriptive verb or noun instead of a number",
        )


@naming_rules.rule("NAM-005", IssueSeverity.WARNING, "Tool name should use descriptive verbs")
def check_descriptive_verb(tool, ctx):
    if not tool.name.strip():
        return
    first_segment = tool.name.split("-")[0].lower()
    if not any(first_segment.startswith(verb) for verb in NAME_VERBS):
        yield Finding(
            f'Tool name "{tool.name}" should start with a descriptive verb',
            path="name",
            suggestion=f"Consider using a verb prefix like: {', '.join(SUGGESTED_NAME_PREFIXES)}",
        )


@naming_rules.rule(
    "NAM-006",
    IssueSeverity.WARNING,
    "Parameter names should use consistent casing (camelCase recommended)",
)
def check_parameter_casing(tool, ctx):
    names = list(tool.get_properties())
    if not names:
        return

    casings = {name: detect_casing(name) for name in names}
    counts = Counter(casings.values())
    # Ties go to the style seen first
    dominant = counts.most_common(1)[0][0]

    inconsistent = [n for n, c in casings.items() if c not in (dominant, OTHER_CASING)]
    if inconsistent:
        yield Finding(
            f"Parameter names have inconsistent casing. Found mixed styles: {', '.join(counts)}",
            path="inputSchema.properties",
            suggestion=f"Use consistent {dominant} for all parameters. Inconsistent: {', '.join(inconsistent)}",
        )

    not_camel = [n for n, c in casings.items() if c not in ("camelCase", OTHER_CASING)]
    if not_camel and dominant != "camelCase":
        renames = ", ".join(f"{n} -> {to_camel_case(n)}" for n in not_camel)
        yield Finding(
            f"Parameter names should use camelCase (current: {dominant})",
            path="inputSchema.properties",
            suggestion=f"Consider renaming: {renames}",
        )
