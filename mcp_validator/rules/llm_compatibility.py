"""
LLM-compatibility rules (LLM-xxx).

Heuristics on descriptions and parameter documentation that predict how
well a model will pick and call a tool. LLM-012 and LLM-013 also look at
the rest of the tool set through the rule context.
"""

import re
from collections import Counter
from dataclasses import dataclass

from mcp_validator.schema import IssueCategory, IssueSeverity, ToolDefinition

from .base import Finding, RuleSet
from .matching import contains_any, find_words, is_blank, matches_any, tokenize_words
from .vocabulary import (
    ABBREVIATIONS,
    ACTION_VERBS,
    AMBIGUOUS_TERMS,
    CONSTRAINT_MENTIONS,
    CONTEXT_INDICATORS,
    DESCRIPTION_LEAD_VERBS,
    DESTRUCTIVE_WORDING_PATTERN,
    EXAMPLE_PATTERNS,
    EXAMPLE_PHRASES,
    EXPLANATION_INDICATORS,
    SIDE_EFFECT_DESCRIPTION_PATTERNS,
    SIDE_EFFECT_NAME_WORDS,
    WHEN_PHRASES,
    WORKFLOW_KEYWORDS,
    WORKFLOW_PATTERNS,
)


llm_rules = RuleSet(IssueCategory.LLM_COMPATIBILITY)

MIN_DESCRIPTION_LENGTH = 20
MAX_DESCRIPTION_LENGTH = 500
MIN_PARAM_DESCRIPTION_LENGTH = 10
MAX_PARAM_DESCRIPTION_LENGTH = 200


def _description_path(name: str) -> str:
    return f"inputSchema.properties.{name}.description"


def _param_description(schema: dict) -> str:
    description = schema.get("description")
    return description if isinstance(description, str) else ""


@llm_rules.rule("LLM-001", IssueSeverity.ERROR, "Tool description must be non-empty")
def check_description_non_empty(tool, ctx):
    if is_blank(tool.description):
        yield Finding(
            "Tool description is empty or missing",
            path="description",
            suggestion="Add a clear description explaining what this tool does and when to use it",
        )


@llm_rules.rule("LLM-002", IssueSeverity.WARNING, "Tool description should be 20-500 characters")
def check_description_length(tool, ctx):
    if is_blank(tool.description):
        return
    length = len(tool.description.strip())
    if length < MIN_DESCRIPTION_LENGTH:
        yield Finding(
            f"Tool description is too short ({length} characters, minimum {MIN_DESCRIPTION_LENGTH})",
            path="description",
            suggestion=(
                f"Expand the description to at least {MIN_DESCRIPTION_LENGTH} characters with "
                "details about what the tool does and when to use it"
            ),
        )
    elif length > MAX_DESCRIPTION_LENGTH:
        yield Finding(
            f"Tool description is too long ({length} characters, maximum {MAX_DESCRIPTION_LENGTH})",
            path="description",
            suggestion=(
                f"Shorten the description to under {MAX_DESCRIPTION_LENGTH} characters "
                "while keeping essential information"
            ),
        )


@llm_rules.rule("LLM-003", IssueSeverity.WARNING, "Tool description should explain WHAT the tool does")
def check_description_what(tool, ctx):
    if is_blank(tool.description):
        return
    if not ACTION_VERBS.intersection(tokenize_words(tool.description)):
        yield Finding(
            "Tool description does not clearly state what the tool does",
            path="description",
            suggestion='Describe the operation with an action verb (e.g., "Retrieves...", "Creates...", "Deletes...")',
        )


@llm_rules.rule("LLM-004", IssueSeverity.WARNING, "Tool description should explain WHEN to use the tool")
def check_description_when(tool, ctx):
    if is_blank(tool.description):
        return
    if not contains_any(tool.description, WHEN_PHRASES):
        yield Finding(
            "Tool description does not explain when to use this tool",
            path="description",
            suggestion='Add context about when to use this tool (e.g., "Use this when...", "Useful for...")',
        )


@llm_rules.rule("LLM-005", IssueSeverity.SUGGESTION, "Tool description should include example usage")
def check_description_examples(tool, ctx):
    if is_blank(tool.description):
        return
    has_example = contains_any(tool.description, EXAMPLE_PHRASES) or any(
        re.search(pattern, tool.description) for pattern in EXAMPLE_PATTERNS
    )
    if not has_example:
        yield Finding(
            "Tool description does not include usage examples",
            path="description",
            suggestion="Add examples to illustrate usage (e.g., \"Example: search-users query='john'\")",
        )


@llm_rules.rule("LLM-006", IssueSeverity.ERROR, "Each parameter must have a description")
def check_param_description(tool, ctx):
    for name, schema in tool.get_parameters():
        description = schema.get("description")
        if not description or (isinstance(description, str) and not description.strip()):
            yield Finding(
                f"Parameter '{name}' is missing a description",
                path=_description_path(name),
                suggestion=f"Add a description to the '{name}' parameter explaining its purpose and expected values",
            )


@llm_rules.rule("LLM-007", IssueSeverity.WARNING, "Parameter descriptions should be 10-200 characters")
def check_param_description_length(tool, ctx):
    for name, schema in tool.get_parameters():
        description = _param_description(schema).strip()
        if not description:
            continue
        length = len(description)
        if length < MIN_PARAM_DESCRIPTION_LENGTH:
            yield Finding(
                f"Parameter '{name}' description is too short "
                f"({length} characters, minimum {MIN_PARAM_DESCRIPTION_LENGTH})",
                path=_description_path(name),
                suggestion=(
                    f"Expand the description to at least {MIN_PARAM_DESCRIPTION_LENGTH} characters "
                    "with details about expected values and format"
                ),
            )
        elif length > MAX_PARAM_DESCRIPTION_LENGTH:
            yield Finding(
                f"Parameter '{name}' description is too long "
                f"({length} characters, maximum {MAX_PARAM_DESCRIPTION_LENGTH})",
                path=_description_path(name),
                suggestion=(
                    f"Shorten the description to under {MAX_PARAM_DESCRIPTION_LENGTH} characters "
                    "while keeping essential information"
                ),
            )


@llm_rules.rule(
    "LLM-008",
    IssueSeverity.WARNING,
    'Avoid ambiguous terms (e.g., "data", "value", "input") without context',
)
def check_ambiguous_terms(tool, ctx):
    for name, schema in tool.get_parameters():
        description = _param_description(schema)

        name_terms = find_words(name.lower(), AMBIGUOUS_TERMS)
        if name_terms and not contains_any(f"{name} {description}", CONTEXT_INDICATORS):
            yield Finding(
                f"Parameter '{name}' uses ambiguous term(s): {', '.join(name_terms)}",
                path=f"inputSchema.properties.{name}",
                suggestion="Use more specific names like 'userData', 'configValue', or add context in the description",
            )

        if description:
            description_terms = find_words(description.lower(), AMBIGUOUS_TERMS)
            if description_terms and not contains_any(description, CONTEXT_INDICATORS):
                yield Finding(
                    f"Parameter '{name}' description uses ambiguous term(s) without context: "
                    f"{', '.join(description_terms)}",
                    path=_description_path(name),
                    suggestion=(
                        f'Clarify what kind of {description_terms[0]} is expected '
                        '(e.g., "user data", "configuration value")'
                    ),
                )


@llm_rules.rule(
    "LLM-009",
    IssueSeverity.SUGGESTION,
    'Include parameter constraints in description (e.g., "max 100 characters")',
)
def check_constraints_documented(tool, ctx):
    for name, schema in tool.get_parameters():
        description = _param_description(schema)
        missing = []
        for keyword, (friendly_name, phrasings) in CONSTRAINT_MENTIONS.items():
            value = schema.get(keyword)
            if value is None or (keyword == "enum" and value == []):
                continue
            if not matches_any(description, phrasings):
                missing.append(friendly_name)

        if missing:
            yield Finding(
                f"Parameter '{name}' has schema constraints not mentioned in description: {', '.join(missing)}",
                path=_description_path(name),
                suggestion='Document the constraints in the description (e.g., "max 100 characters", "must be one of: a, b, c")',
            )


@llm_rules.rule("LLM-010", IssueSeverity.WARNING, "Avoid jargon and abbreviations without explanation")
def check_abbreviations(tool, ctx):
    for name, schema in tool.get_parameters():
        combined = f"{name} {_param_description(schema)}".lower()
        if contains_any(combined, EXPLANATION_INDICATORS):
            continue
        unexplained = find_words(name.lower(), ABBREVIATIONS)
        if unexplained:
            expansions = ", ".join(f'"{a}" ({ABBREVIATIONS[a]})' for a in unexplained)
            yield Finding(
                f"Parameter '{name}' uses unexplained abbreviation(s): {', '.join(unexplained)}",
                path=f"inputSchema.properties.{name}",
                suggestion=f"Consider expanding or explaining: {expansions}",
            )


def name_suggests_side_effects(name: str) -> bool:
    lowered = name.lower()
    return any(
        re.search(rf"(^|[-_]){word}([-_]|$)", lowered) or lowered.startswith(word) or lowered.endswith(word)
        for word in SIDE_EFFECT_NAME_WORDS
    )


@llm_rules.rule("LLM-011", IssueSeverity.SUGGESTION, "Tool description should mention side effects if any")
def check_side_effects_mentioned(tool, ctx):
    if is_blank(tool.description):
        return

    if name_suggests_side_effects(tool.name) and not matches_any(
        tool.description, SIDE_EFFECT_DESCRIPTION_PATTERNS
    ):
        yield Finding(
            f"Tool '{tool.name}' appears to have side effects but description does not mention them",
            path="description",
            suggestion='Clearly state what changes this tool makes (e.g., "Creates a new record...", "Deletes the file permanently...")',
        )

    destructive = tool.annotations is not None and tool.annotations.destructive_hint is True
    if destructive and not matches_any(tool.description, (DESTRUCTIVE_WORDING_PATTERN,)):
        yield Finding(
            f"Tool '{tool.name}' is marked as destructive but description does not warn about this",
            path="description",
            suggestion='Add a warning about the destructive nature (e.g., "Warning: This permanently deletes...")',
        )


@dataclass(frozen=True)
class DescriptionShape:
    """Coarse shape of a description, compared across related tools."""
    starts_with_verb: bool
    has_when_clause: bool
    has_examples: bool
    length_bucket: str

    @classmethod
    def of(cls, description: str) -> "DescriptionShape":
        text = description.strip()
        words = text.split()
        first_word = words[0].lower() if words else ""
        length = len(text)
        if length < 50:
            bucket = "short"
        elif length < 150:
            bucket = "medium"
        else:
            bucket = "long"
        return cls(
            starts_with_verb=first_word in DESCRIPTION_LEAD_VERBS,
            has_when_clause=bool(re.search(r"\b(when|if|for|used\s+to|use\s+this)\b", text, re.I)),
            has_examples=bool(re.search(r"\b(example|e\.g\.|for\s+instance|such\s+as)\b", text, re.I)),
            length_bucket=bucket,
        )


LENGTH_WORDING = {"short": "shorter", "medium": "medium length", "long": "longer"}


def tool_prefix(name: str) -> str | None:
    """Family prefix of a tool name: first kebab/snake segment or camel/Pascal head."""
    for separator in ("-", "_"):
        if separator in name:
            return name.split(separator)[0]
    match = re.match(r"^([a-z]+)(?=[A-Z])", name) or re.match(r"^([A-Z][a-z]+)(?=[A-Z])", name)
    return match.group(1) if match else None


def _related_tools(tool: ToolDefinition, all_tools) -> list[ToolDefinition]:
    prefix = tool_prefix(tool.name)
    if not prefix:
        return []
    return [t for t in all_tools if t.name != tool.name and tool_prefix(t.name) == prefix]


def _inconsistencies(shape: DescriptionShape, related: list[DescriptionShape]) -> list[str]:
    half = len(related) / 2
    found = []

    if not shape.starts_with_verb and sum(r.starts_with_verb for r in related) > half:
        found.append("does not start with an action verb like related tools")

    common_bucket, count = Counter(r.length_bucket for r in related).most_common(1)[0]
    if count > half and shape.length_bucket != common_bucket:
        found.append(
            f"has {LENGTH_WORDING[shape.length_bucket]} description while related tools "
            f"have {LENGTH_WORDING[common_bucket]} descriptions"
        )

    if not shape.has_when_clause and sum(r.has_when_clause for r in related) > half:
        found.append('lacks "when to use" context that related tools have')

    if not shape.has_examples and sum(r.has_examples for r in related) > half:
        found.append("lacks examples that related tools have")

    return found


@llm_rules.rule("LLM-012", IssueSeverity.WARNING, "Related tools should have consistent description patterns")
def check_family_consistency(tool, ctx):
    if is_blank(tool.description):
        return

    related = _related_tools(tool, ctx.all_tools)
    if len(related) < 2:
        return
    related_shapes = [DescriptionShape.of(t.description) for t in related if not is_blank(t.description)]
    if len(related_shapes) < 2:
        return

    found = _inconsistencies(DescriptionShape.of(tool.description), related_shapes)
    if found:
        names = ", ".join(t.name for t in related[:3])
        yield Finding(
            f"Tool description is inconsistent with related '{tool_prefix(tool.name)}-*' tools: {'; '.join(found)}",
            path="description",
            suggestion=f"Align description style with related tools ({names}) for consistency",
        )


@llm_rules.rule(
    "LLM-013",
    IssueSeverity.SUGGESTION,
    "Tool description should include workflow guidance (prerequisites, alternatives, sequencing)",
)
def check_workflow_guidance(tool, ctx):
    if is_blank(tool.description):
        return

    description = tool.description
    lowered = description.lower()
    has_guidance = (
        bool(find_words(lowered, WORKFLOW_KEYWORDS))
        or matches_any(description, WORKFLOW_PATTERNS)
        or any(
            other.name and other.name != tool.name and other.name.lower() in lowered
            for other in ctx.all_tools
        )
    )
    if not has_guidance:
        yield Finding(
            "Tool description lacks workflow guidance (prerequisites, alternatives, or sequencing)",
            path="description",
            suggestion='Consider adding workflow context like "Call X first to...", "Use Y instead for...", or "After this, use Z to..."',
        )
