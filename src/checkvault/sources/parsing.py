"""Markdown parsing utilities.

Provides functions to parse YAML frontmatter, locate headings and fenced
code, recognise checklist lines, and find inline tag occurrences with
their source positions.
"""

import re
from dataclasses import dataclass
from typing import Any

import yaml

from checkvault.core.types import Location, TagOccurrence


@dataclass
class FrontmatterResult:
    """Result from parsing YAML frontmatter.

    Attributes:
        data: Parsed YAML data as dictionary (empty if no frontmatter).
        content: Document content after frontmatter is removed.
        has_frontmatter: Whether frontmatter was found.
        line_count: Number of lines the frontmatter block occupies.
    """

    data: dict[str, Any]
    content: str
    has_frontmatter: bool
    line_count: int = 0


# Matches: ---\n<yaml content>\n---\n
_FRONTMATTER_PATTERN = re.compile(
    r"^---\s*\n(.*?)\n---\s*(?:\n|$)",
    re.DOTALL,
)

# Matches: #tag, #tag/subtag, #tag-with-dashes, #tag_with_underscores
# Does NOT match: # heading, #123 (pure numbers), # (bare hash)
_INLINE_TAG_PATTERN = re.compile(
    r"(?<![^\s([\"{])#([a-zA-Z][a-zA-Z0-9_/-]*)",
)

_HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})(?:\s|$)")

_FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")

CHECKLIST_PATTERN = re.compile(
    r"^(?P<indent>\s*)(?:[-*+]|\d+[.)])\s+\[(?P<mark>[ xX])\]\s+(?P<text>\S.*?)\s*$"
)


def parse_frontmatter(content: str) -> FrontmatterResult:
    """Parse YAML frontmatter from markdown content.

    Args:
        content: Full markdown document content.

    Returns:
        FrontmatterResult with parsed data and remaining content.

    Example:
        >>> result = parse_frontmatter('''---
        ... created: 2024-01-02
        ... ---
        ... - [ ] call Bob
        ... ''')
        >>> result.line_count
        3
    """
    match = _FRONTMATTER_PATTERN.match(content)
    if not match:
        return FrontmatterResult(data={}, content=content, has_frontmatter=False)

    yaml_text = match.group(1)
    remaining_content = content[match.end() :]

    try:
        data = yaml.safe_load(yaml_text)
        if data is None:
            data = {}
        elif not isinstance(data, dict):
            data = {"_raw": data}
    except yaml.YAMLError:
        # Invalid YAML - treat as no frontmatter
        return FrontmatterResult(data={}, content=content, has_frontmatter=False)

    line_count = match.group(0).rstrip("\n").count("\n") + 1
    return FrontmatterResult(
        data=data,
        content=remaining_content,
        has_frontmatter=True,
        line_count=line_count,
    )


def heading_level(line: str) -> int | None:
    """Return the ATX heading level of ``line``, or None if it is not a heading."""
    match = _HEADING_PATTERN.match(line)
    return len(match.group(1)) if match else None


def code_fence_lines(lines: list[str]) -> set[int]:
    """Return indices of lines inside fenced code blocks, fences included.

    An unterminated fence runs to the end of the document.
    """
    inside: set[int] = set()
    fence: str | None = None
    for index, line in enumerate(lines):
        match = _FENCE_PATTERN.match(line)
        if fence is None:
            if match:
                fence = match.group(1)
                inside.add(index)
        else:
            inside.add(index)
            if match and match.group(1) == fence:
                fence = None
    return inside


def _mask_inline_code(line: str) -> str:
    """Replace inline code spans with spaces (preserves columns)."""
    return re.sub(r"`[^`]+`", lambda m: " " * len(m.group()), line)


def extract_tag_occurrences(content: str) -> list[TagOccurrence]:
    """Find inline tag occurrences with their positions.

    Tags inside frontmatter, fenced code blocks and inline code are ignored.

    Args:
        content: Full document content.

    Returns:
        Occurrences in document order. Tags keep their leading ``#`` and
        original case.

    Example:
        >>> [t.tag for t in extract_tag_occurrences("## Week #todo\\n- [ ] x #Work/Home")]
        ['#todo', '#Work/Home']
    """
    lines = content.split("\n")
    skipped = code_fence_lines(lines)
    skipped.update(range(parse_frontmatter(content).line_count))

    occurrences: list[TagOccurrence] = []
    offset = 0
    for index, line in enumerate(lines):
        if index not in skipped:
            for match in _INLINE_TAG_PATTERN.finditer(_mask_inline_code(line)):
                start_col = match.start()
                end_col = match.end()
                occurrences.append(
                    TagOccurrence(
                        tag=match.group(0),
                        start=Location(line=index, col=start_col, offset=offset + start_col),
                        end=Location(line=index, col=end_col, offset=offset + end_col),
                    )
                )
        offset += len(line) + 1
    return occurrences
