"""
Claims Extractor
================
Pulls structured claims out of free-form README Markdown.

Three independent passes, each over the whole document:
    1. Tech stack  — list items under a "Tech Stack" / "Built With" heading
    2. Structure   — directory paths from fenced code blocks that look like trees
    3. Commands    — `npm run x` / `yarn x` / `pnpm x` invocations anywhere in the text

Contract:
    - DETERMINISTIC: same README → same claims, same order.
    - Regex and heuristic matching only; no Markdown AST.
    - Tolerant: a README without the target sections yields empty lists.
"""
import logging
import re

from doccheck.core.constants import (
    NON_SCRIPT_SUBCOMMANDS,
    TECH_STACK_HEADINGS,
    TREE_DRAWING_CHARS,
    TREE_GLYPHS,
)
from doccheck.models.project_info import ReadmeClaims
from doccheck.parser.text_utils import dedupe

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------
_HEADING = re.compile(r"^(#{1,6})\s+(.+)")

# "- **Frontend**: React 18, Vite, Tailwind CSS"
_LABELED_ITEM = re.compile(r"^[-*]\s+\*?\*?([^:*]+)\*?\*?:\s*(.+)")
# "- React"
_PLAIN_ITEM = re.compile(r"^[-*]\s+(.+)")

_PARENTHETICAL = re.compile(r"\([^)]*\)")
_BOLD = re.compile(r"\*\*")
_TRAILING_VERSION = re.compile(r"\s+\d+(\.\d+)*\s*$")
_TRAILING_V_VERSION = re.compile(r"\s+v?\d+(\.\d+)*\s*$")

_FENCE = "```"
_TREE_INDENT = re.compile(rf"^[\s{TREE_DRAWING_CHARS}]*")
_TREE_CHARS = re.compile(rf"[{TREE_DRAWING_CHARS}]")
_TRAILING_COMMENT = re.compile(r"\s+#.*$")

_SCRIPT_NAME = r"([a-zA-Z][a-zA-Z0-9_:-]*)"
_RUN_COMMAND = re.compile(rf"(?:npm\s+run|yarn\s+run|pnpm\s+run)\s+{_SCRIPT_NAME}")
_SHORT_COMMAND = re.compile(rf"(?:yarn|pnpm)\s+{_SCRIPT_NAME}")


# ---------------------------------------------------------------------------
# 1. Tech stack
# ---------------------------------------------------------------------------
def _clean_tech_claim(claim: str) -> str:
    claim = _PARENTHETICAL.sub("", claim).strip()
    claim = _BOLD.sub("", claim).strip()
    claim = _TRAILING_VERSION.sub("", claim).strip()
    return _TRAILING_V_VERSION.sub("", claim).strip()


def extract_tech_stack_claims(readme: str) -> list[str]:
    """
    Collect technology names listed under a tech-stack heading.

    The section opens on a heading containing one of TECH_STACK_HEADINGS
    and closes at the next heading of the same or a shallower level;
    deeper sub-headings stay inside the section.
    """
    raw_claims: list[str] = []
    in_section = False
    section_depth = 0

    for line in readme.splitlines():
        heading = _HEADING.match(line)
        if heading:
            depth = len(heading.group(1))
            title = heading.group(2).lower()
            if any(keyword in title for keyword in TECH_STACK_HEADINGS):
                in_section = True
                section_depth = depth
                continue
            if in_section and depth <= section_depth:
                in_section = False

        if not in_section:
            continue

        labeled = _LABELED_ITEM.match(line)
        if labeled:
            raw_claims.extend(t.strip() for t in labeled.group(2).split(",") if t.strip())
            continue

        plain = _PLAIN_ITEM.match(line)
        if plain:
            raw_claims.append(plain.group(1).strip())

    cleaned = (_clean_tech_claim(c) for c in raw_claims)
    return dedupe(c for c in cleaned if len(c) > 1)


# ---------------------------------------------------------------------------
# 2. Directory structure
# ---------------------------------------------------------------------------
def parse_directory_tree(lines: list[str]) -> list[str]:
    """
    Recover directory paths from the lines of one code block.

    Indentation (leading whitespace plus box-drawing characters) decides
    ancestry: a stack of (indent, name) pairs holds the current path, and
    every entry at the same or a deeper indent is popped before a line is
    placed. Only entries ending in "/" are directories.

    Returns [] unless the block looks like a tree: at least one line with
    a box-drawing glyph or at least one directory entry.
    """
    entries: list[str] = []
    looks_like_tree = False
    stack: list[tuple[int, str]] = []

    for line in lines:
        if any(glyph in line for glyph in TREE_GLYPHS):
            looks_like_tree = True

        indent = len(_TREE_INDENT.match(line).group(0))
        cleaned = _TREE_CHARS.sub("", line)
        cleaned = _TRAILING_COMMENT.sub("", cleaned).strip()
        if not cleaned:
            continue

        while stack and stack[-1][0] >= indent:
            stack.pop()

        if cleaned.endswith("/"):
            parent = "".join(name for _, name in stack)
            entries.append(parent + cleaned)
            stack.append((indent, cleaned))
            looks_like_tree = True

    return entries if looks_like_tree else []


def extract_structure_claims(readme: str) -> list[str]:
    """Directory paths documented in tree-shaped fenced code blocks."""
    claims: list[str] = []
    in_block = False
    block: list[str] = []

    for line in readme.splitlines():
        if line.strip().startswith(_FENCE):
            if in_block:
                claims.extend(parse_directory_tree(block))
                block = []
            in_block = not in_block
            continue
        if in_block:
            block.append(line)

    if in_block and block:
        logger.debug("Ignoring unterminated code block (%d lines)", len(block))

    return dedupe(claims)


# ---------------------------------------------------------------------------
# 3. Commands
# ---------------------------------------------------------------------------
def extract_command_claims(readme: str) -> list[str]:
    """Script names invoked through npm / yarn / pnpm anywhere in the text."""
    claims = [m.group(1) for m in _RUN_COMMAND.finditer(readme)]
    claims.extend(
        m.group(1)
        for m in _SHORT_COMMAND.finditer(readme)
        if m.group(1) not in NON_SCRIPT_SUBCOMMANDS
    )
    return dedupe(claims)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def extract_claims(readme: str) -> ReadmeClaims:
    """Run all three passes over the README text."""
    claims = ReadmeClaims(
        tech_stack=extract_tech_stack_claims(readme),
        structure=extract_structure_claims(readme),
        commands=extract_command_claims(readme),
    )
    logger.debug(
        "README claims: %d tech, %d structure, %d commands",
        len(claims.tech_stack), len(claims.structure), len(claims.commands),
    )
    return claims
