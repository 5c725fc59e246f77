"""
Doc Generator
=============
Renders a documentation skeleton from a ProjectInfo snapshot.

Facts the scanner knows (package manager, dependencies, directories,
scripts, CI) are written out directly. Sections only a human can write are
filled from the supplied answers (usually merge_with_defaults() for the
chosen profile) or left as "[NEEDS REVIEW]" placeholders.

Answer keys: purpose, goals, practices, architecture, domain, gotchas, quality.
"""
from typing import Mapping, Optional

from doccheck.core.config import DOC_FILENAME, MAX_LISTED_DEPENDENCIES
from doccheck.core.constants import NEEDS_REVIEW
from doccheck.models.project_info import ProjectInfo

# (heading, answer key, placeholder) for the human-authored trailing sections
_PROSE_SECTIONS: list[tuple[str, str, str]] = [
    ("Architecture", "architecture",
     "Document key architecture decisions and why they were made."),
    ("Domain Knowledge", "domain",
     "Document business rules, terminology, and domain-specific concepts."),
    ("AI-Specific Guidance", "gotchas",
     "Add common tasks, anti-patterns, and gotchas for AI assistants."),
    ("Quality Gates", "quality",
     'Define what "done" looks like - tests, linting, review requirements.'),
]


def extract_first_paragraph(readme: str) -> Optional[str]:
    """First prose paragraph of a README, skipping headings, images, badges and rules."""
    paragraph: list[str] = []
    for line in readme.splitlines():
        stripped = line.strip()
        if stripped.startswith(("#", "![", "[![")) or stripped == "---":
            continue
        if not stripped:
            if paragraph:
                break
            continue
        paragraph.append(stripped)
    return " ".join(paragraph) or None


def _answer(answers: Mapping[str, str], key: str) -> str:
    return (answers.get(key) or "").strip()


def _header(info: ProjectInfo, answers: Mapping[str, str]) -> str:
    overview = _answer(answers, "purpose")
    if not overview and info.readme:
        overview = extract_first_paragraph(info.readme) or ""
    if not overview:
        overview = f"{NEEDS_REVIEW} Describe the purpose and goals of this project."

    header = f"# {DOC_FILENAME} - {info.name} Project Context\n\n## Project Overview\n\n{overview}\n"
    goals = _answer(answers, "goals")
    if goals:
        header += f"\n### Current Goals\n\n{goals}\n"
    return header


def _tech_stack(info: ProjectInfo) -> str:
    section = "## Tech Stack\n\n"
    pm = info.package_manager
    if pm is None:
        return section + f"{NEEDS_REVIEW} Document the languages, frameworks, and key dependencies.\n"

    section += f"**Package Manager**: {pm.type}\n"
    for title, deps in (("Key Dependencies", pm.dependencies), ("Dev Dependencies", pm.dev_dependencies)):
        if not deps:
            continue
        section += f"\n**{title}**:\n"
        for name in list(deps)[:MAX_LISTED_DEPENDENCIES]:
            section += f"- {name}: {deps[name]}\n"
    return section


def _structure(info: ProjectInfo) -> str:
    section = "## Project Structure\n\n"
    if not info.structure.directories:
        return section + f"{NEEDS_REVIEW} Document the project directory structure.\n"

    listing = "".join(f"{d}/\n" for d in info.structure.directories)
    return section + f"```\n{listing}```\n\n{NEEDS_REVIEW} Add descriptions for each directory.\n"


def _development_practices(info: ProjectInfo, answers: Mapping[str, str]) -> str:
    section = "## Development Practices\n\n"

    practices = _answer(answers, "practices")
    if practices:
        section += f"{practices}\n"

    if info.has_tests:
        section += "\n### Testing\n\n"
        section += f"Test files found. Patterns: {', '.join(info.test_patterns)}\n"
        section += f"\n{NEEDS_REVIEW} Document testing approach and conventions.\n"

    if info.package_manager and info.package_manager.scripts:
        section += "\n### Available Scripts\n\n"
        for name, command in info.package_manager.scripts.items():
            section += f"- `npm run {name}`: {command}\n"

    if info.cicd:
        section += "\n### CI/CD\n\n"
        section += f"Platform: {info.cicd.platform}\n"
        section += f"Workflow files: {', '.join(info.cicd.files)}\n"
        if info.cicd.commands:
            section += "\nPipeline commands:\n"
            section += "".join(f"- `{cmd.splitlines()[0]}`\n" for cmd in info.cicd.commands if cmd)

    return section


def _prose_sections(answers: Mapping[str, str]) -> str:
    blocks = []
    for heading, key, placeholder in _PROSE_SECTIONS:
        body = _answer(answers, key) or f"{NEEDS_REVIEW} {placeholder}"
        blocks.append(f"## {heading}\n\n{body}")
    return "\n\n".join(blocks)


def generate_skeleton(info: ProjectInfo, answers: Optional[Mapping[str, str]] = None) -> str:
    """
    Render the documentation text for a scanned project.

    Parameters
    ----------
    info : ProjectInfo
        Scanner snapshot.
    answers : Mapping[str, str] | None
        Section answers; missing or blank answers become placeholders.

    Returns
    -------
    str
        Markdown document, sections separated by blank lines.
    """
    answers = answers or {}
    sections = [
        _header(info, answers),
        _tech_stack(info),
        _structure(info),
        _development_practices(info, answers),
        _prose_sections(answers),
    ]
    return "\n\n".join(sections)
