"""
Drift Validator
===============
Compares a documentation file and the README's claims against the scanned
project state and reports drift as Finding objects.

Rules run in RULE_TABLE order and each one is a pure function of
(documentation_text, ProjectInfo):

    1. tech-stack-undocumented      — detected package manager not named in the doc
    2. tdd-claimed-but-absent       — doc claims TDD, no tests found (the only error)
    3. tests-present-undocumented   — tests found, doc silent about testing
    4. source-dir-undocumented      — source directory not named in the doc
    5. readme-drift                 — README tech claim matches no dependency
    6. readme-incomplete            — runtime dependency absent from README claims
    7. readme-command-drift         — README command is not a manifest script
    8. readme-command-incomplete    — common script present but not in README
    9. readme-structure-drift       — README directory does not exist
   10. readme-structure-incomplete  — top-level directory absent from README tree

A rule whose inputs are missing (no manifest, no README, no structure
claims) yields no findings. Claim matching is deliberately permissive:
a stale-looking claim is only reported when every loose comparison fails.
"""
import logging
import os
import re
from typing import Callable

from doccheck.core.constants import (
    COMMON_SCRIPTS,
    NON_PACKAGE_TECH,
    TDD_MARKERS,
    UTILITY_PACKAGES,
)
from doccheck.models.finding import Finding, RuleId, Severity
from doccheck.models.project_info import ProjectInfo
from doccheck.parser.text_utils import normalize_tech_name

logger = logging.getLogger(__name__)

RuleCheck = Callable[[str, ProjectInfo], list[Finding]]


# ---------------------------------------------------------------------------
# Matching helpers
# ---------------------------------------------------------------------------
def _mentions_tdd(content: str) -> bool:
    lowered = content.lower()
    return any(marker in lowered for marker in TDD_MARKERS)


def claim_matches_dependency(claim: str, dependency: str) -> bool:
    """True if any exact, substring or normalized comparison succeeds."""
    c = claim.lower()
    d = dependency.lower()
    nc = normalize_tech_name(c)
    nd = normalize_tech_name(d)
    return (
        d == c
        or c in d
        or d in c
        or nd == nc
        or nc in nd
        or nd in nc
    )


def is_non_package_tech(claim: str) -> bool:
    c = claim.lower()
    return any(tech in c or c in tech for tech in NON_PACKAGE_TECH)


def is_utility_package(name: str) -> bool:
    return name.lower() in UTILITY_PACKAGES


def _normalized_structure_claims(info: ProjectInfo) -> list[str]:
    """Structure claims with a leading "<project-name>/" removed; empty and "/" dropped."""
    if not info.readme_claims:
        return []
    prefix = re.compile(rf"^{re.escape(info.name)}/")
    stripped = (prefix.sub("", claim, count=1) for claim in info.readme_claims.structure)
    return [s for s in stripped if s and s != "/"]


# ---------------------------------------------------------------------------
# 1–4: documentation prose
# ---------------------------------------------------------------------------
def check_tech_stack(content: str, info: ProjectInfo) -> list[Finding]:
    pm = info.package_manager
    if pm is None or pm.type in content.lower():
        return []
    return [Finding.for_rule(
        RuleId.TECH_STACK_UNDOCUMENTED,
        f"Project uses {pm.type} but the documentation doesn't mention it",
        f"Add {pm.type} to the Tech Stack section",
    )]


def check_tdd_claim(content: str, info: ProjectInfo) -> list[Finding]:
    if not _mentions_tdd(content) or info.has_tests:
        return []
    return [Finding.for_rule(
        RuleId.TDD_CLAIMED_BUT_ABSENT,
        "Documentation mentions TDD but no test files found",
        "Either add tests or update documentation to reflect actual practices",
    )]


def check_tests_documented(content: str, info: ProjectInfo) -> list[Finding]:
    if _mentions_tdd(content) or not info.has_tests:
        return []
    return [Finding.for_rule(
        RuleId.TESTS_PRESENT_UNDOCUMENTED,
        "Project has tests but the documentation doesn't describe the testing approach",
        "Consider adding a Testing section to the documentation",
    )]


def check_source_dir(content: str, info: ProjectInfo) -> list[Finding]:
    source_dir = info.structure.source_dir
    if not source_dir or source_dir in content:
        return []
    return [Finding.for_rule(
        RuleId.SOURCE_DIR_UNDOCUMENTED,
        f"Project has '{source_dir}' directory but it's not documented",
        f"Document the {source_dir}/ directory structure",
    )]


# ---------------------------------------------------------------------------
# 5–6: README tech stack vs. dependencies
# ---------------------------------------------------------------------------
def check_readme_tech_claims(content: str, info: ProjectInfo) -> list[Finding]:
    pm = info.package_manager
    if pm is None or info.readme_claims is None:
        return []

    dependency_names = pm.all_dependency_names
    findings: list[Finding] = []
    for claim in info.readme_claims.tech_stack:
        if any(claim_matches_dependency(claim, dep) for dep in dependency_names):
            continue
        if is_non_package_tech(claim):
            continue
        findings.append(Finding.for_rule(
            RuleId.README_DRIFT,
            f'README claims "{claim}" in tech stack but not found in dependencies',
            f'Verify if "{claim}" is still used, or update README',
        ))
    return findings


def check_readme_dependency_coverage(content: str, info: ProjectInfo) -> list[Finding]:
    pm = info.package_manager
    if pm is None or info.readme_claims is None:
        return []

    claims = [c.lower() for c in info.readme_claims.tech_stack]
    findings: list[Finding] = []
    for dep in pm.dependencies:
        dep_lower = dep.lower()
        mentioned = any(c == dep_lower or dep_lower in c or c in dep_lower for c in claims)
        if mentioned or is_utility_package(dep):
            continue
        findings.append(Finding.for_rule(
            RuleId.README_INCOMPLETE,
            f'Dependency "{dep}" not mentioned in README tech stack',
            f'Consider documenting "{dep}" in README if it\'s a key technology',
        ))
    return findings


# ---------------------------------------------------------------------------
# 7–8: README commands vs. scripts
# ---------------------------------------------------------------------------
def check_readme_commands(content: str, info: ProjectInfo) -> list[Finding]:
    pm = info.package_manager
    if pm is None or info.readme_claims is None or not info.readme_claims.commands:
        return []

    return [
        Finding.for_rule(
            RuleId.README_COMMAND_DRIFT,
            f'README documents "npm run {claimed}" but script doesn\'t exist',
            f'Remove command from README or add "{claimed}" to {pm.config_file} scripts',
        )
        for claimed in info.readme_claims.commands
        if claimed not in pm.scripts
    ]


def check_readme_command_coverage(content: str, info: ProjectInfo) -> list[Finding]:
    pm = info.package_manager
    if pm is None or info.readme_claims is None or not info.readme_claims.commands:
        return []

    claimed = set(info.readme_claims.commands)
    return [
        Finding.for_rule(
            RuleId.README_COMMAND_INCOMPLETE,
            f'Script "{script}" exists but not documented in README',
            f'Consider documenting "npm run {script}" in README',
        )
        for script in pm.scripts
        if script in COMMON_SCRIPTS and script not in claimed
    ]


# ---------------------------------------------------------------------------
# 9–10: README directory tree vs. filesystem
# ---------------------------------------------------------------------------
def check_readme_structure(content: str, info: ProjectInfo) -> list[Finding]:
    findings: list[Finding] = []
    for claimed in _normalized_structure_claims(info):
        # Trees rooted at "/" still resolve under the project root
        dir_path = claimed.strip("/")
        if not dir_path:
            continue
        if not os.path.exists(os.path.join(info.path, *dir_path.split("/"))):
            findings.append(Finding.for_rule(
                RuleId.README_STRUCTURE_DRIFT,
                f'README documents "{claimed}" but directory doesn\'t exist',
                f'Remove "{claimed}" from README or create the directory',
            ))
    return findings


def check_readme_structure_coverage(content: str, info: ProjectInfo) -> list[Finding]:
    claims = [c.strip("/") for c in _normalized_structure_claims(info)]
    claims = [c for c in claims if c]
    if not claims:
        return []

    findings: list[Finding] = []
    for directory in info.structure.directories:
        documented = any(
            c == directory
            or c.startswith(directory + "/")
            or directory.startswith(c + "/")
            for c in claims
        )
        if not documented:
            findings.append(Finding.for_rule(
                RuleId.README_STRUCTURE_INCOMPLETE,
                f'Directory "{directory}/" exists but not documented in README',
                f'Consider adding "{directory}/" to README project structure',
            ))
    return findings


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------
RULE_TABLE: list[tuple[str, RuleCheck]] = [
    (RuleId.TECH_STACK_UNDOCUMENTED,     check_tech_stack),
    (RuleId.TDD_CLAIMED_BUT_ABSENT,      check_tdd_claim),
    (RuleId.TESTS_PRESENT_UNDOCUMENTED,  check_tests_documented),
    (RuleId.SOURCE_DIR_UNDOCUMENTED,     check_source_dir),
    (RuleId.README_DRIFT,                check_readme_tech_claims),
    (RuleId.README_INCOMPLETE,           check_readme_dependency_coverage),
    (RuleId.README_COMMAND_DRIFT,        check_readme_commands),
    (RuleId.README_COMMAND_INCOMPLETE,   check_readme_command_coverage),
    (RuleId.README_STRUCTURE_DRIFT,      check_readme_structure),
    (RuleId.README_STRUCTURE_INCOMPLETE, check_readme_structure_coverage),
]


def validate(content: str, info: ProjectInfo) -> list[Finding]:
    """
    Run every rule and return the findings in rule-table order.

    Parameters
    ----------
    content : str
        Current text of the documentation file.
    info : ProjectInfo
        Scanner snapshot, with README claims attached when a README exists.

    Returns
    -------
    list[Finding]
        Deduplicated by (rule, message); first occurrence kept.
    """
    findings: list[Finding] = []
    seen: set[tuple[str, str]] = set()

    for rule_id, check in RULE_TABLE:
        produced = check(content, info)
        if produced:
            logger.debug("Rule %s: %d finding(s)", rule_id, len(produced))
        for finding in produced:
            if finding.key in seen:
                continue
            seen.add(finding.key)
            findings.append(finding)

    logger.info(
        "Validation produced %d finding(s) (%d error)",
        len(findings),
        sum(1 for f in findings if f.severity is Severity.ERROR),
    )
    return findings


def has_errors(findings: list[Finding]) -> bool:
    """True if any finding is error-severity; drives the CLI exit code."""
    return any(f.severity is Severity.ERROR for f in findings)
