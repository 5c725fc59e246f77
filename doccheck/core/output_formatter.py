"""
Output Formatter
================
THE SINGLE SOURCE OF TRUTH for user-facing finding output.

DETERMINISM CONTRACT:
  - Given the same findings, it ALWAYS returns the exact same string.
  - No environment variables, no terminal detection, no timestamps.

Text format, one block per finding:
    {icon} [{rule}] {message}
      → {suggestion}

JSON format: a list of {rule, severity, message, suggestion?} objects,
suggestion omitted when absent.
"""
import json

from doccheck.models.finding import Finding, Severity

# U+2192 RIGHTWARDS ARROW, prefixes every suggestion line.
ARROW = "\u2192"

ALL_PASSED = "\u2713 All checks passed"

SEVERITY_ICONS: dict[Severity, str] = {
    Severity.ERROR:   "\u2717",
    Severity.WARNING: "\u26a0",
    Severity.INFO:    "\U0001f4a1",
}


def format_finding(finding: Finding) -> str:
    """
    Render one finding as one or two lines (no trailing newline).

    Examples
    --------
    ✗ [tdd-claimed-but-absent] Documentation mentions TDD but no test files found
      → Either add tests or update documentation to reflect actual practices
    """
    line = f"{SEVERITY_ICONS[finding.severity]} [{finding.rule}] {finding.message}"
    if finding.suggestion:
        line += f"\n  {ARROW} {finding.suggestion}"
    return line


def format_report(findings: list[Finding]) -> str:
    if not findings:
        return ALL_PASSED
    return "\n".join(format_finding(f) for f in findings)


def finding_to_dict(finding: Finding) -> dict:
    return finding.model_dump(mode="json", exclude_none=True)


def findings_to_json(findings: list[Finding]) -> str:
    return json.dumps([finding_to_dict(f) for f in findings], indent=2, ensure_ascii=False)
