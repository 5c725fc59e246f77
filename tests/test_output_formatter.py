"""
Unit Tests — Output Formatter
==============================
Validates exact text and JSON rendering of findings.
Every assertion uses exact string equality.
"""
import json

from doccheck.core.output_formatter import (
    ALL_PASSED,
    ARROW,
    SEVERITY_ICONS,
    finding_to_dict,
    findings_to_json,
    format_finding,
    format_report,
)
from doccheck.models.finding import Finding, RuleId, Severity


def _tdd_error() -> Finding:
    return Finding.for_rule(
        RuleId.TDD_CLAIMED_BUT_ABSENT,
        "Documentation mentions TDD but no test files found",
        "Either add tests or update documentation to reflect actual practices",
    )


# ---------------------------------------------------------------------------
# 1. Constants
# ---------------------------------------------------------------------------
class TestConstants:

    def test_arrow_is_unicode_2192(self):
        assert ord(ARROW) == 0x2192

    def test_every_severity_has_an_icon(self):
        assert set(SEVERITY_ICONS) == set(Severity)

    def test_icons_are_distinct(self):
        assert len(set(SEVERITY_ICONS.values())) == len(SEVERITY_ICONS)


# ---------------------------------------------------------------------------
# 2. Text output
# ---------------------------------------------------------------------------
class TestFormatFinding:

    def test_error_with_suggestion(self):
        assert format_finding(_tdd_error()) == (
            "✗ [tdd-claimed-but-absent] Documentation mentions TDD but no test files found\n"
            "  → Either add tests or update documentation to reflect actual practices"
        )

    def test_without_suggestion_is_single_line(self):
        finding = Finding(rule=RuleId.README_DRIFT, severity=Severity.WARNING, message="m")
        assert format_finding(finding) == "⚠ [readme-drift] m"

    def test_info_icon(self):
        finding = Finding(rule=RuleId.README_INCOMPLETE, severity=Severity.INFO, message="m")
        assert format_finding(finding).startswith("\U0001f4a1 ")


class TestFormatReport:

    def test_empty_report(self):
        assert format_report([]) == ALL_PASSED
        assert ALL_PASSED == "✓ All checks passed"

    def test_findings_joined_in_order(self):
        warning = Finding(rule=RuleId.README_DRIFT, severity=Severity.WARNING, message="w")
        report = format_report([warning, _tdd_error()])
        lines = report.split("\n")
        assert lines[0] == "⚠ [readme-drift] w"
        assert lines[1].startswith("✗ [tdd-claimed-but-absent]")
        assert len(lines) == 3

    def test_deterministic(self):
        findings = [_tdd_error()]
        assert format_report(findings) == format_report(findings)


# ---------------------------------------------------------------------------
# 3. JSON output
# ---------------------------------------------------------------------------
class TestJsonOutput:

    def test_dict_shape(self):
        assert finding_to_dict(_tdd_error()) == {
            "rule": "tdd-claimed-but-absent",
            "severity": "error",
            "message": "Documentation mentions TDD but no test files found",
            "suggestion": "Either add tests or update documentation to reflect actual practices",
        }

    def test_missing_suggestion_omitted(self):
        finding = Finding(rule=RuleId.README_DRIFT, severity=Severity.WARNING, message="m")
        assert "suggestion" not in finding_to_dict(finding)

    def test_json_list_parses_back(self):
        parsed = json.loads(findings_to_json([_tdd_error()]))
        assert isinstance(parsed, list)
        assert parsed[0]["severity"] == "error"

    def test_empty_json_list(self):
        assert json.loads(findings_to_json([])) == []
