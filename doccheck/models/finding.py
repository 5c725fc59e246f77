"""
Finding Model
=============
Pydantic model for one drift or completeness observation.

Fields:
    rule        — tag from the fixed rule taxonomy (see RuleId)
    severity    — error / warning / info
    message     — human-readable description of the drift
    suggestion  — optional remediation hint

Severity meaning:
    error   — the documentation asserts something demonstrably false
    warning — plausible drift that needs a human decision
    info    — completeness suggestion, never blocking

Findings carry no persistent identity; two findings are the same finding
when their (rule, message) pair is equal.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class RuleId:
    """Rule tags. Values must remain kebab-case strings."""
    TECH_STACK_UNDOCUMENTED     = "tech-stack-undocumented"
    TDD_CLAIMED_BUT_ABSENT      = "tdd-claimed-but-absent"
    TESTS_PRESENT_UNDOCUMENTED  = "tests-present-undocumented"
    SOURCE_DIR_UNDOCUMENTED     = "source-dir-undocumented"
    README_DRIFT                = "readme-drift"
    README_INCOMPLETE           = "readme-incomplete"
    README_COMMAND_DRIFT        = "readme-command-drift"
    README_COMMAND_INCOMPLETE   = "readme-command-incomplete"
    README_STRUCTURE_DRIFT      = "readme-structure-drift"
    README_STRUCTURE_INCOMPLETE = "readme-structure-incomplete"


# Authoritative rule → severity table
RULE_SEVERITY: dict[str, Severity] = {
    RuleId.TECH_STACK_UNDOCUMENTED:     Severity.WARNING,
    RuleId.TDD_CLAIMED_BUT_ABSENT:      Severity.ERROR,
    RuleId.TESTS_PRESENT_UNDOCUMENTED:  Severity.INFO,
    RuleId.SOURCE_DIR_UNDOCUMENTED:     Severity.INFO,
    RuleId.README_DRIFT:                Severity.WARNING,
    RuleId.README_INCOMPLETE:           Severity.INFO,
    RuleId.README_COMMAND_DRIFT:        Severity.WARNING,
    RuleId.README_COMMAND_INCOMPLETE:   Severity.INFO,
    RuleId.README_STRUCTURE_DRIFT:      Severity.WARNING,
    RuleId.README_STRUCTURE_INCOMPLETE: Severity.INFO,
}

RULE_IDS: frozenset[str] = frozenset(RULE_SEVERITY)


class Finding(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule: str
    severity: Severity
    message: str
    suggestion: Optional[str] = None

    @classmethod
    def for_rule(cls, rule: str, message: str, suggestion: Optional[str] = None) -> "Finding":
        """Build a finding whose severity is looked up from RULE_SEVERITY."""
        if rule not in RULE_SEVERITY:
            raise ValueError(f"Unknown rule '{rule}'. Allowed values: {sorted(RULE_IDS)}")
        return cls(rule=rule, severity=RULE_SEVERITY[rule], message=message, suggestion=suggestion)

    @property
    def key(self) -> tuple[str, str]:
        return (self.rule, self.message)
