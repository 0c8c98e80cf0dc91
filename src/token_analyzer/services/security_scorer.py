"""Security scoring from scanned vulnerabilities and audit results."""

from typing import Iterable, List, Optional

from loguru import logger

from token_analyzer.models.risk import (
    AuditInfo,
    SecurityAssessment,
    SecurityIssue,
    Severity,
)
from token_analyzer.utils.helpers import clamp

SEVERITY_WEIGHTS = {
    Severity.CRITICAL: 1.0,
    Severity.HIGH: 0.7,
    Severity.MEDIUM: 0.4,
    Severity.LOW: 0.1,
}

# Score points lost per unit of severity weight
PENALTY_PER_WEIGHT = 10.0

VULNERABILITY_WEIGHT = 0.6
AUDIT_WEIGHT = 0.4


class SecurityScorer:
    """Scores contract security on a 0-100 scale."""

    def calculate_vulnerability_score(self, issues: Iterable[SecurityIssue]) -> float:
        """100 minus ten points per unit of severity weight, floored at 0."""
        total_weight = sum(SEVERITY_WEIGHTS[issue.severity] for issue in issues)
        return max(0.0, 100.0 - total_weight * PENALTY_PER_WEIGHT)

    def calculate_security_score(
        self,
        issues: Iterable[SecurityIssue],
        audit: Optional[AuditInfo] = None
    ) -> float:
        """
        Blend the vulnerability score with the audit score.

        Without an audit the vulnerability score is used on its own.
        """
        vulnerability_score = self.calculate_vulnerability_score(issues)
        if audit is None:
            return vulnerability_score
        return clamp(
            vulnerability_score * VULNERABILITY_WEIGHT + audit.score * AUDIT_WEIGHT,
            0.0,
            100.0,
        )

    def assess(
        self,
        issues: Iterable[SecurityIssue],
        audit: Optional[AuditInfo] = None
    ) -> SecurityAssessment:
        """
        Build a security assessment.

        Args:
            issues: Scanner findings; mappings are coerced into SecurityIssue
            audit: Latest audit, if any

        Returns:
            SecurityAssessment with the blended and vulnerability-only scores
        """
        validated: List[SecurityIssue] = [
            issue if isinstance(issue, SecurityIssue)
            else SecurityIssue.model_validate(issue)
            for issue in issues
        ]
        vulnerability_score = self.calculate_vulnerability_score(validated)
        score = self.calculate_security_score(validated, audit)

        logger.debug(f"Security score {score:.1f} from {len(validated)} issues")
        return SecurityAssessment(
            score=score,
            vulnerability_score=vulnerability_score,
            issues=validated,
            audit=audit,
        )
