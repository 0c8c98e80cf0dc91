"""Security assessment models."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from token_analyzer.models.analysis import AnalysisModel


class Severity(str, Enum):
    """Severity of a contract security issue."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SecurityIssue(AnalysisModel):
    """Single finding from a contract scan or audit."""

    severity: Severity
    description: str = ""
    location: str = ""
    recommendation: str = ""


class AuditInfo(AnalysisModel):
    """Most recent third-party audit of a contract."""

    last_audit: Optional[datetime] = None
    auditor: str = ""
    score: float = Field(ge=0, le=100, description="Audit score out of 100")
    findings: List[SecurityIssue] = Field(default_factory=list)


class SecurityAssessment(AnalysisModel):
    """Combined security score with the issues and audit it was built from."""

    score: float = Field(ge=0, le=100)
    vulnerability_score: float = Field(ge=0, le=100)
    issues: List[SecurityIssue] = Field(default_factory=list)
    audit: Optional[AuditInfo] = None
