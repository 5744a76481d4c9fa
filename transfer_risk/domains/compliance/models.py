"""Pydantic models for the compliance domain."""

from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

from ..models import AlertSeverity, AlertType, ComplianceAlert


class Violation(StrEnum):
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
    STRUCTURING_DETECTED = "STRUCTURING_DETECTED"
    SANCTIONS_MATCH = "SANCTIONS_MATCH"


class CheckFinding(BaseModel):
    """What a check found. ``violation`` is set only by blocking findings."""

    check_id: str
    alert_type: AlertType
    severity: AlertSeverity
    description: str
    reason: str | None = None
    violation: Violation | None = None
    evidence: dict = Field(default_factory=dict)

    @property
    def blocks(self) -> bool:
        return self.violation is not None


class ComplianceResult(BaseModel):
    compliant: bool
    reason: str | None = None
    violation: Violation | None = None
    alerts: list[ComplianceAlert] = []

    @model_validator(mode="after")
    def _reason_iff_blocked(self) -> "ComplianceResult":
        if self.compliant and (self.reason or self.violation):
            raise ValueError("a compliant result carries no reason or violation")
        if not self.compliant and not self.reason:
            raise ValueError("a non-compliant result needs a reason")
        return self
