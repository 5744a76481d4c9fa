"""Pydantic models for the fraud domain."""

from pydantic import BaseModel

from ..models import ComplianceAlert, RiskLevel
from ..signals import RiskRule, SignalResult


class FraudScoreResult(BaseModel):
    score: int
    allowed: bool
    rules: list[RiskRule] = []
    signals: list[SignalResult] = []


class TransactionRiskResult(BaseModel):
    score: int
    level: RiskLevel
    factors: list[str] = []
    recommendation: str
    alert: ComplianceAlert | None = None
