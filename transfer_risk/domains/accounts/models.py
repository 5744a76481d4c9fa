"""Pydantic models for standing account risk."""

from pydantic import BaseModel

from ..models import RiskLevel


class AccountRiskResult(BaseModel):
    account_id: str
    score: int
    level: RiskLevel
    factors: list[str] = []
