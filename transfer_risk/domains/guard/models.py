"""Authorization outcome models."""

from pydantic import BaseModel

from ..compliance.models import ComplianceResult
from ..fraud.models import FraudScoreResult


class AuthorizationResult(BaseModel):
    proceed: bool
    compliance_result: ComplianceResult
    fraud_result: FraudScoreResult | None = None
