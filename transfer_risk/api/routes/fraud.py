"""Fraud scoring and transaction-risk analysis endpoints."""

from fastapi import APIRouter, Depends

from transfer_risk.api.dependencies import get_risk_core
from transfer_risk.domains.fraud import FraudScoreResult, TransactionRiskResult
from transfer_risk.domains.guard import RiskCore
from transfer_risk.domains.models import TransferRequest

router = APIRouter(prefix="/api/v1/fraud", tags=["fraud"])


@router.post("/score", response_model=FraudScoreResult)
async def score_fraud(
    request: TransferRequest,
    core: RiskCore = Depends(get_risk_core),  # noqa: B008
) -> FraudScoreResult:
    return await core.score_fraud_risk(request)


@router.post("/analyze-transaction", response_model=TransactionRiskResult)
async def analyze_transaction(
    request: TransferRequest,
    core: RiskCore = Depends(get_risk_core),  # noqa: B008
) -> TransactionRiskResult:
    return await core.analyze_transaction_risk(request)
