"""Compliance evaluation endpoint."""

from fastapi import APIRouter, Depends

from transfer_risk.api.dependencies import get_risk_core
from transfer_risk.domains.compliance import ComplianceResult
from transfer_risk.domains.guard import RiskCore
from transfer_risk.domains.models import TransferRequest

router = APIRouter(prefix="/api/v1/compliance", tags=["compliance"])


@router.post("/evaluate", response_model=ComplianceResult)
async def evaluate_compliance(
    request: TransferRequest,
    core: RiskCore = Depends(get_risk_core),  # noqa: B008
) -> ComplianceResult:
    return await core.evaluate_compliance(request)
