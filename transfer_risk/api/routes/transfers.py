"""Transfer authorization endpoint."""

from fastapi import APIRouter, Depends

from transfer_risk.api.dependencies import get_risk_core
from transfer_risk.domains.guard import AuthorizationResult, RiskCore
from transfer_risk.domains.models import TransferRequest

router = APIRouter(prefix="/api/v1/transfers", tags=["transfers"])


@router.post("/authorize", response_model=AuthorizationResult)
async def authorize_transfer(
    request: TransferRequest,
    core: RiskCore = Depends(get_risk_core),  # noqa: B008
) -> AuthorizationResult:
    return await core.authorize_transfer(request)
