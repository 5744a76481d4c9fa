"""Standing account-risk endpoint."""

from fastapi import APIRouter, Depends

from transfer_risk.api.dependencies import get_risk_core
from transfer_risk.domains.accounts import AccountRiskResult
from transfer_risk.domains.guard import RiskCore

router = APIRouter(prefix="/api/v1/accounts", tags=["accounts"])


@router.get("/{account_id}/risk", response_model=AccountRiskResult)
async def account_risk(
    account_id: str,
    core: RiskCore = Depends(get_risk_core),  # noqa: B008
) -> AccountRiskResult:
    return await core.assess_account_risk(account_id)
