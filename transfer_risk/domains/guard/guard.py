"""Orchestrates compliance and fraud into a single go/no-go decision."""

from datetime import UTC, datetime

import structlog

from ..accounts import AccountRiskAggregator, AccountRiskResult
from ..alerts import AlertRecorder
from ..compliance import ComplianceEvaluator, ComplianceResult
from ..fraud import (
    FraudRiskScorer,
    FraudScoreResult,
    TransactionRiskAnalyzer,
    TransactionRiskResult,
)
from ..models import TransferRequest
from .models import AuthorizationResult

logger = structlog.get_logger()


class TransactionGuard:
    """Compliance first; fraud scoring runs only for compliant transfers.

    Stateless: nothing is shared between calls.
    """

    def __init__(self, compliance: ComplianceEvaluator, fraud: FraudRiskScorer) -> None:
        self._compliance = compliance
        self._fraud = fraud

    async def authorize(self, request: TransferRequest) -> AuthorizationResult:
        # Pin the clock so both stages see the same window
        if request.initiated_at is None:
            request = request.model_copy(update={"initiated_at": datetime.now(UTC)})

        compliance_result = await self._compliance.evaluate(request)
        if not compliance_result.compliant:
            logger.warning(
                "transfer_authorization_denied",
                from_account_id=request.from_account_id,
                stage="compliance",
                reason=compliance_result.reason,
            )
            return AuthorizationResult(proceed=False, compliance_result=compliance_result)

        fraud_result = await self._fraud.score(request)
        logger.info(
            "transfer_authorization_decided",
            from_account_id=request.from_account_id,
            proceed=fraud_result.allowed,
            fraud_score=fraud_result.score,
        )
        return AuthorizationResult(
            proceed=fraud_result.allowed,
            compliance_result=compliance_result,
            fraud_result=fraud_result,
        )


class RiskCore:
    """In-process entry point bundling the risk operations over one store."""

    def __init__(
        self,
        store,
        alert_sink,
        compliance_config=None,
        fraud_config=None,
        account_config=None,
        dedup_window_seconds: int | None = None,
        alert_timeout_seconds: float = 2.0,
    ) -> None:
        alerts = AlertRecorder(
            alert_sink,
            dedup_window_seconds=dedup_window_seconds,
            timeout_seconds=alert_timeout_seconds,
        )
        self.compliance = ComplianceEvaluator(store, alerts, config=compliance_config)
        self.fraud = FraudRiskScorer(store, config=fraud_config)
        self.transaction_risk = TransactionRiskAnalyzer(store, alerts, config=fraud_config)
        self.accounts = AccountRiskAggregator(store, config=account_config)
        self.guard = TransactionGuard(self.compliance, self.fraud)

    async def evaluate_compliance(self, request: TransferRequest) -> ComplianceResult:
        return await self.compliance.evaluate(request)

    async def score_fraud_risk(self, request: TransferRequest) -> FraudScoreResult:
        return await self.fraud.score(request)

    async def assess_account_risk(self, account_id: str) -> AccountRiskResult:
        return await self.accounts.assess(account_id)

    async def authorize_transfer(self, request: TransferRequest) -> AuthorizationResult:
        return await self.guard.authorize(request)

    async def analyze_transaction_risk(self, request: TransferRequest) -> TransactionRiskResult:
        return await self.transaction_risk.analyze(request)
