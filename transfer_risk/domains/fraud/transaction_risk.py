"""Qualitative per-transaction risk analysis for review tooling.

Produces a score, a risk level, human-readable factors and a recommendation.
Scores in the high band open a best-effort HIGH_RISK_TRANSACTION alert.
"""

import asyncio
from datetime import UTC, datetime, timedelta

import structlog

from transfer_risk.shared.money import ZERO, ratio

from ..alerts import AlertRecorder, build_alert
from ..models import AlertSeverity, AlertType, RiskLevel, TransferRequest, TransferStatus
from ..signals import account_age_days, count_recent_transfers, is_kyc_verified
from .config import FraudConfig, TransactionRiskSettings, default_config
from .models import TransactionRiskResult

logger = structlog.get_logger()

_RECOMMENDATIONS = {
    RiskLevel.CRITICAL: "Block transaction and flag for manual review",
    RiskLevel.HIGH: "Require additional verification before processing",
    RiskLevel.MEDIUM: "Monitor closely and consider additional checks",
    RiskLevel.LOW: "Proceed with transaction",
}


def _classify(score: int, cfg: TransactionRiskSettings) -> RiskLevel:
    if score >= cfg.critical_threshold:
        return RiskLevel.CRITICAL
    if score >= cfg.high_threshold:
        return RiskLevel.HIGH
    if score >= cfg.medium_threshold:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


class TransactionRiskAnalyzer:
    def __init__(
        self,
        store,
        alerts: AlertRecorder,
        config: FraudConfig | None = None,
    ) -> None:
        self._store = store
        self._alerts = alerts
        self._config = (config or default_config).transaction_risk

    async def analyze(self, request: TransferRequest) -> TransactionRiskResult:
        cfg = self._config
        now = request.initiated_at or datetime.now(UTC)
        sender = request.from_account_id

        recent_count, average, prior_to_recipient, account = await asyncio.gather(
            count_recent_transfers(
                self._store, sender, now, timedelta(minutes=cfg.velocity_window_minutes)
            ),
            self._store.average_transfer_amount(
                from_account_id=sender, statuses=(TransferStatus.COMPLETED,)
            ),
            self._store.count_transfers(
                from_account_id=sender,
                to_account_id=request.to_account_id,
                statuses=(TransferStatus.COMPLETED,),
            ),
            self._store.get_account(sender),
        )
        user = None
        if account is not None and account.user_id:
            user = await self._store.get_user(account.user_id)

        score = 0
        factors: list[str] = []

        if recent_count > cfg.high_velocity_count:
            score += cfg.high_velocity_points
            factors.append("High transaction velocity")
        elif recent_count > cfg.elevated_velocity_count:
            score += cfg.elevated_velocity_points
            factors.append("Elevated transaction velocity")

        if average is not None and average != ZERO:
            amount_ratio = ratio(request.amount, average)
            if amount_ratio > cfg.high_amount_ratio:
                score += cfg.high_amount_points
                factors.append("Transaction amount significantly higher than average")
            elif amount_ratio > cfg.elevated_amount_ratio:
                score += cfg.elevated_amount_points
                factors.append("Transaction amount moderately higher than average")

        if prior_to_recipient == 0:
            score += cfg.new_recipient_points
            factors.append("New recipient")

        if account is not None:
            age = account_age_days(account, now)
            if age < cfg.new_account_days:
                score += cfg.new_account_points
                factors.append(f"Account less than {cfg.new_account_days} days old")
            elif age < cfg.young_account_days:
                score += cfg.young_account_points
                factors.append(f"Account less than {cfg.young_account_days} days old")

        if not is_kyc_verified(user):
            score += cfg.unverified_kyc_points
            factors.append("KYC not verified")

        level = _classify(score, cfg)
        alert = None
        if score >= cfg.alert_threshold:
            alert = await self._alerts.record(
                build_alert(
                    alert_type=AlertType.HIGH_RISK_TRANSACTION,
                    severity=AlertSeverity(level.value),
                    account_id=sender,
                    description=(
                        f"High-risk transaction detected: {request.amount} {request.currency}"
                    ),
                    metadata={
                        "factors": factors,
                        "score": score,
                        "to_account_id": request.to_account_id,
                        "amount": str(request.amount),
                        "currency": request.currency,
                    },
                    created_at=now,
                )
            )

        logger.info(
            "transaction_risk_analyzed",
            from_account_id=sender,
            score=score,
            level=level.value,
            factor_count=len(factors),
            alert_opened=alert is not None,
        )

        return TransactionRiskResult(
            score=score,
            level=level,
            factors=factors,
            recommendation=_RECOMMENDATIONS[level],
            alert=alert,
        )
