"""Standing per-account risk, built from the shared signal primitives."""

import asyncio
from datetime import UTC, datetime, timedelta

import structlog

from ..exceptions import AccountNotFoundError
from ..models import AlertStatus, RiskLevel
from ..signals import account_age_days, count_failed_transfers, is_kyc_verified
from .config import AccountRiskConfig, default_config
from .models import AccountRiskResult

logger = structlog.get_logger()


class AccountRiskAggregator:
    def __init__(self, store, config: AccountRiskConfig | None = None) -> None:
        self._store = store
        self._config = config or default_config

    def _classify(self, score: int) -> RiskLevel:
        if score >= self._config.critical_threshold:
            return RiskLevel.CRITICAL
        if score >= self._config.high_threshold:
            return RiskLevel.HIGH
        if score >= self._config.medium_threshold:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    async def assess(self, account_id: str, now: datetime | None = None) -> AccountRiskResult:
        """Score an account's standing risk.

        Raises:
            AccountNotFoundError: the account does not exist.
        """
        cfg = self._config
        now = now or datetime.now(UTC)

        account = await self._store.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        async def _user():
            if not account.user_id:
                return None
            return await self._store.get_user(account.user_id)

        user, failed, pending_alerts = await asyncio.gather(
            _user(),
            count_failed_transfers(
                self._store, now, timedelta(days=cfg.failed_window_days), account_id=account_id
            ),
            self._store.count_alerts(account_id=account_id, status=AlertStatus.PENDING),
        )

        score = 0
        factors: list[str] = []

        if account_age_days(account, now) < cfg.new_account_days:
            score += cfg.new_account_points
            factors.append(f"Account less than {cfg.new_account_days} days old")

        if not is_kyc_verified(user):
            score += cfg.unverified_kyc_points
            factors.append("KYC not verified")

        if failed > cfg.failed_threshold:
            score += cfg.failed_points
            factors.append("Multiple failed transactions")

        if pending_alerts > 0:
            score += pending_alerts * cfg.points_per_pending_alert
            factors.append(f"{pending_alerts} pending compliance alert(s)")

        level = self._classify(score)
        logger.info(
            "account_risk_assessed",
            account_id=account_id,
            score=score,
            level=level.value,
        )
        return AccountRiskResult(account_id=account_id, score=score, level=level, factors=factors)
