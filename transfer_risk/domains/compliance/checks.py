"""Individual AML/sanctions checks run by the compliance evaluator.

Hard checks return a blocking finding; soft checks return an alert-only
finding. A check returns None when nothing was found.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from transfer_risk.shared.money import exceeds

from ..models import AlertSeverity, AlertType, TransferRequest
from ..signals import (
    RapidSuccessionProbe,
    RoundAmountProbe,
    SanctionsProbe,
    rolling_total_with,
)
from .config import ComplianceConfig
from .models import CheckFinding, Violation


class ComplianceCheck(ABC):
    check_id: str
    hard: bool

    def __init__(self, store, config: ComplianceConfig) -> None:
        self._store = store
        self._config = config

    @abstractmethod
    async def run(self, request: TransferRequest, now: datetime) -> CheckFinding | None: ...


class DailyLimitCheck(ComplianceCheck):
    check_id = "daily_limit"
    hard = True

    async def run(self, request: TransferRequest, now: datetime) -> CheckFinding | None:
        cfg = self._config.daily_limit
        total = await rolling_total_with(
            self._store,
            request,
            now,
            timedelta(hours=cfg.window_hours),
            cfg.counted_statuses,
        )
        if not exceeds(total, cfg.limit):
            return None

        return CheckFinding(
            check_id=self.check_id,
            alert_type=AlertType.AML,
            severity=AlertSeverity.HIGH,
            description=f"Transaction exceeds AML limits: {request.amount} {request.currency}",
            reason="Transaction exceeds AML limits",
            violation=Violation.LIMIT_EXCEEDED,
            evidence={
                "rolling_total": str(total),
                "limit": str(cfg.limit),
                "currency": request.currency,
                "window_hours": cfg.window_hours,
            },
        )


class StructuringCheck(ComplianceCheck):
    check_id = "structuring"
    hard = True

    def __init__(self, store, config: ComplianceConfig) -> None:
        super().__init__(store, config)
        self._probe = RapidSuccessionProbe(
            store,
            lookback=timedelta(hours=config.structuring.lookback_hours),
            min_gap=timedelta(seconds=config.structuring.min_gap_seconds),
        )

    async def run(self, request: TransferRequest, now: datetime) -> CheckFinding | None:
        succession = await self._probe.detect(request.from_account_id, now)
        if succession is None:
            return None

        return CheckFinding(
            check_id=self.check_id,
            alert_type=AlertType.AML,
            severity=AlertSeverity.MEDIUM,
            description="Suspicious transaction pattern detected (possible structuring)",
            reason="Suspicious transaction pattern detected",
            violation=Violation.STRUCTURING_DETECTED,
            evidence=succession.model_dump(),
        )


class SanctionsCheck(ComplianceCheck):
    check_id = "sanctions"
    hard = True

    def __init__(self, store, config: ComplianceConfig) -> None:
        super().__init__(store, config)
        self._probe = SanctionsProbe(store, config.sanctions.sanctioned_countries)

    async def run(self, request: TransferRequest, now: datetime) -> CheckFinding | None:
        hits = await self._probe.screen(request.from_account_id, request.to_account_id)
        if not hits:
            return None

        return CheckFinding(
            check_id=self.check_id,
            alert_type=AlertType.SANCTIONS,
            severity=AlertSeverity.CRITICAL,
            description="Potential sanctions violation - transaction involves sanctioned country",
            reason="Sanctions violation detected",
            violation=Violation.SANCTIONS_MATCH,
            evidence={
                "to_account_id": request.to_account_id,
                "matches": [hit.model_dump() for hit in hits],
            },
        )


class RoundAmountCheck(ComplianceCheck):
    check_id = "round_amount"
    hard = False

    def __init__(self, store, config: ComplianceConfig) -> None:
        super().__init__(store, config)
        cfg = config.round_amount
        self._probe = RoundAmountProbe(
            store,
            lookback=timedelta(hours=cfg.lookback_hours),
            round_unit=cfg.round_unit,
            min_amount=cfg.min_amount,
        )

    async def run(self, request: TransferRequest, now: datetime) -> CheckFinding | None:
        if not self._probe.is_candidate(request):
            return None

        count = await self._probe.count_with_current(request, now)
        if count < self._config.round_amount.alert_count:
            return None

        return CheckFinding(
            check_id=self.check_id,
            alert_type=AlertType.AML,
            severity=AlertSeverity.MEDIUM,
            description="Multiple round-number transactions detected (possible structuring)",
            evidence={"count_including_current": count, "amount": str(request.amount)},
        )


class UnverifiedUserCheck(ComplianceCheck):
    check_id = "unverified_user"
    hard = False

    async def run(self, request: TransferRequest, now: datetime) -> CheckFinding | None:
        threshold = self._config.unverified_user.amount_threshold
        if not request.user_id or not exceeds(request.amount, threshold):
            return None

        user = await self._store.get_user(request.user_id)
        # Unknown users are left to the account-management collaborator
        if user is None or user.is_verified:
            return None

        return CheckFinding(
            check_id=self.check_id,
            alert_type=AlertType.AML,
            severity=AlertSeverity.MEDIUM,
            description=(
                f"Large transaction ({request.amount} {request.currency}) from unverified user"
            ),
            evidence={"user_id": request.user_id, "kyc_status": user.kyc_status},
        )


# Evaluation order; hard checks first so a block short-circuits everything after it
DEFAULT_CHECKS: tuple[type[ComplianceCheck], ...] = (
    DailyLimitCheck,
    StructuringCheck,
    SanctionsCheck,
    RoundAmountCheck,
    UnverifiedUserCheck,
)
