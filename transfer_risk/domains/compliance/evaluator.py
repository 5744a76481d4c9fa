"""Rule-based AML/sanctions gate for outbound transfers.

Checks run strictly in order. The first hard finding opens an alert and ends
the evaluation with a non-compliant verdict; soft findings only open alerts.

Store failures are asymmetric: a hard check that cannot read its inputs
raises ``ComplianceCheckUnavailableError`` (fail closed), a soft check that
cannot read its inputs is skipped (fail open).
"""

from datetime import UTC, datetime

import structlog

from ..alerts import AlertRecorder, build_alert
from ..exceptions import ComplianceCheckUnavailableError, StoreUnavailableError
from ..models import ComplianceAlert, TransferRequest
from .checks import DEFAULT_CHECKS, ComplianceCheck
from .config import ComplianceConfig, default_config
from .models import CheckFinding, ComplianceResult

logger = structlog.get_logger()


class ComplianceEvaluator:
    def __init__(
        self,
        store,
        alerts: AlertRecorder,
        config: ComplianceConfig | None = None,
        checks: list[ComplianceCheck] | None = None,
    ) -> None:
        self._config = config or default_config
        self._alerts = alerts
        if checks is None:
            checks = [check(store, self._config) for check in DEFAULT_CHECKS]
        self._checks = checks

    async def evaluate(self, request: TransferRequest) -> ComplianceResult:
        now = request.initiated_at or datetime.now(UTC)
        alerts: list[ComplianceAlert] = []

        for check in self._checks:
            finding = await self._run_check(check, request, now)
            if finding is None:
                continue

            alerts.append(await self._open_alert(finding, request, now))

            if finding.blocks:
                logger.warning(
                    "transfer_not_compliant",
                    check_id=finding.check_id,
                    violation=finding.violation.value,
                    from_account_id=request.from_account_id,
                    to_account_id=request.to_account_id,
                    amount=str(request.amount),
                    currency=request.currency,
                )
                return ComplianceResult(
                    compliant=False,
                    reason=finding.reason,
                    violation=finding.violation,
                    alerts=alerts,
                )

        logger.info(
            "transfer_compliant",
            from_account_id=request.from_account_id,
            soft_alerts=len(alerts),
        )
        return ComplianceResult(compliant=True, alerts=alerts)

    async def _run_check(
        self, check: ComplianceCheck, request: TransferRequest, now: datetime
    ) -> CheckFinding | None:
        try:
            return await check.run(request, now)
        except StoreUnavailableError as exc:
            if check.hard:
                logger.error(
                    "compliance_check_failed_closed",
                    check_id=check.check_id,
                    from_account_id=request.from_account_id,
                    error=str(exc),
                )
                raise ComplianceCheckUnavailableError(check.check_id, exc) from exc
            logger.warning(
                "compliance_check_skipped",
                check_id=check.check_id,
                from_account_id=request.from_account_id,
                error=str(exc),
            )
            return None

    async def _open_alert(
        self, finding: CheckFinding, request: TransferRequest, now: datetime
    ) -> ComplianceAlert:
        alert = build_alert(
            alert_type=finding.alert_type,
            severity=finding.severity,
            account_id=request.from_account_id,
            description=finding.description,
            metadata={"check_id": finding.check_id, **finding.evidence},
            created_at=now,
        )
        return await self._alerts.record(alert)
