"""Compliance alert pipeline: construction, idempotency keys, best-effort persistence."""

import asyncio
from datetime import UTC, datetime

import structlog

from .exceptions import DuplicateAlertError
from .models import AlertSeverity, AlertType, ComplianceAlert

logger = structlog.get_logger()


def idempotency_key(
    account_id: str,
    alert_type: AlertType,
    created_at: datetime,
    window_seconds: int,
) -> str:
    """Key shared by every alert of one type for one account within a time bucket."""
    bucket = int(created_at.timestamp()) // window_seconds
    return f"{account_id}:{alert_type.value}:{bucket}"


def build_alert(
    alert_type: AlertType,
    severity: AlertSeverity,
    account_id: str,
    description: str,
    metadata: dict | None = None,
    created_at: datetime | None = None,
) -> ComplianceAlert:
    return ComplianceAlert(
        alert_type=alert_type,
        severity=severity,
        account_id=account_id,
        description=description,
        metadata=metadata or {},
        created_at=created_at or datetime.now(UTC),
    )


class AlertRecorder:
    """Wraps the alert store so that alerting can never affect a verdict.

    ``record`` always returns the alert. On success it carries the store's id;
    on any store failure, or a write slower than ``timeout_seconds``, the
    failure is logged and the alert comes back with ``alert_id=None``.
    """

    def __init__(
        self,
        sink,
        dedup_window_seconds: int | None = None,
        timeout_seconds: float = 2.0,
    ) -> None:
        self._sink = sink
        self._dedup_window_seconds = dedup_window_seconds
        self._timeout = timeout_seconds

    async def record(self, alert: ComplianceAlert) -> ComplianceAlert:
        if self._dedup_window_seconds:
            alert = alert.model_copy(
                update={
                    "idempotency_key": idempotency_key(
                        alert.account_id,
                        alert.alert_type,
                        alert.created_at,
                        self._dedup_window_seconds,
                    )
                }
            )

        try:
            async with asyncio.timeout(self._timeout):
                alert_id = await self._sink.create(alert)
        except DuplicateAlertError:
            logger.info(
                "compliance_alert_deduplicated",
                account_id=alert.account_id,
                alert_type=alert.alert_type.value,
                idempotency_key=alert.idempotency_key,
            )
            return alert
        except Exception:
            # Never propagates; verdicts do not depend on alert persistence
            logger.exception(
                "compliance_alert_persist_failed",
                account_id=alert.account_id,
                alert_type=alert.alert_type.value,
                severity=alert.severity.value,
            )
            return alert

        logger.warning(
            "compliance_alert_created",
            alert_id=alert_id,
            account_id=alert.account_id,
            alert_type=alert.alert_type.value,
            severity=alert.severity.value,
        )
        return alert.model_copy(update={"alert_id": alert_id})
